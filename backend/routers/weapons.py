"""Weapon catalog routes."""

from typing import List

import crud
import schemas
from fastapi import APIRouter, Depends, HTTPException, status
from infrastructure.database import get_db
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter()


@router.post("", response_model=schemas.Weapon, status_code=status.HTTP_201_CREATED)
async def create_weapon(weapon: schemas.WeaponCreate, db: AsyncSession = Depends(get_db)):
    """Create a weapon."""
    created = await crud.create_weapon(db, weapon)
    return created.to_dict()


@router.get("", response_model=List[schemas.Weapon])
async def list_weapons(db: AsyncSession = Depends(get_db)):
    """List all weapons."""
    return [item.to_dict() for item in await crud.get_all_weapons(db)]


@router.get("/{weapon_id}", response_model=schemas.Weapon)
async def get_weapon(weapon_id: str, db: AsyncSession = Depends(get_db)):
    found = await crud.search_weapon_by_id(db, weapon_id)
    if found is None:
        raise HTTPException(status_code=404, detail="Weapon not found")
    return found.to_dict()


@router.put("/{weapon_id}", response_model=schemas.MessageResponse)
async def update_weapon(weapon_id: str, weapon: schemas.WeaponUpdate, db: AsyncSession = Depends(get_db)):
    if not await crud.update_weapon(db, weapon_id, weapon):
        raise HTTPException(status_code=404, detail="Weapon not found")
    return {"message": "Weapon updated successfully"}


@router.delete("/{weapon_id}", response_model=schemas.MessageResponse)
async def delete_weapon(weapon_id: str, db: AsyncSession = Depends(get_db)):
    if not await crud.delete_weapon(db, weapon_id):
        raise HTTPException(status_code=404, detail="Weapon not found")
    return {"message": "Weapon deleted successfully"}
