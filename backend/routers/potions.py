"""Potion catalog routes."""

from typing import List

import crud
import schemas
from fastapi import APIRouter, Depends, HTTPException, status
from infrastructure.database import get_db
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter()


@router.post("", response_model=schemas.Potion, status_code=status.HTTP_201_CREATED)
async def create_potion(potion: schemas.PotionCreate, db: AsyncSession = Depends(get_db)):
    """
    Create a potion.

    effects may set hpRestore, manaRestore and increaseDamage; unset effects
    are not stored.
    """
    created = await crud.create_potion(db, potion)
    return created.to_dict()


@router.get("", response_model=List[schemas.Potion])
async def list_potions(db: AsyncSession = Depends(get_db)):
    """List all potions."""
    return [item.to_dict() for item in await crud.get_all_potions(db)]


@router.get("/{potion_id}", response_model=schemas.Potion)
async def get_potion(potion_id: str, db: AsyncSession = Depends(get_db)):
    found = await crud.search_potion_by_id(db, potion_id)
    if found is None:
        raise HTTPException(status_code=404, detail="Potion not found")
    return found.to_dict()


@router.put("/{potion_id}", response_model=schemas.MessageResponse)
async def update_potion(potion_id: str, potion: schemas.PotionUpdate, db: AsyncSession = Depends(get_db)):
    if not await crud.update_potion(db, potion_id, potion):
        raise HTTPException(status_code=404, detail="Potion not found")
    return {"message": "Potion updated successfully"}


@router.delete("/{potion_id}", response_model=schemas.MessageResponse)
async def delete_potion(potion_id: str, db: AsyncSession = Depends(get_db)):
    if not await crud.delete_potion(db, potion_id):
        raise HTTPException(status_code=404, detail="Potion not found")
    return {"message": "Potion deleted successfully"}
