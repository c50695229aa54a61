"""Gear catalog routes."""

from typing import List

import crud
import schemas
from fastapi import APIRouter, Depends, HTTPException, status
from infrastructure.database import get_db
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter()


@router.post("", response_model=schemas.Gear, status_code=status.HTTP_201_CREATED)
async def create_gear(gear: schemas.GearCreate, db: AsyncSession = Depends(get_db)):
    """Create a piece of gear. Its category decides the AC it grants when equipped."""
    created = await crud.create_gear(db, gear)
    return created.to_dict()


@router.get("", response_model=List[schemas.Gear])
async def list_gears(db: AsyncSession = Depends(get_db)):
    return [item.to_dict() for item in await crud.get_all_gears(db)]


@router.get("/{gear_id}", response_model=schemas.Gear)
async def get_gear(gear_id: str, db: AsyncSession = Depends(get_db)):
    found = await crud.search_gear_by_id(db, gear_id)
    if found is None:
        raise HTTPException(status_code=404, detail="Gear not found")
    return found.to_dict()


@router.put("/{gear_id}", response_model=schemas.MessageResponse)
async def update_gear(gear_id: str, gear: schemas.GearUpdate, db: AsyncSession = Depends(get_db)):
    if not await crud.update_gear(db, gear_id, gear):
        raise HTTPException(status_code=404, detail="Gear not found")
    return {"message": "Gear updated successfully"}


@router.delete("/{gear_id}", response_model=schemas.MessageResponse)
async def delete_gear(gear_id: str, db: AsyncSession = Depends(get_db)):
    if not await crud.delete_gear(db, gear_id):
        raise HTTPException(status_code=404, detail="Gear not found")
    return {"message": "Gear deleted successfully"}
