"""Spell catalog routes."""

from typing import List

import crud
import schemas
from fastapi import APIRouter, Depends, HTTPException, status
from infrastructure.database import get_db
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter()


@router.post("", response_model=schemas.Spell, status_code=status.HTTP_201_CREATED)
async def create_spell(spell: schemas.SpellCreate, db: AsyncSession = Depends(get_db)):
    """Create a spell. Spells with a positive duration deal damage * duration."""
    created = await crud.create_spell(db, spell)
    return created.to_dict()


@router.get("", response_model=List[schemas.Spell])
async def list_spells(db: AsyncSession = Depends(get_db)):
    return [item.to_dict() for item in await crud.get_all_spells(db)]


@router.get("/{spell_id}", response_model=schemas.Spell)
async def get_spell(spell_id: str, db: AsyncSession = Depends(get_db)):
    found = await crud.search_spell_by_id(db, spell_id)
    if found is None:
        raise HTTPException(status_code=404, detail="Spell not found")
    return found.to_dict()


@router.put("/{spell_id}", response_model=schemas.MessageResponse)
async def update_spell(spell_id: str, spell: schemas.SpellUpdate, db: AsyncSession = Depends(get_db)):
    """Replace a spell's fields."""
    if not await crud.update_spell(db, spell_id, spell):
        raise HTTPException(status_code=404, detail="Spell not found")
    return {"message": "Spell updated successfully"}


@router.delete("/{spell_id}", response_model=schemas.MessageResponse)
async def delete_spell(spell_id: str, db: AsyncSession = Depends(get_db)):
    if not await crud.delete_spell(db, spell_id):
        raise HTTPException(status_code=404, detail="Spell not found")
    return {"message": "Spell deleted successfully"}
