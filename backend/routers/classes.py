"""Character class routes."""

from typing import List

import crud
import schemas
from fastapi import APIRouter, Depends, HTTPException, status
from infrastructure.database import get_db
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter()


@router.post("", response_model=schemas.CharacterClass, status_code=status.HTTP_201_CREATED)
async def create_class(character_class: schemas.ClassCreate, db: AsyncSession = Depends(get_db)):
    """
    Create a class.

    Missing base attributes (strength, dexterity, intelligence, charisma)
    default to 0. Returns 409 if the name is already taken.
    """
    created = await crud.create_class(db, character_class)
    return created.to_dict()


@router.get("", response_model=List[schemas.CharacterClass])
async def list_classes(db: AsyncSession = Depends(get_db)):
    """List all classes."""
    return [character_class.to_dict() for character_class in await crud.get_all_classes(db)]


@router.get("/{class_id}", response_model=schemas.CharacterClass)
async def get_class(class_id: str, db: AsyncSession = Depends(get_db)):
    character_class = await crud.search_class_by_id(db, class_id)
    if character_class is None:
        raise HTTPException(status_code=404, detail="Class not found")
    return character_class.to_dict()


@router.put("/{class_id}", response_model=schemas.MessageResponse)
async def update_class(class_id: str, character_class: schemas.ClassUpdate, db: AsyncSession = Depends(get_db)):
    if not await crud.update_class(db, class_id, character_class):
        raise HTTPException(status_code=404, detail="Class not found")
    return {"message": "Class updated successfully"}


@router.delete("/{class_id}", response_model=schemas.MessageResponse)
async def delete_class(class_id: str, db: AsyncSession = Depends(get_db)):
    if not await crud.delete_class(db, class_id):
        raise HTTPException(status_code=404, detail="Class not found")
    return {"message": "Class deleted successfully"}
