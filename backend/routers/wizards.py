"""Wizard routes: CRUD, spellbook, spell casting and mana."""

from typing import List

import schemas
from fastapi import APIRouter, Depends, HTTPException, status
from infrastructure.database import get_db
from services import wizard_service
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter()


@router.post("", response_model=schemas.Wizard, status_code=status.HTTP_201_CREATED)
async def create_wizard(wizard: schemas.WizardCreate, db: AsyncSession = Depends(get_db)):
    """Create a wizard. classId must reference the Wizard class."""
    created = await wizard_service.create_wizard(db, wizard)
    return created.to_dict()


@router.get("", response_model=List[schemas.Wizard])
async def list_wizards(db: AsyncSession = Depends(get_db)):
    return [wizard.to_dict() for wizard in await wizard_service.get_all_wizards(db)]


@router.post("/cast", response_model=schemas.CombatResult)
async def cast_spell(request: schemas.CastSpellRequest, db: AsyncSession = Depends(get_db)):
    """Cast one of the wizard's spells on a character."""
    return await wizard_service.cast_spell(db, request.wizard_id, request.target_id, request.spell_id)


@router.post("/spell/{wizard_id}/{spell_id}", response_model=schemas.Wizard)
async def add_spell(wizard_id: str, spell_id: str, db: AsyncSession = Depends(get_db)):
    wizard = await wizard_service.add_spell(db, wizard_id, spell_id)
    return wizard.to_dict()


@router.post("/restore-mana/{wizard_id}", response_model=schemas.Wizard)
async def restore_mana(wizard_id: str, db: AsyncSession = Depends(get_db)):
    """Consume the first mana potion in the wizard's inventory."""
    wizard = await wizard_service.restore_mana(db, wizard_id)
    return wizard.to_dict()


@router.get("/{wizard_id}", response_model=schemas.Wizard)
async def get_wizard(wizard_id: str, db: AsyncSession = Depends(get_db)):
    wizard = await wizard_service.search_wizard_by_id(db, wizard_id)
    if wizard is None:
        raise HTTPException(status_code=404, detail="Wizard not found")
    return wizard.to_dict()


@router.put("/{wizard_id}", response_model=schemas.Wizard)
async def update_wizard(wizard_id: str, wizard: schemas.WizardUpdate, db: AsyncSession = Depends(get_db)):
    updated = await wizard_service.update_wizard(db, wizard_id, wizard)
    return updated.to_dict()


@router.delete("/{wizard_id}", response_model=schemas.MessageResponse)
async def delete_wizard(wizard_id: str, db: AsyncSession = Depends(get_db)):
    await wizard_service.delete_wizard(db, wizard_id)
    return {"message": "Wizard deleted successfully"}
