"""Character routes: CRUD, inventory and combat."""

from typing import List

import schemas
from fastapi import APIRouter, Depends, HTTPException, status
from infrastructure.database import get_db
from services import character_service
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter()


@router.post("", response_model=schemas.Character, status_code=status.HTTP_201_CREATED)
async def create_character(character: schemas.CharacterCreate, db: AsyncSession = Depends(get_db)):
    """Create a character with an empty inventory (hp/maxHp default to 2000, ac to 0)."""
    created = await character_service.create_character(db, character)
    return created.to_dict()


@router.get("", response_model=List[schemas.Character])
async def list_characters(db: AsyncSession = Depends(get_db)):
    """List all characters with their inventories."""
    return [character.to_dict() for character in await character_service.get_all_characters(db)]


@router.post("/attack", response_model=schemas.CombatResult)
async def attack(request: schemas.AttackRequest, db: AsyncSession = Depends(get_db)):
    """Attack a character with one of the attacker's weapons."""
    return await character_service.attack(db, request.attacker_id, request.target_id, request.weapon_id)


@router.post("/weapon/{character_id}/{weapon_id}", response_model=schemas.Character)
async def add_weapon(character_id: str, weapon_id: str, db: AsyncSession = Depends(get_db)):
    character = await character_service.add_weapon(db, character_id, weapon_id)
    return character.to_dict()


@router.post("/gear/{character_id}/{gear_id}", response_model=schemas.Character)
async def add_gear(character_id: str, gear_id: str, db: AsyncSession = Depends(get_db)):
    """Equip gear; AC rises by the gear category's increment, capped at 1000."""
    character = await character_service.add_gear(db, character_id, gear_id)
    return character.to_dict()


@router.post("/potion/{character_id}/{potion_id}", response_model=schemas.Character)
async def add_potion(character_id: str, potion_id: str, db: AsyncSession = Depends(get_db)):
    character = await character_service.add_potion(db, character_id, potion_id)
    return character.to_dict()


@router.post("/heal/{character_id}", response_model=schemas.HealResult)
async def heal(character_id: str, db: AsyncSession = Depends(get_db)):
    """Consume the first healing potion in the character's inventory."""
    result = await character_service.heal(db, character_id)
    return {"message": result["message"], "character": result["character"].to_dict()}


@router.get("/{character_id}", response_model=schemas.Character)
async def get_character(character_id: str, db: AsyncSession = Depends(get_db)):
    character = await character_service.search_character_by_id(db, character_id)
    if character is None:
        raise HTTPException(status_code=404, detail="Character not found")
    return character.to_dict()


@router.put("/{character_id}", response_model=schemas.MessageResponse)
async def update_character(character_id: str, character: schemas.CharacterUpdate, db: AsyncSession = Depends(get_db)):
    """
    Replace a character.

    gear, potions and weapons must list the complete desired inventories
    (ids or objects with an "id"); anything omitted is removed.
    """
    await character_service.update_character(db, character_id, character)
    return {"message": "Character updated successfully"}


@router.delete("/{character_id}", response_model=schemas.MessageResponse)
async def delete_character(character_id: str, db: AsyncSession = Depends(get_db)):
    await character_service.delete_character(db, character_id)
    return {"message": "Character deleted successfully"}
