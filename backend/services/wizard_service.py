"""
Wizard extension service.

A wizard is a character whose class resolves to the Wizard role, plus a 1:1
extension row (mana, maxMana) and a spellbook join table. Character-level
steps are reused from services/character_service.py inside this module's
transactions.
"""

import logging
from typing import Any, Dict, List, Optional

import crud
import schemas
from domain.entities import Character, CharacterClass, Wizard
from domain.exceptions import ConflictError, NotFoundError, RuleViolationError
from domain.services.combat_rules import can_afford, resolve_spell
from domain.value_objects.enums import ClassRole
from infrastructure.database import retry_on_db_lock, transaction
from infrastructure.database.models import generate_id
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from services.character_service import apply_character_update, cascade_delete_character

logger = logging.getLogger("WizardService")


def _is_wizard_class(character_class: Optional[CharacterClass]) -> bool:
    return character_class is not None and ClassRole.from_class_name(character_class.name) == ClassRole.WIZARD


async def _require_wizard_class(db: AsyncSession, class_id: Optional[str]) -> CharacterClass:
    character_class = await crud.search_class_by_id(db, class_id) if class_id else None
    if not _is_wizard_class(character_class):
        logger.warning(f"Rejected class {class_id!r} for a wizard")
        raise RuleViolationError("Invalid class ID for Wizard")
    return character_class


async def _load_or_404(db: AsyncSession, wizard_id: str) -> Wizard:
    wizard = await search_wizard_by_id(db, wizard_id)
    if wizard is None:
        raise NotFoundError("Wizard not found")
    return wizard


# =============================================================================
# Lifecycle
# =============================================================================


@retry_on_db_lock(max_retries=5, initial_delay=0.1, backoff_factor=2)
async def create_wizard(db: AsyncSession, wizard: schemas.WizardCreate) -> Wizard:
    """Insert the character row and the wizard extension row together."""
    await _require_wizard_class(db, wizard.class_id)

    wizard_id = wizard.id or generate_id()
    async with transaction(db):
        await crud.insert_character(
            db,
            wizard_id,
            name=wizard.name,
            race=wizard.race,
            class_id=wizard.class_id,
            hp=wizard.hp,
            max_hp=wizard.max_hp,
            ac=wizard.ac,
        )
        await crud.insert_wizard_stats(db, wizard_id, mana=wizard.mana, max_mana=wizard.max_mana)

    logger.info(f"Created wizard {wizard_id} ({wizard.name})")
    character = Character(
        id=wizard_id,
        name=wizard.name,
        race=wizard.race,
        class_id=wizard.class_id,
        hp=wizard.hp,
        max_hp=wizard.max_hp,
        ac=wizard.ac,
    )
    return Wizard(character=character, mana=wizard.mana, max_mana=wizard.max_mana, spells=[])


async def search_wizard_by_id(db: AsyncSession, wizard_id: str) -> Optional[Wizard]:
    """
    The wizard with its inventory and spells.

    Returns None when the character is absent, its class is not Wizard, or
    it has no wizard extension row.
    """
    character = await crud.load_character(db, wizard_id)
    if character is None:
        return None

    character_class = await crud.search_class_by_id(db, character.class_id) if character.class_id else None
    if not _is_wizard_class(character_class):
        return None

    stats = await crud.get_wizard_stats(db, wizard_id)
    if stats is None:
        return None

    spells = await crud.get_wizard_spells(db, wizard_id)
    return Wizard(character=character, mana=stats.mana, max_mana=stats.max_mana, spells=spells)


async def get_all_wizards(db: AsyncSession) -> List[Wizard]:
    """Every wizard, assembled from bulk queries grouped in memory."""
    stats = await crud.get_all_wizard_stats(db)
    if not stats:
        return []

    wizard_class_ids = {c.id for c in await crud.get_all_classes(db) if _is_wizard_class(c)}
    characters = await crud.load_all_characters(db)
    spells = await crud.get_all_wizard_spells(db)

    return [
        Wizard(
            character=character,
            mana=stats[character.id].mana,
            max_mana=stats[character.id].max_mana,
            spells=spells.get(character.id, []),
        )
        for character in characters
        if character.id in stats and character.class_id in wizard_class_ids
    ]


@retry_on_db_lock(max_retries=5, initial_delay=0.1, backoff_factor=2)
async def update_wizard(db: AsyncSession, wizard_id: str, data: schemas.WizardUpdate) -> Wizard:
    """
    Replace a wizard's character fields, inventories, mana and spellbook.

    All steps run in one transaction; any failure rolls back every step.
    """
    await _load_or_404(db, wizard_id)

    try:
        async with transaction(db):
            await apply_character_update(db, wizard_id, data)
            await _require_wizard_class(db, data.class_id)
            if await crud.update_wizard_stats(db, wizard_id, mana=data.mana, max_mana=data.max_mana) == 0:
                raise NotFoundError("Wizard not found")
            await crud.replace_wizard_spells(db, wizard_id, data.spells)
    except SQLAlchemyError as e:
        logger.error(f"Update of wizard {wizard_id} rolled back: {e}")
        raise

    logger.info(f"Updated wizard {wizard_id}")
    return await _load_or_404(db, wizard_id)


@retry_on_db_lock(max_retries=5, initial_delay=0.1, backoff_factor=2)
async def delete_wizard(db: AsyncSession, wizard_id: str) -> bool:
    """Delete the spellbook, the extension row and the character in one transaction."""
    try:
        async with transaction(db):
            await crud.clear_wizard_spells(db, wizard_id)
            if await crud.delete_wizard_stats(db, wizard_id) == 0:
                raise NotFoundError("Wizard not found")
            await cascade_delete_character(db, wizard_id)
    except SQLAlchemyError as e:
        logger.error(f"Delete of wizard {wizard_id} rolled back: {e}")
        raise

    logger.info(f"Deleted wizard {wizard_id}")
    return True


# =============================================================================
# Spells and mana
# =============================================================================


async def add_spell(db: AsyncSession, wizard_id: str, spell_id: str) -> Wizard:
    wizard = await _load_or_404(db, wizard_id)
    spell = await crud.search_spell_by_id(db, spell_id)
    if spell is None:
        raise NotFoundError("Spell not found")
    if wizard.find_spell(spell_id) is not None:
        raise ConflictError("Spell already added to this wizard")

    try:
        async with transaction(db):
            await crud.add_wizard_spell(db, wizard_id, spell_id)
    except IntegrityError as exc:
        raise ConflictError("Spell already added to this wizard") from exc

    wizard.spells.append(spell)
    logger.info(f"Wizard {wizard_id} learned spell {spell_id}")
    return wizard


async def cast_spell(db: AsyncSession, wizard_id: str, target_id: str, spell_id: str) -> Dict[str, Any]:
    """
    Cast a known spell on a character, spending its mana cost.

    Mana is only spent if the stored mana still covers the cost, and the
    damage is subtracted from the target's stored hp; both happen in one
    transaction.

    Returns:
        {"message": <description of the spell's effect>}
    """
    wizard = await _load_or_404(db, wizard_id)

    spell = await crud.search_spell_by_id(db, spell_id)
    if spell is None or wizard.find_spell(spell_id) is None:
        raise NotFoundError("Spell not found or does not belong to the attacker")

    if not can_afford(wizard.mana, spell):
        logger.warning(f"Wizard {wizard_id} lacks mana for {spell.name} ({wizard.mana} < {spell.mana_cost})")
        raise RuleViolationError("Not enough mana to cast this spell")

    target = await crud.load_character(db, target_id)
    if target is None:
        raise NotFoundError("Target not found")

    outcome = resolve_spell(caster_name=wizard.name, target_name=target.name, spell=spell)

    async with transaction(db):
        mana_left = await crud.spend_wizard_mana(db, wizard_id, outcome.mana_cost)
        if mana_left is None:
            logger.warning(f"Wizard {wizard_id} ran out of mana before {spell.name} was cast")
            raise RuleViolationError("Not enough mana to cast this spell")
        remaining = await crud.damage_character(db, target.id, outcome.hp_loss)
        if remaining is None:
            raise NotFoundError("Target not found")

    logger.info(f"{wizard.name} cast {spell.name} on {target.name} (hp now {remaining}, mana left {mana_left})")
    return {"message": outcome.describe(remaining)}


async def restore_mana(db: AsyncSession, wizard_id: str) -> Wizard:
    """Drink the first mana potion in the wizard's inventory."""
    wizard = await _load_or_404(db, wizard_id)

    potion = wizard.character.first_mana_potion()
    if potion is None:
        raise NotFoundError("No mana potions available")
    if wizard.mana >= wizard.max_mana:
        raise RuleViolationError("Your Mana is full! Keep combat wizard")

    async with transaction(db):
        if not await crud.remove_character_potion(db, wizard_id, potion.id):
            raise NotFoundError("No mana potions available")
        new_mana = await crud.restore_wizard_mana(db, wizard_id, potion.mana_restore)
        if new_mana is None:
            raise RuleViolationError("Your Mana is full! Keep combat wizard")

    wizard.mana = new_mana
    wizard.character.remove_potion(potion.id)
    logger.info(f"Wizard {wizard_id} restored mana to {new_mana} using potion {potion.id}")
    return wizard
