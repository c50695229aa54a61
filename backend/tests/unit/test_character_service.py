"""
Unit tests for the character aggregate service.

Covers lifecycle, inventory attach operations, attack, heal, and the
atomicity of multi-step updates and deletes under forced failures.
"""

import crud
import pytest
import schemas
from domain.entities import Character
from domain.exceptions import ConflictError, NotFoundError, PersistenceError, RuleViolationError
from infrastructure.database import models
from services import character_service
from sqlalchemy import func, select


async def _count(db, table) -> int:
    return await db.scalar(select(func.count()).select_from(table))


def _full_update(character, **overrides) -> schemas.CharacterUpdate:
    fields = {
        "name": character.name,
        "race": character.race,
        "class_id": character.class_id,
        "hp": character.hp,
        "max_hp": character.max_hp,
        "ac": character.ac,
        "gear": [g.id for g in character.gear],
        "potions": [p.id for p in character.potions],
        "weapons": [w.id for w in character.weapons],
    }
    fields.update(overrides)
    return schemas.CharacterUpdate(**fields)


class TestCharacterLifecycle:
    @pytest.mark.unit
    async def test_create_applies_defaults(self, test_db, sample_character):
        assert sample_character.id
        assert sample_character.hp == 2000
        assert sample_character.max_hp == 2000
        assert sample_character.ac == 0
        assert sample_character.gear == []
        assert sample_character.potions == []
        assert sample_character.weapons == []

    @pytest.mark.unit
    async def test_search_returns_inventory(self, test_db, sample_character, sample_weapon, healing_potion, sample_gear):
        await character_service.add_weapon(test_db, sample_character.id, sample_weapon.id)
        await character_service.add_potion(test_db, sample_character.id, healing_potion.id)
        await character_service.add_gear(test_db, sample_character.id, sample_gear.id)

        found = await character_service.search_character_by_id(test_db, sample_character.id)

        assert [w.id for w in found.weapons] == [sample_weapon.id]
        assert [p.id for p in found.potions] == [healing_potion.id]
        assert [g.id for g in found.gear] == [sample_gear.id]

    @pytest.mark.unit
    async def test_search_missing_returns_none(self, test_db):
        assert await character_service.search_character_by_id(test_db, "nope") is None

    @pytest.mark.unit
    async def test_get_all_groups_inventory_by_character(
        self, test_db, sample_character, target_character, sample_weapon
    ):
        await character_service.add_weapon(test_db, target_character.id, sample_weapon.id)

        characters = {c.id: c for c in await character_service.get_all_characters(test_db)}

        assert set(characters) == {sample_character.id, target_character.id}
        assert characters[sample_character.id].weapons == []
        assert [w.id for w in characters[target_character.id].weapons] == [sample_weapon.id]

    @pytest.mark.unit
    async def test_update_replaces_fields_and_inventory(
        self, test_db, sample_character, sample_weapon, healing_potion, mana_potion
    ):
        await character_service.add_weapon(test_db, sample_character.id, sample_weapon.id)
        await character_service.add_potion(test_db, sample_character.id, healing_potion.id)

        data = _full_update(
            sample_character,
            name="Conan the King",
            hp=1500,
            weapons=[],
            potions=[{"id": mana_potion.id}, healing_potion.id],
        )
        assert await character_service.update_character(test_db, sample_character.id, data) is True

        found = await character_service.search_character_by_id(test_db, sample_character.id)
        assert found.name == "Conan the King"
        assert found.hp == 1500
        assert found.weapons == []
        assert {p.id for p in found.potions} == {mana_potion.id, healing_potion.id}

    @pytest.mark.unit
    async def test_update_missing_character_is_generic_error(self, test_db, sample_character):
        data = _full_update(sample_character)

        with pytest.raises(PersistenceError) as exc_info:
            await character_service.update_character(test_db, "nope", data)

        assert str(exc_info.value) == "Something went wrong"

    @pytest.mark.unit
    async def test_update_is_atomic_when_a_step_fails(
        self, test_db, monkeypatch, sample_character, sample_weapon, healing_potion
    ):
        await character_service.add_weapon(test_db, sample_character.id, sample_weapon.id)
        await character_service.add_potion(test_db, sample_character.id, healing_potion.id)

        async def failing_replace(*args, **kwargs):
            raise RuntimeError("disk on fire")

        monkeypatch.setattr(crud, "replace_character_weapons", failing_replace)

        data = _full_update(sample_character, name="Renamed", hp=10, potions=[], weapons=[])
        with pytest.raises(RuntimeError, match="disk on fire"):
            await character_service.update_character(test_db, sample_character.id, data)

        found = await character_service.search_character_by_id(test_db, sample_character.id)
        assert found.name == "Conan"
        assert found.hp == 2000
        assert [p.id for p in found.potions] == [healing_potion.id]
        assert [w.id for w in found.weapons] == [sample_weapon.id]

    @pytest.mark.unit
    async def test_delete_cascades_join_rows(self, test_db, sample_character, sample_weapon, sample_gear):
        await character_service.add_weapon(test_db, sample_character.id, sample_weapon.id)
        await character_service.add_gear(test_db, sample_character.id, sample_gear.id)

        assert await character_service.delete_character(test_db, sample_character.id) is True

        assert await character_service.search_character_by_id(test_db, sample_character.id) is None
        assert await _count(test_db, models.character_weapons) == 0
        assert await _count(test_db, models.character_gear) == 0
        # Catalog rows are untouched
        assert await crud.search_weapon_by_id(test_db, sample_weapon.id) is not None

    @pytest.mark.unit
    async def test_delete_missing_character(self, test_db):
        with pytest.raises(NotFoundError, match="Character not found"):
            await character_service.delete_character(test_db, "nope")

    @pytest.mark.unit
    async def test_delete_is_atomic_when_a_step_fails(self, test_db, monkeypatch, sample_character, sample_weapon):
        await character_service.add_weapon(test_db, sample_character.id, sample_weapon.id)

        async def failing_delete(*args, **kwargs):
            raise RuntimeError("connection lost")

        monkeypatch.setattr(crud, "delete_character_row", failing_delete)

        with pytest.raises(RuntimeError):
            await character_service.delete_character(test_db, sample_character.id)

        found = await character_service.search_character_by_id(test_db, sample_character.id)
        assert [w.id for w in found.weapons] == [sample_weapon.id]


class TestInventory:
    @pytest.mark.unit
    async def test_add_weapon(self, test_db, sample_character, sample_weapon):
        character = await character_service.add_weapon(test_db, sample_character.id, sample_weapon.id)
        assert [w.id for w in character.weapons] == [sample_weapon.id]

    @pytest.mark.unit
    async def test_add_weapon_twice_conflicts(self, test_db, sample_character, sample_weapon):
        await character_service.add_weapon(test_db, sample_character.id, sample_weapon.id)

        with pytest.raises(ConflictError, match="Weapon already added to this character"):
            await character_service.add_weapon(test_db, sample_character.id, sample_weapon.id)

        assert await _count(test_db, models.character_weapons) == 1

    @pytest.mark.unit
    async def test_add_weapon_missing_entities(self, test_db, sample_character, sample_weapon):
        with pytest.raises(NotFoundError, match="Character not found"):
            await character_service.add_weapon(test_db, "nope", sample_weapon.id)
        with pytest.raises(NotFoundError, match="Weapon not found"):
            await character_service.add_weapon(test_db, sample_character.id, "nope")

    @pytest.mark.unit
    async def test_add_gear_raises_armor_class(self, test_db, sample_character, sample_gear):
        character = await character_service.add_gear(test_db, sample_character.id, sample_gear.id)

        assert character.ac == 400
        found = await character_service.search_character_by_id(test_db, sample_character.id)
        assert found.ac == 400

    @pytest.mark.unit
    async def test_add_gear_caps_armor_class(self, test_db, barbarian_class, sample_gear):
        character = await character_service.create_character(
            test_db, schemas.CharacterCreate(name="Tank", class_id=barbarian_class.id, ac=800)
        )

        character = await character_service.add_gear(test_db, character.id, sample_gear.id)
        assert character.ac == 1000

    @pytest.mark.unit
    async def test_add_gear_twice_conflicts(self, test_db, sample_character, sample_gear):
        await character_service.add_gear(test_db, sample_character.id, sample_gear.id)

        with pytest.raises(ConflictError, match="Weapon already exists in character's inventory"):
            await character_service.add_gear(test_db, sample_character.id, sample_gear.id)

        found = await character_service.search_character_by_id(test_db, sample_character.id)
        assert found.ac == 400

    @pytest.mark.unit
    async def test_armor_class_never_decreases_and_stops_at_cap(self, test_db, sample_character):
        categories = ["chestplate", "leggings", "gloves", "skullcap", "cleats", "chestplate"]
        ac = sample_character.ac
        for index, category in enumerate(categories):
            gear = await crud.create_gear(test_db, schemas.GearCreate(name=f"Piece {index}", category=category))
            character = await character_service.add_gear(test_db, sample_character.id, gear.id)
            assert ac <= character.ac <= 1000
            ac = character.ac

        found = await character_service.search_character_by_id(test_db, sample_character.id)
        assert found.ac == 1000
        assert len(found.gear) == len(categories)

    @pytest.mark.unit
    async def test_add_missing_gear(self, test_db, sample_character):
        with pytest.raises(NotFoundError, match="Gear not found"):
            await character_service.add_gear(test_db, sample_character.id, "nope")

    @pytest.mark.unit
    async def test_add_potion_twice_conflicts(self, test_db, sample_character, healing_potion):
        await character_service.add_potion(test_db, sample_character.id, healing_potion.id)

        with pytest.raises(ConflictError, match="Potion already exists in character's inventory"):
            await character_service.add_potion(test_db, sample_character.id, healing_potion.id)

    @pytest.mark.unit
    async def test_add_missing_potion(self, test_db, sample_character):
        with pytest.raises(NotFoundError, match="Potion not found"):
            await character_service.add_potion(test_db, sample_character.id, "nope")


class TestAttack:
    @pytest.mark.unit
    async def test_barbarian_adds_strength(self, test_db, sample_character, target_character, sample_weapon):
        await character_service.add_weapon(test_db, sample_character.id, sample_weapon.id)

        result = await character_service.attack(test_db, sample_character.id, target_character.id, sample_weapon.id)

        assert "dealing 300 damage and 50 bonus for a total of 350" in result["message"]
        target = await character_service.search_character_by_id(test_db, target_character.id)
        assert target.hp == 650

    @pytest.mark.unit
    async def test_defeats_target(self, test_db, sample_character, warrior_class, sample_weapon):
        await character_service.add_weapon(test_db, sample_character.id, sample_weapon.id)
        target = await character_service.create_character(
            test_db, schemas.CharacterCreate(name="Goblin", class_id=warrior_class.id, hp=300, max_hp=300, ac=200)
        )

        result = await character_service.attack(test_db, sample_character.id, target.id, sample_weapon.id)

        assert result["message"].endswith("Goblin has been defeated.")
        found = await character_service.search_character_by_id(test_db, target.id)
        assert found.hp == 0
        assert found.is_defeated

    @pytest.mark.unit
    async def test_rogue_misspelling_adds_dexterity(self, test_db, target_character, sample_weapon):
        rouge = await crud.create_class(test_db, schemas.ClassCreate(name="Rouge", attributes={"dexterity": 25}))
        attacker = await character_service.create_character(
            test_db, schemas.CharacterCreate(name="Vex", class_id=rouge.id)
        )
        await character_service.add_weapon(test_db, attacker.id, sample_weapon.id)

        result = await character_service.attack(test_db, attacker.id, target_character.id, sample_weapon.id)

        assert "and 25 bonus for a total of 325" in result["message"]

    @pytest.mark.unit
    async def test_halves_damage_against_high_armor(self, test_db, warrior_class, target_character, sample_weapon):
        attacker = await character_service.create_character(
            test_db, schemas.CharacterCreate(name="Squire", class_id=warrior_class.id)
        )
        await character_service.add_weapon(test_db, attacker.id, sample_weapon.id)
        armored = await character_service.create_character(
            test_db, schemas.CharacterCreate(name="Knight", class_id=warrior_class.id, ac=300)
        )

        result = await character_service.attack(test_db, attacker.id, armored.id, sample_weapon.id)

        assert result["message"] == "Squire attacked Knight with Greataxe, dealing 150 damage for a total of 150"
        found = await character_service.search_character_by_id(test_db, armored.id)
        assert found.hp == 1850

    @pytest.mark.unit
    async def test_missing_character(self, test_db, sample_character, sample_weapon):
        with pytest.raises(NotFoundError, match="Character not Found"):
            await character_service.attack(test_db, sample_character.id, "nope", sample_weapon.id)

    @pytest.mark.unit
    async def test_weapon_must_belong_to_attacker(self, test_db, sample_character, target_character, sample_weapon):
        with pytest.raises(NotFoundError, match="Weapon not found or does not belong to the attacker"):
            await character_service.attack(test_db, sample_character.id, target_character.id, sample_weapon.id)


class TestHeal:
    @pytest.mark.unit
    async def test_heal_consumes_one_potion(self, test_db, warrior_class, healing_potion, mana_potion):
        wounded = await character_service.create_character(
            test_db, schemas.CharacterCreate(name="Boromir", class_id=warrior_class.id, hp=300, max_hp=1000)
        )
        await character_service.add_potion(test_db, wounded.id, mana_potion.id)
        await character_service.add_potion(test_db, wounded.id, healing_potion.id)

        result = await character_service.heal(test_db, wounded.id)

        assert result["message"] == "Boromir has been healed by 500 HP. Current HP: 800/1000"
        assert result["character"].hp == 800
        assert [p.id for p in result["character"].potions] == [mana_potion.id]

        found = await character_service.search_character_by_id(test_db, wounded.id)
        assert found.hp == 800
        assert [p.id for p in found.potions] == [mana_potion.id]

    @pytest.mark.unit
    async def test_heal_caps_at_max_hp(self, test_db, warrior_class, healing_potion):
        scratched = await character_service.create_character(
            test_db, schemas.CharacterCreate(name="Boromir", class_id=warrior_class.id, hp=900, max_hp=1000)
        )
        await character_service.add_potion(test_db, scratched.id, healing_potion.id)

        result = await character_service.heal(test_db, scratched.id)

        assert "healed by 100 HP. Current HP: 1000/1000" in result["message"]

    @pytest.mark.unit
    async def test_heal_at_full_hp(self, test_db, warrior_class, healing_potion):
        character = await character_service.create_character(
            test_db, schemas.CharacterCreate(name="Fresh", class_id=warrior_class.id, hp=150, max_hp=150)
        )
        await character_service.add_potion(test_db, character.id, healing_potion.id)

        with pytest.raises(RuleViolationError, match="Your HP is full! Keep fighting, warrior!"):
            await character_service.heal(test_db, character.id)

        assert await _count(test_db, models.character_potions) == 1

    @pytest.mark.unit
    async def test_heal_without_healing_potion(self, test_db, target_character, mana_potion):
        await character_service.add_potion(test_db, target_character.id, mana_potion.id)

        with pytest.raises(NotFoundError, match="Potion does not exist in character's inventory"):
            await character_service.heal(test_db, target_character.id)

    @pytest.mark.unit
    async def test_heal_missing_character(self, test_db):
        with pytest.raises(NotFoundError, match="Character not found"):
            await character_service.heal(test_db, "nope")


class TestDuplicateLinksRejectedByKey:
    """
    With the in-memory inventory checks disabled, as when two requests race
    past them, the join-table primary key rejects the second insert.
    """

    @pytest.mark.unit
    async def test_weapon(self, test_db, monkeypatch, sample_character, sample_weapon):
        await character_service.add_weapon(test_db, sample_character.id, sample_weapon.id)
        monkeypatch.setattr(Character, "find_weapon", lambda self, weapon_id: None)

        with pytest.raises(ConflictError, match="Weapon already added to this character"):
            await character_service.add_weapon(test_db, sample_character.id, sample_weapon.id)

        assert await _count(test_db, models.character_weapons) == 1
        found = await character_service.search_character_by_id(test_db, sample_character.id)
        assert [w.id for w in found.weapons] == [sample_weapon.id]

    @pytest.mark.unit
    async def test_gear_leaves_armor_class_unchanged(self, test_db, monkeypatch, sample_character, sample_gear):
        await character_service.add_gear(test_db, sample_character.id, sample_gear.id)
        monkeypatch.setattr(Character, "has_gear", lambda self, gear_id: False)

        with pytest.raises(ConflictError, match="Weapon already exists in character's inventory"):
            await character_service.add_gear(test_db, sample_character.id, sample_gear.id)

        assert await _count(test_db, models.character_gear) == 1
        found = await character_service.search_character_by_id(test_db, sample_character.id)
        assert found.ac == 400

    @pytest.mark.unit
    async def test_potion(self, test_db, monkeypatch, sample_character, healing_potion):
        await character_service.add_potion(test_db, sample_character.id, healing_potion.id)
        monkeypatch.setattr(Character, "has_potion", lambda self, potion_id: False)

        with pytest.raises(ConflictError, match="Potion already exists in character's inventory"):
            await character_service.add_potion(test_db, sample_character.id, healing_potion.id)

        assert await _count(test_db, models.character_potions) == 1
        found = await character_service.search_character_by_id(test_db, sample_character.id)
        assert [p.id for p in found.potions] == [healing_potion.id]


class TestConcurrentSessions:
    """
    Two sessions on one file database stand in for two simultaneous requests.
    The second session reads the character, then the first one writes and
    commits before the second one writes.
    """

    @pytest.mark.unit
    async def test_gear_from_both_sessions_adds_up(self, monkeypatch, file_db_sessions):
        first, second = file_db_sessions
        knight_class = await crud.create_class(first, schemas.ClassCreate(name="Knight"))
        chestplate = await crud.create_gear(first, schemas.GearCreate(name="Chestplate", category="chestplate"))
        cleats = await crud.create_gear(first, schemas.GearCreate(name="Cleats", category="cleats"))
        knight = await character_service.create_character(
            first, schemas.CharacterCreate(name="Galahad", class_id=knight_class.id)
        )

        load_character = crud.load_character
        seen_ac = []

        async def load_then_let_first_write(db, character_id):
            character = await load_character(db, character_id)
            if db is second and not seen_ac:
                seen_ac.append(character.ac)
                await character_service.add_gear(first, character_id, chestplate.id)
            return character

        monkeypatch.setattr(crud, "load_character", load_then_let_first_write)

        equipped = await character_service.add_gear(second, knight.id, cleats.id)

        assert seen_ac == [0]
        assert equipped.ac == 500
        found = await character_service.search_character_by_id(first, knight.id)
        assert found.ac == 500
        assert {g.id for g in found.gear} == {chestplate.id, cleats.id}

    @pytest.mark.unit
    async def test_attacks_from_both_sessions_land(self, monkeypatch, file_db_sessions):
        first, second = file_db_sessions
        barbarian = await crud.create_class(first, schemas.ClassCreate(name="Barbarian", attributes={"strength": 50}))
        greataxe = await crud.create_weapon(first, schemas.WeaponCreate(name="Greataxe", damage=300))
        conan = await character_service.create_character(
            first, schemas.CharacterCreate(name="Conan", class_id=barbarian.id)
        )
        await character_service.add_weapon(first, conan.id, greataxe.id)
        target = await character_service.create_character(
            first, schemas.CharacterCreate(name="Boromir", hp=1000, max_hp=1000)
        )

        load_character = crud.load_character
        seen_hp = []

        async def load_then_let_first_write(db, character_id):
            character = await load_character(db, character_id)
            if db is second and character_id == target.id and not seen_hp:
                seen_hp.append(character.hp)
                await character_service.attack(first, conan.id, target.id, greataxe.id)
            return character

        monkeypatch.setattr(crud, "load_character", load_then_let_first_write)

        result = await character_service.attack(second, conan.id, target.id, greataxe.id)

        assert seen_hp == [1000]
        assert not result["message"].endswith("defeated.")
        found = await character_service.search_character_by_id(first, target.id)
        assert found.hp == 300
