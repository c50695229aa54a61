import uuid

from sqlalchemy import JSON, Column, ForeignKey, Index, Integer, String, Table, Text

from .connection import Base


def generate_id() -> str:
    """Generate a string primary key for rows created without an explicit id."""
    return str(uuid.uuid4())


# =============================================================================
# Association tables (character inventory and wizard spellbook)
# =============================================================================
# Composite primary keys make each (character, item) pair unique; a concurrent
# duplicate attach surfaces as an IntegrityError instead of a second row.

character_weapons = Table(
    "character_weapons",
    Base.metadata,
    Column("character_id", String, ForeignKey("characters.id", ondelete="CASCADE"), primary_key=True),
    Column("weapon_id", String, ForeignKey("weapons.id", ondelete="CASCADE"), primary_key=True),
)

character_gear = Table(
    "character_gear",
    Base.metadata,
    Column("character_id", String, ForeignKey("characters.id", ondelete="CASCADE"), primary_key=True),
    Column("gear_id", String, ForeignKey("gears.id", ondelete="CASCADE"), primary_key=True),
)

character_potions = Table(
    "character_potions",
    Base.metadata,
    Column("character_id", String, ForeignKey("characters.id", ondelete="CASCADE"), primary_key=True),
    Column("potion_id", String, ForeignKey("potions.id", ondelete="CASCADE"), primary_key=True),
)

wizard_spells = Table(
    "wizard_spells",
    Base.metadata,
    Column("character_id", String, ForeignKey("characters.id", ondelete="CASCADE"), primary_key=True),
    Column("spell_id", String, ForeignKey("spells.id", ondelete="CASCADE"), primary_key=True),
)


# =============================================================================
# Catalog tables
# =============================================================================


class CharacterClass(Base):
    __tablename__ = "classes"
    # Authoritative uniqueness guard; create_class also pre-checks by name
    __table_args__ = (Index("ux_classes_name", "name", unique=True),)

    id = Column(String, primary_key=True, default=generate_id)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    attributes = Column(JSON, nullable=False, default=dict)  # {"strength": int, "dexterity": int, ...}


class Weapon(Base):
    __tablename__ = "weapons"

    id = Column(String, primary_key=True, default=generate_id)
    name = Column(String, nullable=False)
    category = Column(String, nullable=True)
    damage = Column(Integer, nullable=False, default=0)


class Gear(Base):
    __tablename__ = "gears"

    id = Column(String, primary_key=True, default=generate_id)
    name = Column(String, nullable=False)
    category = Column(String, nullable=True)  # chestplate, leggings, skullcap, cleats, ...
    armour = Column(Integer, nullable=False, default=0)


class Potion(Base):
    __tablename__ = "potions"

    id = Column(String, primary_key=True, default=generate_id)
    name = Column(String, nullable=False)
    effects = Column(JSON, nullable=False, default=dict)  # {"hpRestore": int, "manaRestore": int, "increaseDamage": int}
    utility = Column(String, nullable=True)


class Spell(Base):
    __tablename__ = "spells"

    id = Column(String, primary_key=True, default=generate_id)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    mana_cost = Column("manaCost", Integer, nullable=False, default=0)
    damage = Column(Integer, nullable=False, default=0)
    duration = Column(Integer, nullable=False, default=0)


# =============================================================================
# Character aggregate
# =============================================================================


class Character(Base):
    __tablename__ = "characters"
    __table_args__ = (Index("ix_characters_class_id", "class_id"),)

    id = Column(String, primary_key=True, default=generate_id)
    name = Column(String, nullable=False)
    race = Column(String, nullable=True)
    class_id = Column(String, ForeignKey("classes.id"), nullable=True)
    hp = Column(Integer, nullable=False, default=2000)
    max_hp = Column("maxHp", Integer, nullable=False, default=2000)
    ac = Column(Integer, nullable=False, default=0)


class WizardStats(Base):
    """1:1 extension row that turns a character into a wizard."""

    __tablename__ = "wizards"

    character_id = Column(String, ForeignKey("characters.id", ondelete="CASCADE"), primary_key=True)
    mana = Column(Integer, nullable=False, default=1000)
    max_mana = Column("maxMana", Integer, nullable=False, default=1000)


# =============================================================================
# Authentication
# =============================================================================


class User(Base):
    __tablename__ = "users"
    __table_args__ = (Index("ux_users_username", "username", unique=True),)

    id = Column(String, primary_key=True, default=generate_id)
    username = Column(String, nullable=False)
    password = Column(String, nullable=False)  # bcrypt hash
    role = Column(String, nullable=False, default="user")
