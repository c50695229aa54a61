"""FastAPI routers for modular endpoint organization."""

from . import auth, characters, classes, gears, potions, spells, weapons, wizards

__all__ = [
    "auth",
    "classes",
    "weapons",
    "gears",
    "potions",
    "spells",
    "characters",
    "wizards",
]
