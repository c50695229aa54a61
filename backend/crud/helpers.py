"""
Helper functions shared across CRUD operations.
"""

import logging
from collections import defaultdict
from typing import Any, Callable, Dict, Iterable, List, Sequence

from sqlalchemy import Table, delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger("CRUD")


def group_by_character(rows: Iterable[Sequence[Any]], convert: Callable[[Any], Any]) -> Dict[str, List[Any]]:
    """
    Group (character_id, row) pairs from a bulk join query by character.

    Each row is passed through `convert` (usually an entity's from_model).
    Characters without rows are simply absent from the result.
    """
    grouped: Dict[str, List[Any]] = defaultdict(list)
    for character_id, row in rows:
        grouped[character_id].append(convert(row))
    return dict(grouped)


def unique_ids(item_ids: Iterable[str]) -> List[str]:
    """Drop repeated ids, keeping first-seen order (join rows are unique per pair)."""
    return list(dict.fromkeys(item_ids))


# =============================================================================
# Join table primitives
# =============================================================================
# None of these commit; the calling service owns the transaction.


async def fetch_joined_items(db: AsyncSession, table: Table, item_column: str, model, character_id: str) -> List[Any]:
    """Catalog rows of `model` linked to one character through `table`."""
    result = await db.execute(
        select(model)
        .join(table, table.c[item_column] == model.id)
        .where(table.c.character_id == character_id)
    )
    return list(result.scalars().all())


async def fetch_all_joined_items(db: AsyncSession, table: Table, item_column: str, model) -> List[Any]:
    """(character_id, catalog row) pairs for every row of `table`."""
    result = await db.execute(select(table.c.character_id, model).join(model, table.c[item_column] == model.id))
    return [(character_id, row) for character_id, row in result.all()]


async def insert_link(db: AsyncSession, table: Table, item_column: str, character_id: str, item_id: str) -> None:
    await db.execute(insert(table).values({"character_id": character_id, item_column: item_id}))


async def delete_link(db: AsyncSession, table: Table, item_column: str, character_id: str, item_id: str) -> int:
    """Delete exactly one (character, item) row. Returns the affected row count."""
    result = await db.execute(
        delete(table).where(table.c.character_id == character_id).where(table.c[item_column] == item_id)
    )
    return result.rowcount


async def clear_links(db: AsyncSession, table: Table, character_id: str) -> int:
    result = await db.execute(delete(table).where(table.c.character_id == character_id))
    return result.rowcount


async def replace_links(
    db: AsyncSession, table: Table, item_column: str, character_id: str, item_ids: Iterable[str]
) -> None:
    """Delete every link of the character, then insert one row per supplied id."""
    await clear_links(db, table, character_id)
    ids = unique_ids(item_ids)
    if ids:
        await db.execute(insert(table), [{"character_id": character_id, item_column: item_id} for item_id in ids])
