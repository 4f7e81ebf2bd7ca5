"""Translate (address, cursor, sort, limit) into a bounded block-range query."""

from __future__ import annotations

from chainpage.core.interfaces import IRecordKind
from chainpage.core.models import Query, Sort


def block_range(cursor: int | None, sort: Sort) -> tuple[int, int | None]:
    """Return (from_block, to_block) for one page.

    Exactly one bound comes from the cursor; the other is the natural range
    boundary (0 or unbounded). A cursor of 0 reads as "start of range".
    """
    if sort == "asc":
        return cursor or 0, None
    return 0, cursor or None


def build_query(
    kind: IRecordKind,
    *,
    address: str,
    cursor: int | None,
    sort: Sort,
    limit: int,
) -> Query:
    from_block, to_block = block_range(cursor, sort)
    return Query(
        from_block=from_block,
        to_block=to_block,
        filters=kind.build_filters(address),
        max_results=limit,
        max_results_key=kind.max_results_key,
        field_selection=kind.field_selection(),
    )
