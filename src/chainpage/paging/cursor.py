from __future__ import annotations

from collections.abc import Sequence

from chainpage.core.models import NO_MORE_PAGES, Page, Pagination, Record, Sort


def next_cursor(records: Sequence[Record], limit: int) -> int:
    """Return the block to resume from, or -1 when the range is exhausted.

    The boundary is the last record's block minus one. Siblings sharing that
    block can be skipped or repeated on the next page.
    """
    if records and len(records) >= limit:
        return records[-1].block_number - 1
    return NO_MORE_PAGES


def paginate(records: Sequence[Record], limit: int, height: int | None) -> Pagination:
    return Pagination(cursor=next_cursor(records, limit), height=height)


def resume_cursor(page: Page, sort: Sort) -> int | None:
    """Return the cursor for the request after `page`, or None when the walk is over.

    Descending walks send `pagination.cursor` back unchanged; it is the
    inclusive upper bound of the next page. Ascending walks resume at the
    block after the last record, since `pagination.cursor` lies below it and
    would fetch the same page again.
    """
    if not page.has_more or not page.records:
        return None
    if sort == "asc":
        return page.records[-1].block_number + 1
    # 0 reads as "no cursor"; block 0 is genesis and holds no history
    if page.pagination.cursor == 0:
        return None
    return page.pagination.cursor


def cursor_advances(previous: int | None, cursor: int, sort: Sort) -> bool:
    """True when `cursor` moves strictly past the `previous` request's cursor."""
    if sort == "asc":
        return cursor > (previous or 0)
    return previous is None or cursor < previous
