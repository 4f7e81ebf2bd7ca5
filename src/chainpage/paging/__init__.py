"""Streaming pagination engine.

This package provides:
- Query building for one page (`build_query`)
- Stream consumption with per-batch timestamp join (`consume_stream`)
- Cursor computation (`paginate`)
- The page boundary service and cursor-following walk (`PageService`)
"""

from chainpage.paging.cursor import cursor_advances, next_cursor, paginate, resume_cursor
from chainpage.paging.joiner import BlockTimestamps
from chainpage.paging.pager import PageRequest, PageService
from chainpage.paging.query import block_range, build_query
from chainpage.paging.stream import PageAccumulator, StreamState, consume_batches, consume_stream, stream_page

__all__ = [
    "BlockTimestamps",
    "PageAccumulator",
    "PageRequest",
    "PageService",
    "StreamState",
    "block_range",
    "build_query",
    "consume_batches",
    "consume_stream",
    "cursor_advances",
    "next_cursor",
    "paginate",
    "resume_cursor",
    "stream_page",
]
