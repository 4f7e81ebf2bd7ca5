"""Error kinds raised inside the paging engine.

The first three are caught at the page boundary (`PageService.fetch_page`)
and turned into the degraded page; none are retried. `CursorStalledError`
is raised by `PageService.walk` to the caller.
"""

from __future__ import annotations


class ChainpageError(Exception):
    """Base class for engine errors."""


class IndexerError(ChainpageError):
    """Opening the stream or receiving from it failed (transport/protocol)."""


class BatchDecodeError(ChainpageError):
    """A streamed batch could not be decoded into a `Batch`."""


class RecordMappingError(ChainpageError):
    """A raw record had an unexpected shape and could not be normalized."""


class CursorStalledError(ChainpageError):
    """Following a cursor did not move the page window."""
