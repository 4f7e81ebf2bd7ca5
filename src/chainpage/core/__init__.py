"""Core data models, configuration and errors.

This package provides:
- Data models (Query, Batch, Transaction, Log, Page)
- Configuration classes (IndexerConfig, ServerConfig)
- Engine error kinds
"""

from chainpage.core.config import IndexerConfig, ServerConfig
from chainpage.core.errors import BatchDecodeError, ChainpageError, CursorStalledError, IndexerError, RecordMappingError
from chainpage.core.models import (
    NO_MORE_PAGES,
    Batch,
    Block,
    Log,
    Page,
    Pagination,
    Query,
    RawLog,
    RawTransaction,
    Sort,
    Transaction,
)

__all__ = [
    "IndexerConfig",
    "ServerConfig",
    "ChainpageError",
    "IndexerError",
    "BatchDecodeError",
    "RecordMappingError",
    "CursorStalledError",
    "NO_MORE_PAGES",
    "Batch",
    "Block",
    "Log",
    "Page",
    "Pagination",
    "Query",
    "RawLog",
    "RawTransaction",
    "Sort",
    "Transaction",
]
