from __future__ import annotations

from .core.config import IndexerConfig, ServerConfig
from .core.models import Log, Page, Pagination, Transaction
from .kinds import LOGS, TRANSACTIONS
from .paging.pager import PageRequest, PageService

__all__ = [
    "IndexerConfig",
    "ServerConfig",
    "Log",
    "Page",
    "Pagination",
    "Transaction",
    "LOGS",
    "TRANSACTIONS",
    "PageRequest",
    "PageService",
]
