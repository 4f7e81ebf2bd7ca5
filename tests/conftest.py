from __future__ import annotations

from collections.abc import Callable
from unittest.mock import AsyncMock

import pytest
from fakes import FakeIndexer, make_log, make_tx

from chainpage.core.config import IndexerConfig
from chainpage.paging.pager import PageService


@pytest.fixture
def indexer_config() -> IndexerConfig:
    return IndexerConfig(bearer_token="test-token", url_template="https://{chain}.example.invalid")


@pytest.fixture
def make_service(indexer_config: IndexerConfig) -> Callable[[FakeIndexer], PageService]:
    def _make(indexer: FakeIndexer) -> PageService:
        return PageService(indexer_config, indexer_factory=lambda config, chain: indexer)

    return _make


@pytest.fixture
def three_block_indexer() -> FakeIndexer:
    """Blocks 98, 99, 100 with one matching transaction and one log each."""
    return FakeIndexer(
        transactions=[make_tx(98), make_tx(99), make_tx(100)],
        logs=[make_log(98), make_log(99), make_log(100)],
    )


@pytest.fixture
def mock_receiver() -> AsyncMock:
    receiver = AsyncMock()
    receiver.recv = AsyncMock(return_value=None)
    receiver.close = AsyncMock()
    return receiver
