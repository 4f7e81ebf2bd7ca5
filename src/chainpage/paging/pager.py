from __future__ import annotations

import time
from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass, replace

from loguru import logger

from chainpage.core.config import IndexerConfig
from chainpage.core.errors import CursorStalledError
from chainpage.core.interfaces import IIndexerClient, IRecordKind
from chainpage.core.models import Page, Sort
from chainpage.paging.cursor import cursor_advances, paginate, resume_cursor
from chainpage.paging.query import build_query
from chainpage.paging.stream import stream_page

IndexerFactory = Callable[[IndexerConfig, int], IIndexerClient]


def _default_factory(config: IndexerConfig, chain: int) -> IIndexerClient:
    from chainpage.clients.hypersync import HypersyncIndexer

    return HypersyncIndexer.for_chain(config, chain)


def describe_error(exc: BaseException) -> str:
    """Return a non-empty, caller-facing error message."""
    return str(exc) or type(exc).__name__


@dataclass(frozen=True, kw_only=True)
class PageRequest:
    """One page fetch, as received from a caller."""

    chain: int
    address: str
    cursor: int | None
    limit: int
    sort: Sort


# ---------------------------------------------------------------------------
# Domain service - PageService
# ---------------------------------------------------------------------------


class PageService:
    """
    Fetch cursor-paginated pages of transactions or logs for an address.

    Every call builds its own indexer client and stream, so concurrent
    requests share no state. A page either fully succeeds or comes back as
    the degraded empty page carrying `error`.
    """

    def __init__(
        self,
        config: IndexerConfig,
        *,
        indexer_factory: IndexerFactory | None = None,
    ) -> None:
        self._config = config
        self._indexer_factory = indexer_factory or _default_factory

    async def fetch_page(self, kind: IRecordKind, request: PageRequest) -> Page:
        """
        Fetch one page.

        Any exception raised while opening the stream, receiving batches or
        mapping records is logged and converted to `Page.degraded`; records
        accumulated before the failure are discarded.
        """
        t0 = time.perf_counter()
        logger.info(
            "{} page: chain={} address={} cursor={} limit={} sort={} token={}",
            kind.name,
            request.chain,
            request.address,
            request.cursor,
            request.limit,
            request.sort,
            "yes" if self._config.bearer_token else "no",
        )
        try:
            page = await self._fetch(kind, request)
        except Exception as e:
            logger.exception("{} page failed for {} on chain {}", kind.name, request.address, request.chain)
            return Page.degraded(kind.name, describe_error(e), type(e))

        logger.info(
            "{} page: {} records, cursor={} height={} ({:.2f}s)",
            kind.name,
            len(page.records),
            page.pagination.cursor,
            page.pagination.height,
            time.perf_counter() - t0,
        )
        return page

    async def _fetch(self, kind: IRecordKind, request: PageRequest) -> Page:
        query = build_query(
            kind,
            address=request.address,
            cursor=request.cursor,
            sort=request.sort,
            limit=request.limit,
        )
        logger.debug(
            "query: from_block={} to_block={} {}={}",
            query.from_block,
            query.to_block,
            query.max_results_key,
            query.max_results,
        )
        client = self._indexer_factory(self._config, request.chain)
        acc = await stream_page(client, query, kind=kind, sort=request.sort, limit=request.limit)
        return Page(
            key=kind.name,
            records=acc.records,
            pagination=paginate(acc.records, request.limit, acc.height),
        )

    async def walk(self, kind: IRecordKind, request: PageRequest, pages: int) -> AsyncIterator[Page]:
        """
        Yield up to `pages` consecutive pages, starting at `request`.

        The walk ends after the last page or a degraded one. Raises
        `CursorStalledError` if the next cursor would not move past the
        current one.
        """
        current = request
        for _ in range(pages):
            page = await self.fetch_page(kind, current)
            yield page
            if page.error is not None:
                return
            cursor = resume_cursor(page, current.sort)
            if cursor is None:
                return
            if not cursor_advances(current.cursor, cursor, current.sort):
                raise CursorStalledError(f"{kind.name} cursor stuck at {cursor} ({current.sort})")
            current = replace(current, cursor=cursor)
