"""Drive a server stream until one page of records is accumulated.

This module provides:
- `PageAccumulator`: runtime-agnostic state of one page (feed batches in,
  ask whether the page is full).
- `consume_stream`: async driver over an `IBatchReceiver`.
- `consume_batches`: sync driver over any iterable of batches.

Both drivers share the accumulator, so the loop behaves identically whether
batches come from an event loop or a plain iterator.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from loguru import logger

from chainpage.core.interfaces import IBatchReceiver, IIndexerClient, IRecordKind
from chainpage.core.models import Batch, Query, Record, Sort
from chainpage.paging.joiner import BlockTimestamps


class StreamState(str, Enum):
    IDLE = "idle"
    STREAMING = "streaming"
    DONE = "done"
    ERROR = "error"


@dataclass(slots=True)
class PageAccumulator:
    """
    Accumulated state of one page request.

    - `records` never grows beyond `limit`; the rest of the batch that
      fills the page is dropped.
    - `height` is the archive height of the last batch seen.
    """

    kind: IRecordKind
    limit: int
    records: list[Record] = field(default_factory=list)
    height: int | None = None
    batches: int = 0
    state: StreamState = StreamState.IDLE

    @property
    def full(self) -> bool:
        return len(self.records) >= self.limit

    def feed(self, batch: Batch) -> bool:
        """Join, map and append one batch. Return True once the page is full."""
        self.state = StreamState.STREAMING
        self.batches += 1
        timestamps = BlockTimestamps(batch.blocks)
        raw_records = self.kind.records_of(batch)

        logger.debug(
            "batch {}: blocks={} {}={} archive_height={} next_block={}",
            self.batches,
            len(batch.blocks),
            self.kind.name,
            len(raw_records),
            batch.archive_height,
            batch.next_block,
        )

        for raw in raw_records:
            if self.full:
                break
            block_number = raw.block_number  # type: ignore[attr-defined]
            self.records.append(self.kind.map_record(raw, timestamps.millis(block_number)))

        self.height = batch.archive_height or None

        if self.full:
            logger.debug("limit reached: {} >= {}", len(self.records), self.limit)
            self.state = StreamState.DONE
            return True
        return False

    def finish(self) -> None:
        """Mark end-of-stream."""
        self.state = StreamState.DONE


async def consume_stream(
    receiver: IBatchReceiver,
    *,
    kind: IRecordKind,
    limit: int,
) -> PageAccumulator:
    """
    Pull batches from `receiver` until the page is full or the stream ends.

    The receiver is always closed before returning, including on errors,
    which propagate unchanged.
    """
    acc = PageAccumulator(kind=kind, limit=limit)
    acc.state = StreamState.STREAMING
    try:
        while True:
            batch = await receiver.recv()
            if batch is None:
                logger.debug("stream ended after {} batches", acc.batches)
                acc.finish()
                break
            if acc.feed(batch):
                break
    except BaseException:
        acc.state = StreamState.ERROR
        raise
    finally:
        await receiver.close()
    return acc


def consume_batches(
    batches: Iterable[Batch | None],
    *,
    kind: IRecordKind,
    limit: int,
) -> PageAccumulator:
    """Synchronous twin of `consume_stream` for plain iterables.

    A `None` item ends the stream early, like `recv()` returning None.
    """
    acc = PageAccumulator(kind=kind, limit=limit)
    acc.state = StreamState.STREAMING
    try:
        for batch in batches:
            if batch is None or acc.feed(batch):
                break
        acc.finish()
    except BaseException:
        acc.state = StreamState.ERROR
        raise
    return acc


async def stream_page(
    client: IIndexerClient,
    query: Query,
    *,
    kind: IRecordKind,
    sort: Sort,
    limit: int,
) -> PageAccumulator:
    """Open the stream for `query` and consume one page from it."""
    receiver = await client.stream(query, reverse=sort == "desc", limit=limit)
    return await consume_stream(receiver, kind=kind, limit=limit)
