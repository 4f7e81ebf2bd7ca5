from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from chainpage.core.models import Batch, Query, Record


# ---------------------------------------------------------------------------
# IBatchReceiver
# ---------------------------------------------------------------------------

@runtime_checkable
class IBatchReceiver(Protocol):
    """
    Pull-based handle on one server stream.

    Domain expectations:
    - `recv` returns the next decoded Batch, or None once the stream ended.
    - Batches come back strictly in the order the indexer emits them.
    - `close` releases the stream early; calling it after the end is harmless.
    """

    async def recv(self) -> Batch | None:
        ...

    async def close(self) -> None:
        ...


# ---------------------------------------------------------------------------
# IIndexerClient
# ---------------------------------------------------------------------------

@runtime_checkable
class IIndexerClient(Protocol):
    """
    Abstract range-query indexer.

    Implementations:
    - `HypersyncIndexer` (remote HyperSync endpoint)
    - In-memory fakes for testing
    """

    async def stream(self, query: Query, *, reverse: bool, limit: int) -> IBatchReceiver:
        """
        Open a server stream for `query`.

        `reverse` walks the range from `to_block` down to `from_block`;
        `limit` is passed along as the per-kind result hint.
        """
        ...


# ---------------------------------------------------------------------------
# IRecordKind
# ---------------------------------------------------------------------------

@runtime_checkable
class IRecordKind(Protocol):
    """
    Capability set of one record kind (transactions or logs).

    The paging engine is generic; everything kind-specific lives here.
    """

    name: str
    max_results_key: str

    def build_filters(self, address: str) -> dict[str, list[dict[str, list[str]]]]:
        """Return the address-match selections for the query."""
        ...

    def field_selection(self) -> dict[str, list[str]]:
        """Return the fixed field list requested from the indexer."""
        ...

    def records_of(self, batch: Batch) -> Sequence[object]:
        """Return this kind's raw records carried by `batch`, in stream order."""
        ...

    def map_record(self, raw: object, timestamp_ms: int) -> Record:
        """Normalize one raw record into its output shape."""
        ...
