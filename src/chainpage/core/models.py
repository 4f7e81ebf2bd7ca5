"""Core data models for address-history pagination.

This module defines:
- `Query`: bounded block-range query sent to the remote indexer.
- `Block`, `RawTransaction`, `RawLog`, `Batch`: one unit of a streamed
  indexer response, already decoded into Python ints/strings.
- `Transaction`, `Log`: normalized, output-safe records.
- `Pagination`, `Page`: the assembled page returned to callers.

Design notes
------------
- Wide integers (value, gas price) are plain Python ints internally and
  decimal strings on the way out, so nothing is ever squeezed into a float.
- `cursor == -1` means there is no further page.
- All objects are created per request and discarded with the response.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

Sort = Literal["asc", "desc"]

NO_MORE_PAGES = -1


# === Query ===


@dataclass(slots=True, frozen=True)
class Query:
    """Block-range query with explicit field selection.

    Both bounds are inclusive. `to_block=None` means unbounded (up to the
    indexer's archive height).
    """

    from_block: int
    to_block: int | None
    filters: dict[str, list[dict[str, list[str]]]]
    max_results: int
    max_results_key: str
    field_selection: dict[str, list[str]]


# === Indexer batch ===


@dataclass(slots=True, frozen=True)
class Block:
    number: int
    timestamp: int  # seconds


@dataclass(slots=True, frozen=True)
class RawTransaction:
    """Transaction as returned by the indexer (wide ints already decoded)."""

    block_number: int
    transaction_index: int | None
    hash: str
    from_: str
    to: str | None
    input: str
    value: int | None
    gas_price: int | None
    status: int | None


@dataclass(slots=True, frozen=True)
class RawLog:
    """Log as returned by the indexer; topic slots may be None."""

    block_number: int
    log_index: int | None
    transaction_hash: str
    address: str
    data: str
    topics: tuple[str | None, ...]


@dataclass(slots=True)
class Batch:
    """One server-streamed response unit."""

    blocks: list[Block] = field(default_factory=list)
    transactions: list[RawTransaction] = field(default_factory=list)
    logs: list[RawLog] = field(default_factory=list)
    archive_height: int | None = None
    next_block: int | None = None


# === Normalized records ===


@dataclass(slots=True, frozen=True)
class Transaction:
    block_number: int
    block_timestamp: int  # milliseconds
    from_: str
    gas_price: str
    hash: str
    input: str
    to: str | None
    transaction_index: int | None
    value: str
    status: int | None

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the camelCase keys of the page API."""
        return {
            "blockNumber": self.block_number,
            "blockTimestamp": self.block_timestamp,
            "from": self.from_,
            "gasPrice": self.gas_price,
            "hash": self.hash,
            "input": self.input,
            "to": self.to,
            "transactionIndex": self.transaction_index,
            "value": self.value,
            "status": self.status,
        }


@dataclass(slots=True, frozen=True)
class Log:
    block_number: int
    block_timestamp: int  # milliseconds
    transaction_hash: str
    log_index: int | None
    address: str
    topics: tuple[str, ...]
    data: str

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the camelCase keys of the page API."""
        return {
            "blockNumber": self.block_number,
            "blockTimestamp": self.block_timestamp,
            "transactionHash": self.transaction_hash,
            "logIndex": self.log_index,
            "address": self.address,
            "topics": list(self.topics),
            "data": self.data,
        }


Record = Transaction | Log


# === Page ===


@dataclass(slots=True, frozen=True)
class Pagination:
    cursor: int
    height: int | None

    def to_dict(self) -> dict[str, Any]:
        return {"cursor": self.cursor, "height": self.height}


@dataclass(slots=True, frozen=True)
class Page:
    """A page of records under `key` ("transactions" or "logs")."""

    key: str
    records: list[Record]
    pagination: Pagination
    error: str | None = None
    cause: type[BaseException] | None = field(default=None, compare=False, repr=False)

    @property
    def has_more(self) -> bool:
        return self.pagination.cursor != NO_MORE_PAGES

    @staticmethod
    def degraded(key: str, error: str, cause: type[BaseException] | None = None) -> Page:
        """Return the fixed empty page used for any failed request."""
        return Page(
            key=key,
            records=[],
            pagination=Pagination(cursor=NO_MORE_PAGES, height=None),
            error=error,
            cause=cause,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize into the page API response body."""
        body: dict[str, Any] = {
            self.key: [r.to_dict() for r in self.records],
            "pagination": self.pagination.to_dict(),
        }
        if self.error is not None:
            body["error"] = self.error
        return body
