"""HyperSync adapter for the paging engine.

This module provides:
- `HypersyncIndexer`: an `IIndexerClient` backed by the `hypersync` client
- `HypersyncReceiver`: wraps the library's response stream and decodes
  every response into a `Batch`
- Helpers to translate a `Query` and to parse the indexer's integers

HyperSync reports several integers (timestamps, value, gas price) as
0x-prefixed hex strings; they are decoded to Python ints here so nothing
downstream depends on the wire encoding.
"""

from __future__ import annotations

from typing import Any

import hypersync

from chainpage.core.config import IndexerConfig
from chainpage.core.errors import BatchDecodeError, IndexerError
from chainpage.core.models import Batch, Block, Query, RawLog, RawTransaction


def parse_int(v: Any) -> int | None:
    """Parse an int that may arrive as int, hex string or decimal string."""
    if v is None:
        return None
    if isinstance(v, bool):
        raise BatchDecodeError(f"unexpected boolean integer field: {v!r}")
    if isinstance(v, int):
        return v
    if isinstance(v, str):
        s = v.strip()
        if not s:
            return None
        if s.lower().startswith("0x"):
            return int(s, 16) if len(s) > 2 else 0
        return int(s)
    raise BatchDecodeError(f"cannot parse integer from {type(v).__name__}")


def _required_int(v: Any, name: str) -> int:
    out = parse_int(v)
    if out is None:
        raise BatchDecodeError(f"missing {name}")
    return out


def _selection_kwargs(clause: dict[str, list[str]]) -> dict[str, list[str]]:
    # `from` is a keyword in Python; the client spells it `from_`
    return {("from_" if k == "from" else k): v for k, v in clause.items()}


def to_hypersync_query(query: Query) -> hypersync.Query:
    """Translate an engine `Query` into the client's query object."""
    kwargs: dict[str, Any] = {
        "from_block": query.from_block,
        "field_selection": hypersync.FieldSelection(**query.field_selection),
        query.max_results_key: query.max_results,
    }
    if query.to_block is not None:
        # engine bounds are inclusive; the client's to_block is exclusive
        kwargs["to_block"] = query.to_block + 1
    for kind, clauses in query.filters.items():
        if kind == "transactions":
            kwargs["transactions"] = [hypersync.TransactionSelection(**_selection_kwargs(c)) for c in clauses]
        elif kind == "logs":
            kwargs["logs"] = [hypersync.LogSelection(**c) for c in clauses]
        else:
            raise ValueError(f"unsupported selection: {kind}")
    return hypersync.Query(**kwargs)


def decode_block(b: Any) -> Block:
    return Block(
        number=_required_int(getattr(b, "number", None), "block number"),
        timestamp=parse_int(getattr(b, "timestamp", None)) or 0,
    )


def decode_transaction(tx: Any) -> RawTransaction:
    sender = getattr(tx, "from_", None) or getattr(tx, "from", None)
    return RawTransaction(
        block_number=_required_int(getattr(tx, "block_number", None), "transaction block_number"),
        transaction_index=parse_int(getattr(tx, "transaction_index", None)),
        hash=getattr(tx, "hash", None) or "",
        from_=sender or "",
        to=getattr(tx, "to", None),
        input=getattr(tx, "input", None) or "0x",
        value=parse_int(getattr(tx, "value", None)),
        gas_price=parse_int(getattr(tx, "gas_price", None)),
        status=parse_int(getattr(tx, "status", None)),
    )


def decode_log(lg: Any) -> RawLog:
    return RawLog(
        block_number=_required_int(getattr(lg, "block_number", None), "log block_number"),
        log_index=parse_int(getattr(lg, "log_index", None)),
        transaction_hash=getattr(lg, "transaction_hash", None) or "",
        address=getattr(lg, "address", None) or "",
        data=getattr(lg, "data", None) or "0x",
        topics=tuple(getattr(lg, "topics", None) or ()),
    )


def decode_response(res: Any) -> Batch:
    """Decode one streamed response into a `Batch`."""
    try:
        data = res.data
        return Batch(
            blocks=[decode_block(b) for b in (getattr(data, "blocks", None) or [])],
            transactions=[decode_transaction(t) for t in (getattr(data, "transactions", None) or [])],
            logs=[decode_log(lg) for lg in (getattr(data, "logs", None) or [])],
            archive_height=parse_int(getattr(res, "archive_height", None)),
            next_block=parse_int(getattr(res, "next_block", None)),
        )
    except BatchDecodeError:
        raise
    except (AttributeError, TypeError, ValueError) as e:
        raise BatchDecodeError(f"malformed batch: {e}") from e


class HypersyncReceiver:
    """`IBatchReceiver` over a HyperSync response stream."""

    def __init__(self, inner: Any) -> None:
        self._inner = inner
        self._closed = False

    async def recv(self) -> Batch | None:
        try:
            res = await self._inner.recv()
        except Exception as e:
            raise IndexerError(f"stream receive failed: {e}") from e
        if res is None:
            return None
        return decode_response(res)

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._inner.close()


class HypersyncIndexer:
    """Remote HyperSync endpoint for one chain.

    Parameters
    ----------
    url : str
        Per-chain HyperSync base URL.
    bearer_token : str
        API token sent with every request.
    """

    def __init__(self, url: str, *, bearer_token: str = "") -> None:
        self.url = url
        self.client = hypersync.HypersyncClient(
            hypersync.ClientConfig(url=url, bearer_token=bearer_token or None)
        )

    @classmethod
    def for_chain(cls, config: IndexerConfig, chain: int) -> HypersyncIndexer:
        return cls(config.url_for(chain), bearer_token=config.bearer_token)

    async def stream(self, query: Query, *, reverse: bool, limit: int) -> HypersyncReceiver:
        """Open a server stream; `limit` doubles as the per-response cap."""
        hs_query = to_hypersync_query(query)
        stream_config = hypersync.StreamConfig(reverse=reverse, **{query.max_results_key: limit})
        try:
            inner = await self.client.stream(hs_query, stream_config)
        except Exception as e:
            raise IndexerError(f"failed to open stream at {self.url}: {e}") from e
        return HypersyncReceiver(inner)
