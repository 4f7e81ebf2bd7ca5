"""Transaction record kind: filters, field selection and mapping.

An address matches a transaction when it is either the sender or the
recipient; the two selections are OR'd by the indexer.
"""

from __future__ import annotations

from collections.abc import Sequence

from chainpage.core.errors import RecordMappingError
from chainpage.core.models import Batch, RawTransaction, Transaction

BLOCK_FIELDS = ["number", "timestamp"]
TRANSACTION_FIELDS = [
    "block_number",
    "transaction_index",
    "hash",
    "from",
    "to",
    "input",
    "value",
    "gas_price",
    "status",
]


def wide_int_to_str(value: int | None, *, field: str, default: str | None = None) -> str:
    """Render a wide integer as a base-10 string without precision loss."""
    if value is None:
        if default is None:
            raise RecordMappingError(f"transaction is missing {field}")
        return default
    if isinstance(value, bool) or not isinstance(value, int):
        raise RecordMappingError(f"{field} must be an int, got {type(value).__name__}")
    return str(value)


class TransactionKind:
    name = "transactions"
    max_results_key = "max_num_transactions"

    def build_filters(self, address: str) -> dict[str, list[dict[str, list[str]]]]:
        return {"transactions": [{"from": [address]}, {"to": [address]}]}

    def field_selection(self) -> dict[str, list[str]]:
        return {"block": list(BLOCK_FIELDS), "transaction": list(TRANSACTION_FIELDS)}

    def records_of(self, batch: Batch) -> Sequence[RawTransaction]:
        return batch.transactions

    def map_record(self, raw: object, timestamp_ms: int) -> Transaction:
        if not isinstance(raw, RawTransaction):
            raise RecordMappingError(f"expected RawTransaction, got {type(raw).__name__}")
        return Transaction(
            block_number=raw.block_number,
            block_timestamp=timestamp_ms,
            from_=raw.from_,
            gas_price=wide_int_to_str(raw.gas_price, field="gas_price"),
            hash=raw.hash,
            input=raw.input,
            # contract creation has no recipient
            to=raw.to or None,
            transaction_index=raw.transaction_index,
            value=wide_int_to_str(raw.value, field="value", default="0"),
            status=raw.status,
        )


TRANSACTIONS = TransactionKind()
