"""Log record kind: filters, field selection and mapping."""

from __future__ import annotations

from collections.abc import Sequence

from chainpage.core.errors import RecordMappingError
from chainpage.core.models import Batch, Log, RawLog

BLOCK_FIELDS = ["number", "timestamp"]
LOG_FIELDS = [
    "log_index",
    "transaction_hash",
    "block_number",
    "address",
    "data",
    "topic0",
    "topic1",
    "topic2",
    "topic3",
]


class LogKind:
    name = "logs"
    max_results_key = "max_num_logs"

    def build_filters(self, address: str) -> dict[str, list[dict[str, list[str]]]]:
        return {"logs": [{"address": [address]}]}

    def field_selection(self) -> dict[str, list[str]]:
        return {"block": list(BLOCK_FIELDS), "log": list(LOG_FIELDS)}

    def records_of(self, batch: Batch) -> Sequence[RawLog]:
        return batch.logs

    def map_record(self, raw: object, timestamp_ms: int) -> Log:
        if not isinstance(raw, RawLog):
            raise RecordMappingError(f"expected RawLog, got {type(raw).__name__}")
        return Log(
            block_number=raw.block_number,
            block_timestamp=timestamp_ms,
            transaction_hash=raw.transaction_hash,
            log_index=raw.log_index,
            address=raw.address,
            topics=tuple(t for t in raw.topics if t is not None),
            data=raw.data,
        )


LOGS = LogKind()
