"""Record kinds served by the paging engine."""

from chainpage.kinds.logs import LOGS, LogKind
from chainpage.kinds.transactions import TRANSACTIONS, TransactionKind

KINDS = {k.name: k for k in (TRANSACTIONS, LOGS)}

__all__ = ["KINDS", "LOGS", "LogKind", "TRANSACTIONS", "TransactionKind"]
