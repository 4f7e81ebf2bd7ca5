"""Per-batch join of records onto their block timestamps."""

from __future__ import annotations

from collections.abc import Iterable

from chainpage.core.models import Block


class BlockTimestamps:
    """Block number -> timestamp lookup built from a single batch.

    Nothing is cached across batches: each batch carries every block its
    records reference.
    """

    __slots__ = ("_by_number",)

    def __init__(self, blocks: Iterable[Block]) -> None:
        self._by_number: dict[int, int] = {}
        for b in blocks:
            # first occurrence wins, like a linear scan
            self._by_number.setdefault(b.number, b.timestamp)

    def millis(self, block_number: int) -> int:
        """Return the block timestamp in milliseconds, or 0 if the block is absent."""
        return 1000 * (self._by_number.get(block_number) or 0)

    def __len__(self) -> int:
        return len(self._by_number)
