from __future__ import annotations

from typing import List

from gainscalc.model.types import UnmatchedSell


class EventRecorder:
    """Collect unmatched-sell events for one matching run."""

    def __init__(self) -> None:
        self._unmatched: List[UnmatchedSell] = []

    def record_unmatched(self, event: UnmatchedSell) -> None:
        self._unmatched.append(event)

    @property
    def unmatched_sells(self) -> list[UnmatchedSell]:
        return list(self._unmatched)

    def clear(self) -> None:
        self._unmatched.clear()
