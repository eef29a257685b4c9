from __future__ import annotations

import time
from dataclasses import asdict
from threading import Lock
from typing import Dict

from .models import ExtractionOutcome, HardFailure, RunSnapshot, SoftFailure, Success


class MetricsCollector:
    """Thread-safe running totals for a scrape.

    Worker threads record outcomes as they finish; the dispatcher records
    filtered and written records and reads snapshots between batches."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._success = 0
        self._soft = 0
        self._hard = 0
        self._filtered = 0
        self._written = 0
        self._latency_total_ms = 0

    def record_outcome(self, outcome: ExtractionOutcome) -> None:
        with self._lock:
            if isinstance(outcome, Success):
                self._success += 1
            elif isinstance(outcome, SoftFailure):
                self._soft += 1
            elif isinstance(outcome, HardFailure):
                self._hard += 1
            else:
                raise TypeError(f"unknown outcome: {outcome!r}")
            self._latency_total_ms += outcome.latency_ms

    def record_filtered(self) -> None:
        with self._lock:
            self._filtered += 1

    def record_written(self) -> None:
        with self._lock:
            self._written += 1

    def snapshot(self, offset: int, consecutive_soft_failures: int) -> RunSnapshot:
        """Return the totals so far, tagged with the dispatcher's position."""
        with self._lock:
            total = self._success + self._soft + self._hard
            return RunSnapshot(
                offset=offset,
                total_pages=total,
                success_count=self._success,
                soft_failure_count=self._soft,
                hard_failure_count=self._hard,
                filtered_count=self._filtered,
                written_count=self._written,
                consecutive_soft_failures=consecutive_soft_failures,
                avg_latency_ms=(self._latency_total_ms / total) if total else 0.0,
                timestamp=time.time(),
            )

    @staticmethod
    def as_dict(snapshot: RunSnapshot) -> Dict:
        return asdict(snapshot)
