from __future__ import annotations

import time
from abc import ABC, abstractmethod
from typing import Any, Optional

from .metrics import MetricsCollector
from .models import ExtractionOutcome, HardFailure, JokeRecord, SoftFailure, Success


class PageStructureError(Exception):
    """Raised by parse() when the page lacks an expected element."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class BasePageExtractor(ABC):
    """Abstract base class defining the fetch -> parse pipeline for one page id.

    run() never raises:
    - PageStructureError from parse() becomes a SoftFailure.
    - Any other exception (transport, decoding, parser bugs) becomes a HardFailure.
    """

    def __init__(self, metrics: Optional[MetricsCollector] = None) -> None:
        self._metrics = metrics

    def run(self, page_id: int) -> ExtractionOutcome:
        start_ms = self._now_ms()
        outcome: ExtractionOutcome

        try:
            self.validate(page_id)
            response = self.fetch(page_id)
            record = self.parse(response, page_id)
            outcome = Success(page_id=page_id, record=record, latency_ms=self._now_ms() - start_ms)
        except PageStructureError as exc:
            outcome = SoftFailure(page_id=page_id, reason=exc.reason, latency_ms=self._now_ms() - start_ms)
        except Exception as exc:  # noqa: BLE001
            outcome = HardFailure(
                page_id=page_id,
                reason=f"{type(exc).__name__}: {exc}",
                latency_ms=self._now_ms() - start_ms,
            )

        if self._metrics:
            self._metrics.record_outcome(outcome)
        return outcome

    def validate(self, page_id: int) -> None:
        if page_id < 1:
            raise ValueError("page_id must be a positive integer")

    @abstractmethod
    def fetch(self, page_id: int) -> Any:
        ...

    @abstractmethod
    def parse(self, response: Any, page_id: int) -> JokeRecord:
        ...

    @staticmethod
    def _now_ms() -> int:
        return int(time.time() * 1000)
