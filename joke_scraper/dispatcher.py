from __future__ import annotations

import json
import sys
import time
from typing import Callable, Optional

from .controller import BatchController
from .filters import LengthFilter
from .metrics import MetricsCollector
from .models import BatchState, ExtractionOutcome, HardFailure, ScrapeConfig, SoftFailure, Success
from .storage import StorageBase


class Dispatcher:
    """Walks the page id space in concurrent batches until it looks exhausted.

    Each batch covers ids offset+1 .. offset+batch_size. Outcomes are handled
    in ascending id order, so the sink sees one total order over all ids.
    The run stops when more than `failure_threshold` SoftFailures have been
    seen in a row at a batch boundary; any Success resets that run.
    HardFailures are reported and leave the SoftFailure count untouched.
    """

    def __init__(
        self,
        extract: Callable[[int], ExtractionOutcome],
        sink: StorageBase,
        config: ScrapeConfig,
        metrics: Optional[MetricsCollector] = None,
        sleep: Callable[[float], None] = time.sleep,
        verbose: bool = True,
    ) -> None:
        self._extract = extract
        self._sink = sink
        self._config = config
        self._metrics = metrics or MetricsCollector()
        self._filter = LengthFilter(config.length_limit)
        self._sleep = sleep
        self._verbose = verbose

    def run(self) -> BatchState:
        """Run batches until the termination predicate fires. Returns the final state."""
        state = BatchState(offset=self._config.resume or 0)
        batch_size = self._config.batch_size
        self._say("Starting...")

        with BatchController(max_workers=batch_size) as controller:
            while True:
                page_ids = range(state.offset + 1, state.offset + batch_size + 1)
                for outcome in controller.run_batch(self._extract, page_ids):
                    self._handle(outcome, state)

                state.offset += batch_size
                self._say(f"{state.offset} Joke pages visited.")
                self._say(json.dumps(MetricsCollector.as_dict(
                    self._metrics.snapshot(state.offset, state.consecutive_soft_failures)
                ), ensure_ascii=False))

                if self.should_stop(state):
                    break
                self._sleep(self._config.delay_secs)

        return state

    def should_stop(self, state: BatchState) -> bool:
        if state.consecutive_soft_failures > self._config.failure_threshold:
            return True
        limit = self._config.hard_failure_limit
        return limit is not None and state.consecutive_hard_failures >= limit

    def _handle(self, outcome: ExtractionOutcome, state: BatchState) -> None:
        if isinstance(outcome, Success):
            state.consecutive_soft_failures = 0
            state.consecutive_hard_failures = 0
            if not self._filter.accept(outcome.record):
                self._metrics.record_filtered()
                return
            # StorageError propagates: a failed write ends the run.
            self._sink.write(outcome.record)
            self._metrics.record_written()
        elif isinstance(outcome, SoftFailure):
            state.consecutive_soft_failures += 1
            state.consecutive_hard_failures = 0
        elif isinstance(outcome, HardFailure):
            state.consecutive_hard_failures += 1
            print(f"ERROR id={outcome.page_id} reason={outcome.reason}", file=sys.stderr)
        else:
            raise TypeError(f"unknown outcome: {outcome!r}")

    def _say(self, line: str) -> None:
        if self._verbose:
            print(line)
