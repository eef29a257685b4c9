from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Iterable, List

from .models import ExtractionOutcome


class BatchController:
    """Runs fixed-size batches of page extractions on a bounded thread pool.

    run_batch() is a barrier: it returns only after every submitted call has
    finished, with outcomes in submission order rather than completion order.
    """

    def __init__(self, max_workers: int) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be a positive integer")
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="page")
        self._running = False

    def start(self) -> None:
        self._running = True

    def stop(self, wait: bool = True) -> None:
        self._running = False
        self._executor.shutdown(wait=wait, cancel_futures=False)

    def __enter__(self) -> "BatchController":
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop(wait=True)

    def run_batch(
        self,
        fn: Callable[[int], ExtractionOutcome],
        page_ids: Iterable[int],
    ) -> List[ExtractionOutcome]:
        """Submit fn(page_id) for every id and wait for all of them."""
        if not self._running:
            raise RuntimeError("controller is not running")
        futures: List[Future] = [self._executor.submit(fn, page_id) for page_id in page_ids]
        return [fut.result() for fut in futures]
