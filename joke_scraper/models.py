from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class JokeRecord:
    title: str
    body: str
    footer: str


@dataclass(frozen=True)
class Success:
    page_id: int
    record: JokeRecord
    latency_ms: int = 0


@dataclass(frozen=True)
class SoftFailure:
    """The page loaded but lacked the expected structure (no visible joke)."""

    page_id: int
    reason: str
    latency_ms: int = 0


@dataclass(frozen=True)
class HardFailure:
    """Transport or protocol error unrelated to content absence."""

    page_id: int
    reason: str
    latency_ms: int = 0


ExtractionOutcome = Union[Success, SoftFailure, HardFailure]


@dataclass
class BatchState:
    offset: int = 0
    consecutive_soft_failures: int = 0
    consecutive_hard_failures: int = 0


@dataclass(frozen=True)
class ScrapeConfig:
    output: str
    batch_size: int = 50
    failure_threshold: int = 1500
    delay_secs: float = 0.1
    length_limit: Optional[int] = None
    resume: Optional[int] = None
    timeout: float = 20.0
    hard_failure_limit: Optional[int] = None

    def __post_init__(self) -> None:
        if self.batch_size < 1:
            raise ValueError("batch_size must be a positive integer")
        if self.failure_threshold < 1:
            raise ValueError("failure_threshold must be a positive integer")
        if self.delay_secs < 0:
            raise ValueError("delay_secs must not be negative")
        if self.length_limit is not None and self.length_limit < 0:
            raise ValueError("length_limit must not be negative")
        if self.resume is not None and self.resume < 1:
            raise ValueError("resume must be a positive integer")
        if self.hard_failure_limit is not None and self.hard_failure_limit < 1:
            raise ValueError("hard_failure_limit must be a positive integer")
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")


@dataclass(frozen=True)
class RunSnapshot:
    offset: int
    total_pages: int
    success_count: int
    soft_failure_count: int
    hard_failure_count: int
    filtered_count: int
    written_count: int
    consecutive_soft_failures: int
    avg_latency_ms: float
    timestamp: float
