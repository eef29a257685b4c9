from __future__ import annotations

import csv
import os
from abc import ABC, abstractmethod
from dataclasses import asdict

from .models import JokeRecord

FIELDNAMES = ("title", "body", "footer")


class StorageError(RuntimeError):
    """A record could not be written; the output can no longer be trusted."""


class StorageBase(ABC):
    """Abstract base class for record sinks.

    Subclasses must write records in the order received and raise
    StorageError when a record cannot be persisted.
    """

    @abstractmethod
    def write(self, record: JokeRecord) -> None:
        """Persist a single record."""

    @abstractmethod
    def close(self) -> None:
        """Flush pending writes and release resources."""

    def __enter__(self) -> "StorageBase":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class CsvStorage(StorageBase):
    """Writes records as CSV rows with a fixed `title,body,footer` header.

    With append=True an existing non-empty file is extended without a second
    header; otherwise the file is truncated.
    """

    def __init__(self, path: str, append: bool = False) -> None:
        self._path = path
        resume_existing = append and os.path.exists(path) and os.path.getsize(path) > 0
        try:
            self._file = open(path, "a" if resume_existing else "w", encoding="utf-8", newline="")
        except OSError as exc:
            raise StorageError(f"cannot open {path}: {exc}") from exc
        self._writer = csv.DictWriter(self._file, fieldnames=FIELDNAMES)
        if not resume_existing:
            try:
                self._write_row(self._writer.writeheader)
            except StorageError:
                self._file.close()
                raise

    def write(self, record: JokeRecord) -> None:
        self._write_row(self._writer.writerow, asdict(record))

    def close(self) -> None:
        if not self._file.closed:
            self._file.close()

    def _write_row(self, fn, *args) -> None:
        try:
            fn(*args)
            self._file.flush()
        except (OSError, ValueError, csv.Error) as exc:
            raise StorageError(f"cannot write to {self._path}: {exc}") from exc
