"""Tests for the BasePageExtractor pipeline."""

import unittest

from joke_scraper.base import BasePageExtractor, PageStructureError
from joke_scraper.metrics import MetricsCollector
from joke_scraper.models import HardFailure, JokeRecord, SoftFailure, Success


class _StaticExtractor(BasePageExtractor):
    def __init__(self, fetch_exc=None, parse_exc=None, **kwargs):
        super().__init__(**kwargs)
        self._fetch_exc = fetch_exc
        self._parse_exc = parse_exc

    def fetch(self, page_id):
        if self._fetch_exc:
            raise self._fetch_exc
        return f"page {page_id}"

    def parse(self, response, page_id):
        if self._parse_exc:
            raise self._parse_exc
        return JokeRecord(title="t", body=response, footer=f"ID: {page_id}")


class TestBasePageExtractorValidation(unittest.TestCase):
    """Verify that validate() rejects ids outside the positive range."""

    def test_validate_raises_on_zero(self):
        with self.assertRaises(ValueError):
            _StaticExtractor().validate(0)

    def test_invalid_id_becomes_hard_failure(self):
        outcome = _StaticExtractor().run(0)
        self.assertIsInstance(outcome, HardFailure)
        self.assertTrue(outcome.reason.startswith("ValueError"))


class TestBasePageExtractorRun(unittest.TestCase):
    """Verify that run() maps every result onto exactly one outcome variant."""

    def test_success(self):
        outcome = _StaticExtractor().run(7)
        self.assertIsInstance(outcome, Success)
        self.assertEqual(outcome.page_id, 7)
        self.assertEqual(outcome.record.body, "page 7")

    def test_structure_error_is_soft_failure(self):
        outcome = _StaticExtractor(parse_exc=PageStructureError("missing title")).run(2)
        self.assertIsInstance(outcome, SoftFailure)
        self.assertEqual(outcome.reason, "missing title")

    def test_fetch_exception_is_hard_failure(self):
        outcome = _StaticExtractor(fetch_exc=ConnectionError("network down")).run(2)
        self.assertIsInstance(outcome, HardFailure)
        self.assertEqual(outcome.reason, "ConnectionError: network down")

    def test_unexpected_parse_exception_is_hard_failure(self):
        outcome = _StaticExtractor(parse_exc=KeyError("x")).run(2)
        self.assertIsInstance(outcome, HardFailure)

    def test_records_outcome_in_metrics(self):
        metrics = MetricsCollector()
        _StaticExtractor(metrics=metrics).run(1)
        _StaticExtractor(metrics=metrics, parse_exc=PageStructureError("empty body")).run(2)
        snap = metrics.snapshot(offset=2, consecutive_soft_failures=1)
        self.assertEqual(snap.success_count, 1)
        self.assertEqual(snap.soft_failure_count, 1)


if __name__ == "__main__":
    unittest.main()
