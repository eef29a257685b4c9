"""Tests for the command line entry point."""

import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from unittest.mock import patch

import main
from joke_scraper.models import JokeRecord
from joke_scraper.storage import CsvStorage


class TestBuildParser(unittest.TestCase):

    def test_scrape_defaults(self):
        args = main.build_parser().parse_args(["scrape"])
        self.assertEqual(args.output, "wocka.csv")
        self.assertEqual(args.tasks, 50)
        self.assertEqual(args.failure_threshold, 1500)
        self.assertIsNone(args.resume)
        self.assertIsNone(args.length_limit)

    def test_scrape_short_flags(self):
        args = main.build_parser().parse_args(["scrape", "-o", "x.csv", "-t", "10", "-r", "500", "-l", "280"])
        self.assertEqual((args.output, args.tasks, args.resume, args.length_limit), ("x.csv", 10, 500, 280))

    def test_rejects_zero_tasks(self):
        with self.assertRaises(SystemExit), redirect_stdout(io.StringIO()), patch("sys.stderr", io.StringIO()):
            main.build_parser().parse_args(["scrape", "-t", "0"])


class TestMain(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.csv_path = os.path.join(self._tmp.name, "jokes.csv")
        with CsvStorage(self.csv_path) as storage:
            storage.write(JokeRecord(title="t", body="b", footer="f"))

    def tearDown(self):
        self._tmp.cleanup()

    def test_count_command(self):
        out = io.StringIO()
        with redirect_stdout(out):
            code = main.main(["count", self.csv_path])
        self.assertEqual(code, 0)
        self.assertIn("has 1 jokes.", out.getvalue())

    def test_json_command(self):
        json_path = os.path.join(self._tmp.name, "jokes.json")
        with redirect_stdout(io.StringIO()):
            code = main.main(["json", self.csv_path, "-o", json_path])
        self.assertEqual(code, 0)
        self.assertTrue(os.path.exists(json_path))

    def test_count_missing_file(self):
        err = io.StringIO()
        with patch("sys.stderr", err):
            code = main.main(["count", os.path.join(self._tmp.name, "nope.csv")])
        self.assertEqual(code, 1)
        self.assertIn("FATAL", err.getvalue())

    def test_json_missing_file(self):
        with patch("sys.stderr", io.StringIO()):
            code = main.main(["json", os.path.join(self._tmp.name, "nope.csv"), "-o", os.path.join(self._tmp.name, "o.json")])
        self.assertEqual(code, 1)

    def test_scrape_rejects_zero_timeout(self):
        with self.assertRaises(SystemExit), patch("sys.stderr", io.StringIO()):
            main.main(["scrape", "--timeout", "0"])

    @patch("main.run_scrape")
    def test_scrape_builds_config(self, mock_run):
        main.main(["scrape", "-o", self.csv_path, "-t", "5", "--hard-failure-limit", "20"])
        config = mock_run.call_args[0][0]
        self.assertEqual(config.batch_size, 5)
        self.assertEqual(config.hard_failure_limit, 20)
        self.assertEqual(config.output, self.csv_path)


if __name__ == "__main__":
    unittest.main()
