from __future__ import annotations

import argparse
import sys
from typing import Optional

from joke_scraper.convert import count_rows, csv_to_json
from joke_scraper.dispatcher import Dispatcher
from joke_scraper.metrics import MetricsCollector
from joke_scraper.models import ScrapeConfig
from joke_scraper.scrapers import DEFAULT_URL_TEMPLATE, PageSelectors, WockaScraper
from joke_scraper.storage import CsvStorage, StorageError


DEFAULT_CSV_PATH = "wocka.csv"
DEFAULT_JSON_PATH = "wocka.json"
DEFAULT_BATCH_SIZE = 50
DEFAULT_FAILURE_THRESHOLD = 1500
DEFAULT_DELAY_SECS = 0.1
DEFAULT_TIMEOUT_SECS = 20.0


def _positive_int(value: str) -> int:
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return n


def _non_negative_int(value: str) -> int:
    n = int(value)
    if n < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {value}")
    return n


def run_scrape(config: ScrapeConfig, url_template: str = DEFAULT_URL_TEMPLATE) -> None:
    metrics = MetricsCollector()
    # Compiled once and shared read-only by every worker thread.
    selectors = PageSelectors.compile()
    scraper = WockaScraper(
        selectors=selectors,
        url_template=url_template,
        timeout=config.timeout,
        metrics=metrics,
    )

    with CsvStorage(config.output, append=config.resume is not None) as storage:
        dispatcher = Dispatcher(scraper.run, storage, config, metrics=metrics)
        state = dispatcher.run()

    snap = metrics.snapshot(state.offset, state.consecutive_soft_failures)
    print(
        f"\nDONE: written={snap.written_count} filtered={snap.filtered_count} "
        f"soft_fail={snap.soft_failure_count} hard_fail={snap.hard_failure_count} "
        f"total={snap.total_pages}"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Scrape jokes from wocka.com")
    sub = parser.add_subparsers(dest="command", required=True)

    scrape = sub.add_parser("scrape", help="Scrape jokes from wocka.com")
    scrape.add_argument("-o", "--output", default=DEFAULT_CSV_PATH, metavar="FILE", help="Output CSV file")
    scrape.add_argument(
        "-t", "--tasks", type=_positive_int, default=DEFAULT_BATCH_SIZE,
        help="Pages fetched concurrently per batch. Large batches may lead to an IP block.",
    )
    scrape.add_argument("-r", "--resume", type=_positive_int, default=None, help="Resume after this page id")
    scrape.add_argument(
        "-l", "--length-limit", type=_non_negative_int, default=None, metavar="COUNT",
        help="Skip jokes whose body is longer than COUNT characters",
    )
    scrape.add_argument(
        "--failure-threshold", type=_positive_int, default=DEFAULT_FAILURE_THRESHOLD,
        help="Stop after this many pages in a row without a joke",
    )
    scrape.add_argument("--delay", type=float, default=DEFAULT_DELAY_SECS, help="Seconds to sleep between batches")
    scrape.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT_SECS, help="Per-request timeout in seconds")
    scrape.add_argument(
        "--hard-failure-limit", type=_positive_int, default=None,
        help="Also stop after this many network errors in a row (disabled by default)",
    )

    count = sub.add_parser("count", help="Count rows/jokes in a CSV file")
    count.add_argument("input", nargs="?", default=DEFAULT_CSV_PATH, metavar="FILE")

    to_json = sub.add_parser("json", help="Convert the joke CSV to JSON")
    to_json.add_argument("input", nargs="?", default=DEFAULT_CSV_PATH, metavar="IN")
    to_json.add_argument("-o", "--output", default=DEFAULT_JSON_PATH, metavar="OUT", help="Output JSON file")

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "scrape":
        try:
            config = ScrapeConfig(
                output=args.output,
                batch_size=args.tasks,
                failure_threshold=args.failure_threshold,
                delay_secs=args.delay,
                length_limit=args.length_limit,
                resume=args.resume,
                timeout=args.timeout,
                hard_failure_limit=args.hard_failure_limit,
            )
        except ValueError as exc:
            parser.error(str(exc))
        try:
            run_scrape(config)
        except StorageError as exc:
            print(f"FATAL: {exc}", file=sys.stderr)
            return 1
        return 0

    try:
        if args.command == "count":
            rows = count_rows(args.input)
            print(f'"{args.input}" has {rows} jokes.')
            return 0
        rows = csv_to_json(args.input, args.output)
    except OSError as exc:
        print(f"FATAL: {exc}", file=sys.stderr)
        return 1
    print(f"wrote {rows} jokes to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
