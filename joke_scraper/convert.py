from __future__ import annotations

import csv
import json
from typing import Dict, List


def read_records(path: str) -> List[Dict[str, str]]:
    """Load every row of a joke CSV as a dict keyed by the header."""
    with open(path, "r", encoding="utf-8", newline="") as f:
        return list(csv.DictReader(f))


def count_rows(path: str) -> int:
    """Count data rows in a CSV file, header excluded."""
    with open(path, "r", encoding="utf-8", newline="") as f:
        reader = csv.reader(f)
        next(reader, None)
        return sum(1 for _ in reader)


def csv_to_json(input_path: str, output_path: str) -> int:
    """Write the CSV rows as a pretty-printed JSON array. Returns the row count."""
    records = read_records(input_path)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(records, f, ensure_ascii=False, indent=2)
        f.write("\n")
    return len(records)
