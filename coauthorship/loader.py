"""Load raw bibliographic rows from CSV or JSON exports.

Rows are returned as plain dicts; field interpretation happens in
``coauthorship.records``.

Supported inputs:
- ``.csv``: header row with ``Authors``, ``Publisher``,
  ``Authors with affiliations``, ``Country`` (others ignored). A UTF-8
  byte-order mark, as written by spreadsheet exports, is tolerated.
- ``.json``: an array of objects, or ``{"records": [...]}``.
"""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path

from coauthorship.records import Record, parse_record

logger = logging.getLogger(__name__)


def load_rows(path: str | Path) -> list[dict]:
    """Read raw rows from *path*.

    Raises:
        FileNotFoundError: If *path* does not exist.
        ValueError: If the suffix is unsupported or the JSON payload is
            not a list of objects.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".csv":
        with open(path, newline="", encoding="utf-8-sig") as f:
            rows = list(csv.DictReader(f))
    elif suffix == ".json":
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        if isinstance(data, dict):
            data = data.get("records")
        if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
            raise ValueError(f"{path}: expected a JSON array of record objects")
        rows = data
    else:
        raise ValueError(f"Unsupported input format {suffix or '(none)'!r}; use .csv or .json")
    logger.info("Loaded %d records from %s", len(rows), path)
    return rows


def load_records(path: str | Path) -> list[Record]:
    """Read and parse every row in *path*."""
    return [parse_record(row) for row in load_rows(path)]
