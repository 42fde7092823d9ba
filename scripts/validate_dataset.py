"""Validate the food and synonym CSV files.

Checks:
1. The food CSV has every configured column.
2. Rows dropped at ingestion (no info flag, unknown verdict) are reported.
3. Foods left without any usable entry are listed.
4. Synonym aliases that never occur in any food name are reported.
"""

from __future__ import annotations

import argparse
import sys
from collections import Counter
from pathlib import Path

from mamma_me.dataset.aggregate import DEFAULT_COLUMNS, aggregate, parse_synonyms, row_to_entry
from mamma_me.dataset.parsing import parse_csv
from mamma_me.search.text import normalize

ROOT = Path(__file__).resolve().parent.parent
DATA_ROOT = ROOT / "src" / "mamma_me" / "data"


def fail(message: str) -> None:
    print(f"[dataset-check] ERROR: {message}")
    raise SystemExit(1)


def warn(message: str) -> None:
    print(f"[dataset-check] WARN: {message}")


def load_text(path: Path) -> str:
    if not path.exists():
        fail(f"Missing CSV file: {path}")
    return path.read_text(encoding="utf-8-sig")


def validate_columns(rows: list[dict[str, str]]) -> None:
    if not rows:
        fail("Food CSV has no data rows")
    required = [
        DEFAULT_COLUMNS.food,
        DEFAULT_COLUMNS.reliability,
        DEFAULT_COLUMNS.source,
        DEFAULT_COLUMNS.url,
        DEFAULT_COLUMNS.has_info,
        DEFAULT_COLUMNS.verdict,
    ]
    missing = [column for column in required if column not in rows[0]]
    if missing:
        fail(f"Food CSV is missing columns: {', '.join(missing)}")


def report_dropped_rows(rows: list[dict[str, str]]) -> int:
    reasons: Counter[str] = Counter()
    for row in rows:
        if not (row.get(DEFAULT_COLUMNS.food) or "").strip():
            reasons["blank food name"] += 1
        elif row_to_entry(row) is None:
            reasons[f"unusable verdict '{row.get(DEFAULT_COLUMNS.verdict, '')}'"] += 1
    for reason, count in reasons.most_common():
        warn(f"{count} row(s) dropped: {reason}")
    return sum(reasons.values())


def report_alias_misses(synonyms: dict[str, list[str]], names: list[str]) -> int:
    normalized_names = [normalize(name) for name in names]
    misses = 0
    for key, aliases in synonyms.items():
        for alias in aliases:
            n_alias = normalize(alias)
            if not any(n_alias in name for name in normalized_names):
                warn(f"alias '{alias}' of '{key}' matches no food name")
                misses += 1
    return misses


def main() -> int:
    parser = argparse.ArgumentParser(description="Validate mamma-me dataset files")
    parser.add_argument("--foods", type=Path, default=DATA_ROOT / "foods.csv")
    parser.add_argument("--synonyms", type=Path, default=DATA_ROOT / "synonyms.csv")
    parser.add_argument("--strict", action="store_true", help="Treat warnings as errors")
    args = parser.parse_args()

    rows = parse_csv(load_text(args.foods))
    validate_columns(rows)
    dropped = report_dropped_rows(rows)

    summaries = aggregate(rows)
    empty = [summary.name for summary in summaries if not summary.entries]
    for name in empty:
        warn(f"food '{name}' has no usable entries and will be hidden from results")

    synonyms = parse_synonyms(load_text(args.synonyms))
    misses = report_alias_misses(synonyms, [summary.name for summary in summaries])

    print(f"[dataset-check] {len(summaries)} foods, {len(synonyms)} synonym keys")
    if args.strict and (dropped or empty or misses):
        fail("warnings present in strict mode")
    print("[dataset-check] OK")
    return 0


if __name__ == "__main__":
    sys.exit(main())
