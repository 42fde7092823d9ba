"""Cell-level parsers for the food and synonym CSV files."""

from __future__ import annotations

import csv
import io

from mamma_me.schema import Verdict

MIN_RELIABILITY = 0.5
MAX_RELIABILITY = 5.0
DEFAULT_RELIABILITY = 1.0

RELIABILITY_LABELS: dict[str, float] = {
    "high": 3.0,
    "gov": 3.0,
    "medical": 3.0,
    "medium": 2.0,
    "mid": 2.0,
    "news": 2.0,
    "low": 1.0,
    "blog": 1.0,
}

TRUE_FLAGS = {"true", "1", "y", "yes", "있음"}

VERDICT_LABELS: dict[str, Verdict] = {
    "avoid": Verdict.AVOID,
    "피해야 함": Verdict.AVOID,
    "피함": Verdict.AVOID,
    "caution": Verdict.CAUTION,
    "주의": Verdict.CAUTION,
    "conditional": Verdict.CONDITIONAL,
    "조건부": Verdict.CONDITIONAL,
    "safe": Verdict.SAFE,
    "안전": Verdict.SAFE,
    "none": Verdict.SAFE,
    "없음": Verdict.SAFE,
}


def parse_csv_records(text: str) -> list[list[str]]:
    """Split CSV text into trimmed records, skipping blank lines.

    Quoted fields may contain commas and doubled quotes (``""``).
    """
    reader = csv.reader(io.StringIO(text.lstrip("\ufeff")))
    records: list[list[str]] = []
    for record in reader:
        if not any(cell.strip() for cell in record):
            continue
        records.append([cell.strip() for cell in record])
    return records


def parse_csv(text: str) -> list[dict[str, str]]:
    """Parse CSV text into header-keyed rows; missing trailing cells become ``""``."""
    records = parse_csv_records(text)
    if not records:
        return []
    header = records[0]
    rows: list[dict[str, str]] = []
    for cells in records[1:]:
        padded = cells + [""] * max(0, len(header) - len(cells))
        rows.append(dict(zip(header, padded)))
    return rows


def parse_reliability(raw: str | None) -> float:
    value = (raw or "").strip().lower()
    if not value:
        return DEFAULT_RELIABILITY
    try:
        number = float(value)
    except ValueError:
        return RELIABILITY_LABELS.get(value, DEFAULT_RELIABILITY)
    if number != number:  # NaN
        return DEFAULT_RELIABILITY
    return max(MIN_RELIABILITY, min(MAX_RELIABILITY, number))


def parse_flag(raw: str | None) -> bool:
    return (raw or "").strip().lower() in TRUE_FLAGS


def normalize_verdict(raw: str | None) -> Verdict | None:
    """Map a raw verdict label (English or Korean) to a Verdict, or None if unknown."""
    if raw is None:
        return None
    return VERDICT_LABELS.get(raw.strip().lower())
