"""Group raw food rows into per-food summaries and parse the synonym table."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from mamma_me.dataset.parsing import normalize_verdict, parse_csv, parse_csv_records, parse_flag, parse_reliability
from mamma_me.exceptions import DatasetLoadError
from mamma_me.schema import FoodSummary, SourceEntry, verdict_rank

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FoodColumns:
    """Column names of the food CSV."""

    food: str = "food_kr"
    reliability: str = "source_reliability"
    source: str = "source_name"
    url: str = "rule_source"
    has_info: str = "임산부_정보유무"
    verdict: str = "임산부_주의"


DEFAULT_COLUMNS = FoodColumns()


def row_to_entry(row: Mapping[str, str], columns: FoodColumns = DEFAULT_COLUMNS) -> SourceEntry | None:
    """Build a SourceEntry from a raw row, or None if the row carries no usable verdict."""
    if not parse_flag(row.get(columns.has_info)):
        return None
    raw_verdict = row.get(columns.verdict)
    verdict = normalize_verdict(raw_verdict)
    if verdict is None:
        return None
    return SourceEntry(
        source_name=row.get(columns.source) or "",
        verdict=verdict,
        reliability=parse_reliability(row.get(columns.reliability)),
        note=raw_verdict,
        url=row.get(columns.url) or None,
    )


def dedupe_key(entry: SourceEntry) -> str:
    key = entry.url if entry.url and entry.url.strip() else entry.source_name
    return key.strip()


def dedupe_entries(entries: Iterable[SourceEntry]) -> list[SourceEntry]:
    """Keep one entry per source: the most severe verdict, then the most reliable."""
    best: dict[str, SourceEntry] = {}
    for entry in entries:
        key = dedupe_key(entry)
        current = best.get(key)
        if current is None or _severity(entry) > _severity(current):
            best[key] = entry
    return list(best.values())


def _severity(entry: SourceEntry) -> tuple[int, float]:
    return verdict_rank(entry.verdict), entry.reliability


def aggregate(
    rows: Iterable[Mapping[str, str]],
    columns: FoodColumns = DEFAULT_COLUMNS,
) -> list[FoodSummary]:
    """Turn raw food rows into summaries sorted by name."""
    grouped: dict[str, list[Mapping[str, str]]] = {}
    for row in rows:
        name = (row.get(columns.food) or "").strip()
        if not name:
            continue
        grouped.setdefault(name, []).append(row)

    summaries: list[FoodSummary] = []
    dropped = 0
    for name, items in grouped.items():
        entries = []
        for row in items:
            entry = row_to_entry(row, columns)
            if entry is None:
                dropped += 1
                continue
            entries.append(entry)

        deduped = dedupe_entries(entries)
        deduped.sort(key=lambda entry: entry.reliability, reverse=True)
        summaries.append(FoodSummary(name=name, entries=tuple(deduped)))

    if dropped:
        logger.debug("dropped %d food rows without a usable verdict", dropped)
    summaries.sort(key=lambda summary: summary.name)
    return summaries


def parse_foods(text: str, columns: FoodColumns = DEFAULT_COLUMNS) -> list[FoodSummary]:
    rows = parse_csv(text)
    if rows and columns.food not in rows[0]:
        raise DatasetLoadError(f"Food CSV is missing the '{columns.food}' column")
    return aggregate(rows, columns)


def parse_synonyms(text: str) -> dict[str, list[str]]:
    """Parse a ``key,aliases`` CSV where aliases are ``|``-delimited."""
    records = parse_csv_records(text)
    if not records:
        return {}

    header = records[0]
    if "key" not in header or "aliases" not in header:
        logger.warning("synonym table header lacks key/aliases columns: %s", header)
        return {}
    key_idx = header.index("key")
    alias_idx = header.index("aliases")

    table: dict[str, list[str]] = {}
    for cells in records[1:]:
        if len(cells) <= max(key_idx, alias_idx):
            continue
        key = cells[key_idx]
        if not key:
            continue
        aliases = [alias.strip() for alias in cells[alias_idx].strip('"').split("|")]
        table[key] = [alias for alias in aliases if alias and alias != key]
    return table
