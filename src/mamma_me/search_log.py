"""Best-effort search-term logging to PostgreSQL."""

from __future__ import annotations

import asyncio
import logging
import os
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone

import psycopg

from mamma_me.debounce import Debouncer, min_length

logger = logging.getLogger(__name__)

MIN_TERM_LENGTH = 2

_long_enough = min_length(MIN_TERM_LENGTH)


def _parse_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class SearchLoggingConfig:
    enabled: bool = False
    database_url: str | None = None
    table: str = "search_logs"
    debounce_sec: float = 0.4

    @classmethod
    def from_env(cls) -> "SearchLoggingConfig":
        debounce_raw = os.getenv("SEARCH_LOG_DEBOUNCE_SEC")
        try:
            debounce_sec = float(debounce_raw) if debounce_raw else 0.4
        except ValueError:
            debounce_sec = 0.4
        return cls(
            enabled=_parse_bool(os.getenv("SAVE_SEARCH_LOG"), False),
            database_url=os.getenv("SEARCH_LOG_DATABASE_URL") or os.getenv("DATABASE_URL"),
            table=os.getenv("SEARCH_LOG_TABLE", "search_logs"),
            debounce_sec=max(0.0, debounce_sec),
        )


class SearchLogger:
    def __init__(self, config: SearchLoggingConfig):
        self.config = config
        self._db_ready = False

    def should_log(self, term: str) -> bool:
        return (
            self.config.enabled
            and bool(self.config.database_url)
            and _long_enough(term)
        )

    def log_search(self, term: str, *, result_count: int | None = None, strong_match: bool | None = None) -> None:
        if not self.should_log(term):
            return
        self._insert_row(
            {
                "request_id": str(uuid.uuid4()),
                "created_at": _utc_now_iso(),
                "search_term": term.strip(),
                "result_count": result_count,
                "strong_match": strong_match,
            }
        )

    def _insert_row(self, row: dict) -> None:
        table = self.config.table
        create_sql = f"""
            create table if not exists {table} (
              id bigserial primary key,
              request_id text not null unique,
              created_at timestamptz not null default now(),
              search_term text not null,
              result_count integer null,
              strong_match boolean null
            )
        """
        insert_sql = f"""
            insert into {table} (request_id, created_at, search_term, result_count, strong_match)
            values (%s, %s, %s, %s, %s)
            on conflict (request_id) do nothing
        """
        try:
            with psycopg.connect(self.config.database_url) as conn:
                with conn.cursor() as cur:
                    if not self._db_ready:
                        cur.execute(create_sql)
                    cur.execute(
                        insert_sql,
                        (
                            row.get("request_id"),
                            row.get("created_at"),
                            row.get("search_term"),
                            row.get("result_count"),
                            row.get("strong_match"),
                        ),
                    )
                conn.commit()
            self._db_ready = True
        except psycopg.Error:
            # Logging should never break search.
            logger.warning("search log insert failed", exc_info=True)


class DebouncedSearchLog:
    """Logs only the last search of a typing burst.

    Search-as-you-type clients send one request per keystroke; waiting for
    ``debounce_sec`` of silence keeps the partial terms out of the table.
    Must be used from a running event loop.
    """

    def __init__(self, search_logger: SearchLogger):
        self.search_logger = search_logger
        self._debouncer: Debouncer[tuple[str, int | None, bool | None]] = Debouncer(
            search_logger.config.debounce_sec,
            self._write,
            accept=lambda item: search_logger.should_log(item[0]),
        )

    def submit(self, term: str, *, result_count: int | None = None, strong_match: bool | None = None) -> None:
        self._debouncer.submit((term, result_count, strong_match))

    async def flush(self) -> None:
        await self._debouncer.flush()

    async def _write(self, item: tuple[str, int | None, bool | None]) -> None:
        term, result_count, strong_match = item
        await asyncio.to_thread(
            self.search_logger.log_search,
            term,
            result_count=result_count,
            strong_match=strong_match,
        )
