"""One-shot loading of the food and synonym datasets."""

from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass, field
from importlib.resources import files
from pathlib import Path
from typing import Literal
from urllib import error, request

from mamma_me.dataset.aggregate import DEFAULT_COLUMNS, FoodColumns, parse_foods, parse_synonyms
from mamma_me.exceptions import DatasetLoadError, DatasetNotReadyError
from mamma_me.schema import FoodSummary

logger = logging.getLogger(__name__)

LoadStatus = Literal["pending", "loading", "ready", "error"]

PACKAGED_FOODS = "package:foods.csv"
PACKAGED_SYNONYMS = "package:synonyms.csv"


@dataclass(frozen=True)
class DatasetConfig:
    foods_source: str = PACKAGED_FOODS
    synonyms_source: str | None = PACKAGED_SYNONYMS
    timeout_sec: float = 10.0
    columns: FoodColumns = field(default_factory=lambda: DEFAULT_COLUMNS)

    @classmethod
    def from_env(cls) -> "DatasetConfig":
        timeout_raw = os.getenv("MAMMA_ME_DATASET_TIMEOUT_SEC")
        try:
            timeout_sec = float(timeout_raw) if timeout_raw else 10.0
        except ValueError:
            timeout_sec = 10.0
        synonyms = os.getenv("MAMMA_ME_SYNONYMS_PATH", PACKAGED_SYNONYMS).strip()
        return cls(
            foods_source=os.getenv("MAMMA_ME_FOODS_PATH", PACKAGED_FOODS).strip() or PACKAGED_FOODS,
            synonyms_source=synonyms or None,
            timeout_sec=timeout_sec,
        )


def read_source(source: str, *, timeout_sec: float = 10.0) -> str:
    """Read text from a local path, an http(s) URL or packaged data (``package:<name>``)."""
    if source.startswith("package:"):
        name = source.removeprefix("package:")
        try:
            return files("mamma_me.data").joinpath(name).read_text(encoding="utf-8")
        except (FileNotFoundError, OSError) as e:
            raise DatasetLoadError(f"Packaged dataset not found: {name}") from e

    if source.startswith(("http://", "https://")):
        req = request.Request(source, headers={"Accept": "text/csv"}, method="GET")
        try:
            with request.urlopen(req, timeout=timeout_sec) as response:
                return response.read().decode("utf-8-sig")
        except (error.URLError, TimeoutError, ValueError, UnicodeDecodeError) as e:
            raise DatasetLoadError(f"Failed to fetch dataset {source}: {e}") from e

    path = Path(source)
    if not path.exists():
        raise DatasetLoadError(f"Dataset file not found: {path}")
    try:
        return path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise DatasetLoadError(f"Failed to read dataset {path}: {e}") from e


@dataclass(frozen=True)
class Dataset:
    summaries: list[FoodSummary]
    synonyms: dict[str, list[str]]
    version: int


class DatasetStore:
    """Holds the loaded dataset and reports whether it is usable yet.

    ``load()`` is a one-shot asynchronous fetch. Until it succeeds, ``get()``
    raises instead of exposing partial data; a failed load stays failed
    until the caller explicitly loads again.
    """

    def __init__(self, config: DatasetConfig | None = None):
        self.config = config or DatasetConfig()
        self.status: LoadStatus = "pending"
        self.error: str | None = None
        self._dataset: Dataset | None = None
        self._version = 0

    @property
    def ready(self) -> bool:
        return self.status == "ready"

    async def load(self) -> Dataset:
        self.status = "loading"
        self.error = None
        self._dataset = None
        try:
            dataset = await asyncio.to_thread(self._load_sync)
        except DatasetLoadError as e:
            self.status = "error"
            self.error = str(e)
            logger.error("dataset load failed: %s", e)
            raise
        except Exception as e:
            self.status = "error"
            self.error = str(e) or "Failed to load data"
            logger.exception("dataset load failed")
            raise DatasetLoadError(self.error) from e

        self._dataset = dataset
        self.status = "ready"
        logger.info(
            "dataset v%d ready: %d foods, %d synonym keys",
            dataset.version,
            len(dataset.summaries),
            len(dataset.synonyms),
        )
        return dataset

    def load_blocking(self) -> Dataset:
        """Run ``load()`` to completion from synchronous code."""
        return asyncio.run(self.load())

    def get(self) -> Dataset:
        if self.status == "error":
            raise DatasetLoadError(self.error or "Failed to load data")
        if self._dataset is None:
            raise DatasetNotReadyError("Dataset is still loading")
        return self._dataset

    def _load_sync(self) -> Dataset:
        foods_text = read_source(self.config.foods_source, timeout_sec=self.config.timeout_sec)
        summaries = parse_foods(foods_text, self.config.columns)

        synonyms: dict[str, list[str]] = {}
        if self.config.synonyms_source:
            synonyms_text = read_source(self.config.synonyms_source, timeout_sec=self.config.timeout_sec)
            synonyms = parse_synonyms(synonyms_text)

        self._version += 1
        return Dataset(summaries=summaries, synonyms=synonyms, version=self._version)
