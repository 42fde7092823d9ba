"""Loading and aggregation of the food-safety dataset."""

from mamma_me.dataset.aggregate import FoodColumns, aggregate, parse_foods, parse_synonyms
from mamma_me.dataset.parsing import normalize_verdict, parse_flag, parse_reliability
from mamma_me.dataset.repository import Dataset, DatasetConfig, DatasetStore

__all__ = [
    "Dataset",
    "DatasetConfig",
    "DatasetStore",
    "FoodColumns",
    "aggregate",
    "normalize_verdict",
    "parse_flag",
    "parse_foods",
    "parse_reliability",
    "parse_synonyms",
]
