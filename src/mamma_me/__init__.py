"""mamma-me: Pregnancy food-safety lookup over reliability-weighted sources."""

from mamma_me.advisory import AdvisoryCoordinator
from mamma_me.core import open_engine, request_advisory
from mamma_me.dataset import DatasetConfig, DatasetStore
from mamma_me.schema import AdvisoryResult, FoodSummary, SourceEntry, Verdict
from mamma_me.search import SearchEngine, SearchResult, search

__version__ = "0.1.0"

__all__ = [
    "open_engine",
    "request_advisory",
    "search",
    "AdvisoryCoordinator",
    "AdvisoryResult",
    "DatasetConfig",
    "DatasetStore",
    "FoodSummary",
    "SearchEngine",
    "SearchResult",
    "SourceEntry",
    "Verdict",
    "__version__",
]
