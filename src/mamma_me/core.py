"""Core entry points: dataset-backed search and the advisory fallback."""

import logging
import os

from mamma_me.dataset.repository import DatasetConfig, DatasetStore
from mamma_me.exceptions import AuthenticationError, MammaMeError, RateLimitError
from mamma_me.providers.base import BaseAdvisoryProvider
from mamma_me.providers.http import HttpStatusError
from mamma_me.schema import AdvisoryResult
from mamma_me.search.engine import SearchConfig, SearchEngine

logger = logging.getLogger(__name__)

STATUS_ERROR_TEXT = "Could not fetch AI response."


def open_engine(
    dataset_config: DatasetConfig | None = None,
    search_config: SearchConfig | None = None,
) -> SearchEngine:
    """Load the dataset synchronously and return a ready SearchEngine.

    Raises:
        DatasetLoadError: If the food or synonym data cannot be loaded.
    """
    store = DatasetStore(dataset_config or DatasetConfig.from_env())
    store.load_blocking()
    return SearchEngine(store, search_config)


def _build_gemini_provider(api_key: str | None) -> BaseAdvisoryProvider:
    from mamma_me.providers.gemini import GeminiAdvisoryProvider

    return GeminiAdvisoryProvider(api_key=api_key)


def _build_http_provider() -> BaseAdvisoryProvider:
    from mamma_me.providers.http import HttpAdvisoryProvider

    return HttpAdvisoryProvider()


def _select_provider(provider: str | None, api_key: str | None) -> BaseAdvisoryProvider:
    provider_name = (provider or os.getenv("MAMMA_ME_ADVISORY_PROVIDER", "http")).strip().lower()
    if provider_name in {"gemini", "llm"}:
        return _build_gemini_provider(api_key)
    if provider_name in {"http", "fallback"}:
        return _build_http_provider()
    raise ValueError(f"Unsupported provider: {provider_name}")


def request_advisory(
    query: str,
    *,
    api_key: str | None = None,
    provider: str | BaseAdvisoryProvider | None = None,
) -> AdvisoryResult:
    """Ask an advisory provider to explain a food query.

    Never raises: the returned result carries either the advisory text or a
    user-visible message explaining what went wrong.

    Args:
        query: Free-text food query. Blank queries are rejected.
        api_key: Gemini API key. Falls back to GEMINI_API_KEY env var.
        provider: Provider instance or name (`http` or `gemini`). Defaults to
            `MAMMA_ME_ADVISORY_PROVIDER` env var, then `http`.

    Returns:
        AdvisoryResult with `ok` set when text was produced.
    """
    trimmed = query.strip()
    if not trimmed:
        return AdvisoryResult(query=query, ok=False, text="Please enter a food name.")

    provider_name = provider.name if isinstance(provider, BaseAdvisoryProvider) else provider
    try:
        if isinstance(provider, BaseAdvisoryProvider):
            engine = provider
        else:
            engine = _select_provider(provider, api_key)
        text = engine.advise(trimmed)
    except HttpStatusError as e:
        logger.warning("advisory endpoint returned %s for %r", e.status, trimmed)
        return AdvisoryResult(query=trimmed, ok=False, text=STATUS_ERROR_TEXT, provider=provider_name)
    except (AuthenticationError, RateLimitError) as e:
        logger.warning("advisory unavailable: %s", e)
        return AdvisoryResult(query=trimmed, ok=False, text=f"Error: {e}", provider=provider_name)
    except (MammaMeError, ValueError) as e:
        logger.warning("advisory request failed: %s", e)
        return AdvisoryResult(query=trimmed, ok=False, text=f"Connection Error: {e}", provider=provider_name)
    except Exception as e:
        logger.exception("advisory provider failed unexpectedly")
        return AdvisoryResult(query=trimmed, ok=False, text=f"Connection Error: {e}", provider=provider_name)

    return AdvisoryResult(query=trimmed, ok=True, text=text, provider=engine.name)
