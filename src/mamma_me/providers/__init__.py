"""Advisory providers for mamma-me."""

from mamma_me.providers.base import BaseAdvisoryProvider
from mamma_me.providers.gemini import GeminiAdvisoryProvider
from mamma_me.providers.http import HttpAdvisoryProvider

__all__ = ["BaseAdvisoryProvider", "GeminiAdvisoryProvider", "HttpAdvisoryProvider"]
