"""Gemini advisory provider implementation."""

import os

from google import genai
from google.genai import types

from mamma_me.exceptions import AdvisoryError, AuthenticationError, RateLimitError
from mamma_me.providers.base import BaseAdvisoryProvider

ADVISORY_PROMPT = """You are helping a pregnant user decide whether a food is safe to eat.

Food or question: {query}

Answer in the same language as the question (Korean if it is Korean).
- Start with a one-line verdict: safe, conditional, caution, or avoid.
- Give the main reasons in two or three short bullet points.
- Mention portion or preparation conditions when they matter.
- Do not invent sources. End by recommending a professional consultation."""


class GeminiAdvisoryProvider(BaseAdvisoryProvider):
    """Gemini text generation provider."""

    name = "gemini"

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "gemini-2.0-flash",
        *,
        client=None,
    ):
        """Initialize Gemini provider.

        Args:
            api_key: Gemini API key. Falls back to GEMINI_API_KEY env var.
            model: Model name to use.
            client: Pre-built genai client; skips the API key lookup.

        Raises:
            AuthenticationError: If no API key is provided or found.
        """
        self.model = model
        if client is not None:
            self.api_key = api_key
            self.client = client
            return

        self.api_key = api_key or os.environ.get("GEMINI_API_KEY")
        if not self.api_key:
            raise AuthenticationError(
                "No API key provided. Set GEMINI_API_KEY environment variable "
                "or pass api_key parameter."
            )
        self.client = genai.Client(api_key=self.api_key)

    def advise(self, query: str) -> str:
        """Ask Gemini for a pregnancy food-safety explanation.

        Raises:
            RateLimitError: If API rate limit is exceeded
            AuthenticationError: If API key is invalid
            AdvisoryError: If the response is empty or the call fails
        """
        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=ADVISORY_PROMPT.format(query=query),
                config=types.GenerateContentConfig(temperature=0.2),
            )
        except genai.errors.ClientError as e:
            if "rate" in str(e).lower() or "quota" in str(e).lower():
                raise RateLimitError(f"API rate limit exceeded: {e}") from e
            if "auth" in str(e).lower() or "key" in str(e).lower():
                raise AuthenticationError(f"Invalid API key: {e}") from e
            raise AdvisoryError(f"Advisory request failed: {e}") from e
        except Exception as e:
            raise AdvisoryError(f"Advisory request failed: {e}") from e

        text = (response.text or "").strip()
        if not text:
            raise AdvisoryError("Advisory response was empty")
        return text
