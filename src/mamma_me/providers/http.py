"""HTTP fallback advisory provider."""

from __future__ import annotations

import json
import os
from http.client import HTTPException
from urllib import error, request

from mamma_me.exceptions import AdvisoryError
from mamma_me.providers.base import BaseAdvisoryProvider

DEFAULT_ADVISORY_URL = "http://localhost:8080/ai/fallback"


class HttpStatusError(AdvisoryError):
    """Raised when the fallback endpoint answers with a non-2xx status."""

    def __init__(self, status: int, message: str):
        super().__init__(message)
        self.status = status


class HttpAdvisoryProvider(BaseAdvisoryProvider):
    """POSTs ``{"query": ...}`` to a fallback endpoint and reads ``text`` from the reply."""

    name = "http"

    def __init__(self, url: str | None = None, *, timeout_sec: float = 15.0):
        self.url = url or os.getenv("MAMMA_ME_ADVISORY_URL", DEFAULT_ADVISORY_URL)
        self.timeout_sec = timeout_sec

    def advise(self, query: str) -> str:
        data = json.dumps({"query": query}, ensure_ascii=False).encode("utf-8")
        req = request.Request(
            self.url,
            data=data,
            headers={"Content-Type": "application/json; charset=utf-8"},
            method="POST",
        )
        try:
            with request.urlopen(req, timeout=self.timeout_sec) as response:
                body = response.read().decode("utf-8")
        except error.HTTPError as e:
            raise HttpStatusError(e.code, f"Advisory endpoint returned {e.code}") from e
        except (error.URLError, TimeoutError, ValueError) as e:
            raise AdvisoryError(str(getattr(e, "reason", e))) from e
        except (HTTPException, OSError) as e:
            raise AdvisoryError(f"Advisory connection failed: {e}") from e

        try:
            payload = json.loads(body)
        except json.JSONDecodeError as e:
            raise AdvisoryError(f"Invalid advisory response: {e}") from e
        if not isinstance(payload, dict) or payload.get("text") is None:
            raise AdvisoryError("Advisory response has no text")
        return str(payload["text"])
