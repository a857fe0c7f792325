"""
Async client for the Gemini generative-language REST API.

Two calls, both authenticated with the API key as a ``key`` query parameter:
- ``countTokens``      → total token count of a prompt
- ``generateContent``  → candidate answers for a prompt

No retries and no streaming; responses are buffered whole.
Non-2xx responses are parsed for the ``{"error": {...}}`` envelope and
surfaced as ``GeminiAPIError``.
"""

from __future__ import annotations

import logging
from typing import TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from error_assistant.models import (
    ContentsBody,
    CountTokensResponse,
    GeminiErrorEnvelope,
    GenerateContentResponse,
)
from error_assistant.settings import Settings

logger = logging.getLogger("error_assistant.gemini_client")

M = TypeVar("M", bound=BaseModel)


# ── Custom exceptions ──────────────────────────────────────────
class GeminiError(Exception):
    """Base for Gemini-related errors."""


class GeminiTransportError(GeminiError):
    """Network failure, DNS failure or timeout reaching the API."""


class GeminiDecodeError(GeminiError):
    """Response body is not JSON or does not match the expected schema."""


class GeminiAPIError(GeminiError):
    """Non-2xx response from the API."""

    def __init__(self, http_status: int, code: int, status: str, message: str):
        super().__init__(f"Gemini API error {code} {status}: {message}")
        self.http_status = http_status
        self.code = code
        self.status = status
        self.message = message


def _api_error(response: httpx.Response) -> GeminiAPIError:
    """Build a ``GeminiAPIError`` from a non-2xx response."""
    try:
        detail = GeminiErrorEnvelope.model_validate_json(response.content).error
    except ValidationError:
        # no envelope (e.g. a proxy error page); report what we got
        return GeminiAPIError(
            http_status=response.status_code,
            code=response.status_code,
            status=response.reason_phrase or "UNKNOWN",
            message=response.text[:500],
        )
    return GeminiAPIError(
        http_status=response.status_code,
        code=detail.code,
        status=detail.status,
        message=detail.message,
    )


# ── Client ──────────────────────────────────────────────────────
class GeminiClient:
    """Async Gemini REST API wrapper."""

    def __init__(self, settings: Settings, client: httpx.AsyncClient) -> None:
        self._api_key = settings.api_key
        self._model_url = (
            f"{settings.gemini_base_url.rstrip('/')}/{settings.gemini_api_version}"
            f"/models/{settings.gemini_model}"
        )
        self._client = client

    async def _post(self, method: str, prompt: str, schema: type[M]) -> M:
        """POST the prompt to ``models/{model}:{method}`` and decode into ``schema``."""
        body = ContentsBody.from_prompt(prompt)
        try:
            resp = await self._client.post(
                f"{self._model_url}:{method}",
                params={"key": self._api_key},
                json=body.model_dump(),
            )
        except httpx.HTTPError as exc:
            raise GeminiTransportError(f"{method} request failed: {exc}") from exc

        if resp.is_error:
            raise _api_error(resp)

        try:
            return schema.model_validate_json(resp.content)
        except ValidationError as exc:
            raise GeminiDecodeError(
                f"{method} returned an unexpected body: {exc.error_count()} validation error(s)"
            ) from exc

    async def count_tokens(self, prompt: str) -> int:
        """Return the total token count of ``prompt``."""
        result = await self._post("countTokens", prompt, CountTokensResponse)
        logger.debug("countTokens → %d", result.total_tokens)
        return result.total_tokens

    async def generate_content(self, prompt: str) -> GenerateContentResponse:
        """Generate candidate answers for ``prompt``."""
        result = await self._post("generateContent", prompt, GenerateContentResponse)
        logger.debug("generateContent → %d candidate(s)", len(result.candidates))
        return result
