"""
Best-effort chat webhook notifications (Discord-compatible payload).

Without a configured URL every call is a no-op. Transport failures and
non-2xx responses raise ``WebhookError``; callers log it and move on.
"""

from __future__ import annotations

import logging

import httpx

from error_assistant.models import WebhookEmbed, WebhookField, WebhookMessage

logger = logging.getLogger("error_assistant.webhook_client")

# Discord rejects message content longer than this
MAX_CONTENT_CHARS = 2000

ERROR_LOG_USERNAME = "Gemini Assistant Server Error Log"
TOKEN_INFO_USERNAME = "Gemini Assistant Server Log"


class WebhookError(Exception):
    """Webhook delivery failed."""


def truncate_content(content: str) -> str:
    return content[:MAX_CONTENT_CHARS]


class WebhookClient:
    """Posts messages to a chat webhook, or does nothing when unconfigured."""

    def __init__(self, client: httpx.AsyncClient, url: str | None) -> None:
        self._client = client
        self._url = url

    @property
    def enabled(self) -> bool:
        return self._url is not None

    async def send_message(
        self,
        username: str,
        content: str,
        embeds: list[WebhookEmbed] | None = None,
    ) -> None:
        if self._url is None:
            return

        message = WebhookMessage(
            username=username,
            content=truncate_content(content),
            embeds=embeds or [],
        )
        try:
            resp = await self._client.post(self._url, json=message.model_dump())
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            raise WebhookError(f"Webhook delivery failed: {exc}") from exc
        logger.debug("Webhook message sent as %r", username)

    async def send_error_log(self, error: str) -> None:
        await self.send_message(ERROR_LOG_USERNAME, f"🚨 **ERROR** 🚨\n```{error}```")

    async def send_token_info(
        self, language: str, total_tokens: int, cleaned_error_output: str
    ) -> None:
        """Report prompt size, with the cleaned error output as the message body."""
        await self.send_message(
            TOKEN_INFO_USERNAME,
            cleaned_error_output,
            [
                WebhookEmbed(
                    fields=[
                        WebhookField(name="language", value=language),
                        WebhookField(name="tokens", value=str(total_tokens)),
                    ]
                )
            ],
        )
