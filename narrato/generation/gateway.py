"""Chat-completions gateway client.

Sends a message list to an OpenAI-compatible chat-completions endpoint and
returns the first choice's text. HTTP failures surface as distinct
exception kinds so the caller can show the right message:

    429 -> RateLimitedError
    402 -> QuotaExhaustedError
    anything else -> GatewayError
"""

import logging
from collections.abc import Sequence
from typing import Any

import httpx

from narrato.config import GatewaySettings
from narrato.logging import log_operation, logger
from narrato.models.analysis import ChatMessage


class GatewayError(Exception):
    """Chat-completions request failed."""

    kind = "unknown"

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RateLimitedError(GatewayError):
    """The gateway rejected the request with HTTP 429."""

    kind = "rate_limited"


class QuotaExhaustedError(GatewayError):
    """The account has no credits left (HTTP 402)."""

    kind = "quota_exhausted"


RATE_LIMITED_MESSAGE = "Rate limit exceeded. Please try again in a moment."
QUOTA_EXHAUSTED_MESSAGE = "AI credits depleted. Please add credits to continue."


def _as_payload(message: ChatMessage | dict[str, Any]) -> dict[str, str]:
    if isinstance(message, ChatMessage):
        return message.model_dump()
    return ChatMessage.model_validate(message).model_dump()


class ChatGateway:
    """Client for the chat-completions gateway.

    Pass ``client`` to reuse a connection pool or to inject a mock
    transport in tests; otherwise an ``httpx.Client`` is created lazily and
    closed by ``close()``.
    """

    def __init__(self, settings: GatewaySettings, client: httpx.Client | None = None) -> None:
        self.settings = settings
        self._client = client
        self._owns_client = client is None

    @classmethod
    def from_env(cls, client: httpx.Client | None = None) -> "ChatGateway":
        """Create a gateway from NARRATO_* environment variables."""
        return cls(GatewaySettings.from_env(), client=client)

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(timeout=self.settings.timeout)
        return self._client

    def complete(self, messages: Sequence[ChatMessage | dict[str, Any]]) -> str:
        """Request a completion and return the reply text.

        Args:
            messages: Conversation, system prompt first.

        Returns:
            Content of the first choice.

        Raises:
            RateLimitedError: On HTTP 429.
            QuotaExhaustedError: On HTTP 402.
            GatewayError: On any other failure, including transport errors
                and malformed response bodies.
        """
        body = {
            "model": self.settings.model,
            "messages": [_as_payload(m) for m in messages],
            "stream": False,
        }
        headers = {
            "Authorization": f"Bearer {self.settings.api_key}",
            "Content-Type": "application/json",
        }

        details = {"model": self.settings.model, "messages": len(messages)}
        with log_operation("complete", details, level=logging.INFO):
            try:
                response = self._get_client().post(self.settings.url, json=body, headers=headers)
            except httpx.HTTPError as e:
                raise GatewayError(f"AI Gateway request failed: {e}") from e

            if response.status_code == 429:
                raise RateLimitedError(RATE_LIMITED_MESSAGE, status_code=429)
            if response.status_code == 402:
                raise QuotaExhaustedError(QUOTA_EXHAUSTED_MESSAGE, status_code=402)
            if not response.is_success:
                logger.error("  AI Gateway error: %d %s", response.status_code, response.text)
                raise GatewayError("AI Gateway request failed", status_code=response.status_code)

            try:
                content = response.json()["choices"][0]["message"]["content"]
            except (ValueError, KeyError, IndexError, TypeError) as e:
                raise GatewayError(f"Malformed AI Gateway response: {e}") from e

        if not isinstance(content, str):
            raise GatewayError("Malformed AI Gateway response: content is not text")
        return content

    def close(self) -> None:
        """Close the underlying HTTP client if this gateway created it."""
        if self._client is not None and self._owns_client:
            self._client.close()
            self._client = None

    def __enter__(self) -> "ChatGateway":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
