"""Runtime configuration read from the environment.

Configuration via environment variables (``.env`` is loaded on import of
the ``narrato`` package):
    NARRATO_API_KEY: Bearer token for the chat-completions gateway
    NARRATO_GATEWAY_URL: Gateway endpoint override
    NARRATO_MODEL: Model name sent with every completion request
    NARRATO_TIMEOUT: Request timeout in seconds
    NARRATO_LAYOUT: Default graph layout for the CLI ("hierarchical" or "circular")

Values are read at call time, not import time, so tests can monkeypatch
the environment.
"""

import os
from dataclasses import dataclass

DEFAULT_GATEWAY_URL = "https://ai.gateway.lovable.dev/v1/chat/completions"
DEFAULT_MODEL = "google/gemini-2.5-flash"
DEFAULT_TIMEOUT = 60.0
DEFAULT_LAYOUT = "hierarchical"


class ConfigurationError(Exception):
    """Required configuration is missing or invalid."""

    pass


@dataclass(frozen=True)
class GatewaySettings:
    """Connection settings for the chat-completions gateway."""

    api_key: str
    url: str = DEFAULT_GATEWAY_URL
    model: str = DEFAULT_MODEL
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls) -> "GatewaySettings":
        """Build settings from NARRATO_* environment variables.

        Raises:
            ConfigurationError: If NARRATO_API_KEY is unset or the timeout
                is not a number.
        """
        api_key = os.getenv("NARRATO_API_KEY", "").strip()
        if not api_key:
            raise ConfigurationError("NARRATO_API_KEY is not configured")

        raw_timeout = os.getenv("NARRATO_TIMEOUT", "")
        try:
            timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
        except ValueError as e:
            raise ConfigurationError(f"NARRATO_TIMEOUT must be a number, got {raw_timeout!r}") from e

        return cls(
            api_key=api_key,
            url=os.getenv("NARRATO_GATEWAY_URL", DEFAULT_GATEWAY_URL),
            model=os.getenv("NARRATO_MODEL", DEFAULT_MODEL),
            timeout=timeout,
        )


def default_layout() -> str:
    """Get the default graph layout from the environment."""
    return os.getenv("NARRATO_LAYOUT", DEFAULT_LAYOUT).lower()
