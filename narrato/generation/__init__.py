"""Prompt construction and language-model gateway for documentation flows."""

from narrato.generation.gateway import (
    ChatGateway,
    GatewayError,
    QuotaExhaustedError,
    RateLimitedError,
)
from narrato.generation.prompts import (
    PERSONAS,
    build_auto_generate_prompt,
    build_system_prompt,
    summary_lines,
)
from narrato.generation.session import auto_generate, run_interview

__all__ = [
    "PERSONAS",
    "ChatGateway",
    "GatewayError",
    "QuotaExhaustedError",
    "RateLimitedError",
    "auto_generate",
    "build_auto_generate_prompt",
    "build_system_prompt",
    "run_interview",
    "summary_lines",
]
