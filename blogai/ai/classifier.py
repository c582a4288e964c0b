from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)

# Ordered: the first rule with a matching substring wins.
_RULES: tuple[tuple[tuple[str, ...], str, str], ...] = (
    (
        ("fetch failed", "NetworkError"),
        "Network error: Unable to connect to AI service",
        "Please check your API URL and network connection.",
    ),
    (
        ("401", "Unauthorized"),
        "Authentication failed: Invalid API key",
        "Please check your API key is correct and not expired.",
    ),
    (
        ("429",),
        "Rate limit exceeded",
        "Too many requests. Please wait a moment.",
    ),
    (
        ("404",),
        "Model not found",
        'Model "{model}" not found for provider "{provider}".',
    ),
    (
        ("500", "503"),
        "AI service temporarily unavailable",
        "Service is experiencing issues. Please try again later.",
    ),
    (
        ("Invalid",),
        "AI model error: {message}",
        'Model "{model}" may not be supported. Please verify the model ID.',
    ),
)


def classify_ai_error(error: BaseException | str | None, model: str, provider: str) -> dict[str, Any]:
    message = str(error) if error is not None else ""
    message = message or "Unknown error"
    logger.warning("ai_error provider=%s model=%s: %s", provider, model, message)

    for triggers, error_text, details in _RULES:
        if any(trigger in message for trigger in triggers):
            values = {"model": model, "provider": provider, "message": message}
            return {
                "success": False,
                "error": error_text.format(**values),
                "details": details.format(**values),
            }

    return {
        "success": False,
        "error": message,
        "details": f"Original: {message}",
    }
