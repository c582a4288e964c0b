from __future__ import annotations

import logging

import httpx
from openai import APIConnectionError, APIStatusError, AsyncOpenAI

from blogai.ai.errors import AIConfigurationError, AIProviderError, AIProviderHTTPError
from blogai.ai.registry import default_api_url
from blogai.ai.types import AISummaryConfig, ChatMessage
from blogai.core.config import settings

logger = logging.getLogger(__name__)

MAX_TOKENS = 500
TEMPERATURE = 0.3
BODY_SNIPPET_CHARS = 200


def resolve_api_url(config: AISummaryConfig) -> str:
    api_url = (config.api_url or "").strip() or default_api_url(config.provider)
    if not api_url:
        raise AIConfigurationError("API URL not configured")
    return api_url.rstrip("/")


def _first_choice_text(response: object) -> str | None:
    choices = getattr(response, "choices", None) or []
    if not choices:
        return None
    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None)
    if not isinstance(content, str):
        return None
    return content.strip() or None


async def run_openai_compatible(
    config: AISummaryConfig,
    prompt: str,
    http_client: httpx.AsyncClient | None = None,
) -> str | None:
    if not config.api_key:
        raise AIConfigurationError("API key not configured")
    base_url = resolve_api_url(config)

    client = AsyncOpenAI(
        api_key=config.api_key,
        base_url=base_url,
        timeout=settings.ai_timeout_s,
        max_retries=0,
        http_client=http_client,
    )
    message = ChatMessage(role="user", content=prompt)
    try:
        response = await client.chat.completions.create(
            model=config.model,
            messages=[message.to_payload()],
            max_tokens=MAX_TOKENS,
            temperature=TEMPERATURE,
        )
    except APIStatusError as exc:
        raise AIProviderHTTPError.from_status(exc.status_code, exc.response.text) from exc
    except APIConnectionError as exc:
        raise AIProviderHTTPError.from_network(exc) from exc
    finally:
        if http_client is None:
            await client.close()

    # The SDK hands back the raw text when the body is not JSON.
    if isinstance(response, str):
        raise AIProviderError(
            f"Invalid JSON response: {response[:BODY_SNIPPET_CHARS]}",
            code="invalid_response",
        )

    text = _first_choice_text(response)
    if text is None:
        logger.info("openai_compat_empty_choice provider=%s model=%s", config.provider, config.model)
    return text
