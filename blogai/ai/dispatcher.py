"""Route AI requests to the configured provider.

Two entry points share one routing rule:

* ``test_ai_model`` is used by an administrator checking a configuration, so
  failures come back classified for display.
* ``generate_ai_summary`` runs on behalf of article saves; it is best-effort
  and never raises.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Mapping

import httpx

from blogai.ai.classifier import classify_ai_error
from blogai.ai.providers.openai_compat import run_openai_compatible
from blogai.ai.providers.worker_ai import run_worker_ai
from blogai.ai.registry import WORKER_AI_PROVIDER, resolve_model_id
from blogai.ai.types import API_KEY_MASK, AISummaryConfig, InferenceRuntime

logger = logging.getLogger(__name__)

DEFAULT_TEST_PROMPT = "Hello! This is a test message. Please respond with a simple greeting."
MAX_SUMMARY_CONTENT_CHARS = 8000
SUMMARY_PROMPT = "请用简洁的中文总结以下内容，不超过200字：\n\n{content}"


def build_test_config(stored: AISummaryConfig, overrides: Mapping[str, Any]) -> AISummaryConfig:
    provider = overrides.get("provider") or stored.provider
    model = overrides.get("model") or stored.model
    api_url = overrides.get("api_url")
    api_key = overrides.get("api_key")
    if api_key == API_KEY_MASK:
        api_key = None
    return replace(
        stored,
        provider=provider,
        model=model,
        api_url=stored.api_url if api_url is None else api_url,
        api_key=stored.api_key if api_key is None else api_key,
    )


async def dispatch(
    config: AISummaryConfig,
    prompt: str,
    runtime: InferenceRuntime | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> str | None:
    if config.provider == WORKER_AI_PROVIDER:
        model_id = resolve_model_id(config.model)
        logger.info("ai_dispatch provider=%s model=%s", config.provider, model_id)
        return await run_worker_ai(runtime, model_id, prompt)

    logger.info("ai_dispatch provider=%s model=%s", config.provider, config.model)
    return await run_openai_compatible(config, prompt, http_client=http_client)


async def test_ai_model(
    config: AISummaryConfig,
    test_prompt: str = DEFAULT_TEST_PROMPT,
    runtime: InferenceRuntime | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> dict[str, Any]:
    try:
        result = await dispatch(config, test_prompt, runtime=runtime, http_client=http_client)
    except Exception as exc:  # noqa: BLE001 - surfaced to the admin as a classified error
        return classify_ai_error(exc, config.model, config.provider)

    if result:
        return {"success": True, "response": result}
    return {"success": False, "error": "Empty response from AI"}


def truncate_content(content: str, limit: int = MAX_SUMMARY_CONTENT_CHARS) -> str:
    if len(content) > limit:
        return content[:limit] + "..."
    return content


def build_summary_prompt(content: str) -> str:
    return SUMMARY_PROMPT.format(content=truncate_content(content))


async def generate_ai_summary(
    config: AISummaryConfig,
    content: str,
    runtime: InferenceRuntime | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> str | None:
    if not config.enabled:
        return None

    try:
        return await dispatch(
            config,
            build_summary_prompt(content),
            runtime=runtime,
            http_client=http_client,
        )
    except Exception:  # noqa: BLE001 - summaries must never fail the caller
        logger.exception("ai_summary_failed provider=%s model=%s", config.provider, config.model)
        return None
