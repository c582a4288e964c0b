from __future__ import annotations

import logging

import httpx
from fastapi.concurrency import run_in_threadpool

from blogai.ai.dispatcher import generate_ai_summary
from blogai.ai.providers.cloudflare_runtime import get_inference_runtime
from blogai.ai.types import InferenceRuntime
from blogai.storage.ai_config_store import AIConfigStore
from blogai.storage.database import ConfigDatabase, get_database

logger = logging.getLogger(__name__)


async def summarize_article(
    content: str,
    db: ConfigDatabase | None = None,
    runtime: InferenceRuntime | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> str | None:
    """Summarize article content with the stored AI settings, or return None."""
    store = AIConfigStore(db or get_database())
    config = await run_in_threadpool(store.get)
    if runtime is None:
        runtime = get_inference_runtime()
    summary = await generate_ai_summary(config, content, runtime=runtime, http_client=http_client)
    logger.info(
        "ai_summary provider=%s model=%s produced=%s content_len=%s",
        config.provider,
        config.model,
        summary is not None,
        len(content),
    )
    return summary
