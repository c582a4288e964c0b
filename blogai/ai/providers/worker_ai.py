from __future__ import annotations

import json
import logging
from typing import Any, Mapping

from blogai.ai.errors import AIConfigurationError
from blogai.ai.types import ChatMessage, InferenceRuntime

logger = logging.getLogger(__name__)

# Model families behind the same runtime name their text field differently.
RESPONSE_FIELDS = ("response", "content", "output", "result")


def extract_text(raw: Any) -> str | None:
    if isinstance(raw, Mapping):
        for field in RESPONSE_FIELDS:
            value = raw.get(field)
            if isinstance(value, str):
                return value
        return json.dumps(raw, ensure_ascii=False, default=str)
    if isinstance(raw, str):
        return raw
    return None


async def run_worker_ai(
    runtime: InferenceRuntime | None,
    model_id: str,
    prompt: str,
) -> str | None:
    if runtime is None:
        raise AIConfigurationError("Worker AI binding not configured")

    message = ChatMessage(role="user", content=prompt)
    raw = await runtime.run(model_id, {"messages": [message.to_payload()]})
    text = extract_text(raw)
    if text is None:
        logger.info("worker_ai_empty_result model=%s type=%s", model_id, type(raw).__name__)
    return text
