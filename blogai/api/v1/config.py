import logging
from typing import Any

import httpx
from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request
from pydantic import BaseModel, ConfigDict, Field

from blogai.ai import dispatcher
from blogai.ai.providers.cloudflare_runtime import get_inference_runtime
from blogai.ai.registry import WORKER_AI_PROVIDER, list_aliases, provider_requires_credential
from blogai.ai.types import AISummaryConfig, InferenceRuntime
from blogai.core.cache import MemoryCache, get_cache
from blogai.core.config import settings
from blogai.core.rate_limit import ai_test_rate_limit
from blogai.core.security import is_admin, require_admin
from blogai.services import config_service
from blogai.storage.ai_config_store import AIConfigStore
from blogai.storage.config_store import NAMESPACES, ConfigStore
from blogai.storage.database import ConfigDatabase, get_database

router = APIRouter()
logger = logging.getLogger(__name__)

CLIENT_CONFIG_CACHE_KEY = "config:client"


class AITestRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    provider: str | None = None
    model: str | None = None
    api_url: str | None = None
    api_key: str | None = None
    test_prompt: str | None = Field(default=None, alias="testPrompt")


def get_ai_http_client() -> httpx.AsyncClient | None:
    return None


def get_stored_ai_config(db: ConfigDatabase = Depends(get_database)) -> AISummaryConfig:
    return AIConfigStore(db).get()


def _validate_type(config_type: str) -> str:
    if config_type not in NAMESPACES:
        raise HTTPException(status_code=400, detail="Invalid type")
    return config_type


@router.post("/config/test-ai")
@ai_test_rate_limit()
async def test_ai(
    request: Request,
    payload: AITestRequest,
    _: None = Depends(require_admin),
    stored: AISummaryConfig = Depends(get_stored_ai_config),
    runtime: InferenceRuntime | None = Depends(get_inference_runtime),
    http_client: httpx.AsyncClient | None = Depends(get_ai_http_client),
):
    _ = request
    overrides = payload.model_dump(include={"provider", "model", "api_url", "api_key"})
    config = dispatcher.build_test_config(stored, overrides)
    prompt = payload.test_prompt or dispatcher.DEFAULT_TEST_PROMPT
    result = await dispatcher.test_ai_model(config, prompt, runtime=runtime, http_client=http_client)
    logger.info(
        "ai_test provider=%s model=%s success=%s",
        config.provider,
        config.model,
        result.get("success"),
    )
    return result


@router.get("/config/ai/models")
def ai_models(
    provider: str = Query(default=WORKER_AI_PROVIDER),
    _: None = Depends(require_admin),
):
    return {
        "provider": provider,
        "models": list_aliases(provider),
        "requires_api_key": provider_requires_credential(provider),
    }


@router.get("/config/{config_type}")
def read_config(
    config_type: str,
    authorization: str | None = Header(default=None),
    x_admin_token: str | None = Header(default=None, alias="X-Admin-Token"),
    db: ConfigDatabase = Depends(get_database),
    cache: MemoryCache = Depends(get_cache),
) -> dict[str, Any]:
    _validate_type(config_type)
    ai_store = AIConfigStore(db)

    if config_type == "server":
        if not is_admin(authorization, x_admin_token):
            raise HTTPException(status_code=401, detail="Unauthorized")
        return config_service.get_server_config(ConfigStore(db, "server"), ai_store)

    cached = cache.get(CLIENT_CONFIG_CACHE_KEY)
    if cached is not None:
        return cached
    data = config_service.get_client_config(ConfigStore(db, "client"), ai_store)
    cache.set(CLIENT_CONFIG_CACHE_KEY, data, settings.config_cache_ttl_s)
    return data


@router.post("/config/{config_type}")
def write_config(
    config_type: str,
    payload: dict[str, Any],
    _: None = Depends(require_admin),
    db: ConfigDatabase = Depends(get_database),
    cache: MemoryCache = Depends(get_cache),
):
    _validate_type(config_type)
    store = ConfigStore(db, config_type)
    config_service.save_config(store, AIConfigStore(db), payload)
    cache.delete(CLIENT_CONFIG_CACHE_KEY)
    return "OK"


@router.delete("/config/cache")
def clear_cache(
    _: None = Depends(require_admin),
    cache: MemoryCache = Depends(get_cache),
):
    removed = cache.clear()
    logger.info("cache_cleared entries=%s", removed)
    return "OK"
