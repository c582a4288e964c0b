from __future__ import annotations

import logging
import os
from typing import Any, Mapping

from blogai.ai.types import API_KEY_MASK
from blogai.storage.ai_config_store import AIConfigStore
from blogai.storage.config_store import ConfigStore

logger = logging.getLogger(__name__)

MASK = API_KEY_MASK
SENSITIVE_FIELDS = ("ai_summary.api_key",)
AI_KEY_PREFIX = "ai_summary."

# flat wire key -> nested AI config field
AI_CONFIG_KEYS = {
    "ai_summary.enabled": "enabled",
    "ai_summary.provider": "provider",
    "ai_summary.model": "model",
    "ai_summary.api_key": "api_key",
    "ai_summary.api_url": "api_url",
}

# client config key -> environment variable used when the key is unset
CLIENT_CONFIG_ENV_DEFAULTS = {
    "site.name": "NAME",
    "site.description": "DESCRIPTION",
    "site.avatar": "AVATAR",
    "site.page_size": "PAGE_SIZE",
}
DEFAULT_PAGE_SIZE = 5


def _is_unset(value: Any) -> bool:
    return value is None or value == ""


def mask_sensitive_fields(config: Mapping[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key, value in config.items():
        if key in SENSITIVE_FIELDS and value:
            result[key] = MASK
        else:
            result[key] = value
    return result


def is_ai_config_key(key: str) -> bool:
    return key in AI_CONFIG_KEYS or key.startswith(AI_KEY_PREFIX)


def split_config_body(body: Mapping[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
    """Separate generic keys from AI keys, nesting the latter."""
    regular: dict[str, Any] = {}
    ai_updates: dict[str, Any] = {}
    for key, value in body.items():
        if is_ai_config_key(key):
            nested = AI_CONFIG_KEYS.get(key) or key[len(AI_KEY_PREFIX):]
            if nested == "api_key" and value == MASK:
                # Echoed placeholder from a masked read; keep the stored key.
                continue
            ai_updates[nested] = value
        else:
            regular[key] = value
    return regular, ai_updates


def flatten_ai_config(ai_config: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "ai_summary.enabled": "true" if ai_config.get("enabled") else "false",
        "ai_summary.provider": ai_config.get("provider", ""),
        "ai_summary.model": ai_config.get("model", ""),
        "ai_summary.api_url": ai_config.get("api_url", ""),
        "ai_summary.api_key": MASK if ai_config.get("api_key_set") else "",
    }


def apply_client_env_defaults(
    config: Mapping[str, Any],
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    environ = os.environ if environ is None else environ
    result = dict(config)
    for config_key, env_key in CLIENT_CONFIG_ENV_DEFAULTS.items():
        if _is_unset(result.get(config_key)):
            env_value = environ.get(env_key)
            if env_value:
                result[config_key] = env_value
    if _is_unset(result.get("site.page_size")):
        result["site.page_size"] = DEFAULT_PAGE_SIZE
    return result


def get_server_config(server_store: ConfigStore, ai_store: AIConfigStore) -> dict[str, Any]:
    config = server_store.all()
    config.update(flatten_ai_config(ai_store.get_for_frontend()))
    return mask_sensitive_fields(config)


def get_client_config(
    client_store: ConfigStore,
    ai_store: AIConfigStore,
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    config = apply_client_env_defaults(client_store.all(), environ)
    config["ai_summary.enabled"] = bool(ai_store.get_for_frontend().get("enabled", False))
    return config


def save_config(store: ConfigStore, ai_store: AIConfigStore, body: Mapping[str, Any]) -> None:
    regular, ai_updates = split_config_body(body)

    for key, value in regular.items():
        store.set(key, value, False)
    store.save()

    # Not atomic with the generic write above.
    if ai_updates:
        ai_store.update(ai_updates)
    logger.info(
        "config_updated namespace=%s keys=%s ai_fields=%s",
        store.namespace,
        len(regular),
        sorted(ai_updates),
    )
