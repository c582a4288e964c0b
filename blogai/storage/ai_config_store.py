from __future__ import annotations

import json
import logging
from dataclasses import fields, replace
from typing import Any, Mapping

from blogai.ai.types import AISummaryConfig
from blogai.storage.database import ConfigDatabase, utc_now

logger = logging.getLogger(__name__)

AI_SETTINGS_NAME = "ai_summary"
_FIELD_NAMES = {field.name for field in fields(AISummaryConfig)}


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "y", "on"}
    return bool(value)


def _coerce_field(name: str, value: Any) -> Any:
    if name == "enabled":
        return _coerce_bool(value)
    if value is None:
        return ""
    return str(value)


class AIConfigStore:
    """Nested ``ai_summary`` record kept as one JSON document."""

    def __init__(self, db: ConfigDatabase):
        self._db = db

    def _load_raw(self) -> dict[str, Any]:
        conn = self._db.connection()
        with self._db.lock:
            row = conn.execute(
                "SELECT value_json FROM ai_settings WHERE name = ?",
                (AI_SETTINGS_NAME,),
            ).fetchone()
        if row is None:
            return {}
        data = json.loads(row[0])
        return data if isinstance(data, dict) else {}

    def get(self) -> AISummaryConfig:
        raw = self._load_raw()
        values = {name: _coerce_field(name, raw[name]) for name in _FIELD_NAMES if name in raw}
        return AISummaryConfig(**values)

    def update(self, updates: Mapping[str, Any]) -> AISummaryConfig:
        known: dict[str, Any] = {}
        for name, value in updates.items():
            if name not in _FIELD_NAMES:
                logger.debug("ai_config_unknown_field field=%s", name)
                continue
            known[name] = _coerce_field(name, value)

        config = replace(self.get(), **known)
        conn = self._db.connection()
        with self._db.lock:
            conn.execute(
                """
                INSERT INTO ai_settings (name, value_json, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT (name)
                DO UPDATE SET value_json = excluded.value_json, updated_at = excluded.updated_at
                """,
                (AI_SETTINGS_NAME, json.dumps(config.to_dict(), ensure_ascii=False), utc_now()),
            )
        logger.info(
            "ai_config_saved provider=%s model=%s enabled=%s fields=%s",
            config.provider,
            config.model,
            config.enabled,
            sorted(known),
        )
        return config

    def get_for_frontend(self) -> dict[str, Any]:
        config = self.get()
        return {
            "enabled": config.enabled,
            "provider": config.provider,
            "model": config.model,
            "api_url": config.api_url,
            "api_key_set": bool(config.api_key),
        }
