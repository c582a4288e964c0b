"""Flat key/value settings for the ``server`` and ``client`` namespaces."""

from __future__ import annotations

import json
import logging
from typing import Any

from blogai.storage.database import ConfigDatabase, utc_now

logger = logging.getLogger(__name__)

NAMESPACES = ("server", "client")


class ConfigStore:
    def __init__(self, db: ConfigDatabase, namespace: str):
        if namespace not in NAMESPACES:
            raise ValueError(f"Unknown config namespace '{namespace}'")
        self._db = db
        self.namespace = namespace
        self._pending: dict[str, Any] = {}

    def all(self) -> dict[str, Any]:
        conn = self._db.connection()
        with self._db.lock:
            rows = conn.execute(
                "SELECT key, value_json FROM config_entries WHERE namespace = ?",
                (self.namespace,),
            ).fetchall()
        result = {key: json.loads(value_json) for key, value_json in rows}
        result.update(self._pending)
        return result

    def get(self, key: str, default: Any = None) -> Any:
        if key in self._pending:
            return self._pending[key]
        conn = self._db.connection()
        with self._db.lock:
            row = conn.execute(
                "SELECT value_json FROM config_entries WHERE namespace = ? AND key = ?",
                (self.namespace, key),
            ).fetchone()
        if row is None:
            return default
        return json.loads(row[0])

    def set(self, key: str, value: Any, flush: bool = True) -> None:
        self._pending[key] = value
        if flush:
            self.save()

    def save(self) -> None:
        if not self._pending:
            return
        now = utc_now()
        rows = [
            (self.namespace, key, json.dumps(value, ensure_ascii=False), now)
            for key, value in self._pending.items()
        ]
        conn = self._db.connection()
        with self._db.lock:
            conn.execute("BEGIN")
            try:
                conn.executemany(
                    """
                    INSERT INTO config_entries (namespace, key, value_json, updated_at)
                    VALUES (?, ?, ?, ?)
                    ON CONFLICT (namespace, key)
                    DO UPDATE SET value_json = excluded.value_json, updated_at = excluded.updated_at
                    """,
                    rows,
                )
            except Exception:
                conn.execute("ROLLBACK")
                raise
            conn.execute("COMMIT")
        logger.info("config_saved namespace=%s keys=%s", self.namespace, len(rows))
        self._pending.clear()
