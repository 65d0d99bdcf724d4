"""Persistencia SQLite clave/valor para lecturas y configuracion."""

from __future__ import annotations

import json
import sqlite3
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from glucose_tracker.model import Reading

DEFAULT_STORAGE_KEY = "diabetesData"
DEFAULT_DB_NAME = "glucose_tracker.sqlite3"

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS app_storage (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS app_config (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
);
"""


@dataclass(frozen=True)
class AppConfig:
    """Configuracion persistida de la app."""

    chart_min: float = 50.0
    chart_max: float = 300.0
    fullscreen: bool = False


class SQLiteStore:
    """Repositorio SQLite para la app."""

    def __init__(self, db_path: Path) -> None:
        """Create store and ensure schema exists."""
        self._db_path = db_path
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        with self._connect() as conn:
            conn.executescript(SCHEMA_SQL)
            conn.commit()

    def load_value(self, key: str) -> str | None:
        """Devuelve el valor guardado bajo ``key`` o None."""
        with self._connect() as conn:
            row = conn.execute(
                "SELECT value FROM app_storage WHERE key = ?", (key,)
            ).fetchone()
        if row is None:
            return None
        return str(row["value"])

    def save_value(self, key: str, value: str) -> None:
        """Sobrescribe el valor completo guardado bajo ``key``."""
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO app_storage(key, value) VALUES(?, ?)
                ON CONFLICT(key) DO UPDATE SET value=excluded.value
                """,
                (key, value),
            )
            conn.commit()

    def load_readings(self, key: str = DEFAULT_STORAGE_KEY) -> list[Reading]:
        """Load the saved sequence, or an empty list if nothing usable is stored."""
        raw = self.load_value(key)
        if raw is None:
            return []
        return _parse_readings(raw)

    def save_readings(
        self, readings: list[Reading], key: str = DEFAULT_STORAGE_KEY
    ) -> None:
        """Serialize the full sequence and replace whatever was stored."""
        payload = json.dumps([r.to_record() for r in readings])
        self.save_value(key, payload)

    def load_config(self) -> AppConfig:
        """Devuelve configuracion guardada o defaults."""
        defaults = AppConfig()
        with self._connect() as conn:
            rows = conn.execute("SELECT key, value FROM app_config").fetchall()
        values = {row["key"]: row["value"] for row in rows}
        return AppConfig(
            chart_min=_parse_float(values.get("chart_min"), defaults.chart_min),
            chart_max=_parse_float(values.get("chart_max"), defaults.chart_max),
            fullscreen=values.get("fullscreen") == "1",
        )

    def save_config(self, config: AppConfig) -> None:
        """Guarda la configuracion en tabla key/value."""
        payload = {
            "chart_min": str(config.chart_min),
            "chart_max": str(config.chart_max),
            "fullscreen": "1" if config.fullscreen else "0",
        }
        with self._connect() as conn:
            conn.executemany(
                """
                INSERT INTO app_config(key, value) VALUES(?, ?)
                ON CONFLICT(key) DO UPDATE SET value=excluded.value
                """,
                payload.items(),
            )
            conn.commit()

    def update_config(self, **changes: object) -> AppConfig:
        """Apply changes over the saved configuration, save and return it."""
        config = replace(self.load_config(), **changes)
        self.save_config(config)
        return config


def _parse_readings(raw: str) -> list[Reading]:
    try:
        parsed: Any = json.loads(raw)
    except json.JSONDecodeError:
        return []
    if not isinstance(parsed, list):
        return []
    out: list[Reading] = []
    for item in parsed:
        if not isinstance(item, dict):
            continue
        try:
            out.append(Reading.from_record(item))
        except (KeyError, TypeError, ValueError):
            continue
    return out


def _parse_float(raw: str | None, default: float) -> float:
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default
