"""On-device override store.

All overrides live in one JSON blob under a fixed namespace key in a DuckDB
table, read and written wholesale.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import duckdb
from duckdb import DuckDBPyConnection

from leadscope.core.exceptions import OverrideReadError, OverrideWriteError
from leadscope.core.models.lead import Override
from leadscope.core.overrides.base import (
    OverrideStore,
    dump_override_mapping,
    parse_override_mapping,
)


class LocalOverrideStore(OverrideStore):
    """Single keyed blob in a DuckDB file (or ``:memory:``)."""

    name = "local"

    def __init__(self, db_path: str = ":memory:", namespace: str = "lead_overrides"):
        self.db_path = db_path
        self.namespace = namespace
        self._conn: DuckDBPyConnection | None = None
        self._lock: asyncio.Lock | None = None
        self._lock_loop: asyncio.AbstractEventLoop | None = None

    def _loop_lock(self) -> asyncio.Lock:
        loop = asyncio.get_running_loop()
        if self._lock is None or self._lock_loop is not loop:
            self._lock = asyncio.Lock()
            self._lock_loop = loop
        return self._lock

    def _connect(self) -> DuckDBPyConnection:
        if self._conn is None:
            target = self.db_path
            if target != ":memory:":
                path = Path(target).expanduser()
                path.parent.mkdir(parents=True, exist_ok=True)
                target = str(path)
            self._conn = duckdb.connect(target)
            self._conn.execute("""
                CREATE TABLE IF NOT EXISTS kv_store (
                    namespace VARCHAR PRIMARY KEY,
                    payload VARCHAR,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)
        return self._conn

    def _read_blob(self) -> dict[str, Override]:
        row = self._connect().execute(
            "SELECT payload FROM kv_store WHERE namespace = ?", [self.namespace]
        ).fetchone()
        if row is None or not row[0]:
            return {}
        payload = json.loads(row[0])
        if not isinstance(payload, dict):
            raise ValueError("stored overrides are not an object")
        return parse_override_mapping(payload, source=self.name)

    def _write_blob(self, overrides: dict[str, Override]) -> None:
        self._connect().execute(
            """
            INSERT OR REPLACE INTO kv_store (namespace, payload, updated_at)
            VALUES (?, ?, CURRENT_TIMESTAMP)
            """,
            [self.namespace, json.dumps(dump_override_mapping(overrides))],
        )

    async def get_all(self) -> dict[str, Override]:
        async with self._loop_lock():
            try:
                return self._read_blob()
            except (duckdb.Error, OSError, ValueError) as e:
                raise OverrideReadError(
                    f"Failed to read overrides from {self.db_path}: {e}",
                    backend=self.name,
                    details={"namespace": self.namespace},
                ) from e

    async def put(self, lead_id: str, override: Override) -> None:
        # Read-modify-write under the lock so concurrent puts merge sequentially.
        async with self._loop_lock():
            try:
                overrides = self._read_blob()
                current = overrides.get(lead_id)
                overrides[lead_id] = current.merged(override) if current else override
                self._write_blob(overrides)
            except (duckdb.Error, OSError, ValueError) as e:
                raise OverrideWriteError(
                    f"Failed to write override for {lead_id} to {self.db_path}: {e}",
                    backend=self.name,
                    details={"namespace": self.namespace, "lead_id": lead_id},
                ) from e

    async def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None


__all__ = ["LocalOverrideStore"]
