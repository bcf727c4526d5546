from __future__ import annotations

import json
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .repository import SessionRepository


class MySQLSessionRepository(SessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, user_id: str) -> Optional[dict]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT payload FROM dialog_sessions WHERE user_id=%s", (user_id,))
            r = fetchone(cur)
            if not r or not r.get("payload"):
                return None
            try:
                return json.loads(r["payload"])
            except ValueError:
                return {}

    def set(self, user_id: str, data: dict) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO dialog_sessions(user_id, payload, updated_at)
                VALUES(%s,%s,NOW())
                ON DUPLICATE KEY UPDATE payload=VALUES(payload), updated_at=VALUES(updated_at)
                """,
                (user_id, json.dumps(data)),
            )

    def delete(self, user_id: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM dialog_sessions WHERE user_id=%s", (user_id,))
