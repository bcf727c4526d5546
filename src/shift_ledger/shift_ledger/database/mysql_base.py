from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Callable, Dict, List, Optional, TypeVar

import mysql.connector

from ..core.constants import DEFAULT_TX_MAX_RETRIES
from ..core.exceptions import StorageConflict
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

T = TypeVar("T")

# ER_LOCK_WAIT_TIMEOUT, ER_LOCK_DEADLOCK
RETRYABLE_ERRNOS = frozenset({1205, 1213})


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def normalize_mysql_time(value: Any) -> Optional[time]:
    """Normalize MySQL TIME values across connector implementations.

    mysql-connector can return TIME as:
    - datetime.time
    - datetime.timedelta
    - string (e.g. '08:30:00')
    """

    if value is None:
        return None

    if isinstance(value, time):
        return value

    if isinstance(value, timedelta):
        total_seconds = int(value.total_seconds()) % 86400
        hours = total_seconds // 3600
        minutes = (total_seconds % 3600) // 60
        seconds = total_seconds % 60
        return time(hour=hours, minute=minutes, second=seconds)

    if isinstance(value, str):
        parts = value.strip().split(":")
        if len(parts) < 2:
            raise ValueError(f"Invalid time string: {value!r}")
        hours = int(parts[0])
        minutes = int(parts[1])
        seconds = int(parts[2]) if len(parts) >= 3 and parts[2] else 0
        return time(hour=hours, minute=minutes, second=seconds)

    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")


class MySQLTransactionManager:
    """Runs a unit of work in one MySQL transaction, retrying lock conflicts.

    The work callable receives the open cursor; repositories take it as ``tx``
    so that several reads/writes (with ``SELECT ... FOR UPDATE``) share the
    same transaction. Any exception rolls the whole unit back.
    """

    def __init__(self, conn_factory: DatabaseConnection, *, max_retries: int = DEFAULT_TX_MAX_RETRIES):
        self._conn_factory = conn_factory
        self._max_retries = max(1, int(max_retries))

    def run(self, work: Callable[[Any], T]) -> T:
        attempt = 0
        while True:
            attempt += 1
            try:
                with db_cursor(self._conn_factory) as (_, cur):
                    return work(cur)
            except mysql.connector.Error as e:
                if getattr(e, "errno", None) not in RETRYABLE_ERRNOS:
                    raise
                if attempt >= self._max_retries:
                    logger.warning("Transaction conflict persisted after %s attempts: %s", attempt, e)
                    raise StorageConflict("The record is busy, please try again") from e
                logger.info("Transaction conflict (errno=%s), retrying attempt %s", e.errno, attempt + 1)
