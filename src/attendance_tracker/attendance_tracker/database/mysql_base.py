from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Type

import mysql.connector

from ..core.exceptions import StoreError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


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


@contextmanager
def store_errors(action: str, *, error_cls: Type[StoreError] = StoreError):
    """Translate connector failures into domain store errors."""

    try:
        yield
    except mysql.connector.Error as e:
        logger.error("MySQL error while trying to %s: %s", action, e)
        raise error_cls(f"Could not {action}") from e


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def as_optional_bool(value: Any) -> Optional[bool]:
    """MySQL TINYINT(1) NULL -> Optional[bool]."""

    if value is None:
        return None
    return bool(value)
