from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import DuplicateKeyError, StoreUnavailableError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


def translate_store_error(exc: mysql.connector.Error) -> Exception:
    """Map a driver error onto the domain taxonomy.

    Duplicate keys become DuplicateKeyError; every other driver failure is
    reported as StoreUnavailableError so no raw driver error reaches a route.
    """
    if isinstance(exc, mysql.connector.IntegrityError) and exc.errno == errorcode.ER_DUP_ENTRY:
        return DuplicateKeyError()
    logger.error("store error errno=%s: %s", getattr(exc, "errno", None), exc)
    return StoreUnavailableError()


def _quietly(action, what: str) -> None:
    """Run a cleanup call on a possibly dead connection; its own failure is only logged."""

    try:
        action()
    except mysql.connector.Error as exc:
        logger.warning("%s failed: %s", what, exc)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as exc:
        raise translate_store_error(exc) from exc

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            _quietly(cur.close, "cursor close")
    except mysql.connector.Error as exc:
        _quietly(conn.rollback, "rollback")
        raise translate_store_error(exc) from exc
    except Exception:
        _quietly(conn.rollback, "rollback")
        raise
    finally:
        _quietly(conn.close, "connection close")


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])
