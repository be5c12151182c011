"""Apply database/schema.sql and database/seed.sql to the configured MySQL server."""
from __future__ import annotations

import logging
import re
from contextlib import closing
from pathlib import Path
from typing import Iterator, List

from .connection import DatabaseConnection, DBConfig

logger = logging.getLogger(__name__)

# The target database comes from DB_CONFIG, never from the script itself.
_DATABASE_DIRECTIVE = re.compile(r"^\s*(CREATE\s+DATABASE|USE)\b[^;]*;\s*$", re.IGNORECASE | re.MULTILINE)
_LINE_COMMENT = re.compile(r"^\s*--.*$", re.MULTILINE)
_TOKEN = re.compile(r"'(?:[^'\\]|\\.)*'|\"(?:[^\"\\]|\\.)*\"|;|[^'\";]+", re.DOTALL)


def split_statements(sql: str) -> Iterator[str]:
    """Yield statements separated by top-level ';' (quoted semicolons are kept)."""

    current: List[str] = []
    for token in _TOKEN.findall(sql):
        if token == ";":
            statement = "".join(current).strip()
            current = []
            if statement:
                yield statement
        else:
            current.append(token)
    tail = "".join(current).strip()
    if tail:
        yield tail


def _load_script(path: Path) -> str:
    sql = path.read_text(encoding="utf-8")
    return _LINE_COMMENT.sub("", _DATABASE_DIRECTIVE.sub("", sql))


def _execute_script(db_config: dict, path: str | Path) -> int:
    path = Path(path)
    statements = list(split_statements(_load_script(path)))

    with closing(DatabaseConnection(DBConfig.from_dict(db_config)).connect()) as conn:
        with closing(conn.cursor()) as cur:
            for statement in statements:
                cur.execute(statement)
        conn.commit()

    logger.info("applied %s (%d statements)", path.name, len(statements))
    return len(statements)


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    with closing(DatabaseConnection(target).connect(with_database=False)) as conn:
        with closing(conn.cursor()) as cur:
            cur.execute(
                f"CREATE DATABASE IF NOT EXISTS `{target.database}` "
                f"CHARACTER SET {target.charset} COLLATE {target.collation}"
            )
        conn.commit()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> int:
    ensure_database_exists(db_config)
    return _execute_script(db_config, schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> int:
    return _execute_script(db_config, seed_path)


def list_tables(db_config: dict) -> List[str]:
    with closing(DatabaseConnection(DBConfig.from_dict(db_config)).connect()) as conn:
        with closing(conn.cursor()) as cur:
            cur.execute("SHOW TABLES")
            return sorted(row[0] for row in cur.fetchall())
