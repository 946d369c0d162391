"""Schema bootstrap for ``database/schema.sql``.

Used by ``create_app`` when ``AUTO_INIT_DB`` is on and by ``scripts/init_db.py``.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterator

from .connection import DatabaseConnection, DBConfig

logger = logging.getLogger(__name__)

# The target database comes from DB_CONFIG, not from the file.
_DB_DIRECTIVES = re.compile(r"(?im)^\s*(CREATE\s+DATABASE|USE)\b[^;]*;\s*$")


def _prepare(sql: str) -> str:
    sql = _DB_DIRECTIVES.sub("", sql)
    return "\n".join(line for line in sql.splitlines() if not line.lstrip().startswith("--"))


def iter_sql_statements(sql: str) -> Iterator[str]:
    """Split on ``;`` outside of quoted literals."""

    start = 0
    quote: str | None = None
    i = 0
    while i < len(sql):
        ch = sql[i]
        if quote:
            if ch == "\\":
                i += 1
            elif ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = sql[start:i].strip()
            if stmt:
                yield stmt
            start = i + 1
        i += 1

    tail = sql[start:].strip()
    if tail:
        yield tail


def _run(config: DBConfig, statements, *, with_database: bool = True) -> None:
    conn = DatabaseConnection(config).connect(with_database=with_database)
    try:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def ensure_database_exists(db_config: dict) -> None:
    config = DBConfig.from_dict(db_config)
    _run(
        config,
        [f"CREATE DATABASE IF NOT EXISTS `{config.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"],
        with_database=False,
    )


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    """Idempotent: every table is ``CREATE TABLE IF NOT EXISTS``."""

    ensure_database_exists(db_config)
    sql = _prepare(Path(schema_path).read_text(encoding="utf-8"))
    _run(DBConfig.from_dict(db_config), iter_sql_statements(sql))
    logger.info("Applied schema %s to %s", schema_path, db_config.get("database"))


def list_tables(db_config: dict) -> list[str]:
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
