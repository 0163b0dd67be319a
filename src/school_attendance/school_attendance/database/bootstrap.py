from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator

import mysql.connector
from werkzeug.security import generate_password_hash

from ..core.enums import Role
from .connection import DBConfig

logger = logging.getLogger(__name__)

DEMO_USERS = (
    ("Admin Sekolah", "admin@sekolah.test", "admin123", Role.ADMIN),
    ("Budi Santoso", "guru@sekolah.test", "guru123", Role.TEACHER),
    ("Siti Aminah", "orangtua@sekolah.test", "orangtua123", Role.PARENT),
)


@contextmanager
def _connect(db_config: dict, *, with_database: bool = True) -> Iterator:
    target = DBConfig.from_settings(db_config)
    params = {
        "host": target.host,
        "port": target.port,
        "user": target.user,
        "password": target.password,
        "connection_timeout": target.connect_timeout,
        "use_pure": True,
    }
    if with_database:
        params["database"] = target.database

    conn = mysql.connector.connect(**params)
    try:
        yield conn
    finally:
        conn.close()


def _strip_create_db_and_use(sql: str) -> str:
    # schema.sql must work against whatever database DB_CONFIG names.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    return re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)


def _strip_line_comments(sql: str) -> str:
    return "\n".join(line for line in sql.splitlines() if not line.lstrip().startswith("--"))


def split_sql_statements(sql: str) -> Iterable[str]:
    """Split a script on ';' while leaving quoted semicolons alone."""
    buf: list[str] = []
    quote = None
    escaped = False

    for ch in sql:
        buf.append(ch)
        if escaped:
            escaped = False
        elif ch == "\\":
            escaped = True
        elif quote:
            if ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = "".join(buf[:-1]).strip()
            buf.clear()
            if stmt:
                yield stmt

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _run_script(db_config: dict, path: str | Path) -> int:
    sql = _strip_line_comments(_strip_create_db_and_use(Path(path).read_text(encoding="utf-8")))
    count = 0
    with _connect(db_config) as conn:
        cur = conn.cursor()
        for stmt in split_sql_statements(sql):
            cur.execute(stmt)
            count += 1
        conn.commit()
    return count


def ensure_database_exists(db_config: dict) -> None:
    name = DBConfig.from_settings(db_config).database
    with _connect(db_config, with_database=False) as conn:
        cur = conn.cursor()
        cur.execute(f"CREATE DATABASE IF NOT EXISTS `{name}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci")
        conn.commit()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    count = _run_script(db_config, schema_path)
    logger.info("applied %s (%d statements)", Path(schema_path).name, count)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    count = _run_script(db_config, seed_path)
    logger.info("applied %s (%d statements)", Path(seed_path).name, count)


def ensure_demo_users(db_config: dict) -> None:
    """Insert (or reset) one login per role; passwords are re-hashed each run."""
    with _connect(db_config) as conn:
        cur = conn.cursor()
        for name, email, password, role in DEMO_USERS:
            cur.execute(
                """
                INSERT INTO users (name, email, password_hash, role, is_active)
                VALUES (%s, %s, %s, %s, 1)
                ON DUPLICATE KEY UPDATE
                    name=VALUES(name), password_hash=VALUES(password_hash), role=VALUES(role), is_active=1
                """,
                (name, email, generate_password_hash(password), role.value),
            )
        conn.commit()
    logger.info("demo users ready: %s", ", ".join(email for _, email, _, _ in DEMO_USERS))


def list_tables(db_config: dict) -> list[str]:
    with _connect(db_config) as conn:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
