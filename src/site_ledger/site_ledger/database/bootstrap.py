"""Schema and demo data setup, used by ``create_app`` and ``scripts/``.

Every step is idempotent: the schema uses ``CREATE TABLE IF NOT EXISTS``,
the seed file ``INSERT IGNORE`` and the demo accounts an upsert.
"""

from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from pathlib import Path

import mysql.connector
from werkzeug.security import generate_password_hash

from .connection import DBConfig

logger = logging.getLogger(__name__)

DEMO_USERS = (
    ("Site Administrator", "admin", "admin123", "admin"),
    ("Site Accountant", "accountant", "staff123", "staff"),
)

# the target database comes from DB_CONFIG, not from the script
_DATABASE_LINES = re.compile(r"(?im)^\s*(CREATE\s+DATABASE|USE)\b.*?;\s*$")


@contextmanager
def _server(db_config: dict, *, select_database: bool = True):
    target = DBConfig.from_dict(db_config)
    params = dict(host=target.host, port=target.port, user=target.user, password=target.password, use_pure=True)
    if select_database:
        params["database"] = target.database
    conn = mysql.connector.connect(**params)
    try:
        yield conn
        conn.commit()
    finally:
        conn.close()


def split_statements(sql: str) -> list[str]:
    """Split a script on ``;`` outside quoted strings; ``--`` comment lines are dropped."""

    text = "\n".join(line for line in sql.splitlines() if not line.lstrip().startswith("--"))
    statements: list[str] = []
    start, quote, i = 0, None, 0
    while i < len(text):
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if quote:
            if ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            statements.append(text[start:i])
            start = i + 1
        i += 1
    statements.append(text[start:])
    return [s.strip() for s in statements if s.strip()]


def _run_script(db_config: dict, path: Path) -> int:
    statements = split_statements(_DATABASE_LINES.sub("", path.read_text(encoding="utf-8")))
    with _server(db_config) as conn:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
    return len(statements)


def ensure_database_exists(db_config: dict) -> None:
    name = DBConfig.from_dict(db_config).database
    with _server(db_config, select_database=False) as conn:
        conn.cursor().execute(
            f"CREATE DATABASE IF NOT EXISTS `{name}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    count = _run_script(db_config, Path(schema_path))
    logger.info("schema: %s statements from %s", count, schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    count = _run_script(db_config, Path(seed_path))
    logger.info("seed: %s statements from %s", count, seed_path)


def ensure_demo_users(db_config: dict) -> None:
    with _server(db_config) as conn:
        cur = conn.cursor()
        for full_name, username, password, role in DEMO_USERS:
            cur.execute(
                """
                INSERT INTO users (full_name, username, password_hash, role, is_active)
                VALUES (%s, %s, %s, %s, 1)
                ON DUPLICATE KEY UPDATE
                    full_name = VALUES(full_name),
                    password_hash = VALUES(password_hash),
                    role = VALUES(role),
                    is_active = 1
                """,
                (full_name, username, generate_password_hash(password), role),
            )
    logger.info("demo users ready: %s", ", ".join(u[1] for u in DEMO_USERS))


def list_tables(db_config: dict) -> list[str]:
    with _server(db_config) as conn:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
