from __future__ import annotations

from contextlib import contextmanager
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from .connection import DatabaseConnection


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


def in_clause(column: str, values: Sequence[Any]) -> Tuple[str, List[Any]]:
    """Build ``column IN (%s, ...)`` for a non-empty sequence of values."""
    placeholders = ", ".join(["%s"] * len(values))
    return f"{column} IN ({placeholders})", list(values)


def build_where(conditions: Iterable[Tuple[str, Sequence[Any]]]) -> Tuple[str, List[Any]]:
    """Join (sql, params) fragments with AND into a WHERE clause."""
    parts: list[str] = []
    params: list[Any] = []
    for sql, values in conditions:
        parts.append(sql)
        params.extend(values)
    if not parts:
        return "", params
    return "WHERE " + " AND ".join(parts), params


def date_range_conditions(column: str, date_from: Optional[date], date_to: Optional[date]) -> list[Tuple[str, list]]:
    out: list[Tuple[str, list]] = []
    if date_from:
        out.append((f"{column} >= %s", [date_from]))
    if date_to:
        out.append((f"{column} <= %s", [date_to]))
    return out


def normalize_mysql_date(value: Any) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(str(value)[:10], "%Y-%m-%d").date()


def normalize_mysql_time(value: Any) -> Optional[time]:
    """TIME columns come back as ``time``, ``timedelta`` or ``'HH:MM[:SS]'`` depending on the connector."""
    if value is None or isinstance(value, time):
        return value
    if isinstance(value, timedelta):
        seconds = int(value.total_seconds()) % 86400
        return time(seconds // 3600, seconds % 3600 // 60, seconds % 60)
    if isinstance(value, str):
        parts = value.strip().split(":")
        if len(parts) < 2:
            raise ValueError(f"Invalid time string: {value!r}")
        h, m, s = (parts + ["0"])[:3]
        return time(int(h), int(m), int(s or 0))
    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")
