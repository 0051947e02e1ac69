from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """An account allowed to use the ledger."""

    user_id: int
    full_name: str
    username: str
    password_hash: str
    role: Role
    is_active: bool = True
    created_at: Optional[datetime] = None
