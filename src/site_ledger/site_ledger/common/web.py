from __future__ import annotations

from functools import wraps
from typing import Any

from flask import jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from ..core.constants import ALL_PROJECTS
from .datetime_utils import parse_optional_date
from .serialization import to_jsonable
from .validators import parse_id_list


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            raise AuthenticationError("Please log in to continue")
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            raise AuthenticationError("Please log in to continue")
        if session.get("role") != Role.ADMIN.value:
            raise AuthorizationError("Administrator role required")
        return view(*args, **kwargs)

    return wrapper


def ok(data: Any = None, status: int = 200, **extra):
    body = {"success": True, "data": to_jsonable(data)}
    body.update({k: to_jsonable(v) for k, v in extra.items()})
    return jsonify(body), status


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        # form posts are accepted as well
        data = request.form.to_dict()
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def query_date(name: str):
    return parse_optional_date(request.args.get(name), name)


def query_project_ids(name: str = "project_ids"):
    """``project_ids=1,2`` or ``project_id=3``; ``all`` or nothing means every project."""
    raw = request.args.get(name) or request.args.get("project_id")
    if raw is None or str(raw).strip().lower() == ALL_PROJECTS:
        return None
    return parse_id_list(raw, name)
