"""API Dependencies — caller identity for ownership-scoped routes.

Invariants:
    - A missing or blank identity header raises UnauthorizedError before any DB work
    - The header name comes from settings (user_id_header)

Design Decisions:
    - Authentication lives upstream (proxy/gateway); this layer only reads the
      already-authenticated user id
"""

from fastapi import Request

from yogalog.config import get_settings
from yogalog.core.domain_types import UserId
from yogalog.core.errors import UnauthorizedError

MAX_USER_ID_LENGTH = 64


def get_current_user_id(request: Request) -> UserId:
    """FastAPI dependency: the caller's user id from the identity header."""
    raw = request.headers.get(get_settings().user_id_header, "").strip()
    if not raw or len(raw) > MAX_USER_ID_LENGTH:
        raise UnauthorizedError()
    return UserId(raw)
