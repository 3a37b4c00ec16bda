"""Resolve the caller's identity from a bearer JWT.

Tokens carry the user's id as their subject. A request without a token
resolves to ``None``; a malformed or expired token, or one naming a
user that no longer exists, is rejected by the JWT error callbacks
registered in ``project_directory.errors``.
"""
from __future__ import annotations

from typing import Optional

from flask_jwt_extended import create_access_token, get_current_user, verify_jwt_in_request
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt import PyJWTError

from ..db import db
from ..models import User


def register_identity_loader(jwt) -> None:
    """Teach the JWT manager how to turn a token subject into a ``User``."""
    @jwt.user_lookup_loader
    def load_user(jwt_header: dict, jwt_data: dict) -> Optional[User]:
        try:
            user_id = int(jwt_data["sub"])
        except (KeyError, TypeError, ValueError):
            return None
        return db.session.get(User, user_id)


def issue_token(user: User) -> str:
    """Mint an access token for ``user``."""
    return create_access_token(identity=str(user.id), additional_claims={"email": user.email})


def resolve_identity() -> Optional[User]:
    """Return the authenticated user for the current request, if any."""
    if verify_jwt_in_request(optional=True) is None:
        return None
    return get_current_user()


def resolve_viewer() -> Optional[User]:
    """Like :func:`resolve_identity`, but a bad token counts as anonymous.

    Used by public pages, where an expired or stale token must not hide
    content that anonymous visitors can see.
    """
    try:
        return resolve_identity()
    except (JWTExtendedException, PyJWTError):
        return None
