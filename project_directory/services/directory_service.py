"""Project directory listing.

The directory can be hidden site-wide through the ``directoryDisabled``
setting; administrators still see every project while it is hidden.
"""
from __future__ import annotations

from typing import List, Optional

from ..errors import BadRequestError
from ..models import Project, Tag, User
from .config_service import DIRECTORY_DISABLED, is_enabled


def parse_tag(raw: Optional[str]) -> Optional[Tag]:
    """Turn a ``?tag=`` query value into a ``Tag``; blank means no filter."""
    if not raw:
        return None
    try:
        return Tag(raw.strip().lower())
    except ValueError:
        raise BadRequestError(f"Bad Request: Unknown tag '{raw}'")


def visible_projects(viewer: Optional[User], tag: Optional[Tag] = None) -> tuple[List[Project], bool]:
    """Return the projects ``viewer`` may see and whether the directory is hidden.

    Parameters
    ----------
    viewer: Optional[User]
        The authenticated caller, or ``None`` for anonymous requests.
    tag: Optional[Tag]
        Only projects carrying this tag are returned when given.
    """
    directory_disabled = is_enabled(DIRECTORY_DISABLED)
    if directory_disabled and not (viewer and viewer.is_admin):
        return [], directory_disabled
    projects = Project.query.order_by(Project.id.asc()).all()
    if tag is not None:
        projects = [p for p in projects if p.has_tag(tag)]
    return projects, directory_disabled
