"""Service layer for the Project Directory.

This package contains the logic that sits between the Flask route
handlers and the database models: reading configuration switches,
resolving the caller's identity, storing banner images and assembling
the directory listing.

Nothing in this package should build HTTP responses. Services return
plain Python data or model objects, and raise exceptions defined in
``project_directory.errors`` when something goes wrong.
"""

from .banner_service import remove_banner, store_banner
from .config_service import is_editing_forbidden, is_enabled, get_setting, set_setting
from .directory_service import parse_tag, visible_projects
from .session_service import issue_token, resolve_identity, resolve_viewer

__all__ = [
    "remove_banner",
    "store_banner",
    "is_editing_forbidden",
    "is_enabled",
    "get_setting",
    "set_setting",
    "parse_tag",
    "visible_projects",
    "issue_token",
    "resolve_identity",
    "resolve_viewer",
]
