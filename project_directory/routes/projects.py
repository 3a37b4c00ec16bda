"""
Routes for the public project directory.

Listing is open to anonymous callers. A bearer token is optional (an
expired or unreadable one is treated as no token at all); when
present it identifies administrators, who can still see the directory
while it is hidden.
"""

from __future__ import annotations

from flask import Blueprint, request

from ..models import Tag
from ..schemas import ProjectSchema
from ..services import parse_tag, resolve_viewer, visible_projects


projects_bp = Blueprint("projects", __name__)


@projects_bp.route("/projects", methods=["GET"])
def list_projects() -> tuple[dict, int]:
    """List directory projects, optionally filtered by ``?tag=``."""
    tag = parse_tag(request.args.get("tag"))
    viewer = resolve_viewer()
    projects, directory_disabled = visible_projects(viewer, tag)
    return {
        "directoryDisabled": directory_disabled,
        "userIsAdmin": bool(viewer and viewer.is_admin),
        "projects": ProjectSchema(many=True).dump(projects),
    }, 200


@projects_bp.route("/tags", methods=["GET"])
def list_tags() -> tuple[list[str], int]:
    """List the tag vocabulary usable with ``/projects?tag=``."""
    return [tag.value for tag in Tag], 200
