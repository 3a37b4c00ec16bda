"""
Routes for a project's banner image.

The upload endpoint takes the raw request body (no multipart parsing)
and streams it to disk through ``store_banner``. Checks run in a fixed
order: the site-wide editing lock, then the declared ``Content-Length``
(so an oversized upload is refused before any authentication or
storage work), then the caller's session.
"""

from __future__ import annotations

from flask import Blueprint, current_app, request

from ..errors import BadRequestError, EditingForbidden, NotFoundError, PayloadTooLarge, Unauthenticated
from ..models import Project
from ..services import is_editing_forbidden, remove_banner, resolve_identity, store_banner


banner_bp = Blueprint("banner", __name__)


def _caller_project() -> Project:
    """Return the project linked to the authenticated caller."""
    user = resolve_identity()
    if user is None:
        raise Unauthenticated()
    if user.project is None:
        raise BadRequestError("Bad Request: No project is linked to this account")
    return user.project


@banner_bp.route("/banner/upload", methods=["POST"], provide_automatic_options=False)
def upload_banner() -> tuple[dict, int]:
    """Replace the caller's project banner with the request body.

    Returns the URL the image is served from. The response is only sent
    once the whole body has been written and the file closed.
    """
    if is_editing_forbidden():
        raise EditingForbidden()

    max_size = current_app.config["MAX_BANNER_SIZE"]
    if (request.content_length or 0) > max_size:
        raise PayloadTooLarge()

    project = _caller_project()
    banner = store_banner(
        project,
        request.stream,
        max_size=max_size,
        chunk_size=current_app.config["UPLOAD_CHUNK_SIZE"],
    )
    return {"url": banner.url}, 200


@banner_bp.route("/banner", methods=["DELETE"])
def delete_banner() -> tuple[dict, int]:
    """Remove the caller's project banner and its image file."""
    if is_editing_forbidden():
        raise EditingForbidden()
    project = _caller_project()
    if remove_banner(project) is None:
        raise NotFoundError("Not Found: Project has no banner image")
    return {"deleted": True}, 200
