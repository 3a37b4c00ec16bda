"""Serve stored banner images from the uploads directory."""
from __future__ import annotations

import os
import re

from flask import Blueprint, current_app, send_from_directory

from ..db import db
from ..errors import NotFoundError
from ..models import BannerImage

images_bp = Blueprint("images", __name__)

IMAGE_ID_RE = re.compile(r"^[0-9a-f]{32}$")


@images_bp.route("/res/images/<image_id>", methods=["GET"])
def get_image(image_id: str):
    """Return the JPEG stored for banner ``image_id``."""
    if not IMAGE_ID_RE.match(image_id) or db.session.get(BannerImage, image_id) is None:
        raise NotFoundError()
    # send_from_directory resolves relative paths against the app root
    folder = os.path.abspath(current_app.config["UPLOAD_FOLDER"])
    return send_from_directory(folder, f"{image_id}.jpg", mimetype="image/jpeg")
