"""Banner image storage.

A project's banner is a ``BannerImage`` record plus a JPEG file named
after the record id in ``UPLOAD_FOLDER``. Replacing a banner removes
the previous record and file before the new upload is streamed to disk.
The new record is written first and is provisional until the body has
been copied in full: if the copy fails or the body grows past the size
ceiling, both the record and the partial file are removed again, which
keeps the "file exists iff record exists" pairing intact.

File deletions are best-effort. A file that cannot be removed is
logged and left behind as a stale file; it never turns a request into
a failure.
"""
from __future__ import annotations

import logging
import os
import uuid
from typing import BinaryIO, Optional

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from ..db import db
from ..errors import InternalError, PayloadTooLarge
from ..models import BannerImage, Project

logger = logging.getLogger(__name__)

IMAGE_URL_PREFIX = "/api/res/images/"


def new_image_id() -> str:
    return uuid.uuid4().hex


def banner_url(image_id: str) -> str:
    return f"{IMAGE_URL_PREFIX}{image_id}"


def upload_folder() -> str:
    return current_app.config["UPLOAD_FOLDER"]


def banner_path(image_id: str) -> str:
    """Location of the file backing banner ``image_id``."""
    return os.path.join(upload_folder(), f"{image_id}.jpg")


def discard_file(path: str) -> bool:
    """Delete ``path`` if possible. Returns True when a file was removed."""
    try:
        os.remove(path)
    except FileNotFoundError:
        logger.warning("Image file %s was already gone", path)
        return False
    except OSError:
        logger.exception("Error deleting image file %s", path)
        return False
    return True


def remove_banner(project: Project) -> Optional[BannerImage]:
    """Delete the project's current banner record and its file.

    Returns the removed record, or ``None`` if the project had no
    banner. The record deletion is committed before the file is touched.
    """
    banner = project.banner
    if banner is None:
        return None
    image_id = banner.id
    db.session.delete(banner)
    db.session.commit()
    discard_file(banner_path(image_id))
    logger.info("Removed banner %s from project %s", image_id, project.id)
    return banner


def copy_limited(stream: BinaryIO, path: str, max_size: int, chunk_size: int) -> int:
    """Copy ``stream`` into ``path`` chunk by chunk.

    Raises ``PayloadTooLarge`` as soon as more than ``max_size`` bytes
    have been read; nothing past the ceiling is written and the rest of
    the stream is left unread. Returns the number of bytes written.
    """
    size = 0
    with open(path, "wb") as fh:
        while True:
            chunk = stream.read(chunk_size)
            if not chunk:
                break
            size += len(chunk)
            if size > max_size:
                raise PayloadTooLarge(close_connection=True)
            fh.write(chunk)
    return size


def _discard_provisional(banner: BannerImage, image_id: str) -> None:
    try:
        db.session.delete(banner)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Error deleting provisional banner record %s", image_id)
    discard_file(banner_path(image_id))


def store_banner(project: Project, stream: BinaryIO, max_size: int, chunk_size: int) -> BannerImage:
    """Replace the project's banner with the image read from ``stream``.

    Parameters
    ----------
    project: Project
        The project receiving the banner.
    stream: BinaryIO
        Raw request body. Read incrementally, never buffered whole.
    max_size: int
        Size ceiling in bytes, enforced on the bytes actually read.
    chunk_size: int
        Number of bytes requested per read.

    Returns
    -------
    BannerImage
        The committed record for the new banner.
    """
    remove_banner(project)

    image_id = new_image_id()
    banner = BannerImage(id=image_id, url=banner_url(image_id), project_id=project.id)
    db.session.add(banner)
    db.session.commit()

    path = banner_path(image_id)
    try:
        os.makedirs(upload_folder(), exist_ok=True)
        size = copy_limited(stream, path, max_size, chunk_size)
    except Exception as exc:
        _discard_provisional(banner, image_id)
        if isinstance(exc, PayloadTooLarge):
            logger.info("Aborted banner upload %s: body exceeded %d bytes", image_id, max_size)
            raise
        if isinstance(exc, OSError):
            raise InternalError() from exc
        raise

    logger.info("Stored banner %s (%d bytes) for project %s", image_id, size, project.id)
    return banner
