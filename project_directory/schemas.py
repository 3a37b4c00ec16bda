"""
Serialization schemas using Marshmallow for the Project Directory.

These schemas convert the directory's SQLAlchemy models to the
JSON-friendly shapes returned by the API. Projects are serialised as
"light" records: enough to render a directory card, with the banner
reduced to its ``id`` and ``url``.
"""

from __future__ import annotations

from marshmallow import fields
from marshmallow_sqlalchemy import SQLAlchemyAutoSchema, auto_field

from .models import Project, BannerImage


class BannerImageSchema(SQLAlchemyAutoSchema):
    """Schema for serialising ``BannerImage`` objects."""

    class Meta:
        model = BannerImage
        load_instance = True
        fields = ("id", "url")


class ProjectSchema(SQLAlchemyAutoSchema):
    """Schema for the directory listing of ``Project`` objects."""

    tags = fields.List(fields.String())
    github_link = auto_field(data_key="githubLink")
    website_link = auto_field(data_key="websiteLink")
    video_link = auto_field(data_key="videoLink")
    banner = fields.Nested(BannerImageSchema, allow_none=True)

    class Meta:
        model = Project
        load_instance = True
