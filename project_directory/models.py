"""
Database models for the Project Directory.

Only the fields the directory and the banner handlers touch are
modelled. Each ``User`` may be linked to one ``Project``; each project
has at most one current ``BannerImage``. Banner images are deleted by
the upload handler when replaced, never by a cascade, because the
backing file on disk has to be removed alongside the record.
``SystemConfigSetting`` holds site-wide switches such as
``forbidEditing`` as generic JSON values.
"""

from __future__ import annotations

import enum
from typing import Optional, List

from . import db


class Tag(enum.Enum):
    """Fixed vocabulary of directory tags."""
    AI = "ai"
    EDUCATION = "education"
    ENVIRONMENT = "environment"
    FINANCE = "finance"
    GAMING = "gaming"
    HEALTH = "health"
    SOCIAL = "social"
    TOOLING = "tooling"


class User(db.Model):
    __allow_unmapped__ = True  # allow unmapped type annotations for SQLAlchemy 2.0
    """An account that may own a project."""
    __tablename__ = "users"

    id: int = db.Column(db.Integer, primary_key=True)
    email: str = db.Column(db.String(120), unique=True, nullable=False)
    is_admin: bool = db.Column(db.Boolean, nullable=False, default=False)
    project_id: Optional[int] = db.Column(db.Integer, db.ForeignKey("projects.id"), nullable=True)

    project: Optional[Project] = db.relationship("Project", back_populates="members")

    def __repr__(self) -> str:
        return f"<User {self.email}>"


class Project(db.Model):
    __allow_unmapped__ = True
    """A user-submitted project listed in the directory."""
    __tablename__ = "projects"

    id: int = db.Column(db.Integer, primary_key=True)
    title: str = db.Column(db.String(100), nullable=False)
    tagline: Optional[str] = db.Column(db.String(255))
    description: Optional[str] = db.Column(db.Text)
    # List of ``Tag`` values
    tags: List[str] = db.Column(db.JSON, nullable=False, default=list)
    github_link: Optional[str] = db.Column(db.String(255))
    website_link: Optional[str] = db.Column(db.String(255))
    video_link: Optional[str] = db.Column(db.String(255))

    members: List[User] = db.relationship("User", back_populates="project")
    banner: Optional[BannerImage] = db.relationship("BannerImage", back_populates="project", uselist=False)

    def has_tag(self, tag: Tag) -> bool:
        return tag.value in (self.tags or [])

    def __repr__(self) -> str:
        return f"<Project {self.title}>"


class BannerImage(db.Model):
    __allow_unmapped__ = True
    """Banner image metadata; the bytes live in ``UPLOAD_FOLDER/<id>.jpg``."""
    __tablename__ = "banner_images"

    id: str = db.Column(db.String(32), primary_key=True)
    url: str = db.Column(db.String(255), nullable=False)
    # Unique: a project has at most one current banner
    project_id: int = db.Column(db.Integer, db.ForeignKey("projects.id"), unique=True, nullable=False)

    project: Project = db.relationship("Project", back_populates="banner")

    def __repr__(self) -> str:
        return f"<BannerImage {self.id} project={self.project_id}>"


class SystemConfigSetting(db.Model):
    __allow_unmapped__ = True
    """Site-wide key/value setting."""
    __tablename__ = "system_config_settings"

    key: str = db.Column(db.String(64), primary_key=True)
    value = db.Column(db.JSON, nullable=True)

    def __repr__(self) -> str:
        return f"<SystemConfigSetting {self.key}={self.value!r}>"
