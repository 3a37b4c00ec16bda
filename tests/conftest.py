"""Shared pytest fixtures.

Each test gets its own app bound to an in-memory SQLite database and a
temporary uploads directory, plus helpers for creating accounts and
minting bearer tokens for them.
"""
from __future__ import annotations

import os

import pytest

from project_directory import create_app, db
from project_directory.models import BannerImage, Project, User
from project_directory.services import issue_token, set_setting


@pytest.fixture
def app(tmp_path):
    app = create_app(
        {
            "TESTING": True,
            "SQLALCHEMY_DATABASE_URI": "sqlite://",
            "JWT_SECRET_KEY": "test-secret-key-with-enough-length-for-hs256",
            "UPLOAD_FOLDER": str(tmp_path / "uploads"),
        }
    )
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def upload_dir(app) -> str:
    return app.config["UPLOAD_FOLDER"]


def make_user(app, email: str = "owner@example.com", with_project: bool = True, is_admin: bool = False) -> dict:
    """Create a user (optionally owning a project) and return ids and a token."""
    with app.app_context():
        project = Project(title=f"{email} project", tags=[]) if with_project else None
        user = User(email=email, is_admin=is_admin, project=project)
        db.session.add(user)
        db.session.commit()
        return {
            "user_id": user.id,
            "project_id": project.id if project else None,
            "token": issue_token(user),
        }


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def set_config(app, key: str, value) -> None:
    with app.app_context():
        set_setting(key, value)
        db.session.commit()


def banner_ids(app, project_id: int) -> list[str]:
    with app.app_context():
        return [b.id for b in BannerImage.query.filter_by(project_id=project_id).all()]


def uploaded_files(upload_dir: str) -> list[str]:
    if not os.path.isdir(upload_dir):
        return []
    return sorted(os.listdir(upload_dir))


@pytest.fixture
def owner(app) -> dict:
    return make_user(app)
