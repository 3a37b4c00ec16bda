"""Seed script for initial data.

Running this script populates the database with a demo project, an
owner account linked to it, an administrator and the default site
settings, then prints a bearer token for the demo owner so the banner
upload endpoint can be tried straight away::

    python -m seed.seed
    curl -X POST --data-binary @banner.jpg \\
        -H "Authorization: Bearer <token>" http://localhost:5000/api/banner/upload
"""
from __future__ import annotations

from project_directory import create_app, db
from project_directory.models import Project, Tag, User
from project_directory.services import issue_token, set_setting
from project_directory.services.config_service import DIRECTORY_DISABLED, FORBID_EDITING


def run_seeds() -> None:
    """Insert a demo project, its owner, an admin and default settings."""
    app = create_app()
    with app.app_context():
        db.create_all()
        project = Project(
            title="Demo Project",
            tagline="A project to try the directory with",
            description="Seeded example project.",
            tags=[Tag.TOOLING.value, Tag.EDUCATION.value],
            github_link="https://github.com/example/demo",
        )
        owner = User(email="owner@example.com", project=project)
        admin = User(email="admin@example.com", is_admin=True)
        db.session.add_all([project, owner, admin])
        set_setting(FORBID_EDITING, False)
        set_setting(DIRECTORY_DISABLED, False)
        db.session.commit()
        print("Seed data inserted successfully.")
        print(f"Token for {owner.email}: {issue_token(owner)}")


if __name__ == "__main__":
    run_seeds()
