"""Tests for the project directory listing."""
from __future__ import annotations

import pytest

from project_directory import db
from project_directory.models import Project, Tag
from project_directory.services.config_service import DIRECTORY_DISABLED

from conftest import auth_headers, make_user, set_config


@pytest.fixture
def projects(app) -> None:
    with app.app_context():
        db.session.add_all(
            [
                Project(title="Tutor Bot", tags=[Tag.AI.value, Tag.EDUCATION.value], github_link="https://github.com/x/tutor"),
                Project(title="Green Route", tags=[Tag.ENVIRONMENT.value]),
                Project(title="Ledger", tags=[Tag.FINANCE.value, Tag.AI.value]),
            ]
        )
        db.session.commit()


def _titles(response) -> list[str]:
    return [p["title"] for p in response.get_json()["projects"]]


def test_health_endpoint(client) -> None:
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.get_json() == {"status": "ok"}


def test_lists_all_projects(client, projects) -> None:
    response = client.get("/api/projects")
    assert response.status_code == 200
    body = response.get_json()
    assert body["directoryDisabled"] is False
    assert body["userIsAdmin"] is False
    assert _titles(response) == ["Tutor Bot", "Green Route", "Ledger"]


def test_project_records_are_light(client, projects) -> None:
    project = client.get("/api/projects").get_json()["projects"][0]
    assert project["githubLink"] == "https://github.com/x/tutor"
    assert project["tags"] == ["ai", "education"]
    assert project["banner"] is None


def test_filters_by_tag(client, projects) -> None:
    response = client.get("/api/projects?tag=ai")
    assert _titles(response) == ["Tutor Bot", "Ledger"]


def test_tag_filter_is_case_insensitive(client, projects) -> None:
    assert _titles(client.get("/api/projects?tag=Environment")) == ["Green Route"]


def test_unknown_tag_is_bad_request(client, projects) -> None:
    response = client.get("/api/projects?tag=space")
    assert response.status_code == 400
    assert "space" in response.get_json()["e"]


def test_listing_includes_banner(client, owner) -> None:
    url = client.post(
        "/api/banner/upload", data=b"img", headers=auth_headers(owner["token"])
    ).get_json()["url"]
    [project] = client.get("/api/projects").get_json()["projects"]
    assert project["banner"]["url"] == url


def test_hidden_directory_is_empty_for_visitors(app, client, projects) -> None:
    set_config(app, DIRECTORY_DISABLED, True)
    body = client.get("/api/projects").get_json()
    assert body["directoryDisabled"] is True
    assert body["projects"] == []


def test_hidden_directory_is_visible_to_admins(app, client, projects) -> None:
    admin = make_user(app, email="admin@example.com", with_project=False, is_admin=True)
    set_config(app, DIRECTORY_DISABLED, True)
    body = client.get("/api/projects", headers=auth_headers(admin["token"])).get_json()
    assert body["userIsAdmin"] is True
    assert len(body["projects"]) == 3


def test_lists_tag_vocabulary(client) -> None:
    response = client.get("/api/tags")
    assert response.status_code == 200
    assert response.get_json() == [tag.value for tag in Tag]


def test_unknown_route_is_json_not_found(client) -> None:
    response = client.get("/api/nope")
    assert response.status_code == 404
    assert response.get_json() == {"e": "Not Found"}


def test_garbage_token_gets_anonymous_listing(client, projects) -> None:
    response = client.get("/api/projects", headers=auth_headers("garbage"))
    assert response.status_code == 200
    assert response.get_json()["userIsAdmin"] is False
    assert len(response.get_json()["projects"]) == 3


def test_stale_token_gets_anonymous_listing(app, client, projects) -> None:
    from project_directory.models import User

    gone = make_user(app, email="gone@example.com", with_project=False, is_admin=True)
    with app.app_context():
        db.session.delete(db.session.get(User, gone["user_id"]))
        db.session.commit()
    response = client.get("/api/projects", headers=auth_headers(gone["token"]))
    assert response.status_code == 200
    assert response.get_json()["userIsAdmin"] is False
    assert len(response.get_json()["projects"]) == 3


def test_stale_token_still_rejected_for_uploads(app, client) -> None:
    from project_directory.models import User

    gone = make_user(app, email="gone@example.com")
    with app.app_context():
        db.session.delete(db.session.get(User, gone["user_id"]))
        db.session.commit()
    response = client.post("/api/banner/upload", data=b"img", headers=auth_headers(gone["token"]))
    assert response.status_code == 401
