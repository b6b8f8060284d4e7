"""
Project endpoints, including the permissions view.
"""

import logging

import pytest
from postgrest.exceptions import APIError

from app.config.default_roles import DEFAULT_PROJECT_ROLES
from app.modules.roles.service import RoleService
from app.modules.projects.service import ProjectService

PROJECTS = "/api/v1/projects"


def test_create_project_seeds_boards_and_roles(client, auth, db):
    response = client.post(PROJECTS, json={"name": "Voyager"}, headers=auth("alice"))
    assert response.status_code == 201
    project = response.json()
    assert project["owner_id"] == "alice"

    boards = client.get(f"{PROJECTS}/{project['id']}/boards", headers=auth("alice")).json()
    assert [b["name"] for b in boards] == ["To Do", "In Progress", "Done"]
    assert [b["position"] for b in boards] == [0, 1, 2]

    roles = client.get(f"{PROJECTS}/{project['id']}/roles", headers=auth("alice")).json()
    assert len(roles) == len(DEFAULT_PROJECT_ROLES)
    by_name = {r["name"]: r for r in roles}
    assert by_name["Scrum Master"]["can_manage_roles"] is True
    assert by_name["UI/UX Designer"]["permission_level"] == "comment"
    assert by_name["QA Engineer"]["can_delete_tasks"] is False

    # The creator is the owner, never a membership row
    assert db.rows("project_members") == []


def test_create_project_survives_role_seeding_failure(client, auth, db, monkeypatch):
    def fail(self, project_id):
        raise RuntimeError("seed failed")
    monkeypatch.setattr(RoleService, "seed_default_roles", fail)

    response = client.post(PROJECTS, json={"name": "Voyager"}, headers=auth("alice"))
    assert response.status_code == 201
    assert db.rows("project_roles") == []


def test_create_project_requires_name(client, auth):
    response = client.post(PROJECTS, json={"name": ""}, headers=auth("alice"))
    assert response.status_code == 422


def test_list_projects_owned_and_joined(client, auth, db, team):
    db.add("projects", name="Side project", owner_id="member")

    names = [p["name"] for p in client.get(PROJECTS, headers=auth("member")).json()]
    assert names == ["Side project", "Apollo"]

    assert client.get(PROJECTS, headers=auth("outsider")).json() == []


def test_project_detail_includes_caller_permissions(client, auth, team):
    response = client.get(f"{PROJECTS}/{team.project_id}", headers=auth("assigner"))
    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Apollo"
    permissions = body["permissions"]
    assert permissions["is_owner"] is False
    assert permissions["coarse_role"] == "member"
    assert permissions["project_role"]["name"] == "Dispatcher"
    assert permissions["capabilities"] == ["assign_tasks", "edit_content"]


def test_owner_permissions(client, auth, team):
    body = client.get(f"{PROJECTS}/{team.project_id}/permissions", headers=auth("owner")).json()
    assert body["is_owner"] is True
    assert body["coarse_role"] == "owner"
    assert "is_owner_only" in body["capabilities"]


def test_viewer_sees_project_with_no_capabilities(client, auth, team):
    body = client.get(f"{PROJECTS}/{team.project_id}/permissions", headers=auth("viewer")).json()
    assert body["coarse_role"] == "viewer"
    assert body["capabilities"] == []


def test_outsider_and_unknown_project(client, auth, team):
    outsider = client.get(f"{PROJECTS}/{team.project_id}", headers=auth("outsider"))
    assert outsider.status_code == 403

    unknown = client.get(f"{PROJECTS}/does-not-exist", headers=auth("outsider"))
    assert unknown.status_code == 404


def test_update_project_requires_manage_project(client, auth, db, team):
    url = f"{PROJECTS}/{team.project_id}"
    assert client.put(url, json={"name": "Artemis"}, headers=auth("member")).status_code == 403

    role = db.add("project_roles", project_id=team.project_id, name="Lead", can_manage_project=True)
    team.memberships["member"]["project_role_id"] = role["id"]

    response = client.put(url, json={"name": "Artemis"}, headers=auth("member"))
    assert response.status_code == 200
    assert response.json()["name"] == "Artemis"


def test_update_project_with_no_fields(client, auth, team):
    response = client.put(f"{PROJECTS}/{team.project_id}", json={}, headers=auth("owner"))
    assert response.status_code == 400


def test_admin_cannot_delete_project(client, auth, team):
    response = client.delete(f"{PROJECTS}/{team.project_id}", headers=auth("admin"))
    assert response.status_code == 403


def test_owner_deletes_project_and_its_contents(client, auth, db, team):
    response = client.delete(f"{PROJECTS}/{team.project_id}", headers=auth("owner"))
    assert response.status_code == 204

    for table in ("projects", "boards", "tasks", "project_members", "project_roles"):
        assert db.rows(table) == [], table

    assert client.get(f"{PROJECTS}/{team.project_id}", headers=auth("owner")).status_code == 404


def test_create_project_survives_board_insert_failure(client, auth, db, caplog):
    db.fail_on("boards", "insert")
    with caplog.at_level(logging.ERROR, logger="app.modules.projects.service"):
        response = client.post(PROJECTS, json={"name": "Voyager"}, headers=auth("alice"))

    assert response.status_code == 201
    assert db.rows("boards") == []
    assert len(db.rows("project_roles")) == len(DEFAULT_PROJECT_ROLES)
    assert "Failed to create default boards" in caplog.text


def test_partial_project_delete_is_logged_and_raised(db, team, caplog):
    db.fail_on("project_members", "delete")
    with caplog.at_level(logging.ERROR, logger="app.modules.projects.service"):
        with pytest.raises(APIError):
            ProjectService(db).delete_project(team.project_id)

    assert "partially deleted; failed while deleting from project_members" in caplog.text
    assert db.rows("tasks") == []
    assert db.rows("boards") == []
    assert len(db.rows("project_members")) == 4
    assert len(db.rows("projects")) == 1

    # The owner can retry once the store recovers
    db.failures.clear()
    ProjectService(db).delete_project(team.project_id)
    assert db.rows("projects") == []
