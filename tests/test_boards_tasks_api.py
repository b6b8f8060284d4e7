"""
Boards and tasks: content edits, assignment and deletion gating.
"""

API = "/api/v1"


def board_tasks_url(team, board="todo"):
    return f"{API}/boards/{team.boards[board]['id']}/tasks"


def task_url(task_id):
    return f"{API}/tasks/{task_id}"


# Boards

def test_members_list_boards_in_order(client, auth, team):
    response = client.get(f"{API}/projects/{team.project_id}/boards", headers=auth("viewer"))
    assert response.status_code == 200
    assert [b["name"] for b in response.json()] == ["To Do", "Done"]


def test_member_creates_board_at_end(client, auth, team):
    response = client.post(
        f"{API}/projects/{team.project_id}/boards", json={"name": "Review"}, headers=auth("member")
    )
    assert response.status_code == 201
    assert response.json()["position"] == 2


def test_viewer_cannot_create_board(client, auth, team):
    response = client.post(
        f"{API}/projects/{team.project_id}/boards", json={"name": "Review"}, headers=auth("viewer")
    )
    assert response.status_code == 403


def test_rename_board(client, auth, team):
    url = f"{API}/boards/{team.boards['done']['id']}"
    response = client.put(url, json={"name": "Shipped"}, headers=auth("member"))
    assert response.status_code == 200
    assert response.json()["name"] == "Shipped"

    assert client.put(url, json={}, headers=auth("member")).status_code == 400


def test_board_delete_is_owner_only(client, auth, db, team):
    url = f"{API}/boards/{team.boards['todo']['id']}"
    assert client.delete(url, headers=auth("member")).status_code == 403

    role = db.add("project_roles", project_id=team.project_id, name="Lead", can_manage_project=True)
    team.memberships["member"]["project_role_id"] = role["id"]
    assert client.delete(url, headers=auth("member")).status_code == 403

    denied = client.delete(url, headers=auth("admin"))
    assert denied.status_code == 403
    assert denied.json()["detail"] == "Only the project owner can perform this action"

    assert client.delete(url, headers=auth("owner")).status_code == 204
    assert db.rows("tasks") == []
    assert [b["name"] for b in db.rows("boards")] == ["Done"]


def test_unknown_board_is_forbidden(client, auth, team):
    response = client.post(f"{API}/boards/nope/tasks", json={"title": "x"}, headers=auth("owner"))
    assert response.status_code == 403
    assert response.json()["detail"] == "Not a party to this project"


def test_outsider_cannot_tell_existing_tasks_from_missing_ones(client, auth, team):
    existing = client.get(task_url(team.task["id"]), headers=auth("outsider"))
    missing = client.get(task_url("does-not-exist"), headers=auth("outsider"))
    assert existing.status_code == missing.status_code == 403
    assert existing.json() == missing.json()


def test_outsider_cannot_tell_existing_boards_from_missing_ones(client, auth, team):
    existing = client.post(board_tasks_url(team), json={"title": "x"}, headers=auth("outsider"))
    missing = client.post(f"{API}/boards/does-not-exist/tasks", json={"title": "x"}, headers=auth("outsider"))
    assert existing.status_code == missing.status_code == 403
    assert existing.json() == missing.json()


# Tasks

def test_viewer_cannot_create_task(client, auth, team):
    response = client.post(board_tasks_url(team), json={"title": "Draft"}, headers=auth("viewer"))
    assert response.status_code == 403


def test_member_creates_task(client, auth, team):
    response = client.post(
        board_tasks_url(team), json={"title": "Draft", "priority": "high"}, headers=auth("member")
    )
    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "todo"
    assert body["created_by"] == "member"
    assert body["position"] == 1
    assert body["assigned_to"] is None


def test_assigning_on_create_requires_assign_tasks(client, auth, team):
    payload = {"title": "Draft", "assigned_to": "member"}
    denied = client.post(board_tasks_url(team), json=payload, headers=auth("member"))
    assert denied.status_code == 403

    allowed = client.post(board_tasks_url(team), json=payload, headers=auth("assigner"))
    assert allowed.status_code == 201
    assert allowed.json()["assigned_to"] == "member"


def test_assignee_must_belong_to_project(client, auth, team):
    response = client.post(
        board_tasks_url(team), json={"title": "Draft", "assigned_to": "outsider"}, headers=auth("owner")
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Assignee is not a member of this project"


def test_owner_can_be_assigned(client, auth, team):
    response = client.post(
        board_tasks_url(team), json={"title": "Draft", "assigned_to": "owner"}, headers=auth("admin")
    )
    assert response.status_code == 201


def test_list_and_get_tasks(client, auth, team):
    listed = client.get(f"{API}/projects/{team.project_id}/tasks", headers=auth("viewer"))
    assert listed.status_code == 200
    assert [t["title"] for t in listed.json()] == ["Write brief"]

    fetched = client.get(task_url(team.task["id"]), headers=auth("viewer"))
    assert fetched.status_code == 200
    assert fetched.json()["board_id"] == team.boards["todo"]["id"]

    assert client.get(task_url(team.task["id"]), headers=auth("outsider")).status_code == 403
    assert client.get(task_url("missing"), headers=auth("owner")).status_code == 403


def test_member_updates_task_content(client, auth, team):
    response = client.put(
        task_url(team.task["id"]),
        json={"title": "Write the brief", "status": "in_progress"},
        headers=auth("member"),
    )
    assert response.status_code == 200
    assert response.json()["status"] == "in_progress"


def test_viewer_cannot_update_task(client, auth, team):
    response = client.put(task_url(team.task["id"]), json={"title": "No"}, headers=auth("viewer"))
    assert response.status_code == 403


def test_reassigning_requires_assign_tasks(client, auth, team):
    url = task_url(team.task["id"])
    assert client.put(url, json={"assigned_to": "admin"}, headers=auth("member")).status_code == 403

    response = client.put(url, json={"assigned_to": "admin"}, headers=auth("assigner"))
    assert response.status_code == 200
    assert response.json()["assigned_to"] == "admin"

    # Unchanged assignee needs no extra capability
    same = client.put(url, json={"assigned_to": "admin", "title": "Brief"}, headers=auth("member"))
    assert same.status_code == 200

    cleared = client.put(url, json={"assigned_to": None}, headers=auth("assigner"))
    assert cleared.status_code == 200
    assert cleared.json()["assigned_to"] is None


def test_move_task_between_boards(client, auth, team):
    response = client.put(
        task_url(team.task["id"]), json={"board_id": team.boards["done"]["id"]}, headers=auth("member")
    )
    assert response.status_code == 200
    assert response.json()["board_id"] == team.boards["done"]["id"]


def test_cannot_move_task_to_another_projects_board(client, auth, db, team):
    other = db.add("projects", name="Gemini", owner_id="member")
    foreign_board = db.add("boards", project_id=other["id"], name="Backlog")

    response = client.put(
        task_url(team.task["id"]), json={"board_id": foreign_board["id"]}, headers=auth("member")
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Tasks cannot be moved to another project's board"


def test_moving_task_to_missing_board_is_404(client, auth, team):
    response = client.put(task_url(team.task["id"]), json={"board_id": "gone"}, headers=auth("member"))
    assert response.status_code == 404
    assert response.json()["detail"] == "Board not found"


def test_delete_task_requires_delete_tasks(client, auth, db, team):
    url = task_url(team.task["id"])
    assert client.delete(url, headers=auth("member")).status_code == 403
    assert client.delete(url, headers=auth("assigner")).status_code == 403

    role = db.add("project_roles", project_id=team.project_id, name="Janitor", can_delete_tasks=True)
    team.memberships["member"]["project_role_id"] = role["id"]

    assert client.delete(url, headers=auth("member")).status_code == 204
    assert db.rows("tasks") == []
