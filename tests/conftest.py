"""
Shared fixtures.

The Supabase client is replaced with an in-memory fake implementing the
PostgREST query-builder calls the services make. Identity is taken from the
bearer token itself: "Authorization: Bearer <user_id>".
"""

import itertools
import uuid
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from fastapi import HTTPException, Request
from fastapi.testclient import TestClient
from postgrest.exceptions import APIError

from app.main import app
from app.database.supabase_client import get_supabase
from app.core.dependencies import get_current_user_id


UNIQUE_KEYS = {
    "project_roles": ("project_id", "name"),
    "project_members": ("project_id", "user_id"),
    "user_profiles": ("email",),
}

DEFAULTS = {
    "projects": {"description": None, "updated_at": None},
    "boards": {"position": 0},
    "tasks": {
        "description": None, "priority": "medium", "status": "todo", "due_date": None,
        "assigned_to": None, "position": 0, "updated_at": None,
    },
    "project_members": {"role": "member", "project_role_id": None},
    "project_roles": {
        "description": None, "permission_level": "view", "can_manage_members": False,
        "can_manage_roles": False, "can_assign_tasks": False, "can_delete_tasks": False,
        "can_manage_project": False, "updated_at": None,
    },
}


class FakeQuery:
    def __init__(self, db, table):
        self.db = db
        self.table = table
        self.op = "select"
        self.payload = None
        self.filters = []
        self.ordering = None
        self.row_limit = None
        self.row_offset = 0

    def select(self, *columns):
        self.op = "select"
        return self

    def insert(self, payload):
        self.op = "insert"
        self.payload = payload
        return self

    def update(self, payload):
        self.op = "update"
        self.payload = payload
        return self

    def delete(self):
        self.op = "delete"
        return self

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def neq(self, column, value):
        self.filters.append(lambda row: row.get(column) != value)
        return self

    def in_(self, column, values):
        values = list(values)
        self.filters.append(lambda row: row.get(column) in values)
        return self

    def order(self, column, desc=False):
        self.ordering = (column, desc)
        return self

    def limit(self, count):
        self.row_limit = count
        return self

    def offset(self, count):
        self.row_offset = count
        return self

    def _matching(self):
        return [row for row in self.db.rows(self.table) if all(f(row) for f in self.filters)]

    def execute(self):
        self.db.calls.append((self.table, self.op))
        if (self.table, self.op) in self.db.failures:
            raise APIError({"message": "connection lost", "code": "08006", "hint": None, "details": None})
        if self.op == "insert":
            data = self.db.insert(self.table, self.payload)
        elif self.op == "update":
            data = []
            for row in self._matching():
                candidate = {**row, **self.payload}
                self.db.check_unique(self.table, candidate, ignore_id=row["id"])
                row.update(self.payload)
                data.append(dict(row))
        elif self.op == "delete":
            doomed = self._matching()
            ids = {row["id"] for row in doomed}
            self.db.tables[self.table] = [r for r in self.db.rows(self.table) if r["id"] not in ids]
            data = [dict(row) for row in doomed]
        else:
            data = [dict(row) for row in self._matching()]
            if self.ordering:
                column, desc = self.ordering
                data.sort(key=lambda r: (r.get(column) is None, r.get(column)), reverse=desc)
            data = data[self.row_offset:]
            if self.row_limit is not None:
                data = data[:self.row_limit]
        return SimpleNamespace(data=data)


class FakeSupabase:
    """Just enough of supabase.Client for the services"""

    def __init__(self):
        self.tables = {}
        self.calls = []
        self.failures = set()
        self._clock = itertools.count()
        self._epoch = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def rows(self, table):
        return self.tables.setdefault(table, [])

    def table(self, name):
        return FakeQuery(self, name)

    def _timestamp(self):
        return (self._epoch + timedelta(seconds=next(self._clock))).isoformat()

    def check_unique(self, table, row, ignore_id=None):
        keys = UNIQUE_KEYS.get(table)
        if not keys:
            return
        for existing in self.rows(table):
            if existing["id"] == ignore_id:
                continue
            if all(existing.get(k) == row.get(k) for k in keys):
                raise APIError({
                    "message": f'duplicate key value violates unique constraint "{table}_key"',
                    "code": "23505",
                    "hint": None,
                    "details": None,
                })

    def insert(self, table, payload):
        rows = payload if isinstance(payload, list) else [payload]
        created = []
        for values in rows:
            row = {**DEFAULTS.get(table, {}), **values}
            row.setdefault("id", str(uuid.uuid4()))
            row.setdefault("created_at", self._timestamp())
            self.check_unique(table, row)
            self.rows(table).append(row)
            created.append(dict(row))
        return created

    def fail_on(self, table, op):
        """Make every later (table, op) statement raise a store error"""
        self.failures.add((table, op))

    def add(self, table, **values):
        """Seed a row; returns the stored row so tests can mutate it in place"""
        self.insert(table, values)
        return self.rows(table)[-1]


def _current_user_from_token(request: Request) -> dict:
    header = request.headers.get("Authorization", "")
    if not header.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Not authenticated")
    user_id = header[len("Bearer "):]
    return {"id": user_id, "email": f"{user_id}@example.com"}


@pytest.fixture
def db():
    return FakeSupabase()


@pytest.fixture
def client(db):
    app.dependency_overrides[get_supabase] = lambda: db
    app.dependency_overrides[get_current_user_id] = _current_user_from_token
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth():
    """Headers authenticating as the given user id"""
    def headers(user_id: str) -> dict:
        return {"Authorization": f"Bearer {user_id}"}
    return headers


@pytest.fixture
def team(db):
    """
    A project owned by "owner" with an admin, a plain member, a viewer and a
    member bound to a role that can only assign tasks. "outsider" has a
    profile but no standing on the project.
    """
    for user_id in ("owner", "admin", "member", "viewer", "assigner", "outsider"):
        db.add("user_profiles", id=user_id, email=f"{user_id}@example.com", full_name=user_id.title())

    project = db.add("projects", name="Apollo", owner_id="owner")
    todo = db.add("boards", project_id=project["id"], name="To Do", position=0)
    done = db.add("boards", project_id=project["id"], name="Done", position=1)
    assigner_role = db.add(
        "project_roles", project_id=project["id"], name="Dispatcher",
        permission_level="edit", can_assign_tasks=True,
    )

    memberships = {
        "admin": db.add("project_members", project_id=project["id"], user_id="admin", role="admin"),
        "member": db.add("project_members", project_id=project["id"], user_id="member", role="member"),
        "viewer": db.add("project_members", project_id=project["id"], user_id="viewer", role="viewer"),
        "assigner": db.add(
            "project_members", project_id=project["id"], user_id="assigner",
            role="member", project_role_id=assigner_role["id"],
        ),
    }
    task = db.add("tasks", board_id=todo["id"], title="Write brief", created_by="owner", position=0)

    return SimpleNamespace(
        project=project,
        project_id=project["id"],
        boards={"todo": todo, "done": done},
        assigner_role=assigner_role,
        memberships=memberships,
        task=task,
    )
