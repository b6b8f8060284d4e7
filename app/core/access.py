"""
Loads a caller's standing on a project from the store.

Read-only. Store errors are not caught here; they propagate to the caller and
surface as an internal error.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from supabase import Client

from app.core.exceptions import NoProjectStandingError, ProjectNotFoundError
from app.core.permissions import EffectivePermissions, ProjectRoleFlags


@dataclass
class ProjectAccess:
    """Result handed to a route once the gate has allowed the request."""
    user: Dict[str, Any]
    project_id: str
    permissions: EffectivePermissions

    @property
    def user_id(self) -> str:
        return self.user["id"]

    @property
    def is_owner(self) -> bool:
        return self.permissions.is_owner


def _first(result) -> Optional[Dict[str, Any]]:
    return result.data[0] if result.data else None


def get_project_row(supabase: Client, project_id: str) -> Optional[Dict[str, Any]]:
    result = supabase.table("projects")\
        .select("id, owner_id")\
        .eq("id", project_id)\
        .limit(1)\
        .execute()
    return _first(result)


def get_membership_row(supabase: Client, project_id: str, user_id: str) -> Optional[Dict[str, Any]]:
    result = supabase.table("project_members")\
        .select("id, role, project_role_id")\
        .eq("project_id", project_id)\
        .eq("user_id", user_id)\
        .limit(1)\
        .execute()
    return _first(result)


def get_project_role_flags(supabase: Client, project_id: str, role_id: str) -> Optional[ProjectRoleFlags]:
    """Bound role for a membership, or None if it no longer resolves within the project."""
    result = supabase.table("project_roles")\
        .select("*")\
        .eq("id", role_id)\
        .eq("project_id", project_id)\
        .limit(1)\
        .execute()
    row = _first(result)
    if row is None:
        return None
    return ProjectRoleFlags(**row)


def load_effective_permissions(supabase: Client, user_id: str, project_id: str) -> EffectivePermissions:
    """
    Derive the caller's permissions on a project.

    Raises ProjectNotFoundError when the project does not exist and
    NoProjectStandingError when it exists but the caller is neither owner nor
    member.
    """
    project = get_project_row(supabase, project_id)
    if project is None:
        raise ProjectNotFoundError(project_id)

    if project.get("owner_id") == user_id:
        return EffectivePermissions.for_owner()

    membership = get_membership_row(supabase, project_id, user_id)
    if membership is None:
        raise NoProjectStandingError(project_id)

    project_role = None
    if membership.get("project_role_id"):
        project_role = get_project_role_flags(supabase, project_id, membership["project_role_id"])

    return EffectivePermissions.for_member(membership["role"], project_role)


def project_id_for_board(supabase: Client, board_id: str) -> Optional[str]:
    """Project owning a board, or None if the board does not exist."""
    result = supabase.table("boards")\
        .select("id, project_id")\
        .eq("id", board_id)\
        .limit(1)\
        .execute()
    board = _first(result)
    return board["project_id"] if board else None


def project_id_for_task(supabase: Client, task_id: str) -> Optional[str]:
    result = supabase.table("tasks")\
        .select("id, board_id")\
        .eq("id", task_id)\
        .limit(1)\
        .execute()
    task = _first(result)
    if task is None:
        return None
    return project_id_for_board(supabase, task["board_id"])
