"""
Core dependencies for route protection and permission checking
"""

from fastapi import Depends, Request, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.database.supabase_client import get_supabase
from app.modules.auth.service import AuthService
from app.core.access import (
    ProjectAccess,
    load_effective_permissions,
    project_id_for_board,
    project_id_for_task,
)
from app.core.exceptions import BadRequestError, InsufficientPermissionError, NoProjectStandingError
from app.core.permissions import Capability, allows
from supabase import Client
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer()


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials = Security(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Extract current user info from JWT token"""
    token = credentials.credentials
    user_data = auth_service.get_current_user(token)
    return user_data


def resolve_project_id(
    supabase: Client,
    project_id: Optional[str] = None,
    board_id: Optional[str] = None,
    task_id: Optional[str] = None
) -> str:
    """
    Project a request addresses: explicit id first, then via its board or task.

    A board or task that does not resolve fails exactly like one the caller has
    no standing on, so outsiders cannot tell which ids exist. Only an
    explicit project id can surface as 404, from the Access Loader.
    """
    if project_id:
        return project_id
    if board_id:
        resolved = project_id_for_board(supabase, board_id)
    elif task_id:
        resolved = project_id_for_task(supabase, task_id)
    else:
        raise BadRequestError("Project ID required")

    if resolved is None:
        logger.info("Unresolved resource (board=%s, task=%s)", board_id, task_id)
        raise NoProjectStandingError(None)
    return resolved


def check_project_access(
    supabase: Client,
    user_data: Dict[str, Any],
    project_id: str,
    capability: Optional[Capability] = None
) -> ProjectAccess:
    """
    Load the caller's permissions on a project and check a capability.

    With no capability only standing on the project is required (any coarse
    role, viewer included). Never mutates state.
    """
    user_id = user_data["id"]
    permissions = load_effective_permissions(supabase, user_id, project_id)

    if capability is not None and not allows(permissions, capability):
        logger.info(
            "Denied %s on project %s for user %s (role=%s)",
            capability.value, project_id, user_id, permissions.coarse_role.value
        )
        if capability == Capability.IS_OWNER_ONLY:
            raise InsufficientPermissionError(
                capability.value, "Only the project owner can perform this action"
            )
        raise InsufficientPermissionError(capability.value)

    return ProjectAccess(user=user_data, project_id=project_id, permissions=permissions)


def _create_gate(capability: Optional[Capability]):
    def gate(
        request: Request,
        user_data: dict = Depends(get_current_user_id),
        supabase: Client = Depends(get_supabase)
    ) -> ProjectAccess:
        params = request.path_params
        project_id = resolve_project_id(
            supabase,
            project_id=params.get("project_id"),
            board_id=params.get("board_id"),
            task_id=params.get("task_id"),
        )
        return check_project_access(supabase, user_data, project_id, capability)
    return gate


def require_capability(capability: Capability):
    """Factory function to create a project capability check dependency"""
    return _create_gate(Capability(capability))


def require_project_member():
    """Dependency that only requires standing on the addressed project"""
    return _create_gate(None)


def ensure_capability(access: ProjectAccess, capability: Capability) -> None:
    """Check an extra capability inside a handler that already passed the gate."""
    if not allows(access.permissions, capability):
        logger.info(
            "Denied %s on project %s for user %s",
            capability.value, access.project_id, access.user_id
        )
        raise InsufficientPermissionError(capability.value)
