from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.roles.schemas import ProjectRoleCreate, ProjectRoleUpdate, ProjectRoleResponse
from app.modules.roles.service import RoleService
from app.core.access import ProjectAccess
from app.core.dependencies import require_capability, require_project_member
from app.core.permissions import Capability
from supabase import Client
from typing import List

router = APIRouter(prefix="/projects/{project_id}/roles", tags=["roles"])


def get_role_service(supabase: Client = Depends(get_supabase)) -> RoleService:
    return RoleService(supabase)


@router.get("", response_model=List[ProjectRoleResponse])
async def list_roles(
    project_id: str,
    access: ProjectAccess = Depends(require_project_member()),
    service: RoleService = Depends(get_role_service)
):
    """List project roles (any project member, viewers included)"""
    return service.list_roles(access.project_id)


@router.post("", response_model=ProjectRoleResponse, status_code=201)
async def create_role(
    project_id: str,
    role_data: ProjectRoleCreate,
    access: ProjectAccess = Depends(require_capability(Capability.MANAGE_ROLES)),
    service: RoleService = Depends(get_role_service)
):
    """Create a project role (requires manage_roles)"""
    return service.create_role(access.project_id, role_data)


@router.get("/{role_id}", response_model=ProjectRoleResponse)
async def get_role(
    project_id: str,
    role_id: str,
    access: ProjectAccess = Depends(require_project_member()),
    service: RoleService = Depends(get_role_service)
):
    """Get a project role (any project member)"""
    return service.get_role(access.project_id, role_id)


@router.put("/{role_id}", response_model=ProjectRoleResponse)
async def update_role(
    project_id: str,
    role_id: str,
    role_data: ProjectRoleUpdate,
    access: ProjectAccess = Depends(require_capability(Capability.MANAGE_ROLES)),
    service: RoleService = Depends(get_role_service)
):
    """Update a project role (requires manage_roles)"""
    return service.update_role(access.project_id, role_id, role_data)


@router.delete("/{role_id}", status_code=204)
async def delete_role(
    project_id: str,
    role_id: str,
    access: ProjectAccess = Depends(require_capability(Capability.MANAGE_ROLES)),
    service: RoleService = Depends(get_role_service)
):
    """Delete a project role; bound members are unbound, not removed (requires manage_roles)"""
    service.delete_role(access.project_id, role_id)
    return None
