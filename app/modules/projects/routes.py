from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.projects.schemas import (
    ProjectCreate, ProjectUpdate, ProjectResponse, ProjectDetailResponse, PermissionsResponse
)
from app.modules.projects.service import ProjectService
from app.core.access import ProjectAccess
from app.core.dependencies import get_current_user_id, require_capability, require_project_member
from app.core.permissions import Capability
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/projects", tags=["projects"])


def get_project_service(supabase: Client = Depends(get_supabase)) -> ProjectService:
    return ProjectService(supabase)


@router.get("", response_model=List[ProjectResponse])
async def list_projects(
    user_data: Dict = Depends(get_current_user_id),
    service: ProjectService = Depends(get_project_service)
):
    """List projects the caller owns or is a member of"""
    return service.list_projects(user_data["id"])


@router.post("", response_model=ProjectResponse, status_code=201)
async def create_project(
    project_data: ProjectCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: ProjectService = Depends(get_project_service)
):
    """Create a project; the caller becomes its owner"""
    return service.create_project(project_data, user_data["id"])


@router.get("/{project_id}", response_model=ProjectDetailResponse)
async def get_project(
    project_id: str,
    access: ProjectAccess = Depends(require_project_member()),
    service: ProjectService = Depends(get_project_service)
):
    """Get project with the caller's permissions on it"""
    project = service.get_project_by_id(access.project_id)
    return ProjectDetailResponse(
        **project.model_dump(),
        permissions=PermissionsResponse.from_permissions(access.permissions),
    )


@router.get("/{project_id}/permissions", response_model=PermissionsResponse)
async def get_my_permissions(
    project_id: str,
    access: ProjectAccess = Depends(require_project_member())
):
    """The caller's effective permissions on the project"""
    return PermissionsResponse.from_permissions(access.permissions)


@router.put("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: str,
    project_data: ProjectUpdate,
    access: ProjectAccess = Depends(require_capability(Capability.MANAGE_PROJECT)),
    service: ProjectService = Depends(get_project_service)
):
    """Update project (requires manage_project)"""
    return service.update_project(access.project_id, project_data)


@router.delete("/{project_id}", status_code=204)
async def delete_project(
    project_id: str,
    access: ProjectAccess = Depends(require_capability(Capability.IS_OWNER_ONLY)),
    service: ProjectService = Depends(get_project_service)
):
    """Delete project (owner only)"""
    service.delete_project(access.project_id)
    return None
