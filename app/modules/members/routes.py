from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.members.schemas import MemberAdd, MemberUpdate, MemberResponse, ProjectMemberEntry
from app.modules.members.service import MemberService
from app.core.access import ProjectAccess
from app.core.dependencies import require_capability, require_project_member
from app.core.permissions import Capability
from supabase import Client
from typing import List

router = APIRouter(prefix="/projects/{project_id}/members", tags=["members"])


def get_member_service(supabase: Client = Depends(get_supabase)) -> MemberService:
    return MemberService(supabase)


@router.get("", response_model=List[ProjectMemberEntry])
async def list_members(
    project_id: str,
    access: ProjectAccess = Depends(require_project_member()),
    service: MemberService = Depends(get_member_service)
):
    """List the owner and members of a project (any project member)"""
    return service.list_members(access.project_id)


@router.post("", response_model=MemberResponse, status_code=201)
async def add_member(
    project_id: str,
    member_data: MemberAdd,
    access: ProjectAccess = Depends(require_capability(Capability.MANAGE_MEMBERS)),
    service: MemberService = Depends(get_member_service)
):
    """Add a member by email (requires manage_members)"""
    return service.add_member(access.project_id, member_data)


@router.put("/{member_id}", response_model=MemberResponse)
async def update_member(
    project_id: str,
    member_id: str,
    member_data: MemberUpdate,
    access: ProjectAccess = Depends(require_capability(Capability.MANAGE_MEMBERS)),
    service: MemberService = Depends(get_member_service)
):
    """Change a member's role or bound project role (requires manage_members)"""
    return service.update_member(access.project_id, member_id, member_data)


@router.delete("/{member_id}", status_code=204)
async def remove_member(
    project_id: str,
    member_id: str,
    access: ProjectAccess = Depends(require_capability(Capability.MANAGE_MEMBERS)),
    service: MemberService = Depends(get_member_service)
):
    """Remove a member (requires manage_members)"""
    service.remove_member(access.project_id, member_id)
    return None
