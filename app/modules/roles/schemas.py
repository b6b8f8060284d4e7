from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from app.core.permissions import PermissionLevel, ProjectRoleFlags


class ProjectRoleCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    permission_level: PermissionLevel
    can_manage_members: bool = False
    can_manage_roles: bool = False
    can_assign_tasks: bool = False
    can_delete_tasks: bool = False
    can_manage_project: bool = False


class ProjectRoleUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    permission_level: Optional[PermissionLevel] = None
    can_manage_members: Optional[bool] = None
    can_manage_roles: Optional[bool] = None
    can_assign_tasks: Optional[bool] = None
    can_delete_tasks: Optional[bool] = None
    can_manage_project: Optional[bool] = None


class ProjectRoleResponse(ProjectRoleFlags):
    project_id: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
