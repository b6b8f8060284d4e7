from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

from app.core.permissions import Capability, CoarseRole, EffectivePermissions, ProjectRoleFlags, capabilities_of


class ProjectCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None


class ProjectUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None


class ProjectResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    owner_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PermissionsResponse(BaseModel):
    is_owner: bool
    coarse_role: CoarseRole
    project_role: Optional[ProjectRoleFlags] = None
    capabilities: List[Capability]

    @classmethod
    def from_permissions(cls, permissions: EffectivePermissions) -> "PermissionsResponse":
        return cls(
            is_owner=permissions.is_owner,
            coarse_role=permissions.coarse_role,
            project_role=permissions.project_role,
            capabilities=capabilities_of(permissions),
        )


class ProjectDetailResponse(ProjectResponse):
    permissions: PermissionsResponse
