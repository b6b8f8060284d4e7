from pydantic import BaseModel, EmailStr
from typing import Optional, Literal
from datetime import datetime

from app.core.permissions import CoarseRole
from app.modules.users.schemas import UserSummary

# Coarse roles a membership row can hold; ownership is never a membership
MembershipRole = Literal["admin", "member", "viewer"]


class MemberAdd(BaseModel):
    email: EmailStr
    role: MembershipRole = "member"
    project_role_id: Optional[str] = None


class MemberUpdate(BaseModel):
    role: Optional[MembershipRole] = None
    project_role_id: Optional[str] = None  # explicit null unbinds the project role


class MemberResponse(BaseModel):
    id: str
    project_id: str
    user_id: str
    role: MembershipRole
    project_role_id: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProjectMemberEntry(BaseModel):
    membership_id: Optional[str] = None
    user: UserSummary
    role: CoarseRole
    project_role_id: Optional[str] = None
    project_role_name: Optional[str] = None
    joined_at: Optional[datetime] = None
