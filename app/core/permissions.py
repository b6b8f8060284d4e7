"""
Project permission model and evaluator.

A caller's standing on a project is one of four coarse roles. The owner is
never stored as a membership; it is derived from projects.owner_id. Members
may additionally be bound to a project role, a named set of boolean flags
that grants individual capabilities on top of the coarse role.

Pure Python logic - no FastAPI imports, no database access.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, model_validator


class CoarseRole(str, Enum):
    OWNER = "owner"
    ADMIN = "admin"
    MEMBER = "member"
    VIEWER = "viewer"


class PermissionLevel(str, Enum):
    """Descriptive level of a project role. Never used as a gate."""
    FULL = "full"
    EDIT = "edit"
    COMMENT = "comment"
    VIEW = "view"


class Capability(str, Enum):
    MANAGE_MEMBERS = "manage_members"
    MANAGE_ROLES = "manage_roles"
    ASSIGN_TASKS = "assign_tasks"
    DELETE_TASKS = "delete_tasks"
    MANAGE_PROJECT = "manage_project"
    EDIT_CONTENT = "edit_content"
    IS_OWNER_ONLY = "is_owner_only"


class ProjectRoleFlags(BaseModel):
    """The parts of a project role the evaluator looks at."""
    id: str
    name: str
    permission_level: PermissionLevel = PermissionLevel.VIEW
    can_manage_members: bool = False
    can_manage_roles: bool = False
    can_assign_tasks: bool = False
    can_delete_tasks: bool = False
    can_manage_project: bool = False

    class Config:
        from_attributes = True


class EffectivePermissions(BaseModel):
    """
    Per-request decision input for a (user, project) pair.

    Computed fresh on every request and never cached: membership and role
    flags can change between requests.
    """
    coarse_role: CoarseRole
    project_role: Optional[ProjectRoleFlags] = None

    @model_validator(mode="after")
    def _owner_has_no_project_role(self) -> "EffectivePermissions":
        if self.coarse_role == CoarseRole.OWNER and self.project_role is not None:
            raise ValueError("The owner is never bound to a project role")
        return self

    @property
    def is_owner(self) -> bool:
        return self.coarse_role == CoarseRole.OWNER

    @classmethod
    def for_owner(cls) -> "EffectivePermissions":
        return cls(coarse_role=CoarseRole.OWNER)

    @classmethod
    def for_member(
        cls,
        role: CoarseRole,
        project_role: Optional[ProjectRoleFlags] = None
    ) -> "EffectivePermissions":
        role = CoarseRole(role)
        if role == CoarseRole.OWNER:
            raise ValueError("Ownership is derived from the project, not from a membership")
        return cls(coarse_role=role, project_role=project_role)


def role_flag(project_role: ProjectRoleFlags, capability: Capability) -> bool:
    """
    Flag on a project role that grants a capability.

    Raises ValueError for capabilities that are not granted by role flags, so
    a new capability cannot silently fall through to allow or deny.
    """
    if capability == Capability.MANAGE_MEMBERS:
        return project_role.can_manage_members
    if capability == Capability.MANAGE_ROLES:
        return project_role.can_manage_roles
    if capability == Capability.ASSIGN_TASKS:
        return project_role.can_assign_tasks
    if capability == Capability.DELETE_TASKS:
        return project_role.can_delete_tasks
    if capability == Capability.MANAGE_PROJECT:
        return project_role.can_manage_project
    raise ValueError(f"Capability {capability!r} is not granted by project role flags")


def allows(permissions: EffectivePermissions, capability: Capability) -> bool:
    """
    Decide whether the permissions allow a capability.

    First match wins:
    1. IS_OWNER_ONLY is allowed only for the owner.
    2. The owner is allowed everything.
    3. Admins are allowed everything else.
    4. EDIT_CONTENT is allowed for every coarse role except viewer.
    5. Anything else needs a bound project role with the matching flag set.
    """
    capability = Capability(capability)

    if capability == Capability.IS_OWNER_ONLY:
        return permissions.is_owner

    if permissions.is_owner:
        return True

    if permissions.coarse_role == CoarseRole.ADMIN:
        return True

    if capability == Capability.EDIT_CONTENT:
        return permissions.coarse_role != CoarseRole.VIEWER

    if permissions.project_role is None:
        return False
    return role_flag(permissions.project_role, capability)


def capabilities_of(permissions: EffectivePermissions) -> List[Capability]:
    """All capabilities the permissions allow, in declaration order."""
    return [c for c in Capability if allows(permissions, c)]
