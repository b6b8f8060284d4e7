from supabase import Client
from postgrest.exceptions import APIError
from app.modules.roles.schemas import ProjectRoleCreate, ProjectRoleUpdate, ProjectRoleResponse
from app.config.default_roles import get_default_roles
from app.core.exceptions import BadRequestError, ConflictError, NotFoundError, is_unique_violation
from datetime import datetime, timezone
from typing import List
import logging

logger = logging.getLogger(__name__)

DUPLICATE_ROLE_DETAIL = "A role with this name already exists in this project"

# Fields that may be explicitly cleared with null
NULLABLE_FIELDS = {"description"}


class RoleService:
    """Custom roles scoped to a single project"""

    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _name_taken(self, project_id: str, name: str, exclude_role_id: str = None) -> bool:
        query = self.supabase.table("project_roles")\
            .select("id")\
            .eq("project_id", project_id)\
            .eq("name", name)
        if exclude_role_id:
            query = query.neq("id", exclude_role_id)
        return bool(query.execute().data)

    def list_roles(self, project_id: str) -> List[ProjectRoleResponse]:
        """List roles of a project, oldest first"""
        result = self.supabase.table("project_roles")\
            .select("*")\
            .eq("project_id", project_id)\
            .order("created_at")\
            .execute()
        return [ProjectRoleResponse(**role) for role in result.data]

    def get_role(self, project_id: str, role_id: str) -> ProjectRoleResponse:
        """Get a role; 404 unless it belongs to the project"""
        result = self.supabase.table("project_roles")\
            .select("*")\
            .eq("id", role_id)\
            .eq("project_id", project_id)\
            .limit(1)\
            .execute()

        if not result.data:
            raise NotFoundError("Role not found")

        return ProjectRoleResponse(**result.data[0])

    def create_role(self, project_id: str, role_data: ProjectRoleCreate) -> ProjectRoleResponse:
        """Create a role; names are unique within a project"""
        if self._name_taken(project_id, role_data.name):
            raise ConflictError(DUPLICATE_ROLE_DETAIL)

        row = role_data.model_dump(mode="json")
        row["project_id"] = project_id
        try:
            result = self.supabase.table("project_roles").insert(row).execute()
        except APIError as e:
            if is_unique_violation(e):
                raise ConflictError(DUPLICATE_ROLE_DETAIL)
            raise

        if not result.data:
            raise RuntimeError("Failed to create role")

        logger.info("Created role %r in project %s", role_data.name, project_id)
        return ProjectRoleResponse(**result.data[0])

    def update_role(self, project_id: str, role_id: str, role_data: ProjectRoleUpdate) -> ProjectRoleResponse:
        """Apply the provided fields only. Concurrent updates are last-write-wins."""
        update_data = {
            field: value
            for field, value in role_data.model_dump(mode="json", exclude_unset=True).items()
            if value is not None or field in NULLABLE_FIELDS
        }
        if not update_data:
            raise BadRequestError("No fields to update")

        # 404 before any conflict check
        self.get_role(project_id, role_id)

        if "name" in update_data and self._name_taken(project_id, update_data["name"], exclude_role_id=role_id):
            raise ConflictError(DUPLICATE_ROLE_DETAIL)

        update_data["updated_at"] = datetime.now(timezone.utc).isoformat()
        try:
            result = self.supabase.table("project_roles")\
                .update(update_data)\
                .eq("id", role_id)\
                .eq("project_id", project_id)\
                .execute()
        except APIError as e:
            if is_unique_violation(e):
                raise ConflictError(DUPLICATE_ROLE_DETAIL)
            raise

        if not result.data:
            raise NotFoundError("Role not found")

        return ProjectRoleResponse(**result.data[0])

    def delete_role(self, project_id: str, role_id: str) -> None:
        """Delete a role. Members bound to it keep their membership and fall back to their coarse role."""
        self.get_role(project_id, role_id)

        cleared = self.supabase.table("project_members")\
            .update({"project_role_id": None})\
            .eq("project_id", project_id)\
            .eq("project_role_id", role_id)\
            .execute()

        result = self.supabase.table("project_roles")\
            .delete()\
            .eq("id", role_id)\
            .eq("project_id", project_id)\
            .execute()

        if not result.data:
            raise NotFoundError("Role not found")

        logger.info(
            "Deleted role %s from project %s (%d members unbound)",
            role_id, project_id, len(cleared.data or [])
        )

    def seed_default_roles(self, project_id: str) -> int:
        """Insert the default role catalogue, skipping names already present. Returns the number created."""
        existing = self.supabase.table("project_roles")\
            .select("name")\
            .eq("project_id", project_id)\
            .execute()
        existing_names = {r["name"] for r in existing.data} if existing.data else set()

        new_roles = [
            {**role, "project_id": project_id}
            for role in get_default_roles()
            if role["name"] not in existing_names
        ]
        if new_roles:
            self.supabase.table("project_roles").insert(new_roles).execute()
            logger.info("Seeded %d default roles for project %s", len(new_roles), project_id)
        return len(new_roles)
