from supabase import Client
from app.modules.projects.schemas import ProjectCreate, ProjectUpdate, ProjectResponse
from app.modules.roles.service import RoleService
from app.config.settings import settings
from app.core.exceptions import BadRequestError, NotFoundError
from datetime import datetime, timezone
from typing import List
import logging

logger = logging.getLogger(__name__)

NULLABLE_FIELDS = {"description"}


class ProjectService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def create_project(self, project_data: ProjectCreate, owner_id: str) -> ProjectResponse:
        """Create a project owned by the caller, with default boards and roles"""
        result = self.supabase.table("projects").insert({
            "name": project_data.name,
            "description": project_data.description,
            "owner_id": owner_id
        }).execute()

        if not result.data:
            raise RuntimeError("Failed to create project")

        project = ProjectResponse(**result.data[0])

        # Default boards and roles are best effort; the project is usable without them
        board_names = settings.get_default_board_names()
        if board_names:
            try:
                self.supabase.table("boards").insert([
                    {"project_id": project.id, "name": name, "position": position}
                    for position, name in enumerate(board_names)
                ]).execute()
            except Exception:
                logger.exception("Failed to create default boards for project %s", project.id)

        if settings.seed_default_roles:
            try:
                RoleService(self.supabase).seed_default_roles(project.id)
            except Exception:
                logger.exception("Failed to seed default roles for project %s", project.id)

        logger.info("Created project %s for owner %s", project.id, owner_id)
        return project

    def get_project_by_id(self, project_id: str) -> ProjectResponse:
        """Get project by ID"""
        result = self.supabase.table("projects")\
            .select("*")\
            .eq("id", project_id)\
            .limit(1)\
            .execute()

        if not result.data:
            raise NotFoundError("Project not found")

        return ProjectResponse(**result.data[0])

    def list_projects(self, user_id: str) -> List[ProjectResponse]:
        """Projects the user owns or is a member of, newest first"""
        owned = self.supabase.table("projects")\
            .select("id")\
            .eq("owner_id", user_id)\
            .execute()
        memberships = self.supabase.table("project_members")\
            .select("project_id")\
            .eq("user_id", user_id)\
            .execute()

        project_ids = {p["id"] for p in owned.data} | {m["project_id"] for m in memberships.data}
        if not project_ids:
            return []

        result = self.supabase.table("projects")\
            .select("*")\
            .in_("id", list(project_ids))\
            .order("created_at", desc=True)\
            .execute()
        return [ProjectResponse(**project) for project in result.data]

    def update_project(self, project_id: str, project_data: ProjectUpdate) -> ProjectResponse:
        """Update name and/or description"""
        update_data = {
            field: value
            for field, value in project_data.model_dump(exclude_unset=True).items()
            if value is not None or field in NULLABLE_FIELDS
        }
        if not update_data:
            raise BadRequestError("No fields to update")
        update_data["updated_at"] = datetime.now(timezone.utc).isoformat()

        result = self.supabase.table("projects")\
            .update(update_data)\
            .eq("id", project_id)\
            .execute()

        if not result.data:
            raise NotFoundError("Project not found")

        return ProjectResponse(**result.data[0])

    def delete_project(self, project_id: str) -> None:
        """
        Delete project with its tasks, boards, members and roles.

        The statements are not transactional. If one fails, the error is logged
        with the table it stopped at and re-raised. The project row goes last,
        so the owner can retry and the remaining rows are removed.
        """
        boards = self.supabase.table("boards")\
            .select("id")\
            .eq("project_id", project_id)\
            .execute()
        board_ids = [b["id"] for b in boards.data]

        # (table, column, values); the project row goes last
        steps = []
        if board_ids:
            steps.append(("tasks", "board_id", board_ids))
        for table in ("boards", "project_members", "project_roles"):
            steps.append((table, "project_id", [project_id]))
        steps.append(("projects", "id", [project_id]))

        result = None
        for table, column, values in steps:
            try:
                result = self.supabase.table(table)\
                    .delete()\
                    .in_(column, values)\
                    .execute()
            except Exception:
                logger.exception("Project %s partially deleted; failed while deleting from %s", project_id, table)
                raise

        if not result.data:
            raise NotFoundError("Project not found")

        logger.info("Deleted project %s", project_id)
