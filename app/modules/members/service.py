from supabase import Client
from postgrest.exceptions import APIError
from app.modules.members.schemas import MemberAdd, MemberUpdate, MemberResponse, ProjectMemberEntry
from app.modules.users.schemas import UserSummary
from app.modules.users.service import UserService
from app.modules.roles.service import RoleService
from app.core.access import get_project_row
from app.core.exceptions import BadRequestError, ConflictError, NotFoundError, is_unique_violation
from typing import List
import logging

logger = logging.getLogger(__name__)

ALREADY_MEMBER_DETAIL = "User is already a member of this project"


class MemberService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.users = UserService(supabase)
        self.roles = RoleService(supabase)

    def list_members(self, project_id: str) -> List[ProjectMemberEntry]:
        """Owner first, then members in join order, with profiles and bound role names"""
        project = self.supabase.table("projects")\
            .select("owner_id, created_at")\
            .eq("id", project_id)\
            .limit(1)\
            .execute()
        if not project.data:
            raise NotFoundError("Project not found")
        owner_id = project.data[0]["owner_id"]

        members = self.supabase.table("project_members")\
            .select("*")\
            .eq("project_id", project_id)\
            .order("created_at")\
            .execute()

        profiles = self.users.get_users_by_ids([owner_id] + [m["user_id"] for m in members.data])
        role_names = {r.id: r.name for r in self.roles.list_roles(project_id)}

        def summary(user_id: str) -> UserSummary:
            profile = profiles.get(user_id)
            if profile is None:
                return UserSummary(id=user_id, email="")
            return UserSummary(**profile.model_dump())

        entries = [ProjectMemberEntry(
            membership_id=None,
            user=summary(owner_id),
            role="owner",
            joined_at=project.data[0].get("created_at"),
        )]
        for member in members.data:
            entries.append(ProjectMemberEntry(
                membership_id=member["id"],
                user=summary(member["user_id"]),
                role=member["role"],
                project_role_id=member.get("project_role_id"),
                project_role_name=role_names.get(member.get("project_role_id")),
                joined_at=member.get("created_at"),
            ))
        return entries

    def add_member(self, project_id: str, member_data: MemberAdd) -> MemberResponse:
        """Add an existing user, looked up by email, to the project"""
        user = self.users.get_user_by_email(member_data.email)
        if user is None:
            raise NotFoundError("User not found with this email")

        project = get_project_row(self.supabase, project_id)
        if project and project.get("owner_id") == user.id:
            raise BadRequestError("User is the project owner")

        existing = self.supabase.table("project_members")\
            .select("id")\
            .eq("project_id", project_id)\
            .eq("user_id", user.id)\
            .execute()
        if existing.data:
            raise ConflictError(ALREADY_MEMBER_DETAIL)

        if member_data.project_role_id:
            self.roles.get_role(project_id, member_data.project_role_id)

        try:
            result = self.supabase.table("project_members").insert({
                "project_id": project_id,
                "user_id": user.id,
                "role": member_data.role,
                "project_role_id": member_data.project_role_id
            }).execute()
        except APIError as e:
            if is_unique_violation(e):
                raise ConflictError(ALREADY_MEMBER_DETAIL)
            raise

        if not result.data:
            raise RuntimeError("Failed to add member")

        logger.info("Added user %s to project %s as %s", user.id, project_id, member_data.role)
        return MemberResponse(**result.data[0])

    def update_member(self, project_id: str, member_id: str, member_data: MemberUpdate) -> MemberResponse:
        """Change coarse role and/or bound project role; takes effect on the member's next request"""
        update_data = {}
        if member_data.role is not None:
            update_data["role"] = member_data.role
        if "project_role_id" in member_data.model_fields_set:
            update_data["project_role_id"] = member_data.project_role_id

        if not update_data:
            raise BadRequestError("No fields to update")

        if update_data.get("project_role_id"):
            self.roles.get_role(project_id, update_data["project_role_id"])

        result = self.supabase.table("project_members")\
            .update(update_data)\
            .eq("id", member_id)\
            .eq("project_id", project_id)\
            .execute()

        if not result.data:
            raise NotFoundError("Member not found")

        return MemberResponse(**result.data[0])

    def remove_member(self, project_id: str, member_id: str) -> None:
        result = self.supabase.table("project_members")\
            .delete()\
            .eq("id", member_id)\
            .eq("project_id", project_id)\
            .execute()

        if not result.data:
            raise NotFoundError("Member not found")

        logger.info("Removed membership %s from project %s", member_id, project_id)
