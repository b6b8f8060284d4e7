from supabase import Client
from app.modules.users.schemas import UserUpdate, UserResponse
from app.core.exceptions import BadRequestError, NotFoundError
from datetime import datetime, timezone
from typing import Dict, List, Optional


class UserService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_user_by_id(self, user_id: str) -> UserResponse:
        """Get user profile by ID"""
        result = self.supabase.table("user_profiles")\
            .select("*")\
            .eq("id", user_id)\
            .limit(1)\
            .execute()

        if not result.data:
            raise NotFoundError("User not found")

        return UserResponse(**result.data[0])

    def get_user_by_email(self, email: str) -> Optional[UserResponse]:
        """Get user profile by email"""
        result = self.supabase.table("user_profiles")\
            .select("*")\
            .eq("email", email.strip().lower())\
            .limit(1)\
            .execute()

        if not result.data:
            return None

        return UserResponse(**result.data[0])

    def get_users_by_ids(self, user_ids: List[str]) -> Dict[str, UserResponse]:
        """Profiles keyed by user id; unknown ids are left out"""
        if not user_ids:
            return {}
        result = self.supabase.table("user_profiles")\
            .select("*")\
            .in_("id", list(set(user_ids)))\
            .execute()
        return {u["id"]: UserResponse(**u) for u in result.data}

    def update_user(self, user_id: str, user_data: UserUpdate) -> UserResponse:
        """Update user profile"""
        update_data = user_data.model_dump(exclude_unset=True)
        if not update_data:
            raise BadRequestError("No fields to update")
        update_data["updated_at"] = datetime.now(timezone.utc).isoformat()

        result = self.supabase.table("user_profiles")\
            .update(update_data)\
            .eq("id", user_id)\
            .execute()

        if not result.data:
            raise NotFoundError("User not found")

        return UserResponse(**result.data[0])

    def project_ids_for_user(self, user_id: str) -> List[str]:
        """Projects the user owns or is a member of"""
        owned = self.supabase.table("projects")\
            .select("id")\
            .eq("owner_id", user_id)\
            .execute()
        memberships = self.supabase.table("project_members")\
            .select("project_id")\
            .eq("user_id", user_id)\
            .execute()
        ids = [p["id"] for p in owned.data] + [m["project_id"] for m in memberships.data]
        return list(dict.fromkeys(ids))

    def shares_project(self, current_user_id: str, target_user_id: str) -> bool:
        """True if target is self or is owner/member of a project the current user belongs to"""
        if current_user_id == target_user_id:
            return True
        return bool(
            set(self.project_ids_for_user(current_user_id))
            & set(self.project_ids_for_user(target_user_id))
        )
