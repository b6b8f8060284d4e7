from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.users.schemas import UserUpdate, UserResponse
from app.modules.users.service import UserService
from app.core.dependencies import get_current_user_id
from app.core.exceptions import ForbiddenError
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/users", tags=["users"])


def get_user_service(supabase: Client = Depends(get_supabase)) -> UserService:
    return UserService(supabase)


@router.get("/me", response_model=UserResponse)
async def get_my_profile(
    user_data: Dict = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service)
):
    """Get the caller's profile"""
    return service.get_user_by_id(user_data["id"])


@router.put("/me", response_model=UserResponse)
async def update_my_profile(
    user_data_body: UserUpdate,
    user_data: Dict = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service)
):
    """Update the caller's profile"""
    return service.update_user(user_data["id"], user_data_body)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service)
):
    """Get user by ID (only if same user or shares a project)"""
    if not service.shares_project(user_data["id"], user_id):
        raise ForbiddenError("User not accessible")
    return service.get_user_by_id(user_id)
