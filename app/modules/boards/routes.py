from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.boards.schemas import BoardCreate, BoardUpdate, BoardResponse
from app.modules.boards.service import BoardService
from app.core.access import ProjectAccess
from app.core.dependencies import require_capability, require_project_member
from app.core.permissions import Capability
from supabase import Client
from typing import List

router = APIRouter(tags=["boards"])


def get_board_service(supabase: Client = Depends(get_supabase)) -> BoardService:
    return BoardService(supabase)


@router.get("/projects/{project_id}/boards", response_model=List[BoardResponse])
async def list_boards(
    project_id: str,
    access: ProjectAccess = Depends(require_project_member()),
    service: BoardService = Depends(get_board_service)
):
    """List boards of a project (any project member)"""
    return service.list_boards(access.project_id)


@router.post("/projects/{project_id}/boards", response_model=BoardResponse, status_code=201)
async def create_board(
    project_id: str,
    board_data: BoardCreate,
    access: ProjectAccess = Depends(require_capability(Capability.EDIT_CONTENT)),
    service: BoardService = Depends(get_board_service)
):
    """Create a board (viewers cannot)"""
    return service.create_board(access.project_id, board_data)


@router.put("/boards/{board_id}", response_model=BoardResponse)
async def update_board(
    board_id: str,
    board_data: BoardUpdate,
    access: ProjectAccess = Depends(require_capability(Capability.EDIT_CONTENT)),
    service: BoardService = Depends(get_board_service)
):
    """Rename a board (viewers cannot)"""
    return service.update_board(board_id, board_data)


@router.delete("/boards/{board_id}", status_code=204)
async def delete_board(
    board_id: str,
    access: ProjectAccess = Depends(require_capability(Capability.IS_OWNER_ONLY)),
    service: BoardService = Depends(get_board_service)
):
    """Delete a board and its tasks (owner only)"""
    service.delete_board(board_id)
    return None
