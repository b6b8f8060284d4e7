from supabase import Client
from app.modules.boards.schemas import BoardCreate, BoardUpdate, BoardResponse
from app.core.exceptions import BadRequestError, NotFoundError
from typing import List


class BoardService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_boards(self, project_id: str) -> List[BoardResponse]:
        """List boards of a project in column order"""
        result = self.supabase.table("boards")\
            .select("*")\
            .eq("project_id", project_id)\
            .order("position")\
            .execute()
        return [BoardResponse(**board) for board in result.data]

    def get_board(self, board_id: str) -> BoardResponse:
        result = self.supabase.table("boards")\
            .select("*")\
            .eq("id", board_id)\
            .limit(1)\
            .execute()

        if not result.data:
            raise NotFoundError("Board not found")

        return BoardResponse(**result.data[0])

    def _next_position(self, project_id: str) -> int:
        result = self.supabase.table("boards")\
            .select("position")\
            .eq("project_id", project_id)\
            .order("position", desc=True)\
            .limit(1)\
            .execute()
        return result.data[0]["position"] + 1 if result.data else 0

    def create_board(self, project_id: str, board_data: BoardCreate) -> BoardResponse:
        """Create a board; appended after the last one unless a position is given"""
        position = board_data.position
        if position is None:
            position = self._next_position(project_id)

        result = self.supabase.table("boards").insert({
            "project_id": project_id,
            "name": board_data.name,
            "position": position
        }).execute()

        if not result.data:
            raise RuntimeError("Failed to create board")

        return BoardResponse(**result.data[0])

    def update_board(self, board_id: str, board_data: BoardUpdate) -> BoardResponse:
        """Rename a board"""
        if not board_data.name:
            raise BadRequestError("No fields to update")

        result = self.supabase.table("boards")\
            .update({"name": board_data.name})\
            .eq("id", board_id)\
            .execute()

        if not result.data:
            raise NotFoundError("Board not found")

        return BoardResponse(**result.data[0])

    def delete_board(self, board_id: str) -> None:
        """Delete a board and the tasks on it"""
        self.supabase.table("tasks")\
            .delete()\
            .eq("board_id", board_id)\
            .execute()

        result = self.supabase.table("boards")\
            .delete()\
            .eq("id", board_id)\
            .execute()

        if not result.data:
            raise NotFoundError("Board not found")
