from supabase import Client
from app.modules.tasks.schemas import TaskCreate, TaskUpdate, TaskResponse, TaskStatus
from app.core.access import get_membership_row, get_project_row, project_id_for_board
from app.core.exceptions import BadRequestError, NotFoundError
from datetime import datetime, timezone
from typing import List

# Fields that may be explicitly cleared with null
NULLABLE_FIELDS = {"description", "due_date", "assigned_to"}


class TaskService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_tasks(self, project_id: str) -> List[TaskResponse]:
        """Tasks on every board of a project"""
        boards = self.supabase.table("boards")\
            .select("id")\
            .eq("project_id", project_id)\
            .execute()
        board_ids = [b["id"] for b in boards.data]
        if not board_ids:
            return []

        result = self.supabase.table("tasks")\
            .select("*")\
            .in_("board_id", board_ids)\
            .order("position")\
            .execute()
        return [TaskResponse(**task) for task in result.data]

    def get_task(self, task_id: str) -> TaskResponse:
        result = self.supabase.table("tasks")\
            .select("*")\
            .eq("id", task_id)\
            .limit(1)\
            .execute()

        if not result.data:
            raise NotFoundError("Task not found")

        return TaskResponse(**result.data[0])

    def _check_assignee(self, project_id: str, user_id: str) -> None:
        """Assignees must be the owner or a member of the task's project"""
        project = get_project_row(self.supabase, project_id)
        if project and project.get("owner_id") == user_id:
            return
        if get_membership_row(self.supabase, project_id, user_id) is None:
            raise BadRequestError("Assignee is not a member of this project")

    def _next_position(self, board_id: str) -> int:
        result = self.supabase.table("tasks")\
            .select("position")\
            .eq("board_id", board_id)\
            .order("position", desc=True)\
            .limit(1)\
            .execute()
        return result.data[0]["position"] + 1 if result.data else 0

    def create_task(self, project_id: str, board_id: str, task_data: TaskCreate, created_by: str) -> TaskResponse:
        """Create a task at the end of a board"""
        if task_data.assigned_to:
            self._check_assignee(project_id, task_data.assigned_to)

        row = task_data.model_dump(mode="json")
        row.update({
            "board_id": board_id,
            "created_by": created_by,
            "status": TaskStatus.TODO.value,
            "position": self._next_position(board_id),
        })
        result = self.supabase.table("tasks").insert(row).execute()

        if not result.data:
            raise RuntimeError("Failed to create task")

        return TaskResponse(**result.data[0])

    def update_task(self, project_id: str, task_id: str, task_data: TaskUpdate) -> TaskResponse:
        """Apply the provided fields; a task can only move between boards of its own project"""
        update_data = {
            field: value
            for field, value in task_data.model_dump(mode="json", exclude_unset=True).items()
            if value is not None or field in NULLABLE_FIELDS
        }
        if not update_data:
            raise BadRequestError("No fields to update")

        if "board_id" in update_data:
            target_project_id = project_id_for_board(self.supabase, update_data["board_id"])
            if target_project_id is None:
                raise NotFoundError("Board not found")
            if target_project_id != project_id:
                raise BadRequestError("Tasks cannot be moved to another project's board")

        if update_data.get("assigned_to"):
            self._check_assignee(project_id, update_data["assigned_to"])

        update_data["updated_at"] = datetime.now(timezone.utc).isoformat()
        result = self.supabase.table("tasks")\
            .update(update_data)\
            .eq("id", task_id)\
            .execute()

        if not result.data:
            raise NotFoundError("Task not found")

        return TaskResponse(**result.data[0])

    def delete_task(self, task_id: str) -> None:
        result = self.supabase.table("tasks")\
            .delete()\
            .eq("id", task_id)\
            .execute()

        if not result.data:
            raise NotFoundError("Task not found")
