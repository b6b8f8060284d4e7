from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.tasks.schemas import TaskCreate, TaskUpdate, TaskResponse
from app.modules.tasks.service import TaskService
from app.core.access import ProjectAccess
from app.core.dependencies import ensure_capability, require_capability, require_project_member
from app.core.permissions import Capability
from supabase import Client
from typing import List

router = APIRouter(tags=["tasks"])


def get_task_service(supabase: Client = Depends(get_supabase)) -> TaskService:
    return TaskService(supabase)


@router.get("/projects/{project_id}/tasks", response_model=List[TaskResponse])
async def list_tasks(
    project_id: str,
    access: ProjectAccess = Depends(require_project_member()),
    service: TaskService = Depends(get_task_service)
):
    """List tasks across the project's boards (any project member)"""
    return service.list_tasks(access.project_id)


@router.post("/boards/{board_id}/tasks", response_model=TaskResponse, status_code=201)
async def create_task(
    board_id: str,
    task_data: TaskCreate,
    access: ProjectAccess = Depends(require_capability(Capability.EDIT_CONTENT)),
    service: TaskService = Depends(get_task_service)
):
    """Create a task (viewers cannot; assigning also requires assign_tasks)"""
    if task_data.assigned_to:
        ensure_capability(access, Capability.ASSIGN_TASKS)
    return service.create_task(access.project_id, board_id, task_data, access.user_id)


@router.get("/tasks/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: str,
    access: ProjectAccess = Depends(require_project_member()),
    service: TaskService = Depends(get_task_service)
):
    """Get a task (any project member)"""
    return service.get_task(task_id)


@router.put("/tasks/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: str,
    task_data: TaskUpdate,
    access: ProjectAccess = Depends(require_capability(Capability.EDIT_CONTENT)),
    service: TaskService = Depends(get_task_service)
):
    """Update a task (viewers cannot; changing the assignee also requires assign_tasks)"""
    if "assigned_to" in task_data.model_fields_set:
        current = service.get_task(task_id)
        if current.assigned_to != task_data.assigned_to:
            ensure_capability(access, Capability.ASSIGN_TASKS)
    return service.update_task(access.project_id, task_id, task_data)


@router.delete("/tasks/{task_id}", status_code=204)
async def delete_task(
    task_id: str,
    access: ProjectAccess = Depends(require_capability(Capability.DELETE_TASKS)),
    service: TaskService = Depends(get_task_service)
):
    """Delete a task (requires delete_tasks)"""
    service.delete_task(task_id)
    return None
