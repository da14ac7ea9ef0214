"""Task API router: create, list, update and delete under /task."""

from typing import List, Optional

from fastapi import APIRouter, Depends

from taskboard.app.config import Settings
from taskboard.app.deps import get_app_settings, get_task_store
from taskboard.app.schemas import (
    CreateResponse,
    DeleteResponse,
    ErrorResponse,
    MessageResponse,
    TaskOut,
    TaskPayload,
)
from taskboard.app.services.task_service import TaskService
from taskboard.ports.task_store import ITaskStore

router = APIRouter(prefix="/task", tags=["tasks"])

_ERRORS = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def get_task_service(
    store: ITaskStore = Depends(get_task_store),
    settings: Settings = Depends(get_app_settings),
) -> TaskService:
    return TaskService(store, trim_required_fields=settings.trim_required_fields)


@router.post(
    "/create",
    status_code=201,
    response_model=CreateResponse,
    responses={400: _ERRORS[400], 500: _ERRORS[500]},
)
def create_task(
    payload: Optional[TaskPayload] = None,
    service: TaskService = Depends(get_task_service),
):
    payload = payload or TaskPayload()
    service.create_task(payload.topic, payload.description)
    return CreateResponse(success="Task added successfully")


@router.get("/get-all", response_model=List[TaskOut], responses={500: _ERRORS[500]})
def list_tasks(service: TaskService = Depends(get_task_service)):
    return service.list_tasks()


@router.put("/{task_id}/update", response_model=MessageResponse, responses=_ERRORS)
def update_task(
    task_id: str,
    payload: Optional[TaskPayload] = None,
    service: TaskService = Depends(get_task_service),
):
    payload = payload or TaskPayload()
    service.update_task(task_id, payload.topic, payload.description)
    return MessageResponse(message="Task updated successfully")


@router.delete("/{task_id}/delete", response_model=DeleteResponse, responses=_ERRORS)
def delete_task(task_id: str, service: TaskService = Depends(get_task_service)):
    deleted_id = service.delete_task(task_id)
    return DeleteResponse(message="Task deleted successfully", task_id=deleted_id)
