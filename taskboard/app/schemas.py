from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TaskPayload(BaseModel):
    # Presence is checked by the service so that missing fields map to 400
    topic: Optional[str] = None
    description: Optional[str] = None


class TaskOut(BaseModel):
    task_id: int
    topic: str
    description: str
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class CreateResponse(BaseModel):
    success: str


class MessageResponse(BaseModel):
    message: str


class DeleteResponse(BaseModel):
    message: str
    task_id: str = Field(..., alias="taskId")

    model_config = ConfigDict(populate_by_name=True)


class ErrorResponse(BaseModel):
    error: str
    code: Optional[str] = None
    message: Optional[str] = None
