from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class BoardCreate(BaseModel):
    name: str = Field(..., min_length=1)
    position: Optional[int] = Field(None, ge=0)


class BoardUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)


class BoardResponse(BaseModel):
    id: str
    project_id: str
    name: str
    position: int = 0
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
