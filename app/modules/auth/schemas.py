from pydantic import BaseModel
from typing import Optional, Any, Dict
from datetime import datetime


class CurrentUserResponse(BaseModel):
    id: str
    email: Optional[str] = None
    user_metadata: Dict[str, Any] = {}
    created_at: Optional[datetime] = None
