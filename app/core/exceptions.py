"""
Typed request failures.

Every outcome of the project access gate other than "allowed" is one of these.
They subclass HTTPException so FastAPI renders them as {"detail": ...} with the
matching status code.
"""

from fastapi import HTTPException, status
from typing import Optional


class BadRequestError(HTTPException):
    def __init__(self, detail: str = "Bad request"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class NotFoundError(HTTPException):
    def __init__(self, detail: str = "Not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ForbiddenError(HTTPException):
    def __init__(self, detail: str = "Forbidden"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class ConflictError(HTTPException):
    def __init__(self, detail: str = "Conflict"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class ProjectNotFoundError(NotFoundError):
    def __init__(self, project_id: str):
        self.project_id = project_id
        super().__init__("Project not found")


class NoProjectStandingError(ForbiddenError):
    """Caller is neither owner nor member of the addressed project (project_id is None for an unresolved board or task)."""

    def __init__(self, project_id: Optional[str]):
        self.project_id = project_id
        super().__init__("Not a party to this project")


class InsufficientPermissionError(ForbiddenError):
    def __init__(self, capability: str, detail: str = "Insufficient permission"):
        self.capability = capability
        super().__init__(detail)


UNIQUE_VIOLATION = "23505"


def is_unique_violation(exc: Exception) -> bool:
    """True if a PostgREST APIError wraps a Postgres unique constraint violation."""
    return getattr(exc, "code", None) == UNIQUE_VIOLATION
