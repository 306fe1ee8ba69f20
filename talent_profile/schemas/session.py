"""Session-level shapes: the signed-in user and the editing mode."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class SessionMode(str, Enum):
    LOADING = "loading"
    CREATE_MODE = "create"
    EDIT_MODE = "edit"
    ERROR = "error"


class SessionUser(BaseModel):
    """The authenticated user driving the session."""

    id: Optional[int] = None
    email: Optional[str] = None
    name: str = ""
    department: Optional[str] = None
    skills: List[str] = Field(default_factory=list)

    @property
    def has_identity(self) -> bool:
        return self.id is not None
