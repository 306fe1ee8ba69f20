"""Remote profile service shapes: the canonical profile and the write payload."""

from datetime import date, datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from talent_profile.utils.date_parser import parse_profile_date


class ProfileUser(BaseModel):
    """User record nested in a profile response."""

    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
    type: Optional[str] = None

    @property
    def full_name(self) -> str:
        joined = f"{self.first_name or ''} {self.last_name or ''}".strip()
        return joined or (self.name or "").strip()


class PersistedProfile(BaseModel):
    """The service's canonical employee profile. Unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = None
    user_id: int = Field(..., description="Stable identifier of the owning user")
    name: Optional[str] = None
    geo: Optional[str] = None
    department: Optional[str] = None
    date_of_joining: Optional[date] = None
    end_date: Optional[date] = None
    notice_date: Optional[date] = None
    skills: List[str] = Field(default_factory=list)
    years_of_experience: float = 0.0
    industry: List[Union[str, Dict[str, Any]]] = Field(
        default_factory=list, description="'name|years' strings or {industry, years} objects"
    )
    availability_flag: bool = False
    employment_type: Optional[str] = None
    type: Optional[str] = None
    experience_level: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    user: Optional[ProfileUser] = None

    @field_validator("date_of_joining", "end_date", "notice_date", mode="before")
    @classmethod
    def _tolerant_date(cls, value: Any) -> Optional[date]:
        return parse_profile_date(value)

    @field_validator("skills", mode="before")
    @classmethod
    def _skills_list(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("industry", mode="before")
    @classmethod
    def _industry_list(cls, value: Any) -> Any:
        # Older records hold a single industry string
        if value is None:
            return []
        if isinstance(value, (str, dict)):
            return [value]
        return value

    @field_validator("years_of_experience", mode="before")
    @classmethod
    def _years_number(cls, value: Any) -> Any:
        return 0.0 if value is None else value

    @field_validator("availability_flag", mode="before")
    @classmethod
    def _flag_bool(cls, value: Any) -> Any:
        return False if value is None else value


class ProfilePayload(BaseModel):
    """Body sent on create (POST) and update (PATCH)."""

    user_id: int
    name: str
    geo: str
    date_of_joining: Optional[str] = None
    end_date: Optional[str] = None
    notice_date: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    years_of_experience: float = Field(..., description="Sum of industry years, never user-supplied")
    industry: List[str] = Field(default_factory=list, description="'name|years' entries")
    availability_flag: bool = False
    employment_type: str
    experience_level: str
    department: str
