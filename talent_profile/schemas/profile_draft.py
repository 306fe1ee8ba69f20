"""Editable employee profile draft and its industry experience entries."""

from datetime import date, datetime
from typing import Any, FrozenSet, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from talent_profile.metrics.completion import compute_completion, compute_total_experience
from talent_profile.utils.date_parser import parse_profile_date

INDUSTRIES: Tuple[str, ...] = (
    "Technology",
    "Finance",
    "Healthcare",
    "Education",
    "Retail",
    "Manufacturing",
    "Consulting",
    "Media & Entertainment",
    "Real Estate",
    "Transportation",
    "Energy",
    "Government",
    "Non-Profit",
    "E-commerce",
    "Fintech",
    "Gaming",
    "Telecommunications",
    "Insurance",
    "Automotive",
    "Aerospace",
    "Biotechnology",
    "Pharmaceuticals",
    "Food & Beverage",
    "Hospitality",
    "Travel & Tourism",
    "Other",
)

EMPLOYEE_TYPES: Tuple[str, ...] = ("Full-time", "Part-time", "Contract", "Consultant", "Intern")

EXPERIENCE_LEVELS: Tuple[str, ...] = (
    "Junior (0-2 years)",
    "Mid-level (2-5 years)",
    "Senior (5-8 years)",
    "Lead (8-12 years)",
    "Principal (12+ years)",
)

MIN_INDUSTRY_YEARS = 0.5
MAX_INDUSTRY_YEARS = 50.0


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class IndustryExperience(BaseModel):
    """Years spent in one industry."""

    model_config = ConfigDict(frozen=True)

    industry: str = Field(..., description="One of INDUSTRIES")
    years: float = Field(..., ge=MIN_INDUSTRY_YEARS, le=MAX_INDUSTRY_YEARS)

    @field_validator("industry")
    @classmethod
    def _known_industry(cls, value: str) -> str:
        if value not in INDUSTRIES:
            raise ValueError(f"unknown industry: {value!r}")
        return value

    def to_wire(self) -> str:
        """Serialize as the service's 'name|years' string."""
        years = int(self.years) if float(self.years).is_integer() else self.years
        return f"{self.industry}|{years}"


class ProfileDraft(BaseModel):
    """
    The in-session, user-editable profile.

    Immutable: every edit goes through with_changes(), which returns a new validated
    draft. total_experience and completion are derived on each read and are not fields,
    so they can never drift from the industries and other inputs.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    owner_id: Optional[int] = Field(default=None, description="user_id of the profile owner")

    # Personal details
    name: str = ""
    email: str = ""
    country: str = ""
    date_of_joining: Optional[date] = None
    end_date: Optional[date] = None
    notice_date: Optional[date] = None

    # Professional details
    employee_type: Optional[str] = None
    department: str = ""
    industries: Tuple[IndustryExperience, ...] = ()
    experience_level: Optional[str] = None
    skills: FrozenSet[str] = Field(default_factory=frozenset)

    # Availability (the only optional field that counts towards completion)
    available_for_additional_work: Optional[bool] = None

    @field_validator("date_of_joining", "end_date", "notice_date", mode="before")
    @classmethod
    def _coerce_date(cls, value: Any) -> Any:
        value = _blank_to_none(value)
        if isinstance(value, (str, datetime)):
            # Unparsable text falls through so pydantic reports it
            return parse_profile_date(value) or value
        return value

    @field_validator("employee_type", mode="before")
    @classmethod
    def _known_employee_type(cls, value: Any) -> Any:
        value = _blank_to_none(value)
        if value is not None and value not in EMPLOYEE_TYPES:
            raise ValueError(f"unknown employee type: {value!r}")
        return value

    @field_validator("experience_level", mode="before")
    @classmethod
    def _known_experience_level(cls, value: Any) -> Any:
        value = _blank_to_none(value)
        if value is not None and value not in EXPERIENCE_LEVELS:
            raise ValueError(f"unknown experience level: {value!r}")
        return value

    @field_validator("industries")
    @classmethod
    def _unique_industries(cls, value: Tuple[IndustryExperience, ...]) -> Tuple[IndustryExperience, ...]:
        names = [entry.industry for entry in value]
        if len(names) != len(set(names)):
            raise ValueError("each industry may appear only once")
        return value

    @field_validator("skills", mode="before")
    @classmethod
    def _clean_skills(cls, value: Any) -> Any:
        if value is None:
            return frozenset()
        if isinstance(value, (list, tuple, set, frozenset)):
            return frozenset(s.strip() for s in value if isinstance(s, str) and s.strip())
        return value

    @property
    def total_experience(self) -> float:
        return compute_total_experience(self)

    @property
    def completion(self) -> int:
        return compute_completion(self)

    def with_changes(self, **changes: Any) -> "ProfileDraft":
        """Return a new draft with the given fields replaced. Unknown fields raise."""
        data = self.model_dump()
        data.update(changes)
        return ProfileDraft.model_validate(data)
