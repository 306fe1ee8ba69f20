"""Derived profile metrics: total industry experience and completion score."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Dict, List

if TYPE_CHECKING:
    from talent_profile.schemas.profile_draft import ProfileDraft

REQUIRED_WEIGHT = 90
OPTIONAL_WEIGHT = 10


def _filled(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def _industries_complete(draft: ProfileDraft) -> bool:
    entries = draft.industries
    return len(entries) > 0 and all(e.industry and e.years > 0 for e in entries)


REQUIRED_FIELDS: Dict[str, Callable[["ProfileDraft"], bool]] = {
    "name": lambda d: _filled(d.name),
    "email": lambda d: _filled(d.email),
    "country": lambda d: _filled(d.country),
    "date_of_joining": lambda d: d.date_of_joining is not None,
    "employee_type": lambda d: _filled(d.employee_type),
    "department": lambda d: _filled(d.department),
    "industries": _industries_complete,
    "experience_level": lambda d: _filled(d.experience_level),
    "skills": lambda d: len(d.skills) > 0,
}

# Present means "defined": an explicit False still counts
OPTIONAL_FIELDS: Dict[str, Callable[["ProfileDraft"], bool]] = {
    "available_for_additional_work": lambda d: d.available_for_additional_work is not None,
}


def compute_total_experience(draft: ProfileDraft) -> float:
    """Sum of years across the draft's industries; 0 when there are none."""
    return float(sum(entry.years for entry in draft.industries))


def missing_required_fields(draft: ProfileDraft) -> List[str]:
    """Names of required fields that are not yet satisfied, in display order."""
    return [name for name, check in REQUIRED_FIELDS.items() if not check(draft)]


def compute_completion(draft: ProfileDraft) -> int:
    """
    Completion percentage in [0, 100].
    Required fields share 90 points, the availability flag is worth the last 10.
    """
    required_done = len(REQUIRED_FIELDS) - len(missing_required_fields(draft))
    optional_done = sum(1 for check in OPTIONAL_FIELDS.values() if check(draft))

    required_score = required_done * REQUIRED_WEIGHT / len(REQUIRED_FIELDS)
    optional_score = optional_done * OPTIONAL_WEIGHT / len(OPTIONAL_FIELDS)
    return int(round(required_score + optional_score))


def completion_band(score: int) -> str:
    """Coarse band used for badges: high (>= 80), medium (>= 50), low."""
    if score >= 80:
        return "high"
    if score >= 50:
        return "medium"
    return "low"
