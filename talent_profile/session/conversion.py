"""Conversions between the service's profile shape and the editable draft."""

import math
from typing import Any, Iterable, Optional, Tuple

from talent_profile.config import (
    DEFAULT_COUNTRY,
    DEFAULT_DEPARTMENT,
    DEFAULT_EMPLOYEE_TYPE,
    DEFAULT_EXPERIENCE_LEVEL,
    DEFAULT_INDUSTRY,
    DEFAULT_INDUSTRY_YEARS,
)
from talent_profile.metrics.completion import compute_total_experience
from talent_profile.schemas.persisted_profile import PersistedProfile, ProfilePayload
from talent_profile.schemas.profile_draft import (
    EMPLOYEE_TYPES,
    EXPERIENCE_LEVELS,
    INDUSTRIES,
    MAX_INDUSTRY_YEARS,
    MIN_INDUSTRY_YEARS,
    IndustryExperience,
    ProfileDraft,
)
from talent_profile.schemas.session import SessionUser
from talent_profile.utils.date_parser import format_iso_datetime


def _coerce_years(raw: Any) -> float:
    try:
        years = float(raw)
    except (TypeError, ValueError):
        return DEFAULT_INDUSTRY_YEARS
    if math.isnan(years) or years <= 0:
        return DEFAULT_INDUSTRY_YEARS
    return min(max(years, MIN_INDUSTRY_YEARS), MAX_INDUSTRY_YEARS)


def _parse_industry_entry(entry: Any) -> Optional[Tuple[str, float]]:
    if isinstance(entry, dict) and "industry" in entry and "years" in entry:
        name = str(entry["industry"]).strip()
        years = _coerce_years(entry["years"])
    elif isinstance(entry, str):
        parts = entry.split("|")
        name = parts[0].strip()
        years = _coerce_years(parts[1]) if len(parts) > 1 else DEFAULT_INDUSTRY_YEARS
    else:
        return None
    return (name if name in INDUSTRIES else DEFAULT_INDUSTRY), years


def parse_industries(entries: Iterable[Any]) -> Tuple[IndustryExperience, ...]:
    """
    Accept both wire shapes ("Finance|3" and {"industry": "Finance", "years": 3}).
    Unknown names become the default industry, bad years become 1, duplicates keep the first.
    """
    seen: set = set()
    result = []
    for entry in entries:
        parsed = _parse_industry_entry(entry)
        if parsed is None or parsed[0] in seen:
            continue
        seen.add(parsed[0])
        result.append(IndustryExperience(industry=parsed[0], years=parsed[1]))
    return tuple(result)


def default_industries() -> Tuple[IndustryExperience, ...]:
    return (IndustryExperience(industry=DEFAULT_INDUSTRY, years=DEFAULT_INDUSTRY_YEARS),)


def experience_level_for_years(years: float) -> str:
    if years >= 12:
        return "Principal (12+ years)"
    if years >= 8:
        return "Lead (8-12 years)"
    if years >= 5:
        return "Senior (5-8 years)"
    if years >= 2:
        return "Mid-level (2-5 years)"
    return "Junior (0-2 years)"


def default_draft(user: Optional[SessionUser] = None) -> ProfileDraft:
    """Static seed for a profile that does not exist yet."""
    user = user or SessionUser()
    return ProfileDraft(
        owner_id=user.id,
        name=user.name,
        email=user.email or "",
        country=DEFAULT_COUNTRY,
        employee_type=DEFAULT_EMPLOYEE_TYPE,
        department=user.department or DEFAULT_DEPARTMENT,
        industries=default_industries(),
        experience_level=DEFAULT_EXPERIENCE_LEVEL,
        skills=frozenset(user.skills),
        available_for_additional_work=False,
    )


def draft_from_persisted(profile: PersistedProfile, user: Optional[SessionUser] = None) -> ProfileDraft:
    """Seed a draft from the canonical profile, filling gaps with defaults."""
    nested = profile.user
    name = (profile.name or "").strip() or (nested.full_name if nested else "")
    # The signed-in user's email only stands in for their own profile
    own_profile = user is not None and user.id == profile.user_id
    email = (nested.email if nested else None) or (user.email if own_profile else None) or ""

    employee_type = profile.employment_type or profile.type
    if employee_type not in EMPLOYEE_TYPES:
        employee_type = DEFAULT_EMPLOYEE_TYPE

    experience_level = profile.experience_level
    if experience_level not in EXPERIENCE_LEVELS:
        experience_level = experience_level_for_years(profile.years_of_experience)

    return ProfileDraft(
        owner_id=profile.user_id,
        name=name,
        email=email,
        country=profile.geo or DEFAULT_COUNTRY,
        date_of_joining=profile.date_of_joining,
        end_date=profile.end_date,
        notice_date=profile.notice_date,
        employee_type=employee_type,
        department=profile.department or DEFAULT_DEPARTMENT,
        industries=parse_industries(profile.industry) or default_industries(),
        experience_level=experience_level,
        skills=frozenset(profile.skills),
        available_for_additional_work=profile.availability_flag,
    )


def payload_from_draft(draft: ProfileDraft, user_id: int) -> ProfilePayload:
    """Build the write body. years_of_experience is always recomputed from industries."""
    return ProfilePayload(
        user_id=user_id,
        name=draft.name,
        geo=draft.country,
        date_of_joining=format_iso_datetime(draft.date_of_joining),
        end_date=format_iso_datetime(draft.end_date),
        notice_date=format_iso_datetime(draft.notice_date),
        skills=sorted(draft.skills),
        years_of_experience=compute_total_experience(draft),
        industry=[entry.to_wire() for entry in draft.industries],
        availability_flag=bool(draft.available_for_additional_work),
        employment_type=draft.employee_type or DEFAULT_EMPLOYEE_TYPE,
        experience_level=draft.experience_level or DEFAULT_EXPERIENCE_LEVEL,
        department=draft.department or DEFAULT_DEPARTMENT,
    )
