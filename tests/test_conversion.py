from datetime import date

import pytest

from talent_profile.schemas.persisted_profile import PersistedProfile
from talent_profile.schemas.profile_draft import IndustryExperience, ProfileDraft
from talent_profile.schemas.session import SessionUser
from talent_profile.session.conversion import (
    default_draft,
    draft_from_persisted,
    experience_level_for_years,
    parse_industries,
    payload_from_draft,
)


def test_draft_from_persisted_maps_fields(make_profile_json):
    draft = draft_from_persisted(PersistedProfile.model_validate(make_profile_json()))
    assert draft.owner_id == 42
    assert draft.name == "Ada Lovelace"
    assert draft.email == "ada@example.com"
    assert draft.country == "United Kingdom"
    assert draft.date_of_joining == date(2021, 3, 1)
    assert draft.employee_type == "Full-time"
    assert [(e.industry, e.years) for e in draft.industries] == [("Technology", 2), ("Finance", 1)]
    assert draft.total_experience == 3
    assert draft.skills == frozenset({"Python", "SQL"})
    assert draft.available_for_additional_work is True


def test_name_falls_back_to_nested_user(make_profile_json):
    profile = PersistedProfile.model_validate(make_profile_json(name=""))
    assert draft_from_persisted(profile).name == "Ada Lovelace"


def test_email_falls_back_to_session_user(make_profile_json):
    profile = PersistedProfile.model_validate(make_profile_json(user=None))
    user = SessionUser(id=42, email="session@example.com")
    assert draft_from_persisted(profile, user).email == "session@example.com"


def test_missing_values_get_defaults(make_profile_json):
    profile = PersistedProfile.model_validate(
        make_profile_json(
            geo=None,
            department=None,
            industry=[],
            employment_type=None,
            experience_level=None,
            years_of_experience=9,
            availability_flag=None,
        )
    )
    draft = draft_from_persisted(profile)
    assert draft.country == "United States"
    assert draft.department == "Engineering"
    assert draft.employee_type == "Full-time"
    assert draft.industries == (IndustryExperience(industry="Technology", years=1),)
    assert draft.experience_level == "Lead (8-12 years)"
    assert draft.available_for_additional_work is False


def test_legacy_single_industry_string(make_profile_json):
    profile = PersistedProfile.model_validate(make_profile_json(industry="Healthcare|4"))
    assert draft_from_persisted(profile).industries == (IndustryExperience(industry="Healthcare", years=4),)


def test_parse_industries_tolerates_bad_entries():
    parsed = parse_industries(
        [
            "Finance|3",
            {"industry": "Gaming", "years": "2.5"},
            "Wizardry|2",  # unknown -> Technology
            "Technology|9",  # duplicate of the coerced entry above
            "Retail|abc",
            "Energy|-2",
            "Insurance|80",
            "Education",
            42,
        ]
    )
    assert [(e.industry, e.years) for e in parsed] == [
        ("Finance", 3),
        ("Gaming", 2.5),
        ("Technology", 2),
        ("Retail", 1),
        ("Energy", 1),
        ("Insurance", 50),
        ("Education", 1),
    ]


@pytest.mark.parametrize(
    "years,level",
    [
        (0, "Junior (0-2 years)"),
        (2, "Mid-level (2-5 years)"),
        (5, "Senior (5-8 years)"),
        (8, "Lead (8-12 years)"),
        (12, "Principal (12+ years)"),
    ],
)
def test_experience_level_for_years(years, level):
    assert experience_level_for_years(years) == level


def test_default_draft_uses_session_user():
    user = SessionUser(id=5, email="new@example.com", name="New Hire", department="Design", skills=["Figma"])
    draft = default_draft(user)
    assert draft.owner_id == 5
    assert draft.name == "New Hire"
    assert draft.department == "Design"
    assert draft.country == "United States"
    assert draft.employee_type == "Full-time"
    assert draft.experience_level == "Mid-level (2-5 years)"
    assert draft.skills == frozenset({"Figma"})
    assert draft.total_experience == 1
    assert draft.date_of_joining is None
    assert draft.completion == 90  # 8/9 required + availability flag


def test_payload_recomputes_experience():
    draft = ProfileDraft(
        name="Ada",
        country="United Kingdom",
        date_of_joining=date(2021, 3, 1),
        industries=[{"industry": "Technology", "years": 2}, {"industry": "Finance", "years": 1.5}],
        skills=["SQL", "Python"],
    )
    payload = payload_from_draft(draft, user_id=42)
    assert payload.user_id == 42
    assert payload.years_of_experience == 3.5
    assert payload.industry == ["Technology|2", "Finance|1.5"]
    assert payload.skills == ["Python", "SQL"]
    assert payload.date_of_joining == "2021-03-01T00:00:00Z"
    assert payload.end_date is None
    assert payload.availability_flag is False
    assert payload.employment_type == "Full-time"
    assert payload.experience_level == "Mid-level (2-5 years)"
    assert payload.geo == "United Kingdom"


def test_saved_payload_reseeds_to_same_draft():
    draft = default_draft(SessionUser(id=3, email="x@example.com", name="X")).with_changes(
        date_of_joining=date(2024, 2, 1)
    )
    body = payload_from_draft(draft, 3).model_dump()
    body["user"] = {"id": 3, "email": "x@example.com"}
    assert draft_from_persisted(PersistedProfile.model_validate(body)) == draft


def test_session_email_not_borrowed_for_another_profile(make_profile_json):
    profile = PersistedProfile.model_validate(make_profile_json(user_id=77, user=None))
    manager = SessionUser(id=42, email="manager@example.com")
    assert draft_from_persisted(profile, manager).email == ""
