"""Directory query layer: filtered, searched and paginated profile listings."""

import math
from typing import Any, Dict, List, Optional, Tuple, Union

from sqlalchemy import String, and_, cast, or_
from sqlalchemy.orm import Query, Session

from app.config import settings
from app.exceptions import ValidationError
from app.models.profile import Profile
from app.utils.profile_fields import APPROVED, LIKE_ESCAPE_CHAR, SEARCH_FIELDS, SEARCH_TAG_FIELDS, escape_like, normalize_filter


def validate_page_bounds(page: int, limit: int) -> None:
    if page is None or int(page) < 1:
        raise ValidationError("page must be greater than or equal to 1")
    if limit is None or int(limit) <= 0:
        raise ValidationError("limit must be greater than 0")
    if int(limit) > settings.MAX_PAGE_LIMIT:
        raise ValidationError(f"limit must not exceed {settings.MAX_PAGE_LIMIT}")


def build_pagination(page: int, limit: int, total: int) -> Dict[str, Any]:
    offset = (page - 1) * limit
    return {
        "page": page,
        "limit": limit,
        "total": total,
        "totalPages": math.ceil(total / limit) if limit else 0,
        "hasNextPage": total > offset + limit,
        "hasPreviousPage": page > 1,
    }


def apply_search(query: Query, search: Optional[str]) -> Query:
    term = (search or "").strip()
    if not term:
        return query
    like = f"%{escape_like(term.lower())}%"
    return query.filter(
        or_(
            *[getattr(Profile, name).ilike(like, escape=LIKE_ESCAPE_CHAR) for name in SEARCH_FIELDS],
            *[cast(getattr(Profile, name), String).ilike(like, escape=LIKE_ESCAPE_CHAR) for name in SEARCH_TAG_FIELDS],
        )
    )


def _location_clause(location: str):
    # Locations are offered as "City, Country"; a bare value matches either part.
    city, sep, country = location.rpartition(", ")
    if sep:
        return and_(Profile.city == city, Profile.country == country)
    return or_(Profile.city == location, Profile.country == location)


def build_query(
    db: Session,
    *,
    status: Optional[str] = None,
    search: Optional[str] = None,
    experience_level: Optional[str] = None,
    organization_type: Optional[str] = None,
    program: Optional[str] = None,
    graduation_year: Optional[Union[int, str]] = None,
    location: Optional[str] = None,
    public_only: bool = False,
) -> Query:
    query = db.query(Profile)
    if public_only:
        query = query.filter(Profile.approval_status == APPROVED, Profile.is_public == True)  # noqa: E712

    status_filter = normalize_filter(status)
    if status_filter:
        query = query.filter(Profile.approval_status == status_filter)

    experience_filter = normalize_filter(experience_level)
    if experience_filter:
        query = query.filter(Profile.experience_level == experience_filter)

    org_type_filter = normalize_filter(organization_type)
    if org_type_filter:
        query = query.filter(Profile.organization_type == org_type_filter)

    program_filter = normalize_filter(program)
    if program_filter:
        query = query.filter(Profile.program == program_filter)

    year_filter = normalize_filter(graduation_year)
    if year_filter:
        if not year_filter.isdigit():
            raise ValidationError("graduation_year must be a year")
        query = query.filter(Profile.graduation_year == int(year_filter))

    location_filter = normalize_filter(location)
    if location_filter:
        query = query.filter(_location_clause(location_filter))
        if public_only:
            query = query.filter(Profile.show_location == True)  # noqa: E712

    return apply_search(query, search)


def query_profiles(
    db: Session,
    *,
    page: int = 1,
    limit: int = 20,
    status: Optional[str] = None,
    search: Optional[str] = None,
    experience_level: Optional[str] = None,
    organization_type: Optional[str] = None,
    program: Optional[str] = None,
    graduation_year: Optional[Union[int, str]] = None,
    location: Optional[str] = None,
    public_only: bool = False,
) -> Tuple[List[Profile], int]:
    validate_page_bounds(page, limit)
    query = build_query(
        db,
        status=status,
        search=search,
        experience_level=experience_level,
        organization_type=organization_type,
        program=program,
        graduation_year=graduation_year,
        location=location,
        public_only=public_only,
    )
    total = query.count()
    items = (
        query.order_by(Profile.created_at.desc(), Profile.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return items, total


def to_directory_entry(profile: Profile) -> Dict[str, Any]:
    entry = {
        "user_id": profile.user_id,
        "first_name": profile.first_name,
        "last_name": profile.last_name,
        "program": profile.program,
        "graduation_year": profile.graduation_year,
        "organization": profile.organization,
        "organization_type": profile.organization_type,
        "position": profile.position,
        "experience_level": profile.experience_level,
        "bio": profile.bio,
        "skills": list(profile.skills or []),
        "interests": list(profile.interests or []),
        "avatar_url": profile.avatar_url,
        "linkedin_url": profile.linkedin_url,
        "email": None,
        "phone": None,
        "city": None,
        "country": None,
    }
    if profile.show_contact_info:
        entry["email"] = profile.email
        entry["phone"] = profile.phone
    if profile.show_location:
        entry["city"] = profile.city
        entry["country"] = profile.country
    return entry


def _distinct_values(db: Session, column) -> List[Any]:
    rows = (
        db.query(column)
        .filter(Profile.approval_status == APPROVED, Profile.is_public == True)  # noqa: E712
        .filter(column.isnot(None))
        .distinct()
        .all()
    )
    return [value for (value,) in rows if value != ""]


def filter_options(db: Session) -> Dict[str, List[Any]]:
    """Distinct values for the directory filter dropdowns, taken from listed members only."""
    locations = (
        db.query(Profile.city, Profile.country)
        .filter(
            Profile.approval_status == APPROVED,
            Profile.is_public == True,  # noqa: E712
            Profile.show_location == True,  # noqa: E712
            Profile.city.isnot(None),
            Profile.country.isnot(None),
        )
        .distinct()
        .all()
    )
    return {
        "programs": sorted(_distinct_values(db, Profile.program)),
        "organization_types": sorted(_distinct_values(db, Profile.organization_type)),
        "experience_levels": sorted(_distinct_values(db, Profile.experience_level)),
        "graduation_years": sorted(_distinct_values(db, Profile.graduation_year), reverse=True),
        "locations": sorted({f"{city}, {country}" for city, country in locations if city and country}),
    }
