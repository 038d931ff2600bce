"""Public member directory API router (approved and public profiles only)."""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.middleware.auth_middleware import get_current_user
from app.models.user import User
from app.schemas.common import PageEnvelope
from app.schemas.profile import DirectoryEntryOut, DirectoryFiltersOut
from app.services import directory_query

router = APIRouter(prefix="/api/directory", tags=["directory"])


@router.get("", response_model=PageEnvelope[DirectoryEntryOut])
def list_directory(
    page: int = 1,
    limit: Optional[int] = None,
    search: Optional[str] = None,
    experience_level: Optional[str] = None,
    organization_type: Optional[str] = None,
    program: Optional[str] = None,
    graduation_year: Optional[str] = None,
    location: Optional[str] = None,
    db: Session = Depends(get_db),
    _current_user: User = Depends(get_current_user),
):
    limit = settings.DEFAULT_PAGE_LIMIT if limit is None else limit
    items, total = directory_query.query_profiles(
        db,
        page=page,
        limit=limit,
        search=search,
        experience_level=experience_level,
        organization_type=organization_type,
        program=program,
        graduation_year=graduation_year,
        location=location,
        public_only=True,
    )
    return {
        "success": True,
        "data": [directory_query.to_directory_entry(row) for row in items],
        "pagination": directory_query.build_pagination(page, limit, total),
    }


@router.get("/filters", response_model=DirectoryFiltersOut)
def get_directory_filters(
    db: Session = Depends(get_db),
    _current_user: User = Depends(get_current_user),
):
    return directory_query.filter_options(db)
