"""Admin profile moderation API router. Validates requests and delegates to the service layer."""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, BackgroundTasks, Body, Depends, Response
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.middleware.auth_middleware import require_admin
from app.models.user import User
from app.schemas.change_record import ChangeRecordOut
from app.schemas.common import PageEnvelope
from app.schemas.profile import ProfileOut, ProfileRejectRequest, ProfileStatsOut, ProfileVisibilityUpdate
from app.services import approval_service, change_recorder, directory_query, export_service, profile_service, stats_service
from app.services.notification_service import ApprovalNotifier, get_notifier

router = APIRouter(prefix="/api/admin/profiles", tags=["admin-profiles"])


@router.get("", response_model=PageEnvelope[ProfileOut])
def list_profiles(
    page: int = 1,
    limit: Optional[int] = None,
    status: Optional[str] = None,
    search: Optional[str] = None,
    experience_level: Optional[str] = None,
    organization_type: Optional[str] = None,
    program: Optional[str] = None,
    graduation_year: Optional[str] = None,
    location: Optional[str] = None,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_admin),
):
    limit = settings.DEFAULT_PAGE_LIMIT if limit is None else limit
    items, total = directory_query.query_profiles(
        db,
        page=page,
        limit=limit,
        status=status,
        search=search,
        experience_level=experience_level,
        organization_type=organization_type,
        program=program,
        graduation_year=graduation_year,
        location=location,
    )
    return {
        "success": True,
        "data": items,
        "pagination": directory_query.build_pagination(page, limit, total),
    }


@router.get("/stats", response_model=ProfileStatsOut)
def get_stats(
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_admin),
):
    return stats_service.compute_stats(db)


@router.get("/export.csv")
def export_approved_csv(
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_admin),
):
    csv_text = export_service.export_csv(db)
    return Response(
        content=csv_text,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": 'attachment; filename="approved_members.csv"'},
    )


@router.get("/{user_id}", response_model=ProfileOut)
def get_profile(
    user_id: int,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_admin),
):
    return profile_service.get_profile(db, user_id)


@router.get("/{user_id}/history", response_model=List[ChangeRecordOut])
def get_profile_history(
    user_id: int,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_admin),
):
    rows = change_recorder.list_history(db, profile_user_id=user_id)
    return [change_recorder.to_response(row) for row in rows]


@router.post("/{user_id}/approve", response_model=ProfileOut)
def approve_profile(
    user_id: int,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    notifier: ApprovalNotifier = Depends(get_notifier),
):
    return approval_service.approve_profile(
        db, user_id, current_user, notifier=notifier, background_tasks=background_tasks
    )


@router.post("/{user_id}/reject", response_model=ProfileOut)
def reject_profile(
    user_id: int,
    background_tasks: BackgroundTasks,
    data: Optional[ProfileRejectRequest] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    notifier: ApprovalNotifier = Depends(get_notifier),
):
    reason = data.reason if data else None
    return approval_service.reject_profile(
        db, user_id, current_user, reason=reason, notifier=notifier, background_tasks=background_tasks
    )


@router.patch("/{user_id}/visibility", response_model=ProfileOut)
def update_visibility(
    user_id: int,
    data: ProfileVisibilityUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    return approval_service.set_public(db, user_id, data.is_public, current_user)


@router.patch("/{user_id}", response_model=ProfileOut)
def edit_profile(
    user_id: int,
    payload: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    return approval_service.admin_edit(db, user_id, payload, current_user)
