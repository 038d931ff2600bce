"""Admin update request review API router."""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.middleware.auth_middleware import require_admin
from app.models.user import User
from app.schemas.common import PageEnvelope
from app.schemas.profile import ProfileOut
from app.schemas.update_request import (
    UpdateRequestApprove,
    UpdateRequestDetailOut,
    UpdateRequestOut,
    UpdateRequestReject,
)
from app.services import directory_query, update_request_service

router = APIRouter(prefix="/api/admin/update-requests", tags=["update-requests"])


@router.get("", response_model=PageEnvelope[UpdateRequestOut])
def list_update_requests(
    page: int = 1,
    limit: int = 10,
    status: Optional[str] = "pending",
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_admin),
):
    items, total = update_request_service.list_requests(db, status=status, page=page, limit=limit)
    return {
        "success": True,
        "data": items,
        "pagination": directory_query.build_pagination(page, limit, total),
    }


@router.get("/{request_id}", response_model=UpdateRequestDetailOut)
def get_update_request(
    request_id: int,
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_admin),
):
    return update_request_service.get_request_detail(db, request_id)


@router.post("/{request_id}/approve", response_model=ProfileOut)
def approve_update_request(
    request_id: int,
    data: Optional[UpdateRequestApprove] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    override = data.override_payload if data else None
    return update_request_service.approve_request(db, request_id, current_user, override_payload=override)


@router.post("/{request_id}/reject", response_model=UpdateRequestOut)
def reject_update_request(
    request_id: int,
    data: Optional[UpdateRequestReject] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    reason = data.reason if data else None
    row = update_request_service.reject_request(db, request_id, current_user, reason=reason)
    return update_request_service.serialize_request(row)
