"""Member self-service profile API router."""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.middleware.auth_middleware import get_current_user
from app.models.user import User
from app.schemas.profile import ProfileCreate, ProfileOut
from app.schemas.update_request import UpdateRequestOut, UpdateRequestSubmit
from app.services import profile_service, update_request_service

router = APIRouter(prefix="/api/profiles", tags=["profiles"])


@router.post("", response_model=ProfileOut, status_code=status.HTTP_201_CREATED)
def register_profile(
    data: ProfileCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return profile_service.create_profile(db, current_user, data)


@router.get("/me", response_model=ProfileOut)
def get_my_profile(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return profile_service.get_profile(db, current_user.user_id)


@router.patch("/me", response_model=ProfileOut)
def edit_my_pending_profile(
    payload: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return profile_service.self_edit(db, current_user, payload)


@router.post("/me/update-requests", response_model=UpdateRequestOut, status_code=status.HTTP_201_CREATED)
def submit_update_request(
    data: UpdateRequestSubmit,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    row = profile_service.submit_update_request(db, current_user, data.submitted_payload)
    return update_request_service.serialize_request(row)
