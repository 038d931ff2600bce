"""Service layer package initialization."""

from app.services import (
    auth_service,
    change_recorder,
    profile_service,
    directory_query,
    update_request_service,
    approval_service,
    stats_service,
    export_service,
    notification_service,
)
