"""Profile field catalogue and value helpers shared by the moderation services."""

import json
from typing import Any

PENDING = "pending"
APPROVED = "approved"
REJECTED = "rejected"
APPROVAL_STATUSES = (PENDING, APPROVED, REJECTED)

COMMUNICATION_MODES = ("email", "phone", "whatsapp", "linkedin")

# Editable content fields, in display order.
CONTENT_FIELDS = (
    "first_name",
    "last_name",
    "email",
    "phone",
    "gender",
    "date_of_birth",
    "program",
    "graduation_year",
    "organization",
    "organization_type",
    "position",
    "experience_level",
    "organizations",
    "location",
    "city",
    "country",
    "pincode",
    "address",
    "linkedin_url",
    "website_url",
    "bio",
    "skills",
    "interests",
    "preferred_mode_of_communication",
    "show_contact_info",
    "show_location",
    "emergency_contact_name",
    "emergency_contact_phone",
    "avatar_url",
)

STATUS_FIELDS = ("approval_status", "is_public", "rejection_reason")

SEARCH_FIELDS = (
    "first_name",
    "last_name",
    "email",
    "phone",
    "organization",
    "position",
    "program",
    "city",
    "country",
    "address",
    "bio",
    "linkedin_url",
    "website_url",
)

# JSON list columns searched through their stored text.
SEARCH_TAG_FIELDS = ("interests",)

FIELD_LABELS = {
    "first_name": "First Name",
    "last_name": "Last Name",
    "email": "Email",
    "phone": "Phone",
    "gender": "Gender",
    "date_of_birth": "Date of Birth",
    "organization": "Organization",
    "organization_type": "Organization Type",
    "organizations": "Organizations",
    "position": "Position",
    "experience_level": "Experience Level",
    "bio": "Bio",
    "location": "Location",
    "city": "City",
    "country": "Country",
    "pincode": "Pincode",
    "address": "Address",
    "linkedin_url": "LinkedIn URL",
    "website_url": "Website URL",
    "interests": "Interests",
    "skills": "Skills",
    "program": "Program",
    "graduation_year": "Graduation Year",
    "preferred_mode_of_communication": "Preferred Mode of Communication",
    "show_contact_info": "Show Contact Info",
    "show_location": "Show Location",
    "emergency_contact_name": "Emergency Contact Name",
    "emergency_contact_phone": "Emergency Contact Phone",
    "avatar_url": "Profile Picture",
    "approval_status": "Approval Status",
    "rejection_reason": "Rejection Reason",
    "is_public": "Public Profile",
}

NONE_SENTINEL = "—"
LIKE_ESCAPE_CHAR = "\\"


def field_label(field_name: str) -> str:
    return FIELD_LABELS.get(field_name, field_name)


def normalize_filter(value: str | None) -> str | None:
    """Collapse blank and "all" filter values to None."""
    text = str(value or "").strip()
    if not text or text.lower() == "all":
        return None
    return text


def format_value(value: Any) -> str:
    if value is None:
        return NONE_SENTINEL
    if isinstance(value, (list, tuple)):
        if not value:
            return NONE_SENTINEL
        return ", ".join(
            json.dumps(item, ensure_ascii=False, sort_keys=True) if isinstance(item, dict) else str(item)
            for item in value
        )
    if isinstance(value, dict):
        return json.dumps(value, ensure_ascii=False, sort_keys=True)
    return str(value)


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term matches literally."""
    return (
        term.replace(LIKE_ESCAPE_CHAR, LIKE_ESCAPE_CHAR * 2)
        .replace("%", f"{LIKE_ESCAPE_CHAR}%")
        .replace("_", f"{LIKE_ESCAPE_CHAR}_")
    )
