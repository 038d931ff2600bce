"""Approved member export: stable read API plus a CSV rendering for spreadsheet tools."""

import csv
import io
from typing import List

from sqlalchemy.orm import Session

from app.models.profile import Profile
from app.utils.profile_fields import APPROVED

EXPORT_COLUMNS = [
    "Name",
    "Email",
    "Phone",
    "Organization",
    "Position",
    "Program",
    "Experience Level",
    "Organization Type",
    "City",
    "Country",
    "Address",
    "Date of Birth",
    "Graduation Year",
    "LinkedIn",
    "Website",
    "Bio",
    "Skills",
    "Interests",
    "Emergency Contact Name",
    "Emergency Contact Phone",
    "Approved Date",
    "Registration Date",
    "Public Profile",
    "Show Contact Info",
    "Show Location",
]


def list_approved_profiles(db: Session) -> List[Profile]:
    return (
        db.query(Profile)
        .filter(Profile.approval_status == APPROVED)
        .order_by(Profile.created_at.desc(), Profile.id.desc())
        .all()
    )


def _yes_no(value) -> str:
    return "Yes" if value else "No"


def _date_text(value) -> str:
    return value.strftime("%Y-%m-%d") if value else ""


def _export_row(profile: Profile) -> list:
    return [
        profile.full_name,
        profile.email or "",
        profile.phone or "",
        profile.organization or "",
        profile.position or "",
        profile.program or "",
        profile.experience_level or "",
        profile.organization_type or "",
        profile.city or "",
        profile.country or "",
        profile.address or "",
        _date_text(profile.date_of_birth),
        profile.graduation_year or "",
        profile.linkedin_url or "",
        profile.website_url or "",
        profile.bio or "",
        ", ".join(profile.skills or []),
        ", ".join(profile.interests or []),
        profile.emergency_contact_name or "",
        profile.emergency_contact_phone or "",
        _date_text(profile.approved_at),
        _date_text(profile.created_at),
        _yes_no(profile.is_public),
        _yes_no(profile.show_contact_info),
        _yes_no(profile.show_location),
    ]


def export_csv(db: Session) -> str:
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(EXPORT_COLUMNS)
    for profile in list_approved_profiles(db):
        writer.writerow(_export_row(profile))
    return output.getvalue()
