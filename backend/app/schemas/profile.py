"""Profile request/response contracts built on Pydantic."""

from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.utils.profile_fields import COMMUNICATION_MODES

CommunicationMode = Literal["email", "phone", "whatsapp", "linkedin"]


def _normalize_tags(values: Optional[List[str]]) -> Optional[List[str]]:
    if values is None:
        return None
    rows = []
    seen = set()
    for raw in values:
        text = str(raw or "").strip()
        if not text or text in seen:
            continue
        seen.add(text)
        rows.append(text)
    return rows


class OrganizationEntry(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    name: str
    type: Optional[str] = None
    role: Optional[str] = None
    years_experience: Optional[int] = Field(default=None, ge=0)
    description: Optional[str] = None


class ProfileFieldPayload(BaseModel):
    """Typed mapping of editable profile fields.

    Only the keys a caller actually sends are applied; read them back with
    ``model_dump(exclude_unset=True)``. Unknown keys are rejected.
    """

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)
    email: Optional[str] = Field(default=None, max_length=150)
    phone: Optional[str] = Field(default=None, max_length=40)
    gender: Optional[str] = None
    date_of_birth: Optional[date] = None
    program: Optional[str] = None
    graduation_year: Optional[int] = Field(default=None, ge=1900, le=2100)
    organization: Optional[str] = None
    organization_type: Optional[str] = None
    position: Optional[str] = None
    experience_level: Optional[str] = None
    organizations: Optional[List[OrganizationEntry]] = None
    location: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    pincode: Optional[str] = None
    address: Optional[str] = None
    linkedin_url: Optional[str] = None
    website_url: Optional[str] = None
    bio: Optional[str] = None
    skills: Optional[List[str]] = None
    interests: Optional[List[str]] = None
    preferred_mode_of_communication: Optional[List[CommunicationMode]] = None
    show_contact_info: Optional[bool] = None
    show_location: Optional[bool] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    avatar_url: Optional[str] = None

    @field_validator("skills", "interests")
    @classmethod
    def _clean_tags(cls, values):
        return _normalize_tags(values)

    @field_validator("preferred_mode_of_communication")
    @classmethod
    def _clean_modes(cls, values):
        cleaned = _normalize_tags(values)
        if cleaned is None:
            return None
        return [mode for mode in COMMUNICATION_MODES if mode in cleaned]

    @field_validator("skills", "interests", "organizations", "preferred_mode_of_communication", mode="before")
    @classmethod
    def _null_list_is_empty(cls, values):
        # List columns are non-nullable; an explicit null clears the list.
        return [] if values is None else values


class ProfileCreate(ProfileFieldPayload):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)


class ProfileOut(BaseModel):
    id: int
    user_id: int
    approval_status: str
    is_public: bool
    rejection_reason: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    gender: Optional[str] = None
    date_of_birth: Optional[date] = None
    program: Optional[str] = None
    graduation_year: Optional[int] = None
    organization: Optional[str] = None
    organization_type: Optional[str] = None
    position: Optional[str] = None
    experience_level: Optional[str] = None
    organizations: List[dict] = []
    location: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    pincode: Optional[str] = None
    address: Optional[str] = None
    linkedin_url: Optional[str] = None
    website_url: Optional[str] = None
    bio: Optional[str] = None
    skills: List[str] = []
    interests: List[str] = []
    preferred_mode_of_communication: List[str] = []
    show_contact_info: bool = False
    show_location: bool = True
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    approved_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class DirectoryEntryOut(BaseModel):
    """Public directory card; contact and location follow the member's visibility flags."""

    user_id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    program: Optional[str] = None
    graduation_year: Optional[int] = None
    organization: Optional[str] = None
    organization_type: Optional[str] = None
    position: Optional[str] = None
    experience_level: Optional[str] = None
    bio: Optional[str] = None
    skills: List[str] = []
    interests: List[str] = []
    avatar_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None


class ProfileRejectRequest(BaseModel):
    reason: Optional[str] = None


class ProfileVisibilityUpdate(BaseModel):
    is_public: bool


class ProfileStatsOut(BaseModel):
    pending: int
    approved: int
    rejected: int
    total: int


class DirectoryFiltersOut(BaseModel):
    programs: List[str] = []
    organization_types: List[str] = []
    experience_levels: List[str] = []
    graduation_years: List[int] = []
    locations: List[str] = []
