# 📄 File: plantswap/modules/profiles/presentation/api/schemas/profile_schemas.py
# 🧭 Purpose (Layman Explanation):
# Defines the shape of profile data the app sends and receives, and the limits on each field.
#
# 🧪 Purpose (Technical Summary):
# Pydantic request/response schemas for profile endpoints.
#
# 🔗 Dependencies:
# - pydantic for schema validation and serialization
# - Profile domain model
#
# 🔄 Connected Modules / Calls From:
# - plantswap.modules.profiles.presentation.api.v1.profiles
# - plantswap.modules.exchanges.presentation.api.schemas (embedded in offer details)

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from plantswap.modules.profiles.domain.models.profile import BIO_MAX_LENGTH, Profile


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class ProfileCreateRequest(BaseModel):
    """Profile creation for the calling user."""

    username: str = Field(..., min_length=2, max_length=50, examples=["fern_lover"])
    name: Optional[str] = Field(None, min_length=2, max_length=50, examples=["Jane Smith"])
    bio: Optional[str] = Field(None, max_length=BIO_MAX_LENGTH)
    location: Optional[str] = Field(None, min_length=2, max_length=50, examples=["Lisbon"])

    @field_validator('username')
    @classmethod
    def validate_username(cls, v: str) -> str:
        username = v.strip()
        if " " in username:
            raise ValueError('Username cannot contain spaces')
        return username


class ProfileUpdateRequest(BaseModel):
    """Partial update of the caller's own profile."""

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(None, min_length=2, max_length=50)
    bio: Optional[str] = Field(None, max_length=BIO_MAX_LENGTH)
    location: Optional[str] = Field(None, min_length=2, max_length=50)

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class ProfileResponse(BaseModel):
    """Profile information."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    name: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, profile: Profile) -> "ProfileResponse":
        return cls.model_validate(profile)
