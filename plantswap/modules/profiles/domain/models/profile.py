# 📄 File: plantswap/modules/profiles/domain/models/profile.py
# 🧭 Purpose (Layman Explanation):
# Describes a member's public card: username, display name, a short bio, where they live and their picture.
# 🧪 Purpose (Technical Summary):
# Domain model for the Profile entity (one-to-one with the auth user id) and its
# mapping to and from the `profiles` table row.
# 🔗 Dependencies:
# pydantic, datetime, typing
# 🔄 Connected Modules / Calls From:
# profile_service.py, profile_repository_impl.py, exchange details view

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

BIO_MAX_LENGTH = 500


class Profile(BaseModel):
    """
    Profile domain model; ``id`` is the owning user's id.

    Mutated only by its owner.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str
    username: str
    name: Optional[str] = None
    bio: Optional[str] = Field(None, max_length=BIO_MAX_LENGTH)
    location: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: Optional[datetime] = None

    @field_validator('username')
    @classmethod
    def validate_username(cls, v: str) -> str:
        username = v.strip()
        if not username:
            raise ValueError('Username cannot be empty')
        return username

    @property
    def display_name(self) -> str:
        return self.name or self.username

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Profile":
        return cls(
            id=str(row["id"]),
            username=row["username"],
            name=row.get("name"),
            bio=row.get("bio"),
            location=row.get("location"),
            avatar_url=row.get("avatar_url"),
            created_at=row.get("created_at"),
        )

    def to_row(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "username": self.username,
            "name": self.name,
            "bio": self.bio,
            "location": self.location,
            "avatar_url": self.avatar_url,
        }


# Fields the owner may change through an edit
EDITABLE_FIELDS = frozenset({"name", "bio", "location"})
