# 📄 File: plantswap/modules/profiles/domain/services/profile_service.py
# 🧭 Purpose (Layman Explanation):
# Manages member profiles: creating one after sign-up, editing name, bio and location,
# and changing or removing the profile picture.
# 🧪 Purpose (Technical Summary):
# Domain service implementing profile business rules (one profile per user, unique username,
# owner-only edits, bio length) and avatar storage through the storage client.
# 🔗 Dependencies:
# Domain models, ProfileRepository, SupabaseStorageClient, shared exceptions
# 🔄 Connected Modules / Calls From:
# profiles API endpoints, profiles presentation dependencies

import logging
from typing import Any, Dict, Optional

from plantswap.shared.config.settings import get_settings
from plantswap.shared.core.dependencies import CurrentUser
from plantswap.shared.core.exceptions import (
    DuplicateResourceError,
    NotFoundError,
    PlantSwapException,
    StorageError,
    ValidationError,
)
from plantswap.shared.infrastructure.storage import SupabaseStorageClient

from ..models.profile import BIO_MAX_LENGTH, EDITABLE_FIELDS, Profile
from ..repositories.profile_repository import ProfileRepository

logger = logging.getLogger(__name__)


class ProfileService:
    """
    Domain service for profile management business logic.

    - Profile creation (one per user, unique username)
    - Editing own name, bio and location
    - Avatar upload and removal
    """

    def __init__(self, profile_repository: ProfileRepository, storage: SupabaseStorageClient):
        self.profile_repository = profile_repository
        self.storage = storage
        self.bucket = get_settings().AVATARS_BUCKET

    async def get_profile(self, user_id: str) -> Profile:
        """
        Get a user's profile.

        Raises:
            NotFoundError: If the user has no profile
        """
        profile = await self.profile_repository.get_by_id(user_id)
        if not profile:
            raise NotFoundError(
                f"Profile not found: {user_id}",
                resource_type="profile",
                resource_id=user_id,
            )
        return profile

    async def create_profile(
        self,
        actor: CurrentUser,
        username: str,
        name: Optional[str] = None,
        bio: Optional[str] = None,
        location: Optional[str] = None
    ) -> Profile:
        """
        Create the acting user's profile.

        Args:
            actor: User the profile belongs to
            username: Public handle, must be unique
            name: Display name
            bio: Short biography (max 500 chars)
            location: Free-text location

        Returns:
            Created Profile entity

        Raises:
            DuplicateResourceError: If a profile already exists or the username is taken
        """
        logger.info(f"Creating profile for user: {actor.user_id}")

        if await self.profile_repository.get_by_id(actor.user_id):
            raise DuplicateResourceError(
                "Profile already exists",
                resource_type="profile",
                field="id",
                value=actor.user_id,
            )

        username = username.strip()
        if await self.profile_repository.get_by_username(username):
            raise DuplicateResourceError(
                "Username is already taken",
                resource_type="profile",
                field="username",
                value=username,
            )

        self._check_bio(bio)
        profile = Profile(
            id=actor.user_id,
            username=username,
            name=name,
            bio=bio,
            location=location,
        )
        created = await self.profile_repository.create(profile)

        logger.info(f"Successfully created profile for user: {actor.user_id}")
        return created

    async def update_profile(self, actor: CurrentUser, changes: Dict[str, Any]) -> Profile:
        """
        Update the acting user's own name, bio or location.

        Raises:
            ValidationError: Non-editable field or bio too long
            NotFoundError: The actor has no profile yet
        """
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValidationError(
                f"Fields cannot be edited: {', '.join(sorted(unknown))}",
                field=sorted(unknown)[0],
            )
        self._check_bio(changes.get("bio"))

        if not changes:
            return await self.get_profile(actor.user_id)

        updated = await self.profile_repository.update(actor.user_id, changes)
        if not updated:
            raise NotFoundError(
                f"Profile not found: {actor.user_id}",
                resource_type="profile",
                resource_id=actor.user_id,
            )

        logger.info(f"Profile updated for user {actor.user_id}: {sorted(changes)}")
        return updated

    async def upload_avatar(
        self,
        actor: CurrentUser,
        data: bytes,
        filename: Optional[str] = None
    ) -> Profile:
        """Store a new profile picture and point the profile at it."""
        profile = await self.get_profile(actor.user_id)

        avatar_url = await self.storage.upload_image(self.bucket, actor.user_id, data, filename)
        try:
            updated = await self.profile_repository.update(actor.user_id, {"avatar_url": avatar_url})
            if not updated:
                raise NotFoundError(
                    f"Profile not found: {actor.user_id}",
                    resource_type="profile",
                    resource_id=actor.user_id,
                )
        except PlantSwapException:
            await self._discard_avatar(avatar_url)
            raise

        if profile.avatar_url:
            await self._discard_avatar(profile.avatar_url)

        logger.info(f"Avatar uploaded for user {actor.user_id}")
        return updated

    async def remove_avatar(self, actor: CurrentUser) -> Profile:
        """Delete the stored profile picture and clear the URL."""
        profile = await self.get_profile(actor.user_id)
        if not profile.avatar_url:
            return profile

        await self.storage.remove_by_url(self.bucket, profile.avatar_url)
        updated = await self.profile_repository.update(actor.user_id, {"avatar_url": None})

        logger.info(f"Avatar removed for user {actor.user_id}")
        return updated or profile

    def _check_bio(self, bio: Optional[str]) -> None:
        if bio and len(bio) > BIO_MAX_LENGTH:
            raise ValidationError(
                f"Bio cannot exceed {BIO_MAX_LENGTH} characters",
                field="bio",
                constraint=f"max_length={BIO_MAX_LENGTH}",
            )

    async def _discard_avatar(self, avatar_url: str) -> None:
        try:
            await self.storage.remove_by_url(self.bucket, avatar_url)
        except StorageError as e:
            logger.warning(f"Could not remove avatar {avatar_url}: {e.message}")
