# 📄 File: plantswap/modules/listings/domain/services/plant_service.py
# 🧭 Purpose (Layman Explanation):
# Handles everything people do with their plant listings: putting a plant up, browsing what others offer,
# editing or removing their own plants and attaching a photo.
# 🧪 Purpose (Technical Summary):
# Domain service for plant listing business logic: owner-only mutations, browse with in-memory
# filtering, photo upload / replacement / removal through the storage client.
# 🔗 Dependencies:
# Domain models, PlantRepository, listing_filter, SupabaseStorageClient, shared exceptions
# 🔄 Connected Modules / Calls From:
# plants API endpoints, listings presentation dependencies

import logging
from typing import Any, Dict, List, Optional

from plantswap.shared.config.settings import get_settings
from plantswap.shared.core.dependencies import CurrentUser
from plantswap.shared.core.exceptions import (
    AuthorizationError,
    PlantNotFoundError,
    PlantSwapException,
    StorageError,
    ValidationError,
)
from plantswap.shared.infrastructure.storage import SupabaseStorageClient

from ..models.plant import EDITABLE_FIELDS, Plant, PlantStatus, PlantType
from ..repositories.plant_repository import PlantRepository
from .listing_filter import filter_listings

logger = logging.getLogger(__name__)


class PlantService:
    """
    Domain service for plant listings.

    Every mutating call takes the acting user explicitly; only the owner of a
    plant may edit, delete or change its photo.
    """

    def __init__(self, plant_repository: PlantRepository, storage: SupabaseStorageClient):
        self.plant_repository = plant_repository
        self.storage = storage
        self.bucket = get_settings().PLANTS_BUCKET

    # =========================================================================
    # QUERIES
    # =========================================================================

    async def browse(
        self,
        search_term: Optional[str] = None,
        location: Optional[str] = None
    ) -> List[Plant]:
        """
        Available plants, newest first, narrowed by search term and location.
        """
        plants = await self.plant_repository.list_available()
        return filter_listings(plants, search_term, location)

    async def get_plant(self, plant_id: str) -> Plant:
        """
        Get a plant by id.

        Raises:
            PlantNotFoundError: If the plant does not exist
        """
        plant = await self.plant_repository.get_by_id(plant_id)
        if not plant:
            raise PlantNotFoundError(plant_id)
        return plant

    async def list_user_plants(
        self,
        user_id: str,
        status: Optional[PlantStatus] = None
    ) -> List[Plant]:
        return await self.plant_repository.list_by_owner(user_id, status)

    # =========================================================================
    # COMMANDS
    # =========================================================================

    async def create_plant(
        self,
        actor: CurrentUser,
        name: str,
        species: str,
        location: str,
        subspecies: Optional[str] = None,
        description: Optional[str] = None,
        plant_type: PlantType = PlantType.OTHER,
        image: Optional[bytes] = None,
        image_filename: Optional[str] = None,
    ) -> Plant:
        """
        List a new plant for the acting user.

        Args:
            actor: Owner of the new plant
            name, species, location: Required listing fields
            subspecies, description, plant_type: Optional listing fields
            image: Optional photo bytes, uploaded before the plant is stored
            image_filename: Original photo name, for the extension

        Returns:
            Stored Plant with status available
        """
        image_url = None
        if image:
            image_url = await self.storage.upload_image(
                self.bucket, actor.user_id, image, image_filename
            )

        plant = Plant(
            owner_id=actor.user_id,
            name=name,
            species=species,
            subspecies=subspecies or None,
            location=location,
            description=description or None,
            image_url=image_url,
            plant_type=plant_type,
            status=PlantStatus.AVAILABLE,
        )
        try:
            created = await self.plant_repository.create(plant)
        except PlantSwapException:
            if image_url:
                await self._discard_image(image_url)
            raise

        logger.info(f"User {actor.user_id} listed plant {created.id}")
        return created

    async def update_plant(self, actor: CurrentUser, plant_id: str, changes: Dict[str, Any]) -> Plant:
        """
        Edit the listing fields of an owned plant.

        Raises:
            PlantNotFoundError: Unknown plant
            AuthorizationError: Actor is not the owner
            ValidationError: A field that is not editable was given
        """
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValidationError(
                f"Fields cannot be edited: {', '.join(sorted(unknown))}",
                field=sorted(unknown)[0],
            )

        await self._get_owned_plant(actor, plant_id, "update")
        if not changes:
            return await self.get_plant(plant_id)

        values = {
            key: (value.value if isinstance(value, PlantType) else value)
            for key, value in changes.items()
        }
        updated = await self.plant_repository.update(plant_id, actor.user_id, values)
        if not updated:
            raise PlantNotFoundError(plant_id)

        logger.info(f"User {actor.user_id} updated plant {plant_id}: {sorted(values)}")
        return updated

    async def set_image(
        self,
        actor: CurrentUser,
        plant_id: str,
        image: bytes,
        image_filename: Optional[str] = None
    ) -> Plant:
        """Upload a new photo for an owned plant, replacing the previous one."""
        plant = await self._get_owned_plant(actor, plant_id, "update")

        image_url = await self.storage.upload_image(
            self.bucket, actor.user_id, image, image_filename
        )
        try:
            updated = await self.plant_repository.update(
                plant_id, actor.user_id, {"image_url": image_url}
            )
            if not updated:
                raise PlantNotFoundError(plant_id)
        except PlantSwapException:
            # nothing points at the new object yet
            await self._discard_image(image_url)
            raise

        if plant.image_url:
            await self._discard_image(plant.image_url)
        return updated

    async def remove_image(self, actor: CurrentUser, plant_id: str) -> Plant:
        """Clear the photo of an owned plant and delete the stored object."""
        plant = await self._get_owned_plant(actor, plant_id, "update")
        if not plant.image_url:
            return plant

        updated = await self.plant_repository.update(plant_id, actor.user_id, {"image_url": None})
        if not updated:
            raise PlantNotFoundError(plant_id)

        await self._discard_image(plant.image_url)
        return updated

    async def delete_plant(self, actor: CurrentUser, plant_id: str) -> None:
        """
        Delete an owned plant and its photo.

        Raises:
            PlantNotFoundError: Unknown plant
            AuthorizationError: Actor is not the owner
        """
        plant = await self._get_owned_plant(actor, plant_id, "delete")

        removed = await self.plant_repository.delete(plant_id, actor.user_id)
        if not removed:
            raise PlantNotFoundError(plant_id)

        if plant.image_url:
            await self._discard_image(plant.image_url)
        logger.info(f"User {actor.user_id} deleted plant {plant_id}")

    # =========================================================================
    # HELPERS
    # =========================================================================

    async def _get_owned_plant(self, actor: CurrentUser, plant_id: str, action: str) -> Plant:
        plant = await self.get_plant(plant_id)
        if not actor.owns(plant.owner_id):
            logger.warning(f"User {actor.user_id} tried to {action} plant {plant_id} they do not own")
            raise AuthorizationError(
                "You can only change your own plants",
                resource_type="plant",
                resource_id=plant_id,
                required_action=action,
                user_id=actor.user_id,
            )
        return plant

    async def _discard_image(self, image_url: str) -> None:
        try:
            await self.storage.remove_by_url(self.bucket, image_url)
        except StorageError as e:
            logger.warning(f"Could not remove plant image {image_url}: {e.message}")
