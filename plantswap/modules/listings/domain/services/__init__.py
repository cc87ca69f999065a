from .listing_filter import filter_listings
from .plant_service import PlantService

__all__ = ["filter_listings", "PlantService"]
