# 📄 File: plantswap/modules/listings/presentation/dependencies.py
# 🧭 Purpose (Layman Explanation):
# Hands the plant endpoints a ready-to-use plant service wired to the real database and photo storage.
# 🧪 Purpose (Technical Summary):
# Module-specific FastAPI dependency providers for the listings module (repository and service).
# Tests swap these through app.dependency_overrides.
# 🔗 Dependencies:
# FastAPI, supabase Client, plantswap.shared.core.dependencies
# 🔄 Connected Modules / Calls From:
# plantswap.modules.listings.presentation.api.v1.plants, exchanges presentation dependencies

from fastapi import Depends
from supabase import Client

from plantswap.shared.core.dependencies import get_storage_client, get_supabase
from plantswap.shared.infrastructure.storage import SupabaseStorageClient

from ..domain.repositories.plant_repository import PlantRepository
from ..domain.services.plant_service import PlantService
from ..infrastructure.database.plant_repository_impl import SupabasePlantRepository


def get_plant_repository(client: Client = Depends(get_supabase)) -> PlantRepository:
    return SupabasePlantRepository(client)


def get_plant_service(
    plant_repository: PlantRepository = Depends(get_plant_repository),
    storage: SupabaseStorageClient = Depends(get_storage_client),
) -> PlantService:
    return PlantService(plant_repository, storage)
