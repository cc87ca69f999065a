# 📄 File: plantswap/modules/profiles/presentation/dependencies.py
# 🧭 Purpose (Layman Explanation):
# Hands the profile endpoints a ready-to-use profile service wired to the database and picture storage.
# 🧪 Purpose (Technical Summary):
# Module-specific FastAPI dependency providers for the profiles module.
# 🔗 Dependencies:
# FastAPI, supabase Client, plantswap.shared.core.dependencies
# 🔄 Connected Modules / Calls From:
# plantswap.modules.profiles.presentation.api.v1.profiles, exchanges presentation dependencies

from fastapi import Depends
from supabase import Client

from plantswap.shared.core.dependencies import get_storage_client, get_supabase
from plantswap.shared.infrastructure.storage import SupabaseStorageClient

from ..domain.repositories.profile_repository import ProfileRepository
from ..domain.services.profile_service import ProfileService
from ..infrastructure.database.profile_repository_impl import SupabaseProfileRepository


def get_profile_repository(client: Client = Depends(get_supabase)) -> ProfileRepository:
    return SupabaseProfileRepository(client)


def get_profile_service(
    profile_repository: ProfileRepository = Depends(get_profile_repository),
    storage: SupabaseStorageClient = Depends(get_storage_client),
) -> ProfileService:
    return ProfileService(profile_repository, storage)
