# 📄 File: plantswap/modules/exchanges/presentation/dependencies.py
# 🧭 Purpose (Layman Explanation):
# Hands the exchange endpoints a ready-to-use exchange service with access to offers, plants,
# profiles and the event messenger.
# 🧪 Purpose (Technical Summary):
# Module-specific FastAPI dependency providers for the exchanges module. Plant and profile
# repositories come from their own modules' providers.
# 🔗 Dependencies:
# FastAPI, supabase Client, listings / profiles presentation dependencies, shared dependencies
# 🔄 Connected Modules / Calls From:
# plantswap.modules.exchanges.presentation.api.v1.exchanges

from fastapi import Depends
from supabase import Client

from plantswap.modules.listings.domain.repositories.plant_repository import PlantRepository
from plantswap.modules.listings.presentation.dependencies import get_plant_repository
from plantswap.modules.profiles.domain.repositories.profile_repository import ProfileRepository
from plantswap.modules.profiles.presentation.dependencies import get_profile_repository
from plantswap.shared.core.dependencies import get_event_publisher, get_supabase
from plantswap.shared.events.publisher import EventPublisher

from ..domain.repositories.exchange_repository import ExchangeRepository
from ..domain.services.exchange_service import ExchangeService
from ..infrastructure.database.exchange_repository_impl import SupabaseExchangeRepository


def get_exchange_repository(client: Client = Depends(get_supabase)) -> ExchangeRepository:
    return SupabaseExchangeRepository(client)


def get_exchange_service(
    exchange_repository: ExchangeRepository = Depends(get_exchange_repository),
    plant_repository: PlantRepository = Depends(get_plant_repository),
    profile_repository: ProfileRepository = Depends(get_profile_repository),
    event_publisher: EventPublisher = Depends(get_event_publisher),
) -> ExchangeService:
    return ExchangeService(exchange_repository, plant_repository, profile_repository, event_publisher)
