"""
Shared test fixtures for the PlantSwap API test suite.

Provides:
- Environment for Settings before the application is imported
- In-memory repositories implementing the domain repository interfaces
- A fake image storage recording uploads and removals
- Services wired to the fakes, including exchange -> notification events
- A TestClient with service dependencies overridden and a token helper

Usage:
    def test_example(exchange_service, plant_repo, alice, bob):
        plant = plant_repo.add(owner_id=bob.user_id, name="Fern")
"""

import itertools
import logging
import os
import time
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional

import pytest

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-for-plantswap")
os.environ.setdefault("LOG_FORMAT", "text")

from jose import jwt  # noqa: E402

from plantswap.modules.exchanges.domain.models.exchange import ExchangeOffer  # noqa: E402
from plantswap.modules.exchanges.domain.repositories.exchange_repository import ExchangeRepository  # noqa: E402
from plantswap.modules.exchanges.domain.services.exchange_service import ExchangeService  # noqa: E402
from plantswap.modules.listings.domain.models.plant import Plant, PlantStatus  # noqa: E402
from plantswap.modules.listings.domain.repositories.plant_repository import PlantRepository  # noqa: E402
from plantswap.modules.listings.domain.services.plant_service import PlantService  # noqa: E402
from plantswap.modules.notifications.domain.events.handlers import register_notification_handlers  # noqa: E402
from plantswap.modules.notifications.domain.models.notification import Notification  # noqa: E402
from plantswap.modules.notifications.domain.repositories.notification_repository import (  # noqa: E402
    NotificationRepository,
)
from plantswap.modules.notifications.domain.services.notification_service import NotificationService  # noqa: E402
from plantswap.modules.profiles.domain.models.profile import Profile  # noqa: E402
from plantswap.modules.profiles.domain.repositories.profile_repository import ProfileRepository  # noqa: E402
from plantswap.modules.profiles.domain.services.profile_service import ProfileService  # noqa: E402
from plantswap.shared.config.settings import get_settings  # noqa: E402
from plantswap.shared.core.dependencies import CurrentUser  # noqa: E402
from plantswap.shared.core.exceptions import RepositoryError, StorageError  # noqa: E402
from plantswap.shared.events.publisher import EventPublisher  # noqa: E402

# ---------------------------------------------------------------------------
# Logging: keep test output clean
# ---------------------------------------------------------------------------
logging.getLogger("plantswap").setLevel(logging.WARNING)

_BASE_TIME = datetime(2024, 5, 1, tzinfo=timezone.utc)


class _Clock:
    """Monotonic created_at values so newest-first ordering is deterministic."""

    def __init__(self):
        self._ticks = itertools.count(1)

    def now(self) -> datetime:
        return _BASE_TIME + timedelta(seconds=next(self._ticks))


# ========================== In-memory repositories =========================


class InMemoryPlantRepository(PlantRepository):
    def __init__(self):
        self.plants: Dict[str, Plant] = {}
        self.failing_status_ids: set = set()
        self._ids = itertools.count(1)
        self._clock = _Clock()

    def add(self, owner_id: str, name: str = "Monstera", status: PlantStatus = PlantStatus.AVAILABLE,
            **fields: Any) -> Plant:
        """Seed a plant synchronously."""
        plant = Plant(
            id=fields.pop("id", None) or f"plant-{next(self._ids)}",
            owner_id=owner_id,
            name=name,
            species=fields.pop("species", "Monstera deliciosa"),
            location=fields.pop("location", "Berlin"),
            status=status,
            created_at=self._clock.now(),
            **fields,
        )
        self.plants[plant.id] = plant
        return plant

    @staticmethod
    def _newest_first(plants: Iterable[Plant]) -> List[Plant]:
        return sorted(plants, key=lambda p: p.created_at, reverse=True)

    async def create(self, plant: Plant) -> Plant:
        stored = plant.model_copy(update={
            "id": f"plant-{next(self._ids)}",
            "created_at": self._clock.now(),
        })
        self.plants[stored.id] = stored
        return stored

    async def get_by_id(self, plant_id: str) -> Optional[Plant]:
        return self.plants.get(plant_id)

    async def get_many(self, plant_ids: Iterable[str]) -> List[Plant]:
        return [self.plants[pid] for pid in plant_ids if pid in self.plants]

    async def list_available(self) -> List[Plant]:
        return self._newest_first(p for p in self.plants.values() if p.is_available)

    async def list_by_owner(self, owner_id: str, status: Optional[PlantStatus] = None) -> List[Plant]:
        return self._newest_first(
            p for p in self.plants.values()
            if p.owner_id == owner_id and (status is None or p.status == status)
        )

    async def update(self, plant_id: str, owner_id: str, values: Dict[str, Any]) -> Optional[Plant]:
        plant = self.plants.get(plant_id)
        if not plant or plant.owner_id != owner_id:
            return None
        updated = Plant.model_validate({**plant.model_dump(), **values})
        self.plants[plant_id] = updated
        return updated

    async def set_status(self, plant_id: str, status: PlantStatus) -> Optional[Plant]:
        if plant_id in self.failing_status_ids:
            raise RepositoryError("Simulated failure", table="plants", operation="update")
        plant = self.plants.get(plant_id)
        if not plant:
            return None
        updated = plant.model_copy(update={"status": status})
        self.plants[plant_id] = updated
        return updated

    async def delete(self, plant_id: str, owner_id: str) -> bool:
        plant = self.plants.get(plant_id)
        if not plant or plant.owner_id != owner_id:
            return False
        del self.plants[plant_id]
        return True


class InMemoryProfileRepository(ProfileRepository):
    def __init__(self):
        self.profiles: Dict[str, Profile] = {}
        self._clock = _Clock()

    def add(self, user_id: str, username: str, **fields: Any) -> Profile:
        profile = Profile(id=user_id, username=username, created_at=self._clock.now(), **fields)
        self.profiles[user_id] = profile
        return profile

    async def create(self, profile: Profile) -> Profile:
        stored = profile.model_copy(update={"created_at": self._clock.now()})
        self.profiles[stored.id] = stored
        return stored

    async def get_by_id(self, user_id: str) -> Optional[Profile]:
        return self.profiles.get(user_id)

    async def get_by_username(self, username: str) -> Optional[Profile]:
        for profile in self.profiles.values():
            if profile.username == username:
                return profile
        return None

    async def get_many(self, user_ids: Iterable[str]) -> List[Profile]:
        return [self.profiles[uid] for uid in user_ids if uid in self.profiles]

    async def update(self, user_id: str, values: Dict[str, Any]) -> Optional[Profile]:
        profile = self.profiles.get(user_id)
        if not profile:
            return None
        updated = Profile.model_validate({**profile.model_dump(), **values})
        self.profiles[user_id] = updated
        return updated


class InMemoryExchangeRepository(ExchangeRepository):
    def __init__(self):
        self.offers: Dict[str, ExchangeOffer] = {}
        self._ids = itertools.count(1)
        self._clock = _Clock()

    async def create(self, offer: ExchangeOffer) -> ExchangeOffer:
        stored = offer.model_copy(update={
            "id": f"offer-{next(self._ids)}",
            "created_at": self._clock.now(),
        })
        self.offers[stored.id] = stored
        return stored

    async def get_by_id(self, offer_id: str) -> Optional[ExchangeOffer]:
        return self.offers.get(offer_id)

    async def list_for_user(self, user_id: str) -> List[ExchangeOffer]:
        return sorted(
            (o for o in self.offers.values() if o.is_party(user_id)),
            key=lambda o: o.created_at,
            reverse=True,
        )

    async def save(self, offer: ExchangeOffer) -> ExchangeOffer:
        if offer.id not in self.offers:
            raise RepositoryError("Offer vanished", table="exchange_offers", operation="update")
        self.offers[offer.id] = offer
        return offer


class InMemoryNotificationRepository(NotificationRepository):
    def __init__(self):
        self.notifications: Dict[str, Notification] = {}
        self.fail_creates = False
        self._ids = itertools.count(1)
        self._clock = _Clock()

    async def create(self, notification: Notification) -> Notification:
        if self.fail_creates:
            raise RepositoryError("Simulated failure", table="notifications", operation="insert")
        stored = notification.model_copy(update={
            "id": f"notification-{next(self._ids)}",
            "created_at": self._clock.now(),
        })
        self.notifications[stored.id] = stored
        return stored

    async def get_by_id(self, notification_id: str) -> Optional[Notification]:
        return self.notifications.get(notification_id)

    async def list_for_user(self, user_id: str, unread_only: bool = False) -> List[Notification]:
        return sorted(
            (n for n in self.notifications.values()
             if n.user_id == user_id and not (unread_only and n.read)),
            key=lambda n: n.created_at,
            reverse=True,
        )

    async def mark_read(self, notification_id: str, user_id: str) -> Optional[Notification]:
        notification = self.notifications.get(notification_id)
        if not notification or notification.user_id != user_id:
            return None
        updated = notification.model_copy(update={"read": True})
        self.notifications[notification_id] = updated
        return updated

    async def mark_all_read(self, user_id: str) -> int:
        changed = 0
        for notification in list(self.notifications.values()):
            if notification.user_id == user_id and not notification.read:
                self.notifications[notification.id] = notification.model_copy(update={"read": True})
                changed += 1
        return changed

    async def count_unread(self, user_id: str) -> int:
        return len(await self.list_for_user(user_id, unread_only=True))


class FakeStorage:
    """Stands in for SupabaseStorageClient; records what would be stored."""

    def __init__(self):
        self.uploads: List[Dict[str, Any]] = []
        self.removed: List[str] = []
        self.fail_removals = False
        self._ids = itertools.count(1)

    async def upload_image(self, bucket: str, user_id: str, data: bytes,
                           filename: Optional[str] = None) -> str:
        url = (
            f"http://localhost:54321/storage/v1/object/public/{bucket}/"
            f"{user_id}-{next(self._ids)}.png"
        )
        self.uploads.append({"bucket": bucket, "user_id": user_id, "size": len(data), "url": url})
        return url

    async def remove_by_url(self, bucket: str, public_url: str) -> bool:
        if self.fail_removals:
            raise StorageError("Simulated failure", bucket=bucket)
        self.removed.append(public_url)
        return True


# ========================== Fixtures =======================================


@pytest.fixture()
def alice() -> CurrentUser:
    return CurrentUser(user_id="user-alice", email="alice@example.com")


@pytest.fixture()
def bob() -> CurrentUser:
    return CurrentUser(user_id="user-bob", email="bob@example.com")


@pytest.fixture()
def carol() -> CurrentUser:
    return CurrentUser(user_id="user-carol", email="carol@example.com")


@pytest.fixture()
def plant_repo() -> InMemoryPlantRepository:
    return InMemoryPlantRepository()


@pytest.fixture()
def profile_repo() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture()
def exchange_repo() -> InMemoryExchangeRepository:
    return InMemoryExchangeRepository()


@pytest.fixture()
def notification_repo() -> InMemoryNotificationRepository:
    return InMemoryNotificationRepository()


@pytest.fixture()
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture()
def notification_service(notification_repo) -> NotificationService:
    return NotificationService(notification_repo)


@pytest.fixture()
def publisher(notification_service) -> EventPublisher:
    """Publisher with the notification handler wired, as at application startup."""
    event_publisher = EventPublisher()
    register_notification_handlers(event_publisher, lambda: notification_service)
    return event_publisher


@pytest.fixture()
def plant_service(plant_repo, storage) -> PlantService:
    return PlantService(plant_repo, storage)


@pytest.fixture()
def profile_service(profile_repo, storage) -> ProfileService:
    return ProfileService(profile_repo, storage)


@pytest.fixture()
def exchange_service(exchange_repo, plant_repo, profile_repo, publisher) -> ExchangeService:
    return ExchangeService(exchange_repo, plant_repo, profile_repo, publisher)


# ========================== API fixtures ===================================


def make_token(user_id: str, expires_in: int = 3600, **claims: Any) -> str:
    """Access token signed like the auth backend signs them."""
    settings = get_settings()
    payload = {
        "sub": user_id,
        "aud": settings.JWT_AUDIENCE,
        "role": "authenticated",
        "exp": int(time.time()) + expires_in,
        **claims,
    }
    return jwt.encode(payload, settings.SUPABASE_JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def auth_headers(user: CurrentUser) -> Dict[str, str]:
    return {"Authorization": f"Bearer {make_token(user.user_id, email=user.email)}"}


@pytest.fixture()
def client(plant_service, profile_service, exchange_service, notification_service):
    from fastapi.testclient import TestClient

    from plantswap.main import app
    from plantswap.modules.exchanges.presentation.dependencies import get_exchange_service
    from plantswap.modules.listings.presentation.dependencies import get_plant_service
    from plantswap.modules.notifications.presentation.dependencies import get_notification_service
    from plantswap.modules.profiles.presentation.dependencies import get_profile_service

    app.dependency_overrides[get_plant_service] = lambda: plant_service
    app.dependency_overrides[get_profile_service] = lambda: profile_service
    app.dependency_overrides[get_exchange_service] = lambda: exchange_service
    app.dependency_overrides[get_notification_service] = lambda: notification_service

    yield TestClient(app)

    app.dependency_overrides.clear()
