"""Plant listings: browse, owner-only edits and photos."""

import pytest

from plantswap.modules.listings.domain.models.plant import PlantStatus, PlantType
from plantswap.shared.core.exceptions import (
    AuthorizationError,
    PlantNotFoundError,
    RepositoryError,
    ValidationError,
)

PNG_BYTES = b"\x89PNG fake bytes"


async def test_create_plant_is_available_and_owned(plant_service, alice):
    plant = await plant_service.create_plant(
        alice, name="Monstera", species="Monstera deliciosa", location="Berlin",
        description="", plant_type=PlantType.FERN,
    )

    assert plant.id
    assert plant.owner_id == alice.user_id
    assert plant.status == PlantStatus.AVAILABLE
    assert plant.plant_type == PlantType.FERN
    assert plant.description is None
    assert plant.image_url is None


async def test_create_with_image_uploads_to_plants_bucket(plant_service, storage, alice):
    plant = await plant_service.create_plant(
        alice, "Aloe", "Aloe vera", "Lisbon", image=PNG_BYTES, image_filename="aloe.png"
    )

    [upload] = storage.uploads
    assert upload["bucket"] == "plants"
    assert upload["user_id"] == alice.user_id
    assert plant.image_url == upload["url"]


async def test_browse_lists_available_plants_newest_first(plant_service, plant_repo, alice, bob):
    plant_repo.add(alice.user_id, "Basil", id="a")
    plant_repo.add(bob.user_id, "Traded basil", id="b", status=PlantStatus.EXCHANGED)
    plant_repo.add(bob.user_id, "Thai basil", id="c", location="Hamburg")

    assert [p.id for p in await plant_service.browse()] == ["c", "a"]
    assert [p.id for p in await plant_service.browse("basil", "hamburg")] == ["c"]


async def test_list_user_plants_by_status(plant_service, plant_repo, alice):
    plant_repo.add(alice.user_id, "One", id="1")
    plant_repo.add(alice.user_id, "Two", id="2", status=PlantStatus.EXCHANGED)

    assert [p.id for p in await plant_service.list_user_plants(alice.user_id)] == ["2", "1"]
    exchanged = await plant_service.list_user_plants(alice.user_id, PlantStatus.EXCHANGED)
    assert [p.id for p in exchanged] == ["2"]


async def test_get_unknown_plant(plant_service):
    with pytest.raises(PlantNotFoundError):
        await plant_service.get_plant("nope")


async def test_owner_updates_listing(plant_service, plant_repo, alice):
    plant_repo.add(alice.user_id, "Old name", id="p")

    updated = await plant_service.update_plant(
        alice, "p", {"name": "New name", "plant_type": PlantType.CACTUS}
    )

    assert updated.name == "New name"
    assert updated.plant_type == PlantType.CACTUS


async def test_non_owner_cannot_update_or_delete(plant_service, plant_repo, alice, bob):
    plant_repo.add(alice.user_id, "Mine", id="p")

    with pytest.raises(AuthorizationError):
        await plant_service.update_plant(bob, "p", {"name": "Stolen"})
    with pytest.raises(AuthorizationError):
        await plant_service.delete_plant(bob, "p")
    assert plant_repo.plants["p"].name == "Mine"


async def test_status_is_not_editable(plant_service, plant_repo, alice):
    plant_repo.add(alice.user_id, "Mine", id="p")

    with pytest.raises(ValidationError):
        await plant_service.update_plant(alice, "p", {"status": "exchanged"})


async def test_replacing_image_discards_the_old_one(plant_service, plant_repo, storage, alice):
    old_url = "http://localhost:54321/storage/v1/object/public/plants/old.png"
    plant_repo.add(alice.user_id, "Pictured", id="p", image_url=old_url)

    updated = await plant_service.set_image(alice, "p", PNG_BYTES, "new.png")

    assert updated.image_url == storage.uploads[0]["url"]
    assert storage.removed == [old_url]


async def test_failed_row_update_discards_the_new_image(plant_service, plant_repo, storage, alice, monkeypatch):
    old_url = "http://localhost:54321/storage/v1/object/public/plants/old.png"
    plant_repo.add(alice.user_id, "Pictured", id="p", image_url=old_url)

    async def failing_update(*args, **kwargs):
        raise RepositoryError("Simulated failure", table="plants", operation="update")

    monkeypatch.setattr(plant_repo, "update", failing_update)

    with pytest.raises(RepositoryError):
        await plant_service.set_image(alice, "p", PNG_BYTES, "new.png")

    assert storage.removed == [storage.uploads[0]["url"]]
    assert plant_repo.plants["p"].image_url == old_url


async def test_failed_insert_discards_the_uploaded_image(plant_service, plant_repo, storage, alice, monkeypatch):
    async def failing_create(plant):
        raise RepositoryError("Simulated failure", table="plants", operation="insert")

    monkeypatch.setattr(plant_repo, "create", failing_create)

    with pytest.raises(RepositoryError):
        await plant_service.create_plant(
            alice, name="Monstera", species="Monstera deliciosa", location="Berlin", image=PNG_BYTES,
        )

    assert storage.removed == [storage.uploads[0]["url"]]


async def test_storage_cleanup_failure_is_not_fatal(plant_service, plant_repo, storage, alice):
    url = "http://localhost:54321/storage/v1/object/public/plants/old.png"
    plant_repo.add(alice.user_id, "Pictured", id="p", image_url=url)
    storage.fail_removals = True

    updated = await plant_service.remove_image(alice, "p")

    assert updated.image_url is None


async def test_delete_removes_plant_and_photo(plant_service, plant_repo, storage, alice):
    url = "http://localhost:54321/storage/v1/object/public/plants/p.png"
    plant_repo.add(alice.user_id, "Bye", id="p", image_url=url)

    await plant_service.delete_plant(alice, "p")

    assert "p" not in plant_repo.plants
    assert storage.removed == [url]
