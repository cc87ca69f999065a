"""Profiles: creation rules, edits and avatars."""

import pytest

from plantswap.modules.profiles.domain.models.profile import BIO_MAX_LENGTH
from plantswap.shared.core.exceptions import (
    DuplicateResourceError,
    NotFoundError,
    RepositoryError,
    ValidationError,
)

PNG_BYTES = b"\x89PNG fake bytes"


async def test_create_profile_uses_actor_id(profile_service, alice):
    profile = await profile_service.create_profile(alice, "  alice ", name="Alice")

    assert profile.id == alice.user_id
    assert profile.username == "alice"
    assert profile.display_name == "Alice"


async def test_one_profile_per_user(profile_service, profile_repo, alice):
    profile_repo.add(alice.user_id, "alice")

    with pytest.raises(DuplicateResourceError):
        await profile_service.create_profile(alice, "alice2")


async def test_username_must_be_unique(profile_service, profile_repo, alice, bob):
    profile_repo.add(alice.user_id, "green_thumb")

    with pytest.raises(DuplicateResourceError):
        await profile_service.create_profile(bob, "green_thumb")


async def test_missing_profile(profile_service, bob):
    with pytest.raises(NotFoundError):
        await profile_service.get_profile(bob.user_id)


async def test_update_own_profile(profile_service, profile_repo, alice):
    profile_repo.add(alice.user_id, "alice")

    updated = await profile_service.update_profile(alice, {"bio": "Loves ferns", "location": "Porto"})

    assert updated.bio == "Loves ferns"
    assert updated.location == "Porto"
    assert updated.display_name == "alice"


async def test_bio_length_is_capped(profile_service, profile_repo, alice):
    profile_repo.add(alice.user_id, "alice")

    with pytest.raises(ValidationError):
        await profile_service.update_profile(alice, {"bio": "x" * (BIO_MAX_LENGTH + 1)})


async def test_username_is_not_editable(profile_service, profile_repo, alice):
    profile_repo.add(alice.user_id, "alice")

    with pytest.raises(ValidationError):
        await profile_service.update_profile(alice, {"username": "mallory"})


async def test_avatar_upload_and_removal(profile_service, profile_repo, storage, alice):
    profile_repo.add(alice.user_id, "alice")

    with_avatar = await profile_service.upload_avatar(alice, PNG_BYTES, "me.png")
    assert storage.uploads[0]["bucket"] == "avatars"
    assert with_avatar.avatar_url == storage.uploads[0]["url"]

    without = await profile_service.remove_avatar(alice)
    assert without.avatar_url is None
    assert storage.removed == [with_avatar.avatar_url]


async def test_new_avatar_replaces_old(profile_service, profile_repo, storage, alice):
    old_url = "http://localhost:54321/storage/v1/object/public/avatars/old.png"
    profile_repo.add(alice.user_id, "alice", avatar_url=old_url)

    await profile_service.upload_avatar(alice, PNG_BYTES)

    assert storage.removed == [old_url]


async def test_failed_profile_update_discards_the_new_avatar(profile_service, profile_repo, storage, alice, monkeypatch):
    old_url = "http://localhost:54321/storage/v1/object/public/avatars/old.png"
    profile_repo.add(alice.user_id, "alice", avatar_url=old_url)

    async def failing_update(*args, **kwargs):
        raise RepositoryError("Simulated failure", table="profiles", operation="update")

    monkeypatch.setattr(profile_repo, "update", failing_update)

    with pytest.raises(RepositoryError):
        await profile_service.upload_avatar(alice, PNG_BYTES, "me.png")

    assert storage.removed == [storage.uploads[0]["url"]]
    assert old_url not in storage.removed
