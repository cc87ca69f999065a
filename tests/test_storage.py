"""Image validation and upload through the storage client."""

import io
from unittest.mock import MagicMock

import pytest
from PIL import Image

from plantswap.shared.config.settings import get_settings
from plantswap.shared.core import dependencies
from plantswap.shared.core.exceptions import FileTooLargeError, InvalidFileTypeError, StorageError
from plantswap.shared.infrastructure.storage import SupabaseStorageClient


def _image_bytes(fmt="PNG", size=(8, 8)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, (34, 139, 34)).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture()
def backend():
    client = MagicMock()
    client.storage.list_buckets.return_value = []
    client.storage.from_.return_value.get_public_url.return_value = (
        "http://localhost:54321/storage/v1/object/public/plants/user-1-1.png"
    )
    return client


@pytest.fixture()
def storage_client(backend):
    return SupabaseStorageClient(backend, get_settings())


def test_detects_format_from_content(storage_client):
    assert storage_client.validate_image("plants", _image_bytes("PNG")) == ("image/png", "png")
    assert storage_client.validate_image("avatars", _image_bytes("JPEG")) == ("image/jpeg", "jpg")


def test_rejects_non_images(storage_client):
    with pytest.raises(InvalidFileTypeError):
        storage_client.validate_image("plants", b"definitely not a picture")


def test_rejects_unsupported_image_format(storage_client):
    with pytest.raises(InvalidFileTypeError):
        storage_client.validate_image("plants", _image_bytes("BMP"))


def test_size_cap_is_per_bucket(backend):
    settings = get_settings().model_copy(update={"MAX_AVATAR_SIZE": 10})
    client = SupabaseStorageClient(backend, settings)
    data = _image_bytes()

    assert client.validate_image("plants", data)
    with pytest.raises(FileTooLargeError):
        client.validate_image("avatars", data)


def test_object_path_uses_owner_prefix_and_extension():
    path = SupabaseStorageClient.build_object_path("user-1", "Photo.JPEG", "png")

    assert path.startswith("user-1-")
    assert path.endswith(".jpeg")
    assert SupabaseStorageClient.build_object_path("user-1", None, "png").endswith(".png")


def test_object_path_from_url():
    url = "https://x.supabase.co/storage/v1/object/public/avatars/user-1-99.png?t=1"

    assert SupabaseStorageClient.object_path_from_url("avatars", url) == "user-1-99.png"
    assert SupabaseStorageClient.object_path_from_url("plants", url) is None


async def test_upload_creates_bucket_once_and_returns_public_url(storage_client, backend):
    url = await storage_client.upload_image("plants", "user-1", _image_bytes(), "leaf.png")
    await storage_client.upload_image("plants", "user-1", _image_bytes(), "leaf.png")

    assert url.endswith("user-1-1.png")
    backend.storage.create_bucket.assert_called_once()
    assert backend.storage.create_bucket.call_args.args[0] == "plants"
    assert backend.storage.create_bucket.call_args.kwargs["options"]["public"] is True
    upload_kwargs = backend.storage.from_.return_value.upload.call_args.kwargs
    assert upload_kwargs["file_options"]["content-type"] == "image/png"


async def test_upload_failure_raises_storage_error(storage_client, backend):
    backend.storage.from_.return_value.upload.side_effect = RuntimeError("backend down")

    with pytest.raises(StorageError):
        await storage_client.upload_image("plants", "user-1", _image_bytes())


async def test_remove_by_url(storage_client, backend):
    url = "http://localhost:54321/storage/v1/object/public/plants/user-1-1.png"

    assert await storage_client.remove_by_url("plants", url) is True
    backend.storage.from_.return_value.remove.assert_called_once_with(["user-1-1.png"])
    assert await storage_client.remove_by_url("plants", "https://elsewhere/pic.png") is False


async def test_provider_shares_one_client_across_requests(backend, monkeypatch):
    monkeypatch.setattr(dependencies, "get_supabase_client", lambda: backend)
    dependencies.get_storage_client.cache_clear()
    try:
        first = dependencies.get_storage_client()
        second = dependencies.get_storage_client()

        assert first is second
        await first.upload_image("plants", "user-1", _image_bytes())
        await second.upload_image("avatars", "user-2", _image_bytes())
        await second.upload_image("plants", "user-3", _image_bytes())
        assert backend.storage.list_buckets.call_count == 2
        assert backend.storage.create_bucket.call_count == 2
    finally:
        dependencies.get_storage_client.cache_clear()
