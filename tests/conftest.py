"""
Pytest configuration and fixtures for photo album tests.
Provides S3 mocking, a SQLite metadata store and image fixtures with proper cleanup.
"""

import io
import os
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

import boto3
import pytest
from botocore.exceptions import ClientError
from moto import mock_aws
from PIL import Image

from core.config import PhotoAlbumSettings, get_settings
from core.infrastructure.adapters.sql_adapter import SqlAdapter, get_engine
from core.infrastructure.sql.sql_photo_metadata import SqlPhotoMetadata
from core.models.photo import Photo

TEST_BUCKET_NAME = "photo-album-test"
TEST_REGION = "us-east-1"

# Fake credentials so boto3 never reaches a real account
os.environ["AWS_ACCESS_KEY_ID"] = "testing"
os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
os.environ["AWS_SECURITY_TOKEN"] = "testing"
os.environ["AWS_SESSION_TOKEN"] = "testing"
os.environ["AWS_DEFAULT_REGION"] = TEST_REGION
os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "true")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "photo-album-test")


@pytest.fixture(autouse=True)
def app_env(monkeypatch, tmp_path):
    """Point every test at its own SQLite file and the mocked bucket."""
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'photos.db'}")
    monkeypatch.setenv("PHOTO_S3_BUCKET_NAME", TEST_BUCKET_NAME)
    monkeypatch.setenv("AWS_REGION", TEST_REGION)
    monkeypatch.delenv("AWS_ENDPOINT_URL", raising=False)
    monkeypatch.delenv("PHOTO_MAX_FILE_SIZE_BYTES", raising=False)
    monkeypatch.delenv("PHOTO_ALLOWED_MIME_TYPES", raising=False)

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    get_engine.cache_clear()


@pytest.fixture
def settings() -> PhotoAlbumSettings:
    return get_settings()


# ============================================================================
# S3
# ============================================================================


@pytest.fixture(scope="function")
def aws_mock():
    with mock_aws():
        yield


@pytest.fixture(scope="function")
def s3_client(aws_mock):
    """S3 client for bucket operations."""
    return boto3.client("s3", region_name=TEST_REGION)


@pytest.fixture(scope="function")
def s3_bucket(s3_client):
    """Create the photo bucket. moto discards it when the mock exits."""
    s3_client.create_bucket(Bucket=TEST_BUCKET_NAME)
    yield s3_client


@pytest.fixture
def s3_put_object(s3_client) -> Callable[..., dict[str, Any]]:
    """
    Helper to upload an object to S3.

    Usage:
        s3_put_object("uploads/abc.jpg", image_bytes, "image/jpeg")
    """

    def _put(key: str, body: bytes, content_type: str = "application/octet-stream"):
        return s3_client.put_object(
            Bucket=TEST_BUCKET_NAME, Key=key, Body=body, ContentType=content_type
        )

    return _put


@pytest.fixture
def s3_get_object(s3_client) -> Callable[[str], dict[str, Any]]:
    """
    Helper returning body bytes, content type and user metadata of an object.

    Usage:
        obj = s3_get_object("uploads/abc.jpg")
        obj["body"], obj["content_type"], obj["metadata"]
    """

    def _get(key: str) -> dict[str, Any]:
        response = s3_client.get_object(Bucket=TEST_BUCKET_NAME, Key=key)
        return {
            "body": response["Body"].read(),
            "content_type": response.get("ContentType"),
            "metadata": response.get("Metadata", {}),
        }

    return _get


@pytest.fixture
def s3_object_exists(s3_client) -> Callable[[str], bool]:
    def _exists(key: str) -> bool:
        try:
            s3_client.head_object(Bucket=TEST_BUCKET_NAME, Key=key)
            return True
        except ClientError:
            return False

    return _exists


@pytest.fixture
def s3_list_keys(s3_client) -> Callable[[], list[str]]:
    def _list() -> list[str]:
        try:
            response = s3_client.list_objects_v2(Bucket=TEST_BUCKET_NAME)
        except ClientError as e:
            if e.response["Error"]["Code"] == "NoSuchBucket":
                return []
            raise
        return [obj["Key"] for obj in response.get("Contents", [])]

    return _list


# ============================================================================
# Metadata store
# ============================================================================


@pytest.fixture
def metadata_repo(settings) -> SqlPhotoMetadata:
    return SqlPhotoMetadata(SqlAdapter(settings))


@pytest.fixture
def insert_photo(metadata_repo) -> Callable[..., Photo]:
    """
    Helper to insert a photo row directly.

    Usage:
        photo = insert_photo(file_path="uploads/a.jpg")
    """
    counter = iter(range(1, 10_000))

    def _insert(**overrides: Any) -> Photo:
        n = next(counter)
        values: dict[str, Any] = {
            "original_file_name": f"photo_{n}.jpg",
            "stored_file_name": f"stored-{n}.jpg",
            "file_path": f"uploads/stored-{n}.jpg",
            "file_size": 100,
            "mime_type": "image/jpeg",
            "width": 10,
            "height": 10,
            "uploaded_at": datetime(2024, 1, n % 28 + 1, 10, 0, tzinfo=timezone.utc),
        }
        values.update(overrides)

        photo = Photo(**values)
        photo_id = metadata_repo.create_photo(photo=photo)
        return photo.model_copy(update={"id": photo_id})

    return _insert


@pytest.fixture
def count_rows(metadata_repo) -> Callable[[], int]:
    return lambda: len(metadata_repo.list_photos())


# ============================================================================
# Images
# ============================================================================


@pytest.fixture
def make_image() -> Callable[..., bytes]:
    """Render a solid-colour image of the given size and format."""

    def _make(width: int, height: int, fmt: str = "PNG") -> bytes:
        buffer = io.BytesIO()
        Image.new("RGB", (width, height), color=(200, 120, 40)).save(buffer, format=fmt)
        return buffer.getvalue()

    return _make


@pytest.fixture
def sample_png_binary(make_image) -> bytes:
    return make_image(4, 3, "PNG")


@pytest.fixture
def sample_jpeg_binary(make_image) -> bytes:
    return make_image(8, 6, "JPEG")
