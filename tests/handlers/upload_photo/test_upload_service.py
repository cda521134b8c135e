import io
from unittest.mock import patch
from urllib.parse import unquote

import pytest

from core.config import PhotoAlbumSettings
from core.models.errors import (
    FileSizeError,
    MetadataOperationFailedError,
    MIMETypeError,
    PhotoDeletionFailedError,
    PhotoUploadFailedError,
)
from handlers.upload_photo.service import (
    UploadService,
    describe_mime_types,
    quote_metadata_name,
)

MiB = 1024 * 1024


def upload(service: UploadService, data: bytes, **overrides):
    kwargs = {
        "file_name": "photo.png",
        "content_type": "image/png",
        "size_bytes": len(data),
        "content": io.BytesIO(data),
    }
    kwargs.update(overrides)
    return service.upload_photo(**kwargs)


class TestHelpers:
    def test_metadata_name_short_names_untouched(self) -> None:
        assert quote_metadata_name("été 2024.png") == "%C3%A9t%C3%A9%202024.png"

    def test_metadata_name_long_names_are_cut_between_characters(self) -> None:
        name = "写" * 255

        quoted = quote_metadata_name(name)

        assert len(quoted) <= 1024
        assert name.startswith(unquote(quoted, errors="strict"))
        assert len(quoted) % len("%E5%86%99") == 0

    def test_generated_names_are_unique_and_keep_extension(self) -> None:
        first = UploadService.generate_stored_file_name("../../etc/My Photo.JPG")
        second = UploadService.generate_stored_file_name("../../etc/My Photo.JPG")

        assert first != second
        assert first.endswith(".JPG")
        assert "/" not in first
        assert "Photo" not in first

    def test_generated_name_without_extension(self) -> None:
        name = UploadService.generate_stored_file_name("README")

        assert "." not in name

    def test_storage_key_is_namespaced(self) -> None:
        assert UploadService.build_storage_key("abc.png") == "uploads/abc.png"

    @pytest.mark.parametrize(
        "mime_types,expected",
        [
            (("image/png",), "PNG"),
            (("image/png", "image/gif"), "PNG or GIF"),
            (
                ("image/jpeg", "image/png", "image/gif", "image/webp"),
                "JPEG, PNG, GIF, or WebP",
            ),
            (("image/x-icon",), "X-ICON"),
        ],
    )
    def test_describe_mime_types(self, mime_types, expected) -> None:
        assert describe_mime_types(mime_types) == expected


class TestValidateUpload:
    @pytest.fixture
    def service(self, settings) -> UploadService:
        return UploadService(storage=object(), metadata=object(), settings=settings)

    def test_accepts_allowed_type_case_insensitively(self, service) -> None:
        service.validate_upload(content_type=" IMAGE/PNG ", size_bytes=10)

    def test_rejects_disallowed_type(self, service) -> None:
        with pytest.raises(MIMETypeError, match="JPEG, PNG, GIF, or WebP"):
            service.validate_upload(content_type="application/pdf", size_bytes=10)

    def test_type_is_checked_before_size(self, service) -> None:
        with pytest.raises(MIMETypeError):
            service.validate_upload(content_type="text/plain", size_bytes=0)

    def test_rejects_oversize(self, service) -> None:
        with pytest.raises(FileSizeError, match="File size exceeds 10MB limit."):
            service.validate_upload(content_type="image/png", size_bytes=10 * MiB + 1)

    def test_accepts_exact_limit(self, service) -> None:
        service.validate_upload(content_type="image/png", size_bytes=10 * MiB)

    def test_rejects_empty(self, service) -> None:
        with pytest.raises(FileSizeError, match="File is empty.") as exc:
            service.validate_upload(content_type="image/png", size_bytes=0)

        assert exc.value.error_code == "EMPTY_FILE"

    def test_uses_configured_allow_list(self) -> None:
        settings = PhotoAlbumSettings(
            database_url="sqlite://",
            allowed_mime_types="image/gif",
            max_file_size_bytes=3 * MiB,
        )
        service = UploadService(storage=object(), metadata=object(), settings=settings)

        with pytest.raises(MIMETypeError, match="Please upload GIF images."):
            service.validate_upload(content_type="image/png", size_bytes=10)

        with pytest.raises(FileSizeError, match="3MB"):
            service.validate_upload(content_type="image/gif", size_bytes=4 * MiB)


class TestUploadPhotoRejections:
    """Rejected uploads never touch either store."""

    def test_disallowed_type(self, aws_mock, s3_list_keys, count_rows) -> None:
        result = upload(UploadService(), b"%PDF-1.4", content_type="application/pdf")

        assert result.success is False
        assert result.photo_id is None
        assert result.error_message == (
            "File type not supported. Please upload JPEG, PNG, GIF, or WebP images."
        )
        assert s3_list_keys() == []
        assert count_rows() == 0

    def test_oversize_jpeg(self, aws_mock, sample_jpeg_binary, s3_list_keys, count_rows) -> None:
        assert count_rows() == 0

        result = upload(
            UploadService(),
            sample_jpeg_binary,
            file_name="big.jpg",
            content_type="image/jpeg",
            size_bytes=15 * MiB,
        )

        assert result.success is False
        assert result.error_message == "File size exceeds 10MB limit."
        assert s3_list_keys() == []
        assert count_rows() == 0

    def test_empty_file(self, aws_mock, s3_list_keys, count_rows) -> None:
        result = upload(UploadService(), b"")

        assert result.success is False
        assert result.error_message == "File is empty."
        assert s3_list_keys() == []
        assert count_rows() == 0


class TestUploadPhoto:
    def test_success_persists_object_and_row(
        self,
        aws_mock,
        sample_png_binary,
        metadata_repo,
        s3_get_object,
    ) -> None:
        result = upload(UploadService(), sample_png_binary, file_name="tiny.png")

        assert result.success is True
        assert result.file_name == "tiny.png"
        assert result.error_message is None

        photo = metadata_repo.fetch_photo(photo_id=result.photo_id)
        assert photo is not None
        assert photo.original_file_name == "tiny.png"
        assert photo.file_path == f"uploads/{photo.stored_file_name}"
        assert photo.stored_file_name.endswith(".png")
        assert (photo.width, photo.height) == (4, 3)

        stored = s3_get_object(photo.file_path)
        assert stored["body"] == sample_png_binary
        assert stored["content_type"] == "image/png"
        assert stored["metadata"]["original_file_name"] == "tiny.png"
        assert "uploaded_at" in stored["metadata"]

    def test_creates_missing_bucket(self, aws_mock, sample_png_binary, s3_list_keys) -> None:
        result = upload(UploadService(), sample_png_binary)

        assert result.success is True
        assert len(s3_list_keys()) == 1

    def test_large_png_scenario(self, aws_mock, make_image, metadata_repo) -> None:
        png = make_image(2000, 1000, "PNG")
        padded = png + b"\0" * (500_000 - len(png))

        result = upload(UploadService(), padded, file_name="wide.png")

        assert result.success is True
        photo = metadata_repo.fetch_photo(photo_id=result.photo_id)
        assert photo.width == 2000
        assert photo.height == 1000
        assert photo.file_size == 500_000
        assert photo.mime_type == "image/png"

    def test_corrupt_image_is_still_stored(self, aws_mock, metadata_repo, s3_get_object) -> None:
        data = b"\xff\xd8\xff not really a jpeg"

        result = upload(UploadService(), data, file_name="broken.jpg", content_type="image/jpeg")

        assert result.success is True
        photo = metadata_repo.fetch_photo(photo_id=result.photo_id)
        assert photo.width is None
        assert photo.height is None
        assert s3_get_object(photo.file_path)["body"] == data

    def test_non_ascii_file_name(self, aws_mock, sample_png_binary, metadata_repo) -> None:
        result = upload(UploadService(), sample_png_binary, file_name="été 2024.png")

        assert result.success is True
        assert metadata_repo.fetch_photo(photo_id=result.photo_id).original_file_name == (
            "été 2024.png"
        )

    def test_long_non_ascii_file_name_fits_object_metadata(
        self, aws_mock, sample_png_binary, metadata_repo, s3_get_object
    ) -> None:
        name = "写" * 251 + ".png"

        result = upload(UploadService(), sample_png_binary, file_name=name)

        assert result.success is True
        photo = metadata_repo.fetch_photo(photo_id=result.photo_id)
        assert photo.original_file_name == name
        stored_name = s3_get_object(photo.file_path)["metadata"]["original_file_name"]
        assert len(stored_name) <= 1024
        assert name.startswith(unquote(stored_name))

    def test_same_file_twice_gets_two_photos(self, aws_mock, sample_png_binary) -> None:
        service = UploadService()

        first = upload(service, sample_png_binary)
        second = upload(service, sample_png_binary)

        assert first.success and second.success
        assert first.photo_id != second.photo_id


class TestUploadPhotoFailures:
    def test_storage_write_failure_creates_no_row(
        self, aws_mock, sample_png_binary, count_rows
    ) -> None:
        service = UploadService()

        with patch.object(
            service.storage,
            "upload_photo",
            side_effect=PhotoUploadFailedError(message="S3 down"),
        ):
            result = upload(service, sample_png_binary)

        assert result.success is False
        assert result.error_message == "Error saving file. Please try again."
        assert count_rows() == 0

    def test_metadata_failure_removes_object(
        self, aws_mock, sample_png_binary, s3_list_keys, count_rows
    ) -> None:
        service = UploadService()

        with patch.object(
            service.metadata,
            "create_photo",
            side_effect=MetadataOperationFailedError(message="db down"),
        ):
            result = upload(service, sample_png_binary)

        assert result.success is False
        assert result.error_message == "Error saving photo information. Please try again."
        assert s3_list_keys() == []
        assert count_rows() == 0

    def test_failed_compensation_keeps_failure_result(
        self, aws_mock, sample_png_binary, s3_list_keys, count_rows
    ) -> None:
        service = UploadService()

        with (
            patch.object(
                service.metadata,
                "create_photo",
                side_effect=MetadataOperationFailedError(message="db down"),
            ),
            patch.object(
                service.storage,
                "remove_photo",
                side_effect=PhotoDeletionFailedError(message="s3 down"),
            ) as remove,
        ):
            result = upload(service, sample_png_binary)

        assert result.success is False
        assert result.error_message == "Error saving photo information. Please try again."
        remove.assert_called_once()
        # The object is left behind as an orphan
        assert len(s3_list_keys()) == 1
        assert count_rows() == 0

    def test_unexpected_error_is_reported_as_failure(self, aws_mock, sample_png_binary) -> None:
        service = UploadService()

        with patch.object(service.storage, "ensure_container", side_effect=RuntimeError("boom")):
            result = upload(service, sample_png_binary)

        assert result.success is False
        assert result.error_message == "An unexpected error occurred. Please try again."

    def test_unreadable_stream_is_reported_as_failure(self, aws_mock) -> None:
        class BrokenStream(io.BytesIO):
            def read(self, *args, **kwargs):
                raise OSError("connection reset")

        result = UploadService().upload_photo(
            file_name="photo.png",
            content_type="image/png",
            size_bytes=10,
            content=BrokenStream(),
        )

        assert result.success is False
        assert result.error_message == "An unexpected error occurred. Please try again."
