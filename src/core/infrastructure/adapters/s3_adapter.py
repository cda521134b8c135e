"""Thin adapter for interacting with Amazon S3."""

from collections.abc import Mapping
from typing import Any, Protocol

import boto3

from core.config import PhotoAlbumSettings, get_settings

# us-east-1 rejects an explicit LocationConstraint
_DEFAULT_S3_REGION = "us-east-1"


class _Boto3S3Client(Protocol):
    """Internal typing for boto3 S3 client (AWS-facing only)."""

    def head_bucket(self, *, Bucket: str) -> Any: ...

    def create_bucket(self, *, Bucket: str, **kwargs: Any) -> Any: ...

    def put_object(
        self,
        *,
        Bucket: str,
        Key: str,
        Body: bytes,
        ContentType: str,
        Metadata: Mapping[str, str],
    ) -> Any: ...

    def get_object(
        self,
        *,
        Bucket: str,
        Key: str,
    ) -> Mapping[str, Any]: ...

    def head_object(
        self,
        *,
        Bucket: str,
        Key: str,
    ) -> Mapping[str, Any]: ...

    def delete_object(
        self,
        *,
        Bucket: str,
        Key: str,
    ) -> Any: ...


class S3AdapterProtocol(Protocol):
    """Minimal S3 adapter protocol (repository-facing)."""

    def head_bucket(self) -> None: ...

    def create_bucket(self) -> None: ...

    def put_object(
        self,
        *,
        key: str,
        body: bytes,
        content_type: str,
        metadata: dict[str, str],
    ) -> None: ...

    def get_object(self, *, key: str) -> Mapping[str, Any]: ...

    def head_object(self, *, key: str) -> Mapping[str, Any]: ...

    def delete_object(self, *, key: str) -> None: ...


class S3Adapter:
    """Low-level S3 operations (mechanical, no error handling).

    This adapter:
    - Wraps boto3 S3 client
    - Does NOT handle errors (lets them bubble up)
    - Domain implementations catch and translate errors
    """

    def __init__(self, settings: PhotoAlbumSettings | None = None) -> None:
        """Create S3 client from photo album configuration."""
        settings = settings or get_settings()

        self._bucket = settings.bucket_name
        self._region = settings.region_name
        self._client: _Boto3S3Client = boto3.client(
            "s3",
            endpoint_url=settings.endpoint_url,
            region_name=settings.region_name,
        )

    @property
    def bucket(self) -> str:
        return self._bucket

    def head_bucket(self) -> None:
        """Check that the bucket exists and is reachable.
        Raises boto3 exceptions - caught by domain implementation.
        """
        self._client.head_bucket(Bucket=self._bucket)

    def create_bucket(self) -> None:
        """Create the bucket in the configured region.
        Raises boto3 exceptions - caught by domain implementation.
        """
        kwargs: dict[str, Any] = {}
        if self._region and self._region != _DEFAULT_S3_REGION:
            kwargs["CreateBucketConfiguration"] = {"LocationConstraint": self._region}

        self._client.create_bucket(Bucket=self._bucket, **kwargs)

    def put_object(
        self,
        *,
        key: str,
        body: bytes,
        content_type: str,
        metadata: dict[str, str],
    ) -> None:
        """Store object in S3.
        Raises boto3 exceptions - caught by domain implementation.
        """
        self._client.put_object(
            Bucket=self._bucket,
            Key=key,
            Body=body,
            ContentType=content_type,
            Metadata=metadata,
        )

    def get_object(self, *, key: str) -> Mapping[str, Any]:
        """Fetch object from S3.
        Raises boto3 exceptions - caught by domain implementation.
        """
        response = self._client.get_object(
            Bucket=self._bucket,
            Key=key,
        )
        return response

    def head_object(self, *, key: str) -> Mapping[str, Any]:
        """Fetch object headers from S3.
        Raises boto3 exceptions - caught by domain implementation.
        """
        return self._client.head_object(
            Bucket=self._bucket,
            Key=key,
        )

    def delete_object(self, *, key: str) -> None:
        """Delete object from S3.
        Raises boto3 exceptions - caught by domain implementation.
        """
        self._client.delete_object(
            Bucket=self._bucket,
            Key=key,
        )
