"""
Storage Service - Single Responsibility: write objects to cloud storage.

Wraps the S3 and GCS SDK clients. The SDK clients are blocking, so each
write runs in a worker thread. Clients are built once by the caller and
shared across packages.
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Optional, Union

import boto3
from google.cloud import storage as gcs

from ..config import UploaderSettings
from ..protocols import IObjectStorage

logger = logging.getLogger(__name__)

# S3 canned ACLs -> GCS predefined ACLs
_GCS_PREDEFINED_ACLS = {
    "public-read": "publicRead",
    "private": "private",
}


class S3StorageBackend:
    """
    Object storage on S3.

    Args:
        client: boto3 S3 client
        bucket: Destination bucket
    """

    def __init__(self, client: Any, bucket: str, name: str = "s3"):
        self._client = client
        self._bucket = bucket
        self.name = name

    @property
    def bucket(self) -> str:
        return self._bucket

    async def put_object(
        self,
        key: str,
        body: Union[str, bytes],
        content_type: str,
        acl: Optional[str] = None,
    ) -> None:
        params = {
            "Bucket": self._bucket,
            "Key": key,
            "Body": body.encode("utf-8") if isinstance(body, str) else body,
            "ContentType": content_type,
        }
        if acl:
            params["ACL"] = acl
        await asyncio.to_thread(self._client.put_object, **params)


class GCSStorageBackend:
    """
    Object storage on Google Cloud Storage.

    Args:
        client: google.cloud.storage client
        bucket: Destination bucket name
    """

    def __init__(self, client: Any, bucket: str, name: str = "gcs"):
        self._client = client
        self._bucket = bucket
        self.name = name

    @property
    def bucket(self) -> str:
        return self._bucket

    def _upload(self, key: str, body: Union[str, bytes], content_type: str, acl: Optional[str]):
        blob = self._client.bucket(self._bucket).blob(key)
        kwargs = {"content_type": content_type}
        predefined_acl = _GCS_PREDEFINED_ACLS.get(acl) if acl else None
        if predefined_acl:
            kwargs["predefined_acl"] = predefined_acl
        blob.upload_from_string(body, **kwargs)

    async def put_object(
        self,
        key: str,
        body: Union[str, bytes],
        content_type: str,
        acl: Optional[str] = None,
    ) -> None:
        await asyncio.to_thread(self._upload, key, body, content_type, acl)


@dataclass(frozen=True)
class StorageBackends:
    """Primary backend plus an optional secondary mirror."""
    primary: IObjectStorage
    secondary: Optional[IObjectStorage] = None


def build_backends(settings: UploaderSettings) -> StorageBackends:
    """Create the process-wide storage clients from settings."""
    s3_client = boto3.client(
        "s3",
        aws_access_key_id=settings.s3_access_key_id or None,
        aws_secret_access_key=settings.s3_secret_access_key or None,
        region_name=settings.s3_region or None,
    )
    primary = S3StorageBackend(s3_client, settings.s3_bucket)

    secondary = None
    if settings.upload_config().secondary_enabled and settings.gcs_bucket:
        secondary = GCSStorageBackend(gcs.Client(), settings.gcs_bucket)
        logger.info("Secondary uploads enabled (gcs bucket=%s)", settings.gcs_bucket)

    return StorageBackends(primary=primary, secondary=secondary)
