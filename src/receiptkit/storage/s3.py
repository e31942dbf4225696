#!/usr/bin/env python3
# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.

from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass
from typing import Any, Callable, Final

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..config.loader import StorageConfig
from ..core.errors import StorageError
from ..core.models import DocumentKind

logger = logging.getLogger(__name__)

KEY_PREFIXES: Final[dict[DocumentKind, str]] = {
    DocumentKind.PAYMENT: "payments/receipts",
    DocumentKind.PAYOUT: "payouts/receipts",
    DocumentKind.QR: "payments/qr-codes",
}


@dataclass(frozen=True)
class StoredObject:
    url: str
    key: str


def unique_filename(
    extension: str,
    *,
    uuid_factory: Callable[[], uuid.UUID] = uuid.uuid4,
    clock: Callable[[], float] = time.time,
) -> str:
    """Return ``<uuid4>-<epoch ms>.<extension>``."""
    millis = int(clock() * 1000)
    return f"{uuid_factory()}-{millis}.{extension.lstrip('.')}"


def object_key(path: str, filename: str) -> str:
    prefix = path.strip("/")
    if not prefix:
        return filename
    return f"{prefix}/{filename}"


class S3ObjectStore:
    """Publish rendered documents to a public-read S3 bucket."""

    def __init__(
        self,
        bucket: str,
        *,
        region: str | None = None,
        public_base_url: str | None = None,
        client: Any | None = None,
    ) -> None:
        if not bucket:
            raise ValueError("storage bucket is required")
        self._bucket = bucket
        self._public_base_url = (public_base_url or f"https://{bucket}").rstrip("/")
        self._client = client or boto3.client("s3", region_name=region)

    @classmethod
    def from_config(cls, config: StorageConfig) -> "S3ObjectStore":
        if not config.bucket:
            raise ValueError("storage.bucket must be set to publish documents")
        return cls(config.bucket, region=config.region, public_base_url=config.public_base_url)

    def upload(self, path: str, filename: str, mime_type: str, data: bytes) -> StoredObject:
        key = object_key(path, filename)
        try:
            self._client.put_object(
                Bucket=self._bucket,
                Key=key,
                Body=data,
                ContentType=mime_type,
                ACL="public-read",
            )
        except (BotoCoreError, ClientError) as exc:
            raise StorageError(f"failed to upload {key} to {self._bucket}: {exc}") from exc
        logger.info("uploaded %s (%d bytes)", key, len(data))
        return StoredObject(url=f"{self._public_base_url}/{key}", key=key)


__all__ = ["KEY_PREFIXES", "S3ObjectStore", "StoredObject", "object_key", "unique_filename"]
