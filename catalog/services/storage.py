from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Protocol

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from catalog.core.config import settings
from catalog.core.errors import InternalServerError
from catalog.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class FileData:
    name: str
    data: bytes
    content_type: str | None = None


class FileStorage(Protocol):
    async def upload(self, file: FileData) -> None: ...

    async def delete(self, name_or_url: str) -> None: ...

    def get_object_uri(self, name: str) -> str: ...


def object_key(name_or_url: str) -> str | None:
    """Accept either a bare key or a full object URL."""
    if not name_or_url:
        return None
    if "http" in name_or_url:
        return name_or_url.rstrip("/").split("/")[-1] or None
    return name_or_url


class S3Storage:
    def __init__(
        self,
        *,
        bucket: str = settings.S3_BUCKET,
        region: str = settings.S3_REGION,
        client=None,
    ) -> None:
        self.bucket = bucket
        self.region = region
        self.client = client or boto3.client(
            "s3",
            region_name=region,
            aws_access_key_id=settings.S3_ACCESS_KEY or None,
            aws_secret_access_key=settings.S3_SECRET_KEY or None,
            endpoint_url=settings.S3_ENDPOINT_URL,
        )

    async def upload(self, file: FileData) -> None:
        logger.info(f"Uploading file: {file.name} to S3 bucket: {self.bucket}")
        params = {"Bucket": self.bucket, "Key": file.name, "Body": file.data}
        if file.content_type:
            params["ContentType"] = file.content_type

        try:
            await asyncio.to_thread(self.client.put_object, **params)
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Error uploading file to S3: {e}")
            raise InternalServerError("Error uploading file to storage") from e

        logger.info("File uploaded successfully to S3")

    async def delete(self, name_or_url: str) -> None:
        key = object_key(name_or_url)
        if not key:
            return

        try:
            await asyncio.to_thread(
                self.client.delete_object, Bucket=self.bucket, Key=key
            )
            logger.info(f"File deleted successfully from S3: {key}")
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Error deleting file from S3: {key}: {e}")

    def get_object_uri(self, name: str) -> str:
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{name}"
