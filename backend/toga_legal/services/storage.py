from __future__ import annotations

from typing import Tuple

import boto3
from botocore.client import Config

from toga_legal.core.config import StorageSettings


class StorageService:
    """Almacén S3/MinIO donde se dejan los archivos subidos hasta que el worker los importa."""

    def __init__(self, settings: StorageSettings | None = None) -> None:
        self.settings = settings or StorageSettings.from_env()

    def _client(self):
        return boto3.client(
            "s3",
            endpoint_url=self.settings.endpoint,
            aws_access_key_id=self.settings.access_key,
            aws_secret_access_key=self.settings.secret_key,
            region_name=self.settings.region,
            config=Config(signature_version="s3v4"),
        )

    def ensure_bucket(self, client) -> None:
        buckets = [b["Name"] for b in client.list_buckets().get("Buckets", [])]
        if self.settings.bucket not in buckets:
            client.create_bucket(Bucket=self.settings.bucket)

    def upload_bytes(self, key: str, data: bytes, content_type: str | None = None) -> str:
        client = self._client()
        self.ensure_bucket(client)
        extra = {"ContentType": content_type} if content_type else {}
        client.put_object(Bucket=self.settings.bucket, Key=key, Body=data, **extra)
        return f"s3://{self.settings.bucket}/{key}"

    def download_bytes(self, s3_url: str) -> bytes:
        bucket, key = parse_s3_url(s3_url)
        obj = self._client().get_object(Bucket=bucket, Key=key)
        return obj["Body"].read()

    def delete_object(self, s3_url: str) -> None:
        bucket, key = parse_s3_url(s3_url)
        self._client().delete_object(Bucket=bucket, Key=key)


def parse_s3_url(s3_url: str) -> Tuple[str, str]:
    if not s3_url.startswith("s3://"):
        raise ValueError("Not an s3 url")
    path = s3_url[len("s3://") :]
    bucket, key = path.split("/", 1)
    return bucket, key
