"""Schemas stored in MinIO (S3-compatible), addressed as s3a://bucket/key or s3://bucket/key."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Optional

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from avroforge.domain.errors import SchemaLoadError
from avroforge.ports.schema_source import SchemaSource

logger = logging.getLogger(__name__)

SCHEMES = ("s3a://", "s3://")


def parse_s3_path(path: str) -> tuple[str, str]:
    scheme = next((s for s in SCHEMES if path.startswith(s)), None)
    if scheme is None:
        raise ValueError(f"Expected s3a:// or s3:// path, got: {path}")
    without_scheme = path[len(scheme) :]
    bucket, _, key = without_scheme.partition("/")
    if not bucket or not key:
        raise ValueError(f"Expected bucket and object key, got: {path}")
    return bucket, key


@dataclass(frozen=True)
class MinioConfig:
    endpoint: str
    access_key: str
    secret_key: str
    region: str = "us-east-1"
    secure: bool = False

    @classmethod
    def from_env(cls) -> "MinioConfig":
        endpoint = os.getenv("S3_ENDPOINT", os.getenv("MINIO_ENDPOINT", "minio:9000"))
        access_key = os.getenv("MINIO_ROOT_USER", "minio")
        secret_key = os.getenv("MINIO_ROOT_PASSWORD", "minio123")
        region = os.getenv("AWS_REGION", "us-east-1")
        secure = os.getenv("S3_SECURE", "false").lower() == "true"
        return cls(endpoint=endpoint, access_key=access_key, secret_key=secret_key, region=region, secure=secure)


def build_client(cfg: MinioConfig):
    scheme = "https" if cfg.secure else "http"
    return boto3.client(
        "s3",
        aws_access_key_id=cfg.access_key,
        aws_secret_access_key=cfg.secret_key,
        endpoint_url=f"{scheme}://{cfg.endpoint}",
        region_name=cfg.region,
        config=BotoConfig(signature_version="s3v4"),
    )


class S3SchemaSource(SchemaSource):
    def __init__(self, client: Optional[Any] = None, *, config: Optional[MinioConfig] = None) -> None:
        self._client = client or build_client(config or MinioConfig.from_env())

    def load(self, locator: str) -> str:
        try:
            bucket, key = parse_s3_path(locator)
        except ValueError as exc:
            raise SchemaLoadError(str(exc)) from exc
        logger.debug("SCHEMA_FETCH | bucket=%s | key=%s", bucket, key)
        try:
            obj = self._client.get_object(Bucket=bucket, Key=key)
            return obj["Body"].read().decode("utf-8")
        except (ClientError, BotoCoreError, UnicodeDecodeError) as exc:
            raise SchemaLoadError(f"cannot fetch schema {locator}: {exc}") from exc
