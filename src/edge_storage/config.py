"""Storage service configuration loaded from environment variables."""

import os
from typing import Literal

from pydantic import BaseModel, Field, field_validator

DEFAULT_MINIO_REGION = "us-east-1"
BUNNY_REGIONS = frozenset({"de", "uk", "se", "ny", "la", "sg", "syd", "br", "jh"})


class BunnyConfig(BaseModel, frozen=True):
    """Bunny edge storage connection configuration."""

    service: Literal["Bunny"] = "Bunny"
    edge_name: str
    edge_region: str = "de"
    edge_api_token: str
    cdn_zone: str
    timeout: float = 30.0

    @field_validator("edge_name", "edge_api_token", "cdn_zone")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v.strip()

    @field_validator("edge_region", mode="before")
    @classmethod
    def known_region(cls, v: str | None) -> str:
        region = (v or "de").strip().lower()
        if region not in BUNNY_REGIONS:
            raise ValueError(
                f"unknown edge region '{v}', expected one of {sorted(BUNNY_REGIONS)}"
            )
        return region


class MinioConfig(BaseModel, frozen=True):
    """MinIO connection configuration."""

    service: Literal["MinIO"] = "MinIO"
    endpoint: str
    user: str
    password: str
    bucket_name: str = "blobs"
    secure: bool = False
    region: str = DEFAULT_MINIO_REGION


class ServiceConfig(BaseModel, frozen=True):
    """A named storage service and the backend it talks to."""

    name: str
    public: bool = False
    backend: BunnyConfig | MinioConfig = Field(discriminator="service")


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_config() -> ServiceConfig:
    """Loads the storage service configuration from environment variables."""
    service = os.getenv("STORAGE_SERVICE", "Bunny")

    if service == "MinIO":
        backend: BunnyConfig | MinioConfig = MinioConfig(
            endpoint=os.getenv("MINIO_ENDPOINT", "minio:9000"),
            user=os.getenv("MINIO_USER", ""),
            password=os.getenv("MINIO_PASSWORD", ""),
            bucket_name=os.getenv("MINIO_BUCKET", "blobs"),
            secure=_env_flag("MINIO_SECURE"),
            region=os.getenv("MINIO_REGION") or DEFAULT_MINIO_REGION,
        )
    else:
        backend = BunnyConfig(
            edge_name=os.getenv("BUNNY_EDGE_NAME", ""),
            edge_region=os.getenv("BUNNY_EDGE_REGION", "de"),
            edge_api_token=os.getenv("BUNNY_EDGE_API_TOKEN", ""),
            cdn_zone=os.getenv("BUNNY_CDN_ZONE", ""),
            timeout=float(os.getenv("BUNNY_TIMEOUT", "30")),
        )

    return ServiceConfig(
        name=os.getenv("STORAGE_NAME", service.lower()),
        public=_env_flag("STORAGE_PUBLIC"),
        backend=backend,
    )
