"""Pytest configuration and fixtures."""
from typing import BinaryIO
from unittest.mock import MagicMock

import pytest

from edge_storage.config import BunnyConfig, MinioConfig
from edge_storage.exceptions import BackendRequestError
from edge_storage.infrastructure.interfaces import EdgeClient
from edge_storage.instrumentation import Event, Instrumenter


class InMemoryEdgeClient(EdgeClient):
    """Edge client keeping objects in a dict, for round-trip tests."""

    def __init__(self) -> None:
        self.objects: dict[str, bytes] = {}
        self.headers: dict[str, dict[str, str | None]] = {}

    def create(
        self,
        name: str,
        data: bytes | BinaryIO,
        checksum: str | None = None,
        content_type: str | None = None,
        content_disposition: str | None = None,
    ) -> None:
        self.objects[name] = data if isinstance(data, bytes) else data.read()
        self.headers[name] = {
            "checksum": checksum,
            "content_type": content_type,
            "content_disposition": content_disposition,
        }

    def get_file(self, name: str) -> bytes:
        if name not in self.objects:
            raise BackendRequestError("GET", name, status_code=404)
        return self.objects[name]

    def delete(self, name: str) -> None:
        self.objects.pop(name, None)

    def delete_path(self, path: str) -> None:
        if not path.endswith("/"):
            self.objects.pop(path, None)
            return
        for name in [n for n in self.objects if n.startswith(path)]:
            del self.objects[name]

    def exists(self, name: str) -> bool:
        return name in self.objects


@pytest.fixture
def bunny_config() -> BunnyConfig:
    """Bunny configuration with test credentials."""
    return BunnyConfig(
        edge_name="test-zone",
        edge_region="ny",
        edge_api_token="test-token",
        cdn_zone="test-cdn",
    )


@pytest.fixture
def minio_config() -> MinioConfig:
    """MinIO configuration with test credentials."""
    return MinioConfig(
        endpoint="localhost:9000",
        user="minio",
        password="minio123",
        bucket_name="test-bucket",
    )


@pytest.fixture
def events() -> list[Event]:
    """Collects events published by the ``instrumenter`` fixture."""
    return []


@pytest.fixture
def instrumenter(events: list[Event]) -> Instrumenter:
    """Instrumenter recording every event instead of logging it."""
    return Instrumenter(subscribers=(events.append,))


@pytest.fixture
def memory_client() -> InMemoryEdgeClient:
    """In-memory edge client."""
    return InMemoryEdgeClient()


@pytest.fixture
def mock_edge_client() -> MagicMock:
    """Mock edge client."""
    return MagicMock(spec=EdgeClient)


@pytest.fixture
def mock_minio() -> MagicMock:
    """Mock MinIO client."""
    return MagicMock()


@pytest.fixture
def jpeg_bytes() -> bytes:
    """A small JPEG-looking binary payload."""
    return b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01" + bytes(range(256)) + b"\xff\xd9"
