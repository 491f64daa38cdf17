"""Infrastructure layer exports."""

from edge_storage.infrastructure.bunny_client import BunnyEdgeClient
from edge_storage.infrastructure.bunny_storage import BunnyStorageService
from edge_storage.infrastructure.minio_storage import MinioStorageService

__all__ = [
    "BunnyEdgeClient",
    "BunnyStorageService",
    "MinioStorageService",
]
