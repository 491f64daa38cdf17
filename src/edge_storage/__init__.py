from edge_storage.config import BunnyConfig, MinioConfig, ServiceConfig, load_config
from edge_storage.exceptions import (
    BackendRequestError,
    FileNotFoundError,
    IntegrityError,
    ServiceConfigurationError,
    StorageServiceError,
)
from edge_storage.infrastructure import (
    BunnyEdgeClient,
    BunnyStorageService,
    MinioStorageService,
)
from edge_storage.infrastructure.interfaces import EdgeClient, StorageService
from edge_storage.instrumentation import Event, Instrumenter
from edge_storage.logging import setup_logging
from edge_storage.registry import build_service, configure

__all__ = [
    "setup_logging",
    "load_config",
    "configure",
    "build_service",
    "BunnyConfig",
    "MinioConfig",
    "ServiceConfig",
    "StorageService",
    "EdgeClient",
    "BunnyStorageService",
    "BunnyEdgeClient",
    "MinioStorageService",
    "Instrumenter",
    "Event",
    "StorageServiceError",
    "IntegrityError",
    "FileNotFoundError",
    "BackendRequestError",
    "ServiceConfigurationError",
]
