"""Builds storage services from configuration."""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from edge_storage.config import BunnyConfig, MinioConfig, ServiceConfig
from edge_storage.exceptions import ServiceConfigurationError
from edge_storage.infrastructure import BunnyStorageService, MinioStorageService
from edge_storage.infrastructure.interfaces import StorageService
from edge_storage.instrumentation import Instrumenter
from edge_storage.minio import get_minio_client

logger = logging.getLogger(__name__)


def build_service(
    config: ServiceConfig, instrumenter: Instrumenter | None = None
) -> StorageService:
    """
    Builds the storage service described by ``config``.

    Args:
        config: Validated service configuration.
        instrumenter: Instrumenter shared by the service's operations.

    Returns:
        The storage service for the configured backend.

    Raises:
        ServiceConfigurationError: If the backend is not supported.
    """
    backend = config.backend
    if isinstance(backend, BunnyConfig):
        service: StorageService = BunnyStorageService(
            backend,
            name=config.name,
            public=config.public,
            instrumenter=instrumenter,
        )
    elif isinstance(backend, MinioConfig):
        service = MinioStorageService(
            get_minio_client(backend),
            backend,
            name=config.name,
            public=config.public,
            instrumenter=instrumenter,
        )
    else:
        service_name = getattr(backend, "service", type(backend).__name__)
        raise ServiceConfigurationError(
            config.name, f"unsupported backend '{service_name}'"
        )

    logger.info(
        "Storage service configured",
        extra={"service": config.name, "backend": backend.service},
    )
    return service


def configure(
    name: str,
    configurations: Mapping[str, Mapping[str, Any]],
    instrumenter: Instrumenter | None = None,
) -> StorageService:
    """
    Builds a named service from a mapping of service configurations.

    Each entry names its backend under ``service`` and may set ``public``;
    the remaining options configure the backend.

    Example:
        configurations = {
            "bunny": {
                "service": "Bunny",
                "edge_name": "my-zone",
                "edge_region": "ny",
                "edge_api_token": "...",
                "cdn_zone": "my-cdn",
            },
        }
        service = configure("bunny", configurations)

    Raises:
        ServiceConfigurationError: If ``name`` is not configured or its
            options are invalid.
    """
    if name not in configurations:
        raise ServiceConfigurationError(name, "missing configuration")

    options = dict(configurations[name])
    public = options.pop("public", False)

    try:
        config = ServiceConfig(name=name, public=public, backend=options)
    except ValidationError as e:
        raise ServiceConfigurationError(name, "invalid configuration", e) from e

    return build_service(config, instrumenter)
