import logging

from minio import Minio

from edge_storage.config import MinioConfig

logger = logging.getLogger(__name__)


def get_minio_client(config: MinioConfig) -> Minio:
    """
    Initialize and return a MinIO client for the given configuration.

    Args:
        config: MinIO connection configuration.

    Returns:
        Minio: Configured MinIO client
    """
    try:
        client = Minio(
            endpoint=config.endpoint,
            access_key=config.user,
            secret_key=config.password,
            secure=config.secure,
            region=config.region,
        )
        return client
    except Exception as e:
        logger.exception(
            "MinIO Client Initialization Failed",
            extra={
                "endpoint": config.endpoint,
                "user": config.user,
            },
        )
        raise e
