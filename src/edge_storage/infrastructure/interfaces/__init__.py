from edge_storage.infrastructure.interfaces.edge_client import EdgeClient
from edge_storage.infrastructure.interfaces.storage import StorageService

__all__ = [
    "EdgeClient",
    "StorageService",
]
