"""Custom exceptions for the storage services."""


class StorageServiceError(Exception):
    """Base class for every storage service error."""


class IntegrityError(StorageServiceError):
    """Raised when uploading an object to storage fails, whatever the cause."""

    def __init__(self, key: str, cause: Exception | None = None):
        self.key = key
        self.cause = cause
        super().__init__(f"Failed to upload '{key}' to storage")


class FileNotFoundError(StorageServiceError):
    """Raised when an object cannot be downloaded, whether missing or unreachable."""

    def __init__(self, key: str, cause: Exception | None = None):
        self.key = key
        self.cause = cause
        super().__init__(f"Failed to download '{key}' from storage")


class BackendRequestError(StorageServiceError):
    """Raised by a backend client when a request fails or is rejected."""

    def __init__(
        self,
        method: str,
        path: str,
        status_code: int | None = None,
        cause: Exception | None = None,
    ):
        self.method = method
        self.path = path
        self.status_code = status_code
        self.cause = cause
        status = f" with status {status_code}" if status_code is not None else ""
        super().__init__(f"Backend request {method} '{path}' failed{status}")


class ServiceConfigurationError(StorageServiceError):
    """Raised when a storage service cannot be built from its configuration."""

    def __init__(self, name: str, reason: str, cause: Exception | None = None):
        self.name = name
        self.reason = reason
        self.cause = cause
        super().__init__(f"Cannot configure storage service '{name}': {reason}")
