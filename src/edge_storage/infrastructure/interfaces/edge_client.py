"""Abstract interface for the backend client used by the Bunny storage service."""

from abc import ABC, abstractmethod
from typing import BinaryIO


class EdgeClient(ABC):
    """Network client for an object store addressed by object name."""

    @abstractmethod
    def create(
        self,
        name: str,
        data: bytes | BinaryIO,
        checksum: str | None = None,
        content_type: str | None = None,
        content_disposition: str | None = None,
    ) -> None:
        """
        Uploads an object in a single request.

        Args:
            name: The object name.
            data: Object content as bytes or a readable binary stream.
            checksum: Checksum the backend verifies the content against.
            content_type: MIME type stored with the object.
            content_disposition: Content-Disposition stored with the object.

        Raises:
            BackendRequestError: If the upload fails.
        """

    @abstractmethod
    def get_file(self, name: str) -> bytes:
        """
        Fetches the full content of an object.

        Raises:
            BackendRequestError: If the object is missing or the request fails.
        """

    @abstractmethod
    def delete(self, name: str) -> None:
        """
        Deletes a single object.

        Raises:
            BackendRequestError: If the request fails.
        """

    @abstractmethod
    def delete_path(self, path: str) -> None:
        """
        Deletes every object under the directory ``path`` (ending in ``/``),
        or the single object named ``path`` otherwise.

        Raises:
            BackendRequestError: If the request fails.
        """

    @abstractmethod
    def exists(self, name: str) -> bool:
        """
        Checks whether an object exists.

        Raises:
            BackendRequestError: If the backend cannot answer.
        """
