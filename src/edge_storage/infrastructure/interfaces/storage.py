"""Abstract interface for storage services."""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, BinaryIO

from edge_storage.content_disposition import content_disposition_with
from edge_storage.instrumentation import Instrumenter


class StorageService(ABC):
    """
    Abstract base class for storage services.

    A storage service stores, retrieves and deletes binary objects addressed by
    key on a remote backend. Implementations hold only immutable configuration,
    so a single instance can be shared between threads.
    """

    def __init__(
        self,
        name: str,
        public: bool = False,
        instrumenter: Instrumenter | None = None,
    ):
        self._name = name
        self._public = public
        self._instrumenter = instrumenter or Instrumenter()

    @property
    def name(self) -> str:
        return self._name

    @property
    def public(self) -> bool:
        return self._public

    @abstractmethod
    def upload(
        self,
        key: str,
        data: bytes | BinaryIO,
        checksum: str | None = None,
        filename: str | None = None,
        content_type: str | None = None,
        disposition: str | None = None,
    ) -> None:
        """
        Uploads an object in a single, non-resumable request.

        Args:
            key: The object key.
            data: Object content as bytes or a readable binary stream.
            checksum: Checksum forwarded to the backend.
            filename: Filename used to derive a Content-Disposition header.
            content_type: MIME type forwarded to the backend.
            disposition: ``attachment`` or ``inline``; a header is only derived
                when ``filename`` is given as well.

        Raises:
            IntegrityError: If the upload fails for any reason.
        """

    @abstractmethod
    def download(self, key: str) -> bytes:
        """
        Downloads the full content of an object.

        Args:
            key: The object key.

        Returns:
            The object content as bytes.

        Raises:
            FileNotFoundError: If the object is missing or cannot be fetched.
        """

    @abstractmethod
    def delete(self, key: str) -> None:
        """Deletes an object. Never raises; deleting a missing key is a no-op."""

    @abstractmethod
    def delete_prefixed(self, prefix: str) -> None:
        """
        Deletes every object whose key starts with ``prefix``. Never raises.

        Backends addressing objects by directory (Bunny) only delete
        recursively when ``prefix`` ends in ``/``; any other prefix deletes
        at most the single object named ``prefix``.
        """

    @abstractmethod
    def exists(self, key: str) -> bool:
        """
        Checks whether an object exists.

        Raises:
            BackendRequestError: If the backend cannot answer.
        """

    @abstractmethod
    def public_url(self, key: str) -> str:
        """Returns the permanent URL of an object."""

    @abstractmethod
    def private_url(
        self,
        key: str,
        expires_in: int,
        filename: str | None,
        disposition: str | None,
        content_type: str | None,
    ) -> str:
        """Returns a URL granting temporary access to an object."""

    def url(
        self,
        key: str,
        expires_in: int = 300,
        filename: str | None = None,
        disposition: str | None = None,
        content_type: str | None = None,
    ) -> str:
        """Returns the public or the private URL of ``key`` depending on the service."""
        with self.instrument("url", key=key) as payload:
            if self.public:
                generated = self.public_url(key)
            else:
                generated = self.private_url(
                    key,
                    expires_in=expires_in,
                    filename=filename,
                    disposition=disposition,
                    content_type=content_type,
                )
            payload["url"] = generated
            return generated

    def download_chunk(self, key: str, start: int, end: int) -> bytes:
        raise NotImplementedError(
            f"{type(self).__name__} does not support ranged or streamed downloads"
        )

    def update_metadata(self, key: str, **metadata: Any) -> None:
        """Updates object metadata. Services without metadata support ignore it."""

    @contextmanager
    def instrument(self, operation: str, **payload: Any) -> Iterator[dict[str, Any]]:
        with self._instrumenter.instrument(
            operation, service=self.name, **payload
        ) as event_payload:
            yield event_payload

    @staticmethod
    def content_disposition_with(filename: str, type: str | None = "inline") -> str:
        return content_disposition_with(filename, type)
