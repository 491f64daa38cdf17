"""Bunny edge storage implementation of the StorageService interface."""

import logging
from typing import BinaryIO

from edge_storage import urls
from edge_storage.config import BunnyConfig
from edge_storage.exceptions import FileNotFoundError, IntegrityError
from edge_storage.infrastructure.bunny_client import BunnyEdgeClient
from edge_storage.infrastructure.interfaces import EdgeClient, StorageService
from edge_storage.instrumentation import Instrumenter

logger = logging.getLogger(__name__)


class BunnyStorageService(StorageService):
    """
    Stores objects in a Bunny edge storage zone, served through a CDN pull zone.

    Bunny has no signed URLs, so private URLs are the public CDN URLs.
    """

    def __init__(
        self,
        config: BunnyConfig,
        client: EdgeClient | None = None,
        name: str | None = None,
        public: bool = False,
        instrumenter: Instrumenter | None = None,
    ):
        super().__init__(name or config.service, public, instrumenter)
        self._config = config
        self._client = client or BunnyEdgeClient(config)

    @property
    def config(self) -> BunnyConfig:
        return self._config

    def upload(
        self,
        key: str,
        data: bytes | BinaryIO,
        checksum: str | None = None,
        filename: str | None = None,
        content_type: str | None = None,
        disposition: str | None = None,
    ) -> None:
        with self.instrument("upload", key=key, checksum=checksum):
            content_disposition = None
            if filename and disposition:
                content_disposition = self.content_disposition_with(
                    filename, disposition
                )
            self._upload_with_single_part(
                key,
                data,
                checksum=checksum,
                content_type=content_type,
                content_disposition=content_disposition,
            )

    def download(self, key: str) -> bytes:
        with self.instrument("download", key=key):
            try:
                return bytes(self._client.get_file(key))
            except Exception as e:
                logger.exception("Bunny download failed", extra={"key": key})
                raise FileNotFoundError(key, e) from e

    def delete(self, key: str) -> None:
        with self.instrument("delete", key=key) as payload:
            try:
                self._client.delete(key)
            except Exception as e:
                payload["error"] = str(e)
                logger.warning(
                    "Bunny delete failed", extra={"key": key, "error": str(e)}
                )

    def delete_prefixed(self, prefix: str) -> None:
        with self.instrument("delete_prefixed", prefix=prefix) as payload:
            try:
                self._client.delete_path(prefix)
            except Exception as e:
                payload["error"] = str(e)
                logger.warning(
                    "Bunny prefixed delete failed",
                    extra={"prefix": prefix, "error": str(e)},
                )

    def exists(self, key: str) -> bool:
        with self.instrument("exist", key=key) as payload:
            answer = self._client.exists(key)
            payload["exist"] = answer
            return answer

    def public_url(self, key: str) -> str:
        return urls.public_url(self._config.cdn_zone, key)

    def private_url(
        self,
        key: str,
        expires_in: int | None = None,
        filename: str | None = None,
        disposition: str | None = None,
        content_type: str | None = None,
    ) -> str:
        # The edge API cannot sign URLs.
        return self.public_url(key)

    def _upload_with_single_part(
        self,
        key: str,
        data: bytes | BinaryIO,
        checksum: str | None = None,
        content_type: str | None = None,
        content_disposition: str | None = None,
    ) -> None:
        try:
            self._client.create(
                key,
                data,
                checksum=checksum,
                content_type=content_type,
                content_disposition=content_disposition,
            )
        except Exception as e:
            logger.exception("Bunny upload failed", extra={"key": key})
            raise IntegrityError(key, e) from e
