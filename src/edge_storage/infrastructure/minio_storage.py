"""MinIO implementation of the StorageService interface."""

import io
import logging
from datetime import timedelta
from typing import BinaryIO

from minio import Minio
from minio.deleteobjects import DeleteObject
from minio.error import S3Error

from edge_storage.config import MinioConfig
from edge_storage.exceptions import FileNotFoundError, IntegrityError
from edge_storage.infrastructure.interfaces import StorageService
from edge_storage.instrumentation import Instrumenter

logger = logging.getLogger(__name__)

MISSING_OBJECT_CODES = frozenset({"NoSuchKey", "NoSuchObject", "NotFound"})


class MinioStorageService(StorageService):
    """Handles object storage operations using a MinIO bucket."""

    def __init__(
        self,
        client: Minio,
        config: MinioConfig,
        name: str | None = None,
        public: bool = False,
        instrumenter: Instrumenter | None = None,
    ):
        super().__init__(name or config.service, public, instrumenter)
        self._client = client
        self._config = config
        self._bucket_name = config.bucket_name

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
            content = data if isinstance(data, bytes) else data.read()
            metadata = {}
            if filename and disposition:
                metadata["Content-Disposition"] = self.content_disposition_with(
                    filename, disposition
                )
            if checksum:
                metadata["checksum"] = checksum

            try:
                self._client.put_object(
                    bucket_name=self._bucket_name,
                    object_name=key,
                    data=io.BytesIO(content),
                    length=len(content),
                    content_type=content_type or "application/octet-stream",
                    metadata=metadata or None,
                )
                logger.info(
                    "File uploaded to MinIO",
                    extra={"bucket_name": self._bucket_name, "key": key},
                )
            except Exception as e:
                logger.exception(
                    "MinIO upload failed",
                    extra={"bucket_name": self._bucket_name, "key": key},
                )
                raise IntegrityError(key, e) from e

    def download(self, key: str) -> bytes:
        with self.instrument("download", key=key):
            try:
                response = self._client.get_object(self._bucket_name, key)
                try:
                    return bytes(response.data)
                finally:
                    response.close()
                    response.release_conn()
            except Exception as e:
                logger.exception(
                    "MinIO download failed",
                    extra={"bucket_name": self._bucket_name, "key": key},
                )
                raise FileNotFoundError(key, e) from e

    def delete(self, key: str) -> None:
        with self.instrument("delete", key=key) as payload:
            try:
                self._client.remove_object(self._bucket_name, key)
            except Exception as e:
                payload["error"] = str(e)
                logger.warning(
                    "MinIO delete failed", extra={"key": key, "error": str(e)}
                )

    def delete_prefixed(self, prefix: str) -> None:
        with self.instrument("delete_prefixed", prefix=prefix) as payload:
            try:
                objects = self._client.list_objects(
                    self._bucket_name, prefix=prefix, recursive=True
                )
                delete_list = [DeleteObject(obj.object_name) for obj in objects]
                # remove_objects is lazy; errors are only reported while iterating.
                failures = list(
                    self._client.remove_objects(self._bucket_name, delete_list)
                )
                if failures:
                    payload["error"] = f"{len(failures)} objects not deleted"
                    logger.warning(
                        "MinIO prefixed delete incomplete",
                        extra={"prefix": prefix, "failed": len(failures)},
                    )
            except Exception as e:
                payload["error"] = str(e)
                logger.warning(
                    "MinIO prefixed delete failed",
                    extra={"prefix": prefix, "error": str(e)},
                )

    def exists(self, key: str) -> bool:
        with self.instrument("exist", key=key) as payload:
            try:
                self._client.stat_object(self._bucket_name, key)
                answer = True
            except S3Error as e:
                if e.code not in MISSING_OBJECT_CODES:
                    raise
                answer = False
            payload["exist"] = answer
            return answer

    def public_url(self, key: str) -> str:
        scheme = "https" if self._config.secure else "http"
        return f"{scheme}://{self._config.endpoint}/{self._bucket_name}/{key.lstrip('/')}"

    def private_url(
        self,
        key: str,
        expires_in: int = 300,
        filename: str | None = None,
        disposition: str | None = None,
        content_type: str | None = None,
    ) -> str:
        response_headers = {}
        if filename:
            response_headers["response-content-disposition"] = (
                self.content_disposition_with(filename, disposition)
            )
        if content_type:
            response_headers["response-content-type"] = content_type

        return self._client.presigned_get_object(
            self._bucket_name,
            key,
            expires=timedelta(seconds=expires_in),
            response_headers=response_headers or None,
        )

    def ensure_bucket_exists(self) -> None:
        """Ensures the configured bucket exists in MinIO, creating it if necessary."""
        if not self._client.bucket_exists(self._bucket_name):
            self._client.make_bucket(self._bucket_name)
            logger.info("Bucket created", extra={"bucket_name": self._bucket_name})
        else:
            logger.info("Bucket exists", extra={"bucket_name": self._bucket_name})
