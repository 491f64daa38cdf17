"""Bunny edge storage HTTP client."""

import logging
from typing import BinaryIO

import requests
from requests.adapters import HTTPAdapter

from edge_storage.config import BunnyConfig
from edge_storage.exceptions import BackendRequestError
from edge_storage.infrastructure.interfaces import EdgeClient
from edge_storage.urls import storage_url

logger = logging.getLogger(__name__)


class BunnyEdgeClient(EdgeClient):
    """
    Talks to the Bunny edge storage API of one storage zone.

    Every request authenticates with the zone's ``AccessKey``. The client
    never retries; each call is a single request bounded by ``config.timeout``.
    """

    def __init__(self, config: BunnyConfig, session: requests.Session | None = None):
        self._config = config

        if session is None:
            session = requests.Session()
            adapter = HTTPAdapter(pool_connections=10, pool_maxsize=20, max_retries=0)
            session.mount("https://", adapter)
        self._session = session

    def _url(self, name: str) -> str:
        return storage_url(self._config.edge_region, self._config.edge_name, name)

    def _request(
        self,
        method: str,
        name: str,
        headers: dict[str, str] | None = None,
        **kwargs,
    ) -> requests.Response:
        request_headers = {"AccessKey": self._config.edge_api_token}
        if headers:
            request_headers.update(headers)

        try:
            return self._session.request(
                method,
                self._url(name),
                headers=request_headers,
                timeout=self._config.timeout,
                **kwargs,
            )
        except requests.RequestException as e:
            raise BackendRequestError(method, name, cause=e) from e

    @staticmethod
    def _raise_for_status(response: requests.Response, method: str, name: str) -> None:
        try:
            response.raise_for_status()
        except requests.HTTPError as e:
            raise BackendRequestError(
                method, name, status_code=response.status_code, cause=e
            ) from e

    def create(
        self,
        name: str,
        data: bytes | BinaryIO,
        checksum: str | None = None,
        content_type: str | None = None,
        content_disposition: str | None = None,
    ) -> None:
        headers = {"Content-Type": content_type or "application/octet-stream"}
        if checksum:
            headers["Checksum"] = checksum
        if content_disposition:
            headers["Content-Disposition"] = content_disposition

        response = self._request("PUT", name, headers=headers, data=data)
        self._raise_for_status(response, "PUT", name)
        logger.debug("Object uploaded", extra={"key": name})

    def get_file(self, name: str) -> bytes:
        response = self._request("GET", name)
        self._raise_for_status(response, "GET", name)
        return response.content

    def delete(self, name: str) -> None:
        response = self._request("DELETE", name)
        if response.status_code == 404:
            return
        self._raise_for_status(response, "DELETE", name)

    def delete_path(self, path: str) -> None:
        # A path ending in "/" makes the edge API delete the directory recursively.
        self.delete(path)

    def exists(self, name: str) -> bool:
        response = self._request("GET", name, stream=True)
        try:
            if response.status_code == 404:
                return False
            self._raise_for_status(response, "GET", name)
            return True
        finally:
            response.close()
