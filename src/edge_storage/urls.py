"""URL composition for Bunny edge storage and its CDN pull zone."""

from urllib.parse import quote

CDN_DOMAIN = "b-cdn.net"
STORAGE_DOMAIN = "storage.bunnycdn.com"
DEFAULT_REGION = "de"


def _path(key: str) -> str:
    return quote(key.lstrip("/"), safe="/")


def public_url(cdn_zone: str, key: str) -> str:
    """Returns the permanent CDN URL of ``key``. Performs no network call."""
    return f"https://{cdn_zone}.{CDN_DOMAIN}/{_path(key)}"


def storage_endpoint(region: str) -> str:
    """Returns the edge storage API base URL for a storage region."""
    if region == DEFAULT_REGION:
        return f"https://{STORAGE_DOMAIN}"
    return f"https://{region}.{STORAGE_DOMAIN}"


def storage_url(region: str, edge_name: str, key: str) -> str:
    """Returns the edge storage API URL addressing ``key`` in a storage zone."""
    return f"{storage_endpoint(region)}/{edge_name}/{_path(key)}"
