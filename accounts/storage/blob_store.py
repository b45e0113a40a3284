"""
Blob stores for profile icons.
Design: The backend is chosen once from settings (get_blob_store) and injected,
so callers never branch on "local" vs "remote" themselves.
"""

import asyncio
import logging
import secrets
import uuid
from pathlib import Path
from typing import Protocol

import httpx

from accounts.config import Settings, get_settings
from accounts.errors import StoreError

logger = logging.getLogger(__name__)


class BlobStore(Protocol):
    async def store(self, content: bytes, content_type: str, filename: str) -> str:
        """Persist the bytes and return the key they can be found under."""
        ...

    async def delete(self, key: str) -> None:
        ...


def ext_from_content_type(content_type: str) -> str:
    """Subtype of a MIME type ("image/png" -> "png"); empty when there is none."""
    _, sep, subtype = content_type.partition("/")
    return subtype.strip() if sep else ""


def derive_icon_key(content_type: str) -> str:
    return f"icons/{uuid.uuid4()}.{ext_from_content_type(content_type)}"


class LocalBlobStore:
    """Passes content through unchanged to a directory on disk."""

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def _path(self, key: str) -> Path:
        return self.root / key

    async def store(self, content: bytes, content_type: str, filename: str) -> str:
        key = secrets.token_hex(14)
        try:
            await asyncio.to_thread(self._write, self._path(key), content)
        except OSError as exc:
            raise StoreError(f"local write failed for {filename!r}: {exc}") from exc
        return key

    @staticmethod
    def _write(path: Path, content: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)

    async def delete(self, key: str) -> None:
        try:
            await asyncio.to_thread(self._path(key).unlink, missing_ok=True)
        except OSError as exc:
            raise StoreError(f"local delete failed for {key!r}: {exc}") from exc


class RemoteBlobStore:
    """Uploads to an object-storage endpoint over HTTP under icons/<uuid>.<ext> keys."""

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self._client = client
        self.timeout = timeout

    def _headers(self, content_type: str | None = None) -> dict[str, str]:
        headers = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        if content_type:
            headers["Content-Type"] = content_type
        return headers

    async def _request(self, method: str, key: str, **kwargs) -> httpx.Response:
        url = f"{self.base_url}/{key}"
        if self._client is not None:
            response = await self._client.request(method, url, **kwargs)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.request(method, url, **kwargs)
        response.raise_for_status()
        return response

    async def store(self, content: bytes, content_type: str, filename: str) -> str:
        key = derive_icon_key(content_type)
        try:
            await self._request("PUT", key, content=content, headers=self._headers(content_type))
        except httpx.HTTPError as exc:
            raise StoreError(f"upload of {filename!r} to {key} failed: {exc}") from exc
        logger.info("uploaded icon %s (%d bytes)", key, len(content))
        return key

    async def delete(self, key: str) -> None:
        try:
            await self._request("DELETE", key, headers=self._headers())
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code == 404:
                return
            raise StoreError(f"delete of {key} failed: {exc}") from exc
        except httpx.HTTPError as exc:
            raise StoreError(f"delete of {key} failed: {exc}") from exc


def get_blob_store(settings: Settings | None = None) -> BlobStore:
    """Pick the blob backend configured for this process."""
    settings = settings or get_settings()
    if settings.blob_backend == "remote":
        if not settings.blob_remote_url:
            raise ValueError("BLOB_REMOTE_URL is required when BLOB_BACKEND=remote")
        return RemoteBlobStore(
            settings.blob_remote_url,
            token=settings.blob_remote_token,
            timeout=settings.blob_request_timeout,
        )
    return LocalBlobStore(settings.blob_local_root)
