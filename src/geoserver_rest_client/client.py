import base64
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, AsyncIterator, Collection, Dict, Mapping, Optional

import anyio
import httpx

from .errors import (
    GeoServerClientError,
    GeoServerConflictError,
    GeoServerConnectionError,
    GeoServerParseError,
    GeoServerResponseError,
)

UPLOAD_CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True)
class ConnectionContext:
    """Normalized REST endpoint plus the precomputed Basic auth header."""

    base_url: str
    auth_header: str

    @classmethod
    def from_credentials(
        cls, url: str, user: str, password: str
    ) -> "ConnectionContext":
        base_url = url if url.endswith("/") else url + "/"
        token = base64.b64encode(f"{user}:{password}".encode("utf-8")).decode("ascii")
        return cls(base_url=base_url, auth_header="Basic " + token)

    def url_for(self, path: str) -> str:
        return self.base_url + path.lstrip("/")


class GeoServerConnection:
    """
    Shared HTTP layer for the GeoServer REST API.
    - Attaches the Authorization header from the connection context
    - Interprets status codes and turns failures into typed errors
    - Single-shot requests: no retries, no caching
    """

    def __init__(
        self,
        context: ConnectionContext,
        *,
        timeout_seconds: float = 30.0,
        logger: Optional[logging.Logger] = None,
        http: Optional[httpx.AsyncClient] = None,
    ):
        self.context = context
        self.timeout_seconds = timeout_seconds
        self.log = logger or logging.getLogger("geoserver_rest_client.client")

        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(
            headers={"Authorization": context.auth_header},
            timeout=timeout_seconds,
        )
        if http is not None:
            self.http.headers["Authorization"] = context.auth_header

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        content: Any = None,
        headers: Optional[Dict[str, str]] = None,
        expected: Optional[Collection[int]] = None,
        messages: Optional[Mapping[int, str]] = None,
        conflicts: Optional[Mapping[int, str]] = None,
        operation: Optional[str] = None,
    ) -> httpx.Response:
        """
        Core request method.
        - Success is a status in ``expected`` (any 2xx when not given)
        - Raises GeoServerConflictError for statuses listed in ``conflicts``
        - Raises GeoServerResponseError for every other failure status
        - Raises GeoServerConnectionError on network/timeout errors
        """
        method = method.upper()
        url = self.context.url_for(path)
        start = time.perf_counter()

        try:
            resp = await self.http.request(
                method, url, params=params, json=json, content=content, headers=headers
            )
        except (httpx.ConnectError, httpx.TimeoutException) as exc:
            raise GeoServerConnectionError(
                f"Network/timeout error calling {method} {url}: {exc}"
            ) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise GeoServerConnectionError(
                f"HTTPX error calling {method} {url}: {exc}"
            ) from exc

        duration_ms = int((time.perf_counter() - start) * 1000)
        self.log.debug(
            "geoserver.request",
            extra={
                "operation": operation,
                "method": method,
                "url": str(resp.request.url),
                "status": resp.status_code,
                "duration_ms": duration_ms,
            },
        )

        if expected is not None:
            ok = resp.status_code in expected
        else:
            ok = 200 <= resp.status_code < 300
        if not ok:
            raise await self._to_response_error(
                resp, method=method, messages=messages, conflicts=conflicts
            )
        return resp

    async def get_json(
        self,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        messages: Optional[Mapping[int, str]] = None,
        operation: Optional[str] = None,
    ) -> Dict[str, Any]:
        resp = await self.request(
            "GET", path, params=params, messages=messages, operation=operation
        )
        return self._safe_json(resp)

    async def send(self, method: str, path: str, **kwargs: Any) -> str:
        """Issue a request and return the raw response text ("" on empty body)."""
        resp = await self.request(method, path, **kwargs)
        return resp.text or ""

    async def upload_file(
        self,
        method: str,
        path: str,
        *,
        file_path: str,
        content_type: str,
        params: Optional[Dict[str, Any]] = None,
        expected: Optional[Collection[int]] = None,
        messages: Optional[Mapping[int, str]] = None,
        conflicts: Optional[Mapping[int, str]] = None,
        operation: Optional[str] = None,
    ) -> str:
        """
        Stream a local file as the raw request body.
        - Does not load the entire file into memory
        - Sends an explicit Content-Length instead of chunked encoding
        - Returns the response text
        """
        source = Path(file_path)
        if not source.is_file():
            raise GeoServerClientError(f"File not found: {file_path}")

        headers = {
            "Content-Type": content_type,
            "Content-Length": str(source.stat().st_size),
        }
        return await self.send(
            method,
            path,
            params=params,
            content=_iter_file(source),
            headers=headers,
            expected=expected,
            messages=messages,
            conflicts=conflicts,
            operation=operation,
        )

    def _safe_json(self, resp: httpx.Response) -> Dict[str, Any]:
        if not resp.content:
            return {}

        try:
            data = resp.json()
        except ValueError as exc:
            snippet = (resp.text or "")[:500]
            raise GeoServerParseError(
                f"Expected JSON from {resp.request.method} "
                f"{resp.request.url}, got non-JSON body snippet: "
                f"{snippet!r}"
            ) from exc

        if not isinstance(data, dict):
            raise GeoServerParseError(
                f"Expected top-level JSON object from "
                f"{resp.request.method} {resp.request.url}, "
                f"got {type(data).__name__}"
            )
        return data

    async def _to_response_error(
        self,
        resp: httpx.Response,
        *,
        method: str,
        messages: Optional[Mapping[int, str]] = None,
        conflicts: Optional[Mapping[int, str]] = None,
    ) -> GeoServerResponseError:
        geoserver_output = await read_response_text(resp)
        kwargs = {
            "status_code": resp.status_code,
            "method": method,
            "url": str(resp.request.url),
        }

        if conflicts and resp.status_code in conflicts:
            return GeoServerConflictError(
                conflicts[resp.status_code], geoserver_output, **kwargs
            )
        message = (messages or {}).get(resp.status_code)
        return GeoServerResponseError(message, geoserver_output, **kwargs)


async def read_response_text(resp: httpx.Response) -> str:
    """Best-effort read of a response body; unreadable bodies degrade to ""."""
    try:
        await resp.aread()
        return resp.text or ""
    except (httpx.HTTPError, httpx.StreamError, UnicodeDecodeError, LookupError):
        return ""


async def _iter_file(path: Path) -> AsyncIterator[bytes]:
    async with await anyio.open_file(path, "rb") as fh:
        while True:
            chunk = await fh.read(UPLOAD_CHUNK_SIZE)
            if not chunk:
                break
            yield chunk


__all__ = [
    "ConnectionContext",
    "GeoServerConnection",
    "read_response_text",
]
