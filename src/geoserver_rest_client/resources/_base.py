from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, Optional

from ..client import GeoServerConnection
from ..lookups import lookup, unwrap
from .about import AboutClient

Probe = Callable[[], Awaitable[bool]]


def qualified_name(workspace: Optional[str], name: str) -> str:
    """GeoServer prefixed name, e.g. ``myWs:myLayer``."""
    return f"{workspace}:{name}" if workspace else name


def flag(value: bool) -> str:
    return "true" if value else "false"


class ResourceClient:
    """Base for sub-clients: a shared connection plus the liveness probe."""

    def __init__(self, connection: GeoServerConnection, *, probe: Optional[Probe] = None):
        self.connection = connection
        self._probe = probe or AboutClient(connection).exists

    async def _get_optional(
        self, path: str, *, operation: Optional[str] = None
    ) -> Optional[Dict[str, Any]]:
        """GET an item; None when absent on a live server, raise otherwise."""

        async def fetch() -> Dict[str, Any]:
            return await self.connection.get_json(path, operation=operation)

        return unwrap(await lookup(fetch, self._probe))
