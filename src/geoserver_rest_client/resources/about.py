from typing import Any, Dict

from ..client import GeoServerConnection
from ..errors import GeoServerClientError

VERSION_PATH = "about/version.json"


class AboutClient:
    """Liveness probe: the GeoServer ``about`` endpoint."""

    def __init__(self, connection: GeoServerConnection):
        self.connection = connection

    async def get_version(self) -> Dict[str, Any]:
        """Return the version descriptor; raises on any non-success status."""
        return await self.connection.get_json(VERSION_PATH, operation="about.version")

    async def exists(self) -> bool:
        """True when the configured REST endpoint answers the version query."""
        try:
            version_info = await self.get_version()
        except GeoServerClientError as exc:
            self.connection.log.debug(
                "geoserver.unreachable",
                extra={"operation": "about.exists", "url": self.connection.context.base_url},
                exc_info=exc,
            )
            return False
        return bool(version_info)
