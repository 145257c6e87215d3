from ..observability import log_event
from ._base import ResourceClient


class ResetReloadClient(ResourceClient):
    async def reset(self) -> None:
        """
        Drop all store, raster and schema caches. Stores reconnect the next
        time a request needs them, which picks up structural changes made
        behind GeoServer's back.
        """
        await self.connection.request("POST", "reset", operation="reset_reload.reset")
        log_event("geoserver_reset")

    async def reload(self) -> None:
        """
        Reload catalog and configuration from disk (after an external tool
        edited the data directory). Implies a reset.
        """
        await self.connection.request("POST", "reload", operation="reset_reload.reload")
        log_event("geoserver_reload")
