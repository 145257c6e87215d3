from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from .client import ConnectionContext, GeoServerConnection
from .resources import (
    AboutClient,
    DatastoreClient,
    ImageMosaicClient,
    LayerClient,
    LayerGroupClient,
    NamespaceClient,
    ResetReloadClient,
    SecurityClient,
    SettingsClient,
    StyleClient,
    WorkspaceClient,
)


class GeoServerRestClient:
    """
    Entry point for the GeoServer REST API.

    Built from the REST endpoint URL (e.g.
    ``http://localhost:8080/geoserver/rest``) and an admin user. Every
    sub-client shares one immutable connection context and one HTTP client:

        async with GeoServerRestClient(url, "admin", "geoserver") as grc:
            if await grc.exists():
                print(await grc.workspaces.get_all())
    """

    def __init__(
        self,
        url: str,
        user: str,
        password: str,
        *,
        timeout_seconds: float = 30.0,
        logger: Optional[logging.Logger] = None,
        http: Optional[httpx.AsyncClient] = None,
    ):
        self.context = ConnectionContext.from_credentials(url, user, password)
        self.connection = GeoServerConnection(
            self.context, timeout_seconds=timeout_seconds, logger=logger, http=http
        )

        self.about = AboutClient(self.connection)
        probe = self.about.exists

        self.layers = LayerClient(self.connection, probe=probe)
        self.layergroups = LayerGroupClient(self.connection, probe=probe)
        self.styles = StyleClient(self.connection, probe=probe)
        self.workspaces = WorkspaceClient(self.connection, probe=probe)
        self.namespaces = NamespaceClient(self.connection, probe=probe)
        self.datastores = DatastoreClient(self.connection, probe=probe)
        self.imagemosaics = ImageMosaicClient(self.connection, probe=probe)
        self.security = SecurityClient(self.connection, probe=probe)
        self.settings = SettingsClient(self.connection, probe=probe)
        self.reset_reload = ResetReloadClient(self.connection, probe=probe)

    @property
    def url(self) -> str:
        return self.context.base_url

    async def get_version(self) -> Dict[str, Any]:
        return await self.about.get_version()

    async def exists(self) -> bool:
        return await self.about.exists()

    async def aclose(self) -> None:
        await self.connection.aclose()

    async def __aenter__(self) -> "GeoServerRestClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
