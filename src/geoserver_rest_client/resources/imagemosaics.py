"""
Image mosaic granule management.

GeoServer ingests granules asynchronously: a 202 from the harvest endpoints
only means the request was accepted. ``verify_granule_present`` is the
separate, optional second phase that reads the granule index back. Between
the two calls ingestion may still be running, so a negative answer right
after ``add_granule_by_remote_file`` is not proof of failure.
"""

from typing import Any, Dict, List

from ..errors import GeoServerParseError
from ..observability import log_event
from ._base import ResourceClient

TEXT_PLAIN = {"Content-Type": "text/plain"}


def _store_path(workspace: str, coverage_store: str) -> str:
    return f"workspaces/{workspace}/coveragestores/{coverage_store}"


def _granules_path(workspace: str, coverage_store: str, coverage: str) -> str:
    return f"{_store_path(workspace, coverage_store)}/coverages/{coverage}/index/granules"


def location_filter(location: str) -> str:
    """CQL filter matching one granule location; embedded quotes are doubled."""
    escaped = location.replace("'", "''")
    return f"location='{escaped}'"


def granule_locations(granules: Dict[str, Any]) -> List[str]:
    """Locations listed in a granule index (GeoJSON FeatureCollection)."""
    features = granules.get("features", [])
    if not isinstance(features, list):
        raise GeoServerParseError("Expected granule index 'features' to be a list.")
    locations = []
    for feature in features:
        props = feature.get("properties") if isinstance(feature, dict) else None
        if isinstance(props, dict) and props.get("location") is not None:
            locations.append(str(props["location"]))
    return locations


class ImageMosaicClient(ResourceClient):
    async def get_granules(
        self, workspace: str, coverage_store: str, coverage: str
    ) -> Dict[str, Any]:
        return await self.connection.get_json(
            f"{_granules_path(workspace, coverage_store, coverage)}.json",
            operation="imagemosaics.get_granules",
        )

    async def harvest_granules(
        self, workspace: str, coverage_store: str, file_path: str
    ) -> str:
        """Harvest every granule in a server-side folder."""
        return await self.connection.send(
            "POST",
            f"{_store_path(workspace, coverage_store)}/external.imagemosaic",
            content=file_path.encode("utf-8"),
            headers=TEXT_PLAIN,
            operation="imagemosaics.harvest_granules",
        )

    async def add_granule_by_server_file(
        self, workspace: str, coverage_store: str, file_path: str
    ) -> None:
        """Add a single granule that already sits on the server's file system."""
        await self.connection.request(
            "POST",
            f"{_store_path(workspace, coverage_store)}/external.imagemosaic",
            content=file_path.encode("utf-8"),
            headers=TEXT_PLAIN,
            expected=(202,),
            operation="imagemosaics.add_granule_by_server_file",
        )

    async def add_granule_by_remote_file(
        self, workspace: str, coverage_store: str, url: str
    ) -> None:
        """
        Ask GeoServer to fetch a granule from a remote URL. Returns once the
        request is accepted; call ``verify_granule_present`` to check ingestion.
        """
        await self.connection.request(
            "POST",
            f"{_store_path(workspace, coverage_store)}/remote.imagemosaic",
            content=url.encode("utf-8"),
            headers=TEXT_PLAIN,
            expected=(202,),
            operation="imagemosaics.add_granule_by_remote_file",
        )

    async def verify_granule_present(
        self, workspace: str, coverage_store: str, coverage: str, location: str
    ) -> bool:
        granules = await self.get_granules(workspace, coverage_store, coverage)
        return location in granule_locations(granules)

    async def delete_single_granule(
        self, workspace: str, coverage_store: str, coverage: str, location: str
    ) -> None:
        """Remove the granule whose index ``location`` matches exactly."""
        await self.connection.request(
            "DELETE",
            f"{_granules_path(workspace, coverage_store, coverage)}.xml",
            params={"filter": location_filter(location)},
            expected=(200,),
            operation="imagemosaics.delete_single_granule",
        )
        log_event(
            "granule_deleted", workspace=workspace, resource=coverage, location=location
        )
