from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Union

from ..errors import GeoServerClientError, GeoServerParseError
from ..models import BoundingBox, DimensionDefaultValue, TimeDimension
from ..observability import log_event
from ._base import ResourceClient, flag, qualified_name

DEFAULT_SRS = "EPSG:4326"
PUBLISH_CONFLICTS = {409: "A layer with this name already exists"}
DELETE_CONFLICTS = {
    403: "Deletion failed. The feature type is referenced by layers; "
    'delete them first or call this with "recurse=true"'
}

BoundingBoxInput = Union[BoundingBox, Dict[str, Any]]


def _resource_body(
    native_name: str,
    name: Optional[str],
    title: Optional[str],
    srs: Optional[str],
    enabled: bool,
    abstract: Optional[str],
    native_bounding_box: Optional[BoundingBoxInput] = None,
) -> Dict[str, Any]:
    published = name or native_name
    body: Dict[str, Any] = {
        "name": published,
        "nativeName": native_name,
        "title": title or published,
        "srs": srs or DEFAULT_SRS,
        "enabled": enabled,
        "abstract": abstract or "",
    }
    if native_bounding_box is not None:
        body["nativeBoundingBox"] = BoundingBox.model_validate(
            native_bounding_box
        ).to_payload()
    return body


class LayerClient(ResourceClient):
    """Layers and the resources behind them (feature types, coverages, WMS/WMTS layers)."""

    async def get(self, workspace: Optional[str], layer_name: str) -> Optional[Dict[str, Any]]:
        """Return a layer by workspace and name, or None if it does not exist."""
        qualified = qualified_name(workspace, layer_name)
        return await self._get_optional(f"layers/{qualified}.json", operation="layers.get")

    async def get_all(self) -> Dict[str, Any]:
        return await self.connection.get_json("layers.json", operation="layers.get_all")

    async def get_layers(self, workspace: str) -> Dict[str, Any]:
        return await self.connection.get_json(
            f"workspaces/{workspace}/layers.json", operation="layers.get_layers"
        )

    async def modify(
        self, workspace: Optional[str], layer_name: str, layer_definition: Dict[str, Any]
    ) -> None:
        """Replace a layer's definition, e.g. ``{"layer": {...}}``."""
        qualified = qualified_name(workspace, layer_name)
        await self.connection.request(
            "PUT",
            f"layers/{qualified}.json",
            json=layer_definition,
            expected=(200,),
            operation="layers.modify",
        )

    async def modify_attribution(
        self,
        workspace: Optional[str],
        layer_name: str,
        attribution_text: Optional[str] = None,
        attribution_link: Optional[str] = None,
    ) -> None:
        """
        Read-modify-write of the layer's ``attribution`` block.

        The current layer is fetched, its attribution title/href are replaced
        and the whole layer is sent back. Nothing guards against a concurrent
        writer; the last PUT wins.
        """
        qualified = qualified_name(workspace, layer_name)
        current = await self.get(workspace, layer_name)
        if current is None:
            raise GeoServerClientError(f"Layer '{qualified}' does not exist")

        layer = current.get("layer")
        if not isinstance(layer, dict) or not isinstance(layer.get("attribution"), dict):
            raise GeoServerParseError(
                f"Layer '{qualified}' misses the property 'attribution'"
            )

        if attribution_text:
            layer["attribution"]["title"] = attribution_text
        if attribution_link:
            layer["attribution"]["href"] = attribution_link

        await self.modify(workspace, layer_name, current)

    async def publish_feature_type_default_data_store(
        self,
        workspace: str,
        native_name: str,
        name: Optional[str] = None,
        title: Optional[str] = None,
        srs: Optional[str] = DEFAULT_SRS,
        enabled: bool = True,
        abstract: Optional[str] = None,
        native_bounding_box: Optional[BoundingBoxInput] = None,
    ) -> None:
        body = {
            "featureType": _resource_body(
                native_name, name, title, srs, enabled, abstract, native_bounding_box
            )
        }
        await self._publish(
            f"workspaces/{workspace}/featuretypes", body, "layers.publish_feature_type"
        )

    async def publish_feature_type(
        self,
        workspace: str,
        data_store: str,
        native_name: str,
        name: Optional[str] = None,
        title: Optional[str] = None,
        srs: Optional[str] = DEFAULT_SRS,
        enabled: bool = True,
        abstract: Optional[str] = None,
        native_bounding_box: Optional[BoundingBoxInput] = None,
    ) -> None:
        body = {
            "featureType": _resource_body(
                native_name, name, title, srs, enabled, abstract, native_bounding_box
            )
        }
        await self._publish(
            f"workspaces/{workspace}/datastores/{data_store}/featuretypes",
            body,
            "layers.publish_feature_type",
        )

    async def get_feature_type(
        self, workspace: str, data_store: str, name: str
    ) -> Optional[Dict[str, Any]]:
        return await self._get_optional(
            f"workspaces/{workspace}/datastores/{data_store}/featuretypes/{name}.json",
            operation="layers.get_feature_type",
        )

    async def publish_wms_layer(
        self,
        workspace: str,
        data_store: str,
        native_name: str,
        name: Optional[str] = None,
        title: Optional[str] = None,
        srs: Optional[str] = DEFAULT_SRS,
        enabled: bool = True,
        abstract: Optional[str] = None,
    ) -> None:
        body = {
            "wmsLayer": _resource_body(native_name, name, title, srs, enabled, abstract)
        }
        await self._publish(
            f"workspaces/{workspace}/wmsstores/{data_store}/wmslayers",
            body,
            "layers.publish_wms_layer",
        )

    async def get_wms_layer(
        self, workspace: str, data_store: str, layer_name: str
    ) -> Optional[Dict[str, Any]]:
        return await self._get_optional(
            f"workspaces/{workspace}/wmsstores/{data_store}/wmslayers/{layer_name}.json",
            operation="layers.get_wms_layer",
        )

    async def publish_wmts_layer(
        self,
        workspace: str,
        data_store: str,
        native_name: str,
        name: Optional[str] = None,
        title: Optional[str] = None,
        srs: Optional[str] = DEFAULT_SRS,
        enabled: bool = True,
        abstract: Optional[str] = None,
    ) -> None:
        body = {
            "wmtsLayer": _resource_body(native_name, name, title, srs, enabled, abstract)
        }
        await self._publish(
            f"workspaces/{workspace}/wmtsstores/{data_store}/layers",
            body,
            "layers.publish_wmts_layer",
        )

    async def get_wmts_layer(
        self, workspace: str, data_store: str, layer_name: str
    ) -> Optional[Dict[str, Any]]:
        return await self._get_optional(
            f"workspaces/{workspace}/wmtsstores/{data_store}/layers/{layer_name}.json",
            operation="layers.get_wmts_layer",
        )

    async def publish_db_raster(
        self,
        workspace: str,
        coverage_store: str,
        native_name: str,
        name: Optional[str] = None,
        title: Optional[str] = None,
        srs: Optional[str] = DEFAULT_SRS,
        enabled: bool = True,
        abstract: Optional[str] = None,
    ) -> None:
        """Publish a raster that lives in a database-backed coverage store."""
        body = {
            "coverage": _resource_body(native_name, name, title, srs, enabled, abstract)
        }
        await self._publish(
            f"workspaces/{workspace}/coveragestores/{coverage_store}/coverages",
            body,
            "layers.publish_db_raster",
        )

    async def _publish(self, path: str, body: Dict[str, Any], operation: str) -> None:
        await self.connection.request(
            "POST",
            path,
            json=body,
            expected=(201,),
            conflicts=PUBLISH_CONFLICTS,
            operation=operation,
        )

    async def delete_feature_type(
        self, workspace: str, data_store: str, name: str, recurse: bool = False
    ) -> None:
        await self.connection.request(
            "DELETE",
            f"workspaces/{workspace}/datastores/{data_store}/featuretypes/{name}",
            params={"recurse": flag(recurse)},
            expected=(200,),
            conflicts=DELETE_CONFLICTS,
            operation="layers.delete_feature_type",
        )
        log_event("feature_type_deleted", workspace=workspace, resource=name, recurse=recurse)

    async def enable_time_coverage(
        self,
        workspace: str,
        data_store: str,
        name: str,
        presentation: str,
        resolution: Optional[int],
        default_value: str,
        nearest_match_enabled: Optional[bool] = None,
        raw_nearest_match_enabled: Optional[bool] = None,
        acceptable_interval: Optional[str] = None,
    ) -> None:
        """
        Enable the TIME dimension of a coverage layer.

        ``presentation`` is LIST, DISCRETE_INTERVAL or CONTINUOUS_INTERVAL,
        ``resolution`` is in milliseconds (3600000 for one hour) and
        ``default_value`` is MINIMUM, MAXIMUM, NEAREST or FIXED.
        """
        dimension = TimeDimension(
            presentation=presentation,
            resolution=resolution,
            default_value=DimensionDefaultValue(strategy=default_value),
            nearest_match_enabled=nearest_match_enabled,
            raw_nearest_match_enabled=raw_nearest_match_enabled,
            acceptable_interval=acceptable_interval,
        )
        await self.connection.request(
            "PUT",
            f"workspaces/{workspace}/coveragestores/{data_store}/coverages/{name}.json",
            json={"coverage": {"metadata": dimension.to_metadata()}},
            expected=(200,),
            operation="layers.enable_time_coverage",
        )

    async def enable_time_feature_type(
        self,
        workspace: str,
        data_store: str,
        name: str,
        attribute: str,
        presentation: str,
        resolution: Optional[int],
        default_value: str,
        nearest_match_enabled: Optional[bool] = None,
        raw_nearest_match_enabled: Optional[bool] = None,
        acceptable_interval: Optional[str] = None,
    ) -> None:
        """
        Enable the TIME dimension of a feature type.

        ``attribute`` is the column holding the time values;
        ``acceptable_interval`` (e.g. ``PT30M``) only matters with nearest match.
        """
        dimension = TimeDimension(
            attribute=attribute,
            presentation=presentation,
            resolution=resolution,
            default_value=DimensionDefaultValue(strategy=default_value),
            nearest_match_enabled=nearest_match_enabled,
            raw_nearest_match_enabled=raw_nearest_match_enabled,
            acceptable_interval=acceptable_interval,
        )
        await self.connection.request(
            "PUT",
            f"workspaces/{workspace}/datastores/{data_store}/featuretypes/{name}.json",
            json={"featureType": {"metadata": dimension.to_metadata()}},
            expected=(200,),
            operation="layers.enable_time_feature_type",
        )

    async def get_coverage(
        self, workspace: str, coverage_store: str, name: str
    ) -> Optional[Dict[str, Any]]:
        return await self._get_optional(
            f"workspaces/{workspace}/coveragestores/{coverage_store}/coverages/{name}.json",
            operation="layers.get_coverage",
        )

    async def rename_coverage_bands(
        self,
        workspace: str,
        coverage_store: str,
        name: str,
        band_names: Sequence[str],
    ) -> None:
        """
        Rename the bands of a coverage, in order.
        Read-modify-write: the full coverage is fetched and PUT back.
        """
        coverage = await self.get_coverage(workspace, coverage_store, name)
        if coverage is None:
            raise GeoServerClientError(
                f"Coverage '{workspace}:{name}' does not exist in store '{coverage_store}'"
            )

        body = coverage.get("coverage")
        container = body.get("dimensions") if isinstance(body, dict) else None
        dimensions = (
            container.get("coverageDimension") if isinstance(container, dict) else None
        )
        if isinstance(dimensions, dict):
            dimensions = [dimensions]
            container["coverageDimension"] = dimensions
        if not isinstance(dimensions, list):
            raise GeoServerParseError(
                f"Coverage '{workspace}:{name}' misses the property "
                "'dimensions.coverageDimension'"
            )
        if len(dimensions) != len(band_names):
            raise ValueError(
                f"Coverage '{workspace}:{name}' has {len(dimensions)} bands, "
                f"got {len(band_names)} names."
            )

        bands: List[Dict[str, Any]] = dimensions
        for band, band_name in zip(bands, band_names):
            band["name"] = band_name

        await self.connection.request(
            "PUT",
            f"workspaces/{workspace}/coveragestores/{coverage_store}/coverages/{name}.json",
            json=coverage,
            expected=(200,),
            operation="layers.rename_coverage_bands",
        )
