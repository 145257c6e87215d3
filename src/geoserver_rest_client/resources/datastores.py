from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..observability import log_event
from ._base import ResourceClient, flag

STORE_DEPENDANTS_MESSAGE = (
    "Deletion failed. There might be dependant objects to this store. "
    'Delete them first or call this with "recurse=true"'
)
DELETE_CONFLICTS = {401: STORE_DEPENDANTS_MESSAGE, 403: STORE_DEPENDANTS_MESSAGE}
CREATE_CONFLICTS = {409: "A store with this name already exists in the workspace"}

# REST collection segment per store family
DATA_STORES = "datastores"
COVERAGE_STORES = "coveragestores"
WMS_STORES = "wmsstores"
WMTS_STORES = "wmtsstores"


def _entry(key: str, value: Any) -> Dict[str, Any]:
    return {"@key": key, "$": value}


class DatastoreClient(ResourceClient):
    """Data stores, coverage stores and cascaded WMS/WMTS stores."""

    async def get_data_stores(self, workspace: str) -> Dict[str, Any]:
        return await self._get_stores(workspace, DATA_STORES)

    async def get_coverage_stores(self, workspace: str) -> Dict[str, Any]:
        return await self._get_stores(workspace, COVERAGE_STORES)

    async def get_wms_stores(self, workspace: str) -> Dict[str, Any]:
        return await self._get_stores(workspace, WMS_STORES)

    async def get_wmts_stores(self, workspace: str) -> Dict[str, Any]:
        return await self._get_stores(workspace, WMTS_STORES)

    async def _get_stores(self, workspace: str, store_type: str) -> Dict[str, Any]:
        return await self.connection.get_json(
            f"workspaces/{workspace}/{store_type}.json",
            operation=f"datastores.list_{store_type}",
        )

    async def get_data_store(self, workspace: str, data_store: str) -> Optional[Dict[str, Any]]:
        return await self._get_store(workspace, data_store, DATA_STORES)

    async def get_coverage_store(
        self, workspace: str, coverage_store: str
    ) -> Optional[Dict[str, Any]]:
        return await self._get_store(workspace, coverage_store, COVERAGE_STORES)

    async def get_wms_store(self, workspace: str, wms_store: str) -> Optional[Dict[str, Any]]:
        return await self._get_store(workspace, wms_store, WMS_STORES)

    async def get_wmts_store(self, workspace: str, wmts_store: str) -> Optional[Dict[str, Any]]:
        return await self._get_store(workspace, wmts_store, WMTS_STORES)

    async def _get_store(
        self, workspace: str, name: str, store_type: str
    ) -> Optional[Dict[str, Any]]:
        return await self._get_optional(
            f"workspaces/{workspace}/{store_type}/{name}.json",
            operation=f"datastores.get_{store_type}",
        )

    async def create_geotiff_from_file(
        self,
        workspace: str,
        coverage_store: str,
        layer_name: str,
        layer_title: Optional[str],
        file_path: str,
    ) -> str:
        """
        Upload a local GeoTIFF, creating the coverage store and publishing it
        as a layer in one call. Returns GeoServer's response text.
        """
        params = {"filename": layer_title or layer_name, "coverageName": layer_name}
        return await self.connection.upload_file(
            "PUT",
            f"workspaces/{workspace}/coveragestores/{coverage_store}/file.geotiff",
            file_path=file_path,
            content_type="image/tiff",
            params=params,
            expected=(201,),
            operation="datastores.create_geotiff",
        )

    async def create_image_mosaic_store(
        self, workspace: str, coverage_store: str, zip_archive_path: str
    ) -> str:
        """
        Upload a zipped image mosaic (granules plus indexer/timeregex
        properties) as a new coverage store.
        """
        return await self.connection.upload_file(
            "PUT",
            f"workspaces/{workspace}/coveragestores/{coverage_store}/file.imagemosaic",
            file_path=zip_archive_path,
            content_type="application/zip",
            expected=(201,),
            operation="datastores.create_image_mosaic",
        )

    async def create_gpkg_store(self, workspace: str, data_store: str, gpkg_path: str) -> str:
        """Upload a local GeoPackage as a new data store."""
        return await self.connection.upload_file(
            "PUT",
            f"workspaces/{workspace}/datastores/{data_store}/file.gpkg",
            file_path=gpkg_path,
            content_type="application/octet-stream",
            expected=(201,),
            operation="datastores.create_gpkg",
        )

    async def create_postgis_store(
        self,
        workspace: str,
        namespace_uri: str,
        data_store: str,
        *,
        pg_host: str,
        pg_port: int | str,
        pg_user: str,
        pg_password: str,
        pg_schema: str,
        pg_db: str,
        expose_pk: bool = False,
    ) -> None:
        entries: List[Dict[str, Any]] = [
            _entry("dbtype", "postgis"),
            _entry("schema", pg_schema),
            _entry("database", pg_db),
            _entry("host", pg_host),
            _entry("port", pg_port),
            _entry("passwd", pg_password),
            _entry("namespace", namespace_uri),
            _entry("user", pg_user),
            _entry("Expose primary keys", expose_pk),
        ]
        body = {
            "dataStore": {
                "name": data_store,
                "type": "PostGIS",
                "enabled": True,
                "workspace": {"name": workspace},
                "connectionParameters": {"entry": entries},
            }
        }
        await self._create(workspace, DATA_STORES, body, "datastores.create_postgis")

    async def create_wms_store(
        self, workspace: str, data_store: str, wms_capabilities_url: str
    ) -> None:
        """Cascade a remote WMS; ``wms_capabilities_url`` is its base capabilities URL."""
        body = {
            "wmsStore": {
                "name": data_store,
                "type": "WMS",
                "capabilitiesURL": wms_capabilities_url,
            }
        }
        await self._create(workspace, WMS_STORES, body, "datastores.create_wms")

    async def create_wmts_store(
        self, workspace: str, data_store: str, wmts_capabilities_url: str
    ) -> None:
        body = {
            "wmtsStore": {
                "name": data_store,
                "type": "WMTS",
                "capabilitiesURL": wmts_capabilities_url,
            }
        }
        await self._create(workspace, WMTS_STORES, body, "datastores.create_wmts")

    async def create_wfs_store(
        self,
        workspace: str,
        data_store: str,
        wfs_capabilities_url: str,
        namespace_url: str,
        use_http_connection_pooling: bool = True,
    ) -> None:
        body = {
            "dataStore": {
                "name": data_store,
                "type": "Web Feature Server (NG)",
                "connectionParameters": {
                    "entry": [
                        _entry(
                            "WFSDataStoreFactory:GET_CAPABILITIES_URL",
                            wfs_capabilities_url,
                        ),
                        _entry(
                            "WFSDataStoreFactory:USE_HTTP_CONNECTION_POOLING",
                            flag(use_http_connection_pooling),
                        ),
                        _entry("namespace", namespace_url),
                    ]
                },
            }
        }
        await self._create(workspace, DATA_STORES, body, "datastores.create_wfs")

    async def _create(
        self, workspace: str, store_type: str, body: Dict[str, Any], operation: str
    ) -> None:
        await self.connection.request(
            "POST",
            f"workspaces/{workspace}/{store_type}",
            json=body,
            expected=(201,),
            conflicts=CREATE_CONFLICTS,
            operation=operation,
        )

    async def delete_data_store(
        self, workspace: str, data_store: str, recurse: bool = False
    ) -> None:
        await self._delete(workspace, data_store, DATA_STORES, recurse)

    async def delete_coverage_store(
        self, workspace: str, coverage_store: str, recurse: bool = False
    ) -> None:
        await self._delete(workspace, coverage_store, COVERAGE_STORES, recurse)

    async def _delete(
        self, workspace: str, name: str, store_type: str, recurse: bool
    ) -> None:
        await self.connection.request(
            "DELETE",
            f"workspaces/{workspace}/{store_type}/{name}",
            params={"recurse": flag(recurse)},
            expected=(200,),
            messages={404: f"No store named '{name}' in workspace '{workspace}'"},
            conflicts=DELETE_CONFLICTS,
            operation=f"datastores.delete_{store_type}",
        )
        log_event(
            "store_deleted",
            workspace=workspace,
            resource=name,
            store_type=store_type,
            recurse=recurse,
        )
