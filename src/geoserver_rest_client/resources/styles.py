from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..errors import GeoServerClientError
from ..observability import log_event
from ._base import ResourceClient, flag, qualified_name
from ._collections import collection_items
from .workspaces import WorkspaceClient

SLD_CONTENT_TYPE = "application/vnd.ogc.sld+xml"
PUBLISH_CONFLICTS = {
    403: "Unable to publish style as it already exists",
    409: "Unable to publish style as it already exists",
}
DELETE_CONFLICTS = {
    403: "Deletion failed. There might be dependant layers to this style. "
    'Delete them first or call this with "recurse=true"'
}


def _styles_path(workspace: Optional[str]) -> str:
    return f"workspaces/{workspace}/styles" if workspace else "styles"


class StyleClient(ResourceClient):
    async def get_defaults(self) -> Dict[str, Any]:
        """Styles outside any workspace (the server defaults)."""
        return await self.connection.get_json("styles.json", operation="styles.get_defaults")

    async def get_in_workspace(self, workspace: str) -> Dict[str, Any]:
        return await self.connection.get_json(
            f"{_styles_path(workspace)}.json", operation="styles.get_in_workspace"
        )

    async def get_all_workspace_styles(self) -> List[Dict[str, Any]]:
        """
        Styles of every workspace, flattened into one list.
        One request per workspace; the first failure propagates.
        """
        workspaces = WorkspaceClient(self.connection, probe=self._probe)
        all_ws = await workspaces.get_all()

        all_styles: List[Dict[str, Any]] = []
        for ws in collection_items(all_ws, "workspaces", "workspace"):
            ws_styles = await self.get_in_workspace(ws["name"])
            all_styles.extend(collection_items(ws_styles, "styles", "style"))
        return all_styles

    async def get_all(self) -> List[Dict[str, Any]]:
        """Default styles followed by all workspace styles."""
        defaults = await self.get_defaults()
        ws_styles = await self.get_all_workspace_styles()
        return collection_items(defaults, "styles", "style") + ws_styles

    async def publish(self, workspace: Optional[str], name: str, sld_body: str) -> None:
        """Publish an SLD document (XML text) under ``name``."""
        await self.connection.request(
            "POST",
            _styles_path(workspace),
            params={"name": name},
            content=sld_body.encode("utf-8"),
            headers={"Content-Type": SLD_CONTENT_TYPE},
            expected=(201,),
            conflicts=PUBLISH_CONFLICTS,
            operation="styles.publish",
        )

    async def delete(
        self,
        workspace: Optional[str],
        name: str,
        recurse: bool = False,
        purge: bool = False,
    ) -> None:
        """
        Delete a style. ``recurse`` also detaches it from layers using it;
        ``purge`` removes the SLD file from the data directory.
        """
        await self.connection.request(
            "DELETE",
            f"{_styles_path(workspace)}/{name}",
            params={"recurse": flag(recurse), "purge": flag(purge)},
            expected=(200,),
            messages={404: f"Style '{name}' doesn't exist"},
            conflicts=DELETE_CONFLICTS,
            operation="styles.delete",
        )
        log_event("style_deleted", workspace=workspace, resource=name, recurse=recurse)

    async def assign_style_to_layer(
        self,
        workspace: Optional[str],
        layer_name: str,
        style_workspace: Optional[str],
        style_name: str,
        is_default_style: bool = True,
    ) -> None:
        """
        Associate an existing style with a layer; by default it also becomes
        the layer's default style.
        """
        style_body = await self.get_style_information(style_workspace, style_name)
        if style_body is None:
            raise GeoServerClientError(
                f"Style '{qualified_name(style_workspace, style_name)}' does not exist"
            )

        qualified = qualified_name(workspace, layer_name)
        await self.connection.request(
            "POST",
            f"layers/{qualified}/styles",
            params={"default": flag(is_default_style)},
            json=style_body,
            expected=(201,),
            operation="styles.assign_to_layer",
        )

    async def get_style_information(
        self, workspace: Optional[str], style_name: str
    ) -> Optional[Dict[str, Any]]:
        return await self._get_optional(
            f"{_styles_path(workspace)}/{style_name}.json", operation="styles.get"
        )
