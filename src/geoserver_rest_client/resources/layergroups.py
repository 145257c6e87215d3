from __future__ import annotations

from typing import Any, Dict, Optional, Sequence, Union

from ..models import BoundingBox
from ..observability import log_event
from ._base import ResourceClient, qualified_name

CREATE_CONFLICTS = {409: "A layer group with this name already exists"}


def _collection_path(workspace: Optional[str]) -> str:
    return f"workspaces/{workspace}/layergroups" if workspace else "layergroups"


class LayerGroupClient(ResourceClient):
    async def get_all(self, workspace: Optional[str] = None) -> Dict[str, Any]:
        """Layer groups of a workspace, or the global ones when no workspace is given."""
        return await self.connection.get_json(
            f"{_collection_path(workspace)}.json", operation="layergroups.get_all"
        )

    async def get(self, workspace: Optional[str], layer_group_name: str) -> Optional[Dict[str, Any]]:
        return await self._get_optional(
            f"{_collection_path(workspace)}/{layer_group_name}.json",
            operation="layergroups.get",
        )

    async def create(
        self,
        workspace: Optional[str],
        layer_group_name: str,
        layers: Sequence[str],
        title: Optional[str] = None,
        bounds: Optional[Union[BoundingBox, Dict[str, Any]]] = None,
    ) -> None:
        """
        Create a SINGLE mode layer group. ``layers`` are layer names, either
        prefixed (``ws:layer``) or relative to ``workspace``.
        """
        published = [
            {
                "@type": "layer",
                "name": layer if ":" in layer else qualified_name(workspace, layer),
            }
            for layer in layers
        ]
        group: Dict[str, Any] = {
            "name": layer_group_name,
            "mode": "SINGLE",
            "title": title or layer_group_name,
            "publishables": {"published": published},
        }
        if workspace:
            group["workspace"] = {"name": workspace}
        if bounds is not None:
            group["bounds"] = BoundingBox.model_validate(bounds).to_payload()

        await self.connection.request(
            "POST",
            _collection_path(workspace),
            json={"layerGroup": group},
            expected=(201,),
            conflicts=CREATE_CONFLICTS,
            operation="layergroups.create",
        )

    async def modify(
        self,
        workspace: Optional[str],
        layer_group_name: str,
        layer_group_definition: Dict[str, Any],
    ) -> None:
        """Replace a layer group's definition, e.g. ``{"layerGroup": {...}}``."""
        await self.connection.request(
            "PUT",
            f"{_collection_path(workspace)}/{layer_group_name}.json",
            json=layer_group_definition,
            operation="layergroups.modify",
        )

    async def delete(self, workspace: Optional[str], layer_group_name: str) -> None:
        await self.connection.request(
            "DELETE",
            f"{_collection_path(workspace)}/{layer_group_name}",
            expected=(200,),
            messages={404: f"Layer group '{layer_group_name}' doesn't exist"},
            operation="layergroups.delete",
        )
        log_event("layer_group_deleted", workspace=workspace, resource=layer_group_name)
