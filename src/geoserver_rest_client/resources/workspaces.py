from typing import Any, Dict, Optional

from ..observability import log_event
from ._base import ResourceClient, flag

CREATE_CONFLICTS = {409: "Unable to add workspace as it already exists"}
DELETE_CONFLICTS = {
    400: "Workspace or related Namespace is not empty (and recurse not true)",
    403: "Workspace or related Namespace is not empty (and recurse not true)",
}
DELETE_MESSAGES = {404: "Workspace doesn't exist"}


class WorkspaceClient(ResourceClient):
    async def get_all(self) -> Dict[str, Any]:
        """
        Return the workspace collection, e.g.
        ``{"workspaces": {"workspace": [{"name": ..., "href": ...}]}}``.
        An instance without workspaces answers ``{"workspaces": ""}``.
        """
        return await self.connection.get_json("workspaces.json", operation="workspaces.get_all")

    async def get(self, name: str) -> Optional[Dict[str, Any]]:
        return await self._get_optional(
            f"workspaces/{name}.json", operation="workspaces.get"
        )

    async def create(self, name: str) -> str:
        """Create a workspace; returns the name GeoServer echoes back."""
        body = {"workspace": {"name": name}}
        return await self.connection.send(
            "POST",
            "workspaces",
            json=body,
            expected=(201,),
            conflicts=CREATE_CONFLICTS,
            operation="workspaces.create",
        )

    async def delete(self, name: str, recurse: bool = False) -> None:
        await self.connection.request(
            "DELETE",
            f"workspaces/{name}",
            params={"recurse": flag(recurse)},
            expected=(200,),
            messages=DELETE_MESSAGES,
            conflicts=DELETE_CONFLICTS,
            operation="workspaces.delete",
        )
        log_event("workspace_deleted", resource=name, recurse=recurse)
