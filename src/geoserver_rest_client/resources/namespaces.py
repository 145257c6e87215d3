from typing import Any, Dict, Optional

from ..observability import log_event
from ._base import ResourceClient

CREATE_CONFLICTS = {409: "Unable to add namespace as it already exists"}
DELETE_CONFLICTS = {
    403: "Namespace or related Workspace is not empty (and recurse not true)"
}
DELETE_MESSAGES = {404: "Namespace doesn't exist"}


class NamespaceClient(ResourceClient):
    async def get_all(self) -> Dict[str, Any]:
        return await self.connection.get_json("namespaces.json", operation="namespaces.get_all")

    async def get(self, name: str) -> Optional[Dict[str, Any]]:
        return await self._get_optional(
            f"namespaces/{name}.json", operation="namespaces.get"
        )

    async def create(self, prefix: str, uri: str) -> str:
        """Create a namespace (and its implicit workspace); returns the prefix."""
        body = {"namespace": {"prefix": prefix, "uri": uri}}
        return await self.connection.send(
            "POST",
            "namespaces",
            json=body,
            expected=(201,),
            conflicts=CREATE_CONFLICTS,
            operation="namespaces.create",
        )

    async def delete(self, name: str) -> None:
        await self.connection.request(
            "DELETE",
            f"namespaces/{name}",
            expected=(200,),
            messages=DELETE_MESSAGES,
            conflicts=DELETE_CONFLICTS,
            operation="namespaces.delete",
        )
        log_event("namespace_deleted", resource=name)
