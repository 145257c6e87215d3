from typing import Any, Dict

from ..observability import log_event
from ._base import ResourceClient

USERS_PATH = "security/usergroup/users"


class SecurityClient(ResourceClient):
    """Users and role assignments of the default user/group service."""

    async def get_all_users(self) -> Dict[str, Any]:
        return await self.connection.get_json(
            f"{USERS_PATH}.json", operation="security.get_all_users"
        )

    async def create_user(self, username: str, password: str, enabled: bool = True) -> None:
        # GeoServer answers an already existing user with 404, newer releases with 409
        conflict = f"The user '{username}' might already exist"
        body = {"user": {"userName": username, "password": password, "enabled": enabled}}
        await self.connection.request(
            "POST",
            f"{USERS_PATH}.json",
            json=body,
            expected=(201,),
            conflicts={404: conflict, 409: conflict},
            operation="security.create_user",
        )

    async def update_user(self, username: str, password: str, enabled: bool) -> None:
        """Change password and enabled state. The user name itself cannot change."""
        body = {"user": {"password": password, "enabled": enabled}}
        await self.connection.request(
            "POST",
            f"security/usergroup/user/{username}.json",
            json=body,
            expected=(200,),
            messages={404: f"User '{username}' doesn't exist"},
            operation="security.update_user",
        )

    async def delete_user(self, username: str) -> None:
        await self.connection.request(
            "DELETE",
            f"security/usergroup/user/{username}",
            expected=(200,),
            messages={404: f"User '{username}' doesn't exist"},
            operation="security.delete_user",
        )
        log_event("user_deleted", resource=username)

    async def associate_user_role(self, username: str, role: str) -> None:
        await self.connection.request(
            "POST",
            f"security/roles/role/{role}/user/{username}",
            expected=(200,),
            operation="security.associate_user_role",
        )

    async def disassociate_user_role(self, username: str, role: str) -> None:
        await self.connection.request(
            "DELETE",
            f"security/roles/role/{role}/user/{username}",
            expected=(200,),
            operation="security.disassociate_user_role",
        )
