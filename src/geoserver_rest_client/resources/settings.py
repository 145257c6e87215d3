from __future__ import annotations

from typing import Any, Dict, Optional, Union

from ..models import ContactInformation
from ._base import ResourceClient


class SettingsClient(ResourceClient):
    """Global server settings and contact information."""

    async def get_settings(self) -> Dict[str, Any]:
        return await self.connection.get_json("settings.json", operation="settings.get")

    async def update_settings(self, settings: Dict[str, Any]) -> None:
        """PUT a (partial) settings document, e.g. ``{"global": {"settings": {...}}}``."""
        await self.connection.request(
            "PUT",
            "settings",
            json=settings,
            expected=(200,),
            operation="settings.update",
        )

    async def update_proxy_base_url(self, proxy_base_url: str) -> None:
        await self.update_settings(
            {"global": {"settings": {"proxyBaseUrl": proxy_base_url}}}
        )

    async def get_contact_information(self) -> Dict[str, Any]:
        return await self.connection.get_json(
            "settings/contact.json", operation="settings.get_contact"
        )

    async def update_contact_information(
        self,
        contact: Optional[ContactInformation] = None,
        *,
        address: Optional[str] = None,
        city: Optional[str] = None,
        country: Optional[str] = None,
        postal_code: Optional[Union[str, int]] = None,
        state: Optional[str] = None,
        email: Optional[str] = None,
        organization: Optional[str] = None,
        contact_person: Optional[str] = None,
        phone_number: Optional[Union[str, int]] = None,
    ) -> None:
        """
        Update the contact information. Fields left as None are not sent and
        keep their current value; clearing a field is not supported.
        """
        if contact is None:
            contact = ContactInformation(
                address=address,
                city=city,
                country=country,
                postal_code=postal_code,
                state=state,
                email=email,
                organization=organization,
                contact_person=contact_person,
                phone_number=phone_number,
            )
        await self.connection.request(
            "PUT",
            "settings/contact",
            json=contact.to_payload(),
            expected=(200,),
            operation="settings.update_contact",
        )
