from __future__ import annotations

from typing import Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

TimePresentation = Literal["LIST", "DISCRETE_INTERVAL", "CONTINUOUS_INTERVAL"]
TimeDefaultStrategy = Literal["MINIMUM", "MAXIMUM", "NEAREST", "FIXED"]


class BoundingBox(BaseModel):
    minx: float
    maxx: float
    miny: float
    maxy: float
    crs: Optional[Union[str, Dict[str, Any]]] = None

    model_config = ConfigDict(extra="forbid")

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class DimensionDefaultValue(BaseModel):
    strategy: TimeDefaultStrategy

    model_config = ConfigDict(extra="forbid")


class TimeDimension(BaseModel):
    """
    ``dimensionInfo`` block of a time-enabled layer.
    ``attribute`` only applies to feature types; coverages carry time in the
    granule index.
    """

    enabled: bool = True
    attribute: Optional[str] = None
    presentation: TimePresentation
    resolution: Optional[int] = None
    units: str = "ISO8601"
    default_value: DimensionDefaultValue = Field(alias="defaultValue")
    nearest_match_enabled: Optional[bool] = Field(
        default=None, alias="nearestMatchEnabled"
    )
    raw_nearest_match_enabled: Optional[bool] = Field(
        default=None, alias="rawNearestMatchEnabled"
    )
    acceptable_interval: Optional[str] = Field(default=None, alias="acceptableInterval")

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    def to_metadata(self) -> Dict[str, Any]:
        return {
            "entry": [
                {
                    "@key": "time",
                    "dimensionInfo": self.model_dump(by_alias=True, exclude_none=True),
                }
            ]
        }


class ContactInformation(BaseModel):
    address: Optional[str] = None
    city: Optional[str] = Field(default=None, alias="addressCity")
    country: Optional[str] = Field(default=None, alias="addressCountry")
    postal_code: Optional[Union[str, int]] = Field(
        default=None, alias="addressPostalCode"
    )
    state: Optional[str] = Field(default=None, alias="addressState")
    email: Optional[str] = Field(default=None, alias="contactEmail")
    organization: Optional[str] = Field(default=None, alias="contactOrganization")
    contact_person: Optional[str] = Field(default=None, alias="contactPerson")
    phone_number: Optional[Union[str, int]] = Field(default=None, alias="contactVoice")

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    def to_payload(self) -> Dict[str, Any]:
        # unset fields are left out so GeoServer keeps their current values
        return {"contact": self.model_dump(by_alias=True, exclude_none=True)}
