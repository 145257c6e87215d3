"""geoserver_rest_client package exports."""

from .client import ConnectionContext, GeoServerConnection
from .config import create_client_from_env, load_env_config
from .errors import (
    GeoServerClientError,
    GeoServerConflictError,
    GeoServerConnectionError,
    GeoServerParseError,
    GeoServerResponseError,
)
from .geoserver import GeoServerRestClient
from .lookups import Found, NotFound, Unreachable, lookup, unwrap
from .models import BoundingBox, ContactInformation, DimensionDefaultValue, TimeDimension
from .resources import collection_items, granule_locations, is_empty_collection

__all__ = [
    # Client
    "GeoServerRestClient",
    "ConnectionContext",
    "GeoServerConnection",
    # Config
    "load_env_config",
    "create_client_from_env",
    # Exceptions
    "GeoServerClientError",
    "GeoServerConnectionError",
    "GeoServerResponseError",
    "GeoServerConflictError",
    "GeoServerParseError",
    # Lookup
    "Found",
    "NotFound",
    "Unreachable",
    "lookup",
    "unwrap",
    # Models
    "BoundingBox",
    "ContactInformation",
    "DimensionDefaultValue",
    "TimeDimension",
    # Collections
    "collection_items",
    "is_empty_collection",
    "granule_locations",
]
