"""Sub-clients, one per GeoServer REST resource family."""

from ._collections import collection_items, is_empty_collection
from .about import AboutClient
from .datastores import DatastoreClient
from .imagemosaics import ImageMosaicClient, granule_locations
from .layergroups import LayerGroupClient
from .layers import LayerClient
from .namespaces import NamespaceClient
from .reset_reload import ResetReloadClient
from .security import SecurityClient
from .settings import SettingsClient
from .styles import StyleClient
from .workspaces import WorkspaceClient

__all__ = [
    "AboutClient",
    "DatastoreClient",
    "ImageMosaicClient",
    "LayerClient",
    "LayerGroupClient",
    "NamespaceClient",
    "ResetReloadClient",
    "SecurityClient",
    "SettingsClient",
    "StyleClient",
    "WorkspaceClient",
    "collection_items",
    "is_empty_collection",
    "granule_locations",
]
