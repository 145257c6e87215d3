"""
Shared helpers for GeoServer collection envelopes.

GeoServer wraps lists as ``{"workspaces": {"workspace": [...]}}`` and
represents an empty collection as ``{"workspaces": ""}``.
"""

from typing import Any, Dict, List

from ..errors import GeoServerParseError


def is_empty_collection(payload: Dict[str, Any], collection_key: str) -> bool:
    return isinstance(payload, dict) and payload.get(collection_key) == ""


def collection_items(
    payload: Dict[str, Any], collection_key: str, item_key: str
) -> List[Dict[str, Any]]:
    """
    Extract the item list from a collection envelope.
    The empty-string sentinel yields []; a malformed envelope raises
    GeoServerParseError.
    """
    container = payload.get(collection_key) if isinstance(payload, dict) else None
    if container is None or container == "":
        return []
    if not isinstance(container, dict):
        raise GeoServerParseError(
            f"Expected '{collection_key}' to be an object, got {type(container).__name__}."
        )

    items = container.get(item_key, [])
    if isinstance(items, dict):
        items = [items]
    if not isinstance(items, list):
        raise GeoServerParseError(f"Expected '{collection_key}.{item_key}' to be a list.")
    return [i for i in items if isinstance(i, dict)]
