"""
Empty a GeoServer instance: delete every workspace (recursively) and every
non built-in global style. Meant for test containers, never for production.
"""

from __future__ import annotations

import asyncio
import sys

from geoserver_rest_client import (
    GeoServerClientError,
    collection_items,
    create_client_from_env,
)
from geoserver_rest_client.logging import setup_logging

BUILTIN_STYLES = {"generic", "line", "point", "polygon", "raster"}


async def reset_geoserver() -> int:
    try:
        client = create_client_from_env()
    except ValueError as exc:
        print(f"FAILED: {exc}")
        return 1

    failures = 0
    async with client:
        workspaces = await client.workspaces.get_all()
        for ws in collection_items(workspaces, "workspaces", "workspace"):
            name = ws["name"]
            # a dotted name is read as a format suffix unless one is appended
            if "." in name:
                name += ".json"
            try:
                await client.workspaces.delete(name, recurse=True)
                print(f"Deleted workspace {ws['name']}")
            except GeoServerClientError as exc:
                failures += 1
                print(f"Could not delete workspace {ws['name']}: {exc}")

        defaults = await client.styles.get_defaults()
        for style in collection_items(defaults, "styles", "style"):
            if style["name"] in BUILTIN_STYLES:
                continue
            try:
                await client.styles.delete(None, style["name"], recurse=True, purge=True)
                print(f"Deleted style {style['name']}")
            except GeoServerClientError as exc:
                failures += 1
                print(f"Could not delete style {style['name']}: {exc}")

    return 1 if failures else 0


def main() -> None:
    setup_logging()
    sys.exit(asyncio.run(reset_geoserver()))


if __name__ == "__main__":
    main()
