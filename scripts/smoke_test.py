from __future__ import annotations

import asyncio
import os
import sys
from datetime import datetime, timezone
from typing import Optional

from geoserver_rest_client import (
    GeoServerClientError,
    collection_items,
    create_client_from_env,
)


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    val = os.getenv(name)
    return val if val else default


def _print_step(title: str) -> None:
    print(f"\n== {title}")


def _fail(msg: str) -> int:
    print(f"FAILED: {msg}")
    return 1


async def run_smoke_test() -> int:
    # --- Config ---
    try:
        client = create_client_from_env()
    except ValueError as exc:
        return _fail(str(exc))

    stamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
    workspace = _env("SMOKE_TEST_WORKSPACE", f"smoke-{stamp}")
    namespace_uri = f"http://example.com/{workspace}"
    keep = _env("SMOKE_TEST_KEEP", "0") == "1"

    print("Config:")
    print(f"  url: {client.url}")
    print(f"  workspace: {workspace}")
    print(f"  keep: {keep}")

    async with client:
        # --- Reachability ---
        _print_step("Version")
        if not await client.exists():
            return _fail("GeoServer is not reachable.")
        version = await client.get_version()
        for resource in collection_items(version, "about", "resource"):
            print(f"  {resource.get('@name')}: {resource.get('Version')}")

        # --- Create workspace ---
        _print_step("Create workspace")
        try:
            await client.workspaces.create(workspace)
        except GeoServerClientError as exc:
            return _fail(f"Create failed: {exc}")
        if await client.workspaces.get(workspace) is None:
            return _fail("Workspace not found after create.")
        print(f"Created workspace '{workspace}'")

        # --- Namespace ---
        _print_step("Verify namespace")
        namespace = await client.namespaces.get(workspace)
        if namespace is None:
            return _fail("Namespace of the new workspace not found.")
        print(f"Namespace URI: {namespace['namespace'].get('uri')}")

        # --- WFS store ---
        wfs_url = _env("SMOKE_TEST_WFS_URL")
        if wfs_url:
            _print_step("Create WFS store")
            try:
                await client.datastores.create_wfs_store(
                    workspace, "smoke-wfs", wfs_url, namespace_uri
                )
            except GeoServerClientError as exc:
                return _fail(f"WFS store failed: {exc}")
            stores = await client.datastores.get_data_stores(workspace)
            names = [s["name"] for s in collection_items(stores, "dataStores", "dataStore")]
            print(f"Data stores: {names}")

        # --- Cleanup ---
        _print_step("Cleanup")
        if keep:
            print("Cleanup skipped (SMOKE_TEST_KEEP=1). Workspace left in system.")
        else:
            try:
                await client.workspaces.delete(workspace, recurse=True)
            except GeoServerClientError as exc:
                return _fail(f"Delete failed: {exc}")
            if await client.workspaces.get(workspace) is not None:
                return _fail("Workspace still present after delete.")
            print(f"Deleted workspace '{workspace}'")

    print("\nPASSED smoke test.")
    return 0


def main() -> None:
    exit_code = asyncio.run(run_smoke_test())
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
