from __future__ import annotations

import os
from typing import Any, Tuple

from dotenv import load_dotenv

from .geoserver import GeoServerRestClient

URL_ENV = "GEOSERVER_REST_URL"
USER_ENV = "GEOSERVER_USER"
PASSWORD_ENV = "GEOSERVER_PASSWORD"


def load_env_config(*, use_dotenv: bool = True) -> Tuple[str, str, str]:
    """Load the GeoServer REST URL and credentials from environment (optional .env)."""
    if use_dotenv:
        load_dotenv()
    url = os.getenv(URL_ENV, "").strip()
    user = os.getenv(USER_ENV, "").strip()
    password = os.getenv(PASSWORD_ENV, "")
    return url, user, password


def create_client_from_env(*, use_dotenv: bool = True, **kwargs: Any) -> GeoServerRestClient:
    """Create a GeoServerRestClient from environment variables."""
    url, user, password = load_env_config(use_dotenv=use_dotenv)
    if not url or not user or not password:
        raise ValueError(
            f"Missing {URL_ENV}, {USER_ENV} or {PASSWORD_ENV} in environment."
        )
    return GeoServerRestClient(url, user, password, **kwargs)


__all__ = ["load_env_config", "create_client_from_env"]
