import pytest
from geoserver_rest_client import GeoServerRestClient
from geoserver_rest_client.config import create_client_from_env, load_env_config


def test_load_env_config(monkeypatch):
    monkeypatch.setenv("GEOSERVER_REST_URL", " http://gs:8080/geoserver/rest ")
    monkeypatch.setenv("GEOSERVER_USER", "admin")
    monkeypatch.setenv("GEOSERVER_PASSWORD", "geoserver")

    assert load_env_config(use_dotenv=False) == (
        "http://gs:8080/geoserver/rest",
        "admin",
        "geoserver",
    )


@pytest.mark.asyncio
async def test_create_client_from_env(monkeypatch):
    monkeypatch.setenv("GEOSERVER_REST_URL", "http://gs:8080/geoserver/rest")
    monkeypatch.setenv("GEOSERVER_USER", "admin")
    monkeypatch.setenv("GEOSERVER_PASSWORD", "geoserver")

    client = create_client_from_env(use_dotenv=False)
    async with client:
        assert isinstance(client, GeoServerRestClient)
        assert client.url == "http://gs:8080/geoserver/rest/"


def test_create_client_from_env_missing(monkeypatch):
    monkeypatch.setenv("GEOSERVER_REST_URL", "http://gs:8080/geoserver/rest")
    monkeypatch.delenv("GEOSERVER_USER", raising=False)
    monkeypatch.delenv("GEOSERVER_PASSWORD", raising=False)

    with pytest.raises(ValueError):
        create_client_from_env(use_dotenv=False)
