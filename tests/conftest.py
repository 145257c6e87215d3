import pytest
from geoserver_rest_client import GeoServerRestClient
from mock_geoserver import REST_URL


@pytest.fixture
def client():
    return GeoServerRestClient(REST_URL, "admin", "geoserver")
