"""HTTP API tests using FastAPI's TestClient."""
import pytest
from fastapi.testclient import TestClient

from psys.api.dependencies import get_index_service_dependency
from psys.api.main import app
from psys.services.index_service import IndexCapabilities, IndexService
from psys.utils.config import settings

PREFIX = settings.API_V1_PREFIX


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


class TestHealth:

    def test_health(self, client):
        response = client.get(f"{PREFIX}/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_root(self, client):
        body = client.get("/").json()
        assert body["name"] == settings.APP_NAME
        assert body["health"] == f"{PREFIX}/health"


class TestComputeEndpoint:

    def test_compute(self, client, genuine_traits):
        response = client.post(
            f"{PREFIX}/indices/compute",
            json={"payload": {"bf_self": genuine_traits, "bf_env": genuine_traits}},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["difference"]["value"] < 25
        assert body["self_integration"]["value"] >= 75
        assert body["reliability"]["difference"] == "high"
        assert body["confidence"]["confidence_details"]["personality_ratio"] == 50

    def test_empty_payload(self, client):
        response = client.post(f"{PREFIX}/indices/compute", json={})
        assert response.status_code == 200
        body = response.json()
        assert set(body["reliability"].values()) == {"low"}
        assert body["circularity_pot"]["needed"] == "pot8"

    def test_config_override(self, client, sample_payload):
        response = client.post(
            f"{PREFIX}/indices/compute",
            json={"payload": sample_payload, "config": {"weights": {"masking_alpha": 0.9}}},
        )
        assert response.status_code == 200

    def test_payload_must_be_object(self, client):
        response = client.post(f"{PREFIX}/indices/compute", json={"payload": [1, 2, 3]})
        assert response.status_code == 422
        assert response.json()["success"] is False
        assert response.json()["error_type"] == "ValidationError"


class TestMappingEndpoints:

    def test_map(self, client, genuine_traits):
        response = client.post(f"{PREFIX}/indices/map", json={"traits": genuine_traits})
        assert response.status_code == 200
        body = response.json()
        assert len(body["structural"]) == 8
        assert len(body["potential"]) == 8
        assert len(body["structural_sparse16"]) == 16
        assert body["structural_dimensions"][0] == "leadership"

    def test_map_requires_five_traits(self, client):
        response = client.post(f"{PREFIX}/indices/map", json={"traits": [50, 50, 50, 50]})
        assert response.status_code == 422
        assert response.json()["error_type"] == "ValidationError"

    def test_default_config(self, client):
        body = client.get(f"{PREFIX}/indices/config").json()
        assert body["weights"]["masking_alpha"] == 0.5
        assert body["thresholds"]["perfection"]["defaultT"] == 0.6


class TestErrorHandling:

    def test_failing_capability_is_bad_gateway(self, client, genuine_traits):
        def broken(traits):
            raise RuntimeError("mapper offline")

        app.dependency_overrides[get_index_service_dependency] = (
            lambda: IndexService(IndexCapabilities(traits_to_structural=broken))
        )
        try:
            response = client.post(f"{PREFIX}/indices/compute", json={"payload": {"bf_env": genuine_traits}})
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 502
        body = response.json()
        assert body["error_type"] == "CapabilityError"
        assert body["details"]["capability"] == "traits_to_structural"

    def test_unknown_route(self, client):
        response = client.get(f"{PREFIX}/nothing-here")
        assert response.status_code == 404
        assert response.json()["success"] is False

    def test_request_id_is_echoed(self, client):
        response = client.get(f"{PREFIX}/health", headers={"X-Request-ID": "abc123"})
        assert response.headers["X-Request-ID"] == "abc123"
