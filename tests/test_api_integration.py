"""
Integration tests for the realm generation API.
"""

import pytest
from fastapi.testclient import TestClient

from realm_gen.api.main import app

NO_LANDMARKS = {
    "dwelling": 0, "sanctum": 0, "monument": 0, "hazard": 0, "curse": 0, "ruins": 0,
}


@pytest.fixture
def client():
    return TestClient(app)


class TestServiceEndpoints:
    """Test informational endpoints."""

    def test_root(self, client):
        """Test the root endpoint."""
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "running"

    def test_health(self, client):
        """Test the health check."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_defaults(self, client):
        """Test the default options in camelCase."""
        data = client.get("/defaults").json()
        assert data["numHoldings"] == 4
        assert data["mythMinDistance"] == 3
        assert data["highlandFormation"] == "linear"

    def test_templates(self, client):
        """Test the template list."""
        data = client.get("/templates").json()
        assert [t["id"] for t in data] == ["balanced", "jagged", "lush", "sunkenCaldera"]
        assert data[1]["name"] == "Jagged Peaks"

    def test_template_overrides_camel_case(self, client):
        """Test that template overrides use the same keys as the options."""
        jagged = client.get("/templates").json()[1]["options"]
        assert jagged["highlandFormation"] == "circle"
        assert jagged["terrainBiases"]["peaks"] == 25
        assert "highland_formation" not in jagged
        defaults = client.get("/defaults").json()
        assert set(jagged) <= set(defaults)

    def test_template_options(self, client):
        """Test full options of a template."""
        response = client.get("/templates/jagged")
        assert response.status_code == 200
        data = response.json()
        assert data["highlandFormation"] == "circle"
        assert data["terrainBiases"]["peaks"] == 25

    def test_unknown_template(self, client):
        """Test that an unknown template is a 404."""
        assert client.get("/templates/nowhere").status_code == 404


class TestGenerateEndpoint:
    """Test realm generation over HTTP."""

    def test_generate_hex(self, client):
        """Test a small hex realm."""
        response = client.post(
            "/realms/generate",
            json={
                "shape": {"shape": "hex", "radius": 3},
                "options": {"numHoldings": 1, "numMyths": 0, "landmarks": NO_LANDMARKS},
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["shape"] == "hex"
        assert data["radius"] == 3
        assert len(data["hexes"]) == 37
        assert data["myths"] == []
        holdings = [h for h in data["hexes"] if "holding" in h]
        assert len(holdings) == 1
        assert {"q": holdings[0]["q"], "r": holdings[0]["r"]} == data["seatOfPower"]

    def test_generate_square_with_seed(self, client):
        """Test that a seeded request is reproducible."""
        body = {
            "shape": {"shape": "square", "width": 4, "height": 4},
            "options": {"generateBarriers": True, "seed": "api"},
        }
        first = client.post("/realms/generate", json=body)
        second = client.post("/realms/generate", json=body)
        assert first.status_code == 200
        assert len(first.json()["hexes"]) == 16
        assert first.json() == second.json()

    def test_default_options(self, client):
        """Test that options may be omitted."""
        response = client.post("/realms/generate", json={"shape": {"shape": "hex", "radius": 6}})
        assert response.status_code == 200
        assert len(response.json()["myths"]) == 6

    def test_myth_failure(self, client):
        """Test that impossible myth spacing is reported as 422."""
        response = client.post(
            "/realms/generate",
            json={
                "shape": {"shape": "hex", "radius": 3},
                "options": {"numMyths": 10, "mythMinDistance": 7},
            },
        )
        assert response.status_code == 422
        assert "Could not place all myths" in response.json()["detail"]

    def test_radius_limit(self, client):
        """Test that oversized grids are rejected."""
        response = client.post(
            "/realms/generate", json={"shape": {"shape": "hex", "radius": 500}}
        )
        assert response.status_code == 400

    def test_rectangle_limit(self, client):
        """Test that oversized rectangles are rejected."""
        response = client.post(
            "/realms/generate",
            json={"shape": {"shape": "square", "width": 1000, "height": 2}},
        )
        assert response.status_code == 400

    def test_invalid_body(self, client):
        """Test request validation."""
        response = client.post(
            "/realms/generate", json={"shape": {"shape": "circle", "radius": 3}}
        )
        assert response.status_code == 422

    def test_invalid_options(self, client):
        """Test option validation."""
        response = client.post(
            "/realms/generate",
            json={"shape": {"shape": "hex", "radius": 3}, "options": {"numMyths": -1}},
        )
        assert response.status_code == 422
