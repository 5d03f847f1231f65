"""Tests for the HTTP API."""

import math

from fastapi.testclient import TestClient

from py_sketchbook.api.main import app
from py_sketchbook.config import settings


class TestAPIBasics:
    """Test service and catalog endpoints."""

    def setup_method(self):
        """Set up test client."""
        self.client = TestClient(app)

    def test_root(self):
        response = self.client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "running"

    def test_health(self):
        response = self.client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_patterns(self):
        response = self.client.get("/patterns")
        assert response.status_code == 200
        names = [pattern["name"] for pattern in response.json()]
        assert "space-colonization" in names

    def test_pattern_by_name(self):
        response = self.client.get("/patterns/i-spy")
        assert response.status_code == 200
        assert set(response.json()["knobs"]) == {"n", "unity"}

    def test_unknown_pattern(self):
        response = self.client.get("/patterns/mandala")
        assert response.status_code == 404


class TestRoomsEndpoint:
    """Test the /rooms endpoint."""

    def setup_method(self):
        self.client = TestClient(app)

    def test_rooms_cover_grid(self):
        response = self.client.post("/rooms", json={"n": 6, "unity": 0.5, "seed": "rooms"})
        assert response.status_code == 200
        data = response.json()
        cells = [tuple(cell) for room in data["rooms"] for cell in room["cells"]]
        assert len(cells) == 36
        assert len(set(cells)) == 36
        assert data["merge_attempts"] == 18

    def test_seed_is_reproducible(self):
        payload = {"n": 8, "unity": 0.7, "seed": "same"}
        first = self.client.post("/rooms", json=payload).json()
        second = self.client.post("/rooms", json=payload).json()
        assert first == second

    def test_quads_only(self):
        response = self.client.post(
            "/rooms", json={"n": 6, "unity": 0.75, "quads_only": True, "seed": "quads"}
        )
        assert response.status_code == 200
        for room in response.json()["rooms"]:
            area = (room["max_r"] - room["min_r"] + 1) * (room["max_c"] - room["min_c"] + 1)
            assert len(room["cells"]) == area

    def test_invalid_unity(self):
        response = self.client.post("/rooms", json={"n": 4, "unity": 2})
        assert response.status_code == 422

    def test_grid_too_large(self):
        response = self.client.post("/rooms", json={"n": settings.max_grid_size + 1})
        assert response.status_code == 422


class TestGrowthEndpoints:
    """Test the tree and venation endpoints."""

    def setup_method(self):
        self.client = TestClient(app)

    def test_tree(self):
        response = self.client.post(
            "/trees",
            json={"num_leaves": 200, "ticks": 20, "width": 300, "height": 300, "seed": "tree"},
        )
        assert response.status_code == 200
        data = response.json()
        assert len(data["branches"]) > 0
        start = data["branches"][0][0]
        assert (start["x"], start["y"]) == (0, 0)

    def test_tree_unknown_leaf_mode(self):
        response = self.client.post("/trees", json={"leaf_mode": "spiral"})
        assert response.status_code == 422

    def test_tree_too_many_ticks(self):
        response = self.client.post("/trees", json={"ticks": settings.max_ticks + 1})
        assert response.status_code == 422

    def test_tree_too_many_leaves(self):
        response = self.client.post("/trees", json={"num_leaves": settings.max_leaves + 1})
        assert response.status_code == 422

    def test_venation(self):
        border = [[i * 2 * math.pi / 24, 60] for i in range(24)]
        response = self.client.post(
            "/venation", json={"border": border, "ticks": 10, "seed": "veins"}
        )
        assert response.status_code == 200
        branches = response.json()["branches"]
        assert len(branches) >= 1
        assert len(branches[0]) > 1

    def test_venation_short_border(self):
        response = self.client.post("/venation", json={"border": [[0, 10], [1, 10]]})
        assert response.status_code == 422

    def test_venation_bad_variance(self):
        border = [[0, 10], [2, 10], [4, 10]]
        response = self.client.post("/venation", json={"border": border, "variance": 1.5})
        assert response.status_code == 422


class TestIntersectionEndpoint:
    """Test the /geometry/intersection endpoint."""

    def setup_method(self):
        self.client = TestClient(app)

    def test_crossing(self):
        payload = {
            "line_a": [{"x": 0, "y": 0}, {"x": 10, "y": 10}],
            "line_b": [{"x": 0, "y": 10}, {"x": 10, "y": 0}],
        }
        response = self.client.post("/geometry/intersection", json=payload)
        assert response.status_code == 200
        assert response.json()["point"] == {"x": 5, "y": 5}

    def test_parallel(self):
        payload = {
            "line_a": [{"x": 0, "y": 0}, {"x": 10, "y": 0}],
            "line_b": [{"x": 0, "y": 5}, {"x": 10, "y": 5}],
        }
        response = self.client.post("/geometry/intersection", json=payload)
        assert response.json()["point"] is None
