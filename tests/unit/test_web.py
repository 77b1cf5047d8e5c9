"""Unit tests for the layout HTTP API."""

import pytest
from fastapi.testclient import TestClient

from topomap.model.topology import create_edge


@pytest.fixture(autouse=True)
def disable_global_limiter():
    """Disable the global rate limiter for tests."""
    from topomap.web.deps import limiter
    original_enabled = limiter.enabled
    limiter.enabled = False
    limiter.reset()
    yield
    limiter.enabled = original_enabled


@pytest.fixture
def app():
    """Create a fresh app instance with rate limiting disabled."""
    from topomap.web.app import create_app
    return create_app(rate_limit_enabled=False)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def diagram():
    return {
        "nodes": [
            {"id": "net", "type": "cidr", "data": {"label": "10.0.0.0/16", "ip": "10.0.0.0/16"}},
            {"id": "web", "type": "server", "data": {"label": "web", "ip": "10.0.1.1"}},
            {"id": "pc", "type": "pc", "data": {"label": "pc", "ip": "bogus"}},
        ],
        "edges": [],
    }


class TestLayoutApi:
    """Tests for /api/layout and /api/layouts."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_list_layouts(self, client):
        response = client.get("/api/layouts")
        assert response.status_code == 200
        names = [item["name"] for item in response.json()]
        assert "radial" in names
        assert "cidr-tree" in names

    def test_grid_layout(self, client, diagram):
        response = client.post("/api/layout", json={"layout": "grid", **diagram})
        assert response.status_code == 200
        body = response.json()
        assert body["applied"] is True
        assert body["nodes"][0]["position"] == {"x": 100.0, "y": 100.0}

    def test_cidr_tree_returns_inferred_edges(self, client, diagram):
        response = client.post("/api/layout", json={"layout": "cidr-tree", **diagram})
        edges = response.json()["edges"]
        assert edges == [
            {
                "id": "auto-ip-web-net",
                "source": "net",
                "target": "web",
                "data": {"label": "contains", "type": "contains", "auto": True},
            }
        ]

    def test_layout_keeps_editor_fields(self, client, diagram):
        diagram["nodes"][1]["width"] = 180
        diagram["nodes"][1]["data"]["os"] = "linux"
        diagram["edges"] = [
            {"id": "e1", "source": "net", "target": "web", "sourceHandle": "bottom", "data": {}},
        ]
        response = client.post("/api/layout", json={"layout": "radial", **diagram})
        body = response.json()
        assert body["nodes"][1]["width"] == 180
        assert body["nodes"][1]["data"]["os"] == "linux"
        assert body["edges"][0]["sourceHandle"] == "bottom"

    def test_dangling_edges_dropped(self, client, diagram):
        diagram["edges"] = [create_edge("net", "gone").model_dump(by_alias=True)]
        response = client.post("/api/layout", json={"layout": "grid", **diagram})
        assert response.json()["edges"] == []

    def test_unknown_layout_returns_input(self, client, diagram):
        response = client.post("/api/layout", json={"layout": "spiral", **diagram})
        assert response.status_code == 200
        body = response.json()
        assert body["applied"] is False
        assert all(n["position"] == {"x": 0.0, "y": 0.0} for n in body["nodes"])

    def test_invalid_body(self, client):
        response = client.post("/api/layout", json={"layout": "grid", "nodes": [{"id": "x"}]})
        assert response.status_code == 422


class TestHierarchyApi:
    """Tests for /api/hierarchy and /api/stats."""

    def test_hierarchy(self, client, diagram):
        response = client.post("/api/hierarchy", json=diagram)
        assert response.status_code == 200
        assert response.json()["parent_of"] == {"web": "net"}

    def test_stats(self, client, diagram):
        response = client.post("/api/stats", json=diagram)
        body = response.json()
        assert body["stats"]["total_nodes"] == 3
        assert body["stats"]["total_ips"] == 1
        assert body["validation"]["pc"]["errors"] == ["Invalid IP: bogus"]
