"""Unit tests for the topology document loader, inventory and settings."""

import json

import pytest

from topomap.config import TopomapSettings, get_settings
from topomap.errors import ConfigValidationError, DocumentLoadError, DocumentValidationError
from topomap.model.inventory import graph_stats, network_stats, validate_node_addresses
from topomap.model.loader import DocumentLoader, TopologyDocument
from topomap.model.topology import EdgeKind, NodeType, create_edge, create_node

EDITOR_EXPORT = {
    "version": "1.0",
    "timestamp": "2024-05-01T12:00:00.000Z",
    "nodes": [
        {
            "id": "net",
            "type": "cidr",
            "position": {"x": 10, "y": 20},
            "data": {"label": "10.0.0.0/8", "ip": "10.0.0.0/8", "tags": {}},
        },
        {
            "id": "web",
            "type": "server",
            "position": {"x": 0, "y": 0},
            "data": {
                "label": "Web",
                "ip": "10.0.0.5, 10.0.0.6",
                "subType": "web",
                "tags": {"os": ["linux"]},
            },
        },
    ],
    "edges": [
        {
            "id": "auto-ip-web-net",
            "source": "net",
            "target": "web",
            "data": {"label": "contains", "type": "contains", "auto": True},
        }
    ],
}


class TestDocumentLoader:
    """Tests for DocumentLoader."""

    @pytest.fixture
    def loader(self):
        return DocumentLoader()

    def test_loads_editor_export(self, loader):
        doc = loader.loads(json.dumps(EDITOR_EXPORT))
        assert doc.version == "1.0"
        web = doc.nodes[1]
        assert web.type == NodeType.SERVER
        assert web.data.ip_or_cidr == "10.0.0.5, 10.0.0.6"
        assert web.data.sub_type == "web"
        assert web.data.tags == {"os": ["linux"]}
        edge = doc.edges[0]
        assert edge.data.kind == EdgeKind.CONTAINS.value
        assert edge.inferred is True

    def test_dump_uses_editor_field_names(self, loader):
        doc = loader.loads(json.dumps(EDITOR_EXPORT))
        data = json.loads(loader.dump(doc))
        assert data["nodes"][0]["data"]["ip"] == "10.0.0.0/8"
        assert data["nodes"][1]["data"]["subType"] == "web"
        assert data["edges"][0]["data"]["auto"] is True
        assert data["edges"][0]["data"]["type"] == "contains"

    def test_editor_fields_survive_round_trip(self, loader):
        data = json.loads(json.dumps(EDITOR_EXPORT))
        data["nodes"][1].update({"width": 180, "height": 80, "selected": False})
        data["nodes"][1]["data"]["os"] = "debian"
        data["edges"][0].update({"sourceHandle": "bottom", "animated": True})
        data["edges"][0]["data"]["color"] = "#999"

        out = json.loads(loader.dump(loader.loads(json.dumps(data))))

        web = out["nodes"][1]
        assert web["width"] == 180
        assert web["height"] == 80
        assert web["selected"] is False
        assert web["data"]["os"] == "debian"
        assert web["data"]["subType"] == "web"
        edge = out["edges"][0]
        assert edge["sourceHandle"] == "bottom"
        assert edge["animated"] is True
        assert edge["data"]["color"] == "#999"

    def test_layout_keeps_editor_fields(self, loader):
        from topomap.layout import apply_layout

        data = json.loads(json.dumps(EDITOR_EXPORT))
        data["nodes"][0]["width"] = 180
        data["edges"][0]["sourceHandle"] = "bottom"
        doc = loader.loads(json.dumps(data))

        result = apply_layout(doc.nodes, doc.edges, "grid")
        out = json.loads(loader.dump(TopologyDocument(nodes=result.nodes, edges=result.edges)))

        assert out["nodes"][0]["width"] == 180
        assert out["nodes"][0]["position"] == {"x": 100.0, "y": 100.0}
        assert out["edges"][0]["sourceHandle"] == "bottom"

    def test_null_labels(self, loader):
        data = json.loads(json.dumps(EDITOR_EXPORT))
        data["nodes"][1]["data"]["label"] = None
        data["nodes"][1]["data"]["description"] = None
        data["edges"][0]["data"]["label"] = None

        doc = loader.loads(json.dumps(data))

        assert doc.nodes[1].data.label == ""
        assert doc.nodes[1].label == "web"
        assert doc.edges[0].data.label == ""

    @pytest.mark.parametrize("missing", ["nodes", "edges"])
    def test_missing_arrays(self, loader, missing):
        data = dict(EDITOR_EXPORT)
        del data[missing]
        with pytest.raises(DocumentValidationError, match=f"missing {missing} array"):
            loader.loads(json.dumps(data))

    def test_invalid_json(self, loader):
        with pytest.raises(DocumentLoadError):
            loader.loads("{not json")

    def test_not_a_mapping(self, loader):
        with pytest.raises(DocumentLoadError):
            loader.loads("[]")

    def test_invalid_node_type(self, loader):
        data = json.loads(json.dumps(EDITOR_EXPORT))
        data["nodes"][0]["type"] = "toaster"
        with pytest.raises(DocumentValidationError):
            loader.loads(json.dumps(data))

    def test_duplicate_node_ids(self, loader):
        data = json.loads(json.dumps(EDITOR_EXPORT))
        data["nodes"][1]["id"] = "net"
        with pytest.raises(DocumentValidationError, match="Duplicate node id"):
            loader.loads(json.dumps(data))

    def test_file_not_found(self, loader, tmp_path):
        with pytest.raises(DocumentLoadError):
            loader.load(tmp_path / "missing.json")

    def test_save_and_load_yaml(self, loader, tmp_path):
        doc = TopologyDocument(
            nodes=[create_node("pc", "pc", label="Desk", ip="192.168.1.4")],
            edges=[create_edge("pc", "pc")],
        )
        path = tmp_path / "diagram.yaml"
        loader.save(doc, path)
        loaded = loader.load(path)
        assert loaded.nodes == doc.nodes
        assert loaded.edges == doc.edges

    def test_new_document_defaults(self):
        doc = TopologyDocument()
        assert doc.version == "1.0"
        assert doc.timestamp.endswith("Z")


class TestInventory:
    """Tests for asset statistics and address validation."""

    @pytest.fixture
    def nodes(self):
        return [
            create_node("net", "cidr", ip="10.0.0.0/8"),
            create_node("web", "server", ip="10.0.0.5 10.0.0.6"),
            create_node("pc", "pc", ip="10.0.0.7"),
            create_node("sw", "device"),
        ]

    def test_network_stats(self, nodes):
        stats = network_stats(nodes)
        assert stats.total_nodes == 4
        assert stats.cidr_count == 1
        assert stats.server_count == 1
        assert stats.pc_count == 1
        assert stats.device_count == 1
        assert stats.total_ips == 3

    def test_graph_stats(self, nodes):
        stats = graph_stats(nodes, [create_edge("web", "pc")])
        assert stats["total_edges"] == 1
        assert stats["nodes_by_type"] == {"cidr": 1, "server": 1, "pc": 1, "device": 1}

    def test_validate_host_addresses(self):
        node = create_node("web", "server", ip="10.0.0.1, 300.1.1.1;web01")
        result = validate_node_addresses(node)
        assert not result.valid
        assert result.addresses == ["10.0.0.1"]
        assert result.errors == ["Invalid IP: 300.1.1.1", "Invalid IP: web01"]

    def test_validate_empty_address(self):
        assert validate_node_addresses(create_node("sw", "device")).valid

    def test_validate_block(self):
        assert validate_node_addresses(create_node("n", "cidr", ip="10.0.0.0/8")).valid
        result = validate_node_addresses(create_node("n", "cidr", ip="10.0.0.0/99"))
        assert result.errors == ["Invalid CIDR: 10.0.0.0/99"]


class TestSettings:
    """Tests for TopomapSettings."""

    def test_defaults(self, monkeypatch):
        for key in ("DEFAULT_LAYOUT", "FORCE_ITERATIONS", "GRID_COLUMNS", "LOG_LEVEL"):
            monkeypatch.delenv(f"TOPOMAP_{key}", raising=False)
        settings = TopomapSettings(_env_file=None)
        assert settings.default_layout == "cidr-tree"
        assert settings.force_iterations == 100
        assert settings.grid_columns == 0

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("TOPOMAP_FORCE_ITERATIONS", "250")
        monkeypatch.setenv("TOPOMAP_LOG_LEVEL", "debug")
        settings = TopomapSettings(_env_file=None)
        assert settings.force_iterations == 250
        assert settings.log_level == "DEBUG"

    def test_invalid_settings(self, monkeypatch):
        monkeypatch.setenv("TOPOMAP_LOG_LEVEL", "chatty")
        with pytest.raises(ConfigValidationError):
            get_settings()
