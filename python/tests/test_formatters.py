"""Tests for graph output formats."""

import json

import pytest

from mfgraph.formatters import OutputFormatter
from mfgraph.graph_builder import build_dependency_graph
from mfgraph.models import ApplicationConfig, DependencyGraph, ExposeRef, RemoteRef, SharedDependencyRef


@pytest.fixture
def graph():
    return build_dependency_graph({"/work": [
        ApplicationConfig(
            name="host",
            remotes=[RemoteRef(name="app2", url="http://localhost:3002/remoteEntry.js")],
            shared=[SharedDependencyRef(name="react", version="18.0.0")],
            root_path="/work",
        ),
        ApplicationConfig(
            name="app2",
            exposes=[ExposeRef(name="Button", path="./src/Button")],
            shared=[SharedDependencyRef(name="react")],
            root_path="/work",
        ),
    ]})


class TestOutputFormatter:

    def test_json_round_trip(self, graph):
        data = json.loads(OutputFormatter.format_as_json(graph))

        assert set(data) == {"nodes", "edges", "metadata"}
        consumes = [e for e in data["edges"] if e["type"] == "consumes"]
        assert consumes[0]["from"] != consumes[0]["to"]
        assert data["metadata"]["totalHosts"] == 2
        assert data["metadata"]["totalSharedDeps"] == 1
        assert DependencyGraph.from_dict(data).to_dict() == data

    def test_json_omits_unset_fields(self, graph):
        data = json.loads(OutputFormatter.format_as_json(graph))
        module = next(n for n in data["nodes"] if n["type"] == "exposed-module")
        assert "url" not in module
        assert "exposedModules" not in module
        assert module["configType"] == "webpack"

    def test_node_link(self, graph):
        data = json.loads(OutputFormatter.format_as_node_link(graph))

        assert len(data["links"]) == len(graph.edges)
        for link in data["links"]:
            assert "source" in link and "target" in link
            assert "from" not in link and "to" not in link

    def test_list(self, graph):
        lines = OutputFormatter.format_as_list(graph).splitlines()
        assert len(lines) == len(graph.nodes)
        assert "shared-react\tshared-dependency\treact" in lines

    def test_list_empty(self):
        assert OutputFormatter.format_as_list(DependencyGraph()) == ""

    def test_tree(self, graph):
        output = OutputFormatter.format_as_tree(graph)

        assert output.startswith("Dependency Graph:\n")
        assert "[hosts]" in output
        assert "[bidirectional]" in output
        assert "[shared]" in output
        assert "[app2]" in output  # module group shown with the owner's label
        assert "consumes → app2" in output
        assert "exposes ⊃ Button" in output
        assert "  Exposed Modules: 1" in output

    def test_tree_empty(self):
        output = OutputFormatter.format_as_tree(DependencyGraph())
        assert "no Module Federation configurations found" in output
        assert "  Nodes: 0" in output
