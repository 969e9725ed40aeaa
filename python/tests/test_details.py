"""Tests for the node detail projection."""

from mfgraph.details import describe_node
from mfgraph.models import DependencyGraphNode


class TestDescribeNode:

    def test_minimal_node(self):
        node = DependencyGraphNode(id="x", label="shell", type="host", config_type="webpack", group="")
        details = describe_node(node)

        assert details.title == "shell"
        assert details.node_type == "host"
        assert details.lines == [("Config Type", "webpack")]

    def test_full_node_in_order(self):
        node = DependencyGraphNode(
            id="x",
            label="catalog",
            type="host",
            config_type="vite",
            url="http://localhost:3001/remoteEntry.js",
            version="1.2.0",
            exposed_modules=["List", "Card"],
            shared_dependencies=["react", "react-dom"],
            size=4,
            status="running",
            group="bidirectional",
        )
        details = describe_node(node)

        assert [key for key, _ in details.lines] == [
            "Config Type", "URL", "Version", "Exposed Modules",
            "Shared Dependencies", "Connections", "Status", "Group",
        ]
        assert dict(details.lines)["Exposed Modules"] == "List, Card"
        assert dict(details.lines)["Connections"] == "4"

    def test_type_humanized(self):
        node = DependencyGraphNode(id="m", label="Button", type="exposed-module", config_type="webpack")
        assert describe_node(node).node_type == "exposed module"

    def test_size_one_and_empty_lists_omitted(self):
        node = DependencyGraphNode(
            id="x", label="shell", type="host", config_type="webpack",
            size=1, exposed_modules=[], shared_dependencies=[], group="hosts",
        )
        keys = [key for key, _ in describe_node(node).lines]
        assert keys == ["Config Type", "Group"]

    def test_markdown(self):
        node = DependencyGraphNode(
            id="shared-react", label="react", type="shared-dependency", config_type="webpack",
            version="18.0.0", size=2, group="shared",
        )
        markdown = describe_node(node).to_markdown()

        assert markdown.startswith("**react** (shared dependency)\n")
        assert "**Version:** 18.0.0\n" in markdown
        assert "**Connections:** 2\n" in markdown

    def test_does_not_modify_node(self):
        node = DependencyGraphNode(id="x", label="shell", type="host", config_type="webpack")
        before = node.to_dict()
        describe_node(node)
        assert node.to_dict() == before
