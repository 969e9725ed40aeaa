"""Stats command for showing dependency graph statistics."""

import logging
from collections import Counter

from ..parsers import FileParser

logger = logging.getLogger(__name__)


def show_stats(graph_path: str) -> None:
    """Show statistics about a saved dependency graph.

    Args:
        graph_path: Path or URL of a graph written with --format json
    """
    graph = FileParser.parse_graph_file(graph_path)
    metadata = graph.metadata

    node_types = Counter(node.type for node in graph.nodes)
    edge_types = Counter(edge.type for edge in graph.edges)
    bidirectional_edges = sum(1 for e in graph.edges if e.type == "consumes" and e.bidirectional)

    print("Dependency Graph Statistics:")
    print(f"  Total Nodes: {len(graph.nodes)}")
    print(f"  Total Edges: {len(graph.edges)}")
    print()
    print("Applications:")
    print(f"  Hosts: {metadata.total_hosts}")
    print(f"    Consumers: {metadata.consumer_hosts}")
    print(f"    Providers: {metadata.provider_hosts}")
    print(f"    Bidirectional: {metadata.bidirectional_apps}")
    print(f"    Standalone: {metadata.standalone_apps}")
    print(f"  External Remotes: {metadata.total_remotes}")
    print(f"  Shared Dependencies: {metadata.total_shared_deps}")
    print(f"  Exposed Modules: {metadata.total_exposed_modules}")

    if node_types:
        print()
        print("Nodes by type:")
        for node_type, count in sorted(node_types.items()):
            print(f"  {node_type}: {count}")

    if edge_types:
        print()
        print("Edges by type:")
        for edge_type, count in sorted(edge_types.items()):
            suffix = f" ({bidirectional_edges} bidirectional)" if edge_type == "consumes" and bidirectional_edges else ""
            print(f"  {edge_type}: {count}{suffix}")
