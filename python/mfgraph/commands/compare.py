"""Compare command for comparing two dependency graphs."""

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, List, Set, Tuple

from ..models import DependencyGraph
from ..parsers import FileParser

logger = logging.getLogger(__name__)

EdgeTriple = Tuple[str, str, str]

MAX_LISTED = 10


@dataclass
class GraphDiff:
    """Order-independent difference between two graphs."""

    only_nodes1: Set[str] = field(default_factory=set)
    only_nodes2: Set[str] = field(default_factory=set)
    only_edges1: Set[EdgeTriple] = field(default_factory=set)
    only_edges2: Set[EdgeTriple] = field(default_factory=set)
    group_changes: Dict[str, Tuple[str, str]] = field(default_factory=dict)
    common_nodes: int = 0
    common_edges: int = 0

    @property
    def is_identical(self) -> bool:
        return not (self.only_nodes1 or self.only_nodes2 or self.only_edges1
                    or self.only_edges2 or self.group_changes)


def _edge_triples(graph: DependencyGraph) -> Set[EdgeTriple]:
    return {(edge.source, edge.target, edge.type) for edge in graph.edges}


def diff_graphs(graph1: DependencyGraph, graph2: DependencyGraph) -> GraphDiff:
    """Compute the node, edge and group differences between two graphs."""
    groups1 = {node.id: node.group for node in graph1.nodes}
    groups2 = {node.id: node.group for node in graph2.nodes}
    edges1 = _edge_triples(graph1)
    edges2 = _edge_triples(graph2)

    common = groups1.keys() & groups2.keys()
    return GraphDiff(
        only_nodes1=set(groups1) - set(groups2),
        only_nodes2=set(groups2) - set(groups1),
        only_edges1=edges1 - edges2,
        only_edges2=edges2 - edges1,
        group_changes={
            node_id: (groups1[node_id], groups2[node_id])
            for node_id in common if groups1[node_id] != groups2[node_id]
        },
        common_nodes=len(common),
        common_edges=len(edges1 & edges2),
    )


def _print_limited(items: List[str]) -> None:
    for i, item in enumerate(items):
        if i >= MAX_LISTED:
            print(f"  ... and {len(items) - MAX_LISTED} more")
            break
        print(f"  - {item}")


def compare_graphs(graph1_path: str, graph2_path: str) -> GraphDiff:
    """Compare two saved graphs and print the differences.

    Args:
        graph1_path: Path to first graph file
        graph2_path: Path to second graph file
    """
    graph1 = FileParser.parse_graph_file(graph1_path)
    graph2 = FileParser.parse_graph_file(graph2_path)
    diff = diff_graphs(graph1, graph2)
    logger.debug(f"Compared {graph1_path} with {graph2_path}: identical={diff.is_identical}")

    name1 = os.path.basename(graph1_path)
    name2 = os.path.basename(graph2_path)

    print("Dependency Graph Comparison:")
    print(f"  {graph1_path}: {len(graph1.nodes)} nodes, {len(graph1.edges)} edges")
    print(f"  {graph2_path}: {len(graph2.nodes)} nodes, {len(graph2.edges)} edges")
    print()
    print(f"  Common nodes: {diff.common_nodes}")
    print(f"  Common edges: {diff.common_edges}")
    print(f"  Group changes: {len(diff.group_changes)}")
    print(f"  Nodes only in {name1}: {len(diff.only_nodes1)}")
    print(f"  Nodes only in {name2}: {len(diff.only_nodes2)}")
    print(f"  Edges only in {name1}: {len(diff.only_edges1)}")
    print(f"  Edges only in {name2}: {len(diff.only_edges2)}")

    if diff.group_changes:
        print()
        print("Group changes:")
        _print_limited([f"{node_id}: {old} -> {new}" for node_id, (old, new) in sorted(diff.group_changes.items())])

    for title, nodes in ((f"Nodes only in {name1}:", diff.only_nodes1), (f"Nodes only in {name2}:", diff.only_nodes2)):
        if nodes:
            print()
            print(title)
            _print_limited(sorted(nodes))

    for title, edges in ((f"Edges only in {name1}:", diff.only_edges1), (f"Edges only in {name2}:", diff.only_edges2)):
        if edges:
            print()
            print(title)
            _print_limited([f"{src} -[{kind}]-> {dst}" for src, dst, kind in sorted(edges)])

    if diff.is_identical:
        print()
        print("Result: graphs are identical")

    return diff
