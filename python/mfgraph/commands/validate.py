"""Validate command for checking the structure of a dependency graph."""

import logging
from collections import Counter
from typing import List, Tuple

from ..ids import EXTERNAL_PREFIX
from ..models import DependencyGraph
from ..parsers import FileParser

logger = logging.getLogger(__name__)


def check_graph(graph: DependencyGraph) -> Tuple[List[str], List[str], List[str]]:
    """Check graph invariants.

    Returns:
        Tuple of (errors, warnings, checks)
    """
    errors: List[str] = []
    warnings: List[str] = []
    checks: List[str] = []

    # Node ids must be unique
    id_counts = Counter(node.id for node in graph.nodes)
    duplicates = sorted(node_id for node_id, count in id_counts.items() if count > 1)
    if duplicates:
        errors.append(f"Duplicate node ids: {', '.join(duplicates)}")
    checks.append(f"nodes: {len(graph.nodes)} total, {len(id_counts)} unique ids")

    # Every edge must reference existing nodes
    dangling = 0
    for edge in graph.edges:
        for endpoint in (edge.source, edge.target):
            if endpoint not in id_counts:
                errors.append(f"Edge {edge.source} -> {edge.target} ({edge.type}) references unknown node {endpoint}")
                dangling += 1
    if not dangling:
        checks.append(f"edges: {len(graph.edges)} total, all endpoints present")

    # At most one consumes edge per unordered pair
    pair_counts = Counter(edge.pair_key() for edge in graph.edges if edge.type == "consumes")
    repeated = sorted(pair for pair, count in pair_counts.items() if count > 1)
    if repeated:
        errors.append(f"{len(repeated)} node pair(s) joined by more than one consumes edge")
    else:
        checks.append(f"consumes edges: {len(pair_counts)} distinct pairs")

    # Shared dependency hubs only exist for libraries used by two or more apps
    for node in graph.nodes:
        if node.type == "shared-dependency" and node.size < 2:
            warnings.append(f"Shared dependency {node.label} is used by only {node.size} app(s)")
        if node.size < 1:
            errors.append(f"Node {node.id} has size {node.size}")

    # Metadata must agree with the node set
    metadata = graph.metadata
    external = sum(1 for n in graph.nodes if n.group == "remotes" and n.id.startswith(EXTERNAL_PREFIX))
    shared = sum(1 for n in graph.nodes if n.type == "shared-dependency")
    modules = sum(1 for n in graph.nodes if n.type == "exposed-module")
    hosts = sum(1 for n in graph.nodes if n.type == "host")
    for name, expected, actual in (
        ("totalHosts", hosts, metadata.total_hosts),
        ("totalRemotes", external, metadata.total_remotes),
        ("totalSharedDeps", shared, metadata.total_shared_deps),
        ("totalExposedModules", modules, metadata.total_exposed_modules),
    ):
        if expected != actual:
            warnings.append(f"metadata.{name} is {actual} but the graph has {expected}")
        else:
            checks.append(f"metadata.{name}: {actual}")

    return errors, warnings, checks


def validate_graph(graph_path: str) -> bool:
    """Validate a saved dependency graph and print the results. Returns True when it has no errors."""
    graph = FileParser.parse_graph_file(graph_path)
    errors, warnings, checks = check_graph(graph)
    logger.info(f"Validated {graph_path}: {len(errors)} error(s), {len(warnings)} warning(s)")

    print("Dependency Graph Validation Results:")
    print(f"  File: {graph_path}")
    print()

    print("Validation Checks:")
    for check in checks:
        print(f"  ✓ {check}")

    if errors:
        print()
        print("Errors:")
        for err in errors:
            print(f"  ✗ {err}")
    if warnings:
        print()
        print("Warnings:")
        for warn in warnings:
            print(f"  ⚠ {warn}")

    print()
    if not errors and not warnings:
        print("Result: ✓ Valid dependency graph with no issues")
    elif not errors:
        print(f"Result: ✓ Valid dependency graph with {len(warnings)} warning(s)")
    else:
        print(f"Result: ✗ Invalid dependency graph - {len(errors)} error(s)")

    return not errors
