"""Output formatters for dependency graphs."""

import json
from typing import Dict, List

from .models import DependencyGraph, DependencyGraphEdge

# Display order of node groups in the tree format; module groups (owner ids) follow
GROUP_ORDER = ["hosts", "bidirectional", "remotes", "shared"]

EDGE_ARROWS = {
    "consumes": "→",
    "exposes": "⊃",
    "shares": "~",
}


class OutputFormatter:
    """Formatter for various output formats."""

    @staticmethod
    def format_as_json(graph: DependencyGraph) -> str:
        """Format the graph in its wire shape (nodes, edges, metadata)."""
        return json.dumps(graph.to_dict(), indent=2, ensure_ascii=False) + '\n'

    @staticmethod
    def format_as_node_link(graph: DependencyGraph) -> str:
        """Format as node-link JSON with source/target links, as force-directed renderers expect."""
        links = []
        for edge in graph.edges:
            link = edge.to_dict()
            link['source'] = link.pop('from')
            link['target'] = link.pop('to')
            links.append(link)

        data = {
            'nodes': [node.to_dict() for node in graph.nodes],
            'links': links,
            'metadata': graph.metadata.to_dict(),
        }
        return json.dumps(data, indent=2, ensure_ascii=False) + '\n'

    @staticmethod
    def format_as_list(graph: DependencyGraph) -> str:
        """Format nodes as a flat list (one per line)."""
        lines = [f"{node.id}\t{node.type}\t{node.label}" for node in graph.nodes]
        return '\n'.join(lines) + '\n' if lines else ''

    @staticmethod
    def format_as_tree(graph: DependencyGraph) -> str:
        """Format as a text listing grouped by node group, with outgoing edges under each node."""
        lines = ["Dependency Graph:", ""]

        if graph.is_empty:
            lines.append("  (no Module Federation configurations found)")

        outgoing: Dict[str, List[DependencyGraphEdge]] = {}
        for edge in graph.edges:
            outgoing.setdefault(edge.source, []).append(edge)

        labels = {node.id: node.label for node in graph.nodes}

        groups: Dict[str, list] = {}
        for node in graph.nodes:
            groups.setdefault(node.group, []).append(node)

        ordered_groups = [g for g in GROUP_ORDER if g in groups]
        ordered_groups.extend(g for g in groups if g not in GROUP_ORDER)

        for group in ordered_groups:
            header = labels.get(group, group)
            lines.append(f"[{header}]")
            for node in groups[group]:
                lines.append(f"  {node.label} ({node.type}, {node.config_type})")
                node_edges = outgoing.get(node.id, [])
                for i, edge in enumerate(node_edges):
                    connector = "└── " if i == len(node_edges) - 1 else "├── "
                    arrow = "↔" if edge.bidirectional and edge.type == "consumes" else EDGE_ARROWS.get(edge.type, "→")
                    target = labels.get(edge.target, edge.target)
                    lines.append(f"    {connector}{edge.type} {arrow} {target}")
            lines.append("")

        metadata = graph.metadata
        lines.extend([
            "Graph Statistics:",
            f"  Nodes: {len(graph.nodes)}",
            f"  Edges: {len(graph.edges)}",
            f"  Hosts: {metadata.total_hosts}",
            f"  External Remotes: {metadata.total_remotes}",
            f"  Shared Dependencies: {metadata.total_shared_deps}",
            f"  Exposed Modules: {metadata.total_exposed_modules}",
        ])

        return '\n'.join(lines) + '\n'
