"""Human-readable detail projection of a single graph node (shown when a node is clicked)."""

from dataclasses import dataclass, field
from typing import List, Tuple

from .models import DependencyGraphNode


@dataclass
class NodeDetails:
    """Flat, ordered description of a node."""

    title: str
    node_type: str
    lines: List[Tuple[str, str]] = field(default_factory=list)

    def to_markdown(self) -> str:
        parts = [f"**{self.title}** ({self.node_type})", ""]
        parts.extend(f"**{key}:** {value}" for key, value in self.lines)
        return '\n'.join(parts) + '\n'

    def to_text(self) -> str:
        parts = [f"{self.title} ({self.node_type})"]
        parts.extend(f"  {key}: {value}" for key, value in self.lines)
        return '\n'.join(parts) + '\n'


def describe_node(node: DependencyGraphNode) -> NodeDetails:
    """Project a node into its detail record. Fields that are not set are left out."""
    lines: List[Tuple[str, str]] = [("Config Type", node.config_type)]

    if node.url:
        lines.append(("URL", node.url))
    if node.version:
        lines.append(("Version", node.version))
    if node.exposed_modules:
        lines.append(("Exposed Modules", ', '.join(node.exposed_modules)))
    if node.shared_dependencies:
        lines.append(("Shared Dependencies", ', '.join(node.shared_dependencies)))
    if node.size and node.size > 1:
        lines.append(("Connections", str(node.size)))
    if node.status:
        lines.append(("Status", node.status))
    if node.group:
        lines.append(("Group", node.group))

    return NodeDetails(title=node.label, node_type=node.type.replace('-', ' '), lines=lines)
