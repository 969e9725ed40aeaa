"""mfgraph - consolidated dependency graphs for Module Federation applications."""

__version__ = "1.0.0"

from .models import (
    ApplicationConfig,
    RemoteRef,
    ExposeRef,
    SharedDependencyRef,
    DependencyGraphNode,
    DependencyGraphEdge,
    DependencyGraph,
    GraphMetadata,
)
from .graph_builder import DependencyGraphBuilder, GraphOptions, build_dependency_graph
from .details import NodeDetails, describe_node

__all__ = [
    "__version__",
    "ApplicationConfig",
    "RemoteRef",
    "ExposeRef",
    "SharedDependencyRef",
    "DependencyGraphNode",
    "DependencyGraphEdge",
    "DependencyGraph",
    "GraphMetadata",
    "DependencyGraphBuilder",
    "GraphOptions",
    "build_dependency_graph",
    "NodeDetails",
    "describe_node",
]
