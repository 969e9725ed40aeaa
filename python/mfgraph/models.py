"""Core data models for mfgraph."""

from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any, Tuple

from .ids import pair_key as unordered_pair_key


@dataclass
class RemoteRef:
    """A remote an application consumes, identified by name only."""

    name: str
    url: Optional[str] = None
    config_type: Optional[str] = None  # webpack, vite, modernjs


@dataclass
class ExposeRef:
    """A module an application makes available to consumers."""

    name: str
    path: str = ""


@dataclass
class SharedDependencyRef:
    """A library an application declares as shareable."""

    name: str
    version: Optional[str] = None
    required_version: Optional[str] = None
    singleton: Optional[bool] = None
    eager: Optional[bool] = None

    def populated_fields(self) -> int:
        """Count declared fields; used to pick the most detailed declaration."""
        values = (self.name, self.version, self.required_version, self.singleton, self.eager)
        return sum(1 for value in values if value is not None and value != "")

    @property
    def effective_version(self) -> Optional[str]:
        return self.version or self.required_version


@dataclass
class ApplicationConfig:
    """Module Federation configuration of one application, as extracted from its build file."""

    name: str
    config_type: str = "webpack"  # webpack, vite, modernjs
    remotes: List[RemoteRef] = field(default_factory=list)
    exposes: List[ExposeRef] = field(default_factory=list)
    shared: List[SharedDependencyRef] = field(default_factory=list)
    root_path: str = ""
    config_path: Optional[str] = None

    @property
    def has_name(self) -> bool:
        return bool(self.name and self.name.strip())


@dataclass
class DependencyGraphNode:
    """A node of the dependency graph: local app, external remote, exposed module or shared library."""

    id: str
    label: str
    type: str  # host, remote, shared-dependency, exposed-module
    config_type: str
    size: int = 1
    group: str = "hosts"
    url: Optional[str] = None
    version: Optional[str] = None
    exposed_modules: Optional[List[str]] = None
    shared_dependencies: Optional[List[str]] = None
    status: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'id': self.id,
            'label': self.label,
            'type': self.type,
            'configType': self.config_type,
            'url': self.url,
            'version': self.version,
            'exposedModules': self.exposed_modules,
            'sharedDependencies': self.shared_dependencies,
            'size': self.size,
            'group': self.group,
            'status': self.status,
        }
        # Remove None values
        return {k: v for k, v in data.items() if v is not None}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DependencyGraphNode':
        return cls(
            id=data['id'],
            label=data.get('label', data['id']),
            type=data.get('type', 'host'),
            config_type=data.get('configType', 'webpack'),
            size=data.get('size', 1),
            group=data.get('group', 'hosts'),
            url=data.get('url'),
            version=data.get('version'),
            exposed_modules=data.get('exposedModules'),
            shared_dependencies=data.get('sharedDependencies'),
            status=data.get('status'),
        )


@dataclass
class DependencyGraphEdge:
    """A typed edge between two graph nodes (consumes, exposes or shares)."""

    source: str  # serialized as "from"
    target: str  # serialized as "to"
    type: str
    label: Optional[str] = None
    strength: float = 1.0
    bidirectional: bool = False

    def pair_key(self) -> Tuple[str, str]:
        """Return a key identifying the unordered {source, target} pair."""
        return unordered_pair_key(self.source, self.target)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'from': self.source,
            'to': self.target,
            'type': self.type,
            'label': self.label,
            'strength': self.strength,
            'bidirectional': self.bidirectional,
        }
        return {k: v for k, v in data.items() if v is not None}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DependencyGraphEdge':
        return cls(
            source=data['from'],
            target=data['to'],
            type=data.get('type', 'consumes'),
            label=data.get('label'),
            strength=float(data.get('strength', 1.0)),
            bidirectional=bool(data.get('bidirectional', False)),
        )


@dataclass
class GraphMetadata:
    """Aggregate counts reported alongside the graph."""

    total_hosts: int = 0
    total_remotes: int = 0
    total_shared_deps: int = 0
    total_exposed_modules: int = 0
    consumer_hosts: int = 0
    provider_hosts: int = 0
    bidirectional_apps: int = 0
    standalone_apps: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            'totalHosts': self.total_hosts,
            'totalRemotes': self.total_remotes,
            'totalSharedDeps': self.total_shared_deps,
            'totalExposedModules': self.total_exposed_modules,
            'consumerHosts': self.consumer_hosts,
            'providerHosts': self.provider_hosts,
            'bidirectionalApps': self.bidirectional_apps,
            'standaloneApps': self.standalone_apps,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GraphMetadata':
        return cls(
            total_hosts=data.get('totalHosts', 0),
            total_remotes=data.get('totalRemotes', 0),
            total_shared_deps=data.get('totalSharedDeps', 0),
            total_exposed_modules=data.get('totalExposedModules', 0),
            consumer_hosts=data.get('consumerHosts', 0),
            provider_hosts=data.get('providerHosts', 0),
            bidirectional_apps=data.get('bidirectionalApps', 0),
            standalone_apps=data.get('standaloneApps', 0),
        )


@dataclass
class DependencyGraph:
    """The consolidated dependency graph handed to renderers."""

    nodes: List[DependencyGraphNode] = field(default_factory=list)
    edges: List[DependencyGraphEdge] = field(default_factory=list)
    metadata: GraphMetadata = field(default_factory=GraphMetadata)

    def get_node(self, node_id: str) -> Optional[DependencyGraphNode]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    def to_dict(self) -> Dict[str, Any]:
        return {
            'nodes': [node.to_dict() for node in self.nodes],
            'edges': [edge.to_dict() for edge in self.edges],
            'metadata': self.metadata.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DependencyGraph':
        return cls(
            nodes=[DependencyGraphNode.from_dict(n) for n in data.get('nodes', [])],
            edges=[DependencyGraphEdge.from_dict(e) for e in data.get('edges', [])],
            metadata=GraphMetadata.from_dict(data.get('metadata', {})),
        )
