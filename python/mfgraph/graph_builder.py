"""Builds a consolidated Module Federation dependency graph from per-root configurations."""

import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Set, Tuple

from .capabilities import AppCapability, classify_applications
from .ids import (
    EXTERNAL_PREFIX,
    exposed_module_id,
    external_remote_id,
    pair_key,
    shared_dependency_id,
)
from .models import (
    ApplicationConfig,
    DependencyGraph,
    DependencyGraphEdge,
    DependencyGraphNode,
    GraphMetadata,
    RemoteRef,
    SharedDependencyRef,
)
from .resolver import DEFAULT_STRATEGY, RemoteResolver

logger = logging.getLogger(__name__)

# Extractors emit this name when the shared scope is computed at build time
DYNAMIC_SHARED = "[DYNAMIC_SHARED]"

GROUP_REMOTES = "remotes"
GROUP_SHARED = "shared"

BIDIRECTIONAL_PREFIX = "↔ "


@dataclass
class GraphOptions:
    """Options controlling graph construction."""

    resolver_strategy: str = DEFAULT_STRATEGY
    dynamic_shared_sentinel: str = DYNAMIC_SHARED


class DependencyGraphBuilder:
    """
    Builds a dependency graph from Module Federation configurations in four steps:

    1. Classify applications by whether they declare remotes and/or exposes
    2. Resolve every declared remote to a local application or an external remote
    3. Materialize nodes and edges (app nodes, one consumes edge per unordered
       pair, exposed module children, shared dependency hubs)
    4. Finalize metadata counts

    All intermediate state is local to a single build() call, so one builder
    can be reused and called from several threads.
    """

    def __init__(self, options: Optional[GraphOptions] = None, resolver: Optional[RemoteResolver] = None):
        self.options = options or GraphOptions()
        self.resolver = resolver or RemoteResolver.from_strategy(self.options.resolver_strategy)

    def build(self, configs: Mapping[str, List[ApplicationConfig]]) -> DependencyGraph:
        """Generate the dependency graph for a snapshot of root path -> configurations."""
        logger.info(f"Building dependency graph from {len(configs)} root paths")

        capabilities = classify_applications(configs)
        logger.info(f"Classified {len(capabilities)} applications")

        metadata = GraphMetadata()
        node_map: Dict[str, DependencyGraphNode] = {}
        edges: List[DependencyGraphEdge] = []

        # remote id -> consumer app ids, and the ref each consumer declared
        remote_to_host: Dict[str, List[str]] = {}
        declared_refs: Dict[Tuple[str, str], RemoteRef] = {}
        external_nodes = self._resolve_remotes(capabilities, remote_to_host, declared_refs)

        self._add_app_nodes(capabilities, remote_to_host, declared_refs, node_map)
        node_map.update(external_nodes)

        edges.extend(self._build_consume_edges(remote_to_host, declared_refs, node_map))
        metadata.total_exposed_modules = self._add_exposed_modules(capabilities, remote_to_host, node_map, edges)
        metadata.total_shared_deps = self._add_shared_dependencies(capabilities, node_map, edges)

        graph = DependencyGraph(nodes=list(node_map.values()), edges=edges, metadata=metadata)
        finalize_metadata(graph, capabilities)

        logger.info(
            f"Generated dependency graph: {len(graph.nodes)} nodes, {len(graph.edges)} edges, "
            f"{metadata.total_hosts} hosts, {metadata.total_remotes} external remotes, "
            f"{metadata.total_shared_deps} shared deps, {metadata.total_exposed_modules} exposed modules"
        )
        return graph

    def _resolve_remotes(
        self,
        capabilities: Dict[str, AppCapability],
        remote_to_host: Dict[str, List[str]],
        declared_refs: Dict[Tuple[str, str], RemoteRef],
    ) -> Dict[str, DependencyGraphNode]:
        """Record who consumes whom; create nodes for remotes that are not local apps."""
        external_nodes: Dict[str, DependencyGraphNode] = {}

        for app_id, capability in capabilities.items():
            for remote in capability.config.remotes:
                if not remote.name or not remote.name.strip():
                    logger.debug(f"Skipping remote without name in app '{capability.config.name}'")
                    continue

                remote_id = self.resolver.resolve(remote.name, capabilities, consumer_id=app_id)

                if remote_id is None:
                    remote_id = external_remote_id(remote.name)
                    existing = external_nodes.get(remote_id)
                    if existing is None:
                        external_nodes[remote_id] = DependencyGraphNode(
                            id=remote_id,
                            label=remote.name,
                            type="remote",
                            config_type=remote.config_type or "external",
                            url=remote.url,
                            size=1,
                            group=GROUP_REMOTES,
                        )
                    else:
                        if remote.url and not existing.url:
                            existing.url = remote.url
                        if remote.config_type and existing.config_type != remote.config_type:
                            existing.config_type = remote.config_type
                        existing.size += 1
                    logger.debug(f"Remote '{remote.name}' of '{capability.config.name}' is external")

                remote_to_host.setdefault(remote_id, []).append(app_id)
                declared_refs.setdefault((app_id, remote_id), remote)

        return external_nodes

    def _add_app_nodes(
        self,
        capabilities: Dict[str, AppCapability],
        remote_to_host: Dict[str, List[str]],
        declared_refs: Dict[Tuple[str, str], RemoteRef],
        node_map: Dict[str, DependencyGraphNode],
    ) -> None:
        """Create exactly one host-type node per classified application."""
        for app_id, capability in capabilities.items():
            config = capability.config
            consumed_as_remote = app_id in remote_to_host

            node_map[app_id] = DependencyGraphNode(
                id=app_id,
                label=config.name,
                type="host",
                config_type=config.config_type,
                url=self._declared_url(app_id, remote_to_host, declared_refs),
                exposed_modules=[e.name for e in config.exposes] if capability.has_exposes else None,
                shared_dependencies=[s.name for s in config.shared],
                size=max(1, len(config.remotes) + len(config.exposes) + len(config.shared)),
                group=capability.group(consumed_as_remote),
            )

    @staticmethod
    def _declared_url(
        app_id: str,
        remote_to_host: Dict[str, List[str]],
        declared_refs: Dict[Tuple[str, str], RemoteRef],
    ) -> Optional[str]:
        """First URL a consumer declared for a local application."""
        for consumer_id in remote_to_host.get(app_id, []):
            ref = declared_refs.get((consumer_id, app_id))
            if ref is not None and ref.url:
                return ref.url
        return None

    def _build_consume_edges(
        self,
        remote_to_host: Dict[str, List[str]],
        declared_refs: Dict[Tuple[str, str], RemoteRef],
        node_map: Dict[str, DependencyGraphNode],
    ) -> List[DependencyGraphEdge]:
        """Emit one consumes edge per unordered {consumer, remote} pair."""
        edges: List[DependencyGraphEdge] = []
        processed_pairs: Set[Tuple[str, str]] = set()

        for remote_id, host_ids in remote_to_host.items():
            remote_node = node_map.get(remote_id)
            for host_id in host_ids:
                if remote_node is None or host_id not in node_map:
                    continue

                key = pair_key(host_id, remote_id)
                if key in processed_pairs:
                    continue
                processed_pairs.add(key)

                is_bidirectional = remote_id in remote_to_host.get(host_id, [])

                ref = declared_refs.get((host_id, remote_id))
                text = (ref.url if ref is not None else None) or remote_node.url or remote_node.label

                if is_bidirectional:
                    edge = DependencyGraphEdge(
                        source=host_id,
                        target=remote_id,
                        type="consumes",
                        label=f"{BIDIRECTIONAL_PREFIX}{text}",
                        strength=1.5,
                        bidirectional=True,
                    )
                    logger.debug(f"Bidirectional consume edge: {node_map[host_id].label} ↔ {remote_node.label}")
                else:
                    edge = DependencyGraphEdge(
                        source=host_id,
                        target=remote_id,
                        type="consumes",
                        label=text,
                        strength=1.0,
                        bidirectional=False,
                    )
                    logger.debug(f"Consume edge: {node_map[host_id].label} → {remote_node.label}")

                edges.append(edge)

        return edges

    def _add_exposed_modules(
        self,
        capabilities: Dict[str, AppCapability],
        remote_to_host: Dict[str, List[str]],
        node_map: Dict[str, DependencyGraphNode],
        edges: List[DependencyGraphEdge],
    ) -> int:
        """Create a child node and an exposes edge for every exposed module. Returns the module count."""
        module_count = 0

        for app_id, capability in capabilities.items():
            if not capability.has_exposes:
                continue

            owner = node_map[app_id]
            consumers = len(set(remote_to_host.get(app_id, [])))

            for expose in capability.config.exposes:
                module_id = exposed_module_id(app_id, expose.name)
                if module_id in node_map:
                    logger.debug(f"Duplicate exposed module '{expose.name}' in '{owner.label}'")
                    continue

                node_map[module_id] = DependencyGraphNode(
                    id=module_id,
                    label=expose.name,
                    type="exposed-module",
                    config_type=owner.config_type,
                    size=consumers or 1,
                    group=app_id,
                )
                edges.append(DependencyGraphEdge(
                    source=app_id,
                    target=module_id,
                    type="exposes",
                    label=expose.name,
                    strength=1.0,
                    bidirectional=False,
                ))
                module_count += 1

        return module_count

    def _add_shared_dependencies(
        self,
        capabilities: Dict[str, AppCapability],
        node_map: Dict[str, DependencyGraphNode],
        edges: List[DependencyGraphEdge],
    ) -> int:
        """Create hub nodes for libraries shared by more than one application. Returns the hub count."""
        # dict keys keep the users of each dependency ordered and unique
        shared_deps: Dict[str, Dict[str, None]] = {}
        for app_id, capability in capabilities.items():
            for shared in capability.config.shared:
                shared_deps.setdefault(shared.name, {})[app_id] = None

        shared_count = 0
        for dep_name, app_ids in shared_deps.items():
            if len(app_ids) <= 1 or dep_name == self.options.dynamic_shared_sentinel:
                logger.debug(f"Skipping shared dependency '{dep_name}' - used by {len(app_ids)} app(s)")
                continue

            declaration, declaring_app = self._most_detailed_declaration(dep_name, capabilities)
            shared_id = shared_dependency_id(dep_name)

            node_map[shared_id] = DependencyGraphNode(
                id=shared_id,
                label=dep_name,
                type="shared-dependency",
                config_type=declaring_app.config.config_type if declaring_app else "webpack",
                version=declaration.effective_version if declaration else None,
                shared_dependencies=[dep_name],
                size=len(app_ids),
                group=GROUP_SHARED,
            )
            shared_count += 1

            for app_id in app_ids:
                edges.append(DependencyGraphEdge(
                    source=app_id,
                    target=shared_id,
                    type="shares",
                    label=dep_name,
                    strength=0.5,
                    bidirectional=True,
                ))

            logger.debug(f"Shared dependency '{dep_name}' used by {len(app_ids)} apps")

        return shared_count

    @staticmethod
    def _most_detailed_declaration(
        dep_name: str,
        capabilities: Dict[str, AppCapability],
    ) -> Tuple[Optional[SharedDependencyRef], Optional[AppCapability]]:
        """Find the declaration of a shared dependency with the most populated fields."""
        best: Optional[SharedDependencyRef] = None
        best_app: Optional[AppCapability] = None

        for capability in capabilities.values():
            found = next((s for s in capability.config.shared if s.name == dep_name), None)
            if found is not None and (best is None or found.populated_fields() > best.populated_fields()):
                best = found
                best_app = capability

        return best, best_app


def finalize_metadata(graph: DependencyGraph, capabilities: Dict[str, AppCapability]) -> None:
    """
    Recompute the aggregate counts of a built graph.

    Host counts come from the classified applications (every local app is a
    host of some kind); remote counts only include external remotes, since
    locally resolved remotes are host nodes joined by consumes edges.
    """
    metadata = graph.metadata
    metadata.consumer_hosts = 0
    metadata.provider_hosts = 0
    metadata.bidirectional_apps = 0
    metadata.standalone_apps = 0

    for capability in capabilities.values():
        kind = capability.kind
        if kind == "bidirectional":
            metadata.bidirectional_apps += 1
        elif kind == "consumer":
            metadata.consumer_hosts += 1
        elif kind == "provider":
            metadata.provider_hosts += 1
        else:
            metadata.standalone_apps += 1

    metadata.total_hosts = (
        metadata.consumer_hosts + metadata.provider_hosts
        + metadata.bidirectional_apps + metadata.standalone_apps
    )
    metadata.total_remotes = sum(
        1 for node in graph.nodes
        if node.group == GROUP_REMOTES and node.id.startswith(EXTERNAL_PREFIX)
    )


def build_dependency_graph(
    configs: Mapping[str, List[ApplicationConfig]],
    options: Optional[GraphOptions] = None,
) -> DependencyGraph:
    """Convenience wrapper around DependencyGraphBuilder.build()."""
    return DependencyGraphBuilder(options).build(configs)
