"""Loading of extracted Module Federation configurations from JSON snapshots."""

import json
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

from .models import ApplicationConfig, DependencyGraph, ExposeRef, RemoteRef, SharedDependencyRef
from .ssl_config import create_session

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_TYPE = "webpack"


class ConfigInputError(ValueError):
    """Raised when a configuration snapshot cannot be interpreted."""


def _is_url(path: str) -> bool:
    """Check if a path is an http(s) URL."""
    return urlparse(path).scheme in ('http', 'https')


def _read_content(path: str) -> str:
    """
    Read content from either a file path or URL.

    Raises:
        FileNotFoundError: If file doesn't exist
        requests.RequestException: If URL fetch fails
    """
    if _is_url(path):
        logger.info(f"Fetching configuration snapshot from URL: {path}")
        with create_session() as session:
            response = session.get(path, timeout=30)
            response.raise_for_status()
            return response.text

    logger.info(f"Reading configuration snapshot from file: {path}")
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def _optional_str(value: Any) -> Optional[str]:
    # module federation uses `false` to switch version checks off
    if value is None or isinstance(value, bool):
        return None
    return str(value)


def _expose_path(target: Any) -> str:
    """Source path of an exposes entry given as a string, a list or an {"import": ...} object."""
    if isinstance(target, dict):
        target = target.get('import')
    if isinstance(target, list):
        target = target[0] if target else None
    if target is None or isinstance(target, bool):
        return ""
    return str(target)


class FileParser:
    """Parser for configuration snapshots produced by the config extractor."""

    @staticmethod
    def parse_config_file(path: str) -> Dict[str, List[ApplicationConfig]]:
        """Read a snapshot from a file or URL and return root path -> configurations."""
        content = _read_content(path)
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ConfigInputError(f"{path} is not valid JSON: {e}") from e
        return FileParser.parse_configs(data)

    @staticmethod
    def parse_graph_file(path: str) -> DependencyGraph:
        """Read a graph previously written in JSON format."""
        content = _read_content(path)
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ConfigInputError(f"{path} is not valid JSON: {e}") from e
        if not isinstance(data, dict) or 'nodes' not in data:
            raise ConfigInputError(f"{path} does not contain a dependency graph")
        try:
            return DependencyGraph.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigInputError(f"Malformed dependency graph in {path}: {e}") from e

    @staticmethod
    def parse_configs(data: Any) -> Dict[str, List[ApplicationConfig]]:
        """
        Convert a decoded snapshot into root path -> configurations.

        Accepts {"<root>": [config, ...]}, {"roots": {"<root>": [...]}}, or a
        flat list of configs that each carry "rootPath".
        """
        configs: Dict[str, List[ApplicationConfig]] = {}

        if isinstance(data, dict) and isinstance(data.get('roots'), dict):
            data = data['roots']

        if isinstance(data, list):
            for entry in data:
                config = FileParser.parse_application(entry, root_path=None)
                configs.setdefault(config.root_path, []).append(config)
        elif isinstance(data, dict):
            for root_path, entries in data.items():
                if not isinstance(entries, list):
                    raise ConfigInputError(f"Configurations for root {root_path} must be a list")
                configs[root_path] = [FileParser.parse_application(entry, root_path) for entry in entries]
        else:
            raise ConfigInputError(f"Unsupported snapshot type: {type(data).__name__}")

        total = sum(len(c) for c in configs.values())
        logger.info(f"Loaded {total} configurations from {len(configs)} root paths")
        return configs

    @staticmethod
    def parse_application(entry: Any, root_path: Optional[str]) -> ApplicationConfig:
        """Build an ApplicationConfig from one extracted record."""
        if not isinstance(entry, dict):
            raise ConfigInputError(f"Configuration entry must be an object, got {type(entry).__name__}")

        if root_path is None:
            root_path = entry.get('rootPath')
            if not root_path:
                raise ConfigInputError(f"Configuration '{entry.get('name', '')}' has no rootPath")

        return ApplicationConfig(
            name=str(entry.get('name') or ''),
            config_type=entry.get('configType') or DEFAULT_CONFIG_TYPE,
            remotes=FileParser.parse_remotes(entry.get('remotes')),
            exposes=FileParser.parse_exposes(entry.get('exposes')),
            shared=FileParser.parse_shared(entry.get('shared')),
            root_path=root_path,
            config_path=entry.get('configPath'),
        )

    @staticmethod
    def parse_remotes(value: Any) -> List[RemoteRef]:
        if value is None:
            return []
        if not isinstance(value, list):
            raise ConfigInputError("'remotes' must be a list")

        remotes = []
        for item in value:
            if isinstance(item, str):
                remotes.append(RemoteRef(name=item))
            elif isinstance(item, dict):
                remotes.append(RemoteRef(
                    name=str(item.get('name') or ''),
                    url=_optional_str(item.get('url')),
                    config_type=item.get('configType'),
                ))
            else:
                raise ConfigInputError(f"Invalid remote entry: {item!r}")
        return remotes

    @staticmethod
    def parse_exposes(value: Any) -> List[ExposeRef]:
        if value is None:
            return []
        if isinstance(value, dict):
            # {"./Button": "./src/Button"} or {"./Button": {"import": "./src/Button"}}
            return [ExposeRef(name=name, path=_expose_path(target)) for name, target in value.items()]
        if not isinstance(value, list):
            raise ConfigInputError("'exposes' must be a list or an object")

        exposes = []
        for item in value:
            if isinstance(item, str):
                exposes.append(ExposeRef(name=item, path=item))
            elif isinstance(item, dict):
                exposes.append(ExposeRef(name=str(item.get('name') or ''), path=str(item.get('path') or '')))
            else:
                raise ConfigInputError(f"Invalid exposes entry: {item!r}")
        return exposes

    @staticmethod
    def parse_shared(value: Any) -> List[SharedDependencyRef]:
        if value is None:
            return []
        if isinstance(value, dict):
            # {"react": {"singleton": true, "requiredVersion": "^18"}} or {"react": "18.2.0"}
            shared = []
            for name, options in value.items():
                if isinstance(options, dict):
                    shared.append(FileParser._shared_from_options(name, options))
                else:
                    version = options if isinstance(options, str) else None
                    shared.append(SharedDependencyRef(name=name, version=version))
            return shared
        if not isinstance(value, list):
            raise ConfigInputError("'shared' must be a list or an object")

        shared = []
        for item in value:
            if isinstance(item, str):
                shared.append(SharedDependencyRef(name=item))
            elif isinstance(item, dict):
                shared.append(FileParser._shared_from_options(str(item.get('name') or ''), item))
            else:
                raise ConfigInputError(f"Invalid shared entry: {item!r}")
        return shared

    @staticmethod
    def _shared_from_options(name: str, options: Dict[str, Any]) -> SharedDependencyRef:
        return SharedDependencyRef(
            name=name,
            version=_optional_str(options.get('version')),
            required_version=_optional_str(options.get('requiredVersion')),
            singleton=options.get('singleton'),
            eager=options.get('eager'),
        )
