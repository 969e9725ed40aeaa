"""Classification of applications by what they consume and provide."""

import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping

from .ids import make_app_id
from .models import ApplicationConfig

logger = logging.getLogger(__name__)

GROUP_HOSTS = "hosts"
GROUP_BIDIRECTIONAL = "bidirectional"


@dataclass(frozen=True)
class AppCapability:
    """What a single application does on its own, before cross-referencing."""

    has_remotes: bool
    has_exposes: bool
    config: ApplicationConfig

    @property
    def kind(self) -> str:
        """Capability category: bidirectional, consumer, provider or standalone."""
        if self.has_remotes and self.has_exposes:
            return "bidirectional"
        if self.has_remotes:
            return "consumer"
        if self.has_exposes:
            return "provider"
        return "standalone"

    def group(self, consumed_as_remote: bool) -> str:
        """Presentation group of the app node once consumption is known."""
        if (self.has_remotes or self.has_exposes) and consumed_as_remote:
            return GROUP_BIDIRECTIONAL
        return GROUP_HOSTS


def classify_applications(configs: Mapping[str, List[ApplicationConfig]]) -> Dict[str, AppCapability]:
    """
    Classify every named application found under the given roots.

    Args:
        configs: Mapping of root path to the configurations discovered under it

    Returns:
        Mapping of app id to its capability, in input order
    """
    capabilities: Dict[str, AppCapability] = {}

    for root_path, root_configs in configs.items():
        for config in root_configs:
            if not config.has_name:
                logger.debug(f"Skipping config without name in {root_path}")
                continue

            app_id = make_app_id(root_path, config.name, config.config_type)
            if app_id in capabilities:
                logger.warning(f"Duplicate application '{config.name}' ({config.config_type}) in {root_path}, keeping the last one")

            capability = AppCapability(
                has_remotes=len(config.remotes) > 0,
                has_exposes=len(config.exposes) > 0,
                config=config,
            )
            capabilities[app_id] = capability
            logger.debug(
                f"App '{config.name}' is {capability.kind}: "
                f"{len(config.remotes)} remotes, {len(config.exposes)} exposes, {len(config.shared)} shared"
            )

    return capabilities
