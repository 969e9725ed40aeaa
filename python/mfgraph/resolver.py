"""Name-based resolution of declared remotes to local applications.

A remote is declared by name only. Resolution tries an ordered list of
matchers; each matcher is tried against every known application before
the next (looser) matcher is consulted. The first application found wins.
An application is never resolved as a remote of itself.
"""

import logging
from typing import Callable, Dict, List, Optional, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from .capabilities import AppCapability

logger = logging.getLogger(__name__)

Matcher = Callable[[str, str], bool]


def exact_match(remote_name: str, app_name: str) -> bool:
    return remote_name == app_name


def case_insensitive_match(remote_name: str, app_name: str) -> bool:
    return remote_name.lower() == app_name.lower()


def substring_match(remote_name: str, app_name: str) -> bool:
    """Either name contains the other, ignoring case."""
    remote_lower = remote_name.lower()
    app_lower = app_name.lower()
    return remote_lower in app_lower or app_lower in remote_lower


STRATEGIES: Dict[str, List[Matcher]] = {
    'strict': [exact_match],
    'case-insensitive': [exact_match, case_insensitive_match],
    'fuzzy': [exact_match, case_insensitive_match, substring_match],
}

DEFAULT_STRATEGY = 'fuzzy'


class RemoteResolver:
    """Resolves remote names to application ids using an ordered list of matchers."""

    def __init__(self, matchers: Optional[Sequence[Matcher]] = None):
        self.matchers: List[Matcher] = list(matchers) if matchers is not None else list(STRATEGIES[DEFAULT_STRATEGY])

    @classmethod
    def from_strategy(cls, strategy: str) -> 'RemoteResolver':
        """Create a resolver for a named strategy (strict, case-insensitive, fuzzy)."""
        try:
            return cls(STRATEGIES[strategy])
        except KeyError:
            raise ValueError(
                f"Unknown resolver strategy: {strategy} (expected one of {', '.join(STRATEGIES)})"
            ) from None

    def resolve(
        self,
        remote_name: str,
        capabilities: Dict[str, 'AppCapability'],
        consumer_id: Optional[str] = None,
    ) -> Optional[str]:
        """
        Resolve a remote name to the id of a known application.

        Args:
            remote_name: Name the consumer declared for the remote
            capabilities: Classified applications keyed by app id
            consumer_id: Id of the declaring application, never a candidate for its own remotes

        Returns:
            The app id of the first matching application, or None if the
            remote is not one of the known applications
        """
        if not remote_name or not remote_name.strip():
            return None

        for matcher in self.matchers:
            for app_id, capability in capabilities.items():
                if app_id == consumer_id:
                    continue
                if matcher(remote_name, capability.config.name):
                    logger.debug(f"Remote '{remote_name}' resolved to {app_id} ({matcher.__name__})")
                    return app_id

        return None
