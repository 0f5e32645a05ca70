"""
Concerns group the resources of one administrative sub-application.

A concern supplies the default repository of its resources and carries the
settings section ``settings.TALON["concerns"][<name>]``. Concerns that are
not registered explicitly are created on first lookup.
"""

import logging
import threading
from typing import Optional, Union

from . import settings as talon_settings
from .exceptions import ConcernNotFound
from .repository import Repository

logger = logging.getLogger(__name__)


class Concern:
    """
    A named group of resources.

    Subclass and override ``repo`` to supply a custom repository::

        class ReportingConcern(Concern):
            def repo(self):
                return Repository(using="reporting", concern=self.name)
    """

    def __init__(self, name: str):
        self.name = name

    def __repr__(self) -> str:
        return f"<Concern {self.name!r}>"

    def repo(self) -> Repository:
        """Return the default repository of this concern's resources."""
        return Repository(using=talon_settings.repo_alias(self.name), concern=self.name)

    def themes(self) -> list[str]:
        return talon_settings.themes(self.name)


class ConcernRegistry:
    """Registry of concerns keyed by name."""

    def __init__(self):
        self._concerns: dict[str, Concern] = {}
        self._lock = threading.Lock()

    def register(self, concern: Union[Concern, str]) -> Concern:
        if isinstance(concern, str):
            concern = Concern(concern)
        with self._lock:
            if concern.name in self._concerns:
                logger.info("Concern '%s' already registered, updating...", concern.name)
            self._concerns[concern.name] = concern
        logger.info("Registered concern: %s", concern.name)
        return concern

    def get(self, name: Union[Concern, str, None]) -> Concern:
        if isinstance(name, Concern):
            return name
        if name is None:
            raise ConcernNotFound("concern is required to resolve a repository")
        with self._lock:
            concern = self._concerns.get(str(name))
            if concern is None:
                concern = Concern(str(name))
                self._concerns[concern.name] = concern
            return concern

    def list_concerns(self) -> list[Concern]:
        return list(self._concerns.values())

    def clear(self) -> None:
        with self._lock:
            self._concerns.clear()


concern_registry = ConcernRegistry()


def register_concern(concern: Union[Concern, str]) -> Concern:
    """Register a concern in the global registry."""
    return concern_registry.register(concern)


def get_concern(name: Union[Concern, str, None]) -> Concern:
    """Look up a concern in the global registry."""
    return concern_registry.get(name)


def concern_name(concern: Union[Concern, str, None]) -> Optional[str]:
    if isinstance(concern, Concern):
        return concern.name
    return None if concern is None else str(concern)


__all__ = [
    "Concern",
    "ConcernRegistry",
    "concern_registry",
    "register_concern",
    "get_concern",
    "concern_name",
]
