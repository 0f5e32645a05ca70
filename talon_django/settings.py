"""
Settings resolution for talon-django.

Values are layered as: library defaults, then the global keys of
``settings.TALON``, then the section of the concern being resolved
(``settings.TALON["concerns"][<name>]``).
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from django.conf import settings as django_settings

from .defaults import LIBRARY_DEFAULTS, merge_settings


def _get_global_settings() -> dict[str, Any]:
    talon_settings = getattr(django_settings, "TALON", None) or {}
    if not isinstance(talon_settings, dict):
        return {}
    return {k: v for k, v in talon_settings.items() if k != "concerns"}


def _get_concern_section(concern: Optional[str]) -> dict[str, Any]:
    if concern is None:
        return {}
    talon_settings = getattr(django_settings, "TALON", None) or {}
    concerns = talon_settings.get("concerns", {}) if isinstance(talon_settings, dict) else {}
    section = concerns.get(str(concern), {})
    return section if isinstance(section, dict) else {}


@dataclass
class ConcernSettings:
    """Settings that apply to the resources of one concern."""
    schema_adapter: Any = None
    paginate: Optional[bool] = True
    themes: list[str] = field(default_factory=list)
    repo: str = "default"
    default_page_size: int = 20
    max_page_size: int = 100
    locale_dirs: list[str] = field(default_factory=list)
    autodiscover: bool = True

    @classmethod
    def from_concern(cls, concern: Optional[str] = None) -> "ConcernSettings":
        merged = merge_settings(
            LIBRARY_DEFAULTS, _get_global_settings(), _get_concern_section(concern)
        )
        valid_fields = set(cls.__dataclass_fields__.keys())
        return cls(**{k: v for k, v in merged.items() if k in valid_fields})


def schema_adapter(concern: Optional[str] = None) -> Any:
    """Return the adapter identifier configured for ``concern``, if any."""
    return ConcernSettings.from_concern(concern).schema_adapter


def paginate(concern: Optional[str] = None) -> Optional[bool]:
    """Return the pagination default configured for ``concern``."""
    return ConcernSettings.from_concern(concern).paginate


def themes(concern: Optional[str] = None) -> list[str]:
    """Return the themes configured for ``concern``."""
    return list(ConcernSettings.from_concern(concern).themes or [])


def repo_alias(concern: Optional[str] = None) -> str:
    return ConcernSettings.from_concern(concern).repo


__all__ = [
    "ConcernSettings",
    "schema_adapter",
    "paginate",
    "themes",
    "repo_alias",
]
