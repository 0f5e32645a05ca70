"""
Default configuration for the talon-django library.

Every key the library reads from ``settings.TALON`` is listed here. A concern
section (``settings.TALON["concerns"][<name>]``) may override any of them for
the resources registered under that concern.
"""

from __future__ import annotations

from typing import Any

LIBRARY_VERSION = "0.1.0"

DEFAULT_DOMAIN = "talon"

# Fields hidden from every page unless a resource puts them back.
HIDDEN_COLUMNS = ("id", "inserted_at", "updated_at")

LIBRARY_DEFAULTS: dict[str, Any] = {
    # No library-wide adapter: a project or concern must name one.
    "schema_adapter": None,
    "paginate": True,
    "themes": ["admin-lte"],
    "repo": "default",
    "default_page_size": 20,
    "max_page_size": 100,
    "locale_dirs": [],
    "autodiscover": True,
}


def merge_settings(*sections: dict[str, Any]) -> dict[str, Any]:
    """Merge settings sections, later sections taking precedence."""
    result: dict[str, Any] = {}
    for section in sections:
        if section:
            result.update(section)
    return result
