"""
String helpers used to derive resource names and titles.

Examples:
    >>> underscore("BlogPost")
    'blog_post'
    >>> titleize("first_name")
    'First Name'
    >>> pluralize("Blog Post")
    'Blog Posts'
"""

from typing import Any

import inflect
from django.utils.text import camel_case_to_spaces

_inflect_engine = inflect.engine()
# Model names are capitalized; pluralize them as common nouns, not proper names.
_inflect_engine.classical(names=False)


def _to_text(value: Any) -> str:
    if isinstance(value, type):
        return value.__name__
    return str(value or "").strip()


def underscore(value: Any) -> str:
    """Convert a CamelCase name (or a class) to lowercase snake_case."""
    text = _to_text(value).replace("-", "_")
    if not text:
        return ""
    return camel_case_to_spaces(text).replace(" ", "_")


def titleize(value: Any) -> str:
    """Split a snake_case or CamelCase name into capitalized words."""
    tokens = [token for token in underscore(value).split("_") if token]
    return " ".join(token[:1].upper() + token[1:] for token in tokens)


def pluralize(value: Any) -> str:
    """Return the English plural of a word or phrase."""
    text = _to_text(value)
    if not text:
        return text
    return _inflect_engine.plural_noun(text)


__all__ = ["underscore", "titleize", "pluralize"]
