"""
Sort order translation for index tables.

Index pages send their sort order as the ``order`` request parameter.
``sort_column_order`` turns it into Django ``order_by`` specs.
"""

from typing import Any, Mapping

DESCENDING = {"desc", "descending", "-"}
ASCENDING = {"asc", "ascending", "+", ""}


def _order_spec(field: str, direction: str = "asc") -> str:
    field = field.strip()
    direction = (direction or "").strip().lower()
    if not field:
        return ""
    if field.startswith("-"):
        field, direction = field[1:], "desc"
    elif field.startswith("+"):
        field = field[1:]
    if direction in DESCENDING:
        return f"-{field}"
    if direction not in ASCENDING:
        raise ValueError(f"Unsupported sort direction '{direction}' for '{field}'")
    return field


def _parse_item(item: str) -> str:
    if ":" in item:
        field, direction = item.split(":", 1)
        return _order_spec(field, direction)
    return _order_spec(item)


def sort_column_order(order: Any) -> list[str]:
    """
    Translate an ``order`` parameter into ``order_by`` specs.

    Accepted forms::

        "title"                       -> ["title"]
        "-inserted_at,title"          -> ["-inserted_at", "title"]
        "title:desc"                  -> ["-title"]
        ["title", "body:asc"]         -> ["title", "body"]
        {"title": "desc"}             -> ["-title"]
    """
    if order is None:
        return []
    if isinstance(order, Mapping):
        specs = [_order_spec(str(field), str(direction or "")) for field, direction in order.items()]
    elif isinstance(order, str):
        specs = [_parse_item(item) for item in order.split(",")]
    else:
        specs = [_parse_item(str(item)) for item in order if item is not None]
    return [spec for spec in specs if spec]


__all__ = ["sort_column_order"]
