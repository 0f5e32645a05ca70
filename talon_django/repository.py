"""
Repository used by resources to execute queries.

A ``Repository`` binds a database alias. Resources call it to load every
row of a query, to load one page of it, or to eager load associations on
records that have already been fetched.
"""

import logging
from typing import Any, Iterable, Mapping, Optional, Sequence

from django.core.paginator import Page, Paginator
from django.db import models

from .settings import ConcernSettings

logger = logging.getLogger(__name__)


def _coerce_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


class Repository:
    """Executes querysets against one database alias."""

    def __init__(self, using: str = "default", concern: Optional[str] = None):
        self.using = using
        self.concern = concern

    def __repr__(self) -> str:
        return f"<Repository using={self.using!r}>"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Repository):
            return NotImplemented
        return (self.using, self.concern) == (other.using, other.concern)

    def __hash__(self) -> int:
        return hash((self.using, self.concern))

    def _bind(self, queryset: models.QuerySet) -> models.QuerySet:
        return queryset.using(self.using)

    def all(self, queryset: models.QuerySet) -> list[models.Model]:
        """Fetch every row of ``queryset``."""
        return list(self._bind(queryset))

    def get_page_size(self, params: Mapping[str, Any]) -> int:
        settings = ConcernSettings.from_concern(self.concern)
        page_size = _coerce_int(params.get("page_size"), settings.default_page_size)
        return max(1, min(page_size, settings.max_page_size))

    def paginate(self, queryset: models.QuerySet, params: Mapping[str, Any]) -> Page:
        """
        Return one page of ``queryset``.

        ``params["page"]`` selects the page (out of range or invalid numbers
        resolve to the nearest valid page) and ``params["page_size"]`` the
        number of rows, bounded by the ``max_page_size`` setting.
        """
        params = params or {}
        queryset = self._bind(queryset)
        if not queryset.ordered:
            # Paginator warns on unordered querysets.
            queryset = queryset.order_by("pk")
        paginator = Paginator(queryset, self.get_page_size(params))
        return paginator.get_page(params.get("page", 1))

    def preload(self, instances: Any, associations: Sequence[str]) -> Any:
        """
        Eager load ``associations`` on one instance or a list of instances.

        Returns what it was given, with the related objects cached.
        """
        if not associations or instances is None:
            return instances
        if isinstance(instances, models.Model):
            models.prefetch_related_objects([instances], *associations)
        else:
            models.prefetch_related_objects(list(_iter_instances(instances)), *associations)
        return instances


def _iter_instances(instances: Iterable[Any]) -> Iterable[models.Model]:
    for instance in instances:
        if instance is not None:
            yield instance


__all__ = ["Repository"]
