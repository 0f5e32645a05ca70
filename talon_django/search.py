"""
Free text search over resource querysets.

Search runs through a django-filter ``FilterSet`` generated per model with a
single ``search_terms`` filter. Every whitespace separated term must match
at least one of the searched fields: text columns match case-insensitively
on substrings, numeric and boolean columns match exactly when the term
parses.
"""

from __future__ import annotations

import logging
import threading
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Sequence

import django_filters
from django.core.exceptions import FieldDoesNotExist
from django.db import models
from django.db.models import Q

from .introspection import SchemaIntrospector

logger = logging.getLogger(__name__)

TRUE_VALUES = {"true", "1", "yes", "on"}
FALSE_VALUES = {"false", "0", "no", "off"}

_filterset_cache: dict[tuple[type[models.Model], tuple[str, ...]], type] = {}
_filterset_cache_lock = threading.Lock()


def _get_field_from_path(model: type[models.Model], field_path: str) -> Optional[models.Field]:
    current_model = model
    parts = field_path.split("__")
    for index, part in enumerate(parts):
        field = current_model._meta.get_field(part)
        if index == len(parts) - 1:
            return field
        if not getattr(field, "related_model", None):
            return None
        current_model = field.related_model
    return None


def build_term_q(model: type[models.Model], term: str, fields: Sequence[str]) -> Q:
    """Build the Q object matching ``term`` against any of ``fields``."""
    q_objects = Q()
    for field_path in fields:
        try:
            field = _get_field_from_path(model, field_path)
        except FieldDoesNotExist:
            logger.debug("Skipping unknown search field %s on %s", field_path, model.__name__)
            continue
        if field is None:
            continue
        if isinstance(field, (models.CharField, models.TextField)):
            q_objects |= Q(**{f"{field_path}__icontains": term})
        elif isinstance(field, models.BooleanField):
            lowered = term.lower()
            if lowered in TRUE_VALUES:
                q_objects |= Q(**{field_path: True})
            elif lowered in FALSE_VALUES:
                q_objects |= Q(**{field_path: False})
        elif isinstance(field, models.IntegerField):
            try:
                q_objects |= Q(**{field_path: int(term)})
            except ValueError:
                continue
        elif isinstance(field, models.FloatField):
            try:
                q_objects |= Q(**{field_path: float(term)})
            except ValueError:
                continue
        elif isinstance(field, models.DecimalField):
            try:
                q_objects |= Q(**{field_path: Decimal(term)})
            except InvalidOperation:
                continue
    return q_objects


def get_search_filterset(
    model: type[models.Model], fields: Sequence[str]
) -> type[django_filters.FilterSet]:
    """Return the (cached) search FilterSet class for ``model``."""
    cache_key = (model, tuple(fields))
    with _filterset_cache_lock:
        cached = _filterset_cache.get(cache_key)
        if cached is not None:
            return cached

        search_fields = list(fields)

        def filter_search_terms(self, queryset, name, value):
            for term in value.split():
                q_objects = build_term_q(model, term, search_fields)
                if not q_objects:
                    # No searched field can hold the term.
                    return queryset.none()
                queryset = queryset.filter(q_objects)
            return queryset

        filterset_class = type(
            f"{model.__name__}SearchFilterSet",
            (django_filters.FilterSet,),
            {
                "search_terms": django_filters.CharFilter(
                    method="filter_search_terms",
                    help_text="Search across the resource's fields",
                ),
                "filter_search_terms": filter_search_terms,
                "Meta": type("Meta", (), {"model": model, "fields": []}),
            },
        )
        _filterset_cache[cache_key] = filterset_class
        return filterset_class


def search(resource: Any, schema: Any, search_terms: Optional[str]) -> models.QuerySet:
    """
    Filter ``schema`` (a model class or a queryset) by ``search_terms``.

    ``resource.search_fields`` narrows the searched fields when set; the
    model's direct text, numeric and boolean columns are searched otherwise.
    """
    if isinstance(schema, models.QuerySet):
        queryset = schema
    else:
        queryset = resource.adapter.queryset(schema)
    if not search_terms or not str(search_terms).strip():
        return queryset

    model = queryset.model
    fields = getattr(resource, "search_fields", None) or SchemaIntrospector.for_model(
        model
    ).search_fields()
    filterset_class = get_search_filterset(model, fields)
    filterset = filterset_class({"search_terms": str(search_terms)}, queryset=queryset)
    return filterset.qs


def clear_search_cache() -> None:
    with _filterset_cache_lock:
        _filterset_cache.clear()


__all__ = ["search", "build_term_q", "get_search_filterset", "clear_search_cache"]
