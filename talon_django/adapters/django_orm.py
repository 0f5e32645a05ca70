"""
Adapter for Django ORM models.
"""

import logging
from typing import Any, Optional, Sequence

from django.db import models

from ..introspection import SchemaIntrospector
from .base import SchemaAdapter

logger = logging.getLogger(__name__)


class DjangoSchemaAdapter(SchemaAdapter):
    """Schema adapter backed by ``Model._meta`` and ``QuerySet``."""

    name = "django"

    def fields(self, schema: type[models.Model]) -> list[str]:
        return list(SchemaIntrospector.for_model(schema).field_names)

    def types(self, schema: type[models.Model]) -> dict[str, str]:
        return dict(SchemaIntrospector.for_model(schema).types)

    def associations(self, schema: type[models.Model]) -> list[str]:
        return list(SchemaIntrospector.for_model(schema).associations)

    def primary_key(self, schema: type[models.Model]) -> Optional[str]:
        return SchemaIntrospector.for_model(schema).primary_key

    def queryset(self, schema: type[models.Model]) -> models.QuerySet:
        return schema._default_manager.all()

    def preload_query(
        self, query: models.QuerySet, associations: Sequence[str]
    ) -> models.QuerySet:
        if not associations:
            return query
        return query.prefetch_related(*associations)

    def where_id(self, query: models.QuerySet, value: Any) -> models.QuerySet:
        return query.filter(pk=value)

    def order_by(
        self, query: models.QuerySet, ordering: Sequence[str]
    ) -> models.QuerySet:
        model = query.model
        known = set(SchemaIntrospector.for_model(model).field_names)
        known.update(f.name for f in model._meta.concrete_fields)
        applied = []
        for spec in ordering:
            name = spec.lstrip("-")
            if name.split("__", 1)[0] in known:
                applied.append(spec)
            else:
                logger.warning(
                    "Ignoring unknown order field '%s' for %s", name, model.__name__
                )
        if not applied:
            return query
        return query.order_by(*applied)
