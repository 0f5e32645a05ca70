"""
Model introspection for resource scaffolding.

``SchemaIntrospector`` reads a Django model's ``_meta`` and exposes the
ordered column list, the declared type of each column, the association
names and the primary key. Results are cached per model.
"""

import threading
import weakref
from dataclasses import dataclass
from typing import Any, Optional

from django.db import models
from django.utils.functional import cached_property

# Django internal types mapped to the declared types used by name inference
# and column rendering.
FIELD_TYPE_MAP = {
    "AutoField": "id",
    "BigAutoField": "id",
    "SmallAutoField": "id",
    "CharField": "string",
    "TextField": "string",
    "SlugField": "string",
    "EmailField": "string",
    "URLField": "string",
    "GenericIPAddressField": "string",
    "FilePathField": "string",
    "IntegerField": "integer",
    "BigIntegerField": "integer",
    "SmallIntegerField": "integer",
    "PositiveIntegerField": "integer",
    "PositiveBigIntegerField": "integer",
    "PositiveSmallIntegerField": "integer",
    "FloatField": "float",
    "DecimalField": "decimal",
    "BooleanField": "boolean",
    "NullBooleanField": "boolean",
    "DateField": "date",
    "DateTimeField": "datetime",
    "TimeField": "time",
    "DurationField": "duration",
    "UUIDField": "uuid",
    "JSONField": "map",
    "BinaryField": "binary",
    "FileField": "string",
    "ImageField": "string",
}

STRING_TYPE = "string"


@dataclass(frozen=True)
class FieldInfo:
    """A concrete model column in declaration order."""
    name: str
    field_type: str
    field: Any = None


def _declared_type(field: models.Field) -> str:
    if field.is_relation:
        # Foreign key columns hold the related primary key.
        return "id"
    internal_type = field.get_internal_type()
    return FIELD_TYPE_MAP.get(internal_type, internal_type.lower())


class SchemaIntrospector:
    """
    Describes a Django model the way resource code needs it.
    """

    def __init__(self, model: type[models.Model]):
        self.model = model
        self._meta = getattr(model, "_meta", None)

    _cache: "weakref.WeakKeyDictionary[type[models.Model], SchemaIntrospector]" = (
        weakref.WeakKeyDictionary()
    )
    _cache_lock = threading.Lock()

    @classmethod
    def for_model(cls, model: type[models.Model]) -> "SchemaIntrospector":
        with cls._cache_lock:
            cached = cls._cache.get(model)
            if cached is None:
                cached = cls(model)
                cls._cache[model] = cached
            return cached

    @classmethod
    def clear_cache(cls) -> None:
        with cls._cache_lock:
            cls._cache.clear()

    @cached_property
    def fields(self) -> list[FieldInfo]:
        """Concrete columns, foreign keys listed under their ``_id`` attname."""
        if not self._meta:
            return []
        return [
            FieldInfo(name=field.attname, field_type=_declared_type(field), field=field)
            for field in self._meta.concrete_fields
        ]

    @cached_property
    def field_names(self) -> list[str]:
        return [info.name for info in self.fields]

    @cached_property
    def types(self) -> dict[str, str]:
        """Column name to declared type, in declaration order."""
        return {info.name: info.field_type for info in self.fields}

    @cached_property
    def associations(self) -> list[str]:
        """Forward relations followed by reverse accessors."""
        if not self._meta:
            return []
        names = [
            field.name
            for field in self._meta.get_fields()
            if field.is_relation and not field.auto_created
        ]
        for rel in self._meta.related_objects:
            if (rel.related_name or "").endswith("+"):
                continue
            accessor = rel.get_accessor_name()
            if accessor and accessor not in names:
                names.append(accessor)
        return names

    @cached_property
    def primary_key(self) -> Optional[str]:
        if not self._meta or self._meta.pk is None:
            return None
        return self._meta.pk.attname

    def search_fields(self) -> list[str]:
        """Direct, non-key columns suitable for free text search."""
        return [
            info.name
            for info in self.fields
            if not info.field.is_relation
            and not info.field.primary_key
            and info.field_type in {"string", "integer", "float", "decimal", "boolean"}
        ]


__all__ = ["SchemaIntrospector", "FieldInfo", "FIELD_TYPE_MAP", "STRING_TYPE"]
