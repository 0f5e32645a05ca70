"""
Schema adapters and the adapter registry.

Adapters are looked up by identifier when a resource is configured. An
identifier is a registered name (``"django"``), a dotted import path, an
adapter class or an adapter instance.
"""

import logging
import threading
from typing import Any

from django.utils.module_loading import import_string

from ..exceptions import ConfigurationError
from .base import SchemaAdapter
from .django_orm import DjangoSchemaAdapter

logger = logging.getLogger(__name__)

_adapters: dict[str, type[SchemaAdapter]] = {
    DjangoSchemaAdapter.name: DjangoSchemaAdapter,
}
_adapters_lock = threading.Lock()


def register_adapter(name: str, adapter_class: type[SchemaAdapter]) -> None:
    """Register an adapter class under ``name``."""
    with _adapters_lock:
        _adapters[name] = adapter_class
    logger.debug("Registered schema adapter '%s'", name)


def get_adapter(identifier: Any) -> SchemaAdapter:
    """Resolve an adapter identifier to an adapter instance."""
    if isinstance(identifier, SchemaAdapter):
        return identifier
    if isinstance(identifier, type) and issubclass(identifier, SchemaAdapter):
        return identifier()
    if isinstance(identifier, str):
        adapter_class = _adapters.get(identifier)
        if adapter_class is None and "." in identifier:
            try:
                adapter_class = import_string(identifier)
            except ImportError as exc:
                raise ConfigurationError(
                    f"schema_adapter '{identifier}' could not be imported: {exc}"
                ) from exc
        if isinstance(adapter_class, type) and issubclass(adapter_class, SchemaAdapter):
            return adapter_class()
    raise ConfigurationError(f"unknown schema_adapter {identifier!r}")


__all__ = [
    "SchemaAdapter",
    "DjangoSchemaAdapter",
    "register_adapter",
    "get_adapter",
]
