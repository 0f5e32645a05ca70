"""
Resource registry.

Resources are registered once, at startup, usually from a ``talon`` module
of an installed app::

    # blog/talon.py
    from talon_django import Resource, register

    from .models import BlogPost

    @register(BlogPost, concern="my_blog")
    class BlogPostResource(Resource):
        pass

A resource whose configuration cannot be resolved raises
``ConfigurationError`` and is not registered.
"""

import logging
import threading
from typing import Any, Callable, Optional, Union

from django.db import models
from django.utils.module_loading import autodiscover_modules

from .resource import Resource, resolve_descriptor

logger = logging.getLogger(__name__)

DISCOVERY_MODULE = "talon"


class ResourceRegistry:
    """
    Central registry of the managed resources, keyed by model.
    """

    def __init__(self):
        self._resources: dict[type[models.Model], Resource] = {}
        self._lock = threading.Lock()

    def register(
        self,
        schema: Optional[type[models.Model]] = None,
        resource_class: Optional[type[Resource]] = None,
        **options: Any,
    ) -> Resource:
        """Resolve the configuration of ``schema`` and register its resource."""
        resource_class = resource_class or Resource
        resource = resource_class(resolve_descriptor(schema=schema, **options))
        with self._lock:
            if schema in self._resources:
                logger.info("Resource '%s' already registered, updating...", resource.params_key)
            self._resources[schema] = resource
        logger.info("Registered resource: %s", resource.params_key)
        return resource

    def unregister(self, schema: type[models.Model]) -> bool:
        with self._lock:
            resource = self._resources.pop(schema, None)
        if resource is None:
            return False
        logger.info("Unregistered resource: %s", resource.params_key)
        return True

    def get_resource(self, key: Union[type[models.Model], str]) -> Optional[Resource]:
        """Look up a resource by model, params key or route name."""
        if isinstance(key, type):
            return self._resources.get(key)
        for resource in self._resources.values():
            if key in (resource.params_key, resource.route_name):
                return resource
        return None

    def list_resources(self, concern: Optional[str] = None) -> list[Resource]:
        resources = list(self._resources.values())
        if concern is not None:
            resources = [r for r in resources if r.concern == concern]
        return resources

    def is_registered(self, schema: type[models.Model]) -> bool:
        return schema in self._resources

    def clear(self) -> None:
        with self._lock:
            self._resources.clear()
        logger.info("Cleared all resources from registry")


resource_registry = ResourceRegistry()


def register(
    schema: type[models.Model], **options: Any
) -> Callable[[type[Resource]], type[Resource]]:
    """
    Class decorator registering a ``Resource`` subclass for ``schema``.

    ``options`` are the resource options: ``concern``, ``domain``,
    ``adapter``, ``repo`` and ``paginate``.
    """

    def decorator(resource_class: type[Resource]) -> type[Resource]:
        resource_registry.register(schema, resource_class=resource_class, **options)
        return resource_class

    return decorator


def get_resource(key: Union[type[models.Model], str]) -> Optional[Resource]:
    return resource_registry.get_resource(key)


def autodiscover() -> None:
    """Import the ``talon`` module of every installed app."""
    autodiscover_modules(DISCOVERY_MODULE)
    logger.debug("Discovered %s resources", len(resource_registry.list_resources()))


__all__ = [
    "ResourceRegistry",
    "resource_registry",
    "register",
    "get_resource",
    "autodiscover",
]
