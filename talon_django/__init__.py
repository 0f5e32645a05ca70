"""
talon-django: schema driven admin resources for Django.
"""

from .concerns import Concern, get_concern, register_concern
from .exceptions import (
    ActionNotSupported,
    ConcernNotFound,
    ConfigurationError,
    TalonError,
)
from .registry import autodiscover, get_resource, register, resource_registry
from .repository import Repository
from .resource import Resource, ResourceDescriptor, name_field, resolve_descriptor

from .defaults import LIBRARY_VERSION as __version__

__all__ = [
    "Concern",
    "get_concern",
    "register_concern",
    "TalonError",
    "ConfigurationError",
    "ConcernNotFound",
    "ActionNotSupported",
    "Repository",
    "Resource",
    "ResourceDescriptor",
    "name_field",
    "resolve_descriptor",
    "register",
    "get_resource",
    "autodiscover",
    "resource_registry",
]
