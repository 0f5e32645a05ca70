"""
Custom exceptions for talon-django.

Configuration errors are raised while resources are registered; they are
fatal for the resource being registered. Errors raised by Django while a
query runs are never wrapped.
"""

from typing import Optional


class TalonError(Exception):
    """Base exception for talon-django errors."""


class ConfigurationError(TalonError):
    """Raised when a resource cannot be configured."""

    def __init__(self, message: str, resource_name: Optional[str] = None):
        self.resource_name = resource_name
        super().__init__(message)


class ConcernNotFound(ConfigurationError, LookupError):
    """Raised when no concern is available to supply a repository."""

    def __init__(self, message: str, concern: Optional[str] = None):
        self.concern = concern
        super().__init__(message)


class ActionNotSupported(TalonError, ValueError):
    """Raised when a hook is invoked for an action it does not handle."""

    def __init__(self, message: str, action: Optional[str] = None):
        self.action = action
        super().__init__(message)


__all__ = [
    "TalonError",
    "ConfigurationError",
    "ConcernNotFound",
    "ActionNotSupported",
]
