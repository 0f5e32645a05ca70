"""
Domain scoped message lookup.

Resources render their titles through ``dgettext``: the message is looked up
in the gettext catalog named by the resource's domain for the active Django
language, then named values are substituted::

    dgettext("talon", "%(type)s listing", type="Blog Post")
"""

import gettext as gettext_module
import os
import threading
from typing import Any, Optional

from django.conf import settings as django_settings
from django.core.signals import setting_changed
from django.dispatch import receiver
from django.utils import translation

from .settings import ConcernSettings

_translations: dict[tuple[str, str], gettext_module.NullTranslations] = {}
_translations_lock = threading.Lock()

PACKAGE_LOCALE_DIR = os.path.join(os.path.dirname(__file__), "locale")


def _locale_dirs() -> list[str]:
    dirs = list(ConcernSettings.from_concern(None).locale_dirs or [])
    dirs.extend(str(path) for path in getattr(django_settings, "LOCALE_PATHS", []))
    dirs.append(PACKAGE_LOCALE_DIR)
    return dirs


def _current_locale() -> str:
    language = translation.get_language() or getattr(
        django_settings, "LANGUAGE_CODE", "en-us"
    )
    return translation.to_locale(language)


def get_translation(domain: str, locale: Optional[str] = None) -> gettext_module.NullTranslations:
    """Return the catalog chain for ``domain`` in ``locale``."""
    locale = locale or _current_locale()
    key = (domain, locale)
    with _translations_lock:
        catalog = _translations.get(key)
        if catalog is not None:
            return catalog
        catalog = gettext_module.NullTranslations()
        for localedir in _locale_dirs():
            found = gettext_module.translation(
                domain, localedir=localedir, languages=[locale], fallback=True
            )
            if type(found) is not gettext_module.NullTranslations:
                catalog.add_fallback(found)
        _translations[key] = catalog
        return catalog


def clear_translation_cache() -> None:
    with _translations_lock:
        _translations.clear()


@receiver(setting_changed)
def _reset_on_setting_change(sender, setting, **kwargs):
    if setting in {"TALON", "LOCALE_PATHS", "LANGUAGE_CODE"}:
        clear_translation_cache()


def dgettext(domain: str, message: str, **bindings: Any) -> str:
    """Translate ``message`` in ``domain`` and substitute ``bindings``."""
    text = get_translation(domain).gettext(message)
    if bindings:
        return text % bindings
    return text


__all__ = ["dgettext", "get_translation", "clear_translation_cache"]
