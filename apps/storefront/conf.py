"""
App settings for variant selection, read from settings.STOREFRONT_SELECTION.
"""

from django.conf import settings

DEFAULTS = {
    'CONFLICT_ATTRIBUTION': True,
    'ACTIVE_VARIANTS_ONLY': True,
}


def selection_setting(name):
    if name not in DEFAULTS:
        raise KeyError(f"Unknown STOREFRONT_SELECTION setting: {name}")
    overrides = getattr(settings, 'STOREFRONT_SELECTION', {}) or {}
    return overrides.get(name, DEFAULTS[name])
