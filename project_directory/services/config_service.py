"""Read access to site-wide configuration settings.

Settings are stored as generic JSON values in ``SystemConfigSetting``.
Switches such as ``forbidEditing`` may have been written as real
booleans, numbers or strings, so :func:`is_enabled` accepts any of the
common boolean-like spellings.
"""
from __future__ import annotations

from typing import Any

from ..db import db
from ..models import SystemConfigSetting

FORBID_EDITING = "forbidEditing"
DIRECTORY_DISABLED = "directoryDisabled"

_TRUTHY_STRINGS = {"true", "1", "yes", "on"}


def get_setting(key: str, default: Any = None) -> Any:
    """Return the stored value for ``key``, or ``default`` when unset."""
    setting = db.session.get(SystemConfigSetting, key)
    if setting is None:
        return default
    return setting.value


def set_setting(key: str, value: Any) -> SystemConfigSetting:
    """Create or overwrite a setting. The caller commits."""
    setting = db.session.get(SystemConfigSetting, key)
    if setting is None:
        setting = SystemConfigSetting(key=key)
        db.session.add(setting)
    setting.value = value
    return setting


def as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY_STRINGS
    return False


def is_enabled(key: str) -> bool:
    return as_bool(get_setting(key, False))


def is_editing_forbidden() -> bool:
    """True while project editing is globally disabled."""
    return is_enabled(FORBID_EDITING)
