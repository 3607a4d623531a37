"""
Configuration for orestes.

Values are looked up in order: an explicit configuration mapping, then an
``ORESTES_<KEY>`` environment variable, then the built-in default.
"""

import os
from typing import Any, Dict, Mapping, Optional

ENV_PREFIX = "ORESTES_"

DEFAULT_CONFIG: Dict[str, Any] = {
    "base_path": "/v1",
    "http_domain": ".app.baqend.com",
    "revalidation_supported": True,
    "location": None,
    "timeout": 10.0,
}

_TRUE_VALUES = ("true", "1", "yes", "y", "t")


def get_env_config(key: str) -> Optional[str]:
    """Get a configuration value from the environment.

    Args:
        key: The configuration key, e.g. ``base_path``.

    Returns:
        The raw environment value, or None if it is not set.
    """
    return os.environ.get(ENV_PREFIX + key.upper())


def merge_configs(*configs: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Merge configuration mappings, later ones win.

    Args:
        *configs: Mappings to merge, None entries are skipped.

    Returns:
        A new merged dictionary.
    """
    merged: Dict[str, Any] = {}
    for config in configs:
        if config:
            merged.update(config)
    return merged


def _coerce(key: str, value: str) -> Any:
    default = DEFAULT_CONFIG.get(key)
    if isinstance(default, bool):
        return value.lower() in _TRUE_VALUES
    if isinstance(default, float):
        return float(value)
    return value


def get_config(key: str, config: Optional[Mapping[str, Any]] = None) -> Any:
    """Get a configuration value from the hierarchy.

    Args:
        key: The configuration key.
        config: Optional explicit configuration that takes precedence.

    Returns:
        The configuration value, coerced to the type of its default.
    """
    if config and key in config:
        return config[key]

    env_value = get_env_config(key)
    if env_value is not None:
        return _coerce(key, env_value)

    return DEFAULT_CONFIG.get(key)
