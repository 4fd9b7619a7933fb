"""
Utility functions for the OnlyConfig configuration system.

This module provides helper functions used by the configuration system,
including deep dictionary merging and dotted-path access.
"""

import copy
from typing import Any, Dict, List


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge two dictionaries, with override values taking precedence.

    Rules:
    - If both values are dictionaries, recursively merge them
    - If the value is a list, replace it completely (no merging)
    - Otherwise, override the base value with the override value

    Neither input is modified; every dictionary on a merged path and every
    list taken from ``override`` is a new object in the result.

    Args:
        base: Base dictionary
        override: Dictionary with values to override

    Returns:
        New dictionary with merged values
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        elif isinstance(value, dict):
            # Copy so later merges into the result never reach back into the patch
            result[key] = deep_merge({}, value)
        elif isinstance(value, list):
            # Replace lists completely, with a copy the patch no longer controls
            result[key] = copy.deepcopy(value)
        else:
            result[key] = value

    return result


def split_path(key: str) -> List[str]:
    """Split a dotted path such as ``"a.b.c"`` into its segments."""
    return key.split('.')


def get_path(data: Any, key: str, default: Any = None) -> Any:
    """
    Get a value from a nested dictionary using a dot-separated path.

    Args:
        data: The dictionary to extract values from
        key: A dot-separated path to the desired value (e.g., 'database.pool.size')
        default: The value to return if any segment of the path is missing

    Returns:
        The value at the specified path or the default value if not found

    Example:
        >>> get_path({'a': {'b': {'c': 1}}}, 'a.b.c')
        1
        >>> get_path({'a': {}}, 'a.x', 'missing')
        'missing'
    """
    value = data
    for part in split_path(key):
        if isinstance(value, dict) and part in value:
            value = value[part]
        else:
            return default
    return value


def nest_path(key: str, value: Any) -> Dict[str, Any]:
    """
    Wrap a value into nested dictionaries shaped by a dotted path.

    Example:
        >>> nest_path('a.b', 5)
        {'a': {'b': 5}}
    """
    parts = split_path(key)
    nested: Any = value
    for part in reversed(parts):
        nested = {part: nested}
    return nested


def paths_overlap(first: str, second: str) -> bool:
    """
    Return True if one dotted path equals, contains or is contained by the other.

    Example:
        >>> paths_overlap('a.b', 'a.b.c')
        True
        >>> paths_overlap('a.b', 'a.bc')
        False
    """
    first_parts = split_path(first)
    second_parts = split_path(second)
    shortest = min(len(first_parts), len(second_parts))
    return first_parts[:shortest] == second_parts[:shortest]
