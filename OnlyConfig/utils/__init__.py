"""
Utility functions for the OnlyConfig package.

This module provides output formatting helpers shared by the command-line
interface.
"""

import json
from typing import Any

import yaml

from OnlyConfig.utils.logging import get_logger

# Get a logger for this module
logger = get_logger(__name__)


def format_json(data: Any, indent: int = 2, sort_keys: bool = False) -> str:
    """
    Format data as JSON string with proper encoding.

    Args:
        data: The data to format as JSON
        indent: Number of spaces for indentation (default: 2)
        sort_keys: Whether to sort dictionary keys (default: False)

    Returns:
        A formatted JSON string

    Example:
        >>> print(format_json({'api': {'port': 8080}}))
        {
          "api": {
            "port": 8080
          }
        }
    """
    return json.dumps(
        data,
        indent=indent,
        ensure_ascii=False,
        sort_keys=sort_keys,
        default=str  # Handle non-serializable types
    )


def format_yaml(data: Any) -> str:
    """Format data as a block-style YAML document, preserving key order."""
    return yaml.safe_dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)


def format_data(data: Any, format_type: str = 'yaml') -> str:
    """Format data as ``json`` or ``yaml`` (the default)."""
    if format_type.lower() == 'json':
        return format_json(data)
    return format_yaml(data)
