"""
OnlyConfig Configuration System.

This package provides a schema-validated configuration store with support
for hierarchical keys, deep merging, and change subscriptions.

Usage:
    from OnlyConfig.config import Config

    config = Config(ServiceSettings, {"api": {"port": 8080}})

    # Get a configuration value
    port = config.get("api.port")

    # Set a configuration value
    config.set(value=9000, key="api.port")

    # Watch a key
    unsubscribe = config.subscribe(on_change=print, key="api")
"""

from OnlyConfig.config.manager import Config
from OnlyConfig.config.recovery import Recovery
from OnlyConfig.config.schema import (
    PydanticSchema,
    Schema,
    SchemaIssue,
    ValidationResult,
    as_schema,
    is_schema,
)
from OnlyConfig.config.loader import read_config_file
from OnlyConfig.config.utils import deep_merge, get_path, nest_path

__all__ = [
    "Config",
    "Recovery",
    "Schema",
    "PydanticSchema",
    "SchemaIssue",
    "ValidationResult",
    "as_schema",
    "is_schema",
    "read_config_file",
    "deep_merge",
    "get_path",
    "nest_path",
]
