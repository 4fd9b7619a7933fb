"""
OnlyConfig - A runtime configuration store with schema validation and change subscriptions.

This module provides a configuration object that deep-merges updates,
validates them against a pluggable schema, and notifies subscribers when
values change.

Key Components:
- Config: Schema-validated configuration store with keyed subscriptions
- Observable: A value that notifies listeners when it is replaced
- PydanticSchema: Adapter that lets a pydantic model act as the schema
- CLI: Command-line interface for inspecting and validating config files

Usage Examples:
    from pydantic import BaseModel, ConfigDict
    from OnlyConfig import Config, Recovery

    class Settings(BaseModel):
        model_config = ConfigDict(extra="forbid")
        debug: bool = False

    config = Config(Settings)
    config.subscribe(on_change=print, key="debug")
    config.set(value=True, key="debug")

    # Accept undeclared keys instead of failing
    config.set(value={"extra": 1}, on_error=lambda error: Recovery.ALLOW_UNKNOWN)

    # Setting the log level
    from OnlyConfig import set_log_level
    set_log_level('debug')
"""

__version__ = '1.0.0'

# Import and configure logging early
from OnlyConfig.utils.logging import get_logger, set_log_level, configure_logging

from OnlyConfig.config import (
    Config,
    PydanticSchema,
    Recovery,
    Schema,
    SchemaIssue,
    ValidationResult,
    deep_merge,
    read_config_file,
)
from OnlyConfig.exceptions import (
    ConfigError,
    ConfigFileError,
    InvalidSchemaError,
    OnlyConfigError,
    ValidationError,
)
from OnlyConfig.observable import Observable

__all__ = [
    'Config',
    'Observable',
    'Recovery',
    'Schema',
    'PydanticSchema',
    'SchemaIssue',
    'ValidationResult',
    'deep_merge',
    'read_config_file',
    'OnlyConfigError',
    'ConfigError',
    'InvalidSchemaError',
    'ValidationError',
    'ConfigFileError',
    'set_log_level',
    'configure_logging',
    'get_logger',
]
