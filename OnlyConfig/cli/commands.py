"""
Command-line interface (CLI) commands for the OnlyConfig package.

This module provides commands for inspecting, merging, and validating
configuration files from the command line.
"""

import importlib
import os
import sys
from typing import Any, Optional, Tuple

import click

from OnlyConfig.config import Config, Recovery, as_schema, read_config_file
from OnlyConfig.exceptions import OnlyConfigError
from OnlyConfig.utils import format_data
from OnlyConfig.utils.logging import get_logger, set_log_level

# Get a logger for this module
logger = get_logger(__name__)

# Marks a key that is absent, as opposed to present with a null value
_MISSING = object()


# Apply the log level if specified in the command options
def apply_log_level(ctx, param, value):
    if value:
        set_log_level(value)
    return value


# Add an option for setting the log level to all commands
def log_level_option(f):
    return click.option('--log-level',
                        type=click.Choice(['debug', 'info', 'warning', 'error', 'critical'], case_sensitive=False),
                        callback=apply_log_level, expose_value=False, is_eager=True,
                        help='Set the logging level')(f)


def format_option(f):
    return click.option('--format', 'format_type', type=click.Choice(['yaml', 'json'], case_sensitive=False),
                        default='yaml', help='Output format (yaml or json)')(f)


def load_schema(reference: str) -> Any:
    """
    Import a schema from a ``module:attribute`` reference.

    The current working directory is put on ``sys.path`` first so that
    modules of the project being configured can be imported from the
    installed ``onlyconfig`` script.

    Args:
        reference: For example ``myapp.settings:Settings``

    Returns:
        The schema descriptor (pydantic model classes are wrapped)

    Raises:
        click.BadParameter: If the reference is malformed or cannot be imported
    """
    module_name, _, attribute = reference.partition(':')
    if not module_name or not attribute:
        raise click.BadParameter(f"Expected 'module:attribute', got '{reference}'", param_hint='--schema')
    cwd = os.getcwd()
    if cwd not in sys.path:
        sys.path.insert(0, cwd)
    try:
        module = importlib.import_module(module_name)
        target = getattr(module, attribute)
    except (ImportError, AttributeError) as e:
        raise click.BadParameter(f"Cannot import schema '{reference}': {e}", param_hint='--schema')
    try:
        return as_schema(target)
    except OnlyConfigError as e:
        raise click.BadParameter(e.message, param_hint='--schema')


@click.group()
@click.version_option(package_name='OnlyConfig')
def cli():
    """OnlyConfig CLI for inspecting and validating configuration files."""
    pass


@cli.command('show')
@click.argument('config_path', type=click.Path(dir_okay=False))
@click.option('--key', help='Show only the value at a dotted key (e.g. api.port)')
@format_option
@log_level_option
def show_command(config_path, key, format_type):
    """Display a configuration file, or one key of it."""
    try:
        config = Config(initial_values=read_config_file(config_path))
    except OnlyConfigError as e:
        logger.error(f"Error reading configuration: {e.message}")
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)

    data = config.get(key, _MISSING) if key else config.get_all()
    if data is _MISSING:
        click.echo(f"Error: Key '{key}' not found in configuration", err=True)
        sys.exit(1)

    click.echo(format_data(data, format_type))


@cli.command('merge')
@click.argument('config_paths', nargs=-1, required=True, type=click.Path(dir_okay=False))
@click.option('--schema', 'schema_ref',
              help='Validate against a schema given as module:attribute (importable from the current directory)')
@format_option
@log_level_option
def merge_command(config_paths: Tuple[str, ...], schema_ref: Optional[str], format_type):
    """Deep-merge configuration files left to right and print the result."""
    schema = load_schema(schema_ref) if schema_ref else None
    try:
        config = Config(schema)
        for path in config_paths:
            config.load_file(path)
    except OnlyConfigError as e:
        logger.error(f"Error merging configuration: {e.message}")
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)

    click.echo(format_data(config.get_all(), format_type))


@cli.command('validate')
@click.argument('config_path', type=click.Path(dir_okay=False))
@click.option('--schema', 'schema_ref', required=True,
              help='Schema given as module:attribute (importable from the current directory)')
@click.option('--allow-unknown', is_flag=True, help='Accept keys the schema does not declare')
@log_level_option
def validate_command(config_path, schema_ref, allow_unknown):
    """Validate a configuration file against a schema."""
    schema = load_schema(schema_ref)
    on_error = (lambda error: Recovery.ALLOW_UNKNOWN) if allow_unknown else None
    try:
        Config(schema).load_file(config_path, on_error=on_error)
    except OnlyConfigError as e:
        issues = getattr(e, 'issues', None)
        if issues:
            click.echo("Configuration validation errors:")
            for issue in issues:
                click.echo(f"  - {issue.path or '<root>'}: {issue.message}")
        else:
            click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)

    click.echo(f"Configuration file is valid: {config_path}")


def main():
    """Main entry point for the OnlyConfig command-line interface."""
    return cli()


if __name__ == '__main__':
    sys.exit(main())
