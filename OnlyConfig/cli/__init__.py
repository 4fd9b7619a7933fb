"""
Command-line interface module for the OnlyConfig package.

This module provides a command-line interface for working with
configuration files: showing them, merging several of them, and validating
them against a schema.

Key Components:
- main: Main entry point for the CLI
- cli: The click command group
"""

from OnlyConfig.cli.commands import cli, main

__all__ = ['cli', 'main']
