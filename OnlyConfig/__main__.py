#!/usr/bin/env python3
"""
Main entry point for the OnlyConfig package when run as a module.

This module provides the entry point for running the OnlyConfig package as a
module using `python -m OnlyConfig`. It delegates to the CLI's main function.

Example:
    $ python -m OnlyConfig show settings.yml --key api
    $ python -m OnlyConfig validate settings.yml --schema myapp.settings:Settings
"""

import sys

from OnlyConfig.cli import main

if __name__ == "__main__":
    sys.exit(main())
