"""
Reading configuration documents from YAML or JSON files.
"""

import json
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from OnlyConfig.exceptions import ConfigFileError
from OnlyConfig.utils.logging import get_logger

logger = get_logger(__name__)

YAML_SUFFIXES = ('.yaml', '.yml')
JSON_SUFFIXES = ('.json',)


def read_config_file(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a configuration mapping from a YAML or JSON file.

    The format is chosen from the file extension. An empty document reads as
    an empty mapping.

    Args:
        path (Union[str, Path]): Path to the configuration file

    Returns:
        Dict[str, Any]: The parsed configuration

    Raises:
        ConfigFileError: If the file is missing, has an unsupported extension,
            cannot be parsed, or does not contain a mapping

    Examples:
        >>> values = read_config_file("settings.yml")
        >>> config.set(value=values)
    """
    path = Path(path) if isinstance(path, str) else path

    if not path.is_file():
        raise ConfigFileError(f"Configuration file not found: {path}", context={"path": str(path)})

    suffix = path.suffix.lower()
    try:
        with open(path, 'r', encoding='utf-8') as f:
            if suffix in YAML_SUFFIXES:
                data = yaml.safe_load(f)
            elif suffix in JSON_SUFFIXES:
                data = json.load(f)
            else:
                raise ConfigFileError(
                    f"Unsupported configuration file format: {path.suffix}",
                    context={"path": str(path)},
                )
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigFileError(
            f"Failed to parse configuration file {path}: {e}",
            context={"path": str(path)},
            cause=e,
        ) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigFileError(
            f"Configuration file {path} must contain a mapping, got {type(data).__name__}",
            context={"path": str(path)},
        )

    logger.debug(f"Read configuration from {path}")
    return data
