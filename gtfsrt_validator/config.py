"""Defaults for check runs, read from the command line, environment or a YAML file.

A setting is taken from the first source that defines it:
1. CLI argument
2. Environment variable GTFSRT_<KEY> (e.g. GTFSRT_IGNORE="W009,E037")
3. <project>/.gtfsrt/config.yaml
4. None

Usage:
    from gtfsrt_validator.config import get_rule_codes

    ignored = get_rule_codes("ignore", cli_value=("W009",), project_path=Path("."))
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from gtfsrt_validator.errors import ConfigInvalidStructureError, ConfigParseError

logger = logging.getLogger(__name__)

# Other keys are kept, but logged at debug level.
KNOWN_SETTINGS: frozenset[str] = frozenset({"rules", "ignore", "timestamp"})

CONFIG_DIRNAME = ".gtfsrt"
CONFIG_FILENAME = "config.yaml"
ENV_PREFIX = "GTFSRT_"


def get_config_path(project_path: Path) -> Path:
    """Location of the config file for a project directory."""
    return project_path / CONFIG_DIRNAME / CONFIG_FILENAME


def load_config(project_path: Path) -> dict[str, Any]:
    """Read .gtfsrt/config.yaml under project_path.

    A missing, empty or null document yields an empty dict.

    Raises:
        ConfigParseError: If the file is not valid YAML.
        ConfigInvalidStructureError: If the document is not a mapping.
    """
    path = get_config_path(project_path)
    if not path.is_file():
        return {}

    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as err:
        raise ConfigParseError(str(path), str(err)) from err

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigInvalidStructureError(
            str(path), f"expected a mapping, got {type(data).__name__}"
        )

    unknown = sorted(str(key) for key in data if key not in KNOWN_SETTINGS)
    if unknown:
        logger.debug("Unknown settings in %s: %s", path, ", ".join(unknown))
    return data


def _env_name(key: str) -> str:
    """GTFSRT_ plus the upper-cased key, e.g. "ignore" -> "GTFSRT_IGNORE"."""
    return f"{ENV_PREFIX}{key.upper()}"


def get_setting(
    key: str,
    cli_value: Any | None = None,
    project_path: Path | None = None,
) -> Any | None:
    """Resolve one setting through CLI, environment and config file.

    Args:
        key: Setting name ("rules", "ignore" or "timestamp").
        cli_value: Value given on the command line, or None.
        project_path: Directory holding .gtfsrt/; None skips the file.
    """
    if cli_value is not None:
        return cli_value

    from_env = os.environ.get(_env_name(key))
    if from_env is not None:
        return from_env

    if project_path is None:
        return None
    return load_config(project_path).get(key)


def get_rule_codes(
    key: str,
    cli_value: tuple[str, ...] | list[str] | None = None,
    project_path: Path | None = None,
) -> list[str] | None:
    """Resolve a setting holding rule codes.

    Environment variables carry comma-separated codes ("E002,W009"); config
    files may use either a YAML list or the same string form. An empty CLI
    tuple counts as "not given".

    Returns:
        Upper-cased codes, or None if the setting is not set anywhere.
    """
    value = get_setting(key, cli_value=cli_value or None, project_path=project_path)
    if value is None:
        return None
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = [str(v) for v in value]
    else:
        items = [str(value)]
    return [code.strip().upper() for code in items if code.strip()]
