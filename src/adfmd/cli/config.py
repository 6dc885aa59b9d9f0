#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adfmd/cli/config.py
"""Configuration file discovery and loading for the adfmd CLI.

A configuration file holds up to three tables, one per option class::

    [markdown]              # MarkdownRendererOptions
    bullet_marker = "*"

    [parser]                # MarkdownParserOptions
    parse_tables = false

    [read_view]             # ReadViewOptions
    rule_width = 60

    [read_view.theme]       # Theme
    muted = "#888888"

The same tables may live under ``[tool.adfmd]`` in ``pyproject.toml``.
"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]

import yaml

from adfmd.constants import CONFIG_FILENAMES, PYPROJECT_TOOL_SECTION
from adfmd.exceptions import AdfMdError, ConfigError, ValidationError
from adfmd.options.markdown import MarkdownParserOptions, MarkdownRendererOptions
from adfmd.options.readview import ReadViewOptions

logger = logging.getLogger(__name__)

CONFIG_SECTIONS = ("markdown", "parser", "read_view")


def _read_toml(path: Path) -> Any:
    with open(path, "rb") as f:
        return tomllib.load(f)


def _read_yaml(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        # An empty YAML file loads as None.
        return yaml.safe_load(f) or {}


def _read_json(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


_LOADERS: dict[str, Callable[[Path], Any]] = {
    ".toml": _read_toml,
    ".yaml": _read_yaml,
    ".yml": _read_yaml,
    ".json": _read_json,
}


def _pyproject_section(path: Path) -> dict[str, Any]:
    """Return the ``[tool.adfmd]`` table of a pyproject file, or ``{}``."""
    data = _read_toml(path)
    section = data.get("tool", {}).get(PYPROJECT_TOOL_SECTION, {})
    if not isinstance(section, dict):
        raise ConfigError(
            f"[tool.{PYPROJECT_TOOL_SECTION}] must be a table, got {type(section).__name__}",
            config_path=str(path),
        )
    return section


def load_config_file(config_path: Union[str, Path]) -> dict[str, Any]:
    """Load a configuration file.

    The format follows the file extension; ``pyproject.toml`` contributes
    only its ``[tool.adfmd]`` table.

    Parameters
    ----------
    config_path : str or Path
        Path to the configuration file

    Returns
    -------
    dict
        Configuration tables

    Raises
    ------
    ConfigError
        If the file is missing, has an unsupported extension, cannot be
        parsed, or does not hold a table at its root

    """
    path = Path(config_path)
    if not path.is_file():
        raise ConfigError(f"Configuration file does not exist: {path}", config_path=str(path))

    try:
        if path.name.lower() == "pyproject.toml":
            return _pyproject_section(path)
        loader = _LOADERS.get(path.suffix.lower())
        if loader is None:
            raise ConfigError(
                f"Unsupported config file format: {path.suffix}. Use .toml, .yaml, .yml or .json",
                config_path=str(path),
            )
        config = loader(path)
    except ConfigError:
        raise
    except (OSError, ValueError, yaml.YAMLError) as e:
        # tomllib.TOMLDecodeError and json.JSONDecodeError are ValueErrors.
        raise ConfigError(f"Could not read config file {path}: {e}", config_path=str(path), original_error=e) from e

    if not isinstance(config, dict):
        raise ConfigError(
            f"Config file must contain a table at its root, got {type(config).__name__}",
            config_path=str(path),
        )
    logger.debug("Loaded configuration from %s", path)
    return config


def _has_tool_section(pyproject: Path) -> bool:
    try:
        return bool(_pyproject_section(pyproject))
    except (OSError, ValueError, ConfigError):
        logger.debug("Ignoring unreadable %s during config discovery", pyproject)
        return False


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Search ``start_dir`` and its parents for a configuration file.

    In each directory the dedicated files are checked first, in
    :data:`~adfmd.constants.CONFIG_FILENAMES` order, then ``pyproject.toml``
    if it has a ``[tool.adfmd]`` table.
    """
    current = (start_dir or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        for filename in CONFIG_FILENAMES:
            candidate = directory / filename
            if candidate.is_file():
                return candidate
        pyproject = directory / "pyproject.toml"
        if pyproject.is_file() and _has_tool_section(pyproject):
            return pyproject
    return None


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find the configuration file for this run.

    Parent directories of ``start_dir`` (default: the working directory) are
    searched first, then the user's home directory.
    """
    found = find_config_in_parents(start_dir)
    if found is not None:
        return found
    home = Path.home()
    for filename in CONFIG_FILENAMES:
        candidate = home / filename
        if candidate.is_file():
            return candidate
    return None


@dataclass(frozen=True)
class CliConfig:
    """Options resolved from a configuration file.

    Parameters
    ----------
    markdown : MarkdownRendererOptions
        Renderer options from the ``markdown`` table
    parser : MarkdownParserOptions
        Parser options from the ``parser`` table
    read_view : ReadViewOptions
        Read-view options from the ``read_view`` table
    source : Path or None
        File the configuration came from

    """

    markdown: MarkdownRendererOptions = field(default_factory=MarkdownRendererOptions)
    parser: MarkdownParserOptions = field(default_factory=MarkdownParserOptions)
    read_view: ReadViewOptions = field(default_factory=ReadViewOptions)
    source: Optional[Path] = None


def _section(config: dict[str, Any], name: str, path: Optional[Path]) -> dict[str, Any]:
    value = config.get(name, {})
    if not isinstance(value, dict):
        raise ConfigError(f"Config section '{name}' must be a table", config_path=str(path) if path else None)
    return value


def build_cli_config(config: dict[str, Any], source: Optional[Path] = None) -> CliConfig:
    """Build option objects from loaded configuration tables.

    Raises
    ------
    ConfigError
        If a section is not a table, names an unknown option, or holds an
        invalid value

    """
    unknown = sorted(set(config) - set(CONFIG_SECTIONS))
    if unknown:
        logger.warning("Ignoring unknown config sections: %s", ", ".join(unknown))

    config_path = str(source) if source else None
    try:
        return CliConfig(
            markdown=MarkdownRendererOptions.from_mapping(_section(config, "markdown", source)),
            parser=MarkdownParserOptions.from_mapping(_section(config, "parser", source)),
            read_view=ReadViewOptions.from_mapping(_section(config, "read_view", source)),
            source=source,
        )
    except ConfigError:
        raise
    except (AdfMdError, TypeError, ValueError) as e:
        message = e.message if isinstance(e, ValidationError) else str(e)
        raise ConfigError(f"Invalid configuration: {message}", config_path=config_path, original_error=e) from e


def resolve_cli_config(explicit_path: Optional[Union[str, Path]] = None) -> CliConfig:
    """Load the explicit config file, else a discovered one, else defaults."""
    path = Path(explicit_path) if explicit_path else discover_config_file()
    if path is None:
        logger.debug("No configuration file found; using defaults")
        return CliConfig()
    return build_cli_config(load_config_file(path), source=path)
