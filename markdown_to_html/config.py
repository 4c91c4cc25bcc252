"""Configuration loading and management."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
import tomllib

logger = logging.getLogger(__name__)

TOOL_NAME = "markdown-to-html"


@dataclass
class ConverterConfig:
    """Configuration for converting Markdown files to HTML.

    Attributes:
        title: Text placed inside the document ``<title>`` element. Inserted
            verbatim, without HTML escaping.
        max_file_size: Maximum source file size in bytes that will be read.

    Examples:
        ConverterConfig(title="Release notes", max_file_size=1024 * 1024)
    """

    title: str = "Markdown to HTML"

    # Limits
    max_file_size: int = 10 * 1024 * 1024


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`title` must not be empty")
    """


# Files looked up in each directory, in priority order, with the tables they may hold.
CONFIG_SOURCES: tuple[tuple[str, tuple[tuple[str, ...], ...]], ...] = (
    ("pyproject.toml", (("tool", TOOL_NAME),)),
    (f".{TOOL_NAME}.toml", ((TOOL_NAME,), ("tool", TOOL_NAME))),
)


def load_config(search_path: Path) -> ConverterConfig:
    """Load configuration from the nearest config file.

    Searches `search_path` and then each parent directory. In every directory
    `pyproject.toml` (``[tool.markdown-to-html]``) is checked before
    `.markdown-to-html.toml` (``[markdown-to-html]`` or
    ``[tool.markdown-to-html]``). The first file holding one of those tables
    wins, even when the table is empty. Files that cannot be read or decoded
    are skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        ConverterConfig: Loaded configuration, or defaults when nothing is found.

    Raises:
        ConfigError: If the winning table is not a mapping or names unknown
            settings.

    Examples:
        load_config(Path("docs"))
    """
    start = search_path.resolve()
    for directory in (start, *start.parents):
        for filename, table_paths in CONFIG_SOURCES:
            config_file = directory / filename
            found = _read_table(config_file, table_paths)
            if found is None:
                continue
            table_name, settings = found
            logger.debug("Using `[%s]` from %s", table_name, config_file)
            return _config_from_table(settings, table_name, config_file)

    return ConverterConfig()


def _read_table(
    config_file: Path, table_paths: tuple[tuple[str, ...], ...]
) -> tuple[str, object] | None:
    """Return the dotted name and value of the first table present in `config_file`."""
    if not config_file.is_file():
        return None

    try:
        data = tomllib.loads(config_file.read_text(encoding="UTF-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as error:
        logger.debug("Skipping unreadable config file %s: %s", config_file, error)
        return None

    for table_path in table_paths:
        value: object = data
        for key in table_path:
            value = value.get(key) if isinstance(value, dict) else None
        # TOML has no null, so None always means the table is absent
        if value is not None:
            return ".".join(table_path), value

    return None


def _config_from_table(settings: object, table_name: str, config_file: Path) -> ConverterConfig:
    if not isinstance(settings, dict):
        raise ConfigError(f"Invalid `[{table_name}]` settings in {config_file}")

    unknown = sorted(set(settings) - {field.name for field in fields(ConverterConfig)})
    if unknown:
        raise ConfigError(
            f"Unknown setting(s) {', '.join(unknown)} in `[{table_name}]` of {config_file}"
        )

    return ConverterConfig(**settings)


def validate_config(config: ConverterConfig) -> None:
    """Validate a `ConverterConfig` instance.

    Raises:
        ConfigError: If the title is not a non-empty string or the size limit
            is not a positive integer.

    Examples:
        validate_config(ConverterConfig(title="Notes"))
    """
    if not isinstance(config.title, str):
        raise ConfigError("`title` must be a string")
    if not config.title:
        raise ConfigError("`title` must not be empty")

    # bool is an int subclass
    size = config.max_file_size
    if isinstance(size, bool) or not isinstance(size, int):
        raise ConfigError("`max_file_size` must be an integer")
    if size <= 0:
        raise ConfigError("`max_file_size` must be a positive integer")


def apply_overrides(config: ConverterConfig, **overrides: object) -> ConverterConfig:
    """Return `config` with every non-None override applied.

    The same object is returned when there is nothing to change.

    Examples:
        updated = apply_overrides(config, title="Changelog")
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    return replace(config, **changes) if changes else config


def build_config(search_path: Path, **overrides: object) -> ConverterConfig:
    """Load configuration near `search_path`, apply overrides, and validate.

    Raises:
        ConfigError: If loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), title="Docs")
    """
    config = apply_overrides(load_config(search_path), **overrides)
    validate_config(config)
    return config
