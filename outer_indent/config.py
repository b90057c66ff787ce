"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
import tomllib

from .numbering import NUMBER_FORMATS, NumberingConfig, get_format


@dataclass
class OutlineConfig:
    """Configuration for rendering outline documents with outer indentation.

    Attributes:
        marker_char: Character whose leading run marks a headline.
        separator: Character that ends a headline's marker run.
        numbering: Whether headlines are numbered (and their marker runs hidden).
        max_numbered_level: Deepest numbered headline level; None numbers all levels.
        number_format: Name of a registered numbering format (``"dotted"``,
            ``"dotted-period"``, ``"parenthesized"``).
        indentation_per_level: Columns per level of the stock indentation used
            while outer indentation is off.
        inlinetask_min_level: Smallest marker run treated as an inline task.
        max_file_size: Maximum file size in bytes that will be processed.
        max_line_length: Maximum line length allowed during parsing.
        max_headlines: Maximum number of headlines in a document.

    Examples:
        OutlineConfig(numbering=True, max_numbered_level=3)
    """

    # Headline syntax
    marker_char: str = "*"
    separator: str = " "
    inlinetask_min_level: int = 15

    # Numbering
    numbering: bool = False
    max_numbered_level: int | None = None
    number_format: str = "dotted"

    # Stock indentation
    indentation_per_level: int = 2

    # Limits
    max_file_size: int = 10 * 1024 * 1024
    max_line_length: int = 10_000
    max_headlines: int = 10_000


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`max_numbered_level` must be >= 1")
    """


def load_config(search_path: Path) -> OutlineConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.outer-indent]`` table from `pyproject.toml` and the
    ``[outer-indent]`` or ``[tool.outer-indent]`` table from
    `.outer-indent.toml` when present. Returns default values when no
    configuration is found. TOML files that cannot be read or decoded are
    skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        OutlineConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If a table is present but not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("notes"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "outer-indent")]
        )
        if pyproject_config is not None:
            return pyproject_config

        dotfile_config = _load_from_file(
            current / ".outer-indent.toml",
            table_paths=[("outer-indent",), ("tool", "outer-indent")],
        )
        if dotfile_config is not None:
            return dotfile_config

        parent = current.parent
        if parent == current:
            break
        current = parent

    return OutlineConfig()


_MISSING = object()


def _load_from_file(
    config_file: Path, table_paths: list[tuple[str, ...]]
) -> OutlineConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> OutlineConfig:
    table_display = ".".join(table_path)

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    # Accept hyphenated keys (max-numbered-level) as aliases.
    normalized = {key.replace("-", "_"): value for key, value in raw_config.items()}
    try:
        return OutlineConfig(**normalized)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def validate_config(config: OutlineConfig) -> None:
    """Validate an `OutlineConfig` instance.

    Raises:
        ConfigError: If marker settings are not single characters, numeric
            settings are not positive integers, or the number format is unknown.

    Examples:
        validate_config(OutlineConfig(max_numbered_level=2))
    """
    _ensure_integers(
        {
            "inlinetask_min_level": config.inlinetask_min_level,
            "indentation_per_level": config.indentation_per_level,
            "max_file_size": config.max_file_size,
            "max_line_length": config.max_line_length,
            "max_headlines": config.max_headlines,
            **(
                {"max_numbered_level": config.max_numbered_level}
                if config.max_numbered_level is not None
                else {}
            ),
        }
    )

    if not isinstance(config.marker_char, str) or len(config.marker_char) != 1:
        raise ConfigError("`marker_char` must be a single character")
    if not isinstance(config.separator, str) or len(config.separator) != 1:
        raise ConfigError("`separator` must be a single character")
    if config.marker_char == config.separator or config.separator == "\n":
        raise ConfigError("`separator` must differ from `marker_char` and newline")
    if not isinstance(config.numbering, bool):
        raise ConfigError("`numbering` must be a boolean")
    if config.number_format not in NUMBER_FORMATS:
        raise ConfigError(f"`number_format` must be one of: {', '.join(NUMBER_FORMATS)}")

    if config.max_numbered_level is not None and config.max_numbered_level < 1:
        raise ConfigError("`max_numbered_level` must be >= 1")
    if config.inlinetask_min_level < 2:
        raise ConfigError("`inlinetask_min_level` must be >= 2")

    _ensure_positive(
        {
            "indentation_per_level": config.indentation_per_level,
            "max_file_size": config.max_file_size,
            "max_line_length": config.max_line_length,
            "max_headlines": config.max_headlines,
        }
    )


def apply_overrides(config: OutlineConfig, **overrides: object) -> OutlineConfig:
    """Apply override values to an `OutlineConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        OutlineConfig: New configuration with the provided overrides applied. The
        original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `OutlineConfig`.

    Examples:
        updated = apply_overrides(config, numbering=True, max_numbered_level=2)
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> OutlineConfig:
    """Load, override, and validate configuration.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), numbering=True)
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    validate_config(config)
    return config


def numbering_config(config: OutlineConfig) -> NumberingConfig:
    """Derive the numbering settings used by the indentation and hiding code."""
    try:
        format_function = get_format(config.number_format)
    except ValueError as error:
        raise ConfigError(str(error)) from error
    return NumberingConfig(
        enabled=config.numbering,
        max_level=config.max_numbered_level,
        format_function=format_function,
    )


def _ensure_positive(values: dict[str, int]) -> None:
    for key, value in values.items():
        if value <= 0:
            raise ConfigError(f"`{key}` must be a positive integer")


def _ensure_integers(values: dict[str, object]) -> None:
    for key, value in values.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{key}` must be an integer")
