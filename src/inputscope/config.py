"""
Configuration for project discovery.

`InputDataConfig` holds the reference and target project paths; callers build
it once and pass it to every call. Discovery settings may also come from a TOML
file: `.inputscope.toml`, `inputscope.toml`, or `pyproject.toml [tool.inputscope]`,
found by walking up from a start directory. Values are merged with explicit
options using precedence: explicit options > config file > built-in defaults.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, cast

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]

from inputscope.errors import ConfigError
from inputscope.file_resolver.modes import AllowlistMode
from inputscope.file_resolver.types import DiscoveryOptions

REFERENCE = "reference"
TARGET = "target"


@dataclass
class InputDataConfig:
    """Reference and target project roots. Read-only for everything that receives it."""

    reference_project_paths: list[str] = field(default_factory=list)
    target_project_paths: list[str] = field(default_factory=list)

    def project_paths(self, role: str) -> list[str]:
        if role == REFERENCE:
            return list(self.reference_project_paths)
        if role == TARGET:
            return list(self.target_project_paths)
        raise ValueError(f"Unknown project role: {role!r} (expected {REFERENCE!r} or {TARGET!r})")


@dataclass
class InputScopeConfig:
    """
    Parsed config from a TOML file. Fields are `None` when not set in the config,
    allowing the merge logic to distinguish "not configured" from "explicitly set
    to default value".
    """

    # Discovery
    depth: int | None = None
    extensions: list[str] | None = None
    allowlist: list[str] | None = None
    allowlist_mode: AllowlistMode | None = None
    omit_default_allowlist: bool | None = None
    # Projects
    reference_project_paths: list[str] | None = None
    target_project_paths: list[str] | None = None

    def to_input_data_config(self) -> InputDataConfig:
        return InputDataConfig(
            reference_project_paths=list(self.reference_project_paths or []),
            target_project_paths=list(self.target_project_paths or []),
        )


# Config file search order (first match wins within each directory level)
_CONFIG_FILENAMES = [".inputscope.toml", "inputscope.toml", "pyproject.toml"]

_VALID_FIELDS = {f.name for f in fields(InputScopeConfig)}

_PATH_FIELDS = ("reference_project_paths", "target_project_paths")


def find_config_file(start_dir: Path) -> Path | None:
    """
    Walk up from `start_dir` looking for a config file. Returns the first
    found, or `None`. Search order per directory: `.inputscope.toml` >
    `inputscope.toml` > `pyproject.toml` (only if it has `[tool.inputscope]`).
    """
    current = start_dir.resolve()
    while True:
        for filename in _CONFIG_FILENAMES:
            candidate = current / filename
            if candidate.is_file():
                if filename == "pyproject.toml":
                    if _pyproject_has_section(candidate):
                        return candidate
                else:
                    return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def _pyproject_has_section(path: Path) -> bool:
    """Check if a pyproject.toml has a [tool.inputscope] section."""
    try:
        data = tomllib.loads(path.read_text())
        return "inputscope" in data.get("tool", {})
    except (tomllib.TOMLDecodeError, OSError):
        return False


def load_config(config_path: Path) -> InputScopeConfig:
    """
    Load an `InputScopeConfig` from a TOML file. Relative project paths are
    resolved against the config file's directory.
    """
    try:
        data = tomllib.loads(config_path.read_text())
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {config_path}: {e}") from e

    if config_path.name == "pyproject.toml":
        data = data.get("tool", {}).get("inputscope", {})

    config = _parse_config_data(data)
    base = config_path.resolve().parent
    for name in _PATH_FIELDS:
        paths = getattr(config, name)
        if paths is not None:
            setattr(config, name, [str(base / p) for p in paths])
    return config


def _parse_config_data(data: dict[str, Any]) -> InputScopeConfig:
    """Parse a flat or sectioned TOML dict into InputScopeConfig."""
    # Flatten sections: [discovery] and [projects] merge into top level
    flat: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, dict):
            for sub_key, sub_value in cast(dict[str, Any], value).items():
                flat[sub_key] = sub_value
        else:
            flat[key] = value

    mapped: dict[str, Any] = {}
    for key, value in flat.items():
        snake_key = key.replace("-", "_")
        if snake_key in _VALID_FIELDS:
            mapped[snake_key] = value

    if "allowlist_mode" in mapped:
        try:
            mapped["allowlist_mode"] = AllowlistMode(mapped["allowlist_mode"])
        except ValueError as e:
            valid = ", ".join(m.value for m in AllowlistMode)
            raise ConfigError(
                f"Invalid allowlist-mode {mapped['allowlist_mode']!r} (expected one of: {valid})"
            ) from e

    return InputScopeConfig(**mapped)


def merge_options_with_config(
    options: DiscoveryOptions,
    config: InputScopeConfig | None,
    explicit_fields: set[str],
) -> DiscoveryOptions:
    """
    Merge discovery options with config file settings.

    Precedence: explicit options > config file > built-in defaults.
    """
    if config is None:
        return options

    for opt_field in fields(DiscoveryOptions):
        cfg_value = getattr(config, opt_field.name, None)
        if cfg_value is None:
            continue  # Not set in config
        if opt_field.name in explicit_fields:
            continue
        setattr(options, opt_field.name, cfg_value)

    return options
