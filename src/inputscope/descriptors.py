"""Reading of package descriptor files (`package.json`, `lerna.json`, `pnpm-workspace.yaml`)."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from inputscope.errors import DescriptorParseError

PACKAGE_JSON = "package.json"
LERNA_JSON = "lerna.json"
PNPM_WORKSPACE_YAML = "pnpm-workspace.yaml"


def read_json_descriptor(path: Path) -> dict[str, Any] | None:
    """
    Read a JSON descriptor file. Returns `None` when the file doesn't exist.
    Raises `DescriptorParseError` when it exists but isn't a JSON object.
    """
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise DescriptorParseError(path, str(e)) from e
    if not isinstance(data, dict):
        raise DescriptorParseError(path, f"expected a JSON object, got {type(data).__name__}")
    return data


def read_yaml_descriptor(path: Path) -> dict[str, Any] | None:
    """Read a YAML descriptor file, with the same contract as `read_json_descriptor`."""
    if not path.is_file():
        return None
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise DescriptorParseError(path, str(e)) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise DescriptorParseError(path, f"expected a mapping, got {type(data).__name__}")
    return data


def read_package_json(project_root: Path) -> dict[str, Any]:
    """Read `package.json` at the project root, or `{}` if there is none."""
    return read_json_descriptor(project_root / PACKAGE_JSON) or {}


def string_list(value: Any) -> list[str] | None:
    """Return `value` as a list of strings if it is a list, else `None`."""
    if not isinstance(value, list):
        return None
    return [str(item) for item in value if isinstance(item, str)]
