"""Enumeration of the member packages of a monorepo."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from inputscope.descriptors import (
    LERNA_JSON,
    PACKAGE_JSON,
    PNPM_WORKSPACE_YAML,
    read_json_descriptor,
    read_package_json,
    read_yaml_descriptor,
    string_list,
)
from inputscope.errors import DescriptorParseError, ProjectNotFoundError


@dataclass(frozen=True)
class MonoRepoPackage:
    path: str
    name: str


def get_workspace_globs(project_root: Path) -> list[str]:
    """
    Workspace globs declared for a repository. Looks at `workspaces` in
    `package.json` (array or `{"packages": [...]}`), then `packages` in
    `lerna.json`, then `packages` in `pnpm-workspace.yaml`.
    """
    package_json = read_package_json(project_root)
    workspaces = package_json.get("workspaces")
    if isinstance(workspaces, dict):
        workspaces = workspaces.get("packages")
    globs = string_list(workspaces)
    if globs is not None:
        logger.debug(f"Using workspaces from {PACKAGE_JSON} in {project_root}")
        return globs

    for filename, reader in (
        (LERNA_JSON, read_json_descriptor),
        (PNPM_WORKSPACE_YAML, read_yaml_descriptor),
    ):
        descriptor = reader(project_root / filename)
        globs = string_list(descriptor.get("packages")) if descriptor else None
        if globs is not None:
            logger.debug(f"Using packages from {filename} in {project_root}")
            return globs
    return []


def _expand_directories(project_root: Path, pattern: str) -> list[Path]:
    pattern = pattern.removeprefix("./").rstrip("/")
    if not pattern:
        return [project_root]
    return sorted(p for p in project_root.glob(pattern) if p.is_dir())


def get_package_name(package_dir: Path) -> str:
    """The `name` from the directory's `package.json`, else the directory's base name."""
    try:
        descriptor = read_json_descriptor(package_dir / PACKAGE_JSON)
    except DescriptorParseError as e:
        logger.debug(f"Falling back to directory name for {package_dir}: {e}")
        descriptor = None
    name = descriptor.get("name") if descriptor else None
    if isinstance(name, str) and name:
        return name
    return package_dir.name


def get_mono_repo_packages(project_root: str | Path) -> list[MonoRepoPackage]:
    """
    List the member packages of a monorepo as `MonoRepoPackage(path, name)`,
    with `path` relative to the root. Globs are expanded in declaration order;
    a `!`-prefixed glob removes directories matched earlier. A repository
    without workspace declarations yields an empty list.
    """
    root = Path(project_root)
    if not root.is_dir():
        raise ProjectNotFoundError(root)

    candidates: dict[Path, None] = {}
    for pattern in get_workspace_globs(root):
        if pattern.startswith("!"):
            for directory in _expand_directories(root, pattern[1:]):
                candidates.pop(directory, None)
            continue
        for directory in _expand_directories(root, pattern):
            candidates.setdefault(directory, None)

    return [
        MonoRepoPackage(path=directory.relative_to(root).as_posix(), name=get_package_name(directory))
        for directory in candidates
    ]
