"""Allowlist modes: which rule source decides what is in scope for a project."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from loguru import logger

from inputscope.file_resolver.defaults import DEPENDENCY_DIRS
from inputscope.file_resolver.gitignore import has_gitignore


class AllowlistMode(str, Enum):
    """
    `npm` keeps what the package would publish (`files` in `package.json`),
    `git` drops what `.gitignore` ignores, `all` applies only the defaults and
    `export-map` keeps the internal paths of the `exports` map.
    """

    npm = "npm"
    git = "git"
    all = "all"
    export_map = "export-map"


def is_inside_dependency_dir(project_root: Path) -> bool:
    """True if the project is an installed dependency, e.g. `.../node_modules/@scope/pkg`."""
    return any(part in DEPENDENCY_DIRS for part in project_root.resolve().parts)


def resolve_allowlist_mode(project_root: Path) -> AllowlistMode:
    """
    Autodetect the mode for a project: installed dependencies are treated as
    published packages (`npm`) even if they ship a `.gitignore`; otherwise a
    `.gitignore` selects `git`, and `npm` is the fallback. `all` and
    `export-map` are never detected.
    """
    if is_inside_dependency_dir(project_root):
        mode = AllowlistMode.npm
    elif has_gitignore(project_root):
        mode = AllowlistMode.git
    else:
        mode = AllowlistMode.npm
    logger.debug(f"Detected allowlist mode {mode.value} for {project_root}")
    return mode
