"""
Assembly of the per-project data consumed by analysis: project metadata from
`package.json`, the revision, and the discovered files with their contents.
"""

from __future__ import annotations

import subprocess
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from inputscope.config import REFERENCE, TARGET, InputDataConfig
from inputscope.descriptors import read_package_json
from inputscope.errors import InputScopeError, ProjectNotFoundError
from inputscope.file_resolver import DiscoveryOptions, FileResolver
from inputscope.file_resolver.globs import normalize_rel_path

NOT_A_GIT_ROOT = "[not-a-git-root]"
DEFAULT_MAIN_ENTRY = "index.js"


@dataclass(frozen=True)
class Project:
    path: str
    name: str
    version: str | None
    main_entry: str
    commit_hash: str


@dataclass(frozen=True)
class FileContext:
    code: str


@dataclass(frozen=True)
class FileEntry:
    """A discovered file: `file` is `./`-prefixed and relative to the project root."""

    file: str
    context: FileContext


@dataclass(frozen=True)
class ProjectData:
    project: Project
    entries: list[FileEntry]


@dataclass(frozen=True)
class ProjectFailure:
    """The result slot of a project whose data could not be assembled."""

    path: str
    error: Exception


def as_relative_entry(path: str) -> str:
    """Normalize `my/index.js`, `./my/index.js` or `/my/index.js` to `./my/index.js`."""
    return "./" + normalize_rel_path(path)


def get_git_commit_hash(project_root: str | Path) -> str:
    """
    The commit checked out at `project_root`, or `NOT_A_GIT_ROOT` when the
    directory isn't a git root or git can't tell.
    """
    root = Path(project_root)
    if not (root / ".git").exists():
        return NOT_A_GIT_ROOT
    try:
        result = subprocess.run(
            ["git", "rev-parse", "HEAD"],
            cwd=root,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        logger.debug(f"Could not run git in {root}: {e}")
        return NOT_A_GIT_ROOT
    commit = result.stdout.strip()
    if result.returncode != 0 or not commit:
        return NOT_A_GIT_ROOT
    return commit


def get_project_meta(project_root: str | Path) -> Project:
    """Read project metadata. Missing fields fall back to the directory name and `./index.js`."""
    root = Path(project_root)
    if not root.is_dir():
        raise ProjectNotFoundError(root)
    package_json = read_package_json(root)
    name = package_json.get("name")
    version = package_json.get("version")
    main = package_json.get("main")
    return Project(
        path=str(root),
        name=name if isinstance(name, str) and name else root.name,
        version=str(version) if version is not None else None,
        main_entry=as_relative_entry(main if isinstance(main, str) and main else DEFAULT_MAIN_ENTRY),
        commit_hash=get_git_commit_hash(root),
    )


def _entry_for(resolver: FileResolver, found: str) -> FileEntry | None:
    path = Path(found)
    if path.is_absolute():
        rel = path.relative_to(resolver.root).as_posix()
    else:
        rel = normalize_rel_path(found)
    source = resolver.root / rel
    # Export targets can name build outputs that don't exist yet.
    if not source.is_file():
        logger.debug(f"Skipping missing file {source}")
        return None
    code = source.read_text(encoding="utf-8", errors="replace")
    return FileEntry(file=as_relative_entry(rel), context=FileContext(code=code))


def create_project_data(
    project_root: str | Path, options: DiscoveryOptions | None = None
) -> ProjectData:
    """Assemble the `ProjectData` of one project. Errors propagate to the caller."""
    project = get_project_meta(project_root)
    resolver = FileResolver(project_root, options)
    entries = [
        entry
        for entry in (_entry_for(resolver, found) for found in resolver.resolve())
        if entry is not None
    ]
    return ProjectData(project=project, entries=entries)


def create_data_object(
    project_paths: Iterable[str | Path], options: DiscoveryOptions | None = None
) -> list[ProjectData | ProjectFailure]:
    """
    Assemble data for several projects, one result per path in input order.
    A project that fails gets a `ProjectFailure` in its slot; the others are
    still assembled.
    """
    results: list[ProjectData | ProjectFailure] = []
    for project_path in project_paths:
        try:
            results.append(create_project_data(project_path, options))
        except (InputScopeError, OSError) as e:
            logger.warning(f"Skipping project {project_path}: {e}")
            results.append(ProjectFailure(path=str(project_path), error=e))
    return results


def gather_reference_projects(
    config: InputDataConfig, options: DiscoveryOptions | None = None
) -> list[ProjectData | ProjectFailure]:
    return create_data_object(config.project_paths(REFERENCE), options)


def gather_target_projects(
    config: InputDataConfig, options: DiscoveryOptions | None = None
) -> list[ProjectData | ProjectFailure]:
    return create_data_object(config.project_paths(TARGET), options)
