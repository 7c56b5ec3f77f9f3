"""
Ingestion boundary for static analysis of JavaScript projects: decides which
files of a project are in scope, expands `exports` maps, and lists the member
packages of monorepos.

Logging goes through loguru and is disabled by default; enable it with
`logger.enable("inputscope")`.
"""

from loguru import logger

from inputscope.config import InputDataConfig, find_config_file, load_config
from inputscope.errors import (
    ConfigError,
    DescriptorParseError,
    InputScopeError,
    ProjectNotFoundError,
)
from inputscope.export_map import ExportMapPath, get_paths_from_export_map
from inputscope.file_resolver import (
    AllowlistMode,
    DiscoveryOptions,
    FileResolver,
    gather_files_from_dir,
)
from inputscope.monorepo import MonoRepoPackage, get_mono_repo_packages
from inputscope.project_data import (
    FileEntry,
    Project,
    ProjectData,
    ProjectFailure,
    create_data_object,
    create_project_data,
    gather_reference_projects,
    gather_target_projects,
    get_project_meta,
)

logger.disable("inputscope")

__all__ = [
    "AllowlistMode",
    "ConfigError",
    "DescriptorParseError",
    "DiscoveryOptions",
    "ExportMapPath",
    "FileEntry",
    "FileResolver",
    "InputDataConfig",
    "InputScopeError",
    "MonoRepoPackage",
    "Project",
    "ProjectData",
    "ProjectFailure",
    "ProjectNotFoundError",
    "create_data_object",
    "create_project_data",
    "find_config_file",
    "gather_files_from_dir",
    "gather_reference_projects",
    "gather_target_projects",
    "get_mono_repo_packages",
    "get_paths_from_export_map",
    "get_project_meta",
    "load_config",
]
