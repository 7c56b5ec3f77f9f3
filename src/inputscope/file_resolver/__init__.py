"""
File discovery with default exclusions, gitignore handling and npm-aware
allowlist modes.

Usage::

    from inputscope.file_resolver import DiscoveryOptions, FileResolver

    options = DiscoveryOptions(depth=2, extensions=[".js", ".mjs"])
    files = FileResolver("/path/to/project", options).resolve()
"""

from inputscope.file_resolver.defaults import DEFAULT_EXCLUDES, DEFAULT_EXTENSIONS
from inputscope.file_resolver.gitignore import GitIgnoreMatcher, GitIgnoreRule
from inputscope.file_resolver.modes import AllowlistMode, resolve_allowlist_mode
from inputscope.file_resolver.npm_files import NpmFilesMatcher
from inputscope.file_resolver.resolver import FileResolver, gather_files_from_dir
from inputscope.file_resolver.types import DiscoveryOptions

__all__ = [
    "DEFAULT_EXCLUDES",
    "DEFAULT_EXTENSIONS",
    "AllowlistMode",
    "DiscoveryOptions",
    "FileResolver",
    "GitIgnoreMatcher",
    "GitIgnoreRule",
    "NpmFilesMatcher",
    "gather_files_from_dir",
    "resolve_allowlist_mode",
]
