"""
Default extensions and exclude patterns for file discovery.

The exclude patterns use gitignore syntax. A leading `/` anchors a pattern to
the walk root, so dependency directories are only skipped at the top level.
"""

from __future__ import annotations

from inputscope.file_resolver.gitignore import GitIgnoreRule, parse_gitignore

DEFAULT_EXTENSIONS: list[str] = [".js"]

# Directory names that hold installed dependencies rather than project sources.
DEPENDENCY_DIRS: frozenset[str] = frozenset({"node_modules", "bower_components"})

DEFAULT_EXCLUDES: list[str] = [
    # Dependencies (root level only)
    "/node_modules/",
    "/bower_components/",
    # Hidden files and directories
    ".*",
    # Build, lint and test-runner config files (`karma.conf.js`, `vite.config.ts`, ...)
    "*.config.*",
    "*.conf.*",
]


def default_exclusion_rules(omit: bool = False) -> list[GitIgnoreRule]:
    """Compiled default exclusions, or an empty list when `omit` is set."""
    if omit:
        return []
    return parse_gitignore(DEFAULT_EXCLUDES)
