"""
FileResolver — main entry point for file discovery.

Walks a project tree and returns the files in scope for analysis, ordered by
depth first and then lexically by relative path, so shallow files come first.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

from loguru import logger

from inputscope.descriptors import PACKAGE_JSON, read_package_json, string_list
from inputscope.errors import DescriptorParseError, ProjectNotFoundError
from inputscope.export_map import get_paths_from_export_map
from inputscope.file_resolver.defaults import default_exclusion_rules
from inputscope.file_resolver.gitignore import GitIgnoreMatcher, GitIgnoreRule, load_gitignore
from inputscope.file_resolver.globs import PathRule, RuleSet, normalize_rel_path, parse_glob_rules
from inputscope.file_resolver.modes import AllowlistMode, resolve_allowlist_mode
from inputscope.file_resolver.npm_files import NpmFilesMatcher
from inputscope.file_resolver.types import DiscoveryOptions


def _depth_then_lexical(rel_path: str) -> tuple[int, str]:
    return (rel_path.count("/"), rel_path)


class FileResolver:
    """
    Discovers the files of one project. An explicit allowlist is the only
    project-specific filter when given; otherwise the allowlist mode picks the
    rule source (npm `files`, `.gitignore`, nothing, or the `exports` map).
    Default exclusions are applied first unless omitted.
    """

    def __init__(self, project_root: str | Path, options: DiscoveryOptions | None = None) -> None:
        self._root: Path = Path(project_root).absolute()
        if not self._root.is_dir():
            raise ProjectNotFoundError(project_root)
        self._options: DiscoveryOptions = options if options is not None else DiscoveryOptions()

    @property
    def root(self) -> Path:
        return self._root

    def allowlist_mode(self) -> AllowlistMode:
        """The explicitly requested mode, or the one detected for this project."""
        if self._options.allowlist_mode is not None:
            return self._options.allowlist_mode
        return resolve_allowlist_mode(self._root)

    def resolve(self) -> list[str]:
        """
        Return the files in scope as absolute path strings. In `export-map` mode
        the `exports` map's own internal paths (`./src/x.js`) are returned instead.
        """
        options = self._options
        gitignore: GitIgnoreMatcher | None = None
        rules: list[PathRule] = list(default_exclusion_rules(options.omit_default_allowlist))

        if options.allowlist is not None:
            rules.extend(parse_glob_rules(options.allowlist))
        else:
            mode = self.allowlist_mode()
            if mode is AllowlistMode.export_map:
                return self._resolve_export_map()
            if mode is AllowlistMode.npm:
                npm_files = NpmFilesMatcher(string_list(read_package_json(self._root).get("files")))
                if npm_files.declared:
                    rules.extend(npm_files.rules)
            elif mode is AllowlistMode.git:
                gitignore = load_gitignore(self._root)
                logger.debug(f"Loaded .gitignore for {self._root}: {gitignore is not None}")

        rule_set = RuleSet(rules)
        found = [
            rel
            for rel in self._walk(rule_set)
            if self._options.has_allowed_extension(rel.rsplit("/", 1)[-1])
            and rule_set.is_allowed(rel)
            and not (gitignore is not None and gitignore.is_ignored(rel))
        ]
        found.sort(key=_depth_then_lexical)
        logger.debug(f"Found {len(found)} files in {self._root}")
        return [str(self._root / rel) for rel in found]

    def _resolve_export_map(self) -> list[str]:
        exports = read_package_json(self._root).get("exports")
        try:
            pairs = get_paths_from_export_map(exports, self._root)
        except ValueError as e:
            raise DescriptorParseError(self._root / PACKAGE_JSON, f"invalid `exports`: {e}") from e
        internal: dict[str, None] = {}
        for pair in pairs:
            rel = normalize_rel_path(pair.internal)
            if not self._options.has_allowed_extension(rel.rsplit("/", 1)[-1]):
                continue
            if self._options.depth is not None and rel.count("/") > self._options.depth:
                continue
            internal.setdefault(pair.internal, None)
        return sorted(internal, key=lambda p: _depth_then_lexical(normalize_rel_path(p)))

    def _walk(self, rule_set: RuleSet) -> Iterator[str]:
        """
        Walk the tree with `os.walk()`, yielding POSIX paths relative to the root.
        Stops descending at the depth limit and prunes directories excluded by
        the defaults when nothing could re-include their contents.
        """
        max_depth = self._options.depth
        for dirpath, dirnames, filenames in os.walk(self._root):
            rel_dir = Path(dirpath).relative_to(self._root)
            if max_depth is not None and len(rel_dir.parts) >= max_depth:
                dirnames[:] = []
            else:
                dirnames[:] = [
                    d for d in dirnames if not self._is_dir_pruned((rel_dir / d).as_posix(), rule_set)
                ]
            for filename in filenames:
                yield (rel_dir / filename).as_posix()

    @staticmethod
    def _is_dir_pruned(rel_dir: str, rule_set: RuleSet) -> bool:
        if rule_set.has_inclusions:
            return False
        return any(
            isinstance(rule, GitIgnoreRule) and not rule.includes and rule.matches(rel_dir + "/")
            for rule in rule_set.rules
        )


def gather_files_from_dir(
    project_root: str | Path, options: DiscoveryOptions | None = None
) -> list[str]:
    """Convenience wrapper: `FileResolver(project_root, options).resolve()`."""
    return FileResolver(project_root, options).resolve()
