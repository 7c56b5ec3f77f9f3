"""
Expansion of a package's `exports` map into concrete internal/exposed path pairs.

An `exports` entry maps an exposed subpath pattern to a target. A target is a
path pattern, an object of conditions (resolve modes such as `require` or
`default`) to nested targets, an array of fallbacks, or `null` for a private
subpath. Patterns may contain one `*`; the wildcard is resolved against the
files on disk and the captured text is substituted on the exposed side.
"""

from __future__ import annotations

import os
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union

from loguru import logger

DEFAULT_CONDITION = "default"

# Key of the package's main entry point; kept verbatim as the exposed path.
MAIN_ENTRY_KEY = "."

_SKIPPED_DIRS = frozenset({"node_modules"})


@dataclass(frozen=True)
class ExportMapPath:
    internal: str
    exposed: str


@dataclass(frozen=True)
class PathTarget:
    path: str


@dataclass(frozen=True)
class ConditionalTarget:
    conditions: tuple[tuple[str, ExportTarget], ...]

    def get(self, condition: str) -> ExportTarget | None:
        for name, target in self.conditions:
            if name == condition:
                return target
        return None


@dataclass(frozen=True)
class FallbackTarget:
    options: tuple[ExportTarget, ...]


@dataclass(frozen=True)
class PrivateTarget:
    """A `null` target: the subpath is deliberately not exported."""


ExportTarget = Union[PathTarget, ConditionalTarget, FallbackTarget, PrivateTarget]


def parse_target(value: Any) -> ExportTarget:
    if value is None:
        return PrivateTarget()
    if isinstance(value, str):
        return PathTarget(value)
    if isinstance(value, list):
        return FallbackTarget(tuple(parse_target(v) for v in value))
    if isinstance(value, Mapping):
        return ConditionalTarget(tuple((str(k), parse_target(v)) for k, v in value.items()))
    raise ValueError(f"Unsupported export map target: {value!r}")


def resolve_target(target: ExportTarget, resolve_mode: str = DEFAULT_CONDITION) -> str | None:
    """
    Pick the path a target resolves to under `resolve_mode`, falling back to
    the `default` condition. Returns `None` for private or unresolvable targets.
    """
    if isinstance(target, PathTarget):
        return target.path
    if isinstance(target, PrivateTarget):
        return None
    if isinstance(target, FallbackTarget):
        for option in target.options:
            resolved = resolve_target(option, resolve_mode)
            if resolved is not None:
                return resolved
        return None
    if isinstance(target, ConditionalTarget):
        chosen = target.get(resolve_mode)
        if chosen is None:
            chosen = target.get(DEFAULT_CONDITION)
        return resolve_target(chosen, resolve_mode) if chosen is not None else None
    raise TypeError(f"Unknown export target type: {type(target).__name__}")


@dataclass(frozen=True)
class WildcardPattern:
    """A path pattern split around its single `*`. `suffix` is `None` for literals."""

    prefix: str
    suffix: str | None = None

    @classmethod
    def parse(cls, text: str) -> WildcardPattern:
        count = text.count("*")
        if count == 0:
            return cls(prefix=text)
        if count > 1:
            raise ValueError(f"Export map pattern has more than one '*': {text!r}")
        prefix, suffix = text.split("*")
        return cls(prefix=prefix, suffix=suffix)

    @property
    def has_wildcard(self) -> bool:
        return self.suffix is not None

    def capture(self, path: str) -> str | None:
        """Return the text the wildcard matches in `path`, or `None` if it doesn't match."""
        if self.suffix is None:
            return "" if path == self.prefix else None
        if len(path) <= len(self.prefix) + len(self.suffix):
            return None
        if not (path.startswith(self.prefix) and path.endswith(self.suffix)):
            return None
        return path[len(self.prefix) : len(path) - len(self.suffix)]

    def substitute(self, captured: str) -> str:
        if self.suffix is None:
            return self.prefix
        return self.prefix + captured + self.suffix

    def walk_root(self) -> str:
        """The directory part of the prefix: everything up to its last `/`."""
        head, sep, _tail = self.prefix.rpartition("/")
        return head if sep else "."


def normalize_exports(exports: Any) -> dict[str, Any]:
    """
    Bring the `exports` field to the subpath-object form. A bare string, an
    array, or an object of conditions all describe the main entry (`.`).
    """
    if exports is None:
        return {}
    if isinstance(exports, (str, list)):
        return {MAIN_ENTRY_KEY: exports}
    if isinstance(exports, Mapping):
        if exports and not all(str(key).startswith(".") for key in exports):
            return {MAIN_ENTRY_KEY: dict(exports)}
        return dict(exports)
    raise ValueError(f"Unsupported exports field: {exports!r}")


def _package_files(package_root: Path, start: str) -> Iterator[str]:
    """Yield `./`-prefixed POSIX paths of all files under `package_root / start`, sorted."""
    start_dir = package_root / start
    if not start_dir.is_dir():
        return
    for dirpath, dirnames, filenames in os.walk(start_dir):
        dirnames[:] = sorted(d for d in dirnames if d not in _SKIPPED_DIRS)
        rel_dir = Path(dirpath).relative_to(package_root).as_posix()
        for filename in sorted(filenames):
            rel = filename if rel_dir == "." else f"{rel_dir}/{filename}"
            yield f"./{rel}"


def expand_entry(
    exposed: str, internal: str, package_root: Path
) -> Iterator[ExportMapPath]:
    """Expand a single resolved `exposed -> internal` entry into concrete pairs."""
    # Legacy folder mappings (`"./dir/": "./src/"`) behave like `"./dir/*": "./src/*"`.
    if exposed.endswith("/") and internal.endswith("/"):
        exposed, internal = exposed + "*", internal + "*"

    exposed_pattern = WildcardPattern.parse(exposed)
    internal_pattern = WildcardPattern.parse(internal)
    if exposed_pattern.has_wildcard != internal_pattern.has_wildcard:
        logger.debug(f"Skipping export map entry with unpaired wildcard: {exposed} -> {internal}")
        return
    if not internal_pattern.has_wildcard:
        yield ExportMapPath(internal=internal, exposed=exposed)
        return

    for candidate in _package_files(package_root, internal_pattern.walk_root()):
        captured = internal_pattern.capture(candidate)
        if captured is not None:
            yield ExportMapPath(internal=candidate, exposed=exposed_pattern.substitute(captured))


def get_paths_from_export_map(
    exports: Any,
    package_root_path: str | Path,
    resolve_mode: str = DEFAULT_CONDITION,
) -> list[ExportMapPath]:
    """
    Expand an `exports` map into `ExportMapPath` pairs, resolving wildcards
    against the files under `package_root_path`. Pairs are unique by `exposed`;
    the first entry producing a given exposed path wins.
    """
    package_root = Path(package_root_path)
    pairs: dict[str, ExportMapPath] = {}
    for exposed, value in normalize_exports(exports).items():
        internal = resolve_target(parse_target(value), resolve_mode)
        if internal is None:
            # TODO: decide whether `null` entries should also remove the subpaths
            # they cover from other wildcard entries; for now they only add nothing.
            logger.debug(f"Export map entry {exposed} is private for mode {resolve_mode}")
            continue
        for pair in expand_entry(str(exposed), internal, package_root):
            pairs.setdefault(pair.exposed, pair)
    return list(pairs.values())
