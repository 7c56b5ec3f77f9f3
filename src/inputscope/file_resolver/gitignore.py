"""Gitignore parsing into an ordered rule list, using pathspec for per-rule matching."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pathspec

from inputscope.file_resolver.globs import normalize_rel_path

GITIGNORE = ".gitignore"


@dataclass(frozen=True)
class GitIgnoreRule:
    """
    One non-blank, non-comment ignore-file line.

    `pattern` is the line without its `!` prefix. `negate` rules un-ignore what
    an earlier rule ignored. `directory_only` rules (trailing `/`) match a
    directory and everything beneath it. `anchored` rules only match relative
    to the root rather than at any depth.
    """

    pattern: str
    negate: bool = False
    directory_only: bool = False
    anchored: bool = False
    _spec: pathspec.PathSpec | None = field(default=None, repr=False, compare=False)

    @classmethod
    def parse(cls, line: str) -> GitIgnoreRule:
        negate = line.startswith("!")
        body = line[1:] if negate else line
        # `\!` and `\#` escape a literal leading character.
        if body.startswith(("\\!", "\\#")):
            body = body[1:]
        spec_line = body if not body.startswith(("!", "#")) else "\\" + body
        # pathspec strips leading spaces, which git keeps as part of the pattern.
        indent = len(spec_line) - len(spec_line.lstrip(" "))
        spec_line = "\\ " * indent + spec_line[indent:]
        return cls(
            pattern=body,
            negate=negate,
            directory_only=body.endswith("/"),
            anchored="/" in body.rstrip("/"),
            _spec=pathspec.PathSpec.from_lines("gitignore", [spec_line]),
        )

    @property
    def includes(self) -> bool:
        """As an allow/deny rule: a plain ignore rule denies, a negated one allows."""
        return self.negate

    def matches(self, rel_path: str) -> bool:
        assert self._spec is not None
        return self._spec.match_file(normalize_rel_path(rel_path))


def _strip_trailing_spaces(line: str) -> str:
    """Drop trailing spaces unless the last one is escaped with a backslash."""
    stripped = line.rstrip(" ")
    if stripped.endswith("\\") and len(stripped) < len(line):
        return stripped + " "
    return stripped


def parse_gitignore(lines: Iterable[str]) -> list[GitIgnoreRule]:
    """Parse ignore-file lines, dropping blank lines and `#` comments. Order is kept."""
    rules: list[GitIgnoreRule] = []
    for raw in lines:
        line = _strip_trailing_spaces(raw.rstrip("\r\n"))
        if not line or line.startswith("#"):
            continue
        rules.append(GitIgnoreRule.parse(line))
    return rules


class GitIgnoreMatcher:
    """
    Evaluates paths against an ordered ignore rule list. Rules are scanned in
    file order and the last matching rule decides; unmatched paths are kept.
    """

    def __init__(self, rules: Sequence[GitIgnoreRule]) -> None:
        self.rules: list[GitIgnoreRule] = list(rules)

    @classmethod
    def from_text(cls, text: str) -> GitIgnoreMatcher:
        return cls(parse_gitignore(text.splitlines()))

    def is_ignored(self, rel_path: str) -> bool:
        ignored = False
        for rule in self.rules:
            if rule.matches(rel_path):
                ignored = not rule.negate
        return ignored


def has_gitignore(directory: Path) -> bool:
    return (directory / GITIGNORE).is_file()


def load_gitignore(directory: Path) -> GitIgnoreMatcher | None:
    """
    Read `.gitignore` in the given directory and return a `GitIgnoreMatcher`,
    or `None` if the file doesn't exist.
    """
    gitignore = directory / GITIGNORE
    if not gitignore.is_file():
        return None
    return GitIgnoreMatcher.from_text(gitignore.read_text(encoding="utf-8"))
