"""
Glob rules for explicit allowlists and npm `files` entries.

Unlike the gitignore syntax used for default exclusions and ignore files, these
globs are matched against the whole project-relative path: `*` never crosses a
`/`, `**` spans any number of segments, `{a,b}` expands to alternatives and a
leading `!` turns a pattern into an exclusion. Wildcards don't match segments
starting with `.` unless the pattern segment itself does.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Protocol

_GLOB_CHARS = frozenset("*?[{")

# A path segment that doesn't start with a dot.
_NO_DOT = r"(?!\.)"


class PathRule(Protocol):
    """A single ordered rule: when it matches a path, it decides `includes`."""

    @property
    def includes(self) -> bool: ...

    def matches(self, rel_path: str) -> bool: ...


def is_glob(pattern: str) -> bool:
    """True if `pattern` contains glob syntax."""
    return any(c in pattern for c in _GLOB_CHARS)


def expand_braces(pattern: str) -> list[str]:
    """
    Expand `{a,b}` alternatives, including nested ones, into plain patterns.
    Braces without a top-level comma, or unbalanced braces, are kept literally.
    """
    start = pattern.find("{")
    while start != -1:
        end = _matching_brace(pattern, start)
        if end is None:
            return [pattern]
        options = _split_top_level(pattern[start + 1 : end])
        if len(options) > 1:
            prefix, suffix = pattern[:start], pattern[end + 1 :]
            return [
                expanded for option in options for expanded in expand_braces(prefix + option + suffix)
            ]
        start = pattern.find("{", start + 1)
    return [pattern]


def _matching_brace(pattern: str, start: int) -> int | None:
    depth = 0
    for i in range(start, len(pattern)):
        if pattern[i] == "{":
            depth += 1
        elif pattern[i] == "}":
            depth -= 1
            if depth == 0:
                return i
    return None


def _split_top_level(body: str) -> list[str]:
    options: list[str] = []
    depth = 0
    current = ""
    for c in body:
        if c == "," and depth == 0:
            options.append(current)
            current = ""
            continue
        if c == "{":
            depth += 1
        elif c == "}":
            depth -= 1
        current += c
    options.append(current)
    return options


def _translate_char_class(segment: str, start: int) -> str | None:
    """
    Translate the `[...]` class opening at `start`, or return None when it is
    unterminated, empty or not a valid range, so the `[` is taken literally.
    """
    close = segment.find("]", start + 2)
    if close == -1:
        return None
    body = segment[start + 1 : close]
    if body[0] in "!^":
        body = "^" + body[1:]
    if body == "^":
        return None
    char_class = "[" + body.replace("\\", "\\\\") + "]"
    try:
        re.compile(char_class)
    except re.error:
        return None
    return char_class


def _translate_segment(segment: str) -> str:
    """Translate one path segment (not `**`) into a regex fragment."""
    out = [] if segment.startswith(".") else [_NO_DOT]
    i = 0
    while i < len(segment):
        c = segment[i]
        if c == "*":
            out.append("[^/]*")
        elif c == "?":
            out.append("[^/]")
        elif c == "[":
            char_class = _translate_char_class(segment, i)
            if char_class is None:
                out.append(re.escape(c))
            else:
                out.append(char_class)
                i = segment.find("]", i + 2)
        else:
            out.append(re.escape(c))
        i += 1
    return "".join(out)


def glob_to_regex(pattern: str) -> str:
    """Translate a single brace-free glob into an anchored-by-fullmatch regex string."""
    segments = pattern.split("/")
    parts: list[str] = []
    for i, segment in enumerate(segments):
        last = i == len(segments) - 1
        if segment == "**":
            if last:
                parts.append(f"{_NO_DOT}[^/]*(?:/{_NO_DOT}[^/]*)*")
            else:
                parts.append(f"(?:{_NO_DOT}[^/]*/)*")
        else:
            parts.append(_translate_segment(segment) + ("" if last else "/"))
    return "".join(parts)


def normalize_rel_path(path: str) -> str:
    """Strip leading `./` and `/` so paths and patterns compare the same way."""
    while path.startswith("./"):
        path = path[2:]
    return path.lstrip("/")


@dataclass(frozen=True)
class GlobRule:
    """One allowlist glob. A negated glob excludes the paths it matches."""

    pattern: str
    negate: bool = False
    _regexes: tuple[re.Pattern[str], ...] = field(default=(), repr=False, compare=False)

    @classmethod
    def parse(cls, raw: str) -> GlobRule:
        negate = raw.startswith("!")
        body = normalize_rel_path(raw[1:] if negate else raw)
        regexes = tuple(re.compile(glob_to_regex(p)) for p in expand_braces(body))
        return cls(pattern=body, negate=negate, _regexes=regexes)

    @property
    def includes(self) -> bool:
        return not self.negate

    def matches(self, rel_path: str) -> bool:
        rel_path = normalize_rel_path(rel_path)
        return any(regex.fullmatch(rel_path) for regex in self._regexes)


def parse_glob_rules(patterns: Iterable[str]) -> list[GlobRule]:
    return [GlobRule.parse(p) for p in patterns if p.strip()]


class RuleSet:
    """
    Ordered allow/deny rules where the last matching rule decides.

    A path matched by no rule is kept only if the set has no inclusion rule,
    so a list of exclusions alone means "everything except these".
    """

    def __init__(self, rules: Sequence[PathRule]) -> None:
        self.rules: list[PathRule] = list(rules)
        self.has_inclusions: bool = any(rule.includes for rule in self.rules)

    def is_allowed(self, rel_path: str) -> bool:
        verdict: bool | None = None
        for rule in self.rules:
            if rule.matches(rel_path):
                verdict = rule.includes
        if verdict is None:
            return not self.has_inclusions
        return verdict
