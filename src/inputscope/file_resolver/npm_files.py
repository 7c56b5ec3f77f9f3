"""Matching of the npm `files` publish allowlist from `package.json`."""

from __future__ import annotations

from collections.abc import Sequence

from inputscope.file_resolver.globs import GlobRule, is_glob, normalize_rel_path


def npm_files_to_globs(files: Sequence[str]) -> list[str]:
    """
    Convert `files` entries to allowlist globs. Globs are kept as they are; a
    bare name such as `docs` keeps the file of that name as well as everything
    inside a directory of that name.
    """
    globs: list[str] = []
    for entry in files:
        negate = entry.startswith("!")
        body = normalize_rel_path(entry[1:] if negate else entry).rstrip("/")
        if not body:
            continue
        prefix = "!" if negate else ""
        if is_glob(body):
            globs.append(prefix + body)
        else:
            globs.extend([prefix + body, f"{prefix}{body}/**"])
    return globs


class NpmFilesMatcher:
    """
    Allow predicate for the npm `files` field. A missing field (`files=None`)
    matches nothing; callers then fall back to the default exclusions only.

    When the field is declared, `FileResolver` appends `rules` after the default
    exclusions in one last-match-wins rule set. The exclusions never include,
    so the files it keeps are exactly those `matches` accepts; `matches` is the
    standalone form of that decision.
    """

    def __init__(self, files: Sequence[str] | None) -> None:
        self.files: list[str] | None = list(files) if files is not None else None
        self.rules: list[GlobRule] = [
            GlobRule.parse(g) for g in npm_files_to_globs(self.files or [])
        ]

    @property
    def declared(self) -> bool:
        return self.files is not None

    def matches(self, rel_path: str) -> bool:
        allowed = False
        for rule in self.rules:
            if rule.matches(rel_path):
                allowed = rule.includes
        return allowed
