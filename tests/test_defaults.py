"""Tests for default exclusions and allowlist mode detection."""

from __future__ import annotations

from pathlib import Path

import pytest

from inputscope.file_resolver.defaults import default_exclusion_rules
from inputscope.file_resolver.globs import RuleSet
from inputscope.file_resolver.modes import AllowlistMode, resolve_allowlist_mode


@pytest.mark.parametrize(
    ("path", "allowed"),
    [
        ("index.js", True),
        ("node_modules/pkg/x.js", False),
        ("bower_components/pkg/y.js", False),
        ("nested/node_modules/pkg/x.js", True),
        ("nested/bower_components/pkg/y.js", True),
        (".blablarc.js", False),
        ("src/.hidden/file.js", False),
        ("karma.conf.js", False),
        ("commitlint.config.js", False),
        ("some-pkg/commitlint.config.js", False),
        ("some-other-pkg/commitlint.conf.js", False),
        ("vite.config.mjs", False),
        ("configuration.js", True),
    ],
)
def test_default_exclusions(path: str, allowed: bool):
    assert RuleSet(default_exclusion_rules()).is_allowed(path) is allowed


def test_default_exclusions_can_be_omitted():
    assert default_exclusion_rules(omit=True) == []


def test_mode_git_when_gitignore_present(tmp_path: Path):
    (tmp_path / ".gitignore").write_text("/dist\n")
    assert resolve_allowlist_mode(tmp_path) is AllowlistMode.git


def test_mode_npm_without_gitignore(tmp_path: Path):
    assert resolve_allowlist_mode(tmp_path) is AllowlistMode.npm


@pytest.mark.parametrize(
    "package_path",
    ["inside/proj/with/node_modules/detect-as-npm", "inside/node_modules/@scoped/detect-as-npm"],
)
def test_mode_npm_for_installed_dependency(tmp_path: Path, package_path: str):
    root = tmp_path / package_path
    root.mkdir(parents=True)
    (root / ".gitignore").write_text("/dist\n")
    assert resolve_allowlist_mode(root) is AllowlistMode.npm


def test_mode_values():
    assert AllowlistMode("export-map") is AllowlistMode.export_map
    assert [m.value for m in AllowlistMode] == ["npm", "git", "all", "export-map"]
