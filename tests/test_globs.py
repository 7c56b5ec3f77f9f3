"""Tests for allowlist glob rules."""

from __future__ import annotations

import pytest

from inputscope.file_resolver.globs import GlobRule, RuleSet, expand_braces, parse_glob_rules


def test_expand_braces():
    assert expand_braces("**/*.test.{html,js}") == ["**/*.test.html", "**/*.test.js"]
    assert expand_braces("{a,b{c,d}}.js") == ["a.js", "bc.js", "bd.js"]
    assert expand_braces("{a}.js") == ["{a}.js"]
    assert expand_braces("{a,b") == ["{a,b"]


@pytest.mark.parametrize(
    ("pattern", "path", "expected"),
    [
        ("*", "root-lvl.js", True),
        ("*", "omitted/file.js", False),
        ("added/**/*", "added/file.js", True),
        ("added/**/*", "added/deep/er/file.js", True),
        ("deeper/**/*", "other/file.js", False),
        ("**/*/index.js", "nested/index.js", True),
        ("**/*/index.js", "index.js", False),
        ("**/*.test.{html,js}", "something.test.html", True),
        ("**/*.test.{html,js}", "nested/two/index.test.js", True),
        ("dist/**", "dist/bundle.js", True),
        ("nested", "nested/index.js", False),
        ("added*", "added.js", True),
        ("file.?s", "file.js", True),
        ("[ab].js", "b.js", True),
        ("[!ab].js", "b.js", False),
        ("./src/*.js", "src/a.js", True),
    ],
)
def test_glob_rule_matches(pattern: str, path: str, expected: bool):
    assert GlobRule.parse(pattern).matches(path) is expected


def test_wildcards_skip_dot_segments():
    assert not GlobRule.parse("*").matches(".blablarc.js")
    assert not GlobRule.parse("**/*.js").matches(".hidden/file.js")
    assert GlobRule.parse(".*").matches(".blablarc.js")


def test_negated_rule():
    rule = GlobRule.parse("!nested/**")
    assert rule.negate
    assert not rule.includes
    assert rule.pattern == "nested/**"


def test_rule_set_exclusions_only_keeps_unmatched():
    rules = RuleSet(parse_glob_rules(["!nested/**"]))
    assert rules.is_allowed("index.js")
    assert not rules.is_allowed("nested/index.js")


def test_rule_set_with_inclusions_drops_unmatched():
    rules = RuleSet(parse_glob_rules(["src/**"]))
    assert rules.is_allowed("src/a.js")
    assert not rules.is_allowed("lib/a.js")


def test_rule_set_last_match_wins():
    rules = RuleSet(parse_glob_rules(["src/**", "!src/internal/**", "src/internal/keep.js"]))
    assert rules.is_allowed("src/a.js")
    assert not rules.is_allowed("src/internal/b.js")
    assert rules.is_allowed("src/internal/keep.js")


@pytest.mark.parametrize("pattern", ["[!]x.js", "[z-a].js", "[^].js"])
def test_invalid_character_class_is_literal(pattern: str):
    rule = GlobRule.parse(pattern)
    assert rule.matches(pattern)
    assert not rule.matches("x.js")
