"""Tests for gitignore parsing and ordered rule evaluation."""

from __future__ import annotations

from pathlib import Path

from inputscope.file_resolver.gitignore import (
    GitIgnoreMatcher,
    GitIgnoreRule,
    load_gitignore,
    parse_gitignore,
)

GITIGNORE_TEXT = """
/coverage
# comment
/storybook-static/

build/
!keep/
"""


def test_parse_drops_blank_lines_and_comments():
    rules = parse_gitignore(GITIGNORE_TEXT.splitlines())
    assert [rule.pattern for rule in rules] == ["/coverage", "/storybook-static/", "build/", "keep/"]


def test_parse_rule_flags():
    anchored, anchored_dir, dir_only, negated = parse_gitignore(GITIGNORE_TEXT.splitlines())

    assert anchored.anchored and not anchored.directory_only and not anchored.negate
    assert anchored_dir.anchored and anchored_dir.directory_only
    assert not dir_only.anchored and dir_only.directory_only
    assert negated.negate and negated.directory_only and not negated.anchored


def test_escaped_leading_characters_are_literal():
    rule = GitIgnoreRule.parse("\\!important.js")
    assert not rule.negate
    assert rule.pattern == "!important.js"
    assert rule.matches("!important.js")


def test_is_ignored_example_rules():
    matcher = GitIgnoreMatcher.from_text(GITIGNORE_TEXT)
    assert matcher.is_ignored("coverage/file.js")
    assert matcher.is_ignored("storybook-static/index.js")
    assert matcher.is_ignored("build/index.js")
    assert not matcher.is_ignored("keep/it.js")
    assert not matcher.is_ignored("shall/pass.js")


def test_anchored_rules_only_match_at_root():
    matcher = GitIgnoreMatcher.from_text("/coverage\nbuild/\n")
    assert matcher.is_ignored("coverage/file.js")
    assert not matcher.is_ignored("nested/coverage/file.js")
    assert matcher.is_ignored("nested/build/file.js")


def test_last_matching_rule_wins():
    ignore_then_keep = GitIgnoreMatcher.from_text("build/\n!build/\n")
    keep_then_ignore = GitIgnoreMatcher.from_text("!build/\nbuild/\n")
    assert not ignore_then_keep.is_ignored("build/index.js")
    assert keep_then_ignore.is_ignored("build/index.js")


def test_negation_of_single_file():
    matcher = GitIgnoreMatcher.from_text("*.js\n!main.js\n")
    assert matcher.is_ignored("lib/util.js")
    assert not matcher.is_ignored("main.js")


def test_empty_rule_list_ignores_nothing():
    matcher = GitIgnoreMatcher([])
    assert not matcher.is_ignored("anything.js")


def test_load_gitignore(tmp_path: Path):
    assert load_gitignore(tmp_path) is None
    (tmp_path / ".gitignore").write_text("dist/\n")
    matcher = load_gitignore(tmp_path)
    assert matcher is not None
    assert matcher.is_ignored("dist/bundle.js")


def test_leading_spaces_kept_and_trailing_spaces_stripped():
    rules = parse_gitignore([" notes.txt  ", "trailing\\ ", "plain.js   \n"])
    assert [rule.pattern for rule in rules] == [" notes.txt", "trailing\\ ", "plain.js"]

    matcher = GitIgnoreMatcher(rules)
    assert matcher.is_ignored(" notes.txt")
    assert not matcher.is_ignored("notes.txt")
    assert matcher.is_ignored("trailing ")
    assert matcher.is_ignored("plain.js")
