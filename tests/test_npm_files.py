"""Tests for the npm `files` allowlist matcher."""

from __future__ import annotations

from inputscope.file_resolver.npm_files import NpmFilesMatcher, npm_files_to_globs


def test_npm_files_to_globs():
    assert npm_files_to_globs(["*.add.js", "docs", "./src/", "!docs/private"]) == [
        "*.add.js",
        "docs",
        "docs/**",
        "src",
        "src/**",
        "!docs/private",
        "!docs/private/**",
    ]


def test_matcher_keeps_globs_and_directories():
    matcher = NpmFilesMatcher(["*.add.js", "docs", "src"])
    assert matcher.declared
    assert matcher.matches("file.add.js")
    assert matcher.matches("docs/x.js")
    assert matcher.matches("src/deep/y.js")
    assert not matcher.matches("omit.js")
    assert not matcher.matches("documents/z.js")


def test_matcher_negated_entry():
    matcher = NpmFilesMatcher(["lib", "!lib/test"])
    assert matcher.matches("lib/index.js")
    assert not matcher.matches("lib/test/index.test.js")


def test_missing_field_matches_nothing():
    matcher = NpmFilesMatcher(None)
    assert not matcher.declared
    assert not matcher.matches("index.js")
