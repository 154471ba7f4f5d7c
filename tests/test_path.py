"""Tests for repo_health/checks/path.py"""

import os

import pytest

from repo_health.checks.path import Globs, exists, expand


def test_exists_top_level_file(make_repo):
    root = make_repo({"ADOPTERS.md": "acme"})
    assert exists(Globs(root, ("adopters*",)))


def test_exists_is_case_insensitive_by_default(make_repo):
    root = make_repo({"Changelog.txt": ""})
    assert exists(Globs(root, ("CHANGELOG*",)))


def test_exists_case_sensitive(make_repo):
    root = make_repo({"readme.md": ""})
    assert not exists(Globs(root, ("README*",), case_sensitive=True))
    assert exists(Globs(root, ("readme*",), case_sensitive=True))


def test_exists_nested_pattern(make_repo):
    root = make_repo({"Docs/Code_Of_Conduct.md": ""})
    assert exists(Globs(root, ("docs/code*of*conduct.md",)))


def test_exists_hidden_directory(make_repo):
    root = make_repo({".github/SECURITY.md": ""})
    assert exists(Globs(root, ("security*", ".github/security*")))


def test_exists_missing_intermediate_directory_is_false(make_repo):
    root = make_repo({"README.md": ""})
    assert not exists(Globs(root, ("docs/governance*",)))


def test_exists_matches_directories(make_repo):
    root = make_repo({"governance/charter.md": ""})
    assert exists(Globs(root, ("governance*",)))


def test_intermediate_segment_must_be_directory(make_repo):
    root = make_repo({"docs": "a file, not a directory"})
    assert not exists(Globs(root, ("docs/security*",)))


def test_expand_deduplicates_in_pattern_order(make_repo):
    root = make_repo({"README.md": "", "docs/README.md": ""})
    paths = expand(Globs(root, ("README*", "readme.md", "docs/README*")))
    assert [p.relative_to(root).as_posix() for p in paths] == ["README.md", "docs/README.md"]


def test_unreadable_directory_raises(make_repo, monkeypatch):
    root = make_repo({"README.md": ""})

    def denied(path):
        raise PermissionError(13, "Permission denied", str(path))

    monkeypatch.setattr(os, "scandir", denied)
    with pytest.raises(OSError):
        exists(Globs(root, ("README*",)))
