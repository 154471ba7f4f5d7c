"""Shared fixtures: a fake GitHub API and repository trees."""

import re
from pathlib import Path

import pytest

from repo_health.client import GitHubClient

API = "https://api.github.com"
OWNER = "acme"
REPO = "rocket"
REPO_URL = f"https://github.com/{OWNER}/{REPO}"
REPO_API = f"{API}/repos/{OWNER}/{REPO}"
HEALTH_API = f"{API}/repos/{OWNER}/.github/contents"


@pytest.fixture
def client() -> GitHubClient:
    return GitHubClient(REPO_URL, token="ghp_test")


@pytest.fixture
def github(requests_mock):
    """Register a GitHub API for acme/rocket with nothing interesting in it.

    Call the returned function with keyword overrides:
        github(homepage="https://rocket.dev", license_spdx_id="MIT",
               releases=[...], pulls=[...], check_runs=[...],
               health_files=("SECURITY.md",))
    """

    def _setup(
        homepage=None,
        license_spdx_id=None,
        releases=(),
        pulls=(),
        check_runs=(),
        health_files=(),
    ):
        repo = {
            "name": REPO,
            "owner": {"login": OWNER},
            "homepage": homepage,
            "license": {"spdx_id": license_spdx_id} if license_spdx_id else None,
        }
        requests_mock.get(REPO_API, json=repo)
        requests_mock.get(f"{REPO_API}/releases", json=list(releases))
        requests_mock.get(f"{REPO_API}/pulls", json=list(pulls))
        requests_mock.get(
            re.compile(rf"{re.escape(REPO_API)}/commits/\w+/check-runs"),
            json={"total_count": len(check_runs), "check_runs": list(check_runs)},
        )
        # Later registrations win in requests_mock
        requests_mock.get(re.compile(rf"{re.escape(HEALTH_API)}/.*"), status_code=404)
        for name in health_files:
            requests_mock.get(f"{HEALTH_API}/{name}", json={"name": name, "type": "file"})
        return requests_mock

    return _setup


@pytest.fixture
def make_repo(tmp_path):
    """Create files in a fresh repository tree: make_repo({"README.md": "..."})."""

    def _make(files: dict[str, str]) -> Path:
        for name, text in files.items():
            target = tmp_path / name
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(text, encoding="utf-8")
        return tmp_path

    return _make


def requested_urls(requests_mock) -> list[str]:
    return [r.url for r in requests_mock.request_history]
