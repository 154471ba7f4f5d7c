"""Tests for repo_health/cli.py"""

import json
import logging

import pytest
from click.testing import CliRunner

from conftest import REPO_API, REPO_URL
from repo_health.checks import git
from repo_health.cli import cli
from repo_health.patterns import METADATA_FILE


@pytest.fixture(autouse=True)
def isolated(monkeypatch):
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    monkeypatch.setattr(git, "commits_have_dco_signature", lambda root, limit=20: False)
    yield
    logger = logging.getLogger("repo_health")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


def invoke(*args):
    return CliRunner().invoke(cli, list(args))


# ---------------------------------------------------------------------------
# lint
# ---------------------------------------------------------------------------

def test_lint_prints_report(make_repo, github):
    github(license_spdx_id="MIT")
    root = make_repo({"README.md": "# Rocket\n## Adopters\n"})

    result = invoke("lint", "--path", str(root), "--url", REPO_URL)

    assert result.exit_code == 0, result.output
    report = json.loads(result.stdout)
    assert set(report) == {"documentation", "license", "best_practices", "security", "legal"}
    assert report["documentation"]["adopters"] is True
    assert report["license"] == {"approved": True, "scanning": None, "spdx_id": "MIT"}


def test_lint_writes_output_file(tmp_path, github):
    github()
    out = tmp_path / "report.json"

    result = invoke("--output", str(out), "--pretty", "lint", "--path", str(tmp_path), "--url", REPO_URL)

    assert result.exit_code == 0, result.output
    assert "\n  " in out.read_text(encoding="utf-8")
    assert json.loads(out.read_text(encoding="utf-8"))["legal"] == {"trademark_footer": False}


def test_lint_token_from_environment(tmp_path, github, monkeypatch):
    mock = github()
    monkeypatch.setenv("GITHUB_TOKEN", "ghp_env")

    result = invoke("lint", "--path", str(tmp_path), "--url", REPO_URL)

    assert result.exit_code == 0, result.output
    assert mock.request_history[0].headers["Authorization"] == "Bearer ghp_env"


def test_verbose_logs_on_every_invocation(tmp_path, github):
    github()
    for _ in range(2):
        result = invoke("--verbose", "lint", "--path", str(tmp_path), "--url", REPO_URL)
        assert result.exit_code == 0, result.output
        assert "[DEBUG] repo_health.client: GET" in result.output
        assert "[verbose]" not in result.output


def test_quiet_by_default(tmp_path, github):
    github()
    result = invoke("lint", "--path", str(tmp_path), "--url", REPO_URL)
    assert result.exit_code == 0, result.output
    assert "[DEBUG]" not in result.output


def test_lint_rejects_non_github_url(tmp_path):
    result = invoke("lint", "--path", str(tmp_path), "--url", "https://gitlab.com/acme/rocket")
    assert result.exit_code == 2
    assert "Not a GitHub repository URL" in result.output


def test_lint_fetch_error_exits_1(tmp_path, requests_mock):
    requests_mock.get(REPO_API, status_code=404)
    result = invoke("lint", "--path", str(tmp_path), "--url", REPO_URL)
    assert result.exit_code == 1
    assert "Not found" in result.output


def test_lint_config_error_exits_1(make_repo, requests_mock):
    root = make_repo({METADATA_FILE: "license_scanning: [broken\n"})
    result = invoke("lint", "--path", str(root), "--url", REPO_URL)
    assert result.exit_code == 1
    assert "Configuration error" in result.output


# ---------------------------------------------------------------------------
# init
# ---------------------------------------------------------------------------

def test_init_writes_template(tmp_path):
    out = tmp_path / METADATA_FILE
    result = invoke("init", "--output", str(out))
    assert result.exit_code == 0
    assert "license_scanning:" in out.read_text(encoding="utf-8")


def test_init_refuses_to_overwrite(tmp_path):
    out = tmp_path / METADATA_FILE
    out.write_text("keep me")
    result = invoke("init", "--output", str(out))
    assert result.exit_code == 1
    assert out.read_text() == "keep me"
