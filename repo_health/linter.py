"""Repository linter: resolves every checklist item and assembles the report.

Functions:
    lint(options, client=None)                          -> Report
    lint_documentation(root, client, md)                -> Documentation
    lint_license(root, metadata, md)                    -> License
    lint_best_practices(root, client)                   -> BestPractices
    lint_security(root, client, md)                     -> Security
    lint_legal(client, md)                              -> Legal

Each item is an ordered chain of evidence sources (see ``repo_health.checks``):
local files first, then the README, then the GitHub API. The documentation,
best practices, security and legal sections are resolved concurrently; the
first section to fail aborts the whole report.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path

from repo_health.checks import any_of, best_effort, content, first_of, git, license, path
from repo_health.checks.path import Globs
from repo_health.client import GitHubClient
from repo_health.config import Metadata, load_metadata
from repo_health.models import (
    BestPractices,
    Documentation,
    Legal,
    License,
    Report,
    RepositoryMetadata,
    Security,
)
from repo_health.patterns import (
    ADOPTERS_FILE,
    ADOPTERS_HEADER,
    ARTIFACTHUB_BADGE_URL,
    CHANGELOG_FILE,
    CHANGELOG_HEADER,
    CHANGELOG_RELEASE,
    CODE_OF_CONDUCT_FILE,
    CODE_OF_CONDUCT_HEADER,
    COMMUNITY_MEETING_TEXT,
    CONTRIBUTING_FILE,
    CONTRIBUTING_HEADER,
    DCO_CHECK_NAME,
    GOVERNANCE_FILE,
    GOVERNANCE_HEADER,
    LICENSE_FILE,
    MAINTAINERS_FILE,
    METADATA_FILE,
    OPENSSF_BADGE_URL,
    README_FILE,
    ROADMAP_FILE,
    ROADMAP_HEADER,
    SCANNING_URLS,
    SECURITY_POLICY_FILE,
    SECURITY_POLICY_HEADER,
    TRADEMARK_FOOTER,
    UNASSESSED_LICENSE,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LintOptions:
    root: Path
    url: str
    token: str | None = None
    timeout: int = 30


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def lint(options: LintOptions, client: GitHubClient | None = None) -> Report:
    """Lint the repository cloned at ``options.root`` and return its report.

    The metadata file is read and the GitHub metadata fetched once, before
    any concurrent work starts; both are shared read-only by the sections.

    Raises:
        ConfigError: malformed metadata file
        FetchError:  a remote source could not be queried
        OSError:     an unreadable directory in the repository
    """
    root = Path(options.root)
    metadata = load_metadata(root / METADATA_FILE)

    if client is None:
        client = GitHubClient(options.url, token=options.token, timeout=options.timeout)
    md = client.get_repository()
    logger.info("Linting %s/%s from %s", md.owner or client.owner, md.name or client.repo, root)

    pool = ThreadPoolExecutor(max_workers=4, thread_name_prefix="lint")
    try:
        futures = {
            pool.submit(lint_documentation, root, client, md): "documentation",
            pool.submit(lint_best_practices, root, client): "best_practices",
            pool.submit(lint_security, root, client, md): "security",
            pool.submit(lint_legal, client, md): "legal",
        }

        # No remote dependency: resolved here while the pool works
        license_section = lint_license(root, metadata, md)

        sections = {}
        for future in as_completed(futures):
            # Re-raises the first failure to complete; siblings are discarded
            sections[futures[future]] = future.result()
            logger.debug("Section %s resolved", futures[future])
    finally:
        pool.shutdown(wait=False, cancel_futures=True)

    return Report(
        documentation=sections["documentation"],
        license=license_section,
        best_practices=sections["best_practices"],
        security=sections["security"],
        legal=sections["legal"],
    )


def lint_documentation(root: Path, client: GitHubClient, md: RepositoryMetadata) -> Documentation:
    """Resolve the documentation section."""
    readme = _readme(root)

    adopters = any_of(
        lambda: path.exists(_files(root, ADOPTERS_FILE)),
        lambda: content.matches(readme, ADOPTERS_HEADER),
    )
    code_of_conduct = any_of(
        lambda: path.exists(_files(root, CODE_OF_CONDUCT_FILE)),
        lambda: content.matches(readme, CODE_OF_CONDUCT_HEADER),
        lambda: client.has_default_community_health_file(md, "CODE_OF_CONDUCT.md"),
    )
    contributing = any_of(
        lambda: path.exists(_files(root, CONTRIBUTING_FILE)),
        lambda: content.matches(readme, CONTRIBUTING_HEADER),
        lambda: client.has_default_community_health_file(md, "CONTRIBUTING.md"),
    )
    changelog = any_of(
        lambda: path.exists(_files(root, CHANGELOG_FILE)),
        lambda: content.matches(readme, CHANGELOG_HEADER),
        lambda: client.last_release_body_matches(CHANGELOG_RELEASE),
    )
    governance = any_of(
        lambda: path.exists(_files(root, GOVERNANCE_FILE)),
        lambda: content.matches(readme, GOVERNANCE_HEADER),
    )
    maintainers = path.exists(_files(root, MAINTAINERS_FILE))
    readme_found = path.exists(readme)
    roadmap = any_of(
        lambda: path.exists(_files(root, ROADMAP_FILE)),
        lambda: content.matches(readme, ROADMAP_HEADER),
    )

    return Documentation(
        adopters=adopters,
        code_of_conduct=code_of_conduct,
        contributing=contributing,
        changelog=changelog,
        governance=governance,
        maintainers=maintainers,
        readme=readme_found,
        roadmap=roadmap,
        website=_has_homepage(md),
    )


def lint_license(root: Path, metadata: Metadata | None, md: RepositoryMetadata) -> License:
    """Resolve the license section. Needs no remote call beyond ``md``."""
    spdx_id = first_of(
        lambda: license.detect(Globs(root, LICENSE_FILE, case_sensitive=True)),
        lambda: _declared_license(md),
    )
    approved = license.is_approved(spdx_id) if spdx_id is not None else None

    scanning = first_of(
        lambda: metadata.license_scanning_url if metadata else None,
        lambda: content.find(_readme(root), SCANNING_URLS),
    )

    return License(approved=approved, scanning=scanning, spdx_id=spdx_id)


def lint_best_practices(root: Path, client: GitHubClient) -> BestPractices:
    """Resolve the best practices section."""
    readme = _readme(root)

    # Local history is best-effort; the pull request check is not
    dco = any_of(
        best_effort(lambda: git.commits_have_dco_signature(root), git.GitError),
        lambda: client.last_pr_has_check(DCO_CHECK_NAME),
    )

    return BestPractices(
        artifacthub_badge=content.matches(readme, ARTIFACTHUB_BADGE_URL),
        community_meeting=content.matches(readme, COMMUNITY_MEETING_TEXT),
        dco=dco,
        openssf_badge=content.matches(readme, OPENSSF_BADGE_URL),
        recent_release=client.has_recent_release(),
    )


def lint_security(root: Path, client: GitHubClient, md: RepositoryMetadata) -> Security:
    """Resolve the security section."""
    security_policy = any_of(
        lambda: path.exists(_files(root, SECURITY_POLICY_FILE)),
        lambda: content.matches(_readme(root), SECURITY_POLICY_HEADER),
        lambda: client.has_default_community_health_file(md, "SECURITY.md"),
    )
    return Security(security_policy=security_policy)


def lint_legal(client: GitHubClient, md: RepositoryMetadata) -> Legal:
    """Resolve the legal section. The homepage is only fetched when declared."""
    trademark_footer = False
    if _has_homepage(md):
        trademark_footer = content.remote_matches(client, md.homepage.strip(), TRADEMARK_FOOTER)
    return Legal(trademark_footer=trademark_footer)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _files(root: Path, patterns: tuple[str, ...]) -> Globs:
    return Globs(root, patterns, case_sensitive=False)


def _readme(root: Path) -> Globs:
    return Globs(root, README_FILE, case_sensitive=True)


def _has_homepage(md: RepositoryMetadata) -> bool:
    return bool(md.homepage and md.homepage.strip())


def _declared_license(md: RepositoryMetadata) -> str | None:
    if md.license_spdx_id and md.license_spdx_id != UNASSESSED_LICENSE:
        return md.license_spdx_id
    return None
