"""Static checklist data: file globs, content patterns and policy constants.

Everything here is compiled once at import time and shared read-only by
the checks and the linter.
"""

import re

# Project-local metadata file, relative to the repository root
METADATA_FILE = ".repo-health.yml"


# ---------------------------------------------------------------------------
# File globs
# ---------------------------------------------------------------------------

ADOPTERS_FILE = ("adopters*",)
CHANGELOG_FILE = ("changelog*",)
CODE_OF_CONDUCT_FILE = (
    "code*of*conduct.md",
    "docs/code*of*conduct.md",
    ".github/code*of*conduct.md",
)
CONTRIBUTING_FILE = (
    "contributing*",
    "docs/contributing*",
    ".github/contributing*",
)
GOVERNANCE_FILE = ("governance*", "docs/governance*")
LICENSE_FILE = ("LICENSE*", "COPYING*")
MAINTAINERS_FILE = (
    "maintainers*",
    "docs/maintainers*",
    "owners*",
    "codeowners*",
    "docs/codeowners*",
    ".github/codeowners*",
)
README_FILE = ("README*", "docs/README*", ".github/README*")
ROADMAP_FILE = ("roadmap*", "docs/roadmap*")
SECURITY_POLICY_FILE = (
    "security*",
    "docs/security*",
    ".github/security*",
)


# ---------------------------------------------------------------------------
# README headers
# ---------------------------------------------------------------------------

def _header(title: str) -> re.Pattern:
    return re.compile(rf"(?im)^#+.*{title}.*$")


ADOPTERS_HEADER = _header("adopters")
CHANGELOG_HEADER = _header("changelog")
CODE_OF_CONDUCT_HEADER = _header("code of conduct")
CONTRIBUTING_HEADER = _header("contributing")
GOVERNANCE_HEADER = _header("governance")
ROADMAP_HEADER = _header("roadmap")
SECURITY_POLICY_HEADER = _header("security")


# ---------------------------------------------------------------------------
# Other content patterns
# ---------------------------------------------------------------------------

ARTIFACTHUB_BADGE_URL = re.compile(r"https://artifacthub\.io/badge/repository/.*")
CHANGELOG_RELEASE = re.compile(r"(?i)(changelog|changes)")
COMMUNITY_MEETING_TEXT = re.compile(
    r"(?i)(community|developer|development) (call|event|meeting|session)"
)
DCO_SIGNATURE = re.compile(r"(?m)^Signed-off-by: ")
OPENSSF_BADGE_URL = re.compile(
    r"https://(?:bestpractices\.coreinfrastructure\.org|www\.bestpractices\.dev)"
    r"/(?:[a-z]{2}/)?projects/\d+"
)
TRADEMARK_FOOTER = re.compile(
    r"(?i)(https://(?:w{3}\.)?linuxfoundation\.org/(?:legal/)?trademark-usage"
    r"|The Linux Foundation.* has registered trademarks and uses trademarks)"
)

# License scanning services; the first group is the reported URL
FOSSA_URL = re.compile(r"(https://app\.fossa\.(?:io|com)/projects/[^)\]\s\"']+)")
SNYK_URL = re.compile(r"(https://snyk\.io/test/github/[^/\s]+/[^/)\]\s\"']+)")
SCANNING_URLS = (FOSSA_URL, SNYK_URL)


# ---------------------------------------------------------------------------
# License policy
# ---------------------------------------------------------------------------

APPROVED_LICENSES = frozenset({
    "Apache-2.0",
    "BSD-2-Clause",
    "BSD-2-Clause-FreeBSD",
    "BSD-3-Clause",
    "ISC",
    "MIT",
    "PostgreSQL",
    "Python-2.0",
    "X11",
    "Zlib",
})

# Value GitHub reports when it could not identify the license
UNASSESSED_LICENSE = "NOASSERTION"

LICENSE_CONFIDENCE = 0.8
SPDX_TAG = re.compile(r"SPDX-License-Identifier:\s*([A-Za-z0-9.+-]+)")


# ---------------------------------------------------------------------------
# Remote checks
# ---------------------------------------------------------------------------

DCO_CHECK_NAME = "DCO"
DCO_COMMITS_LIMIT = 20
RECENT_RELEASE_DAYS = 365
