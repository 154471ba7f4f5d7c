"""Data models for repository health reports.

Contains frozen dataclasses used to structure and serialize the JSON output:
    - Documentation
    - License
    - BestPractices
    - Security
    - Legal
    - Report             (the five sections above)
    - RepositoryMetadata (remote evidence shared by the checks)

Every field is always serialized, ``None`` included, so the report schema
does not change from one run to the next.
"""

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class Documentation:
    adopters: bool
    code_of_conduct: bool
    contributing: bool
    changelog: bool
    governance: bool
    maintainers: bool
    readme: bool
    roadmap: bool
    website: bool


@dataclass(frozen=True)
class License:
    approved: bool | None
    scanning: str | None
    spdx_id: str | None


@dataclass(frozen=True)
class BestPractices:
    artifacthub_badge: bool
    community_meeting: bool
    dco: bool
    openssf_badge: bool
    recent_release: bool


@dataclass(frozen=True)
class Security:
    security_policy: bool


@dataclass(frozen=True)
class Legal:
    trademark_footer: bool


@dataclass(frozen=True)
class Report:
    documentation: Documentation
    license: License
    best_practices: BestPractices
    security: Security
    legal: Legal

    def to_dict(self) -> dict:
        """Return the report as nested plain dicts, ready for ``json.dumps``."""
        return asdict(self)


@dataclass(frozen=True)
class RepositoryMetadata:
    """Snapshot of the remote repository, fetched once per run."""

    owner: str
    name: str
    homepage: str | None = None
    license_spdx_id: str | None = None

    @classmethod
    def from_api(cls, data: dict) -> "RepositoryMetadata":
        """Build from a GitHub ``/repos/{owner}/{repo}`` response."""
        license_info = data.get("license") or {}
        return cls(
            owner=(data.get("owner") or {}).get("login", ""),
            name=data.get("name", ""),
            homepage=data.get("homepage"),
            license_spdx_id=license_info.get("spdx_id"),
        )
