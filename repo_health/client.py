"""GitHub API client: remote evidence about the repository being linted.

Usage:
    client = GitHubClient("https://github.com/owner/repo", token="ghp_xxx")
    md     = client.get_repository()
    client.has_default_community_health_file(md, "SECURITY.md")
    client.last_release_body_matches(CHANGELOG_RELEASE)
    client.last_pr_has_check("DCO")

No retries are attempted; every failure is raised as a ``FetchError``.
"""

import logging
import re
import threading
from datetime import datetime, timedelta, timezone
from typing import Any
from urllib.parse import urlparse

import requests

from repo_health.models import RepositoryMetadata
from repo_health.patterns import RECENT_RELEASE_DAYS

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"

# Repository holding an organization's default community health files
DEFAULT_HEALTH_REPO = ".github"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class FetchError(Exception):
    """Base exception for all remote evidence failures."""


class AuthenticationError(FetchError):
    """Raised on HTTP 401 or 403: invalid token or missing permissions."""


class RateLimitError(FetchError):
    """Raised when the API rate limit has been exhausted."""


class NotFoundError(FetchError):
    """Raised on HTTP 404: repository, file or resource not found."""


class NetworkError(FetchError):
    """Raised on connection timeout or unreachable server."""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def parse_repository_url(url: str) -> tuple[str, str]:
    """Return ``(owner, repo)`` from a ``https://github.com/owner/repo`` URL.

    Raises:
        ValueError: the URL does not point at a GitHub repository.
    """
    parsed = urlparse(url.strip())
    parts = [p for p in parsed.path.split("/") if p]
    if parsed.netloc.lower() not in ("github.com", "www.github.com") or len(parts) < 2:
        raise ValueError(f"Not a GitHub repository URL: '{url}'")
    owner, repo = parts[0], re.sub(r"\.git$", "", parts[1])
    return owner, repo


def _parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

class GitHubClient:
    """Thin wrapper around the GitHub REST API, bound to one repository."""

    def __init__(
        self,
        repo_url: str,
        token: str | None = None,
        timeout: int = 30,
        api_url: str = GITHUB_API_URL,
    ) -> None:
        self.owner, self.repo = parse_repository_url(repo_url)
        self.api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._local = threading.local()
        # Sent to the API only, never to arbitrary pages such as the homepage
        self._api_headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if token:
            self._api_headers["Authorization"] = f"Bearer {token}"

    # ------------------------------------------------------------------
    # Low-level access
    # ------------------------------------------------------------------

    def get(self, endpoint: str, params: dict[str, Any] | None = None) -> Any:
        """Perform a single API GET request and return the parsed JSON response.

        Raises:
            AuthenticationError: HTTP 401 / 403
            RateLimitError:      rate limit exhausted (HTTP 403 / 429)
            NotFoundError:       HTTP 404
            FetchError:          Any other non-2xx or non-JSON response
            NetworkError:        Timeout or connection failure
        """
        url = f"{self.api_url}{endpoint}"
        response = self._request(url, params or {}, self._api_headers)
        try:
            return response.json()
        except ValueError as exc:
            raise FetchError(f"Malformed JSON response from {url}") from exc

    def fetch_text(self, url: str) -> str:
        """GET an arbitrary URL and return the body as text.

        Homepages are often declared without a scheme; https is assumed.
        The body is returned whatever the HTTP status: an error page simply
        fails to match. Only network failures raise.
        """
        if "//" not in url:
            url = f"https://{url}"
        return self._send(url, {}, {}).text

    # ------------------------------------------------------------------
    # Repository evidence
    # ------------------------------------------------------------------

    def get_repository(self) -> RepositoryMetadata:
        """Fetch the repository metadata (homepage, declared license...)."""
        data = self.get(f"/repos/{self.owner}/{self.repo}")
        return RepositoryMetadata.from_api(data)

    def has_default_community_health_file(self, md: RepositoryMetadata, name: str) -> bool:
        """Return True if *name* is inherited from the owner's ``.github`` repository."""
        owner = md.owner or self.owner
        try:
            self.get(f"/repos/{owner}/{DEFAULT_HEALTH_REPO}/contents/{name}")
        except NotFoundError:
            return False
        return True

    def last_release_body_matches(self, pattern: re.Pattern) -> bool:
        """Return True if the description of the latest release matches *pattern*."""
        release = self._last_release()
        if release is None:
            return False
        return pattern.search(release.get("body") or "") is not None

    def has_recent_release(self, now: datetime | None = None) -> bool:
        """Return True if a release was published in the last ``RECENT_RELEASE_DAYS``."""
        release = self._last_release()
        if release is None:
            return False
        stamp = release.get("published_at") or release.get("created_at")
        if not stamp:
            return False
        now = now or datetime.now(timezone.utc)
        return _parse_timestamp(stamp) > now - timedelta(days=RECENT_RELEASE_DAYS)

    def last_pr_has_check(self, name: str) -> bool:
        """Return True if the head commit of the latest pull request ran check *name*."""
        pulls = self.get(
            f"/repos/{self.owner}/{self.repo}/pulls",
            {"state": "all", "sort": "created", "direction": "desc", "per_page": 1},
        )
        if not pulls:
            return False
        sha = pulls[0].get("head", {}).get("sha")
        if not sha:
            return False
        data = self.get(
            f"/repos/{self.owner}/{self.repo}/commits/{sha}/check-runs",
            {"check_name": name},
        )
        return any(run.get("name") == name for run in data.get("check_runs", []))

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _last_release(self) -> dict | None:
        releases = self.get(f"/repos/{self.owner}/{self.repo}/releases", {"per_page": 1})
        return releases[0] if releases else None

    @property
    def _session(self) -> requests.Session:
        # Sessions are not shared across the linter's worker threads
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._local.session = requests.Session()
        return session

    def _send(self, url: str, params: dict[str, Any], headers: dict[str, str]) -> requests.Response:
        logger.debug("GET %s", url)
        try:
            return self._session.get(url, params=params, headers=headers, timeout=self._timeout)
        except requests.exceptions.Timeout as exc:
            raise NetworkError(
                f"Request timed out after {self._timeout}s while contacting '{url}'"
            ) from exc
        except requests.exceptions.ConnectionError as exc:
            raise NetworkError(f"Unable to reach '{url}'") from exc
        except requests.exceptions.RequestException as exc:
            raise FetchError(f"Request to '{url}' failed: {exc}") from exc

    def _request(self, url: str, params: dict[str, Any], headers: dict[str, str]) -> requests.Response:
        response = self._send(url, params, headers)
        if response.status_code == 429 or (
            response.status_code == 403
            and response.headers.get("X-RateLimit-Remaining") == "0"
        ):
            raise RateLimitError(
                f"Rate limit exceeded while fetching {url}. Provide a token or retry later."
            )
        if response.status_code in (401, 403):
            raise AuthenticationError(
                f"Access denied ({response.status_code}) to {url}: check that your token is valid."
            )
        if response.status_code == 404:
            raise NotFoundError(f"Resource not found: {url}")
        if not response.ok:
            raise FetchError(
                f"Unexpected response {response.status_code} from {url}: {response.text[:200]}"
            )

        return response
