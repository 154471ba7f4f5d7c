"""Local git history evidence."""

import logging
import subprocess
from pathlib import Path

from repo_health.patterns import DCO_COMMITS_LIMIT, DCO_SIGNATURE

logger = logging.getLogger(__name__)

# Separates commit bodies in the `git log` output
_COMMIT_SEPARATOR = "\x1e"


class GitError(Exception):
    """Raised when the local git history cannot be inspected."""


def commits_have_dco_signature(root: Path, limit: int = DCO_COMMITS_LIMIT) -> bool:
    """Return True if every recent non-merge commit carries a sign-off trailer.

    Returns False when the history has no commits to inspect.

    Raises:
        GitError: git is missing, or ``root`` is not a readable repository.
    """
    messages = _commit_messages(root, limit)
    if not messages:
        return False
    return all(DCO_SIGNATURE.search(m) for m in messages)


def _commit_messages(root: Path, limit: int) -> list[str]:
    args = [
        "git", "-C", str(root), "log",
        f"--max-count={limit}", "--no-merges",
        f"--format=%B{_COMMIT_SEPARATOR}",
    ]
    try:
        proc = subprocess.run(
            args,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            errors="replace",
            check=False,
        )
    except OSError as exc:
        raise GitError(f"Unable to run git: {exc}") from exc

    if proc.returncode != 0:
        raise GitError(
            f"git log failed in '{root}' (exit {proc.returncode}): {proc.stderr.strip()[:200]}"
        )

    logger.debug("Read %d bytes of commit history from %s", len(proc.stdout), root)
    return [m.strip() for m in proc.stdout.split(_COMMIT_SEPARATOR) if m.strip()]
