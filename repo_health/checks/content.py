"""Content evidence: pattern matching over local files and remote pages."""

import logging
import re
from collections.abc import Iterable, Iterator
from pathlib import Path

from repo_health.checks.path import Globs, expand

logger = logging.getLogger(__name__)


def matches(globs: Globs, pattern: re.Pattern) -> bool:
    """Return True if any file selected by *globs* matches *pattern*.

    Stops reading at the first matching file.
    """
    for path, text in read_files(globs):
        if pattern.search(text):
            logger.debug("%s matched in %s", pattern.pattern, path)
            return True
    return False


def find(globs: Globs, patterns: Iterable[re.Pattern]) -> str | None:
    """Return the first value extracted by *patterns* from the selected files.

    Files are scanned in glob order and, for each file, patterns are tried in
    the order given. The value is the pattern's first group when it has one,
    the whole match otherwise.
    """
    patterns = tuple(patterns)
    for _, text in read_files(globs):
        for pattern in patterns:
            m = pattern.search(text)
            if m:
                return m.group(1) if pattern.groups else m.group(0)
    return None


def remote_matches(client, url: str, pattern: re.Pattern) -> bool:
    """Fetch *url* through *client* and test the body against *pattern*.

    Raises:
        FetchError: the page could not be retrieved. Unlike a missing local
                    file, this is not reported as "no match".
    """
    body = client.fetch_text(url)
    return pattern.search(body) is not None


def read_files(globs: Globs) -> Iterator[tuple[Path, str]]:
    """Yield ``(path, text)`` for every regular file selected by *globs*."""
    for path in expand(globs):
        if not path.is_file():
            continue
        try:
            text = path.read_text(encoding="utf-8", errors="replace")
        except FileNotFoundError:
            # Removed between listing and reading
            continue
        yield path, text
