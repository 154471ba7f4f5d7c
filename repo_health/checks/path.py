"""Path evidence: glob expansion over a repository tree.

Usage:
    globs = Globs(root, ("docs/code*of*conduct.md",), case_sensitive=False)
    exists(globs)     # -> True if docs/CODE_OF_CONDUCT.md is there
    expand(globs)     # -> [Path(".../docs/CODE_OF_CONDUCT.md")]

Patterns are ``/``-separated and matched one segment at a time, so a
missing intermediate directory is simply "no match". Only an unreadable
directory is an error (``OSError``).
"""

import fnmatch
import os
import re
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Globs:
    """A set of glob patterns to look for under a root directory."""

    root: Path
    patterns: tuple[str, ...]
    case_sensitive: bool = False


def exists(globs: Globs) -> bool:
    """Return True if any entry under ``globs.root`` matches a pattern."""
    return any(True for _ in _iter_matches(globs))


def expand(globs: Globs) -> list[Path]:
    """Return every path matching one of the patterns, in pattern order."""
    seen: set[Path] = set()
    paths: list[Path] = []
    for path in _iter_matches(globs):
        if path not in seen:
            seen.add(path)
            paths.append(path)
    return paths


# ---------------------------------------------------------------------------
# Internal
# ---------------------------------------------------------------------------

def _iter_matches(globs: Globs):
    flags = 0 if globs.case_sensitive else re.IGNORECASE
    root = Path(globs.root)
    for pattern in globs.patterns:
        segments = [s for s in pattern.split("/") if s]
        yield from _walk(root, segments, flags)


def _walk(directory: Path, segments: list[str], flags: int):
    regex = re.compile(fnmatch.translate(segments[0]), flags)
    last = len(segments) == 1

    with os.scandir(directory) as entries:
        matched = sorted(
            (e for e in entries if regex.match(e.name)),
            key=lambda e: e.name,
        )

    for entry in matched:
        if last:
            yield Path(entry.path)
        elif entry.is_dir():
            yield from _walk(Path(entry.path), segments[1:], flags)
