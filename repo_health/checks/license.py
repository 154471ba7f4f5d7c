"""License evidence: identify the license of a repository from its files.

Usage:
    spdx_id = detect(Globs(root, LICENSE_FILE, case_sensitive=True))
    if spdx_id:
        is_approved(spdx_id)

Detection honours an explicit ``SPDX-License-Identifier`` tag first. Otherwise
the file is compared against the canonical texts bundled in
``repo_health/licenses/`` using the Sørensen-Dice coefficient over word
bigrams, and the best match at or above ``LICENSE_CONFIDENCE`` is returned.
"""

import functools
import logging
import re
from pathlib import Path

from repo_health.checks.content import read_files
from repo_health.checks.path import Globs
from repo_health.patterns import APPROVED_LICENSES, LICENSE_CONFIDENCE, SPDX_TAG

logger = logging.getLogger(__name__)

LICENSES_DIR = Path(__file__).resolve().parent.parent / "licenses"

_COPYRIGHT_LINE_RE = re.compile(r"(?im)^\s*copyright\s*(?:\(c\)|©|\[yyyy\]|<year>|\d{4}).*$")
_NON_WORD_RE = re.compile(r"[^a-z0-9]+")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def detect(globs: Globs) -> str | None:
    """Return the SPDX identifier of the first recognised license file."""
    for path, text in read_files(globs):
        spdx_id = classify(text)
        if spdx_id:
            logger.debug("Detected license %s in %s", spdx_id, path)
            return spdx_id
    return None


def classify(text: str) -> str | None:
    """Return the SPDX identifier for *text*, or None if nothing is close enough."""
    tag = SPDX_TAG.search(text)
    if tag:
        return tag.group(1)

    candidate = _bigrams(text)
    if not candidate:
        return None

    best_id, best_score = None, 0.0
    for spdx_id, template in _templates().items():
        score = _dice(candidate, template)
        if score > best_score:
            best_id, best_score = spdx_id, score

    if best_score >= LICENSE_CONFIDENCE:
        return best_id
    return None


def is_approved(spdx_id: str) -> bool:
    """Return True if *spdx_id* is on the approved licenses list."""
    return spdx_id in APPROVED_LICENSES


# ---------------------------------------------------------------------------
# Internal
# ---------------------------------------------------------------------------

@functools.lru_cache(maxsize=1)
def _templates() -> dict[str, frozenset[tuple[str, str]]]:
    """Load and normalise the bundled canonical texts, keyed by SPDX id."""
    return {
        path.stem: _bigrams(path.read_text(encoding="utf-8"))
        for path in sorted(LICENSES_DIR.glob("*.txt"))
    }


def _bigrams(text: str) -> frozenset[tuple[str, str]]:
    # Copyright notices differ per project
    text = _COPYRIGHT_LINE_RE.sub(" ", text.lower())
    words = _NON_WORD_RE.sub(" ", text).split()
    return frozenset(zip(words, words[1:]))


def _dice(a: frozenset, b: frozenset) -> float:
    if not a or not b:
        return 0.0
    return 2 * len(a & b) / (len(a) + len(b))
