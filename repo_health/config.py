"""Project-local metadata loading and validation.

Usage:
    md = load_metadata(root / METADATA_FILE)    # None when the file is absent
    md.license_scanning_url                     # "https://app.fossa.com/..."
    generate_template(".repo-health.yml")       # writes example file to disk
"""

from dataclasses import dataclass
from pathlib import Path

import yaml

from repo_health.patterns import METADATA_FILE


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class ConfigError(Exception):
    """Raised when the metadata file is malformed or invalid."""


# ---------------------------------------------------------------------------
# Metadata dataclass
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Metadata:
    license_scanning_url: str | None = None


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------

def load_metadata(path: str | Path) -> Metadata | None:
    """Load and validate project metadata from a YAML file.

    An absent file is not an error: the checks fall back to other evidence.

    Raises:
        ConfigError: if the file cannot be parsed or a field has the wrong type.
    """
    path = Path(path)

    if not path.is_file():
        return None

    try:
        with path.open(encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse '{path}': {exc}") from exc

    # An empty file is a valid, empty document
    if raw is None:
        return Metadata()
    if not isinstance(raw, dict):
        raise ConfigError(f"'{path}' must be a YAML mapping at the top level.")

    scanning = raw.get("license_scanning") or {}
    if not isinstance(scanning, dict):
        raise ConfigError(f"'{path}': 'license_scanning' must be a mapping.")

    url = scanning.get("url")
    if url is not None and not isinstance(url, str):
        raise ConfigError(f"'{path}': 'license_scanning.url' must be a string.")

    return Metadata(license_scanning_url=url.strip() if url and url.strip() else None)


# ---------------------------------------------------------------------------
# Template generator (used by `init` command)
# ---------------------------------------------------------------------------

TEMPLATE = """\
# Project metadata read by repo-health.

license_scanning:
  # Link to the license scanning results of this project (FOSSA, Snyk...)
  url: "https://app.fossa.com/projects/git%2Bgithub.com%2Fowner%2Frepo"
"""


def generate_template(output_path: str = METADATA_FILE) -> None:
    """Write a template metadata file to *output_path*.

    Raises:
        ConfigError: if the file already exists.
    """
    path = Path(output_path)
    if path.exists():
        raise ConfigError(
            f"'{output_path}' already exists. Remove it first or choose a different path."
        )
    path.write_text(TEMPLATE, encoding="utf-8")
