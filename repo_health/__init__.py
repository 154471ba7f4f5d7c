"""Repository health linter."""

__version__ = "0.1.0"
