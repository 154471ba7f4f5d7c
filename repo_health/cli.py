"""CLI entry point: command definitions using Click.

Commands:
    init    Generate a template project metadata file
    lint    Lint a cloned repository and emit its health report as JSON
"""

import functools
import json
import logging
import sys
from typing import Any

import click

from repo_health import __version__
from repo_health.patterns import METADATA_FILE


# ---------------------------------------------------------------------------
# Helpers shared by all data commands
# ---------------------------------------------------------------------------

def _configure_logging(verbose: bool) -> None:
    """Point the package logger at the current stderr, replacing earlier handlers."""
    logger = logging.getLogger("repo_health")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _emit_json(data: Any, ctx: click.Context) -> None:
    """Write JSON to stdout or to the file specified by --output."""
    obj = ctx.obj
    indent = 2 if obj["pretty"] else None
    text = json.dumps(data, indent=indent, ensure_ascii=False)

    output_path: str | None = obj["output_path"]
    if output_path:
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(text)
        click.echo(f"Report written to '{output_path}'", err=True)
    else:
        click.echo(text)


def _handle_lint_errors(func):
    """Decorator that turns linter exceptions into a message and exit code 1."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        from repo_health.client import (
            AuthenticationError,
            FetchError,
            NetworkError,
            NotFoundError,
            RateLimitError,
        )
        from repo_health.config import ConfigError

        try:
            return func(*args, **kwargs)
        except ConfigError as exc:
            click.echo(f"Configuration error: {exc}", err=True)
            sys.exit(1)
        except AuthenticationError as exc:
            click.echo(f"Authentication error: {exc}", err=True)
            sys.exit(1)
        except RateLimitError as exc:
            click.echo(f"Rate limit error: {exc}", err=True)
            sys.exit(1)
        except NotFoundError as exc:
            click.echo(f"Not found: {exc}", err=True)
            sys.exit(1)
        except NetworkError as exc:
            click.echo(f"Network error: {exc}", err=True)
            sys.exit(1)
        except FetchError as exc:
            click.echo(f"GitHub error: {exc}", err=True)
            sys.exit(1)
        except OSError as exc:
            click.echo(f"Filesystem error: {exc}", err=True)
            sys.exit(1)

    return wrapper


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------

@click.group()
@click.option("--output", "output_path", default=None,
              help="Write JSON output to a file instead of stdout.")
@click.option("--pretty", is_flag=True, default=False,
              help="Pretty-print the JSON output.")
@click.option("--verbose", is_flag=True, default=False,
              help="Enable verbose logging.")
@click.version_option(__version__, prog_name="repo-health")
@click.pass_context
def cli(ctx: click.Context, output_path: str | None, pretty: bool, verbose: bool) -> None:
    """Repository health linter: check community and compliance signals, export as JSON."""
    ctx.ensure_object(dict)
    ctx.obj["output_path"] = output_path
    ctx.obj["pretty"] = pretty
    ctx.obj["verbose"] = verbose
    _configure_logging(verbose)


# ---------------------------------------------------------------------------
# init
# ---------------------------------------------------------------------------

@cli.command("init")
@click.option("--output", "output_path", default=METADATA_FILE, show_default=True,
              help="Path where the template metadata file will be written.")
def init_command(output_path: str) -> None:
    """Generate a template project metadata file."""
    from repo_health.config import ConfigError, generate_template
    try:
        generate_template(output_path)
        click.echo(f"Template written to '{output_path}'.")
        click.echo("Edit it with your license scanning URL.")
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)


# ---------------------------------------------------------------------------
# lint
# ---------------------------------------------------------------------------

@cli.command("lint")
@click.option("--path", "root", default=".", show_default=True,
              type=click.Path(exists=True, file_okay=False),
              help="Root directory of the cloned repository.")
@click.option("--url", required=True,
              help="Repository URL, e.g. https://github.com/owner/repo.")
@click.option("--token", envvar="GITHUB_TOKEN", default=None,
              help="GitHub token (defaults to $GITHUB_TOKEN).")
@click.option("--timeout", default=30, show_default=True, type=int,
              help="HTTP timeout in seconds.")
@click.pass_context
@_handle_lint_errors
def lint_command(ctx: click.Context, root: str, url: str, token: str | None, timeout: int) -> None:
    """Lint the repository at --path and print its health report."""
    from pathlib import Path

    from repo_health.client import GitHubClient
    from repo_health.linter import LintOptions, lint

    try:
        client = GitHubClient(url, token=token, timeout=timeout)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--url") from exc

    options = LintOptions(root=Path(root), url=url, token=token, timeout=timeout)
    report = lint(options, client=client)
    _emit_json(report.to_dict(), ctx)
