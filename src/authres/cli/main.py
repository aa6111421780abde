# SPDX-License-Identifier: MPL-2.0
"""Main CLI entry point."""
import logging
from typing import Optional, Tuple

import click

from authres.core.config import ParserOptions
from authres.core.exceptions import ConfigurationError, ParseError
from authres.core.header import parse_header
from authres.core.models import AuthenticationResults
from authres.core.parser import parse


@click.group()  # type: ignore[misc]
@click.option("--verbose", "-v", is_flag=True, help="Log parser progress")
def cli(verbose: bool) -> None:
    """Authentication-Results header tools."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()  # type: ignore[misc]
def version() -> None:
    """Show version information."""
    from authres import __version__

    click.echo(f"authres v{__version__}")


def _build_options(
    max_comment_depth: Optional[int], extra_ptypes: Tuple[str, ...]
) -> ParserOptions:
    options = ParserOptions.from_env()
    overrides = {}
    if max_comment_depth is not None:
        overrides["max_comment_depth"] = max_comment_depth
    if extra_ptypes:
        overrides["extra_ptypes"] = options.extra_ptypes | set(extra_ptypes)
    if not overrides:
        return options
    return ParserOptions.create(**{**options.model_dump(), **overrides})


def _echo_text(parsed: AuthenticationResults) -> None:
    click.echo(f"authserv-id: {parsed.auth_serv_id}")
    if parsed.version:
        click.echo(f"version: {parsed.version}")
    if not parsed.results:
        click.echo("results: none")
    for result in parsed.results:
        method = result.method
        if result.version:
            method += f"/{result.version}"
        click.echo(f"\n{method}={result.result}")
        if result.reason:
            click.echo(f"  reason: {result.reason}")
        for prop in result.properties:
            click.echo(f"  {prop}")


def _echo_compact(parsed: AuthenticationResults) -> None:
    verdicts = " ".join(f"{r.method}={r.result}" for r in parsed.results) or "none"
    click.echo(f"{parsed.auth_serv_id}: {verdicts}")


@cli.command(name="parse")  # type: ignore[misc]
@click.argument("value")
@click.option("--header", "is_header", is_flag=True,
              help="VALUE is a whole header line, possibly folded")
@click.option("--max-comment-depth", type=int, default=None,
              help="Maximum comment nesting depth")
@click.option("--extra-ptype", "extra_ptypes", multiple=True,
              help="Accept an additional property type (repeatable)")
@click.option("--output", "-o", type=click.Choice(["text", "json", "compact"]),
              default="text", help="Output format")
def parse_command(
    value: str,
    is_header: bool,
    max_comment_depth: Optional[int],
    extra_ptypes: Tuple[str, ...],
    output: str,
) -> None:
    """Parse an Authentication-Results header value."""
    try:
        options = _build_options(max_comment_depth, extra_ptypes)
        parsed = parse_header(value, options) if is_header else parse(value, options)
    except ParseError as e:
        click.echo(f"Error: {e.kind}: {e}", err=True)
        raise SystemExit(1)
    except ConfigurationError as e:
        click.echo(f"Error: {e.message}", err=True)
        raise SystemExit(2)

    if output == "json":
        click.echo(parsed.model_dump_json(indent=2))
    elif output == "compact":
        _echo_compact(parsed)
    else:
        _echo_text(parsed)


if __name__ == "__main__":
    cli()
