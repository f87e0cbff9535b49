import asyncio
import logging
from typing import Optional

import click
import typer
from rich.console import Console
from typer.core import TyperCommand

from checklinks.core import logging as log
from .classifier import normalize_seed
from .dispatcher import crawl_async
from .errors import MalformedURL
from .models import CrawlSettings
from .reporter import Reporter, render_summary

USAGE = "usage: checklinks [OPTIONS] URL"

app = typer.Typer(
    help="Crawl one site and report the status of every link on it.",
    add_completion=False,
)

err = Console(stderr=True, highlight=False, soft_wrap=True)


class CheckCommand(TyperCommand):
    # argument errors exit 1, same as a missing URL
    def parse_args(self, ctx, args):
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            err.print(USAGE, markup=False)
            err.print(f"error: {e.format_message()}", markup=False)
            raise typer.Exit(code=1)


@app.command(cls=CheckCommand)
def run(
    url: Optional[str] = typer.Argument(
        None, help="Seed address (http:// is assumed when no scheme is given)"
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", "-timeout", help="Request timeout (in seconds)"
    ),
    success: bool = typer.Option(
        False, "--success", "-success", help="Report succeeded links (OK)"
    ),
    ignored: bool = typer.Option(
        False, "--ignored", "-ignored", help="Report ignored links (e.g. mailto:...)"
    ),
    failed: bool = typer.Option(
        True,
        "--failed/--no-failed",
        "-failed/-nofailed",
        help="Report failed links (e.g. 404)",
    ),
    parallelism: Optional[int] = typer.Option(
        None, "--parallelism", help="Max. HTTP requests open at any given time"
    ),
    no_verify: bool = typer.Option(
        False, "--no-verify", help="Skip TLS certificate verification"
    ),
    user_agent: Optional[str] = typer.Option(None, "--user-agent"),
    summary: bool = typer.Option(False, "--summary", help="Print a summary table"),
    log_level: Optional[str] = typer.Option(None, "--log-level"),
):
    log.setup(log_level)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    if not url:
        err.print(USAGE, markup=False)
        raise typer.Exit(code=1)
    try:
        seed = normalize_seed(url)
    except MalformedURL as e:
        err.print(f"parse {url} as URL: {e}", markup=False)
        raise typer.Exit(code=1)
    try:
        settings = CrawlSettings.from_env(
            timeout=timeout,
            parallelism=parallelism,
            verify=False if no_verify else None,
            user_agent=user_agent,
        )
    except ValueError as e:
        err.print(f"invalid settings: {e}", markup=False)
        raise typer.Exit(code=1)

    reporter = Reporter(success=success, ignored=ignored, failed=failed)
    result = asyncio.run(crawl_async(seed, settings, reporter))
    if summary:
        reporter.console.print(render_summary(result))
