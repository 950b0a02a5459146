"""Wicketry CLI - wicketry command."""

import click

from wicketry.cli.filter_path import check_redirect_command, filter_path_command
from wicketry.cli.serve import serve_command
from wicketry.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="wicketry")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Wicketry - cacheable resources and mount-aware request filtering."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "WARNING")


cli.add_command(filter_path_command, name="filter-path")
cli.add_command(check_redirect_command, name="check-redirect")
cli.add_command(serve_command, name="serve")


if __name__ == "__main__":
    cli()
