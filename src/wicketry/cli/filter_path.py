"""wicketry filter-path / check-redirect commands."""

from pathlib import Path

import click
from starlette.applications import Starlette

from wicketry.core.errors import FilterPathError
from wicketry.filter.webxml import WebXmlFile
from wicketry.filter.wicket_filter import WicketFilter


@click.command()
@click.argument("web_xml", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("name")
@click.option(
    "--servlet", is_flag=True, help="Look up <servlet-mapping> instead of <filter-mapping>"
)
def filter_path_command(web_xml: Path, name: str, servlet: bool) -> None:
    """Print the mount path NAME is mapped to in WEB_XML."""
    try:
        with web_xml.open("rb") as f:
            filter_path = WebXmlFile().get_unique_filter_path(servlet, name, f)
    except FilterPathError as e:
        raise click.ClickException(str(e)) from e
    click.echo(filter_path)


@click.command()
@click.argument("path")
@click.option("--filter-path", "filter_path", required=True, help="Mount path, e.g. 'app/'")
@click.option("--query", default="", help="Query string of the request")
def check_redirect_command(path: str, filter_path: str, query: str) -> None:
    """Show where a request for PATH would be redirected."""
    app_filter = WicketFilter(Starlette(), filter_path=filter_path)
    target = app_filter.check_if_redirect_required(path, query)
    click.echo(target if target is not None else "no redirect")
