"""wicketry serve command - serve a directory through the resource pipeline."""

from pathlib import Path

import click
import structlog
import uvicorn
from rich.console import Console

from wicketry.app import create_app
from wicketry.config.loader import load_config
from wicketry.core.errors import WicketryError
from wicketry.core.logging import configure_logging, get_log_file_path
from wicketry.filter.wicket_filter import resolve_filter_path
from wicketry.resource.registry import SharedResources
from wicketry.resource.resources import FileResource

logger = structlog.get_logger()

FILES_SCOPE = "files"


def register_directory(shared: SharedResources, root: Path) -> int:
    """Add every file below ``root`` as a FileResource in scope ``files``."""
    count = 0
    for path in sorted(root.rglob("*")):
        if path.is_file():
            shared.add(path.relative_to(root).as_posix(), FileResource(path), scope=FILES_SCOPE)
            count += 1
    return count


@click.command()
@click.argument("directory", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--host", default=None, help="Override bind address")
@click.option("--port", "-p", type=int, default=None, help="Override server port")
@click.option("--mount", default=None, help="Filter mapping, e.g. '/static/*'")
@click.pass_context
def serve_command(
    ctx: click.Context,
    directory: Path,
    host: str | None,
    port: int | None,
    mount: str | None,
) -> None:
    """Serve the files in DIRECTORY with caching and conditional requests.

    Logging follows the ``logging`` section of the loaded config; ``-v``
    raises its root level to DEBUG.
    """
    verbose = bool((ctx.find_root().obj or {}).get("verbose"))
    overrides: dict[str, dict[str, object]] = {}
    if host is not None or port is not None:
        overrides["server"] = {
            k: v for k, v in (("host", host), ("port", port)) if v is not None
        }
    if mount is not None:
        overrides["filter"] = {"filter_mapping": mount}

    try:
        config = load_config(**overrides)
        logging_config = config.logging
        if verbose:
            logging_config = logging_config.model_copy(update={"level": "DEBUG"})
        configure_logging(config=logging_config)
        shared = SharedResources(settings=config.resources)
        count = register_directory(shared, directory.resolve())
        app = create_app(config, shared)
        filter_path = resolve_filter_path(config.filter)
    except WicketryError as e:
        raise click.ClickException(str(e)) from e

    console = Console()
    base_url = f"http://{config.server.host}:{config.server.port}"
    console.print(f"Serving {count} files from {directory}", style="bold cyan", highlight=False)
    url = f"{base_url}/{filter_path}wicket/resource/{FILES_SCOPE}/<path>"
    console.print(f"  {url}", highlight=False)
    if (log_file := get_log_file_path()) is not None:
        console.print(f"  Logs: {log_file}", style="dim", highlight=False)

    logger.info("serve_starting", directory=str(directory), files=count)
    uvicorn.run(app, host=config.server.host, port=config.server.port, log_level="warning")
