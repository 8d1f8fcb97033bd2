"""CLI entry point for webswags."""

import json
import logging

import click

from webswags.config import Settings
from webswags.discovery.errors import WalkError
from webswags.discovery.models import SpecDocument
from webswags.discovery.walker import discover, find_service_collisions

log = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def _discover(settings: Settings) -> list[SpecDocument]:
    """Run discovery, turning a root traversal failure into a CLI error."""
    log.info("Searching for specifications in %s", settings.root_dir)
    try:
        specs = discover(settings.root_dir, workers=settings.workers)
    except WalkError as e:
        raise click.ClickException(f"Failed to discover swagger specs: {e}") from e

    log.info("Discovered %d swagger specifications", len(specs))
    for spec in specs:
        log.info("Service found: name=%s service=%s path=%s", spec.name, spec.service, spec.path)
    for service, paths in find_service_collisions(specs).items():
        log.warning("Service name %r is shared by %d specs: %s", service, len(paths), ", ".join(paths))
    return specs


@click.group()
def main():
    """webswags: browse every OpenAPI/Swagger spec under a directory tree."""
    pass


@main.command()
@click.option("--root", "root_dir", default=None, help="Root directory to search for swagger specifications.")
@click.option("--host", default=None, help="Interface to bind.")
@click.option("--port", default=None, type=int, help="Port to listen on.")
@click.option("--workers", default=None, type=click.IntRange(min=1), help="Parallel file parsers during discovery.")
@click.option("--log-level", default=None, type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False))
def serve(root_dir: str | None, host: str | None, port: int | None, workers: int | None, log_level: str | None):
    """Discover specs and serve them over HTTP."""
    from webswags.web.app import create_app

    settings = Settings.from_env(root_dir=root_dir, host=host, port=port, workers=workers, log_level=log_level)
    configure_logging(settings.log_level)
    specs = _discover(settings)

    app = create_app(specs, settings)
    log.info("Starting webswags server on http://%s:%d", settings.host, settings.port)
    app.run(host=settings.host, port=settings.port)


@main.command(name="list")
@click.option("--root", "root_dir", default=None, help="Root directory to search for swagger specifications.")
@click.option("--workers", default=None, type=click.IntRange(min=1), help="Parallel file parsers during discovery.")
@click.option("--json", "as_json", is_flag=True, help="Print the discovered specs as JSON.")
@click.option("--log-level", default=None, type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False))
def list_specs(root_dir: str | None, workers: int | None, as_json: bool, log_level: str | None):
    """Print the specs discovered under the root directory."""
    settings = Settings.from_env(root_dir=root_dir, workers=workers, log_level=log_level)
    configure_logging(settings.log_level)
    specs = _discover(settings)

    if as_json:
        click.echo(json.dumps([spec.summary() for spec in specs], indent=2))
        return

    if not specs:
        click.echo(f"No specifications found under {settings.root_dir}.")
        return
    for spec in specs:
        kind = "OpenAPI" if spec.is_openapi3 else "Swagger"
        click.echo(f"{spec.service}\t{kind} {spec.version_string}\t{spec.format}\t{spec.path}")
    click.echo(f"Found {len(specs)} specifications.")


if __name__ == "__main__":
    main()
