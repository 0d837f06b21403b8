"""CLI entry point for apidoc-postman."""

import logging
import sys
from pathlib import Path

import click

from apidoc_postman.errors import ConversionError
from apidoc_postman.generator.collection import build_collection
from apidoc_postman.generator.url import normalize_url
from apidoc_postman.parser.apidoc import load_descriptors, load_project
from apidoc_postman.parser.base import ProjectMetadata
from apidoc_postman.parser.package_info import load_project_metadata
from apidoc_postman.writer import write_collection

logger = logging.getLogger(__name__)


class _ClickHandler(logging.Handler):
    """Sends log records to stderr through click.echo."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            click.echo(self.format(record), err=True)
        except Exception:
            self.handleError(record)


def _configure_logging(debug: bool, verbose: bool, silent: bool) -> None:
    if silent:
        level = logging.CRITICAL + 1
    elif debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    handler = _ClickHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logging.basicConfig(level=level, handlers=[handler], force=True)


def _resolve_project(
    project_path: Path | None, src_dir: Path, name: str | None, title: str | None, version: str | None
) -> ProjectMetadata:
    """Read project metadata from api_project.json, or from package.json/apidoc.json."""
    overrides = {"name": name, "title": title, "version": version}
    if project_path is not None:
        project = load_project(project_path)
        return project.model_copy(update={k: v for k, v in overrides.items() if v is not None})
    return load_project_metadata(src_dir, overrides)


@click.group()
def main():
    """apidoc-postman: convert apidoc output into a Postman collection."""
    pass


@main.command()
@click.argument("api_data", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-p", "--project", "project_path", default=None, type=click.Path(exists=True, dir_okay=False, path_type=Path), help="apidoc api_project.json file.")
@click.option("-i", "--input", "src_dir", default=Path("."), type=click.Path(file_okay=False, path_type=Path), help="Source dirname holding package.json / apidoc.json.")
@click.option("-o", "--output", default=Path("doc"), type=click.Path(file_okay=False, path_type=Path), help="Output dirname.")
@click.option("--name", default=None, help="Override the project name.")
@click.option("--title", default=None, help="Override the project title (used as collection name).")
@click.option("--version", "version", default=None, help="Override the project version.")
@click.option("--indent", default=None, type=int, help="Pretty-print the output JSON.")
@click.option("--parse", "parse_only", is_flag=True, help="Parse the files and report, no file creation.")
@click.option("--simulate", is_flag=True, help="Execute but not write any file.")
@click.option("-v", "--verbose", is_flag=True, help="Verbose output.")
@click.option("--debug", is_flag=True, help="Show debug messages.")
@click.option("--silent", is_flag=True, help="Turn all output off.")
def convert(
    api_data: Path,
    project_path: Path | None,
    src_dir: Path,
    output: Path,
    name: str | None,
    title: str | None,
    version: str | None,
    indent: int | None,
    parse_only: bool,
    simulate: bool,
    verbose: bool,
    debug: bool,
    silent: bool,
):
    """Convert an apidoc api_data.json file into DEST/postman.json."""
    _configure_logging(debug, verbose, silent)

    def echo(message: str) -> None:
        if not silent:
            click.echo(message)

    try:
        echo(f"Parsing {api_data}...")
        endpoints = load_descriptors(api_data)
        project = _resolve_project(project_path, src_dir, name, title, version)
        echo(f"Found {len(endpoints)} endpoints.")

        document = build_collection(endpoints, project)
        if parse_only:
            for group in document.item:
                echo(f"  {group.name}: {len(group.item)} requests")
            return

        path = write_collection(document, output, simulate=simulate, indent=indent)
    except ConversionError as e:
        logger.debug("conversion failed", exc_info=True)
        click.echo(f"Error: {e}", err=True)
        sys.exit(e.exit_code)

    if simulate:
        echo(f"Simulated, would write {path}")
    else:
        echo(f"Postman collection saved to {path}")


@main.command()
@click.argument("template")
def normalize(template: str):
    """Show how a URL template is rewritten."""
    try:
        url = normalize_url(template)
    except ConversionError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(e.exit_code)

    click.echo(url.template)
    if url.names:
        click.echo(f"Parameters: {', '.join(url.names)}")
