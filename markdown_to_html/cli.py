"""
Converts a Markdown file into a standalone HTML document.
The result is written to the destination file, replacing it atomically.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
from .config import ConfigError, apply_overrides, build_config
from .converter import ConvertFileError, convert_file
from .filesystem import get_max_file_size, write_html

__all__ = ["cli"]

logger = logging.getLogger("markdown_to_html")


def _setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity level."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


@click.command()
@click.version_option(package_name="markdown-to-html")
@click.option(
    "--source_file",
    "source_file",
    required=True,
    type=click.Path(dir_okay=False),
    help="Markdown file to convert",
)
@click.option(
    "--destination_file",
    "destination_file",
    required=True,
    type=click.Path(dir_okay=False),
    help="HTML file to write",
)
@click.option("--title", help="Document title")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose (DEBUG) logging.")
def cli(
    source_file: str,
    destination_file: str,
    title: str | None = None,
    verbose: bool = False,
):
    """
    Entry point for converting a Markdown file to HTML.

    Args:
        source_file: Path to the Markdown file to read.
        destination_file: Path where the HTML document is written.
        title: Override for the document title.
        verbose: Whether to log debug output to stderr.

    Returns:
        None.

    Raises:
        click.UsageError: If either file option is missing.
        click.BadParameter: If the configuration contains invalid values.
        click.ClickException: If the source cannot be read or the destination
            cannot be written.

    Examples:
        markdown-to-html --source_file README.md --destination_file README.html
    """
    _setup_logging(verbose)

    source = Path(source_file).expanduser()
    destination = Path(destination_file).expanduser()

    try:
        config = build_config(source.parent, title=title)
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
    except ValueError as error:
        raise click.ClickException(str(error)) from error
    config = apply_overrides(config, max_file_size=max_file_size)

    try:
        html = convert_file(source, config)
    except ConvertFileError as error:
        raise click.ClickException(str(error)) from error

    try:
        write_html(destination, html)
    except IOError as error:
        raise click.ClickException(str(error)) from error

    logger.info("Converted %s to %s", source, destination)


if __name__ == "__main__":
    cli()
