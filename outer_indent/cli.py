"""
Renders an outline file with outer indentation.
Numbered headlines show their number in place of the hidden marker run.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
from .config import ConfigError, build_config
from .exceptions import UnsupportedDocumentError
from .filesystem import (
    check_file_size,
    get_max_file_size,
    get_max_line_length,
    resolve_outline_path,
)
from .mode import OuterIndentMode
from .numbering import NUMBER_FORMATS
from .parser import ParseFileError
from .session import OutlineSession

__all__ = ["cli"]


@click.command()
@click.version_option()
@click.option("--numbering/--no-numbering", default=None, help="Number headlines")
@click.option("--max-level", type=int, help="Deepest numbered headline level")
@click.option(
    "--format", "number_format", type=click.Choice(list(NUMBER_FORMATS)), help="Number format"
)
@click.option("--indentation-per-level", type=int, help="Stock indentation per level")
@click.option("--outer-indent/--no-outer-indent", default=True, help="Enable outer indentation")
@click.option("-v", "--verbose", is_flag=True, help="Log debug messages to stderr")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def cli(
    filepath: str,
    numbering: bool | None = None,
    max_level: int | None = None,
    number_format: str | None = None,
    indentation_per_level: int | None = None,
    outer_indent: bool = True,
    verbose: bool = False,
):
    """
    Entry point for rendering an outline file.

    Args:
        filepath: Path to the outline file to render.
        numbering: Override for headline numbering.
        max_level: Deepest numbered headline level.
        number_format: Name of the numbering format.
        indentation_per_level: Columns per level of the stock indentation.
        outer_indent: Whether to enable the outer-indent mode.
        verbose: Whether to log debug messages.

    Returns:
        None.

    Raises:
        click.BadParameter: If the path or configuration overrides are invalid.
        click.ClickException: If parsing fails, filesystem safety checks fail,
            or the file is not an outline document.

    Examples:
        outer-indent notes.org --numbering --max-level 2
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    base_dir = Path.cwd().resolve()
    try:
        path = resolve_outline_path(filepath, base_dir)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error
    try:
        config = build_config(
            path.parent,
            numbering=numbering,
            max_numbered_level=max_level,
            number_format=number_format,
            indentation_per_level=indentation_per_level,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
        max_line_length = get_max_line_length(default=config.max_line_length)
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    try:
        check_file_size(path, max_file_size)
    except IOError as error:
        raise click.ClickException(str(error)) from error

    try:
        session = OutlineSession.from_file(path, config, max_line_length)
    except ParseFileError as error:
        raise click.ClickException(str(error)) from error

    if outer_indent:
        try:
            OuterIndentMode(session).enable()
        except UnsupportedDocumentError as error:
            raise click.ClickException(str(error)) from error

    for line in session.redraw():
        click.echo(line)


if __name__ == "__main__":
    cli()
