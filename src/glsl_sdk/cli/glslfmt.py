"""
glslfmt - GLSL Re-indenter Command-Line Interface
=================================================

This module implements the command-line interface for re-indenting GLSL
shader sources with the indentation engine.

Usage Examples
--------------
Print the re-indented file:
    $ glslfmt blur.frag

Rewrite files in place:
    $ glslfmt -w shaders/*.vert shaders/*.frag

Check formatting (exit status 1 if anything would change):
    $ glslfmt --check shaders/*.frag

Two-space indentation, only lines 10 to 40:
    $ glslfmt --indent 2 --lines 10:40 blur.frag

Settings from a JSON file (see glsl_sdk.config):
    $ glslfmt -c glsl.json blur.frag
"""

import dataclasses
import logging
import sys
from pathlib import Path
from typing import Optional

import click

from glsl_sdk import __version__
from glsl_sdk.cli.errors import ExitCode, handle_cli_exception, setup_logging
from glsl_sdk.config import IndentConfig
from glsl_sdk.indent import Document, reindent_region

logger = logging.getLogger(__name__)


def parse_line_range(value: Optional[str]) -> Optional[tuple[int, int]]:
    """
    Parse a 'START:END' line range (either side may be omitted).

    Raises:
        click.BadParameter: If the range is malformed
    """
    if value is None:
        return None

    start_text, separator, end_text = value.partition(":")
    if not separator:
        raise click.BadParameter(f"expected START:END, got {value!r}", param_hint="--lines")

    try:
        start = int(start_text) if start_text.strip() else 1
        end = int(end_text) if end_text.strip() else sys.maxsize
    except ValueError:
        raise click.BadParameter(f"line numbers must be integers, got {value!r}", param_hint="--lines")

    if start < 1 or end < start:
        raise click.BadParameter(f"invalid line range {value!r}", param_hint="--lines")
    return start, end


def build_indent_config(
    config_file: Optional[Path],
    unit: Optional[int],
    use_tabs: Optional[bool],
    tab_width: Optional[int],
) -> IndentConfig:
    """Environment, then config file, then command-line options."""
    config = IndentConfig.from_env()
    if config_file is not None:
        config = IndentConfig.from_file(config_file)

    overrides = {}
    if unit is not None:
        overrides["unit"] = unit
    if use_tabs is not None:
        overrides["use_tabs"] = use_tabs
    if tab_width is not None:
        overrides["tab_width"] = tab_width
    return dataclasses.replace(config, **overrides)


def read_source(path: Path) -> str:
    """
    Read a source file keeping its line terminators.

    Raises:
        click.FileError: If the file is not valid UTF-8
    """
    try:
        with open(path, encoding="utf-8", newline="") as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise click.FileError(str(path), hint=f"not valid UTF-8 ({e.reason})") from e


def write_source(path: Path, text: str) -> None:
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)


def format_source(
    source: str,
    filename: str,
    config: IndentConfig,
    line_range: Optional[tuple[int, int]] = None,
) -> str:
    """Re-indent source text, warning about lexical errors."""
    document = Document.from_text(source, filename=filename)
    if len(document) == 0:
        return source

    for error in document.errors:
        logger.warning(str(error).splitlines()[0])

    start, end = line_range if line_range else (1, len(document))
    end = min(end, len(document))
    if start > end:
        return source
    return reindent_region(document, start, end, config).render()


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-w", "--write",
    is_flag=True,
    help="Rewrite files in place instead of printing them",
)
@click.option(
    "--check",
    is_flag=True,
    help="Report files that would change; exit status 1 if any",
)
@click.option(
    "-i", "--indent", "unit",
    type=click.IntRange(min=1),
    default=None,
    help="Columns per indentation level (default: 4)",
)
@click.option(
    "--tabs/--spaces",
    "use_tabs",
    default=None,
    help="Indent with tabs or with spaces (default: spaces)",
)
@click.option(
    "--tab-width",
    type=click.IntRange(min=1),
    default=None,
    help="Columns per tab stop (default: 8)",
)
@click.option(
    "-l", "--lines",
    type=str,
    default=None,
    help="Only re-indent lines START:END (1-indexed, inclusive)",
)
@click.option(
    "-c", "--config", "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="JSON configuration file with an 'indent' section",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="glslfmt")
def main(
    files: tuple[Path, ...],
    write: bool,
    check: bool,
    unit: Optional[int],
    use_tabs: Optional[bool],
    tab_width: Optional[int],
    lines: Optional[str],
    config_file: Optional[Path],
    verbose: bool,
) -> None:
    """
    Re-indent GLSL shader sources.

    FILES are the shader sources (.vert, .frag, .glsl, ...) to process.

    \b
    Examples:
        glslfmt blur.frag               # Print re-indented source
        glslfmt -w *.vert *.frag        # Rewrite in place
        glslfmt --check *.frag          # CI check
        glslfmt --tabs blur.frag        # Indent with tabs
    """
    setup_logging(verbose)

    try:
        if write and check:
            raise click.BadParameter("--write and --check cannot be combined")

        config = build_indent_config(config_file, unit, use_tabs, tab_width)
        line_range = parse_line_range(lines)
        logger.debug(f"Indent settings: {config}")

        would_change = []
        for path in files:
            source = read_source(path)
            formatted = format_source(source, str(path), config, line_range)

            if check:
                if formatted != source:
                    would_change.append(path)
                    click.echo(f"would reindent {path}")
            elif write:
                if formatted != source:
                    write_source(path, formatted)
                    click.echo(f"reindented {path}")
                else:
                    logger.debug(f"{path} already indented")
            else:
                click.echo(formatted, nl=False)

    except Exception as e:
        handle_cli_exception(e, verbose, error_type="Configuration")

    if check and would_change:
        sys.exit(ExitCode.FAILURE)


if __name__ == "__main__":
    main()
