"""
glsltok - GLSL Token Inspector Command-Line Interface
=====================================================

Dumps the tokens of a shader source, optionally with the semantic
category of each identifier, lists lexical errors, and looks up the
reference page of a builtin.

Usage Examples
--------------
Dump tokens (whitespace and newlines hidden):
    $ glsltok blur.frag

With identifier categories and user vocabulary:
    $ glsltok --categories -c glsl.json blur.frag

List lexical errors (exit status 1 if any):
    $ glsltok --errors blur.frag

Reference page of a builtin:
    $ glsltok --man smoothstep

Output Format
-------------
    line:column KIND 'text' [category]
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from glsl_sdk import __version__
from glsl_sdk.cli.errors import ExitCode, handle_cli_exception, setup_logging
from glsl_sdk.config import ConfigStore, VocabularyConfig
from glsl_sdk.lang.classifier import SymbolCategory
from glsl_sdk.lang.docs import man_page_url
from glsl_sdk.lang.lexer import GLSLLexer, Token, TokenKind

logger = logging.getLogger(__name__)


def format_token(token: Token, category: Optional[SymbolCategory] = None) -> str:
    """Format one token as 'line:column KIND 'text' [category]'."""
    text = f"{token.line}:{token.column} {token.kind.name} {token.text!r}"
    if token.literal is not None:
        text += f" {token.literal.name.lower()}"
    if category is not None:
        text += f" [{category.value}]"
    return text


def dump_tokens(
    source: str,
    filename: str,
    store: Optional[ConfigStore] = None,
    show_layout: bool = False,
) -> tuple[list[str], list]:
    """
    Tokenize source and format each token.

    Returns:
        (formatted lines, lexical errors)
    """
    lexer = GLSLLexer(source, filename)
    tokens = list(lexer.tokenize())

    categories = {}
    if store is not None:
        for token, category in store.classifier.categorize(tokens):
            categories[token] = category

    lines = []
    for token in tokens:
        if not show_layout and token.kind in (TokenKind.WHITESPACE, TokenKind.NEWLINE):
            continue
        lines.append(format_token(token, categories.get(token)))
        for part in token.parts:
            lines.append("  " + format_token(part, categories.get(part)))

    return lines, lexer.errors


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    required=False,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--categories",
    is_flag=True,
    help="Show the semantic category of identifiers and directives",
)
@click.option(
    "--errors", "errors_only",
    is_flag=True,
    help="Only list lexical errors; exit status 1 if there are any",
)
@click.option(
    "--layout",
    is_flag=True,
    help="Also show whitespace and newline tokens",
)
@click.option(
    "--man", "man_symbol",
    type=str,
    default=None,
    help="Print the reference page URL of a builtin and exit",
)
@click.option(
    "-c", "--config", "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="JSON configuration file with extra types/qualifiers/keywords/builtins",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="glsltok")
def main(
    input_file: Optional[Path],
    categories: bool,
    errors_only: bool,
    layout: bool,
    man_symbol: Optional[str],
    config_file: Optional[Path],
    verbose: bool,
) -> None:
    """
    Inspect the tokens of a GLSL shader source.

    INPUT_FILE is the shader source to tokenize (not needed with --man).

    \b
    Examples:
        glsltok blur.frag                 # Token dump
        glsltok --categories blur.frag    # With identifier categories
        glsltok --errors blur.frag        # Lexical errors only
        glsltok --man texelFetch          # Reference page URL
    """
    setup_logging(verbose)

    if man_symbol is not None:
        url = man_page_url(man_symbol)
        if url is None:
            click.echo(f"Error: no reference page for '{man_symbol}'", err=True)
            sys.exit(ExitCode.FAILURE)
        click.echo(url)
        return

    error_count = 0
    try:
        if input_file is None:
            raise click.BadParameter("missing INPUT_FILE (required unless --man is given)")

        store = None
        if categories or config_file is not None:
            store = ConfigStore(VocabularyConfig.from_env())
            if config_file is not None:
                store.load(config_file)

        try:
            source = input_file.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise click.FileError(str(input_file), hint=f"not valid UTF-8 ({e.reason})") from e
        lines, errors = dump_tokens(source, str(input_file), store, show_layout=layout)
        error_count = len(errors)

        if errors_only:
            for error in errors:
                click.echo(str(error))
        else:
            for line in lines:
                click.echo(line)
            for error in errors:
                logger.warning(str(error).splitlines()[0])

    except Exception as e:
        handle_cli_exception(e, verbose, error_type="Configuration")

    if errors_only and error_count:
        sys.exit(ExitCode.FAILURE)


if __name__ == "__main__":
    main()
