"""
rpscan - RPAL Scanner Command-Line Interface
============================================

Prints the token stream of an RPAL source file, one token per line.

Usage Examples
--------------
Print every token, whitespace and comments included:
    $ rpscan program.rpal

Only the tokens a parser would see:
    $ rpscan --skip-deleted program.rpal

JSON lines for other tools:
    $ rpscan --format json program.rpal

Fail on malformed input instead of dropping it:
    $ rpscan --strict program.rpal

Exit Codes
----------
0 - Success
1 - Malformed input under a strict policy, or a read failure
2 - Invalid arguments or unreadable input file
3 - Internal error
"""

import json
import logging
from pathlib import Path
from typing import Optional

import click

from rpal_scan import __version__
from rpal_scan.cli.errors import handle_cli_exception
from rpal_scan.options import (
    CharacterPolicy,
    IOErrorPolicy,
    ScannerOptions,
    StringPolicy,
)
from rpal_scan.scanner import Scanner

# Configure logging
logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )


def build_options(
    strict: bool,
    strict_strings: bool,
    strict_chars: bool,
    io_errors: Optional[str],
    encoding: Optional[str],
) -> ScannerOptions:
    """
    Combine environment defaults with command-line flags.

    Flags only ever tighten a policy or replace a value; they never undo
    what RPAL_SCAN_STRICT turned on.
    """
    options = ScannerOptions.from_env()
    if strict or strict_strings:
        options.unterminated_string = StringPolicy.RAISE
    if strict or strict_chars:
        options.unknown_character = CharacterPolicy.RAISE
    if io_errors is not None:
        options.io_errors = IOErrorPolicy(io_errors)
    if encoding is not None:
        options.encoding = encoding
    return options


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-s", "--skip-deleted",
    is_flag=True,
    help="Omit whitespace and comment (DELETE) tokens",
)
@click.option(
    "-f", "--format", "output_format",
    type=click.Choice(["text", "json"], case_sensitive=False),
    default="text",
    show_default=True,
    help="Output format: one token per line as text or as JSON objects",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Fail on unterminated strings and unknown characters",
)
@click.option(
    "--strict-strings",
    is_flag=True,
    help="Fail on an unterminated string instead of discarding it",
)
@click.option(
    "--strict-chars",
    is_flag=True,
    help="Fail on an unknown character instead of dropping it",
)
@click.option(
    "--io-errors",
    type=click.Choice([policy.value for policy in IOErrorPolicy], case_sensitive=False),
    default=None,
    help="On a read failure: 'raise' an error or treat it as end of input ('eof')",
)
@click.option(
    "-e", "--encoding",
    default=None,
    help="Source file encoding (default: utf-8, or RPAL_SCAN_ENCODING)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="rpscan")
def main(
    input_file: Path,
    skip_deleted: bool,
    output_format: str,
    strict: bool,
    strict_strings: bool,
    strict_chars: bool,
    io_errors: Optional[str],
    encoding: Optional[str],
    verbose: bool,
) -> None:
    """
    Print the tokens of an RPAL source file.

    INPUT_FILE is the RPAL source file to scan.

    \b
    Examples:
        rpscan prog.rpal                 # Every token
        rpscan -s prog.rpal              # Skip whitespace and comments
        rpscan -f json prog.rpal         # JSON lines
        rpscan --strict prog.rpal        # Fail on malformed input
    """
    setup_logging(verbose)

    try:
        options = build_options(strict, strict_strings, strict_chars, io_errors, encoding)
        count = 0
        with Scanner.from_file(input_file, options) as scanner:
            for token in scanner.tokens(skip_deleted=skip_deleted):
                if output_format.lower() == "json":
                    click.echo(json.dumps(token.to_dict()))
                else:
                    click.echo(str(token))
                count += 1
        logger.info(f"Scanned {count} tokens from {input_file}")

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
