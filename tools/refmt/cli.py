"""CLI interface for refmt."""

import sys
from pathlib import Path
from typing import Optional, Tuple

import click
from rich.markup import escape

from shared.cli import console, handle_errors, success
from shared.logger import setup_logger

from .converter import FormattedText
from .errors import ConversionError, FormatError, FormatErrorKind
from .printer import select_printer
from .registry import Format, format_aliases, infer_format
from .settings import Settings


def resolve_formats(
    input_file: Optional[Path],
    input_format: Optional[str],
    output_file: Optional[Path],
    output_format: Optional[str],
) -> Tuple[Format, Format]:
    """
    Work out source and destination formats.

    The destination falls back to the source format when neither an output
    format nor an output file extension is given.

    Raises:
        click.UsageError: If a format cannot be determined
    """
    try:
        src = infer_format(input_file, input_format)
    except FormatError as e:
        raise click.UsageError(f"input: {e}")

    try:
        dst = infer_format(output_file, output_format)
    except FormatError as e:
        if e.kind != FormatErrorKind.AMBIGUOUS_INFERENCE:
            raise click.UsageError(f"output: {e}")
        dst = src

    return src, dst


def report_error(err: ConversionError) -> None:
    """Print a one-line error with its cause."""
    console.print(f"[red]{escape('[refmt error]')}[/red]: {escape(str(err))}", highlight=False, soft_wrap=True)


@click.command()
@click.option(
    "--input",
    "-i",
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Input file (read STDIN if not specified)",
)
@click.option(
    "--input-format",
    type=click.Choice(format_aliases(), case_sensitive=False),
    help="Input format (inferred from the file extension if not specified)",
)
@click.option(
    "--output",
    "-o",
    "output_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file (print to STDOUT if not specified)",
)
@click.option(
    "--output-format",
    type=click.Choice(format_aliases(), case_sensitive=False),
    help="Output format (inferred from the output extension, else the input format)",
)
@click.option("--theme", help="Highlighting theme [env: REFMT_THEME]")
@click.option("--color/--no-color", default=None, help="Force highlighting on or off")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@handle_errors
def main(
    input_file: Optional[Path],
    input_format: Optional[str],
    output_file: Optional[Path],
    output_format: Optional[str],
    theme: Optional[str],
    color: Optional[bool],
    verbose: bool,
):
    """
    refmt - Reformat between JSON, YAML and TOML.

    Examples:

        \b
        # Convert JSON to YAML
        refmt -i config.json --output-format yaml

        \b
        # Convert into a file, formats taken from the extensions
        refmt -i Cargo.toml -o Cargo.json

        \b
        # Pretty print JSON from STDIN
        cat data.json | refmt --input-format json
    """
    settings = Settings.from_env().override(theme=theme, color=color, verbose=verbose)
    logger = setup_logger(__name__, level=settings.log_level)
    logger.debug(f"settings: {settings}")

    src, dst = resolve_formats(input_file, input_format, output_file, output_format)
    logger.debug(f"input: {input_file or '<stdin>'} ({src.value}), output: {output_file or '<stdout>'} ({dst.value})")

    if input_file:
        try:
            text = input_file.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise click.FileError(str(input_file), hint=f"not valid UTF-8 ({e.reason})")
    else:
        text = click.get_text_stream("stdin").read()

    try:
        converted = FormattedText(src, text).convert_to(dst)
    except ConversionError as e:
        report_error(e)
        sys.exit(1)

    if output_file:
        with open(output_file, "w", encoding="utf-8") as f:
            select_printer(f, settings.theme, to_file=True).print(converted)
        success(f"Converted to {output_file}")
    else:
        stdout = click.get_text_stream("stdout")
        select_printer(stdout, settings.theme, color=settings.color).print(converted)

    sys.exit(0)


if __name__ == "__main__":
    main()
