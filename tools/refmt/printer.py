"""Write converted text, optionally with syntax highlighting."""

from typing import IO, Optional

from rich.console import Console
from rich.syntax import Syntax

from shared.logger import get_logger

from .converter import FormattedText

logger = get_logger(__name__)


class Printer:
    """Writes a FormattedText to a stream."""

    def print(self, text: FormattedText) -> None:
        raise NotImplementedError


class PlainTextPrinter(Printer):
    """Writes text unchanged."""

    def __init__(self, stream: IO[str]):
        self.stream = stream

    def print(self, text: FormattedText) -> None:
        self.stream.write(text.text)
        if not text.text.endswith("\n"):
            self.stream.write("\n")
        self.stream.flush()


class HighlightTextPrinter(Printer):
    """Renders text with ANSI colours using the format's lexer."""

    def __init__(self, console: Console, theme: str):
        self.console = console
        self.theme = theme

    def print(self, text: FormattedText) -> None:
        syntax = Syntax(
            text.text.rstrip("\n"),
            text.format.preferred_extension,
            theme=self.theme,
            line_numbers=False,
            word_wrap=True,
            background_color="default",
        )
        self.console.print(syntax)


def select_printer(
    stream: IO[str],
    theme: str,
    color: Optional[bool] = None,
    to_file: bool = False,
) -> Printer:
    """
    Pick a printer for an output stream.

    Highlighting is used only for stdout, and only when colour is forced on
    or, with ``color=None``, when the stream is a terminal.
    """
    if to_file or color is False:
        return PlainTextPrinter(stream)
    if color is None and not stream.isatty():
        return PlainTextPrinter(stream)

    logger.debug(f"Highlighting output with theme {theme}")
    console = Console(file=stream, force_terminal=True, no_color=False, color_system="truecolor")
    return HighlightTextPrinter(console, theme)
