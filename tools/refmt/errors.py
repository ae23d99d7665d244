"""Error types raised by the conversion pipeline.

Every failure is one of four kinds:

- ``DecodeError``: the source text could not be read as its format.
- ``EncodeError``: the decoded value cannot be written in the destination format.
- ``FormatError``: a format name or file extension could not be resolved.
- ``ConversionError``: raised by the engine; wraps exactly one DecodeError or
  EncodeError and records which side of the conversion produced it.

Library exceptions are chained with ``raise ... from`` so callers can walk
``__cause__`` down to the parser's own diagnostic.
"""

from enum import Enum
from typing import Optional, Union


class DecodeErrorKind(str, Enum):
    """Why a document could not be decoded."""

    SYNTAX = "syntax"
    SEMANTIC = "semantic"


class EncodeErrorKind(str, Enum):
    """Why a value could not be encoded."""

    UNSUPPORTED = "unsupported"
    IO = "io"


class FormatErrorKind(str, Enum):
    """Why a format could not be resolved."""

    UNKNOWN_FORMAT = "unknown_format"
    AMBIGUOUS_INFERENCE = "ambiguous_inference"


class ConversionSide(str, Enum):
    """Which half of a conversion failed."""

    SOURCE = "source"
    DESTINATION = "destination"


class RefmtError(Exception):
    """Base class for all refmt errors."""


class DecodeError(RefmtError):
    """
    Source text is not a valid document.

    Attributes:
        kind: SYNTAX for malformed text, SEMANTIC for well-formed text the
            value model cannot accept (duplicate keys, cycles, unknown tags)
        format: Name of the format being decoded
        message: The parser's diagnostic
        line: 1-based line, when the parser reports one
        column: 1-based column, when the parser reports one
    """

    def __init__(
        self,
        kind: DecodeErrorKind,
        format: str,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ):
        self.kind = kind
        self.format = format
        self.message = message
        self.line = line
        self.column = column
        super().__init__(str(self))

    @property
    def position(self) -> Optional[str]:
        if self.line is None:
            return None
        if self.column is None:
            return f"line {self.line}"
        return f"line {self.line} column {self.column}"

    def __str__(self) -> str:
        text = f"{self.kind.value} error in {self.format}: {self.message}"
        if self.position:
            text += f" ({self.position})"
        return text


class EncodeError(RefmtError):
    """
    A value cannot be rendered in the destination format.

    Attributes:
        kind: UNSUPPORTED when the format has no way to express the value
        format: Name of the destination format
        message: What could not be expressed
        path: Location of the offending node (``author.tags[0]``), if known
    """

    def __init__(self, kind: EncodeErrorKind, format: str, message: str, path: Optional[str] = None):
        self.kind = kind
        self.format = format
        self.message = message
        self.path = path
        super().__init__(str(self))

    def __str__(self) -> str:
        text = f"cannot encode {self.format}: {self.message}"
        if self.path:
            text += f" at {self.path}"
        return text


class FormatError(RefmtError):
    """A format name or filename did not resolve to a supported format."""

    def __init__(self, kind: FormatErrorKind, attempted: Optional[str] = None):
        self.kind = kind
        self.attempted = attempted
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.kind == FormatErrorKind.AMBIGUOUS_INFERENCE:
            if self.attempted:
                return f"cannot infer format from {self.attempted!r}; please specify the format name"
            return "cannot infer format; please specify either a file or a format name"
        return f"unsupported format name: {self.attempted!r}"


class ConversionError(RefmtError):
    """
    A conversion failed on one side.

    ``cause`` is the DecodeError (side SOURCE) or EncodeError (side
    DESTINATION) that stopped it; it is also set as ``__cause__``.
    """

    def __init__(self, side: ConversionSide, cause: Union[DecodeError, EncodeError]):
        self.side = side
        self.cause = cause
        super().__init__(str(self))

    @property
    def description(self) -> str:
        if self.side == ConversionSide.SOURCE:
            return "errors occurred during deserialization"
        return "errors occurred during serialization"

    def __str__(self) -> str:
        return f"{self.description}. cause: {self.cause}"
