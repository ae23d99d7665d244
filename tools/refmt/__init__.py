"""refmt - Reformat structured text between JSON, TOML and YAML."""

from .converter import ConversionRequest, FormattedText, convert, convert_request
from .errors import (
    ConversionError,
    ConversionSide,
    DecodeError,
    DecodeErrorKind,
    EncodeError,
    EncodeErrorKind,
    FormatError,
    FormatErrorKind,
    RefmtError,
)
from .registry import Format, codec_for, format_aliases, format_names, infer_format, resolve_by_extension, resolve_by_name

__all__ = [
    "ConversionError",
    "ConversionRequest",
    "ConversionSide",
    "DecodeError",
    "DecodeErrorKind",
    "EncodeError",
    "EncodeErrorKind",
    "Format",
    "FormatError",
    "FormatErrorKind",
    "FormattedText",
    "RefmtError",
    "codec_for",
    "convert",
    "convert_request",
    "format_aliases",
    "format_names",
    "infer_format",
    "resolve_by_extension",
    "resolve_by_name",
]
