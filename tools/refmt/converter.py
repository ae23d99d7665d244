"""Core conversion logic: decode with one codec, encode with another."""

from dataclasses import dataclass

from shared.logger import get_logger

from .errors import ConversionError, ConversionSide, DecodeError, EncodeError
from .registry import Format, codec_for

logger = get_logger(__name__)


@dataclass(frozen=True)
class ConversionRequest:
    """Text in one format to be rewritten in another."""

    source_format: Format
    text: str
    destination_format: Format


def convert(src_format: Format, src_text: str, dst_format: Format) -> str:
    """
    Convert text from one format to another.

    Converting a format to itself still decodes and re-encodes, so it
    normalizes indentation and quoting.

    Args:
        src_format: Format of ``src_text``
        src_text: Document to convert
        dst_format: Format to produce

    Returns:
        The complete document in ``dst_format``

    Raises:
        ConversionError: SOURCE side if the text cannot be decoded,
            DESTINATION side if the value cannot be encoded
    """
    logger.debug(f"Converting {len(src_text)} characters from {src_format.value} to {dst_format.value}")

    try:
        value = codec_for(src_format).decode(src_text)
    except DecodeError as e:
        logger.debug(f"Decoding failed: {e}")
        raise ConversionError(ConversionSide.SOURCE, e) from e

    try:
        text = codec_for(dst_format).encode(value)
    except EncodeError as e:
        logger.debug(f"Encoding failed: {e}")
        raise ConversionError(ConversionSide.DESTINATION, e) from e

    return text


def convert_request(request: ConversionRequest) -> str:
    """Run a single ConversionRequest."""
    return convert(request.source_format, request.text, request.destination_format)


@dataclass(frozen=True)
class FormattedText:
    """Text tagged with the format it is written in."""

    format: Format
    text: str

    def convert_to(self, fmt: Format) -> "FormattedText":
        """
        Rewrite this text in another format.

        Raises:
            ConversionError: If decoding or encoding fails
        """
        return FormattedText(fmt, convert(self.format, self.text, fmt))
