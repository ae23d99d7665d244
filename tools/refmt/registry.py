"""Supported formats and the codec used for each of them."""

from enum import Enum
from pathlib import PurePath
from typing import Dict, List, Optional, Tuple, Union

from shared.logger import get_logger

from .errors import FormatError, FormatErrorKind
from .formats import Codec, JsonCodec, TomlCodec, YamlCodec

logger = get_logger(__name__)


class Format(str, Enum):
    """Supported formats."""

    JSON = "json"
    TOML = "toml"
    YAML = "yaml"

    @property
    def extensions(self) -> Tuple[str, ...]:
        """File extensions (without the dot) recognised for this format."""
        return _EXTENSIONS[self]

    @property
    def preferred_extension(self) -> str:
        return self.value

    def is_extension(self, name: str) -> bool:
        return name.lower() in self.extensions


_EXTENSIONS: Dict[Format, Tuple[str, ...]] = {
    Format.JSON: ("json",),
    Format.TOML: ("toml",),
    Format.YAML: ("yaml", "yml"),
}

_CODECS: Dict[Format, Codec] = {
    Format.JSON: JsonCodec(),
    Format.TOML: TomlCodec(),
    Format.YAML: YamlCodec(),
}

_missing = [f.value for f in Format if f not in _CODECS or f not in _EXTENSIONS]
if _missing:
    raise RuntimeError(f"Formats registered without a codec or extensions: {', '.join(_missing)}")


def format_names() -> List[str]:
    """Canonical names of all formats, in declaration order."""
    return [f.value for f in Format]


def format_aliases() -> List[str]:
    """Every name accepted by ``resolve_by_name``: canonical names, then extra extensions."""
    names = format_names()
    names += [ext for f in Format for ext in f.extensions if ext not in names]
    return names


def resolve_by_name(name: str) -> Format:
    """
    Resolve a format name or alias, ignoring case.

    Args:
        name: Canonical name or extension alias (``json``, ``YML``, ...)

    Returns:
        Matching format

    Raises:
        FormatError: UNKNOWN_FORMAT if nothing matches
    """
    for fmt in Format:
        if fmt.is_extension(name):
            return fmt
    raise FormatError(FormatErrorKind.UNKNOWN_FORMAT, attempted=name)


def resolve_by_extension(filename: Union[str, PurePath]) -> Format:
    """
    Resolve a format from a file name's extension.

    Raises:
        FormatError: AMBIGUOUS_INFERENCE if the name has no extension,
            UNKNOWN_FORMAT if the extension is not recognised
    """
    suffix = PurePath(filename).suffix
    if not suffix:
        raise FormatError(FormatErrorKind.AMBIGUOUS_INFERENCE, attempted=str(filename))
    return resolve_by_name(suffix[1:])


def infer_format(
    filename: Optional[Union[str, PurePath]] = None,
    format_name: Optional[str] = None,
) -> Format:
    """
    Work out a format from an explicit name or a file name.

    The explicit name wins; otherwise the file extension is used.

    Raises:
        FormatError: AMBIGUOUS_INFERENCE when neither is given (or the file
            has no extension), UNKNOWN_FORMAT when a name does not match
    """
    if format_name:
        return resolve_by_name(format_name)
    if filename:
        fmt = resolve_by_extension(filename)
        logger.debug(f"Inferred {fmt.value} from {filename}")
        return fmt
    raise FormatError(FormatErrorKind.AMBIGUOUS_INFERENCE)


def codec_for(fmt: Format) -> Codec:
    """Return the codec for a format. Every Format has exactly one."""
    if not isinstance(fmt, Format):
        raise TypeError(f"Expected Format, got {type(fmt).__name__}")
    return _CODECS[fmt]
