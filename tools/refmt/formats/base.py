"""Common codec interface and native-data conversion helpers."""

from typing import Any, Callable, Optional, Set

from ..errors import DecodeError, DecodeErrorKind, EncodeError, EncodeErrorKind
from ..value import Boolean, Float, Integer, Mapping, Null, Sequence, String, Value

KeyConverter = Callable[[Any], str]
ScalarConverter = Callable[[Any], Value]


class Codec:
    """
    Decode text of one format into a Value and encode a Value back to text.

    Subclasses set ``name`` and implement ``decode`` and ``encode``. Codecs
    hold no per-call state, so one instance serves every conversion.
    """

    name: str = ""

    def decode(self, text: str) -> Value:
        """
        Parse one complete document.

        Raises:
            DecodeError: If the text is not a valid document
        """
        raise NotImplementedError

    def encode(self, value: Value) -> str:
        """
        Render a value in this format's canonical form.

        Raises:
            EncodeError: If the format cannot express the value
        """
        raise NotImplementedError

    def semantic_error(self, message: str, line: Optional[int] = None, column: Optional[int] = None) -> DecodeError:
        return DecodeError(DecodeErrorKind.SEMANTIC, self.name, message, line, column)

    def syntax_error(self, message: str, line: Optional[int] = None, column: Optional[int] = None) -> DecodeError:
        return DecodeError(DecodeErrorKind.SYNTAX, self.name, message, line, column)

    def unsupported(self, message: str, path: Optional[str] = None) -> EncodeError:
        return EncodeError(EncodeErrorKind.UNSUPPORTED, self.name, message, path)

    def from_native(
        self,
        obj: Any,
        convert_key: Optional[KeyConverter] = None,
        convert_other: Optional[ScalarConverter] = None,
    ) -> Value:
        """
        Build a Value from a parser's native result.

        Args:
            obj: Data returned by the format library
            convert_key: Turns a non-str mapping key into a str (rejects it if None)
            convert_other: Handles native types outside the plain JSON set
                (rejects them if None)

        Raises:
            DecodeError: SEMANTIC on cycles, unsupported keys or types
        """
        active: Set[int] = set()

        def build(item: Any) -> Value:
            if item is None:
                return Null()
            if isinstance(item, bool):
                return Boolean(item)
            if isinstance(item, int):
                return Integer(item)
            if isinstance(item, float):
                return Float(item)
            if isinstance(item, str):
                return String(item)

            if isinstance(item, (list, tuple, dict)):
                marker = id(item)
                if marker in active:
                    raise self.semantic_error("recursive structure cannot be represented")
                active.add(marker)
                try:
                    if isinstance(item, dict):
                        return build_mapping(item)
                    return Sequence(tuple(build(child) for child in item))
                finally:
                    active.discard(marker)

            if convert_other is not None:
                return convert_other(item)
            raise self.semantic_error(f"unsupported value type: {type(item).__name__}")

        def build_mapping(item: dict) -> Mapping:
            entries = []
            seen: Set[str] = set()
            for key, child in item.items():
                if not isinstance(key, str):
                    if convert_key is None:
                        raise self.semantic_error(f"unsupported mapping key type: {type(key).__name__}")
                    key = convert_key(key)
                if key in seen:
                    raise self.semantic_error(f"duplicate key: {key!r}")
                seen.add(key)
                entries.append((key, build(child)))
            return Mapping(tuple(entries))

        try:
            return build(obj)
        except RecursionError as e:
            raise self.semantic_error("document is nested too deeply") from e
