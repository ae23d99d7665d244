"""JSON codec."""

import json
from typing import Any, List, Tuple

from shared.logger import get_logger

from ..value import Float, Value, format_path, to_native, walk
from .base import Codec

logger = get_logger(__name__)


class _RejectedDocument(Exception):
    """Raised from the json hooks; turned into a DecodeError by the codec."""

    def __init__(self, message: str, semantic: bool):
        super().__init__(message)
        self.semantic = semantic


def _pairs_hook(pairs: List[Tuple[str, Any]]) -> dict:
    obj = {}
    for key, item in pairs:
        if key in obj:
            raise _RejectedDocument(f"duplicate key: {key!r}", semantic=True)
        obj[key] = item
    return obj


def _reject_constant(name: str) -> Any:
    raise _RejectedDocument(f"non-standard constant {name!r} is not valid JSON", semantic=False)


class JsonCodec(Codec):
    """
    JSON via the standard ``json`` module.

    Output is indented with two spaces, keeps non-ASCII text as-is and ends
    with a single newline.
    """

    name = "json"
    indent = 2

    def decode(self, text: str) -> Value:
        try:
            data = json.loads(text, object_pairs_hook=_pairs_hook, parse_constant=_reject_constant)
        except json.JSONDecodeError as e:
            raise self.syntax_error(e.msg, e.lineno, e.colno) from e
        except _RejectedDocument as e:
            if e.semantic:
                raise self.semantic_error(str(e)) from e
            raise self.syntax_error(str(e)) from e
        except RecursionError as e:
            raise self.semantic_error("document is nested too deeply") from e
        except ValueError as e:
            # e.g. integer literals beyond the interpreter's digit limit
            raise self.semantic_error(str(e)) from e

        return self.from_native(data)

    def encode(self, value: Value) -> str:
        try:
            for path, node in walk(value):
                if isinstance(node, Float) and not node.is_finite:
                    raise self.unsupported(f"non-finite float {node.value!r}", format_path(path))

            text = json.dumps(to_native(value), indent=self.indent, ensure_ascii=False, allow_nan=False)
        except RecursionError as e:
            raise self.unsupported("document is nested too deeply") from e

        logger.debug(f"Encoded {len(text)} characters of JSON")
        return text + "\n"
