"""TOML codec."""

import datetime
import re
from typing import Any, Dict, Tuple, Union

import toml

from shared.logger import get_logger

from ..value import Boolean, Float, Integer, Mapping, Null, Sequence, String, Value, format_path, to_native
from .base import Codec

logger = get_logger(__name__)

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_SEMANTIC_MARKERS = ("Duplicate keys", "already exists")

_BARE_KEY = re.compile(r"^[A-Za-z0-9_-]+$")

_STRING_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\f": "\\f",
    "\r": "\\r",
}

# the decoder rejects arrays whose elements parse to different types
_ARRAY_ELEMENT_TYPES = {Boolean: "boolean", Integer: "integer", Float: "float", String: "string", Sequence: "array"}


def _dump_str(value: str) -> str:
    """Render a TOML basic string."""
    chars = []
    for char in value:
        if char in _STRING_ESCAPES:
            chars.append(_STRING_ESCAPES[char])
        elif char < " " or char == "\x7f":
            chars.append(f"\\u{ord(char):04x}")
        else:
            chars.append(char)
    return '"' + "".join(chars) + '"'


def _dump_key(key: str) -> str:
    return key if _BARE_KEY.match(key) else _dump_str(key)


class _TomlEncoder(toml.TomlEncoder):
    """
    ``toml`` encoder with complete string escaping.

    The stock encoder mangles backslashes followed by ``x`` and fails on
    control characters, in values and in quoted keys alike.
    """

    def __init__(self):
        super().__init__(dict)
        self.dump_funcs[str] = _dump_str

    def dump_sections(self, o: Dict[str, Any], sup: str) -> Tuple[str, Dict[str, Any]]:
        """Split a table into its ``key = value`` lines and its sub-tables."""
        prefix = f"{sup}." if sup else ""
        lines = ""
        table_arrays = ""
        tables = self.get_empty_table()
        for key, item in o.items():
            qkey = _dump_key(key)
            if isinstance(item, dict):
                tables[qkey] = item
            elif isinstance(item, list) and item and all(isinstance(entry, dict) for entry in item):
                for entry in item:
                    table_arrays += self._dump_table_array_entry(prefix + qkey, entry)
            else:
                lines += f"{qkey} = {self.dump_value(item)}\n"
        return lines + table_arrays, tables

    def _dump_table_array_entry(self, name: str, entry: Dict[str, Any]) -> str:
        text = f"[[{name}]]\n"
        nested = "\n"
        body, tables = self.dump_sections(entry, name)
        if body.startswith("["):
            nested += body
        else:
            text += body
        while tables:
            deeper = self.get_empty_table()
            for sub, table in tables.items():
                sub_body, sub_tables = self.dump_sections(table, f"{name}.{sub}")
                if sub_body:
                    nested += f"[{name}.{sub}]\n{sub_body}"
                for key, item in sub_tables.items():
                    deeper[f"{sub}.{key}"] = item
            tables = deeper
        return text + nested


class TomlCodec(Codec):
    """
    TOML via the ``toml`` package.

    TOML documents are always tables and have no null, so encoding a
    non-mapping root or any Null fails instead of dropping data. Plain keys
    of a table are written before its sub-tables.
    """

    name = "toml"

    def decode(self, text: str) -> Value:
        try:
            data = toml.loads(text)
        except toml.TomlDecodeError as e:
            line = getattr(e, "lineno", None)
            column = getattr(e, "colno", None)
            message = getattr(e, "msg", str(e))
            if any(marker in message for marker in _SEMANTIC_MARKERS):
                raise self.semantic_error(message, line, column) from e
            raise self.syntax_error(message, line, column) from e
        except RecursionError as e:
            raise self.semantic_error("document is nested too deeply") from e
        except (IndexError, KeyError, TypeError, ValueError) as e:
            # the parser lets some malformed input escape as builtin errors
            raise self.syntax_error(f"malformed document: {e}") from e

        return self.from_native(data, convert_other=self._convert_datetime)

    def _convert_datetime(self, item: Any) -> Value:
        if isinstance(item, (datetime.datetime, datetime.date, datetime.time)):
            return String(item.isoformat())
        raise self.semantic_error(f"unsupported value type: {type(item).__name__}")

    def encode(self, value: Value) -> str:
        if not isinstance(value, Mapping):
            raise self.unsupported(f"document root must be a table, got {value.kind}")

        try:
            self._check(value, ())
            text = toml.dumps(to_native(value), encoder=_TomlEncoder())
        except RecursionError as e:
            raise self.unsupported("document is nested too deeply") from e
        except (IndexError, KeyError, TypeError, ValueError) as e:
            raise self.unsupported(f"TOML encoder failed: {e}") from e

        logger.debug(f"Encoded {len(text)} characters of TOML")
        return text

    def _check(
        self,
        value: Value,
        path: Tuple[Union[str, int], ...],
        in_array: bool = False,
        in_table_array: bool = False,
    ) -> None:
        """Reject what the TOML grammar (or the encoder) cannot express."""
        if isinstance(value, Null):
            raise self.unsupported("TOML has no null value", format_path(path))

        if isinstance(value, Integer) and not INT64_MIN <= value.value <= INT64_MAX:
            raise self.unsupported("integer out of 64-bit range", format_path(path))

        if isinstance(value, Mapping):
            if in_array:
                raise self.unsupported("tables inside nested arrays are not supported", format_path(path))
            for key, item in value.entries:
                if in_table_array and isinstance(item, Mapping) and not item.entries:
                    # the encoder drops empty sub-tables of array-of-tables entries
                    raise self.unsupported("empty table inside an array of tables", format_path(path + (key,)))
                self._check(item, path + (key,), in_table_array=in_table_array)

        elif isinstance(value, Sequence):
            tables = [isinstance(item, Mapping) for item in value.items]
            if any(tables) and not all(tables):
                raise self.unsupported("array mixes tables and other values", format_path(path))
            if not any(tables):
                kinds = sorted({_ARRAY_ELEMENT_TYPES[type(item)] for item in value.items if not isinstance(item, Null)})
                if len(kinds) > 1:
                    raise self.unsupported(f"array mixes value types ({', '.join(kinds)})", format_path(path))
            for i, item in enumerate(value.items):
                if isinstance(item, Mapping):
                    self._check(item, path + (i,), in_array=in_array, in_table_array=True)
                else:
                    self._check(item, path + (i,), in_array=True)
