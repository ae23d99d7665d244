"""YAML codec.

Reading uses the YAML 1.2 core schema for untagged scalars: only
``null``/``true``/``false`` spellings, decimal, ``0o`` and ``0x`` integers and
plain floats are typed; everything else (``yes``, ``on``, dates) is a string.
Writing quotes any string that a YAML 1.1 or 1.2 reader would type
differently.
"""

import re
from collections.abc import Hashable
from typing import Any

import yaml

from shared.logger import get_logger

from ..value import Value, to_native
from .base import Codec

logger = get_logger(__name__)

_LINE_BREAKS = "\x85\u2028\u2029"

_CORE_RESOLVERS = [
    (
        "tag:yaml.org,2002:null",
        re.compile(r"^(?:~|null|Null|NULL|)$"),
        ["~", "n", "N", ""],
    ),
    (
        "tag:yaml.org,2002:bool",
        re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
        list("tTfF"),
    ),
    (
        "tag:yaml.org,2002:int",
        re.compile(r"^(?:[-+]?[0-9]+|0o[0-7]+|0x[0-9a-fA-F]+)$"),
        list("-+0123456789"),
    ),
    (
        "tag:yaml.org,2002:float",
        re.compile(
            r"""^(?:[-+]?(?:\.[0-9]+|[0-9]+(?:\.[0-9]*)?)(?:[eE][-+]?[0-9]+)?
            |[-+]?\.(?:inf|Inf|INF)
            |\.(?:nan|NaN|NAN))$""",
            re.X,
        ),
        list("-+.0123456789"),
    ),
    (
        "tag:yaml.org,2002:merge",
        re.compile(r"^(?:<<)$"),
        ["<"],
    ),
]


class DuplicateKeyError(yaml.constructor.ConstructorError):
    """A mapping repeats a key."""


class CoreSchemaLoader(yaml.SafeLoader):
    """Safe loader with YAML 1.2 core schema typing that rejects duplicate keys."""

    yaml_implicit_resolvers: dict = {}

    def construct_mapping(self, node, deep=False):
        if isinstance(node, yaml.MappingNode):
            # equal nodes only: 1, 1.0 and true are different keys
            seen = set()
            for key_node, _ in node.value:
                if key_node.tag == "tag:yaml.org,2002:merge":
                    continue
                key = self.construct_object(key_node, deep=deep)
                if not isinstance(key, Hashable):
                    continue
                if (key_node.tag, key) in seen:
                    raise DuplicateKeyError(
                        "while constructing a mapping",
                        node.start_mark,
                        f"found duplicate key {key!r}",
                        key_node.start_mark,
                    )
                seen.add((key_node.tag, key))
        return super().construct_mapping(node, deep=deep)

    def construct_core_int(self, node):
        value = self.construct_scalar(node)
        sign = 1
        if value[0] in "+-":
            if value[0] == "-":
                sign = -1
            value = value[1:]
        if value.startswith("0o"):
            return sign * int(value[2:], 8)
        if value.startswith("0x"):
            return sign * int(value[2:], 16)
        return sign * int(value, 10)


class CanonicalDumper(yaml.SafeDumper):
    """Safe dumper that also quotes strings the core schema would type."""

    yaml_implicit_resolvers = {key: list(value) for key, value in yaml.SafeDumper.yaml_implicit_resolvers.items()}

    def increase_indent(self, flow=False, indentless=False):
        # indent block sequences under their parent key
        return super().increase_indent(flow, False)

    def represent_str(self, data):
        if any(char in data for char in _LINE_BREAKS):
            # plain and single-quoted scalars fold these into spaces
            return self.represent_scalar("tag:yaml.org,2002:str", data, style='"')
        return super().represent_str(data)


for _tag, _regexp, _first in _CORE_RESOLVERS:
    CoreSchemaLoader.add_implicit_resolver(_tag, _regexp, _first)
    if _tag != "tag:yaml.org,2002:merge":
        CanonicalDumper.add_implicit_resolver(_tag, _regexp, _first)

CoreSchemaLoader.add_constructor("tag:yaml.org,2002:int", CoreSchemaLoader.construct_core_int)
CanonicalDumper.add_representer(str, CanonicalDumper.represent_str)


def _scalar_key(key: Any) -> str:
    if key is None:
        return "null"
    if isinstance(key, bool):
        return "true" if key else "false"
    if isinstance(key, (int, float, str)):
        return str(key)
    raise TypeError(type(key).__name__)


class YamlCodec(Codec):
    """
    YAML via PyYAML.

    Accepts documents with or without a ``---`` start marker and always
    writes them without one. Block style, two-space indentation, key order
    kept.
    """

    name = "yaml"
    indent = 2

    def decode(self, text: str) -> Value:
        try:
            documents = list(yaml.load_all(text, Loader=CoreSchemaLoader))
        except yaml.constructor.ConstructorError as e:
            raise self._decode_error(e, semantic=True) from e
        except yaml.YAMLError as e:
            raise self._decode_error(e, semantic=False) from e
        except RecursionError as e:
            raise self.semantic_error("document is nested too deeply") from e
        except (IndexError, KeyError, TypeError, ValueError) as e:
            # explicit tags whose text does not fit the tagged type
            raise self.semantic_error(str(e)) from e

        if len(documents) > 1:
            raise self.semantic_error(f"expected a single document, found {len(documents)}")
        data = documents[0] if documents else None

        return self.from_native(data, convert_key=self._convert_key, convert_other=self._reject_type)

    def _decode_error(self, error: yaml.YAMLError, semantic: bool):
        message = str(error)
        line = column = None
        if isinstance(error, yaml.MarkedYAMLError):
            message = " ".join(part for part in (error.context, error.problem) if part) or message
            mark = error.problem_mark or error.context_mark
            if mark is not None:
                line, column = mark.line + 1, mark.column + 1
        if semantic:
            return self.semantic_error(message, line, column)
        return self.syntax_error(message, line, column)

    def _convert_key(self, key: Any) -> str:
        try:
            return _scalar_key(key)
        except TypeError:
            raise self.semantic_error(f"unsupported mapping key type: {type(key).__name__}") from None

    def _reject_type(self, item: Any) -> Value:
        raise self.semantic_error(f"tagged value of type {type(item).__name__} cannot be represented")

    def encode(self, value: Value) -> str:
        try:
            text = yaml.dump(
                to_native(value),
                Dumper=CanonicalDumper,
                default_flow_style=False,
                allow_unicode=True,
                sort_keys=False,
                indent=self.indent,
            )
        except RecursionError as e:
            raise self.unsupported("document is nested too deeply") from e
        logger.debug(f"Encoded {len(text)} characters of YAML")
        return text
