"""Format-independent value tree used as the pivot between codecs."""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union


@dataclass(frozen=True)
class Null:
    """The null value (JSON ``null``, YAML ``~``)."""

    kind = "null"


@dataclass(frozen=True)
class Boolean:
    value: bool

    kind = "boolean"


@dataclass(frozen=True)
class Integer:
    value: int

    kind = "integer"


@dataclass(frozen=True)
class Float:
    value: float

    kind = "float"

    @property
    def is_finite(self) -> bool:
        return math.isfinite(self.value)


@dataclass(frozen=True)
class String:
    value: str

    kind = "string"


@dataclass(frozen=True)
class Sequence:
    items: Tuple["Value", ...] = ()

    kind = "sequence"

    def __iter__(self) -> Iterator["Value"]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> "Value":
        return self.items[index]


@dataclass(frozen=True)
class Mapping:
    """
    Ordered string-keyed mapping.

    Entries keep the order they were read in. Equality ignores that order:
    two mappings are equal when they hold the same keys with equal values.
    """

    entries: Tuple[Tuple[str, "Value"], ...] = ()
    _index: Dict[str, "Value"] = field(init=False, repr=False, compare=False, hash=False)

    kind = "mapping"

    def __post_init__(self):
        index: Dict[str, Value] = {}
        for key, item in self.entries:
            if not isinstance(key, str):
                raise TypeError(f"Mapping keys must be str, got {type(key).__name__}")
            if key in index:
                raise ValueError(f"Duplicate mapping key: {key!r}")
            index[key] = item
        object.__setattr__(self, "_index", index)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mapping):
            return NotImplemented
        return self._index == other._index

    def __hash__(self) -> int:
        return hash(frozenset(self._index.items()))

    def __iter__(self) -> Iterator[Tuple[str, "Value"]]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def __getitem__(self, key: str) -> "Value":
        return self._index[key]

    def get(self, key: str, default: Optional["Value"] = None) -> Optional["Value"]:
        return self._index.get(key, default)

    def keys(self) -> List[str]:
        return [key for key, _ in self.entries]


Value = Union[Null, Boolean, Integer, Float, String, Sequence, Mapping]


def from_native(obj: Any) -> Value:
    """
    Build a value tree from plain Python data.

    Accepts ``None``, ``bool``, ``int``, ``float``, ``str``, lists/tuples and
    dicts with ``str`` keys. Anything else raises ``TypeError``.
    """
    if obj is None:
        return Null()
    # bool before int: bool is an int subclass
    if isinstance(obj, bool):
        return Boolean(obj)
    if isinstance(obj, int):
        return Integer(obj)
    if isinstance(obj, float):
        return Float(obj)
    if isinstance(obj, str):
        return String(obj)
    if isinstance(obj, (list, tuple)):
        return Sequence(tuple(from_native(item) for item in obj))
    if isinstance(obj, dict):
        return Mapping(tuple((key, from_native(item)) for key, item in obj.items()))
    raise TypeError(f"Cannot represent {type(obj).__name__} as a value")


def to_native(value: Value) -> Any:
    """Convert a value tree back to plain Python data (dicts keep entry order)."""
    if isinstance(value, Null):
        return None
    if isinstance(value, (Boolean, Integer, Float, String)):
        return value.value
    if isinstance(value, Sequence):
        return [to_native(item) for item in value.items]
    if isinstance(value, Mapping):
        return {key: to_native(item) for key, item in value.entries}
    raise TypeError(f"Not a value: {type(value).__name__}")


def walk(value: Value, path: Tuple[Union[str, int], ...] = ()) -> Iterator[Tuple[Tuple[Union[str, int], ...], Value]]:
    """Yield ``(path, node)`` for every node in the tree, parents first."""
    yield path, value
    if isinstance(value, Sequence):
        for i, item in enumerate(value.items):
            yield from walk(item, path + (i,))
    elif isinstance(value, Mapping):
        for key, item in value.entries:
            yield from walk(item, path + (key,))


def format_path(path: Tuple[Union[str, int], ...]) -> str:
    """Render a tree path like ``author.tags[0]`` (``<root>`` for the empty path)."""
    if not path:
        return "<root>"
    parts: List[str] = []
    for step in path:
        if isinstance(step, int):
            parts.append(f"[{step}]")
        elif parts:
            parts.append(f".{step}")
        else:
            parts.append(step)
    return "".join(parts)
