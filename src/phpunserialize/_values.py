"""
Decoded value model.

A closed set of immutable variants: Boolean, Integer, Double, Text and Array.
Array is an ordered, read-only mapping restricted to Integer and Text keys.
"""

from collections.abc import Iterable
from collections.abc import Iterator
from collections.abc import Mapping
from dataclasses import dataclass
from dataclasses import field
from typing import Any
from typing import TypeAlias


@dataclass(frozen=True)
class Boolean:
    value: bool


@dataclass(frozen=True)
class Integer:
    value: int


@dataclass(frozen=True)
class Double:
    value: float


@dataclass(frozen=True)
class Text:
    value: str


Key: TypeAlias = Integer | Text
Value: TypeAlias = "Boolean | Integer | Double | Text | Array"
Path: TypeAlias = tuple[Key, ...]

KEY_TYPES = (Integer, Text)


def _coerce_key(key: object) -> Key:
    """Wraps raw ``int``/``str`` lookups into key variants."""
    if isinstance(key, KEY_TYPES):
        return key
    # bool is an int subclass but never a valid key
    if isinstance(key, int) and not isinstance(key, bool):
        return Integer(key)
    if isinstance(key, str):
        return Text(key)
    msg = f"array keys must be Integer or Text, not {type(key).__name__}"
    raise TypeError(msg)


@dataclass(frozen=True)
class Array(Mapping["Key", "Value"]):
    """
    Ordered associative array keyed by Integer or Text.

    Iteration follows insertion order. A repeated key keeps the later value
    and moves to the later insertion point, so ``entries`` never holds the
    same key twice.
    """

    entries: tuple[tuple[Key, Value], ...] = ()
    _index: dict[Key, Value] = field(
        init=False, repr=False, compare=False, hash=False
    )

    def __post_init__(self) -> None:
        index: dict[Key, Value] = {}
        for key, value in self.entries:
            if not isinstance(key, KEY_TYPES):
                msg = (
                    "array keys must be Integer or Text, "
                    f"not {type(key).__name__}"
                )
                raise TypeError(msg)
            index.pop(key, None)
            index[key] = value
        object.__setattr__(self, "_index", index)
        object.__setattr__(self, "entries", tuple(index.items()))

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[Key, Value]]) -> "Array":
        return cls(tuple(pairs))

    def __getitem__(self, key: object) -> Value:
        return self._index[_coerce_key(key)]

    def __contains__(self, key: object) -> bool:
        try:
            return _coerce_key(key) in self._index
        except TypeError:
            return False

    def __iter__(self) -> Iterator[Key]:
        return iter(self._index)

    def __len__(self) -> int:
        return len(self._index)


def walk(value: Value, path: Path = ()) -> Iterator[tuple[Path, Value]]:
    """
    Yields every node of a decoded tree depth-first.

    Each item is ``(path, node)`` where ``path`` holds the keys leading from
    the root to ``node``. Array entries are visited in insertion order, the
    array itself before its children.
    """
    yield path, value
    if isinstance(value, Array):
        for key, child in value.entries:
            yield from walk(child, (*path, key))


def to_python(value: Value) -> Any:
    """Converts a decoded tree into plain Python objects."""
    if isinstance(value, Boolean | Integer | Double | Text):
        return value.value
    elif isinstance(value, Array):
        return {
            to_python(key): to_python(child) for key, child in value.entries
        }
    else:
        msg = f"Object of type {type(value).__name__} is not a decoded value"
        raise TypeError(msg)
