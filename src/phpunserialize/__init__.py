"""
Decoder for the text format produced by PHP's serialize() primitive.

Reconstructs booleans, integers, doubles, strings and nested associative
arrays into an immutable value tree, rejecting malformed input with
positional diagnostics.
"""

import codecs
import math
import os
import sys
import time
from dataclasses import dataclass
from enum import Enum
from typing import IO
from typing import Any
from typing import TypeAlias

from ._errors import DepthExceededError
from ._errors import DigitExpectedError
from ._errors import ElementCountMismatchError
from ._errors import ExtraDataError
from ._errors import IntegerOutOfRangeError
from ._errors import InvalidBooleanError
from ._errors import InvalidKeyTypeError
from ._errors import OffsetOutOfRangeError
from ._errors import PHPDecodeError
from ._errors import Position
from ._errors import StringTooLongError
from ._errors import TextEncodingError
from ._errors import UnexpectedCharacterError
from ._errors import UnsupportedTagError
from ._render import RenderConfig
from ._render import render
from ._values import Array
from ._values import Boolean
from ._values import Double
from ._values import Integer
from ._values import Key
from ._values import Text
from ._values import Value
from ._values import to_python
from ._values import walk

__version__ = "0.1.0"

Serialized: TypeAlias = str | bytes | bytearray

# Profiling infrastructure - zero-cost when disabled
PROFILE_HOT_PATHS = __debug__ and "PHPUNSERIALIZE_PROFILE" in os.environ


@dataclass
class HotPathStats:
    """Statistics for profiling hot paths during parsing."""

    function_name: str
    call_count: int = 0
    total_time_ns: int = 0
    chars_processed: int = 0

    def record_call(self, duration_ns: int, chars: int = 0) -> None:
        """Records a function call with timing and character processing info."""
        self.call_count += 1
        self.total_time_ns += duration_ns
        self.chars_processed += chars


class Tag(Enum):
    """Leading character selecting the production for a value."""

    BOOLEAN = "b"
    INTEGER = "i"
    DOUBLE = "d"
    STRING = "s"
    ARRAY = "a"


_KEY_TAGS = frozenset({Tag.INTEGER.value, Tag.STRING.value})

# Non-finite doubles as PHP writes them; -INF must be tried before INF
_DOUBLE_CONSTANTS = (
    ("NAN", math.nan),
    ("-INF", -math.inf),
    ("INF", math.inf),
)

# PHP integers are signed 64-bit
_INT_MAX = 2**63 - 1

# Each nesting level costs two frames: parse_array -> parse_value
_FRAMES_PER_LEVEL = 2
_RECURSION_HEADROOM = 200


def max_supported_depth() -> int:
    """Deepest ``max_depth`` the current recursion limit can honor."""
    return max(
        (sys.getrecursionlimit() - _RECURSION_HEADROOM) // _FRAMES_PER_LEVEL,
        1,
    )


if PROFILE_HOT_PATHS:
    _hot_path_stats: dict[str, HotPathStats] = {}

    class ProfileContext:
        """Context manager for profiling hot paths."""

        def __init__(self, func_name: str, chars_to_process: int = 0):
            self.func_name = func_name
            self.chars = chars_to_process
            self.start_time = 0

        def __enter__(self) -> "ProfileContext":
            self.start_time = time.perf_counter_ns()
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            duration = time.perf_counter_ns() - self.start_time
            if self.func_name not in _hot_path_stats:
                _hot_path_stats[self.func_name] = HotPathStats(self.func_name)
            _hot_path_stats[self.func_name].record_call(duration, self.chars)

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        """Returns current profiling statistics."""
        return _hot_path_stats.copy()

    def clear_hot_path_stats() -> None:
        """Clears profiling statistics."""
        _hot_path_stats.clear()

else:

    class ProfileContext:  # type: ignore[no-redef]
        def __init__(self, func_name: str, chars: int = 0) -> None:
            pass

        def __enter__(self) -> "ProfileContext":
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            pass

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        return {}

    def clear_hot_path_stats() -> None:
        pass


@dataclass(frozen=True)
class ParseConfig:
    """
    Configures decoding behavior with immutable settings.

    ``max_depth`` bounds array nesting so hostile input fails cleanly instead
    of exhausting the interpreter stack. ``encoding`` and ``errors`` apply to
    ``bytes`` input only, where string lengths count bytes.
    """

    max_depth: int = 256
    allow_trailing_data: bool = False
    encoding: str = "utf-8"
    errors: str = "strict"

    def __post_init__(self) -> None:
        if not isinstance(self.max_depth, int) or isinstance(
            self.max_depth, bool
        ):
            raise TypeError("max_depth must be an integer")
        if self.max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        if self.max_depth > max_supported_depth():
            raise ValueError(
                f"max_depth must be at most {max_supported_depth()} "
                "under the current recursion limit"
            )
        if not isinstance(self.allow_trailing_data, bool):
            raise TypeError("allow_trailing_data must be a boolean")
        if not isinstance(self.encoding, str):
            raise TypeError("encoding must be a string")
        if not isinstance(self.errors, str):
            raise TypeError("errors must be a string")
        try:
            info = codecs.lookup(self.encoding)
        except LookupError as e:
            raise ValueError(f"unknown encoding: {self.encoding}") from e
        if not info._is_text_encoding:
            raise ValueError(f"{self.encoding!r} is not a text encoding")
        try:
            codecs.lookup_error(self.errors)
        except LookupError as e:
            raise ValueError(f"unknown error handler: {self.errors}") from e


class Decoder:
    """
    Recursive descent decoder over a single serialized payload.

    Owns the input and a cursor that only moves forward. Construction does
    no parsing; call ``decode`` for the array root the format normally
    carries, or ``decode_value`` to accept any value at the root.

    ``bytes`` input is mapped one byte per unit, so offsets and string
    lengths count bytes as PHP does. ``str`` input counts code points.
    """

    def __init__(self, text: Serialized, config: ParseConfig | None = None):
        if isinstance(text, bytes | bytearray):
            self.text = bytes(text).decode("latin-1")
            self.is_bytes = True
        elif isinstance(text, str):
            self.text = text
            self.is_bytes = False
        else:
            raise TypeError(
                "the serialized object must be str or bytes, "
                f"not {type(text).__name__}"
            )
        self.config = config or ParseConfig()
        self.length = len(self.text)
        self.pos: Position = 0
        self.depth = 0
        self._productions = {
            Tag.BOOLEAN.value: self._parse_boolean_value,
            Tag.INTEGER.value: self._parse_integer_value,
            Tag.DOUBLE.value: self._parse_double_value,
            Tag.STRING.value: self._parse_string_value,
            Tag.ARRAY.value: self.parse_array,
        }

    def decode(self) -> Array:
        """Decodes the whole input as one array."""
        self._reset()
        char = self.current()
        if char not in self._productions:
            raise UnsupportedTagError(char, self.text, self.pos)
        result = self.parse_array()
        self._check_trailing_data()
        return result

    def decode_value(self) -> Value:
        """Decodes the whole input as one value of any kind."""
        self._reset()
        result = self.parse_value()
        self._check_trailing_data()
        return result

    def _reset(self) -> None:
        self.pos = 0
        self.depth = 0

    def _check_trailing_data(self) -> None:
        if self.pos < self.length and not self.config.allow_trailing_data:
            raise ExtraDataError(self.text, self.pos)

    # Character matchers

    def peek(self) -> str:
        """Returns current character without advancing, '' at end."""
        return self.text[self.pos] if self.pos < self.length else ""

    def current(self) -> str:
        """Returns current character, failing if the input has ended."""
        if self.pos >= self.length:
            raise OffsetOutOfRangeError(self.length, self.text, self.pos)
        return self.text[self.pos]

    def expect(self, ch: str) -> None:
        """Consumes ``ch`` or fails naming what was found instead."""
        char = self.current()
        if char != ch:
            raise UnexpectedCharacterError(ch, char, self.text, self.pos)
        self.pos += 1

    def expect_optional(self, ch: str) -> bool:
        """Consumes ``ch`` if present; returns whether it was."""
        if self.peek() == ch:
            self.pos += 1
            return True
        return False

    def expect_digit(self) -> int:
        """Consumes one ASCII digit and returns its value."""
        char = self.current()
        if not "0" <= char <= "9":
            raise DigitExpectedError(char, self.text, self.pos)
        self.pos += 1
        return ord(char) - ord("0")

    def _at_digit(self) -> bool:
        return "0" <= self.peek() <= "9"

    # Numeric sub-parsers

    def parse_unsigned_integer(self, limit: int = _INT_MAX) -> int:
        """
        Parses a run of digits no greater than ``limit``.

        A leading '0' is the whole literal: parsing stops right after it, so
        whatever follows must be valid punctuation for the caller.
        """
        start = self.pos
        digit = self.expect_digit()
        if digit == 0:
            return 0

        number = digit
        while self._at_digit():
            number = number * 10 + self.expect_digit()
            if number > limit:
                raise IntegerOutOfRangeError(limit, self.text, start)
        return number

    def parse_integer(self) -> int:
        negative = self.expect_optional("-")
        if negative:
            return -self.parse_unsigned_integer(_INT_MAX + 1)
        return self.parse_unsigned_integer()

    def _skip_integer_part(self) -> None:
        self.expect_optional("-")
        if self.expect_digit() != 0:
            while self._at_digit():
                self.pos += 1

    def _parse_digit_run(self) -> int:
        """Consumes one or more digits, leading zeros allowed; returns count."""
        start = self.pos
        self.expect_digit()
        while self._at_digit():
            self.pos += 1
        return self.pos - start

    def parse_double(self) -> float:
        """
        Parses ``INT ['.' DIGITS] [('e'|'E') ['+'|'-'] DIGITS]``.

        Also accepts the NAN, INF and -INF spellings. The grammar is checked
        with the digit matchers; the validated slice is then materialised with
        ``float`` so that ``3.14`` equals ``3 + 14 * 10**-2`` correctly rounded.
        """
        with ProfileContext("parse_double"):
            for word, constant in _DOUBLE_CONSTANTS:
                if self.text.startswith(word, self.pos):
                    self.pos += len(word)
                    return constant

            start = self.pos
            self._skip_integer_part()
            if self.expect_optional("."):
                self._parse_digit_run()
            if self.peek() in ("e", "E"):
                self.pos += 1
                if not self.expect_optional("+"):
                    self.expect_optional("-")
                self._parse_digit_run()

            return float(self.text[start : self.pos])

    def parse_boolean(self) -> bool:
        char = self.current()
        if char not in ("0", "1"):
            raise InvalidBooleanError(char, self.text, self.pos)
        self.pos += 1
        return char == "1"

    # String sub-parser

    def parse_string_literal(self) -> str:
        """
        Parses ``LEN:"...."`` copying exactly LEN units.

        Quotes inside the payload are not special; the length alone decides
        where the payload ends. What follows the payload is left to the
        closing-quote and terminator matchers.
        """
        with ProfileContext("parse_string"):
            length = self.parse_unsigned_integer()
            self.expect(":")
            self.expect('"')

            start = self.pos
            end = start + length
            available = self.length - start
            if length > available:
                raise StringTooLongError(length, available, self.text, start)
            self.pos = end

            self.expect('"')
            return self._text_payload(start, end)

    def _text_payload(self, start: Position, end: Position) -> str:
        payload = self.text[start:end]
        if not self.is_bytes:
            return payload
        try:
            return payload.encode("latin-1").decode(
                self.config.encoding, self.config.errors
            )
        except UnicodeDecodeError as e:
            raise TextEncodingError(
                self.config.encoding, self.text, start + e.start
            ) from e

    # Productions

    def _open(self, tag: Tag) -> None:
        self.expect(tag.value)
        self.expect(":")

    def _parse_boolean_value(self) -> Boolean:
        self._open(Tag.BOOLEAN)
        value = self.parse_boolean()
        self.expect(";")
        return Boolean(value)

    def _parse_integer_value(self) -> Integer:
        self._open(Tag.INTEGER)
        value = self.parse_integer()
        self.expect(";")
        return Integer(value)

    def _parse_double_value(self) -> Double:
        self._open(Tag.DOUBLE)
        value = self.parse_double()
        self.expect(";")
        return Double(value)

    def _parse_string_value(self) -> Text:
        self._open(Tag.STRING)
        value = self.parse_string_literal()
        self.expect(";")
        return Text(value)

    def parse_value(self) -> Value:
        """Dispatches on the tag at the cursor without consuming it."""
        char = self.current()
        production = self._productions.get(char)
        if production is None:
            raise UnsupportedTagError(char, self.text, self.pos)
        return production()

    def _parse_array_key(self) -> Key:
        char = self.current()
        if char == Tag.INTEGER.value:
            return self._parse_integer_value()
        elif char == Tag.STRING.value:
            return self._parse_string_value()
        else:
            raise InvalidKeyTypeError(char, self.text, self.pos)

    def parse_array(self) -> Array:
        """
        Parses ``a:N:{ (KEY VALUE)* }``.

        N governs how many pairs are read, not the final size: repeated keys
        collapse onto their last occurrence. A single ';' after a nested array
        element is tolerated.
        """
        with ProfileContext("parse_array"):
            start = self.pos
            self._open(Tag.ARRAY)
            size = self.parse_unsigned_integer()
            self.expect(":")
            self.expect("{")

            self.depth += 1
            if self.depth > self.config.max_depth:
                raise DepthExceededError(
                    self.config.max_depth, self.text, start
                )

            pairs: list[tuple[Key, Value]] = []
            for count in range(size):
                if self.peek() == "}":
                    raise ElementCountMismatchError(
                        size, count, self.text, self.pos
                    )
                key = self._parse_array_key()
                value = self.parse_value()
                if isinstance(value, Array):
                    self.expect_optional(";")
                pairs.append((key, value))

            if self.peek() in _KEY_TAGS:
                raise ElementCountMismatchError(
                    size, size + 1, self.text, self.pos
                )
            self.expect("}")
            self.depth -= 1

            return Array.from_pairs(pairs)


def decode(s: Serialized, **kwargs: Any) -> Array:
    """
    Decodes a serialized array into an immutable value tree.

    Keyword arguments build a ``ParseConfig``.
    """
    config = ParseConfig(**kwargs)
    return Decoder(s, config).decode()


def decode_value(s: Serialized, **kwargs: Any) -> Value:
    """Decodes a serialized value of any kind into a value tree."""
    config = ParseConfig(**kwargs)
    return Decoder(s, config).decode_value()


def loads(s: Serialized, **kwargs: Any) -> Any:
    """
    Decodes a serialized value into plain Python objects.

    Arrays become ``dict`` in input order, with ``int``/``str`` keys.
    """
    return to_python(decode_value(s, **kwargs))


def load(fp: IO[str] | IO[bytes], **kwargs: Any) -> Any:
    """
    Decodes a serialized value read from a file-like object.
    """
    if not hasattr(fp, "read"):
        raise TypeError("fp must have a read() method")

    return loads(fp.read(), **kwargs)


def is_serialized(s: Serialized) -> bool:
    """Reports whether ``s`` is one well-formed serialized value."""
    try:
        decode_value(s)
    except PHPDecodeError:
        return False
    return True


__all__ = [
    "Array",
    "Boolean",
    "Decoder",
    "DepthExceededError",
    "DigitExpectedError",
    "Double",
    "ElementCountMismatchError",
    "ExtraDataError",
    "HotPathStats",
    "Integer",
    "IntegerOutOfRangeError",
    "InvalidBooleanError",
    "InvalidKeyTypeError",
    "Key",
    "OffsetOutOfRangeError",
    "PHPDecodeError",
    "ParseConfig",
    "RenderConfig",
    "StringTooLongError",
    "Tag",
    "Text",
    "TextEncodingError",
    "UnexpectedCharacterError",
    "UnsupportedTagError",
    "Value",
    "clear_hot_path_stats",
    "decode",
    "decode_value",
    "get_hot_path_stats",
    "is_serialized",
    "max_supported_depth",
    "load",
    "loads",
    "render",
    "to_python",
    "walk",
]
