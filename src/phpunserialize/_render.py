"""Human-readable rendering of decoded value trees."""

import math
from dataclasses import dataclass
from typing import Any

from ._values import Array
from ._values import Boolean
from ._values import Double
from ._values import Integer
from ._values import Text


@dataclass(frozen=True)
class RenderConfig:
    """
    Configures tree rendering with immutable settings.

    ``indent`` of None renders on one line; an int or string indents one
    entry per line.
    """

    indent: str | int | None = None
    ensure_ascii: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.ensure_ascii, bool):
            raise TypeError("ensure_ascii must be a boolean")
        if self.indent is not None and not isinstance(self.indent, str | int):
            raise TypeError("indent must be a string, an integer or None")


def _render_text(s: str, ensure_ascii: bool) -> str:
    """Quote text with escape sequences."""
    ascii_limit = 127
    result = ['"']
    for char in s:
        if char == '"':
            result.append('\\"')
        elif char == "\\":
            result.append("\\\\")
        elif char == "\n":
            result.append("\\n")
        elif char == "\r":
            result.append("\\r")
        elif char == "\t":
            result.append("\\t")
        elif ensure_ascii and ord(char) > ascii_limit:
            result.append(f"\\u{ord(char):04x}")
        else:
            result.append(char)
    result.append('"')
    return "".join(result)


def _render_double(n: float) -> str:
    # Same spellings the serializer uses for non-finite values
    if math.isnan(n):
        return "NAN"
    if math.isinf(n):
        return "INF" if n > 0 else "-INF"
    return repr(n)


def _get_indent_string(indent: str | int | None, level: int) -> str:
    """Generate indentation string for given level."""
    if indent is None:
        return ""
    elif isinstance(indent, int):
        return " " * (indent * level)
    else:
        return indent * level


def _render_array(arr: Array, config: RenderConfig, level: int) -> str:
    if not arr:
        return "{}"

    items = [
        (
            _render_value(key, config, level + 1),
            _render_value(value, config, level + 1),
        )
        for key, value in arr.entries
    ]

    if config.indent is None:
        return "{" + ", ".join(f"{k}: {v}" for k, v in items) + "}"

    indent_str = _get_indent_string(config.indent, level)
    inner_indent = _get_indent_string(config.indent, level + 1)

    lines = ["{"]
    for i, (key, value) in enumerate(items):
        line = f"{inner_indent}{key}: {value}"
        if i < len(items) - 1:
            line += ","
        lines.append(line)

    lines.append(f"{indent_str}}}")
    return "\n".join(lines)


def _render_value(value: Any, config: RenderConfig, level: int) -> str:
    if isinstance(value, Boolean):
        return "true" if value.value else "false"
    elif isinstance(value, Integer):
        return str(value.value)
    elif isinstance(value, Double):
        return _render_double(value.value)
    elif isinstance(value, Text):
        return _render_text(value.value, config.ensure_ascii)
    elif isinstance(value, Array):
        return _render_array(value, config, level)
    else:
        msg = f"Object of type {type(value).__name__} is not a decoded value"
        raise TypeError(msg)


def render(value: Any, **kwargs: Any) -> str:
    """
    Renders a decoded tree as text.

    Text is double-quoted, booleans print as true/false and arrays as
    ``{key: value, ...}`` in insertion order.
    """
    config = RenderConfig(**kwargs)
    return _render_value(value, config, 0)
