"""Decode error hierarchy with precise position information."""

from typing import TypeAlias

Position: TypeAlias = int


class PHPDecodeError(ValueError):
    """
    Handles decoding failures with precise position and context information.

    Error state containing position, line/column numbers, and the input
    document so callers can point at the offending unit.
    """

    def __init__(self, msg: str, doc: str = "", pos: Position = 0) -> None:
        if not isinstance(msg, str):
            raise TypeError("msg must be a string")
        if not isinstance(pos, int) or pos < 0:
            raise ValueError("pos must be a non-negative integer")

        self.msg = msg
        self.doc = doc
        self.pos = pos

        # Serialized payloads can embed newlines inside string literals
        self.lineno = doc.count("\n", 0, pos) + 1 if doc else 1
        self.colno = pos - doc.rfind("\n", 0, pos) if doc else pos + 1

        super().__init__(
            f"{msg} at line {self.lineno}, column {self.colno}"
            f" (offset {pos})"
        )


def _show(char: str) -> str:
    return repr(char) if char else "end of input"


class UnexpectedCharacterError(PHPDecodeError):
    """Punctuation mismatch: a fixed character was required."""

    def __init__(
        self, expected: str, actual: str, doc: str, pos: Position
    ) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Expecting {expected!r}, found {_show(actual)}", doc, pos
        )


class DigitExpectedError(PHPDecodeError):
    def __init__(self, actual: str, doc: str, pos: Position) -> None:
        self.actual = actual
        super().__init__(f"Expecting digit, found {_show(actual)}", doc, pos)


class IntegerOutOfRangeError(PHPDecodeError):
    """Integer literal outside the signed 64-bit range PHP emits."""

    def __init__(self, limit: int, doc: str, pos: Position) -> None:
        self.limit = limit
        super().__init__(
            f"Integer literal exceeds magnitude {limit}", doc, pos
        )


class InvalidBooleanError(PHPDecodeError):
    def __init__(self, actual: str, doc: str, pos: Position) -> None:
        self.actual = actual
        super().__init__(
            f"Invalid boolean {_show(actual)}, expecting '0' or '1'", doc, pos
        )


class UnsupportedTagError(PHPDecodeError):
    def __init__(self, actual: str, doc: str, pos: Position) -> None:
        self.actual = actual
        super().__init__(f"Unsupported value tag {_show(actual)}", doc, pos)


class InvalidKeyTypeError(PHPDecodeError):
    """Array keys may only be integers or strings."""

    def __init__(self, actual: str, doc: str, pos: Position) -> None:
        self.actual = actual
        super().__init__(
            f"Invalid array key of type {_show(actual)}, "
            "expecting 'i' or 's'",
            doc,
            pos,
        )


class StringTooLongError(PHPDecodeError):
    def __init__(
        self, requested_length: int, available: int, doc: str, pos: Position
    ) -> None:
        self.requested_length = requested_length
        self.available = available
        super().__init__(
            f"String of length {requested_length} runs past end of input "
            f"({available} remaining)",
            doc,
            pos,
        )


class OffsetOutOfRangeError(PHPDecodeError):
    def __init__(self, input_length: int, doc: str, pos: Position) -> None:
        self.input_length = input_length
        super().__init__(
            f"Unexpected end of input (length {input_length})", doc, pos
        )


class ElementCountMismatchError(PHPDecodeError):
    """
    Declared array size disagrees with the pairs actually present.

    ``actual`` is the number of pairs seen when the mismatch was detected:
    the real count when the array closes early, ``expected + 1`` when an
    extra key starts where the closing brace belongs.
    """

    def __init__(
        self, expected: int, actual: int, doc: str, pos: Position
    ) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Array declares {expected} elements but "
            f"{'more' if actual > expected else actual} were found",
            doc,
            pos,
        )


class DepthExceededError(PHPDecodeError):
    def __init__(self, max_depth: int, doc: str, pos: Position) -> None:
        self.max_depth = max_depth
        super().__init__(
            f"Array nesting exceeds maximum depth of {max_depth}", doc, pos
        )


class ExtraDataError(PHPDecodeError):
    def __init__(self, doc: str, pos: Position) -> None:
        super().__init__("Extra data", doc, pos)


class TextEncodingError(PHPDecodeError):
    def __init__(self, encoding: str, doc: str, pos: Position) -> None:
        self.encoding = encoding
        super().__init__(
            f"String payload is not valid {encoding}", doc, pos
        )
