"""
Test data generators for decoding benchmarks.

Creates serialized payloads optimized for performance testing:
- Different sizes (small/large)
- Different complexity levels (flat/nested/mixed)
- String-heavy content with multi-byte text
"""

import random
import string
from typing import Any

import phpserialize

# Constants for random data generation
_INT_TYPE = 1
_FLOAT_TYPE = 2
_STRING_TYPE = 3
_BOOL_TYPE = 4
_MULTIBYTE_PROBABILITY = 0.3


def generate_test_data(data_type: str) -> bytes:
    """Generates serialized test data based on specified type."""
    generators = {
        "small_array": _generate_small_array,
        "large_array": _generate_large_array,
        "mixed_list": _generate_mixed_list,
        "nested_structure": _generate_nested_structure,
        "string_heavy": _generate_string_heavy,
    }

    if data_type not in generators:
        raise ValueError(f"Unknown data type: {data_type}")

    return bytes(phpserialize.dumps(generators[data_type]()))


def _generate_small_array() -> dict[str, Any]:
    """Generates a small record (< 1KB) with basic key-value pairs."""
    return {
        "id": 12345,
        "name": "Alice Johnson",
        "email": "alice@example.com",
        "active": True,
        "balance": 1234.56,
        "metadata": {"created": "2024-01-15T10:30:00Z", "source": "api"},
    }


def _generate_large_array() -> dict[str, Any]:
    """Generates a large record (> 10KB) with many fields."""
    return {
        "user_id": random.randint(1000000, 9999999),
        "profile": {
            "first_name": _random_string(10),
            "last_name": _random_string(12),
            "language": random.choice(["en", "es", "fr", "de", "ko"]),
        },
        "transactions": [
            {
                "id": f"txn_{i:06d}",
                "amount": round(random.uniform(1.0, 1000.0), 2),
                "currency": random.choice(["USD", "EUR", "GBP", "KRW"]),
                "description": f"Payment for {_random_string(20)}",
                "status": random.choice(["completed", "pending", "failed"]),
            }
            for i in range(50)
        ],
        "permissions": [
            random.choice(["read", "write", "delete"]) for _ in range(30)
        ],
    }


def _generate_mixed_list() -> list[Any]:
    """Generates a large integer-keyed array with mixed value types."""
    items: list[Any] = []

    for i in range(200):
        choice = random.randint(1, 5)
        if choice == _INT_TYPE:
            items.append(random.randint(-1000, 1000))
        elif choice == _FLOAT_TYPE:
            items.append(round(random.uniform(-100.0, 100.0), 3))
        elif choice == _STRING_TYPE:
            items.append(_random_string(random.randint(5, 30)))
        elif choice == _BOOL_TYPE:
            items.append(random.choice([True, False]))
        else:
            items.append(
                {
                    "index": i,
                    "value": _random_string(10),
                    "score": round(random.uniform(0, 100), 2),
                }
            )

    return items


def _generate_nested_structure() -> dict[str, Any]:
    """Generates a deeply nested structure."""

    def create_nested(depth: int) -> dict[str, Any]:
        if depth <= 0:
            return {"value": _random_string(10)}

        return {
            "level": depth,
            "data": _random_string(15),
            "items": [create_nested(depth - 1) for _ in range(3)],
            "nested": create_nested(depth - 1),
        }

    return create_nested(6)


def _generate_string_heavy() -> dict[str, Any]:
    """Generates many strings, a share of them multi-byte."""

    def create_text() -> str:
        chars = []
        for _ in range(50):
            if random.random() < _MULTIBYTE_PROBABILITY:
                chars.append(random.choice("한글이름éü\"';{}"))
            else:
                chars.append(
                    random.choice(string.ascii_letters + string.digits + " ")
                )
        return "".join(chars)

    return {
        "strings": [create_text() for _ in range(100)],
        "labels": {f"key_{i}": create_text() for i in range(20)},
    }


def _random_string(length: int) -> str:
    """Generates random ASCII string of specified length."""
    return "".join(random.choices(string.ascii_letters, k=length))
