"""
Pytest configuration and shared fixtures for phpunserialize tests.

Provides immutable test data fixtures and common utilities for clean,
type-safe test organization.
"""

from dataclasses import dataclass
from typing import Any

import pytest


@dataclass(frozen=True)
class PhpTestCase:
    """
    Immutable container for serialized test case data.

    Holds test input and expected behavior for consistent test execution.
    """

    description: str
    input_data: str | bytes
    should_fail: bool = False
    expected_output: Any = None


@pytest.fixture
def php_pass_cases() -> list[PhpTestCase]:
    """
    Provides serialized arrays as PHP's serialize() writes them.

    Covers flat lists, string-keyed records, nesting and mixed key kinds.
    """
    return [
        PhpTestCase(
            description="list of strings",
            input_data=(
                'a:3:{i:0;s:4:"read";i:1;s:5:"write";i:2;s:6:"delete";}'
            ),
            expected_output={0: "read", 1: "write", 2: "delete"},
        ),
        PhpTestCase(
            description="record with every scalar kind",
            input_data=(
                'a:5:{s:4:"name";s:5:"Alice";s:3:"age";i:30;'
                's:6:"active";b:1;s:7:"balance";d:1234.56;'
                's:4:"tags";a:0:{}}'
            ),
            expected_output={
                "name": "Alice",
                "age": 30,
                "active": True,
                "balance": 1234.56,
                "tags": {},
            },
        ),
        PhpTestCase(
            description="nested records",
            input_data=(
                'a:1:{s:6:"fields";a:2:{i:0;a:1:{s:4:"type";s:4:"text";}'
                'i:1;a:1:{s:4:"type";s:5:"email";}}}'
            ),
            expected_output={
                "fields": {0: {"type": "text"}, 1: {"type": "email"}},
            },
        ),
        PhpTestCase(
            description="mixed integer and string keys",
            input_data='a:3:{i:5;b:0;s:1:"5";b:1;i:-1;d:-0.5;}',
            expected_output={5: False, "5": True, -1: -0.5},
        ),
        PhpTestCase(
            description="multi-byte payload counted in bytes",
            input_data=(
                b'a:1:{s:5:"label";s:6:"\xec\x9d\xb4\xeb\xa6\x84";}'
            ),
            expected_output={"label": "이름"},
        ),
        PhpTestCase(
            description="payload containing quotes and separators",
            input_data='a:1:{i:0;s:7:"a";b:c}";}',
            expected_output={0: 'a";b:c}'},
        ),
    ]


@pytest.fixture
def basic_php_values() -> list[PhpTestCase]:
    """
    Provides scalar value test cases for fundamental parsing.

    Covers every production the decoder accepts at the root.
    """
    return [
        PhpTestCase("true boolean", "b:1;", False, True),
        PhpTestCase("false boolean", "b:0;", False, False),
        PhpTestCase("zero", "i:0;", False, 0),
        PhpTestCase("integer", "i:42;", False, 42),
        PhpTestCase("negative integer", "i:-123;", False, -123),
        PhpTestCase(
            "int64 max", "i:9223372036854775807;", False, 9223372036854775807
        ),
        PhpTestCase("double", "d:3.14;", False, 3.14),
        PhpTestCase("negative double", "d:-2.5;", False, -2.5),
        PhpTestCase("double without fraction", "d:1;", False, 1.0),
        PhpTestCase("fraction with leading zero", "d:0.05;", False, 0.05),
        PhpTestCase("double with exponent", "d:1.0E+25;", False, 1.0e25),
        PhpTestCase("negative exponent", "d:1.5e-5;", False, 1.5e-5),
        PhpTestCase("empty string", 's:0:"";', False, ""),
        PhpTestCase("simple string", 's:5:"hello";', False, "hello"),
        PhpTestCase("empty array", "a:0:{}", False, {}),
        PhpTestCase("leading zero integer", "i:01;", True),
        PhpTestCase("boolean out of range", "b:2;", True),
        PhpTestCase("null is unsupported", "N;", True),
        PhpTestCase("object is unsupported", 'O:8:"stdClass":0:{}', True),
    ]
