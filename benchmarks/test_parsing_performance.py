"""
Decoding performance benchmarks comparing phpunserialize against phpserialize.

Compares decoding speed across different payload types and sizes:
- phpserialize (pure-Python reference decoder)
- phpunserialize (our implementation)
"""

from collections.abc import Callable
from functools import partial
from typing import Any

import phpserialize
import pytest

import phpunserialize
from benchmarks.data_generators import generate_test_data

DECODERS = [
    ("phpserialize", partial(phpserialize.loads, decode_strings=True)),
    ("phpunserialize", phpunserialize.loads),
    ("phpunserialize_tree", phpunserialize.decode),
]


class TestParsingBenchmarks:
    """Benchmarks for decoding performance across libraries."""

    @pytest.mark.benchmark(group="small_arrays")
    @pytest.mark.parametrize("decoder,decode_func", DECODERS)
    def test_small_array_decoding(
        self,
        benchmark: Any,
        decoder: str,
        decode_func: Callable[[bytes], Any],
    ) -> None:
        """Benchmarks decoding of small records (< 1KB)."""
        test_data = generate_test_data("small_array")
        result = benchmark(decode_func, test_data)

        assert len(result) == 6

    @pytest.mark.benchmark(group="large_arrays")
    @pytest.mark.parametrize("decoder,decode_func", DECODERS)
    def test_large_array_decoding(
        self,
        benchmark: Any,
        decoder: str,
        decode_func: Callable[[bytes], Any],
    ) -> None:
        """Benchmarks decoding of large records (> 10KB)."""
        test_data = generate_test_data("large_array")
        result = benchmark(decode_func, test_data)

        assert len(result) == 4

    @pytest.mark.benchmark(group="mixed_lists")
    @pytest.mark.parametrize("decoder,decode_func", DECODERS)
    def test_mixed_list_decoding(
        self,
        benchmark: Any,
        decoder: str,
        decode_func: Callable[[bytes], Any],
    ) -> None:
        """Benchmarks decoding of integer-keyed arrays with mixed values."""
        test_data = generate_test_data("mixed_list")
        result = benchmark(decode_func, test_data)

        assert len(result) == 200

    @pytest.mark.benchmark(group="nested_structures")
    @pytest.mark.parametrize("decoder,decode_func", DECODERS)
    def test_nested_structure_decoding(
        self,
        benchmark: Any,
        decoder: str,
        decode_func: Callable[[bytes], Any],
    ) -> None:
        """Benchmarks decoding of deeply nested arrays."""
        test_data = generate_test_data("nested_structure")
        result = benchmark(decode_func, test_data)

        assert len(result) == 4

    @pytest.mark.benchmark(group="string_heavy")
    @pytest.mark.parametrize("decoder,decode_func", DECODERS)
    def test_string_heavy_decoding(
        self,
        benchmark: Any,
        decoder: str,
        decode_func: Callable[[bytes], Any],
    ) -> None:
        """Benchmarks decoding of many multi-byte string payloads."""
        test_data = generate_test_data("string_heavy")
        result = benchmark(decode_func, test_data)

        assert len(result) == 2


def test_results_match_reference() -> None:
    """Checks both decoders agree before timing them."""
    for data_type in ["small_array", "large_array", "string_heavy"]:
        test_data = generate_test_data(data_type)

        assert phpunserialize.loads(test_data) == phpserialize.loads(
            test_data, decode_strings=True
        )
