"""
Benchmark suite for phpunserialize decoding performance.

Compares phpunserialize against the phpserialize package on payloads shaped
like real serialize() output.

Measures decoding speed and memory usage across different data types.
"""
