"""Benchmark harness for permkit operations."""
