"""Benchmark and trace harness around the facade and the engine."""
