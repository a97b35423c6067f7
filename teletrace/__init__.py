"""Distributed tracing: spans, samplers, span processors and W3C, B3 and binary context propagation."""

__version__ = "0.1.0"