"""Propagation of span contexts in the W3C trace-context format."""

from __future__ import annotations

import re
from collections.abc import Mapping, MutableMapping
from typing import Any

from teletrace.core import TRACE_FLAGS_SAMPLED, TRACE_FLAGS_UNUSED, SpanContext, empty_span_context
from teletrace.current import get_current_span

SUPPORTED_VERSION = 0
MAX_VERSION = 254
TRACEPARENT_HEADER = "Traceparent"

_TRACE_CTX_RE = re.compile(r"^[0-9a-f]{2}-[a-f0-9]{32}-[a-f0-9]{16}-[a-f0-9]{2}-?")
_HEX = re.compile(r"[0-9a-fA-F]+")


def _carrier_get(carrier: Mapping[str, str], key: str) -> str:
    value = carrier.get(key)
    if value is None:
        lowered = key.lower()
        value = next((v for k, v in carrier.items() if k.lower() == lowered), "")
    return value


def _span_context_of(span: Any) -> SpanContext:
    if span is None:
        span = get_current_span()
    if isinstance(span, SpanContext):
        return span
    sc = span.span_context
    return sc() if callable(sc) else sc


def _parse_hex(value: str) -> int | None:
    return int(value, 16) if _HEX.fullmatch(value) else None


class HTTPTraceContextPropagator:
    """Injects and extracts span contexts through the ``traceparent`` header."""

    def inject(self, carrier: MutableMapping[str, str], span: Any = None) -> None:
        """Write the context of ``span`` (or the current span) into ``carrier``."""
        sc = _span_context_of(span)
        if not sc.is_valid():
            return
        flags = sc.trace_flags & TRACE_FLAGS_SAMPLED
        carrier[TRACEPARENT_HEADER] = (
            f"{SUPPORTED_VERSION:02x}-{sc.trace_id_string()}-{sc.span_id_string()}-{flags:02x}"
        )

    def extract(self, carrier: Mapping[str, str]) -> SpanContext:
        """Read a span context from ``carrier``; the empty context if there is none."""
        header = _carrier_get(carrier, TRACEPARENT_HEADER)
        if not header:
            return empty_span_context()
        header = header.strip("-")
        if not _TRACE_CTX_RE.match(header):
            return empty_span_context()

        sections = header.split("-")
        if len(sections) < 4:
            return empty_span_context()
        version_text, trace_text, span_text, flags_text = sections[:4]

        if len(version_text) != 2:
            return empty_span_context()
        version = _parse_hex(version_text)
        if version is None or version > MAX_VERSION:
            return empty_span_context()
        if version == 0 and len(sections) != 4:
            return empty_span_context()

        if len(trace_text) != 32:
            return empty_span_context()
        trace_id = _parse_hex(trace_text)
        if trace_id is None:
            return empty_span_context()

        if len(span_text) != 16:
            return empty_span_context()
        span_id = _parse_hex(span_text)
        if span_id is None:
            return empty_span_context()

        if len(flags_text) != 2:
            return empty_span_context()
        flags = _parse_hex(flags_text)
        if flags is None or (version == 0 and flags > 2):
            return empty_span_context()

        sc = SpanContext(
            trace_id=trace_id,
            span_id=span_id,
            trace_flags=flags & ~TRACE_FLAGS_UNUSED & 0xFF,
        )
        return sc if sc.is_valid() else empty_span_context()

    def get_all_keys(self) -> list[str]:
        return [TRACEPARENT_HEADER]