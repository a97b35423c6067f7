"""Propagation of span contexts through B3 HTTP headers."""

from __future__ import annotations

import re
from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass
from typing import Any

from teletrace.core import TRACE_FLAGS_SAMPLED, SpanContext, empty_span_context
from teletrace.current import get_current_span

B3_SINGLE_HEADER = "X-B3"
B3_DEBUG_FLAG_HEADER = "X-B3-Flags"
B3_TRACE_ID_HEADER = "X-B3-TraceId"
B3_SPAN_ID_HEADER = "X-B3-SpanId"
B3_SAMPLED_HEADER = "X-B3-Sampled"
B3_PARENT_SPAN_ID_HEADER = "X-B3-ParentSpanId"

_HEX32 = re.compile(r"[a-f0-9]{32}")
_HEX16 = re.compile(r"[a-f0-9]{16}")


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


@dataclass(frozen=True)
class HTTPB3Propagator:
    """Injects and extracts span contexts using B3 headers.

    With ``single_header`` the combined ``X-B3`` header is used,
    otherwise the separate ``X-B3-*`` headers.
    """

    single_header: bool = False

    def inject(self, carrier: MutableMapping[str, str], span: Any = None) -> None:
        """Write the context of ``span`` (or the current span) into ``carrier``."""
        sc = _span_context_of(span)
        if not sc.is_valid():
            return
        if self.single_header:
            sampled = sc.trace_flags & TRACE_FLAGS_SAMPLED
            carrier[B3_SINGLE_HEADER] = (
                f"{sc.trace_id_string()}-{sc.span_id_string()}-{sampled}"
            )
        else:
            carrier[B3_TRACE_ID_HEADER] = sc.trace_id_string()
            carrier[B3_SPAN_ID_HEADER] = sc.span_id_string()
            carrier[B3_SAMPLED_HEADER] = "1" if sc.is_sampled() else "0"

    def extract(self, carrier: Mapping[str, str]) -> SpanContext:
        """Read a span context from ``carrier``; the empty context if there is none."""
        if self.single_header:
            return self._extract_single_header(carrier)
        return self._extract_multiple_headers(carrier)

    def get_all_keys(self) -> list[str]:
        if self.single_header:
            return [B3_SINGLE_HEADER]
        return [B3_TRACE_ID_HEADER, B3_SPAN_ID_HEADER, B3_SAMPLED_HEADER]

    def _extract_multiple_headers(self, carrier: Mapping[str, str]) -> SpanContext:
        trace_id = self._parse_trace_id(_carrier_get(carrier, B3_TRACE_ID_HEADER))
        if trace_id is None:
            return empty_span_context()
        span_id = self._parse_span_id(_carrier_get(carrier, B3_SPAN_ID_HEADER))
        if span_id is None:
            return empty_span_context()
        sampled = self._parse_sampled_state(_carrier_get(carrier, B3_SAMPLED_HEADER))
        if sampled is None:
            return empty_span_context()
        debug = self._parse_debug_flag(_carrier_get(carrier, B3_DEBUG_FLAG_HEADER))
        if debug is None:
            return empty_span_context()
        if debug == TRACE_FLAGS_SAMPLED:
            sampled = TRACE_FLAGS_SAMPLED
        sc = SpanContext(trace_id=trace_id, span_id=span_id, trace_flags=sampled)
        return sc if sc.is_valid() else empty_span_context()

    def _extract_single_header(self, carrier: Mapping[str, str]) -> SpanContext:
        parts = _carrier_get(carrier, B3_SINGLE_HEADER).split("-")
        if not 2 <= len(parts) <= 4:
            return empty_span_context()
        trace_id = self._parse_trace_id(parts[0])
        if trace_id is None:
            return empty_span_context()
        span_id = self._parse_span_id(parts[1])
        if span_id is None:
            return empty_span_context()
        flags = 0
        if len(parts) > 2:
            parsed = self._parse_sampled_state(parts[2])
            if parsed is None:
                return empty_span_context()
            flags = parsed
        if len(parts) == 4 and self._parse_span_id(parts[3]) is None:
            return empty_span_context()
        sc = SpanContext(trace_id=trace_id, span_id=span_id, trace_flags=flags)
        return sc if sc.is_valid() else empty_span_context()

    def _parse_trace_id(self, value: str) -> int | None:
        if _HEX32.fullmatch(value):
            return int(value, 16)
        if self.single_header and _HEX16.fullmatch(value):
            return int(value, 16)
        return None

    @staticmethod
    def _parse_span_id(value: str) -> int | None:
        return int(value, 16) if _HEX16.fullmatch(value) else None

    def _parse_sampled_state(self, value: str) -> int | None:
        if value in ("", "0"):
            return 0
        if value == "1":
            return TRACE_FLAGS_SAMPLED
        if value == "true" and not self.single_header:
            return TRACE_FLAGS_SAMPLED
        if value == "d" and self.single_header:
            return TRACE_FLAGS_SAMPLED
        return None

    @staticmethod
    def _parse_debug_flag(value: str) -> int | None:
        if value in ("", "0"):
            return 0
        if value == "1":
            return TRACE_FLAGS_SAMPLED
        return None