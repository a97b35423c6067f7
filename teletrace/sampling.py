"""Samplers that decide whether a trace is recorded and exported."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from teletrace.core import SpanContext

DEFAULT_SAMPLING_PROBABILITY = 1e-4


@dataclass(frozen=True)
class SamplingParameters:
    """The values handed to a sampler."""

    parent_context: SpanContext = field(default_factory=SpanContext)
    trace_id: int = 0
    span_id: int = 0
    name: str = ""
    has_remote_parent: bool = False


@dataclass(frozen=True)
class SamplingDecision:
    """What a sampler returns."""

    sample: bool


Sampler = Callable[[SamplingParameters], SamplingDecision]


def probability_sampler(fraction: float) -> Sampler:
    """Sample the given fraction of traces, and every span whose parent is sampled."""
    if not fraction >= 0:
        fraction = 0.0
    elif fraction >= 1:
        return always_sample()

    upper_bound = int(fraction * (1 << 63))

    def sampler(params: SamplingParameters) -> SamplingDecision:
        if params.parent_context.is_sampled():
            return SamplingDecision(sample=True)
        high = (params.trace_id >> 64) & 0xFFFFFFFFFFFFFFFF
        return SamplingDecision(sample=(high >> 1) < upper_bound)

    return sampler


def always_sample() -> Sampler:
    """Sample every trace."""

    def sampler(params: SamplingParameters) -> SamplingDecision:
        return SamplingDecision(sample=True)

    return sampler


def never_sample() -> Sampler:
    """Sample no traces."""

    def sampler(params: SamplingParameters) -> SamplingDecision:
        return SamplingDecision(sample=False)

    return sampler