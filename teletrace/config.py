"""Global tracing configuration."""

from __future__ import annotations

import dataclasses
import threading
from dataclasses import dataclass

from teletrace.core import IDGenerator
from teletrace.id_generator import DefaultIDGenerator
from teletrace.sampling import DEFAULT_SAMPLING_PROBABILITY, Sampler, probability_sampler

DEFAULT_MAX_EVENTS_PER_SPAN = 128
DEFAULT_MAX_ATTRIBUTES_PER_SPAN = 32
DEFAULT_MAX_LINKS_PER_SPAN = 32


@dataclass(frozen=True)
class Config:
    """Tracing settings; unset fields leave the global value alone when applied."""

    default_sampler: Sampler | None = None
    id_generator: IDGenerator | None = None
    max_events_per_span: int = 0
    max_attributes_per_span: int = 0
    max_links_per_span: int = 0


_lock = threading.Lock()
_config = Config(
    default_sampler=probability_sampler(DEFAULT_SAMPLING_PROBABILITY),
    id_generator=DefaultIDGenerator(),
    max_events_per_span=DEFAULT_MAX_EVENTS_PER_SPAN,
    max_attributes_per_span=DEFAULT_MAX_ATTRIBUTES_PER_SPAN,
    max_links_per_span=DEFAULT_MAX_LINKS_PER_SPAN,
)


def current_config() -> Config:
    """Return the configuration in effect."""
    return _config


def apply_config(cfg: Config) -> None:
    """Merge the set fields of ``cfg`` into the global configuration."""
    global _config
    with _lock:
        changes: dict[str, object] = {}
        if cfg.default_sampler is not None:
            changes["default_sampler"] = cfg.default_sampler
        if cfg.id_generator is not None:
            changes["id_generator"] = cfg.id_generator
        if cfg.max_events_per_span > 0:
            changes["max_events_per_span"] = cfg.max_events_per_span
        if cfg.max_attributes_per_span > 0:
            changes["max_attributes_per_span"] = cfg.max_attributes_per_span
        if cfg.max_links_per_span > 0:
            changes["max_links_per_span"] = cfg.max_links_per_span
        _config = dataclasses.replace(_config, **changes)