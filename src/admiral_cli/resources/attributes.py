"""Display attributes computed from a pool's server-reported counters."""

from __future__ import annotations

import math
import re
from typing import TYPE_CHECKING

from admiral_cli.engine.errors import DecodeError

if TYPE_CHECKING:
    from admiral_cli.resources.placement_zone import ResourcePoolState

RESERVED_PREFIX = "__"
AVAILABLE_MEMORY = "__availableMemory"
CPU_USAGE = "__cpuUsage"

_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def _round2(value: float) -> float:
    # Half away from zero, not banker's rounding.
    scaled = abs(value) * 100
    if not math.isfinite(scaled):
        return value
    return math.copysign(math.floor(scaled + 0.5), value) / 100


def used_memory_percentage(pool: ResourcePoolState) -> str:
    """Share of ``max_memory_bytes`` in use, e.g. ``"75.00%"``.

    A missing ``__availableMemory`` counts as nothing available.

    Raises:
        DecodeError: The counter is present but not a 64-bit integer.
    """
    raw = pool.custom_properties.get(AVAILABLE_MEMORY)
    available = 0
    if raw is not None:
        if not _INT_RE.fullmatch(raw):
            raise DecodeError(AVAILABLE_MEMORY, f"invalid integer {raw!r}")
        available = int(raw)
        if not _INT64_MIN <= available <= _INT64_MAX:
            raise DecodeError(AVAILABLE_MEMORY, f"integer out of range {raw!r}")

    maximum = pool.max_memory_bytes
    percentage = 0.0
    if maximum != 0:
        percentage = (maximum - available) / maximum * 100
    return f"{_round2(percentage):.2f}%"


def used_cpu_percentage(pool: ResourcePoolState) -> str:
    """CPU usage reported by the server, or ``"0%"`` when unknown.

    Only plain decimal notation counts; padding, digit separators and
    non-finite values are unknown.
    """
    raw = pool.custom_properties.get(CPU_USAGE)
    if raw is None or not _FLOAT_RE.fullmatch(raw):
        return "0%"
    usage = float(raw)
    if not math.isfinite(usage):
        return "0%"
    return f"{_round2(usage):.2f}%"


def public_custom_properties(pool: ResourcePoolState) -> dict[str, str]:
    """User-visible custom properties; reserved ``__`` keys and nulls are dropped."""
    return {
        k: v
        for k, v in pool.custom_properties.items()
        if v is not None and not k.startswith(RESERVED_PREFIX)
    }
