"""Shared helpers for the synthetic generators: random sources and numeric coercion."""

from __future__ import annotations

import math
from typing import Any, Union

import numpy as np

RandomSource = Union[np.random.Generator, int, None]


def resolve_rng(source: RandomSource = None) -> np.random.Generator:
    """Return a ``numpy`` generator for ``source``.

    ``None`` yields a freshly seeded (non-reproducible) generator, an ``int`` is used as
    a seed, and an existing ``Generator`` is passed through so callers can share one
    stream across several generation steps.
    """

    if isinstance(source, np.random.Generator):
        return source
    return np.random.default_rng(source)


def coerce_float(value: Any) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, np.integer, np.floating)):
        numeric = float(value)
    elif isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return None
        try:
            numeric = float(stripped)
        except ValueError:
            return None
    else:
        return None

    if math.isnan(numeric) or math.isinf(numeric):
        return None
    return numeric


__all__ = ["RandomSource", "coerce_float", "resolve_rng"]
