"""Budget-per-capita policy simulation."""

from __future__ import annotations

import math
import re

DEFAULT_MULTIPLIER = 1.0

MULTIPLIERS: dict[str, float] = {
    "economic-equity": 1.2,
    "public-health": 1.5,
    "disaster-preparedness": 0.9,
}

# Decimal literals as written in JSON or a form field: no underscores,
# no "inf"/"nan" words, only the spelled-out "Infinity".
_DECIMAL = re.compile(r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_RADIX = re.compile(r"0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+")


def multiplier_for(policy_category: object) -> float:
    """Efficiency multiplier for a category; unknown or missing -> 1.0."""
    if not isinstance(policy_category, str):
        return DEFAULT_MULTIPLIER
    return MULTIPLIERS.get(policy_category, DEFAULT_MULTIPLIER)


def _int_to_float(value: int) -> float:
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def _str_to_float(value: str) -> float:
    stripped = value.strip()
    if not stripped:
        return 0.0
    if _DECIMAL.fullmatch(stripped):
        return float(stripped.replace("Infinity", "inf"))
    if _RADIX.fullmatch(stripped):
        return _int_to_float(int(stripped, 0))
    return math.nan


def to_number(value: object) -> float:
    """Coerce a loosely-typed JSON value to float, ``nan`` when it isn't one.

    Integers beyond float range become ``inf``/``-inf``.
    """
    if value is None:
        return math.nan
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, int):
        return _int_to_float(value)
    if isinstance(value, float):
        return value
    if isinstance(value, str):
        return _str_to_float(value)
    return math.nan


def to_text(value: object) -> str:
    """Render a JSON value the way it reads in a message."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def ieee_divide(numerator: float, denominator: float) -> float:
    """Float division that yields inf/nan for a zero denominator."""
    if denominator == 0:
        if math.isnan(numerator) or numerator == 0:
            return math.nan
        # a negative zero denominator flips the sign
        sign = math.copysign(1.0, numerator) * math.copysign(1.0, denominator)
        return math.copysign(math.inf, sign)
    return numerator / denominator


def simulate(budget: object, target_population: object, policy_category: object) -> float:
    """``(budget / target_population) * multiplier(policy_category)``.

    No input is validated: missing or non-numeric values give ``nan`` and a
    zero population gives ``inf``/``-inf``/``nan``.
    """
    per_capita = ieee_divide(to_number(budget), to_number(target_population))
    return per_capita * multiplier_for(policy_category)
