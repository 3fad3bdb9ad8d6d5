import math
import re

LEADING_FLOAT_RX = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")
LEADING_INT_RX = re.compile(r"^\s*([+-]?\d+)")


def leading_float(s) -> float | None:
    """Read the number at the start of ``s`` ("-2.50D" -> -2.5), or None."""
    if s is None:
        return None
    m = LEADING_FLOAT_RX.match(str(s))
    if not m:
        return None
    value = float(m.group(1))
    if math.isnan(value) or math.isinf(value):
        return None
    return value


def leading_int(s) -> int | None:
    if s is None:
        return None
    m = LEADING_INT_RX.match(str(s))
    if not m:
        return None
    return int(m.group(1))


def normalize_or_zero(value) -> float:
    """
    Coerce a raw prescription entry to diopters.

    Unset ("" / None) and unreadable entries become 0.0, so an empty SPH field
    is matched exactly like a measured plano SPH.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        v = float(value)
        return 0.0 if math.isnan(v) or math.isinf(v) else v
    v = leading_float(value)
    return 0.0 if v is None else v


def normalize_axis_or_zero(value) -> int:
    """Same policy as normalize_or_zero, truncated to whole degrees."""
    return int(normalize_or_zero(value))


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def format_power(value: float) -> str:
    """Two-decimal signed diopter label, e.g. +1.25 / -0.50."""
    value = 0.0 if abs(value) < 0.005 else value
    return f"{value:+.2f}"
