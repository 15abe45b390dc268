"""Parsing helpers for catalog fields (clocks, speeds, module strings)."""

import re
from typing import Any, Optional, Tuple

import numpy as np

from ..config.scoring_constants import MAX_MOTHERBOARD_SLOTS, RAM_CAPACITY_PATTERN

_CAPACITY_RE = re.compile(RAM_CAPACITY_PATTERN)
_LEADING_FLOAT_RE = re.compile(r"^\s*[-+]?(\d+(\.\d*)?|\.\d+)")
_LEADING_INT_RE = re.compile(r"^\s*[-+]?\d+")


def safe_num(value: Any, default: float) -> float:
    """Return ``value`` as a float, or ``default`` when missing/invalid/NaN."""
    if value is None or isinstance(value, bool):
        return default
    try:
        num = float(value)
    except (TypeError, ValueError):
        return default
    if np.isnan(num):
        return default
    return num


def parse_float(value: Any) -> Optional[float]:
    """Leading decimal number of a numeric-as-text field ("4.6 GHz" -> 4.6)."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return None if np.isnan(value) else float(value)
    m = _LEADING_FLOAT_RE.match(str(value))
    if not m:
        return None
    return float(m.group(0))


def parse_int(value: Any) -> Optional[int]:
    """Leading integer of a field, ``None`` when there is none."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return None if np.isnan(value) else int(value)
    m = _LEADING_INT_RE.match(str(value))
    if not m:
        return None
    return int(m.group(0))


def parse_digits(value: Any) -> Optional[int]:
    """All digit characters of ``value`` joined into one integer.

    "5,6000" -> 56000. ``None`` when no digit is present.
    """
    if value is None:
        return None
    digits = re.sub(r"[^0-9]", "", str(value))
    if not digits:
        return None
    return int(digits)


def parse_capacity_from_name(name: Any) -> Optional[int]:
    """First "<digits> GB" figure in a product name."""
    if not name:
        return None
    m = _CAPACITY_RE.search(str(name))
    return int(m.group(1)) if m else None


def parse_modules(modules: Any) -> Tuple[Optional[int], Optional[int]]:
    """``"2,16"`` -> ``(2, 16)``; unparseable parts come back as ``None``."""
    if not modules:
        return None, None
    parts = str(modules).split(",")
    count = parse_int(parts[0])
    per_stick = parse_int(parts[1]) if len(parts) > 1 else None
    return count, per_stick


def ram_total_capacity(modules: Any) -> Optional[int]:
    count, per_stick = parse_modules(modules)
    if count is None or per_stick is None:
        return None
    return count * per_stick


def display_module_count(count: Optional[int]) -> Optional[int]:
    # 8-stick kits only ever populate the board's four slots
    if count == 8:
        return MAX_MOTHERBOARD_SLOTS
    return count


def ram_speed_mhz_label(speed: Any) -> str:
    """MHz part of a catalog speed string ("5,6000" -> "6000")."""
    if not speed:
        return "N/A"
    parts = str(speed).split(",")
    return parts[1].strip() if len(parts) > 1 else parts[0].strip()


def ram_speed_sort_key(speed: Any) -> int:
    label = ram_speed_mhz_label(speed)
    num = parse_int(label)
    return num if num is not None else 0
