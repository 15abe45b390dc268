"""Display-tier mapping and target-tier selection."""

from typing import Any, Iterable, List, Mapping, Optional, Union

from ..config.rules import ADVANCEMENT_MAX, ADVANCEMENT_OPTIONS, TIER_MAPPINGS
from ..processing.normalize import parse_int

Advancement = Union[int, str]


def display_tier(component: Mapping[str, Any], kind: str):
    """Display tier of ``component``; the raw tier when it is not mapped."""
    raw = component.get("tier")
    mapping = TIER_MAPPINGS.get(kind.lower())
    if not mapping:
        return raw
    return mapping.get(raw, raw)


def original_tier(tier, kind: str):
    """Invert the mapping: exact match first, otherwise the closest value."""
    mapping = TIER_MAPPINGS.get(kind.lower())
    if not mapping:
        return tier

    for raw, mapped in mapping.items():
        if mapped == tier:
            return raw

    closest = None
    min_diff = float("inf")
    for raw, mapped in mapping.items():
        diff = abs(mapped - tier)
        if diff < min_diff:
            min_diff = diff
            closest = raw
    return closest


def available_tiers(catalog: Iterable[Mapping[str, Any]], kind: str) -> List:
    tiers = {display_tier(c, kind) for c in catalog}
    return sorted(t for t in tiers if t is not None)


def max_display_tier(catalog: Iterable[Mapping[str, Any]], kind: str):
    tiers = available_tiers(catalog, kind)
    return tiers[-1] if tiers else None


def normalize_advancement(value: Any) -> Advancement:
    """Coerce UI input ("2", 2, "MAX") to ``1|2|3|"max"``; raise ``ValueError`` otherwise."""
    if isinstance(value, str) and value.strip().lower() == ADVANCEMENT_MAX:
        return ADVANCEMENT_MAX
    num = None if isinstance(value, bool) else parse_int(value)
    if num is None or str(value).strip() != str(num):
        raise ValueError(f"Invalid advancement {value!r}; expected one of {ADVANCEMENT_OPTIONS}")
    if num < 1:
        raise ValueError(f"Advancement must be a positive step count, got {num}")
    return num


def next_available_tier(
    current_tier,
    kind: str,
    advancement: Advancement,
    catalog: Iterable[Mapping[str, Any]],
) -> Optional[int]:
    """Tier ``advancement`` steps above ``current_tier`` among the catalog's tiers.

    ``"max"`` jumps to the highest tier. Steps past the top clamp to it.
    """
    tiers = available_tiers(catalog, kind)
    if not tiers:
        return None

    if advancement == ADVANCEMENT_MAX:
        return tiers[-1]

    steps = normalize_advancement(advancement)
    current_index = next((i for i, t in enumerate(tiers) if t >= current_tier), None)
    if current_index is None:
        return tiers[0]

    target_index = min(current_index + steps, len(tiers) - 1)
    return tiers[target_index]
