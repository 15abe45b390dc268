"""Bottleneck detection over display tiers."""

from typing import Dict, List, Optional

from ..config.rules import RAM_GOOD_ENOUGH_TIER


def is_ram_sufficient(ram_tier) -> bool:
    return ram_tier >= RAM_GOOD_ENOUGH_TIER


def detect_bottleneck(cpu_tier, gpu_tier, ram_tier) -> Optional[str]:
    """Name of the limiting component ("CPU", "GPU", "RAM") or ``None`` when balanced.

    RAM at or above ``RAM_GOOD_ENOUGH_TIER`` is left out of the comparison.
    On a shared minimum CPU wins over GPU, GPU over RAM.
    """
    if is_ram_sufficient(ram_tier):
        min_tier = min(cpu_tier, gpu_tier)
        if cpu_tier == min_tier and cpu_tier < gpu_tier:
            return "CPU"
        if gpu_tier == min_tier and gpu_tier < cpu_tier:
            return "GPU"
        return None

    min_tier = min(cpu_tier, gpu_tier, ram_tier)
    if cpu_tier == min_tier and (cpu_tier < gpu_tier or cpu_tier < ram_tier):
        return "CPU"
    if gpu_tier == min_tier and (gpu_tier < cpu_tier or gpu_tier < ram_tier):
        return "GPU"
    if ram_tier == min_tier and (ram_tier < cpu_tier or ram_tier < gpu_tier):
        return "RAM"
    return None


def summarize_balance(tiers: Dict[str, int]) -> Dict[str, object]:
    """Display summary: whether all tiers match, and which parts sit lowest."""
    values = list(tiers.values())
    lowest, highest = min(values), max(values)
    is_balanced = lowest == highest
    underpowered: List[str] = [] if is_balanced else [n for n, t in tiers.items() if t == lowest]
    return {
        "is_balanced": is_balanced,
        "min_tier": lowest,
        "max_tier": highest,
        "underpowered": underpowered,
    }
