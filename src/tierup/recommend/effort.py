"""Upgrade effort: which companion parts a candidate drags along."""

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional

from ..config.rules import DEFAULT_EFFORT, EFFORT_LEVELS, EFFORT_RANKS
from .compatibility import PowerProfiles, get_psu_recommendation, is_ram_compatible_with_cpu


@dataclass
class UpgradeEffort:
    required_level: str = DEFAULT_EFFORT
    required_parts: List[str] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)


def get_effort_rank(level: Optional[str]) -> int:
    # unknown levels rank as "simple"
    return EFFORT_RANKS.get(level, EFFORT_RANKS["simple"])


def is_effort_allowed(required_level: str, selected_level: str) -> bool:
    if selected_level == "any":
        return True
    return get_effort_rank(required_level) <= get_effort_rank(selected_level)


def normalize_effort(value: Any) -> str:
    """Lower-cased effort level; ``ValueError`` for anything outside ``EFFORT_LEVELS``."""
    level = str(value or DEFAULT_EFFORT).strip().lower()
    if level not in EFFORT_LEVELS:
        raise ValueError(f"Invalid effort level {value!r}; expected one of {EFFORT_LEVELS}")
    return level


def cpu_upgrade_effort(product: Mapping[str, Any], selection) -> UpgradeEffort:
    effort = UpgradeEffort()
    current = selection.cpu
    if current and product.get("socket") and current.get("socket") \
            and product["socket"] != current["socket"]:
        effort.required_parts.append("Motherboard")
    if selection.ram and product.get("ramType") \
            and not is_ram_compatible_with_cpu(selection.ram, product):
        effort.required_parts.append("RAM")
    if effort.required_parts:
        effort.required_level = "complex"
    return effort


def ram_upgrade_effort(product: Mapping[str, Any], selection) -> UpgradeEffort:
    effort = UpgradeEffort()
    if selection.cpu and not is_ram_compatible_with_cpu(product, selection.cpu):
        effort.required_parts.append("CPU/Motherboard")
        effort.required_level = "complex"
    return effort


def gpu_upgrade_effort(
    product: Mapping[str, Any],
    selection,
    power_profiles: PowerProfiles,
) -> UpgradeEffort:
    effort = UpgradeEffort()
    if not (selection.cpu and selection.gpu):
        return effort

    cpu_tier = selection.cpu.get("tier")
    current_psu = get_psu_recommendation(cpu_tier, selection.gpu.get("tier"), power_profiles)
    target_psu = get_psu_recommendation(cpu_tier, product.get("tier"), power_profiles)
    if current_psu and target_psu and target_psu > current_psu:
        effort.required_parts.append("PSU")
        effort.required_level = "moderate"
        effort.notes.append(
            f"Estimated PSU need: {target_psu}W (current estimate: {current_psu}W)"
        )
    elif not current_psu or not target_psu:
        effort.notes.append("PSU check required for this upgrade")
    return effort


def get_upgrade_effort(
    kind: str,
    product: Mapping[str, Any],
    selection,
    power_profiles: Optional[PowerProfiles] = None,
) -> UpgradeEffort:
    """Effort needed to swap the selected ``kind`` part for ``product``."""
    from .components import get_kind

    return get_kind(kind).upgrade_effort(product, selection, power_profiles or {})
