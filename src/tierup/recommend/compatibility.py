"""Memory-generation and power compatibility checks.

Every check is permissive: an unknown quantity counts as compatible.
"""

from typing import Any, Mapping, Optional, Tuple

from ..config.scoring_constants import DDR4_MAX_GENERATION

PowerProfiles = Mapping[Tuple[int, int], int]


def get_ram_ddr_type(ram: Optional[Mapping[str, Any]]) -> Optional[str]:
    """"DDR4"/"DDR5" from the kit's generation, else from its speed string."""
    if not ram:
        return None
    generation = ram.get("generation")
    if isinstance(generation, (int, float)) and not isinstance(generation, bool):
        return "DDR4" if generation <= DDR4_MAX_GENERATION else "DDR5"
    speed = ram.get("speed")
    if isinstance(speed, str):
        if "5," in speed or "5." in speed:
            return "DDR5"
        if "4," in speed or "4." in speed:
            return "DDR4"
    return None


def is_ram_compatible_with_cpu(
    ram: Optional[Mapping[str, Any]],
    cpu: Optional[Mapping[str, Any]],
) -> bool:
    if not ram or not cpu or not cpu.get("ramType"):
        return True
    ram_type = get_ram_ddr_type(ram)
    if not ram_type:
        return True
    return ram_type in str(cpu["ramType"])


def get_psu_recommendation(cpu_tier, gpu_tier, power_profiles: PowerProfiles) -> Optional[int]:
    """Recommended PSU watts for a tier pairing; ``None`` when not tabulated."""
    return power_profiles.get((cpu_tier, gpu_tier))
