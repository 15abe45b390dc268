"""One variant per component kind behind a shared interface.

Every kind knows its catalog, how to score and tier a record, what effort an
upgrade takes, which warnings to show, and how to describe a record.
"""

from typing import Any, Dict, List, Mapping, Optional

from ..config.scoring_constants import HIGH_POWER_PSU_WATTS
from ..processing.normalize import display_module_count, parse_float, parse_modules
from .compatibility import (
    PowerProfiles,
    get_psu_recommendation,
    get_ram_ddr_type,
    is_ram_compatible_with_cpu,
)
from .effort import UpgradeEffort, cpu_upgrade_effort, gpu_upgrade_effort, ram_upgrade_effort
from .scoring import calculate_score
from .tiers import display_tier


class ComponentKind:
    name = ""
    key = ""
    plural = ""
    # RAM catalogs list the same kit several times
    dedupe_names = False

    def catalog(self, catalogs):
        return catalogs.for_kind(self.name)

    def selected(self, selection) -> Optional[Mapping[str, Any]]:
        return selection.get(self.name)

    def display_tier(self, component: Mapping[str, Any]):
        return display_tier(component, self.key)

    def score(self, component: Mapping[str, Any], catalogs) -> float:
        return calculate_score(component, self.name, bounds=catalogs.bounds[self.name])

    def is_compatible(self, product: Mapping[str, Any], selection) -> bool:
        return True

    def upgrade_effort(self, product, selection, power_profiles: PowerProfiles) -> UpgradeEffort:
        return UpgradeEffort()

    def product_warnings(self, product, selection, power_profiles: PowerProfiles) -> List[str]:
        return []

    def describe(self, component: Mapping[str, Any]) -> str:
        return str(component.get("name", ""))

    def specs(self, component: Mapping[str, Any]) -> Dict[str, str]:
        return {}

    def __repr__(self):
        return f"<{type(self).__name__} {self.name}>"


class CpuKind(ComponentKind):
    name = "CPU"
    key = "cpu"
    plural = "CPUs"

    def is_compatible(self, product, selection) -> bool:
        return is_ram_compatible_with_cpu(selection.ram, product)

    def upgrade_effort(self, product, selection, power_profiles):
        return cpu_upgrade_effort(product, selection)

    def product_warnings(self, product, selection, power_profiles):
        warnings = []
        if selection.ram and not self.is_compatible(product, selection):
            warnings.append(
                f"Compatibility Issue: This CPU requires {product['ramType']} RAM, "
                f"but you selected {get_ram_ddr_type(selection.ram)}"
            )
        current = selection.cpu
        if current and product.get("socket") and current.get("socket") \
                and product["socket"] != current["socket"]:
            warnings.append(
                f"Socket Mismatch: Requires a {product['socket']} motherboard "
                f"(current CPU is {current['socket']})."
            )
        return warnings

    def describe(self, component):
        boost = parse_float(component.get("boost_clock")) or 0.0
        return f"{component.get('core_count', '?')} cores | {boost:.2f} GHz"

    def specs(self, component):
        boost = parse_float(component.get("boost_clock")) or 0.0
        return {
            "Socket": str(component.get("socket", "N/A")),
            "Cores": str(component.get("core_count", "N/A")),
            "Boost Clock": f"{boost:.2f} GHz",
            "TDP": f"{component.get('tdp', 'N/A')}W",
        }


class GpuKind(ComponentKind):
    name = "GPU"
    key = "gpu"
    plural = "GPUs"

    def upgrade_effort(self, product, selection, power_profiles):
        return gpu_upgrade_effort(product, selection, power_profiles)

    def product_warnings(self, product, selection, power_profiles):
        if not (selection.cpu and selection.gpu):
            return []
        cpu_tier = selection.cpu.get("tier")
        current_psu = get_psu_recommendation(cpu_tier, selection.gpu.get("tier"), power_profiles)
        target_psu = get_psu_recommendation(cpu_tier, product.get("tier"), power_profiles)
        if current_psu and target_psu and target_psu > current_psu:
            return [
                f"PSU Upgrade Likely: Estimated PSU need {target_psu}W "
                f"(current estimate {current_psu}W)"
            ]
        if target_psu and target_psu >= HIGH_POWER_PSU_WATTS:
            return [f"High Power Requirement: Estimated PSU need {target_psu}W"]
        return []

    def describe(self, component):
        return f"{component.get('memory', '?')}GB VRAM | {component.get('chipset', '')}"

    def specs(self, component):
        return {
            "Chipset": str(component.get("chipset", "N/A")),
            "VRAM": f"{component.get('memory', 'N/A')}GB",
            "Boost Clock": f"{component.get('boost_clock', 'N/A')} MHz",
            "TDP": f"{component.get('tdp', 'N/A')}W",
        }


class RamKind(ComponentKind):
    name = "RAM"
    key = "ram"
    plural = "RAM"
    dedupe_names = True

    def is_compatible(self, product, selection) -> bool:
        return is_ram_compatible_with_cpu(product, selection.cpu)

    def upgrade_effort(self, product, selection, power_profiles):
        return ram_upgrade_effort(product, selection)

    def product_warnings(self, product, selection, power_profiles):
        if not self.is_compatible(product, selection):
            return [
                "Compatibility Issue: This RAM is not compatible with your "
                f"selected CPU ({selection.cpu.get('ramType')})."
            ]
        return []

    def describe(self, component):
        count, per_stick = parse_modules(component.get("modules"))
        count = display_module_count(count)
        return f"{component.get('speed', 'N/A')} | {count}x{per_stick}GB"

    def specs(self, component):
        return {
            "Speed": str(component.get("speed", "N/A")),
            "Modules": str(component.get("modules", "N/A")),
            "Latency": f"CAS {component.get('cas_latency', 'N/A')}",
        }


KINDS = {
    "CPU": CpuKind(),
    "GPU": GpuKind(),
    "RAM": RamKind(),
}


def get_kind(kind) -> ComponentKind:
    if isinstance(kind, ComponentKind):
        return kind
    try:
        return KINDS[str(kind).upper()]
    except KeyError:
        raise KeyError(f"Unknown component kind: {kind!r}") from None
