"""Cascading selection filters for picking the user's current parts.

Every option list honours the filters chosen before it; RAM lists also drop
kits whose DDR generation the selected CPU cannot use.
"""

import difflib
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional

from ..config.rules import CPU_BRAND_HINTS, CPU_SERIES, GPU_CHIPSET_MAKER_HINTS
from ..recommend.compatibility import get_ram_ddr_type, is_ram_compatible_with_cpu
from .normalize import (
    display_module_count,
    parse_modules,
    ram_speed_mhz_label,
    ram_speed_sort_key,
)

Record = Mapping[str, Any]


def _first_word(name: Any) -> str:
    parts = str(name or "").split(" ")
    return parts[0] if parts else ""


# ── CPU ──────────────────────────────────────────────────────────────

def cpu_brand_matches(name: str, brand: Optional[str]) -> bool:
    hints = CPU_BRAND_HINTS.get(brand or "")
    if not hints:
        return True
    return any(h in name for h in hints)


def cpu_series(name: str) -> Optional[str]:
    for series in CPU_SERIES:
        if series in name:
            return series
    return None


def cpu_series_options(cpus: Iterable[Record], brand: Optional[str] = None) -> List[str]:
    found = set()
    for cpu in cpus:
        name = str(cpu.get("name", ""))
        if not cpu_brand_matches(name, brand):
            continue
        series = cpu_series(name)
        if series:
            found.add(series)
    return sorted(found)


def filter_cpus(
    cpus: Iterable[Record],
    brand: Optional[str] = None,
    series: Optional[str] = None,
) -> List[Record]:
    out = []
    for cpu in cpus:
        name = str(cpu.get("name", ""))
        if not cpu_brand_matches(name, brand):
            continue
        if series and series not in name:
            continue
        out.append(cpu)
    return out


# ── GPU ──────────────────────────────────────────────────────────────

def gpu_chipset_maker_matches(chipset: str, maker: Optional[str]) -> bool:
    hints = GPU_CHIPSET_MAKER_HINTS.get(maker or "")
    if not hints:
        return True
    return any(h in chipset for h in hints)


def gpu_chipset_options(gpus: Iterable[Record], maker: Optional[str] = None) -> List[str]:
    found = set()
    for gpu in gpus:
        chipset = str(gpu.get("chipset") or "")
        if chipset and gpu_chipset_maker_matches(chipset, maker):
            found.add(chipset)
    return sorted(found)


def gpu_card_manufacturer_options(
    gpus: Iterable[Record],
    maker: Optional[str] = None,
    chipset: Optional[str] = None,
) -> List[str]:
    found = set()
    for gpu in gpus:
        gpu_chipset = str(gpu.get("chipset") or "")
        if not gpu_chipset_maker_matches(gpu_chipset, maker):
            continue
        if chipset and gpu_chipset != chipset:
            continue
        found.add(_first_word(gpu.get("name")))
    return sorted(found)


def filter_gpus(
    gpus: Iterable[Record],
    maker: Optional[str] = None,
    chipset: Optional[str] = None,
    card_manufacturer: Optional[str] = None,
) -> List[Record]:
    out = []
    for gpu in gpus:
        gpu_chipset = str(gpu.get("chipset") or "")
        if not gpu_chipset_maker_matches(gpu_chipset, maker):
            continue
        if chipset and gpu_chipset != chipset:
            continue
        if card_manufacturer and _first_word(gpu.get("name")) != card_manufacturer:
            continue
        out.append(gpu)
    return out


# ── RAM ──────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class RamFilters:
    kit: Optional[int] = None           # stick count
    capacity: Optional[int] = None      # total GB
    ddr: Optional[str] = None           # "DDR4" / "DDR5"
    speed: Optional[str] = None         # raw catalog speed string
    manufacturer: Optional[str] = None


def _ram_passes(
    ram: Record,
    filters: RamFilters,
    cpu: Optional[Record],
    use_speed: bool = True,
    use_manufacturer: bool = True,
) -> bool:
    count, per_stick = parse_modules(ram.get("modules"))
    if count is None or per_stick is None:
        return False
    if filters.kit and count != int(filters.kit):
        return False
    if filters.capacity and count * per_stick != int(filters.capacity):
        return False
    if filters.ddr and get_ram_ddr_type(ram) != filters.ddr:
        return False
    # unknown DDR passes the CPU requirement
    if not is_ram_compatible_with_cpu(ram, cpu):
        return False
    if use_speed and filters.speed and ram.get("speed") != filters.speed:
        return False
    if use_manufacturer and filters.manufacturer \
            and _first_word(ram.get("name")) != filters.manufacturer:
        return False
    return True


def ram_kit_options(rams: Iterable[Record]) -> List[int]:
    kits = set()
    for ram in rams:
        count, _ = parse_modules(ram.get("modules"))
        if count is not None:
            kits.add(count)
    return sorted(kits)


def ram_kit_label(kit: int) -> str:
    return "Single Stick (1x)" if kit == 1 else f"{kit}x Kit"


def ram_capacity_options(
    rams: Iterable[Record],
    kit: Optional[int] = None,
    cpu: Optional[Record] = None,
) -> List[int]:
    scope = RamFilters(kit=kit)
    found = set()
    for ram in rams:
        if _ram_passes(ram, scope, cpu):
            count, per_stick = parse_modules(ram.get("modules"))
            found.add(count * per_stick)
    return sorted(found)


def ram_ddr_options(
    rams: Iterable[Record],
    kit: Optional[int] = None,
    capacity: Optional[int] = None,
    cpu: Optional[Record] = None,
) -> List[str]:
    scope = RamFilters(kit=kit, capacity=capacity)
    found = {get_ram_ddr_type(r) for r in rams if _ram_passes(r, scope, cpu)}
    return sorted(ddr for ddr in found if ddr)


def ram_speed_options(
    rams: Iterable[Record],
    filters: RamFilters = RamFilters(),
    cpu: Optional[Record] = None,
) -> List[str]:
    scope = RamFilters(kit=filters.kit, capacity=filters.capacity, ddr=filters.ddr)
    speeds = {
        r.get("speed") for r in rams
        if r.get("speed") and _ram_passes(r, scope, cpu, use_speed=False)
    }
    return sorted(speeds, key=ram_speed_sort_key)


def ram_manufacturer_options(
    rams: Iterable[Record],
    filters: RamFilters = RamFilters(),
    cpu: Optional[Record] = None,
) -> List[str]:
    found = set()
    for ram in rams:
        if not ram.get("name"):
            continue
        if _ram_passes(ram, filters, cpu, use_manufacturer=False):
            maker = _first_word(ram.get("name"))
            if maker:
                found.add(maker)
    return sorted(found)


def filter_ram(
    rams: Iterable[Record],
    filters: RamFilters = RamFilters(),
    cpu: Optional[Record] = None,
) -> List[Record]:
    """Kits passing every filter, one per (name, modules, speed, generation)."""
    unique = {}
    for ram in rams:
        if not ram.get("name") or not _ram_passes(ram, filters, cpu):
            continue
        key = (ram.get("name"), ram.get("modules"), ram.get("speed") or "", ram.get("generation"))
        unique.setdefault(key, ram)
    return list(unique.values())


# ── Labels & lookup ──────────────────────────────────────────────────

def component_label(record: Record, kind: str) -> str:
    """Text shown for a record in a selection list."""
    kind = kind.upper()
    name = str(record.get("name", ""))
    if kind == "GPU":
        return f"{name} - {record.get('chipset', '')}"
    if kind == "RAM":
        count, per_stick = parse_modules(record.get("modules"))
        if count is None or per_stick is None:
            return name
        total = count * per_stick
        shown = display_module_count(count)
        ddr = get_ram_ddr_type(record)
        speed = ram_speed_mhz_label(record.get("speed"))
        if ddr:
            speed = f"{ddr}-{speed}"
        return f"{name} - {total}GB ({shown}x{per_stick}GB) {speed}"
    return name


def find_component(catalog: Iterable[Record], query: str, kind: str = "") -> Optional[Record]:
    """Exact name, then substring, then closest fuzzy match; ``None`` if nothing fits."""
    if not query:
        return None
    catalog = list(catalog)
    q = query.strip().lower()

    for rec in catalog:
        if str(rec.get("name", "")).lower() == q:
            return rec
    for rec in catalog:
        if kind and component_label(rec, kind).lower() == q:
            return rec
    for rec in catalog:
        if q in str(rec.get("name", "")).lower():
            return rec

    names = {str(rec.get("name", "")).lower(): rec for rec in reversed(catalog)}
    matches = difflib.get_close_matches(q, list(names), n=1, cutoff=0.6)
    return names[matches[0]] if matches else None
