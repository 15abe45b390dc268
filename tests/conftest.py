"""Shared fixtures for the tierup test suite."""

import json
import sys
from pathlib import Path

import pytest

# Ensure src/ is on the path so "import tierup" works when running from repo root.
repo_root = Path(__file__).resolve().parents[1]
src_path = repo_root / "src"
for p in (src_path, repo_root):
    p_str = str(p)
    if p_str not in sys.path:
        sys.path.insert(0, p_str)

from tierup.recommend.context import Catalogs, SessionContext  # noqa: E402


# ---------------------------------------------------------------------------
# Catalog data
# ---------------------------------------------------------------------------
# CPU tiers present: 1 2 3 4 5 7 (no 6)
CPUS = [
    {"name": "AMD Ryzen 3 3100", "tier": 1, "generation": 3, "socket": "AM4",
     "core_count": 4, "boost_clock": "3.9", "tdp": 65, "ramType": "DDR4"},
    {"name": "AMD Ryzen 5 3600", "tier": 2, "generation": 3, "socket": "AM4",
     "core_count": 6, "boost_clock": "4.2", "tdp": 65, "ramType": "DDR4"},
    {"name": "AMD Ryzen 5 5600X", "tier": 3, "generation": 5, "socket": "AM4",
     "core_count": 6, "boost_clock": "4.6", "tdp": 65, "ramType": "DDR4"},
    {"name": "Intel Core i5-12400F", "tier": 3, "generation": 12, "socket": "LGA1700",
     "core_count": 6, "boost_clock": "4.4", "tdp": 65, "ramType": "DDR4/DDR5"},
    {"name": "AMD Ryzen 7 5800X3D", "tier": 4, "generation": 5, "socket": "AM4",
     "core_count": 8, "boost_clock": "4.5", "tdp": 105, "ramType": "DDR4"},
    {"name": "AMD Ryzen 5 7600", "tier": 4, "generation": 7, "socket": "AM5",
     "core_count": 6, "boost_clock": "5.1", "tdp": 65, "ramType": "DDR5"},
    {"name": "AMD Ryzen 7 7700X", "tier": 5, "generation": 7, "socket": "AM5",
     "core_count": 8, "boost_clock": "5.4", "tdp": 105, "ramType": "DDR5"},
    {"name": "Intel Core i9-14900K", "tier": 7, "generation": 14, "socket": "LGA1700",
     "core_count": 24, "boost_clock": "6.0", "tdp": 125, "ramType": "DDR4/DDR5"},
]

# GPU tiers present: 1 2 3 5 7
GPUS = [
    {"name": "MSI GeForce GTX 1650 Ventus", "tier": 1, "generation": 16,
     "chipset": "GeForce GTX 1650", "memory": 4, "boost_clock": 1665, "tdp": 75},
    {"name": "XFX Radeon RX 6600 SWFT", "tier": 2, "generation": 6,
     "chipset": "Radeon RX 6600", "memory": 8, "boost_clock": 2491, "tdp": 132},
    {"name": "ASUS Dual GeForce RTX 3060", "tier": 3, "generation": 30,
     "chipset": "GeForce RTX 3060 12GB", "memory": 12, "boost_clock": 1867, "tdp": 170},
    {"name": "Zotac GeForce RTX 4060 Twin Edge", "tier": 3, "generation": 40,
     "chipset": "GeForce RTX 4060", "memory": 8, "boost_clock": 2460, "tdp": 115},
    {"name": "ASUS Dual GeForce RTX 4070", "tier": 5, "generation": 40,
     "chipset": "GeForce RTX 4070", "memory": 12, "boost_clock": 2550, "tdp": 200},
    {"name": "Gigabyte GeForce RTX 4090", "tier": 7, "generation": 40,
     "chipset": "GeForce RTX 4090", "memory": 24, "boost_clock": 2535, "tdp": 450},
]

# RAM tiers present: 1 2 3 4 5 7; tier 5 lists the Flare X5 kit twice
RAMS = [
    {"name": "Crucial 8 GB", "tier": 1, "generation": 8,
     "modules": "1,8", "speed": "4,2666", "cas_latency": 22},
    {"name": "Corsair Vengeance LPX 16 GB", "tier": 2, "generation": 8,
     "modules": "2,8", "speed": "4,3200", "cas_latency": 16},
    {"name": "Kingston FURY Beast 32 GB", "tier": 3, "generation": 9,
     "modules": "2,16", "speed": "4,3600", "cas_latency": 18},
    {"name": "Corsair Vengeance RGB 32 GB", "tier": 4, "generation": 9,
     "modules": "2,16", "speed": "4,3600", "cas_latency": 16},
    {"name": "G.Skill Flare X5 32 GB", "tier": 5, "generation": 10,
     "modules": "2,16", "speed": "5,6000", "cas_latency": 36},
    {"name": "G.Skill Flare X5 32 GB", "tier": 5, "generation": 10,
     "modules": "2,16", "speed": "5,6000", "cas_latency": 30},
    {"name": "Kingston FURY Beast 32 GB DDR5", "tier": 5, "generation": 10,
     "modules": "2,16", "speed": "5,5600", "cas_latency": 36},
    {"name": "G.Skill Trident Z5 64 GB", "tier": 7, "generation": 10,
     "modules": "2,32", "speed": "5,6400", "cas_latency": 32},
]


def rising_power_table():
    """PSU need grows with both tiers, so every GPU tier jump needs a PSU."""
    return {(c, g): 400 + 50 * g + 25 * c for c in range(1, 8) for g in range(1, 8)}


def by_name(records, name):
    for rec in records:
        if rec.get("name") == name:
            return rec
    raise LookupError(name)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def cpus():
    return [dict(c) for c in CPUS]


@pytest.fixture
def gpus():
    return [dict(g) for g in GPUS]


@pytest.fixture
def rams():
    return [dict(r) for r in RAMS]


@pytest.fixture
def power_table():
    return rising_power_table()


@pytest.fixture
def catalogs(power_table):
    return Catalogs.from_records(CPUS, GPUS, RAMS, power_table)


@pytest.fixture
def context(catalogs):
    """Session with no selection and default preferences (1 tier, simple effort)."""
    return SessionContext(catalogs)


@pytest.fixture
def pick(catalogs):
    """Look a record up by exact name in the frozen catalogs."""
    def _pick(kind, name):
        return by_name(catalogs.for_kind(kind), name)
    return _pick


@pytest.fixture
def cpu_bottleneck_context(context, pick):
    """Ryzen 3 (tier 1) + RTX 4070 (tier 5) + DDR4 32GB (tier 4)."""
    return context.with_selection(
        cpu=pick("CPU", "AMD Ryzen 3 3100"),
        gpu=pick("GPU", "ASUS Dual GeForce RTX 4070"),
        ram=pick("RAM", "Corsair Vengeance RGB 32 GB"),
    )


@pytest.fixture
def data_dir(tmp_path, power_table):
    """A catalog directory in the on-disk JSON layout."""
    (tmp_path / "cpuSorted.json").write_text(json.dumps(CPUS), encoding="utf-8")
    (tmp_path / "gpuSorted.json").write_text(json.dumps(GPUS), encoding="utf-8")
    (tmp_path / "ramSorted.json").write_text(json.dumps(RAMS), encoding="utf-8")
    profiles = [
        {"cpuTier": c, "gpuTier": g, "recommendedPsu": w}
        for (c, g), w in power_table.items()
    ]
    (tmp_path / "powerProfiles.json").write_text(json.dumps(profiles), encoding="utf-8")
    return tmp_path
