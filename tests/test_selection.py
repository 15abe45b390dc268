"""Unit tests for tierup.processing.selection: cascading part filters and lookup."""

import pytest

from tierup.processing.selection import (
    RamFilters,
    component_label,
    cpu_series,
    cpu_series_options,
    filter_cpus,
    filter_gpus,
    filter_ram,
    find_component,
    gpu_card_manufacturer_options,
    gpu_chipset_options,
    ram_capacity_options,
    ram_ddr_options,
    ram_kit_label,
    ram_kit_options,
    ram_manufacturer_options,
    ram_speed_options,
)


def _names(records):
    return [r["name"] for r in records]


# ============================================================================
# CPU
# ============================================================================
class TestCpuFilters:
    def test_series(self):
        assert cpu_series("AMD Ryzen 7 5800X3D") == "Ryzen 7"
        assert cpu_series("Intel Core i9-14900K") == "Core i9"
        assert cpu_series("Pentium Gold") is None

    def test_series_options_by_brand(self, cpus):
        assert cpu_series_options(cpus, "Intel") == ["Core i5", "Core i9"]
        assert cpu_series_options(cpus, "AMD") == ["Ryzen 3", "Ryzen 5", "Ryzen 7"]

    def test_filter_brand_and_series(self, cpus):
        assert _names(filter_cpus(cpus, "AMD", "Ryzen 7")) == ["AMD Ryzen 7 5800X3D", "AMD Ryzen 7 7700X"]
        assert len(filter_cpus(cpus)) == len(cpus)


# ============================================================================
# GPU
# ============================================================================
class TestGpuFilters:
    def test_chipset_options(self, gpus):
        assert gpu_chipset_options(gpus, "AMD") == ["Radeon RX 6600"]
        assert "GeForce RTX 4090" in gpu_chipset_options(gpus, "NVIDIA")
        assert "Radeon RX 6600" not in gpu_chipset_options(gpus, "NVIDIA")

    def test_card_manufacturers(self, gpus):
        assert gpu_card_manufacturer_options(gpus, "NVIDIA") == ["ASUS", "Gigabyte", "MSI", "Zotac"]
        assert gpu_card_manufacturer_options(gpus, chipset="GeForce RTX 4070") == ["ASUS"]

    def test_filter(self, gpus):
        assert _names(filter_gpus(gpus, "NVIDIA", card_manufacturer="ASUS")) == [
            "ASUS Dual GeForce RTX 3060",
            "ASUS Dual GeForce RTX 4070",
        ]
        assert _names(filter_gpus(gpus, chipset="Radeon RX 6600")) == ["XFX Radeon RX 6600 SWFT"]


# ============================================================================
# RAM
# ============================================================================
class TestRamFilters:
    DDR4_CPU = {"name": "AMD Ryzen 5 5600X", "ramType": "DDR4"}
    DDR5_CPU = {"name": "AMD Ryzen 5 7600", "ramType": "DDR5"}

    MYSTERY = {"name": "Mystery 16 GB", "modules": "2,8", "speed": "3200"}

    def test_ddr_from_speed_without_generation(self):
        ram = {"name": "Kit", "modules": "2,16", "speed": "5,6000"}
        assert ram_ddr_options([ram]) == ["DDR5"]
        assert filter_ram([ram], cpu=self.DDR4_CPU) == []

    def test_unknown_ddr_passes_cpu_requirement(self):
        assert filter_ram([self.MYSTERY], cpu=self.DDR5_CPU) == [self.MYSTERY]
        assert filter_ram([self.MYSTERY], cpu=self.DDR4_CPU) == [self.MYSTERY]

    def test_unknown_ddr_not_offered(self):
        assert ram_ddr_options([self.MYSTERY]) == []
        assert filter_ram([self.MYSTERY], RamFilters(ddr="DDR4")) == []

    def test_kit_options(self, rams):
        assert ram_kit_options(rams) == [1, 2]
        assert ram_kit_label(1) == "Single Stick (1x)"
        assert ram_kit_label(2) == "2x Kit"

    def test_capacity_options_follow_cpu(self, rams):
        assert ram_capacity_options(rams, kit=2) == [16, 32, 64]
        assert ram_capacity_options(rams, kit=2, cpu=self.DDR5_CPU) == [32, 64]

    def test_ddr_options(self, rams):
        assert ram_ddr_options(rams) == ["DDR4", "DDR5"]
        assert ram_ddr_options(rams, cpu=self.DDR4_CPU) == ["DDR4"]
        assert ram_ddr_options(rams, capacity=64) == ["DDR5"]

    def test_speed_options_sorted_by_mhz(self, rams):
        assert ram_speed_options(rams, RamFilters(ddr="DDR5")) == ["5,5600", "5,6000", "5,6400"]

    def test_manufacturer_options(self, rams):
        filters = RamFilters(capacity=32, ddr="DDR4")
        assert ram_manufacturer_options(rams, filters) == ["Corsair", "Kingston"]

    def test_filter_ram_dedupes_identical_listings(self, rams):
        found = filter_ram(rams, RamFilters(speed="5,6000"))
        assert _names(found) == ["G.Skill Flare X5 32 GB"]

    def test_filter_ram_drops_incompatible(self, rams):
        found = filter_ram(rams, cpu=self.DDR4_CPU)
        assert all(r["generation"] <= 9 for r in found)
        assert len(found) == 4

    def test_unparseable_modules_excluded(self):
        assert filter_ram([{"name": "Odd", "modules": "", "speed": "4,3200"}]) == []


# ============================================================================
# labels and lookup
# ============================================================================
class TestComponentLabel:
    def test_ram(self, rams):
        assert component_label(rams[1], "RAM") == "Corsair Vengeance LPX 16 GB - 16GB (2x8GB) DDR4-3200"

    def test_eight_stick_ram(self):
        ram = {"name": "Big kit 128 GB", "modules": "8,16", "speed": "5,6000", "generation": 10}
        assert component_label(ram, "RAM") == "Big kit 128 GB - 128GB (4x16GB) DDR5-6000"

    def test_ram_unknown_ddr(self):
        ram = {"name": "Mystery 16 GB", "modules": "2,8", "speed": "3200"}
        assert component_label(ram, "RAM") == "Mystery 16 GB - 16GB (2x8GB) 3200"

    def test_gpu(self, gpus):
        assert component_label(gpus[4], "GPU") == "ASUS Dual GeForce RTX 4070 - GeForce RTX 4070"

    def test_cpu(self, cpus):
        assert component_label(cpus[0], "cpu") == "AMD Ryzen 3 3100"


class TestFindComponent:
    def test_exact_case_insensitive(self, cpus):
        assert find_component(cpus, "amd ryzen 5 3600")["tier"] == 2

    def test_label(self, rams):
        found = find_component(rams, "Corsair Vengeance LPX 16 GB - 16GB (2x8GB) DDR4-3200", "RAM")
        assert found["name"] == "Corsair Vengeance LPX 16 GB"

    def test_substring(self, gpus):
        assert find_component(gpus, "RTX 4090")["name"] == "Gigabyte GeForce RTX 4090"

    def test_fuzzy(self, cpus):
        assert find_component(cpus, "AMD Ryzen 5 5600XT")["name"] == "AMD Ryzen 5 5600X"

    @pytest.mark.parametrize("query", ["", "Pentium 4 HT"])
    def test_no_match(self, cpus, query):
        assert find_component(cpus, query) is None
