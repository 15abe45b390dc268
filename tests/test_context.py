"""Unit tests for tierup.recommend.context and the per-kind dispatch."""

import pytest

from conftest import CPUS, GPUS, RAMS
from tierup.errors import CatalogError
from tierup.recommend.components import KINDS, CpuKind, RamKind, get_kind
from tierup.recommend.context import Catalogs, Selection, SessionContext, build_power_table


class TestBuildPowerTable:
    def test_from_profile_list(self):
        table = build_power_table([
            {"cpuTier": 1, "gpuTier": 2, "recommendedPsu": 550},
            {"cpuTier": "3", "gpuTier": 4, "recommendedPsu": 750.0},
        ])
        assert table[(1, 2)] == 550
        assert table[(3, 4)] == 750

    def test_bad_rows_skipped(self):
        table = build_power_table([
            {"cpuTier": 1, "gpuTier": 2},
            {"cpuTier": "x", "gpuTier": 2, "recommendedPsu": 500},
            {"cpuTier": 2, "gpuTier": 2, "recommendedPsu": 600},
        ])
        assert dict(table) == {(2, 2): 600}

    def test_from_mapping(self):
        assert build_power_table({(1, 1): 500})[(1, 1)] == 500

    def test_none(self):
        assert len(build_power_table(None)) == 0


class TestCatalogs:
    def test_records_are_read_only(self, catalogs):
        with pytest.raises(TypeError):
            catalogs.cpus[0]["tier"] = 9

    def test_source_dicts_not_shared(self, cpus, gpus, rams):
        catalogs = Catalogs.from_records(cpus, gpus, rams)
        cpus[0]["tier"] = 9
        assert catalogs.cpus[0]["tier"] == 1

    def test_counts(self, catalogs):
        assert catalogs.counts() == {"CPU": len(CPUS), "GPU": len(GPUS), "RAM": len(RAMS)}

    def test_for_kind(self, catalogs):
        assert catalogs.for_kind("gpu") is catalogs.gpus
        with pytest.raises(KeyError):
            catalogs.for_kind("PSU")

    def test_bounds_precomputed(self, catalogs):
        assert set(catalogs.bounds) == {"CPU", "GPU", "RAM"}
        assert catalogs.bounds["CPU"]["core_count"] == (4.0, 24.0)


class TestSelection:
    def test_missing_in_fixed_order(self):
        assert Selection(gpu={"name": "x"}).missing() == ("CPU", "RAM")

    def test_complete(self):
        sel = Selection(cpu={}, gpu={}, ram={})
        assert sel.is_complete
        assert sel.get("RAM") == {}


class TestSessionContext:
    def test_empty_catalog_fails_fast(self):
        with pytest.raises(CatalogError):
            SessionContext(Catalogs.from_records(CPUS, [], RAMS))

    def test_preferences_normalized(self, catalogs):
        ctx = SessionContext(catalogs, advancement="MAX", effort="Moderate")
        assert ctx.advancement == "max"
        assert ctx.effort == "moderate"

    @pytest.mark.parametrize("kwargs", [{"advancement": 0}, {"effort": "heroic"}])
    def test_invalid_preferences(self, catalogs, kwargs):
        with pytest.raises(ValueError):
            SessionContext(catalogs, **kwargs)

    def test_with_selection_returns_new_context(self, context, pick):
        cpu = pick("CPU", "AMD Ryzen 5 3600")
        updated = context.with_selection(cpu=cpu)
        assert updated is not context
        assert updated.selection.cpu is cpu
        assert context.selection.cpu is None
        assert updated.catalogs is context.catalogs

    def test_with_preferences_keeps_unset(self, context):
        updated = context.with_preferences(effort="any")
        assert updated.effort == "any"
        assert updated.advancement == context.advancement


class TestComponentKinds:
    def test_registry(self):
        assert get_kind("cpu") is KINDS["CPU"]
        assert isinstance(get_kind("CPU"), CpuKind)
        assert get_kind(KINDS["RAM"]) is KINDS["RAM"]

    def test_unknown_kind(self):
        with pytest.raises(KeyError):
            get_kind("PSU")

    def test_only_ram_dedupes(self):
        assert [k.name for k in KINDS.values() if k.dedupe_names] == ["RAM"]
        assert isinstance(KINDS["RAM"], RamKind)

    def test_describe(self, pick):
        assert get_kind("CPU").describe(pick("CPU", "AMD Ryzen 5 7600")) == "6 cores | 5.10 GHz"
        assert get_kind("GPU").describe(pick("GPU", "ASUS Dual GeForce RTX 4070")) == "12GB VRAM | GeForce RTX 4070"
        assert get_kind("RAM").describe(pick("RAM", "G.Skill Trident Z5 64 GB")) == "5,6400 | 2x32GB"

    def test_eight_stick_kit_shown_as_four(self):
        ram = {"name": "Kit 128 GB", "modules": "8,16", "speed": "5,6000"}
        assert get_kind("RAM").describe(ram) == "5,6000 | 4x16GB"

    def test_is_compatible(self, pick):
        selection = Selection(ram=pick("RAM", "Corsair Vengeance LPX 16 GB"))
        assert get_kind("CPU").is_compatible(pick("CPU", "AMD Ryzen 5 3600"), selection)
        assert not get_kind("CPU").is_compatible(pick("CPU", "AMD Ryzen 5 7600"), selection)
        assert get_kind("GPU").is_compatible({}, selection)

    def test_cpu_warning_follows_compatibility(self, pick):
        i9 = pick("CPU", "Intel Core i9-14900K")
        r5 = pick("CPU", "AMD Ryzen 5 7600")
        ddr4 = Selection(ram=pick("RAM", "Crucial 8 GB"))
        unknown = Selection(ram={"name": "Mystery 16 GB", "modules": "2,8", "speed": "3200"})
        cpu = get_kind("CPU")
        assert cpu.product_warnings(i9, ddr4, {}) == []
        assert cpu.product_warnings(r5, unknown, {}) == []
        assert cpu.product_warnings(r5, ddr4, {}) == [
            "Compatibility Issue: This CPU requires DDR5 RAM, but you selected DDR4"
        ]

    def test_ram_warning_follows_compatibility(self, pick):
        ram = get_kind("RAM")
        ddr5_kit = pick("RAM", "G.Skill Trident Z5 64 GB")
        assert ram.product_warnings(ddr5_kit, Selection(cpu=pick("CPU", "Intel Core i9-14900K")), {}) == []
        assert ram.product_warnings(ddr5_kit, Selection(), {}) == []
        assert ram.product_warnings(ddr5_kit, Selection(cpu=pick("CPU", "AMD Ryzen 5 3600")), {}) == [
            "Compatibility Issue: This RAM is not compatible with your selected CPU (DDR4)."
        ]

    def test_high_power_warning(self):
        selection = Selection(cpu={"tier": 7}, gpu={"tier": 7})
        table = {(7, 7): 1000}
        warnings = get_kind("GPU").product_warnings({"tier": 7}, selection, table)
        assert warnings == ["High Power Requirement: Estimated PSU need 1000W"]
