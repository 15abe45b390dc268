"""Tier, bottleneck and effort rules shared by the engine and the UI layers."""

COMPONENT_TYPES = ("CPU", "GPU", "RAM")

# Raw catalog tier (1-7) -> display tier used to compare component kinds.
# Identity for now; values may become fractional to align balanced pairings.
TIER_MAPPINGS = {
    "cpu": {1: 1, 2: 2, 3: 3, 4: 4, 5: 5, 6: 6, 7: 7},
    "gpu": {1: 1, 2: 2, 3: 3, 4: 4, 5: 5, 6: 6, 7: 7},
    "ram": {1: 1, 2: 2, 3: 3, 4: 4, 5: 5, 6: 6, 7: 7},
}

# RAM at this display tier or above is never flagged as the bottleneck.
RAM_GOOD_ENOUGH_TIER = 4

# Balanced systems get a CPU upgrade path. Arbitrary default, not derived.
BALANCED_DEFAULT_COMPONENT = "CPU"

# ── Effort ───────────────────────────────────────────────────────────
EFFORT_LEVELS = ("simple", "moderate", "complex", "any")
EFFORT_RANKS = {
    "simple": 1,
    "moderate": 2,
    "complex": 3,
    "any": 4,       # wildcard, accepts every level
}
DEFAULT_EFFORT = "simple"

# ── Advancement ──────────────────────────────────────────────────────
ADVANCEMENT_MAX = "max"
ADVANCEMENT_OPTIONS = (1, 2, 3, ADVANCEMENT_MAX)
DEFAULT_ADVANCEMENT = 1

UPGRADE_SIZE_LABELS = {
    1: "Small",
    2: "Medium",
    3: "Large",
    ADVANCEMENT_MAX: "Extreme",
}

# ── Selection filter vocabularies ────────────────────────────────────
CPU_BRAND_HINTS = {
    "AMD": ("AMD", "Ryzen"),
    "Intel": ("Intel", "Core"),
}

# Checked in order; the first hit names the series.
CPU_SERIES = (
    "Ryzen 5", "Ryzen 7", "Ryzen 9", "Ryzen 3",
    "Core i3", "Core i5", "Core i7", "Core i9",
)

GPU_CHIPSET_MAKER_HINTS = {
    "NVIDIA": ("GeForce", "RTX", "GTX"),
    "AMD": ("Radeon", "RX"),
}

DDR_TYPES = ("DDR4", "DDR5")
