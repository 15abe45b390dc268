"""
Scoring engine constants.

Weights are fixed domain constants; they are not tuned at runtime.
"""

# ── CPU score weights ────────────────────────────────────────────────
CPU_WEIGHTS = {
    "boost_clock": 0.60,
    "core_count": 0.30,
    "generation": 0.10,
}

# ── GPU score weights ────────────────────────────────────────────────
GPU_WEIGHTS = {
    "boost_clock": 0.65,
    "memory": 0.25,
    "generation": 0.10,
}

# ── RAM score weights ────────────────────────────────────────────────
RAM_WEIGHTS = {
    "speed": 0.65,
    "capacity": 0.35,
}

# Missing numeric fields fall back to these before normalization.
NUMERIC_DEFAULT = 0.0

# RAM defaults are asymmetric on purpose; score ordering depends on them.
RAM_SPEED_DEFAULT = 0               # subject + catalog max bound
RAM_SPEED_MIN_BOUND_DEFAULT = 2000  # catalog min bound
RAM_CAPACITY_DEFAULT = 16           # subject
RAM_CAPACITY_MAX_BOUND_DEFAULT = 0  # catalog max bound
RAM_CAPACITY_MIN_BOUND_DEFAULT = 8  # catalog min bound

# Regex for "<digits> GB" inside RAM product names.
RAM_CAPACITY_PATTERN = r"(\d+)\s*GB"

# ── Compatibility ────────────────────────────────────────────────────
DDR4_MAX_GENERATION = 9             # generation <= 9 -> DDR4, above -> DDR5

# ── Upgrade selection ────────────────────────────────────────────────
MAX_PRODUCTS = 5
HIGH_POWER_PSU_WATTS = 850          # "high power requirement" warning
MAX_MOTHERBOARD_SLOTS = 4           # 8-stick kits are shown as 4x
