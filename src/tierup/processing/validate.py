from typing import Any, List, Mapping

REQUIRED_FIELDS = {
    "CPU": ("socket", "core_count", "boost_clock", "ramType"),
    "GPU": ("chipset", "memory", "boost_clock"),
    "RAM": ("modules", "speed"),
}


def validate_record(record: Mapping[str, Any], kind: str) -> List[str]:
    """Data-quality warnings for one catalog record. Never raises."""
    warnings = []

    tier = record.get("tier")
    if not isinstance(tier, int) or isinstance(tier, bool) or not 1 <= tier <= 7:
        warnings.append("tier_out_of_range")

    generation = record.get("generation")
    if not isinstance(generation, int) or isinstance(generation, bool) or generation < 0:
        warnings.append("generation_invalid")

    for name in REQUIRED_FIELDS.get(kind.upper(), ()):
        if record.get(name) in (None, ""):
            warnings.append(f"missing_{name}")

    return warnings
