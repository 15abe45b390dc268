"""Component scoring: catalog-wide min-max normalization with fixed weights.

Scores only rank components of the same kind; comparing a CPU score with a
GPU score is meaningless.
"""

from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Tuple

import pandas as pd

from ..config.scoring_constants import (
    CPU_WEIGHTS,
    GPU_WEIGHTS,
    RAM_WEIGHTS,
    NUMERIC_DEFAULT,
    RAM_SPEED_DEFAULT,
    RAM_SPEED_MIN_BOUND_DEFAULT,
    RAM_CAPACITY_DEFAULT,
    RAM_CAPACITY_MAX_BOUND_DEFAULT,
    RAM_CAPACITY_MIN_BOUND_DEFAULT,
)
from ..processing.normalize import parse_capacity_from_name, parse_digits, parse_float

# field -> (min, max) over a whole catalog
CatalogBounds = Dict[str, Tuple[float, float]]


def _field_values(
    catalog: Iterable[Mapping[str, Any]],
    field: str,
    parser: Callable[[Any], Optional[float]],
) -> pd.Series:
    raw = pd.Series([c.get(field) for c in catalog], dtype="object")
    return pd.to_numeric(raw.map(parser), errors="coerce")


def _bounds(values: pd.Series, min_default: float, max_default: float) -> Tuple[float, float]:
    if values.empty:
        return float(min_default), float(max_default)
    lo = values.fillna(min_default).min()
    hi = values.fillna(max_default).max()
    return float(lo), float(hi)


def normalize(value: float, bounds: Tuple[float, float]) -> float:
    """Min-max normalize; a flat range divides by 1 instead of 0."""
    lo, hi = bounds
    return (value - lo) / ((hi - lo) or 1)


def _numeric(component: Mapping[str, Any], field: str) -> float:
    val = parse_float(component.get(field))
    return NUMERIC_DEFAULT if val is None else val


def ram_speed_value(ram: Mapping[str, Any]) -> int:
    """Speed figure used for scoring: every digit of the speed string."""
    val = parse_digits(ram.get("speed"))
    return RAM_SPEED_DEFAULT if val is None else val


def ram_capacity_value(ram: Mapping[str, Any]) -> int:
    val = parse_capacity_from_name(ram.get("name"))
    return RAM_CAPACITY_DEFAULT if val is None else val


def catalog_bounds(catalog: Iterable[Mapping[str, Any]], kind: str) -> CatalogBounds:
    """Observed min/max of every scored field across the full catalog."""
    catalog = list(catalog)
    kind = kind.upper()

    if kind == "RAM":
        speeds = _field_values(catalog, "speed", parse_digits)
        caps = _field_values(catalog, "name", parse_capacity_from_name)
        return {
            "speed": _bounds(speeds, RAM_SPEED_MIN_BOUND_DEFAULT, RAM_SPEED_DEFAULT),
            "capacity": _bounds(caps, RAM_CAPACITY_MIN_BOUND_DEFAULT, RAM_CAPACITY_MAX_BOUND_DEFAULT),
        }

    weights = CPU_WEIGHTS if kind == "CPU" else GPU_WEIGHTS
    bounds = {}
    for field in weights:
        values = _field_values(catalog, field, parse_float)
        bounds[field] = _bounds(values, NUMERIC_DEFAULT, NUMERIC_DEFAULT)
    return bounds


def cpu_score(cpu: Mapping[str, Any], bounds: CatalogBounds) -> float:
    return sum(
        normalize(_numeric(cpu, field), bounds[field]) * weight
        for field, weight in CPU_WEIGHTS.items()
    )


def gpu_score(gpu: Mapping[str, Any], bounds: CatalogBounds) -> float:
    return sum(
        normalize(_numeric(gpu, field), bounds[field]) * weight
        for field, weight in GPU_WEIGHTS.items()
    )


def ram_score(ram: Mapping[str, Any], bounds: CatalogBounds) -> float:
    speed_norm = normalize(ram_speed_value(ram), bounds["speed"])
    cap_norm = normalize(ram_capacity_value(ram), bounds["capacity"])
    return speed_norm * RAM_WEIGHTS["speed"] + cap_norm * RAM_WEIGHTS["capacity"]


_SCORERS = {
    "CPU": cpu_score,
    "GPU": gpu_score,
    "RAM": ram_score,
}


def calculate_score(
    component: Mapping[str, Any],
    kind: str,
    catalog: Optional[Iterable[Mapping[str, Any]]] = None,
    bounds: Optional[CatalogBounds] = None,
) -> float:
    """Score ``component`` against its kind's catalog (or precomputed bounds).

    Unknown kinds score 0.
    """
    scorer = _SCORERS.get(kind.upper())
    if scorer is None or component is None:
        return 0.0
    if bounds is None:
        bounds = catalog_bounds(catalog or (), kind)
    return float(scorer(component, bounds))
