"""Catalog loading: JSON files -> frozen ``Catalogs``."""

import math
from collections import Counter
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from ..config.settings import CATALOG_FILES, DATA_DIR, POWER_PROFILE_FILE
from ..errors import CatalogError
from ..recommend.context import Catalogs
from ..utils.logging import get_logger
from .validate import validate_record

logger = get_logger(__name__)

# Fields that are whole numbers in the source JSON; pandas turns them into
# floats as soon as one row lacks the field.
_INT_FIELDS = ("tier", "generation", "core_count", "memory", "tdp", "cas_latency")


def _clean_value(key: str, value: Any) -> Any:
    if isinstance(value, float):
        if math.isnan(value):
            return None
        if key in _INT_FIELDS and value.is_integer():
            return int(value)
    return value


def _clean_record(raw: Dict[str, Any]) -> Dict[str, Any]:
    record = {}
    for key, value in raw.items():
        value = _clean_value(key, value)
        if value is not None:
            record[key] = value
    return record


def _read_json_frame(path: Path) -> pd.DataFrame:
    try:
        df = pd.read_json(path, orient="records", dtype=False, convert_dates=False)
    except (ValueError, OSError) as exc:
        raise CatalogError(f"Could not read {path.name}: {exc}") from exc
    df.columns = [str(c).strip() for c in df.columns]
    return df


def read_catalog(path: Path, kind: str) -> List[Dict[str, Any]]:
    """Read one component catalog; rows without a name or tier are dropped."""
    path = Path(path)
    if not path.exists():
        raise CatalogError(f"Catalog file not found: {path}")

    df = _read_json_frame(path)
    records = []
    dropped = 0
    warning_counts: Counter = Counter()
    for raw in df.to_dict(orient="records"):
        record = _clean_record(raw)
        if not record.get("name") or record.get("tier") is None:
            dropped += 1
            continue
        for warning in validate_record(record, kind):
            warning_counts[warning] += 1
        records.append(record)

    if dropped:
        logger.warning("%s: %d row(s) without name/tier skipped", path.name, dropped)
    if warning_counts:
        logger.warning("%s: data warnings %s", path.name, dict(warning_counts))
    logger.info("[OK] %s: %d %s record(s) loaded", path.name, len(records), kind)
    return records


def read_power_profiles(path: Path) -> List[Dict[str, Any]]:
    """Power-profile rows; a missing file means every PSU lookup is unknown."""
    path = Path(path)
    if not path.exists():
        logger.warning("%s not found, PSU checks will report unknown", path.name)
        return []
    df = _read_json_frame(path)
    rows = [_clean_record(r) for r in df.to_dict(orient="records")]
    logger.info("[OK] %s: %d power profile(s) loaded", path.name, len(rows))
    return rows


def load_catalogs(data_dir: Optional[Path] = None) -> Catalogs:
    """Load every catalog once; raise ``CatalogError`` if any is missing or empty."""
    data_dir = Path(data_dir) if data_dir is not None else DATA_DIR

    loaded = {}
    for kind, filename in CATALOG_FILES.items():
        records = read_catalog(data_dir / filename, kind)
        if not records:
            raise CatalogError(f"{filename} contains no usable {kind} records")
        loaded[kind] = records

    catalogs = Catalogs.from_records(
        loaded["CPU"],
        loaded["GPU"],
        loaded["RAM"],
        read_power_profiles(data_dir / POWER_PROFILE_FILE),
    )
    counts = catalogs.counts()
    logger.info(
        "Data loaded: CPUs %d, GPUs %d, RAM %d, power profiles %d",
        counts["CPU"], counts["GPU"], counts["RAM"], len(catalogs.power_profiles),
    )
    return catalogs
