"""Session context: injected catalogs, the user's selection and preferences."""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from ..config.rules import COMPONENT_TYPES, DEFAULT_ADVANCEMENT, DEFAULT_EFFORT
from ..errors import CatalogError
from .effort import normalize_effort
from .scoring import CatalogBounds, catalog_bounds
from .tiers import Advancement, normalize_advancement

Record = Mapping[str, Any]


def freeze_record(record: Mapping[str, Any]) -> Record:
    if isinstance(record, MappingProxyType):
        return record
    return MappingProxyType(dict(record))


def build_power_table(profiles) -> Mapping[Tuple[int, int], int]:
    """Accept ``{(cpu, gpu): watts}`` or the JSON list of profile objects."""
    if profiles is None:
        return MappingProxyType({})
    if isinstance(profiles, Mapping):
        return MappingProxyType(dict(profiles))

    table = {}
    for p in profiles:
        try:
            key = (int(p["cpuTier"]), int(p["gpuTier"]))
            table[key] = int(p["recommendedPsu"])
        except (KeyError, TypeError, ValueError):
            continue
    return MappingProxyType(table)


@dataclass(frozen=True, eq=False)
class Catalogs:
    """Read-only component catalogs plus the power-profile table."""

    cpus: Tuple[Record, ...]
    gpus: Tuple[Record, ...]
    rams: Tuple[Record, ...]
    power_profiles: Mapping[Tuple[int, int], int] = field(default_factory=dict)
    bounds: Mapping[str, CatalogBounds] = field(init=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "cpus", tuple(freeze_record(r) for r in self.cpus))
        object.__setattr__(self, "gpus", tuple(freeze_record(r) for r in self.gpus))
        object.__setattr__(self, "rams", tuple(freeze_record(r) for r in self.rams))
        object.__setattr__(self, "power_profiles", build_power_table(self.power_profiles))
        object.__setattr__(self, "bounds", MappingProxyType({
            kind: catalog_bounds(self.for_kind(kind), kind) for kind in COMPONENT_TYPES
        }))

    @classmethod
    def from_records(
        cls,
        cpus: Iterable[Mapping[str, Any]],
        gpus: Iterable[Mapping[str, Any]],
        rams: Iterable[Mapping[str, Any]],
        power_profiles=None,
    ) -> "Catalogs":
        return cls(tuple(cpus), tuple(gpus), tuple(rams), power_profiles)

    def for_kind(self, kind: str) -> Tuple[Record, ...]:
        kind = kind.upper()
        if kind == "CPU":
            return self.cpus
        if kind == "GPU":
            return self.gpus
        if kind == "RAM":
            return self.rams
        raise KeyError(f"Unknown component kind: {kind!r}")

    def counts(self) -> Dict[str, int]:
        return {kind: len(self.for_kind(kind)) for kind in COMPONENT_TYPES}

    def require_loaded(self) -> None:
        empty = [kind for kind, n in self.counts().items() if n == 0]
        if empty:
            raise CatalogError(f"Empty component catalog(s): {', '.join(empty)}")


@dataclass(frozen=True)
class Selection:
    cpu: Optional[Record] = None
    gpu: Optional[Record] = None
    ram: Optional[Record] = None

    def get(self, kind: str) -> Optional[Record]:
        return getattr(self, kind.lower())

    def missing(self) -> Tuple[str, ...]:
        return tuple(kind for kind in COMPONENT_TYPES if self.get(kind) is None)

    @property
    def is_complete(self) -> bool:
        return not self.missing()


@dataclass(frozen=True)
class SessionContext:
    """Everything one analysis needs; the engine never mutates it."""

    catalogs: Catalogs
    selection: Selection = field(default_factory=Selection)
    advancement: Advancement = DEFAULT_ADVANCEMENT
    effort: str = DEFAULT_EFFORT

    def __post_init__(self):
        self.catalogs.require_loaded()
        object.__setattr__(self, "advancement", normalize_advancement(self.advancement))
        object.__setattr__(self, "effort", normalize_effort(self.effort))

    def with_selection(self, cpu=None, gpu=None, ram=None) -> "SessionContext":
        return replace(self, selection=Selection(cpu=cpu, gpu=gpu, ram=ram))

    def with_preferences(self, advancement=None, effort=None) -> "SessionContext":
        return replace(
            self,
            advancement=self.advancement if advancement is None else advancement,
            effort=self.effort if effort is None else effort,
        )
