"""Upgrade engine: orchestrates tiering, scoring, effort filtering and ranking.

Submodules:
  - tiers: display tiers, target-tier selection
  - scoring: catalog-normalized component scores
  - compatibility: DDR / PSU checks
  - bottleneck: limiting-component detection
  - effort: companion-part requirements
  - components: per-kind dispatch (CPU / GPU / RAM)
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from ..config.rules import BALANCED_DEFAULT_COMPONENT, COMPONENT_TYPES
from ..config.scoring_constants import MAX_PRODUCTS
from ..errors import IncompleteSelectionError
from ..utils.logging import get_logger
from .bottleneck import detect_bottleneck, summarize_balance
from .components import ComponentKind, get_kind
from .context import SessionContext
from .effort import is_effort_allowed, normalize_effort
from .tiers import Advancement, max_display_tier, next_available_tier

logger = get_logger(__name__)


@dataclass
class BottleneckResult:
    tiers: Dict[str, Any]
    bottleneck: Optional[str]

    @property
    def is_balanced(self) -> bool:
        return self.bottleneck is None


@dataclass
class UpgradeProduct:
    component: Mapping[str, Any]
    kind: str
    score: float
    tier: Any
    required_level: str
    required_parts: List[str] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def name(self) -> str:
        return str(self.component.get("name", ""))


@dataclass
class UpgradeRecommendation:
    component: str
    current_tier: Any
    current_score: float
    target_tier: Any
    products: List[UpgradeProduct]
    advancement: Advancement
    effort: str
    escalated_tier: Optional[int] = None

    @property
    def final_tier(self):
        return self.escalated_tier if self.escalated_tier is not None else self.target_tier


@dataclass
class SystemAnalysis:
    bottleneck: BottleneckResult
    balance: Dict[str, Any]
    upgrade_component: str
    recommendation: UpgradeRecommendation
    max_tier: Any = None


def compute_bottleneck(context: SessionContext) -> BottleneckResult:
    """Display tiers of the selection and the limiting component (``None`` = balanced)."""
    selection = context.selection
    missing = selection.missing()
    if missing:
        raise IncompleteSelectionError(missing)

    tiers = {kind: get_kind(kind).display_tier(selection.get(kind)) for kind in COMPONENT_TYPES}
    bottleneck = detect_bottleneck(tiers["CPU"], tiers["GPU"], tiers["RAM"])
    logger.debug("Tiers %s -> bottleneck %s", tiers, bottleneck or "none (balanced)")
    return BottleneckResult(tiers=tiers, bottleneck=bottleneck)


def _candidates_in_tier(kind: ComponentKind, catalog, target_tier):
    seen = set()
    for product in catalog:
        if kind.display_tier(product) != target_tier:
            continue
        if kind.dedupe_names:
            name = product.get("name")
            if name in seen:
                continue
            seen.add(name)
        yield product


def get_upgrade_products(
    context: SessionContext,
    kind,
    current_component: Mapping[str, Any],
    target_tier,
    effort: Optional[str] = None,
) -> List[UpgradeProduct]:
    """Best (at most ``MAX_PRODUCTS``) strict upgrades over ``current_component`` in ``target_tier``."""
    kind = get_kind(kind)
    effort = normalize_effort(effort) if effort else context.effort
    catalogs = context.catalogs
    current_score = kind.score(current_component, catalogs)

    products = []
    for product in _candidates_in_tier(kind, kind.catalog(catalogs), target_tier):
        score = kind.score(product, catalogs)
        if score <= current_score:
            continue
        needed = kind.upgrade_effort(product, context.selection, catalogs.power_profiles)
        if not is_effort_allowed(needed.required_level, effort):
            continue
        products.append(UpgradeProduct(
            component=product,
            kind=kind.name,
            score=score,
            tier=target_tier,
            required_level=needed.required_level,
            required_parts=needed.required_parts,
            notes=needed.notes,
            warnings=kind.product_warnings(product, context.selection, catalogs.power_profiles),
        ))

    products.sort(key=lambda p: p.score, reverse=True)
    return products[:MAX_PRODUCTS]


def recommend_upgrade(
    context: SessionContext,
    component: str,
    advancement: Optional[Advancement] = None,
    effort: Optional[str] = None,
) -> UpgradeRecommendation:
    """Target tier and ranked products for upgrading ``component``.

    When the target tier yields nothing and a higher tier exists, the search
    is retried exactly once at ``target + 1``.
    """
    if advancement is not None or effort is not None:
        context = context.with_preferences(advancement=advancement, effort=effort)

    kind = get_kind(component)
    current = kind.selected(context.selection)
    if current is None:
        raise IncompleteSelectionError((kind.name,))

    catalog = kind.catalog(context.catalogs)
    current_tier = kind.display_tier(current)
    target = next_available_tier(current_tier, kind.key, context.advancement, catalog)
    products = get_upgrade_products(context, kind, current, target)
    logger.debug(
        "%s upgrade: tier %s -> %s (advancement=%s, effort=%s): %d product(s)",
        kind.name, current_tier, target, context.advancement, context.effort, len(products),
    )

    escalated = None
    top = max_display_tier(catalog, kind.key)
    if not products and target is not None and target < top:
        retry_tier = target + 1
        products = get_upgrade_products(context, kind, current, retry_tier)
        logger.info(
            "No %s upgrades in tier %s, retried tier %s: %d product(s)",
            kind.name, target, retry_tier, len(products),
        )
        if products:
            escalated = retry_tier

    return UpgradeRecommendation(
        component=kind.name,
        current_tier=current_tier,
        current_score=kind.score(current, context.catalogs),
        target_tier=target,
        products=products,
        advancement=context.advancement,
        effort=context.effort,
        escalated_tier=escalated,
    )


def analyze_system(context: SessionContext) -> SystemAnalysis:
    """Full analysis: bottleneck verdict plus the upgrade path for it.

    A balanced system is given a ``BALANCED_DEFAULT_COMPONENT`` upgrade path.
    """
    result = compute_bottleneck(context)
    upgrade_component = result.bottleneck or BALANCED_DEFAULT_COMPONENT
    recommendation = recommend_upgrade(context, upgrade_component)
    kind = get_kind(upgrade_component)
    logger.info(
        "Analysis: bottleneck=%s, upgrading %s to tier %s (%d product(s))",
        result.bottleneck or "balanced", upgrade_component,
        recommendation.final_tier, len(recommendation.products),
    )
    return SystemAnalysis(
        bottleneck=result,
        balance=summarize_balance(result.tiers),
        upgrade_component=upgrade_component,
        recommendation=recommendation,
        max_tier=max_display_tier(kind.catalog(context.catalogs), kind.key),
    )
