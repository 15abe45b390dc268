"""Console rendering and JSON export of an analysis."""

from typing import Any, Dict, List, Optional, TextIO

from ..config.rules import ADVANCEMENT_MAX, UPGRADE_SIZE_LABELS
from ..recommend.components import get_kind
from ..recommend.engine import SystemAnalysis, UpgradeProduct, UpgradeRecommendation
from ..utils.console import heading, rule, safe_print


def component_info(record, kind: str) -> str:
    return get_kind(kind).describe(record)


def upgrade_size_label(advancement) -> str:
    if advancement == ADVANCEMENT_MAX:
        return UPGRADE_SIZE_LABELS[ADVANCEMENT_MAX]
    try:
        return UPGRADE_SIZE_LABELS.get(int(advancement), "Small")
    except (TypeError, ValueError):
        return "Small"


def effort_label(effort: str) -> str:
    if effort == "any":
        return "Any effort"
    return f"{effort.capitalize()} effort"


def bottleneck_lines(analysis: SystemAnalysis) -> List[str]:
    if analysis.balance["is_balanced"]:
        return ["System Perfectly Balanced", "Your system is balanced."]
    name = analysis.bottleneck.bottleneck
    if name is None:
        # RAM above the good-enough tier can leave CPU == GPU without a verdict
        return ["CPU and GPU are matched; RAM is not limiting."]
    return [
        "Your system isn't fully balanced.",
        f"Bottleneck: {name}",
        f"Your {name} is limiting performance. Upgrading it will give the most noticeable improvement.",
    ]


def next_steps_lines(analysis: SystemAnalysis) -> List[str]:
    rec = analysis.recommendation
    if analysis.max_tier is not None and rec.final_tier is not None \
            and rec.final_tier >= analysis.max_tier:
        return [
            "You're reaching the top end!",
            "Your system will be at peak performance. Further upgrades would be "
            "for cutting-edge features or specific use cases.",
        ]
    return [
        f"After upgrading your {rec.component}, the next bottleneck will likely be a different component.",
        "Consider planning your next upgrade path to maintain system balance.",
    ]


def _print_product(product: UpgradeProduct, rank: int, file: Optional[TextIO]) -> None:
    kind = get_kind(product.kind)
    safe_print(f"\n#{rank} Pick: {product.name}", file=file)
    rule(file=file)
    safe_print(f"Effort: {product.required_level.capitalize()}", file=file)
    for label, value in kind.specs(product.component).items():
        safe_print(f"  {label}: {value}", file=file)
    for warning in product.warnings:
        safe_print(f"  ! {warning}", file=file)
    if product.required_parts:
        safe_print(f"  Additional parts likely needed: {', '.join(product.required_parts)}", file=file)
    for note in product.notes:
        safe_print(f"  * {note}", file=file)


def display_analysis(analysis: SystemAnalysis, file: Optional[TextIO] = None) -> None:
    tiers = analysis.bottleneck.tiers
    rec = analysis.recommendation
    size = upgrade_size_label(rec.advancement)

    heading("System Analysis", file=file)
    safe_print(
        "Tiers: " + " | ".join(f"{k} {v}" for k, v in tiers.items()),
        file=file,
    )
    for line in bottleneck_lines(analysis):
        safe_print(line, file=file)

    heading("Recommended Upgrade", file=file)
    safe_print(f"{size} upgrade for {rec.component}", file=file)
    safe_print(f"- {rec.component} is the current bottleneck."
               if analysis.bottleneck.bottleneck else
               f"- No bottleneck detected; defaulting to a {rec.component} upgrade.", file=file)
    safe_print(f"- Upgrade size selected: {size}.", file=file)
    safe_print(f"- Effort filter applied: {effort_label(rec.effort)}.", file=file)
    safe_print("- Compatibility and power checks are applied.", file=file)
    safe_print(f"Target tier: {rec.target_tier}", file=file)
    if rec.escalated_tier is not None:
        safe_print(f"No verified upgrades in tier {rec.target_tier}; showing tier {rec.escalated_tier}.", file=file)

    kind = get_kind(rec.component)
    safe_print(f"\nTop {kind.plural} for a {size.lower()} upgrade", file=file)
    if not rec.products:
        safe_print(
            "No verified upgrades available for the selected effort level. Consider a larger "
            "upgrade size or higher effort, or check specifications manually.",
            file=file,
        )
    for i, product in enumerate(rec.products, 1):
        _print_product(product, i, file)

    heading("What's Next?", file=file)
    for line in next_steps_lines(analysis):
        safe_print(line, file=file)


def product_to_dict(product: UpgradeProduct) -> Dict[str, Any]:
    return {
        "name": product.name,
        "kind": product.kind,
        "tier": product.tier,
        "score": round(product.score, 6),
        "required_level": product.required_level,
        "required_parts": list(product.required_parts),
        "notes": list(product.notes),
        "warnings": list(product.warnings),
        "specs": dict(product.component),
    }


def recommendation_to_dict(rec: UpgradeRecommendation) -> Dict[str, Any]:
    return {
        "component": rec.component,
        "current_tier": rec.current_tier,
        "current_score": round(rec.current_score, 6),
        "target_tier": rec.target_tier,
        "escalated_tier": rec.escalated_tier,
        "advancement": rec.advancement,
        "effort": rec.effort,
        "products": [product_to_dict(p) for p in rec.products],
    }


def analysis_to_dict(analysis: SystemAnalysis) -> Dict[str, Any]:
    return {
        "tiers": dict(analysis.bottleneck.tiers),
        "bottleneck": analysis.bottleneck.bottleneck,
        "balanced": analysis.balance["is_balanced"],
        "upgrade_component": analysis.upgrade_component,
        "recommendation": recommendation_to_dict(analysis.recommendation),
    }
