"""Randomized end-to-end stress run over the loaded catalogs."""

from typing import Dict, Optional

import numpy as np

from ..config.rules import ADVANCEMENT_OPTIONS, EFFORT_LEVELS
from ..recommend.context import Catalogs, SessionContext
from ..recommend.engine import analyze_system
from ..utils.logging import get_logger

logger = get_logger(__name__)


def run_stress_test(
    catalogs: Catalogs,
    iterations: int = 1000,
    seed: Optional[int] = None,
) -> Dict[str, Dict[str, int]]:
    """Analyze ``iterations`` random systems at every effort level.

    Per effort level counts: total, no_products, fallback_tier_used, errors
    and downgrades (products not strictly better than the current part).
    """
    rng = np.random.default_rng(seed)
    results = {
        level: {"total": 0, "no_products": 0, "fallback_tier_used": 0, "errors": 0, "downgrades": 0}
        for level in EFFORT_LEVELS
    }
    base = SessionContext(catalogs)

    for _ in range(max(0, int(iterations))):
        cpu = catalogs.cpus[rng.integers(len(catalogs.cpus))]
        gpu = catalogs.gpus[rng.integers(len(catalogs.gpus))]
        ram = catalogs.rams[rng.integers(len(catalogs.rams))]
        advancement = ADVANCEMENT_OPTIONS[rng.integers(len(ADVANCEMENT_OPTIONS))]
        context = base.with_selection(cpu=cpu, gpu=gpu, ram=ram)

        for level in EFFORT_LEVELS:
            stats = results[level]
            stats["total"] += 1
            try:
                analysis = analyze_system(context.with_preferences(advancement=advancement, effort=level))
            except Exception:
                logger.exception("Stress case failed (effort=%s)", level)
                stats["errors"] += 1
                continue
            rec = analysis.recommendation
            if rec.escalated_tier is not None:
                stats["fallback_tier_used"] += 1
            if not rec.products:
                stats["no_products"] += 1
            stats["downgrades"] += sum(1 for p in rec.products if p.score <= rec.current_score)

    logger.info("Stress test completed: %d iteration(s) per effort level", iterations)
    return results
