"""tierup: bottleneck detection and upgrade advice for CPU/GPU/RAM builds.

Public API surface; import submodules directly for full access:
  tierup.config.rules: tier mappings, effort ranks, thresholds
  tierup.config.scoring_constants: score weights and parse defaults
  tierup.processing.read: JSON catalog loading
  tierup.processing.selection: cascading part-selection filters
  tierup.recommend.engine: bottleneck + upgrade recommendation
  tierup.app.cli: CLI entry point
"""

from .errors import CatalogError, IncompleteSelectionError
from .processing.read import load_catalogs
from .recommend.context import Catalogs, Selection, SessionContext
from .recommend.engine import analyze_system, compute_bottleneck, recommend_upgrade


def main(argv=None):
    """CLI entry point."""
    from .app.main import main as _main
    return _main(argv)


__all__ = [
    "CatalogError",
    "IncompleteSelectionError",
    "Catalogs",
    "Selection",
    "SessionContext",
    "load_catalogs",
    "analyze_system",
    "compute_bottleneck",
    "recommend_upgrade",
    "main",
]
