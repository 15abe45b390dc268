import argparse
import json
import logging
import sys
from typing import List, Optional

from ..config.rules import ADVANCEMENT_OPTIONS, DEFAULT_ADVANCEMENT, DEFAULT_EFFORT, EFFORT_LEVELS
from ..errors import CatalogError, IncompleteSelectionError
from ..processing.read import load_catalogs
from ..processing.selection import (
    RamFilters,
    component_label,
    cpu_series_options,
    filter_cpus,
    filter_gpus,
    filter_ram,
    find_component,
    gpu_chipset_options,
)
from ..recommend.context import SessionContext
from ..recommend.engine import analyze_system
from ..utils.console import safe_print
from ..utils.logging import get_logger, set_console_level
from .display import analysis_to_dict, display_analysis
from .stress import run_stress_test

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tierup",
        description="Find the bottleneck in a CPU/GPU/RAM build and suggest upgrades.",
    )
    parser.add_argument("--data-dir", default=None, help="Directory holding the JSON catalogs")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging on the console")
    sub = parser.add_subparsers(dest="command", required=True)

    analyze = sub.add_parser("analyze", help="Analyze a build and recommend an upgrade")
    analyze.add_argument("--cpu", required=True, help="CPU name (exact, partial or close match)")
    analyze.add_argument("--gpu", required=True, help="GPU name")
    analyze.add_argument("--ram", required=True, help="RAM kit name")
    analyze.add_argument(
        "--advancement",
        default=str(DEFAULT_ADVANCEMENT),
        choices=[str(a) for a in ADVANCEMENT_OPTIONS],
        help="Tiers to move up, or 'max' (default: %(default)s)",
    )
    analyze.add_argument(
        "--effort",
        default=DEFAULT_EFFORT,
        choices=EFFORT_LEVELS,
        help="Highest acceptable upgrade effort (default: %(default)s)",
    )
    analyze.add_argument("--json", action="store_true", help="Print the result as JSON")

    listing = sub.add_parser("list", help="List catalog entries")
    listing.add_argument("kind", choices=["cpu", "gpu", "ram"])
    listing.add_argument("--brand", choices=["AMD", "Intel"], help="CPU brand")
    listing.add_argument("--series", help="CPU series, e.g. 'Ryzen 7'")
    listing.add_argument("--maker", choices=["NVIDIA", "AMD"], help="GPU chipset manufacturer")
    listing.add_argument("--chipset", help="GPU chipset, e.g. 'GeForce RTX 4070'")
    listing.add_argument("--card-maker", help="GPU card manufacturer (first word of the name)")
    listing.add_argument("--kit", type=int, help="RAM stick count")
    listing.add_argument("--capacity", type=int, help="RAM total capacity in GB")
    listing.add_argument("--ddr", choices=["DDR4", "DDR5"])
    listing.add_argument("--speed", help="RAM speed as in the catalog, e.g. '5,6000'")
    listing.add_argument("--ram-maker", help="RAM manufacturer")
    listing.add_argument("--for-cpu", help="Only RAM usable with this CPU")
    listing.add_argument("--options", action="store_true",
                         help="Show CPU series / GPU chipsets instead of products")

    stress = sub.add_parser("stress", help="Run the randomized stress simulation")
    stress.add_argument("--iterations", type=int, default=1000)
    stress.add_argument("--seed", type=int, default=None)
    return parser


def _resolve(catalogs, kind: str, query: str):
    record = find_component(catalogs.for_kind(kind), query, kind)
    if record is None:
        raise LookupError(f"No {kind} matches {query!r}")
    if str(record.get("name", "")).lower() != query.strip().lower():
        logger.info("%s %r resolved to %r", kind, query, record.get("name"))
    return record


def cmd_analyze(args, catalogs) -> int:
    try:
        context = SessionContext(
            catalogs,
            advancement=args.advancement,
            effort=args.effort,
        ).with_selection(
            cpu=_resolve(catalogs, "CPU", args.cpu),
            gpu=_resolve(catalogs, "GPU", args.gpu),
            ram=_resolve(catalogs, "RAM", args.ram),
        )
    except LookupError as exc:
        logger.error("%s", exc)
        return 2

    try:
        analysis = analyze_system(context)
    except IncompleteSelectionError as exc:
        logger.error("%s", exc)
        return 2

    if args.json:
        safe_print(json.dumps(analysis_to_dict(analysis), ensure_ascii=False, indent=2))
    else:
        display_analysis(analysis)
    return 0


def cmd_list(args, catalogs) -> int:
    if args.kind == "cpu":
        if args.options:
            lines = cpu_series_options(catalogs.cpus, args.brand)
        else:
            lines = [component_label(c, "CPU") for c in filter_cpus(catalogs.cpus, args.brand, args.series)]
    elif args.kind == "gpu":
        if args.options:
            lines = gpu_chipset_options(catalogs.gpus, args.maker)
        else:
            found = filter_gpus(catalogs.gpus, args.maker, args.chipset, args.card_maker)
            lines = [component_label(g, "GPU") for g in found]
    else:
        cpu = _resolve(catalogs, "CPU", args.for_cpu) if args.for_cpu else None
        filters = RamFilters(
            kit=args.kit,
            capacity=args.capacity,
            ddr=args.ddr,
            speed=args.speed,
            manufacturer=args.ram_maker,
        )
        lines = [component_label(r, "RAM") for r in filter_ram(catalogs.rams, filters, cpu)]

    for line in lines:
        safe_print(line)
    if not lines:
        logger.info("Nothing matches the given filters.")
    return 0


def cmd_stress(args, catalogs) -> int:
    results = run_stress_test(catalogs, iterations=args.iterations, seed=args.seed)
    safe_print(f"Stress Test Completed: {args.iterations} iterations per effort level")
    for level, data in results.items():
        safe_print(f"\nEffort: {level}")
        safe_print(f"Total cases: {data['total']}")
        safe_print(f"No products found: {data['no_products']}")
        safe_print(f"Fallback tier used: {data['fallback_tier_used']}")
        safe_print(f"Errors: {data['errors']}")
        safe_print(f"Downgrades: {data['downgrades']}")
    failed = any(d["errors"] or d["downgrades"] for d in results.values())
    return 1 if failed else 0


COMMANDS = {
    "analyze": cmd_analyze,
    "list": cmd_list,
    "stress": cmd_stress,
}


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        set_console_level(logging.DEBUG)

    try:
        catalogs = load_catalogs(args.data_dir)
    except CatalogError as exc:
        logger.error("Failed to load component data: %s", exc)
        return 1

    try:
        return COMMANDS[args.command](args, catalogs)
    except LookupError as exc:
        logger.error("%s", exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())
