"""Run the randomized upgrade stress test from the command line.

Examples:
  python simulation.py --n 1000
  python simulation.py --n 5000 --seed 42
"""

from __future__ import annotations

import argparse
from typing import Optional

from tierup.app.cli import main as cli_main


def _parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Analyze random CPU/GPU/RAM builds at every effort level and count failures.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="Examples:\n  python simulation.py --n 1000\n  python simulation.py --n 5000 --seed 42",
    )
    parser.add_argument(
        "--n",
        type=int,
        default=1000,
        help="Random builds per effort level (default: 1000).",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed (optional).",
    )
    parser.add_argument(
        "--data-dir",
        default=None,
        help="Directory holding the JSON catalogs (default: bundled data/).",
    )
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    args = _parse_args(argv)
    forwarded = []
    if args.data_dir:
        forwarded += ["--data-dir", args.data_dir]
    forwarded += ["stress", "--iterations", str(max(0, int(args.n)))]
    if args.seed is not None:
        forwarded += ["--seed", str(args.seed)]
    return cli_main(forwarded)


if __name__ == "__main__":
    raise SystemExit(main())
