#!/usr/bin/env python3
"""Co-authorship network CLI: records in, laid-out network picture out.

Usage:
    coauthor-network scopus.csv
    coauthor-network records.json --output out/ --ticks 500
    coauthor-network scopus.csv --config network.json --link-strength 0.8

Options:
    --config PATH           JSON overrides for canvas, palette and forces
    --output DIR            Output directory (default: ./network)
    --ticks N               Maximum layout ticks (default: from config, 300)
    --charge-strength X     Many-body coefficient, -100..100
    --collide-factor X      Collision radius multiplier, 1..5
    --link-strength X       Spring coefficient, 0.01..1
    --verbose               Show detailed logging
    --quiet                 Only print output paths
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from pathlib import Path

from coauthorship.config import load_config
from coauthorship.loader import load_rows
from coauthorship.network import NetworkView, build_network
from coauthorship.render import Scene
from coauthorship.report import generate_summary
from coauthorship.svg import scene_to_svg

logger = logging.getLogger("coauthorship")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="coauthor-network",
        description="Build a co-authorship network from bibliographic records "
                    "and render its force-directed layout.",
        epilog="Writes <output>/network.svg and <output>/summary.md.",
    )
    parser.add_argument("input", help="CSV or JSON file of bibliographic records")
    parser.add_argument("--config", default=None, help="JSON config overrides")
    parser.add_argument(
        "--output",
        default="network",
        help="Output directory (default: ./network)",
    )
    parser.add_argument(
        "--ticks",
        type=int,
        default=None,
        help="Maximum layout ticks (default: max_ticks from config)",
    )
    parser.add_argument("--charge-strength", type=float, default=None)
    parser.add_argument("--collide-factor", type=float, default=None)
    parser.add_argument("--link-strength", type=float, default=None)
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show detailed debug logging",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress progress output; only print output paths",
    )
    return parser.parse_args(argv)


def setup_logging(verbose: bool, quiet: bool):
    """Configure logging based on verbosity flags."""
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose, args.quiet)
    config = load_config(args.config)

    try:
        rows = load_rows(args.input)
    except (FileNotFoundError, ValueError, json.JSONDecodeError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    start = time.time()
    network = build_network(rows, config)
    scene = Scene()
    view = NetworkView(network, scene)

    for name in ("charge_strength", "collide_factor", "link_strength"):
        value = getattr(args, name)
        if value is not None:
            view.controller.slide(name, value)

    ticks = view.engine.run(args.ticks if args.ticks is not None else config.max_ticks)
    logger.info(
        "Layout ran %d ticks (alpha %.4f, %s) in %.1fs",
        ticks, view.engine.alpha, view.engine.status.value, time.time() - start,
    )

    out_dir = Path(args.output)
    out_dir.mkdir(parents=True, exist_ok=True)
    svg_path = out_dir / "network.svg"
    svg_path.write_text(scene_to_svg(scene, config), encoding="utf-8")
    summary_path = out_dir / "summary.md"
    summary_path.write_text(generate_summary(network), encoding="utf-8")

    print(svg_path)
    print(summary_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
