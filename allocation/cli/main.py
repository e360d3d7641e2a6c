"""
CLI for rendering the positions-by-target table to a standalone HTML page.
"""
import argparse
import logging
import sys
from typing import List, Optional

import yaml

from allocation.data import load_positions, load_targets
from allocation.portfolio import build_display_targets, build_position_table
from allocation.tables import TableRenderer

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO"):
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def load_config(config_path: str) -> dict:
    """Load configuration from YAML file."""
    with open(config_path, 'r') as f:
        return yaml.safe_load(f) or {}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Render portfolio positions grouped by allocation target'
    )
    parser.add_argument('--positions', help='Positions file (.csv or .json)')
    parser.add_argument('--targets', help='Targets file (.yaml or .json)')
    parser.add_argument('--config', help='YAML config with positions/targets/currency_symbol/title')
    parser.add_argument('--sort', metavar='LABEL', help='Column to sort by, e.g. Value')
    parser.add_argument('--descending', action='store_true', help='Sort descending')
    parser.add_argument('--expand', metavar='KEY', action='append', default=[],
                        help='Target key to expand (repeatable)')
    parser.add_argument('--output', '-o', help='Write HTML here instead of stdout')
    parser.add_argument('--log-level', default='INFO', help='Logging level')
    return parser


def render(args: argparse.Namespace) -> str:
    """Load the data, apply the requested sort/expansion and render HTML."""
    settings = load_config(args.config) if args.config else {}
    positions_path = args.positions or settings.get('positions')
    targets_path = args.targets or settings.get('targets')
    if not positions_path or not targets_path:
        raise ValueError("Both a positions and a targets file are required")

    total_value, rows = build_display_targets(
        load_targets(targets_path),
        load_positions(positions_path),
    )
    table = build_position_table(total_value, settings.get('currency_symbol', '$'))

    if args.sort:
        labels = [c.label.lower() for c in table.columns]
        if args.sort.lower() not in labels:
            raise ValueError(f"Unknown column {args.sort!r}; choose from {', '.join(c.label for c in table.columns)}")
        index = labels.index(args.sort.lower())
        table.toggle_sort(index)
        if args.descending:
            table.toggle_sort(index)

    keys = {r.key for r in rows}
    for key in args.expand:
        if key not in keys:
            logger.warning(f"No target with key {key!r}; ignoring")
            continue
        if not table.is_expanded(key):
            table.toggle_expanded(key)

    return TableRenderer().render_page(
        table.render(rows),
        title=settings.get('title', 'Positions by Target'),
        output_path=args.output,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        html = render(args)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to render positions: {e}")
        return 1

    if not args.output:
        sys.stdout.write(html)
    return 0


if __name__ == '__main__':
    sys.exit(main())
