"""
Grouping of account positions under allocation targets.

Every target gets the positions of the tickers it lists. Positions no
target claims are collected in a trailing "Unallocated Positions" row.
"""

import logging
from typing import Iterable, List, Tuple

from .models import AccountPosition, DisplayTargetState, TargetPosition

logger = logging.getLogger(__name__)


UNALLOCATED_KEY = "unallocated"
UNALLOCATED_NAME = "Unallocated Positions"


def _avoid_reserved_key(target: TargetPosition, reserved: str) -> TargetPosition:
    """Rename a target whose key collides with the unallocated row."""
    if target.key != reserved:
        return target
    key = f"{reserved}-target"
    logger.warning(
        f"Target {target.name!r} uses reserved key {reserved!r}; renamed to {key!r}"
    )
    return target.model_copy(update={"key": key})


def build_display_targets(
    targets: Iterable[TargetPosition],
    positions: Iterable[AccountPosition],
    unallocated_key: str = UNALLOCATED_KEY,
    unallocated_name: str = UNALLOCATED_NAME,
) -> Tuple[float, List[DisplayTargetState]]:
    """
    Group positions by target.

    Args:
        targets: Allocation targets, in display order
        positions: Account positions
        unallocated_key: Row key of the unallocated bucket
        unallocated_name: Display name of the unallocated bucket

    Returns:
        (total account value, one row per target plus the unallocated row)
    """
    targets = [_avoid_reserved_key(t, unallocated_key) for t in targets]
    by_ticker = {p.ticker: p for p in positions}

    rows = [
        DisplayTargetState(
            target=target,
            holdings=[by_ticker[t] for t in target.tickers if t in by_ticker],
        )
        for target in targets
    ]

    allocated = {t for target in targets for t in target.tickers}
    unallocated = DisplayTargetState(
        target=TargetPosition(
            key=unallocated_key,
            name=unallocated_name,
            tickers=[],
            weight=0.0,
        ),
        holdings=[p for p in by_ticker.values() if p.ticker not in allocated],
    )
    rows.append(unallocated)

    total_value = sum((p.value for p in by_ticker.values()), 0.0)

    total_weight = sum(t.weight for t in targets)
    if total_weight > 1.0 + 1e-9:
        logger.warning(f"Target weights sum to {total_weight:.2%}, above 100%")

    logger.debug(
        f"Grouped {len(by_ticker)} positions under {len(targets)} targets "
        f"({len(unallocated.holdings)} unallocated)"
    )
    return total_value, rows
