"""
Portfolio Module - Row adapters for the positions table.

Provides:
- Pydantic models for account positions and allocation targets
- Grouping of positions under targets (plus the unallocated bucket)
- Currency formatting
- The collapsible positions-by-target table
"""

from .models import AccountPosition, TargetPosition, DisplayTargetState
from .formatting import format_dollars
from .grouping import build_display_targets, UNALLOCATED_KEY, UNALLOCATED_NAME
from .position_table import (
    MoneyColumn,
    build_position_table,
    holdings_columns,
    target_columns,
)

__all__ = [
    # Models
    'AccountPosition',
    'TargetPosition',
    'DisplayTargetState',

    # Grouping
    'build_display_targets',
    'UNALLOCATED_KEY',
    'UNALLOCATED_NAME',

    # Table
    'MoneyColumn',
    'build_position_table',
    'holdings_columns',
    'target_columns',
    'format_dollars',
]
