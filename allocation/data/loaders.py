"""
Loaders for account positions and allocation targets.

Positions come from a brokerage CSV export (read with pandas) or a JSON
list. Targets come from a YAML or JSON file, either a plain list or a
mapping with a `targets` list.
"""

import json
import logging
from pathlib import Path
from typing import Any, List, Union

import pandas as pd
import yaml

from ..portfolio.models import AccountPosition, TargetPosition

logger = logging.getLogger(__name__)


# Alternative CSV headers seen in brokerage exports
POSITION_COLUMN_ALIASES = {
    'symbol': 'ticker',
    'market_value': 'value',
    'unrealized_gain': 'gain',
    'unrealized_loss': 'loss',
}

NUMERIC_COLUMNS = ('value', 'gain', 'loss')


def load_positions(path: Union[str, Path]) -> List[AccountPosition]:
    """
    Read account positions from a `.csv` or `.json` file.

    Missing numeric cells are read as zero.

    Raises:
        FileNotFoundError: if the file does not exist
        ValueError: on an unsupported extension or invalid rows
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Positions file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == '.csv':
        records = _read_positions_csv(path)
    elif suffix == '.json':
        records = _read_json(path)
    else:
        raise ValueError(f"Unsupported positions file type: {path}")

    if not isinstance(records, list):
        raise ValueError(f"Expected a list of positions in {path}")

    positions = [AccountPosition(**r) for r in records]
    logger.info(f"Loaded {len(positions)} positions from {path}")
    return positions


def load_targets(path: Union[str, Path]) -> List[TargetPosition]:
    """
    Read allocation targets from a `.yaml`/`.yml` or `.json` file.

    Raises:
        FileNotFoundError: if the file does not exist
        ValueError: on an unsupported extension or invalid targets
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Targets file not found: {path}")

    suffix = path.suffix.lower()
    if suffix in ('.yaml', '.yml'):
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
    elif suffix == '.json':
        data = _read_json(path)
    else:
        raise ValueError(f"Unsupported targets file type: {path}")

    if isinstance(data, dict):
        data = data.get('targets', [])
    if data is None:
        data = []
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of targets in {path}")

    targets = [TargetPosition(**t) for t in data]
    logger.info(f"Loaded {len(targets)} targets from {path}")
    return targets


def _read_positions_csv(path: Path) -> List[dict]:
    df = pd.read_csv(path)
    df.columns = [str(c).strip().lower().replace(' ', '_') for c in df.columns]
    df = df.rename(columns=POSITION_COLUMN_ALIASES)

    if 'ticker' not in df.columns:
        raise ValueError(f"Positions CSV {path} has no ticker/symbol column")

    for col in NUMERIC_COLUMNS:
        if col not in df.columns:
            df[col] = 0.0
        df[col] = pd.to_numeric(df[col], errors='coerce').fillna(0.0)

    df = df.dropna(subset=['ticker'])
    df['ticker'] = df['ticker'].astype(str)
    return df[['ticker', *NUMERIC_COLUMNS]].to_dict(orient='records')


def _read_json(path: Path) -> Any:
    with open(path, 'r') as f:
        return json.load(f)
