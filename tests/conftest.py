"""
Pytest configuration and shared fixtures.
"""
import pytest
from dataclasses import dataclass
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from allocation.portfolio import AccountPosition, TargetPosition
from allocation.tables import NumberColumn, StringColumn


@dataclass
class Row:
    """Minimal keyed row."""
    key: str
    value: float = 0
    name: str = ""


@pytest.fixture
def abc_rows():
    """Rows A=10, B=30, C=20 in insertion order."""
    return [Row("A", 10, "alpha"), Row("B", 30, "Bravo"), Row("C", 20, "charlie")]


@pytest.fixture
def value_columns():
    """Name and value columns over `Row`."""
    return [
        StringColumn('Name', lambda r: r.name),
        NumberColumn('Value', lambda r: r.value),
    ]


@pytest.fixture
def sample_positions():
    """Account positions across four tickers."""
    return [
        AccountPosition(ticker="VTI", value=1000.0, gain=200.0, loss=0.0),
        AccountPosition(ticker="AAPL", value=500.0, gain=50.0, loss=-20.0),
        AccountPosition(ticker="BND", value=300.0, gain=0.0, loss=-15.0),
        AccountPosition(ticker="TSLA", value=200.0, gain=0.0, loss=-80.0),
    ]


@pytest.fixture
def sample_targets():
    """Two targets; TSLA belongs to neither."""
    return [
        TargetPosition(key="stocks", name="Stocks", tickers=["VTI", "AAPL"], weight=0.6),
        TargetPosition(key="bonds", name="Bonds", tickers=["BND", "BNDX"], weight=0.4),
    ]


@pytest.fixture
def data_files(tmp_path):
    """Positions CSV and targets YAML on disk."""
    positions = tmp_path / "positions.csv"
    positions.write_text(
        "Symbol,Value,Gain,Loss\n"
        "VTI,1000,200,0\n"
        "AAPL,500,50,-20\n"
        "BND,300,,-15\n"
        "TSLA,200,0,-80\n"
    )
    targets = tmp_path / "targets.yaml"
    targets.write_text(
        "targets:\n"
        "  - key: stocks\n"
        "    name: Stocks\n"
        "    tickers: [VTI, AAPL]\n"
        "    weight: 0.6\n"
        "  - key: bonds\n"
        "    name: Bonds\n"
        "    tickers: [BND]\n"
        "    weight: 0.4\n"
    )
    return positions, targets
