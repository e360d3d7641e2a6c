"""
Schema definitions for portfolio rows.

Pydantic models for:
- AccountPosition: One holding in the brokerage account
- TargetPosition: An allocation target (a named group of tickers and a weight)
- DisplayTargetState: A target together with the holdings that fall under it
"""

import re
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class AccountPosition(BaseModel):
    """A single account holding. `loss` is zero or negative."""
    ticker: str
    value: float = 0.0
    gain: float = 0.0
    loss: float = 0.0

    @field_validator('ticker')
    @classmethod
    def normalize_ticker(cls, v: str) -> str:
        v = v.strip().upper()
        if not v:
            raise ValueError("ticker must not be empty")
        return v

    @field_validator('value', 'gain', 'loss', mode='before')
    @classmethod
    def missing_as_zero(cls, v):
        return 0.0 if v is None or v == "" else v

    @property
    def key(self) -> str:
        return self.ticker

    @property
    def net(self) -> float:
        return self.gain + self.loss


class TargetPosition(BaseModel):
    """An allocation target: tickers that together should make up `weight`."""
    key: str = ""
    name: str
    tickers: List[str] = Field(default_factory=list)
    weight: float = Field(default=0.0, ge=0.0, le=1.0)
    direct: Optional[str] = None

    @field_validator('tickers')
    @classmethod
    def normalize_tickers(cls, v: List[str]) -> List[str]:
        seen = []
        for ticker in v:
            ticker = ticker.strip().upper()
            if ticker and ticker not in seen:
                seen.append(ticker)
        return seen

    @model_validator(mode='after')
    def default_key(self) -> 'TargetPosition':
        if not self.key:
            self.key = slugify(self.name)
        return self


class DisplayTargetState(BaseModel):
    """Row of the positions table: one target and its holdings."""
    target: TargetPosition
    holdings: List[AccountPosition] = Field(default_factory=list)

    @property
    def key(self) -> str:
        return self.target.key

    @property
    def value(self) -> float:
        return sum((p.value for p in self.holdings), 0.0)

    @property
    def gain(self) -> float:
        return sum((p.gain for p in self.holdings), 0.0)

    @property
    def loss(self) -> float:
        return sum((p.loss for p in self.holdings), 0.0)

    @property
    def net(self) -> float:
        return self.gain + self.loss


def slugify(name: str) -> str:
    return re.sub(r'[^a-z0-9]+', '-', name.lower()).strip('-')
