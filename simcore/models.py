from dataclasses import dataclass, field
from datetime import date as date_cls
from decimal import Decimal
from typing import Iterable, Tuple

import pandas as pd

from config import DIVIDEND_COLUMNS, PRICE_COLUMN
from simcore.ledger import D, ReinvestmentEvent


@dataclass(frozen=True)
class Observation:
    date: date_cls
    close_price: Decimal
    dividend_per_share: Decimal = Decimal("0")


class PriceSeries:
    """
    Immutable, date-ordered run of Observations for one symbol.
    Ordering is checked by the engine, never fixed up here.
    """

    def __init__(self, observations: Iterable[Observation] = ()):
        self._observations: Tuple[Observation, ...] = tuple(observations)

    @classmethod
    def from_frame(cls, df: pd.DataFrame) -> "PriceSeries":
        """
        Build from a DataFrame indexed by date with a 'Close' column and an
        optional 'Dividend'/'Dividends' column (blank cells count as 0).
        """
        div_col = next((c for c in DIVIDEND_COLUMNS if c in df.columns), None)
        observations = []
        for idx, row in df.iterrows():
            dps = row[div_col] if div_col is not None else 0
            observations.append(Observation(
                date=pd.Timestamp(idx).date(),
                close_price=D(row[PRICE_COLUMN]),
                dividend_per_share=D(dps) if pd.notna(dps) else Decimal("0"),
            ))
        return cls(observations)

    @property
    def observations(self) -> Tuple[Observation, ...]:
        return self._observations

    @property
    def first(self) -> Observation:
        return self._observations[0]

    @property
    def last(self) -> Observation:
        return self._observations[-1]

    def __len__(self):
        return len(self._observations)

    def __iter__(self):
        return iter(self._observations)

    def __getitem__(self, i):
        return self._observations[i]

    def __eq__(self, other):
        if not isinstance(other, PriceSeries):
            return NotImplemented
        return self._observations == other._observations

    def __hash__(self):
        return hash(self._observations)

    def __repr__(self):
        if not self._observations:
            return "PriceSeries([])"
        return f"PriceSeries({len(self)} obs, {self.first.date} -> {self.last.date})"


@dataclass(frozen=True)
class SimulationResult:
    symbol: str
    initial_investment: Decimal
    total_shares: Decimal
    total_dividends_received: Decimal
    final_value: Decimal
    total_return_pct: Decimal
    annualized_return_pct: Decimal
    start_date: date_cls
    end_date: date_cls
    elapsed_days: int
    start_price: Decimal
    end_price: Decimal
    reinvestments: Tuple[ReinvestmentEvent, ...] = field(default=())

    @property
    def reinvestment_count(self) -> int:
        return len(self.reinvestments)


@dataclass(frozen=True)
class ComparisonResult:
    label: str
    benchmark: str
    absolute_diff: Decimal
    relative_diff_pct: Decimal
