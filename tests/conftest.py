"""
Shared fixtures: small hand-checked price series and a throwaway CSV data folder.
"""
from datetime import date
from decimal import Decimal
from pathlib import Path

import pandas as pd
import pytest

from simcore.models import Observation, PriceSeries


def obs(d: str, price, dps="0") -> Observation:
    return Observation(date.fromisoformat(d), Decimal(str(price)), Decimal(str(dps)))


@pytest.fixture
def flat_series() -> PriceSeries:
    """Scenario A: no dividends, 100 -> 110 over one year."""
    return PriceSeries([obs("2023-01-01", "100"), obs("2023-12-31", "110")])


@pytest.fixture
def dividend_series() -> PriceSeries:
    """Scenario B: a single $1 dividend paid mid-year at $105."""
    return PriceSeries([
        obs("2023-01-01", "100"),
        obs("2023-07-01", "105", "1.00"),
        obs("2023-12-31", "110"),
    ])


@pytest.fixture
def quarterly_series() -> PriceSeries:
    """Two years of monthly closes with quarterly dividends and a dip."""
    prices = ["50", "51", "49.5", "52", "48", "45", "47", "50", "53", "54", "52.5", "55",
              "56", "55", "57", "58.5", "60", "59", "61", "62", "60.5", "63", "64", "65"]
    out = []
    for i, p in enumerate(prices):
        d = date(2022 + i // 12, i % 12 + 1, 1)
        dps = "0.42" if i % 3 == 2 else "0"
        out.append(obs(d.isoformat(), p, dps))
    return PriceSeries(out)


def write_history(folder: Path, symbol: str, rows, dividend_col="Dividend"):
    """rows: (date, close, dividend) tuples written as a Yahoo-style CSV."""
    df = pd.DataFrame(rows, columns=["Date", "Close", dividend_col])
    df["Open"] = df["Close"]
    path = folder / f"{symbol}.csv"
    df.to_csv(path, index=False)
    return path


@pytest.fixture
def data_folder(tmp_path: Path) -> Path:
    folder = tmp_path / "data"
    folder.mkdir()
    write_history(folder, "DIVCO", [
        ("2023-01-03", 100.0, 0.0),
        ("2023-04-03", 102.0, 0.0),
        ("2023-07-03", 105.0, 1.0),
        ("2023-10-02", 104.0, 0.0),
        ("2024-01-02", 110.0, 0.0),
    ])
    write_history(folder, "SPY", [
        ("2023-01-03", 380.0, 0.0),
        ("2023-06-16", 410.0, 1.64),
        ("2024-01-02", 418.0, 0.0),
    ], dividend_col="Dividends")
    write_history(folder, "QQQ", [
        ("2023-01-03", 260.0, 0.0),
        ("2024-01-02", 400.0, 0.0),
    ])
    return folder
