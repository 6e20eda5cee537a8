# utils.py
import pandas as pd

from simcore.engine import position_history
from simcore.models import PriceSeries

def calculate_drawdown(series: pd.Series) -> pd.Series:
    peak = series.cummax()
    drawdown = (series - peak) / peak
    return drawdown

def max_drawdown_pct(series: PriceSeries, initial_investment) -> float:
    """Deepest peak-to-trough fall of the DRIP position value, in percent (<= 0)."""
    history = position_history(series, initial_investment)
    return float(calculate_drawdown(history['value']).min() * 100)

def window_label(start, end) -> str:
    return f"{pd.Timestamp(start).date()} to {pd.Timestamp(end).date()}"
