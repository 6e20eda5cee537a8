import pandas as pd

from simcore.ledger import event_rows
from simcore.models import SimulationResult

EVENT_COLUMNS = ["date", "shares_before", "dividend_per_share", "cash",
                 "price", "new_shares", "shares_after"]

def reinvestments_frame(result: SimulationResult) -> pd.DataFrame:
    """One row per reinvested dividend, rounded for display."""
    rows = event_rows(result.reinvestments)
    if not rows:
        return pd.DataFrame(columns=EVENT_COLUMNS)
    df = pd.DataFrame(rows)[EVENT_COLUMNS]
    df["date"] = pd.to_datetime(df["date"])
    return df

def dividends_by_year(result: SimulationResult) -> pd.DataFrame:
    """
    Cash dividends reinvested and shares bought per calendar year.
    Columns: year, dividends, shares_bought, events
    """
    if not result.reinvestments:
        return pd.DataFrame(columns=["year", "dividends", "shares_bought", "events"])

    df = pd.DataFrame([{
        "year": ev.date.year,
        "dividends": float(ev.cash),
        "shares_bought": float(ev.new_shares),
    } for ev in result.reinvestments])

    yearly = (df.groupby("year")
                .agg(dividends=("dividends", "sum"),
                     shares_bought=("shares_bought", "sum"),
                     events=("dividends", "size"))
                .sort_index()
                .reset_index())
    return yearly
