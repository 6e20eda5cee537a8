# data_loader.py
import logging
from pathlib import Path

import pandas as pd

from config import DATA_FOLDER, DIVIDEND_COLUMNS, PRICE_COLUMN
from simcore.errors import FetchError, FetchErrorKind
from simcore.models import PriceSeries

def _trading_day(value):
    """
    Calendar date of one Date cell as the exchange wrote it. Yahoo exports
    '2023-01-03 00:00:00-05:00'; the offset is dropped, not converted, so
    midnight local time stays on its own day.
    """
    try:
        ts = pd.Timestamp(value)
    except (ValueError, TypeError):
        return pd.NaT
    if ts is pd.NaT:
        return pd.NaT
    if ts.tzinfo is not None:
        ts = ts.tz_localize(None)
    return ts.normalize()

def load_price_frame(path: Path, symbol: str) -> pd.DataFrame:
    """
    Read one Yahoo-style history CSV (Date, Close, optional Dividend/Dividends)
    into a date-sorted frame with unique, tz-naive dates and numeric columns.
    """
    try:
        df = pd.read_csv(path, index_col='Date', dtype={'Date': str})
    except OSError as e:
        raise FetchError(symbol, FetchErrorKind.UNAVAILABLE, f"could not read {path.name}: {e}") from e
    except (ValueError, pd.errors.ParserError, UnicodeDecodeError) as e:
        # the file itself is bad, reading it again will not help
        raise FetchError(symbol, FetchErrorKind.UNAVAILABLE, f"malformed {path.name}: {e}", retryable=False) from e

    if PRICE_COLUMN not in df.columns:
        raise FetchError(symbol, FetchErrorKind.UNAVAILABLE, f"{path.name} has no '{PRICE_COLUMN}' column",
                         retryable=False)

    df.index = pd.DatetimeIndex([_trading_day(v) for v in df.index], name='Date')
    bad_dates = df.index.isna()
    if bad_dates.any():
        logging.warning(f"{symbol}: dropping {int(bad_dates.sum())} rows with an unreadable date")
    df = df[~bad_dates].sort_index(kind='mergesort')

    for col in (PRICE_COLUMN,) + DIVIDEND_COLUMNS:
        if col in df.columns:
            df[col] = pd.to_numeric(df[col], errors='coerce')

    missing = df[PRICE_COLUMN].isna()
    if missing.any():
        logging.warning(f"{symbol}: dropping {int(missing.sum())} rows without a close price")
        df = df[~missing]

    dupes = df.index.duplicated(keep='last')
    if dupes.any():
        logging.warning(f"{symbol}: {int(dupes.sum())} duplicate dates, keeping the last row of each")
        df = df[~dupes]

    df = df.copy()
    div_col = next((c for c in DIVIDEND_COLUMNS if c in df.columns), None)
    if div_col is None:
        df['Dividend'] = 0.0
    else:
        df[div_col] = df[div_col].fillna(0.0)

    return df

class CsvSeriesSource:
    """Serves price series from previously downloaded <SYMBOL>.csv files."""

    def __init__(self, data_folder=None):
        self.data_folder = Path(data_folder) if data_folder else DATA_FOLDER

    def path_for(self, symbol: str) -> Path:
        return self.data_folder / f"{symbol.upper()}.csv"

    def fetch(self, symbol: str, start_date, end_date) -> PriceSeries:
        """Observations with start_date <= date <= end_date, ascending."""
        path = self.path_for(symbol)
        if not path.exists():
            raise FetchError(symbol, FetchErrorKind.NOT_FOUND, f"no price history for {symbol} in {self.data_folder}")

        df = load_price_frame(path, symbol)
        start, end = pd.Timestamp(start_date), pd.Timestamp(end_date)
        window = df[(df.index >= start) & (df.index <= end)]
        if window.empty:
            raise FetchError(
                symbol, FetchErrorKind.RANGE_UNAVAILABLE,
                f"no {symbol} data between {start.date()} and {end.date()}",
            )

        logging.info(f"Loaded price data for {symbol} ({len(window)} rows, {start.date()} to {end.date()})")
        return PriceSeries.from_frame(window)
