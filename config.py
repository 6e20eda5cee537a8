# config.py
from decimal import Decimal
import pathlib

ROOT_DIR = pathlib.Path(__file__).resolve().parent
DATA_FOLDER = ROOT_DIR / 'data'
LOG_DIR = pathlib.Path("logs")

DEFAULT_TICKER = 'AAPL'
DEFAULT_BENCHMARKS = ('SPY', 'QQQ')

BENCHMARK_LABELS = {
    'SPY': 'S&P 500',
    'QQQ': 'Nasdaq-100',
    'DIA': 'Dow Jones',
    'IWM': 'Russell 2000',
}

INITIAL_INVESTMENT = Decimal("10000")
YEARS_BACK = 15

# look-back window ignores leap days, annualization does not
WINDOW_DAYS_PER_YEAR = 365
DAYS_PER_YEAR = Decimal("365.25")

PRICE_COLUMN = 'Close'
DIVIDEND_COLUMNS = ('Dividend', 'Dividends')
