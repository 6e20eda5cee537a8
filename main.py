# main.py
import argparse
import logging
import sys
from datetime import timedelta
from decimal import Decimal, InvalidOperation

import pandas as pd

from config import (DEFAULT_TICKER, DEFAULT_BENCHMARKS, INITIAL_INVESTMENT,
                    YEARS_BACK, WINDOW_DAYS_PER_YEAR)
from data_loader import CsvSeriesSource
from logger_setup import setup_logger
from report import render_report
from simulation import run_analysis

def _decimal(value):
    try:
        return Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}")

def _date(value):
    try:
        return pd.to_datetime(value, format="%Y-%m-%d").date()
    except (ValueError, TypeError):
        raise argparse.ArgumentTypeError(f"not a YYYY-MM-DD date: {value!r}")

def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="DRIP analyzer: dividend-reinvested return vs benchmarks")
    parser.add_argument('--ticker', type=str, default=DEFAULT_TICKER, help='Symbol to analyze')
    parser.add_argument('--benchmarks', nargs='*', default=list(DEFAULT_BENCHMARKS), help='Benchmark symbols')
    parser.add_argument('--investment', type=_decimal, default=INITIAL_INVESTMENT, help='Initial investment (e.g., "10000")')
    parser.add_argument('--years-back', type=int, default=YEARS_BACK, help='Look-back window in years when no start date is given')
    parser.add_argument('--start-date', type=_date, help='Analysis start date (YYYY-MM-DD)')
    parser.add_argument('--end-date', type=_date, help='Analysis end date (YYYY-MM-DD), defaults to today')
    parser.add_argument('--data-folder', type=str, help='Folder holding <SYMBOL>.csv price histories')
    parser.add_argument('--yearly', action='store_true', help='Show reinvested dividends per year')
    return parser.parse_args(argv)

def resolve_window(start_date=None, end_date=None, years_back=YEARS_BACK):
    end = pd.to_datetime(end_date).date() if end_date else pd.Timestamp.today().date()
    if start_date:
        start = pd.to_datetime(start_date).date()
    else:
        start = end - timedelta(days=WINDOW_DAYS_PER_YEAR * years_back)
    return start, end

def cli(argv=None):
    args = parse_args(argv)
    setup_logger()

    start, end = resolve_window(args.start_date, args.end_date, args.years_back)
    logging.info(f"Initial investment: ${args.investment:,.2f}")

    report = run_analysis(
        ticker=args.ticker.upper(),
        benchmarks=[b.upper() for b in args.benchmarks],
        start_date=start,
        end_date=end,
        initial_investment=args.investment,
        source=CsvSeriesSource(args.data_folder),
    )
    print(render_report(report, show_yearly=args.yearly))
    return 0 if report.target.ok else 1

if __name__ == "__main__":
    sys.exit(cli())
