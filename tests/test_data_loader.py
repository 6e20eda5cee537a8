from datetime import date
from decimal import Decimal

import pytest

from conftest import write_history
from data_loader import CsvSeriesSource
from simcore.errors import FetchError, FetchErrorKind


def test_fetch_window_is_inclusive_and_sorted(data_folder):
    source = CsvSeriesSource(data_folder)
    series = source.fetch("DIVCO", date(2023, 4, 3), date(2023, 10, 2))

    assert [o.date for o in series] == [date(2023, 4, 3), date(2023, 7, 3), date(2023, 10, 2)]
    assert series[1].dividend_per_share == Decimal("1.0")
    assert series[0].dividend_per_share == 0
    assert series.first.close_price == Decimal("102.0")


def test_fetch_lowercase_symbol(data_folder):
    series = CsvSeriesSource(data_folder).fetch("qqq", date(2023, 1, 1), date(2024, 12, 31))
    assert len(series) == 2


def test_dividends_column_alias(data_folder):
    series = CsvSeriesSource(data_folder).fetch("SPY", date(2023, 1, 1), date(2024, 12, 31))
    assert [o.dividend_per_share for o in series] == [Decimal("0.0"), Decimal("1.64"), Decimal("0.0")]


def test_unknown_symbol(data_folder):
    with pytest.raises(FetchError) as exc:
        CsvSeriesSource(data_folder).fetch("NOPE", date(2023, 1, 1), date(2023, 12, 31))
    assert exc.value.kind is FetchErrorKind.NOT_FOUND
    assert exc.value.symbol == "NOPE"
    assert not exc.value.retryable


def test_empty_window(data_folder):
    with pytest.raises(FetchError) as exc:
        CsvSeriesSource(data_folder).fetch("DIVCO", date(2010, 1, 1), date(2010, 12, 31))
    assert exc.value.kind is FetchErrorKind.RANGE_UNAVAILABLE


def test_malformed_file_is_unavailable(tmp_path):
    (tmp_path / "BAD.csv").write_text("Date,Open\n2023-01-03,1.0\n", encoding="utf-8")
    with pytest.raises(FetchError) as exc:
        CsvSeriesSource(tmp_path).fetch("BAD", date(2023, 1, 1), date(2023, 12, 31))
    assert exc.value.kind is FetchErrorKind.UNAVAILABLE
    assert not exc.value.retryable


def test_empty_file_is_unavailable(tmp_path):
    (tmp_path / "EMPTY.csv").write_text("", encoding="utf-8")
    with pytest.raises(FetchError) as exc:
        CsvSeriesSource(tmp_path).fetch("EMPTY", date(2023, 1, 1), date(2023, 12, 31))
    assert exc.value.kind is FetchErrorKind.UNAVAILABLE


def test_unsorted_duplicate_and_blank_rows_are_cleaned(tmp_path):
    (tmp_path / "MESSY.csv").write_text(
        "Date,Close,Dividend\n"
        "2023-03-01,12.0,\n"
        "2023-01-02,10.0,0\n"
        "2023-02-01,,0\n"
        "2023-03-01,12.5,0.25\n",
        encoding="utf-8",
    )
    series = CsvSeriesSource(tmp_path).fetch("MESSY", date(2023, 1, 1), date(2023, 12, 31))

    assert [o.date for o in series] == [date(2023, 1, 2), date(2023, 3, 1)]
    assert series.last.close_price == Decimal("12.5")
    assert series.last.dividend_per_share == Decimal("0.25")


def test_missing_dividend_column_means_zero(tmp_path):
    (tmp_path / "NODIV.csv").write_text("Date,Close\n2023-01-02,10\n2023-01-03,11\n", encoding="utf-8")
    series = CsvSeriesSource(tmp_path).fetch("NODIV", date(2023, 1, 1), date(2023, 1, 31))
    assert all(o.dividend_per_share == 0 for o in series)


def test_series_is_immutable_value(data_folder):
    source = CsvSeriesSource(data_folder)
    a = source.fetch("DIVCO", date(2023, 1, 1), date(2024, 1, 31))
    b = source.fetch("DIVCO", date(2023, 1, 1), date(2024, 1, 31))
    assert a == b
    with pytest.raises(AttributeError):
        a.first.close_price = Decimal("1")


def test_write_history_helper_round_trip(tmp_path):
    write_history(tmp_path, "ONE", [("2023-05-05", 42.0, 0.0)])
    series = CsvSeriesSource(tmp_path).fetch("ONE", date(2023, 5, 5), date(2023, 5, 5))
    assert len(series) == 1


def test_yahoo_offset_dates_keep_the_local_trading_day(tmp_path):
    (tmp_path / "TZ.csv").write_text(
        "Date,Close,Dividends\n"
        "2023-01-03 00:00:00-05:00,100.0,0\n"
        "2023-07-03 00:00:00-04:00,105.0,1.0\n"
        "2023-12-29 00:00:00-05:00,110.0,0\n",
        encoding="utf-8",
    )
    series = CsvSeriesSource(tmp_path).fetch("TZ", date(2023, 1, 3), date(2023, 12, 29))

    assert [o.date for o in series] == [date(2023, 1, 3), date(2023, 7, 3), date(2023, 12, 29)]
    assert series[1].dividend_per_share == Decimal("1.0")


def test_single_offset_dates_filter_against_naive_window(tmp_path):
    (tmp_path / "EST.csv").write_text(
        "Date,Close\n"
        "2023-01-03 00:00:00-05:00,10\n"
        "2023-01-04 00:00:00-05:00,11\n"
        "2023-02-01 00:00:00-05:00,12\n",
        encoding="utf-8",
    )
    series = CsvSeriesSource(tmp_path).fetch("EST", date(2023, 1, 4), date(2023, 1, 31))
    assert [o.date for o in series] == [date(2023, 1, 4)]


def test_positive_offset_is_not_shifted_to_previous_day(tmp_path):
    (tmp_path / "CET.csv").write_text("Date,Close\n2023-03-01 00:00:00+01:00,20\n", encoding="utf-8")
    series = CsvSeriesSource(tmp_path).fetch("CET", date(2023, 3, 1), date(2023, 3, 1))
    assert series.first.date == date(2023, 3, 1)


def test_unreadable_dates_are_dropped(tmp_path):
    (tmp_path / "ODD.csv").write_text(
        "Date,Close\nnot-a-date,9\n2023-01-03,10\n2023-13-45,11\n", encoding="utf-8"
    )
    series = CsvSeriesSource(tmp_path).fetch("ODD", date(2023, 1, 1), date(2023, 12, 31))
    assert [o.date for o in series] == [date(2023, 1, 3)]


def test_io_failure_is_retryable(tmp_path):
    (tmp_path / "DIR.csv").mkdir()
    with pytest.raises(FetchError) as exc:
        CsvSeriesSource(tmp_path).fetch("DIR", date(2023, 1, 1), date(2023, 12, 31))
    assert exc.value.kind is FetchErrorKind.UNAVAILABLE
    assert exc.value.retryable
