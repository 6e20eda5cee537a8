"""
DRIP simulation engine.

One lump-sum purchase at the first close, then every dividend is turned into
fractional shares at that day's close. Everything here is a pure function of
its arguments.
"""
from decimal import Decimal, InvalidOperation
from typing import Iterator, NamedTuple, Tuple
import logging

import pandas as pd

from config import DAYS_PER_YEAR
from simcore.errors import ValidationError
from simcore.ledger import D, ReinvestmentEvent, reinvest
from simcore.models import Observation, PriceSeries, SimulationResult

ZERO = Decimal("0")
ONE = Decimal("1")
HUNDRED = Decimal("100")

logger = logging.getLogger(__name__)


class Position(NamedTuple):
    shares: Decimal
    dividends: Decimal
    # product of (1 + dps / close) over dividend days
    factor: Decimal
    events: Tuple[ReinvestmentEvent, ...]


def _finite(x) -> Decimal:
    try:
        value = D(x)
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError(f"not a number: {x!r}")
    if not value.is_finite():
        raise ValidationError(f"not a finite number: {x!r}")
    return value


def validate_investment(initial_investment) -> Decimal:
    amount = _finite(initial_investment)
    if amount <= 0:
        raise ValidationError(f"initial investment must be positive, got {amount}")
    return amount


def validate_series(series: PriceSeries) -> None:
    if series is None or len(series) == 0:
        raise ValidationError("price series is empty")

    previous = None
    for obs in series:
        price = _finite(obs.close_price)
        if price <= 0:
            raise ValidationError(f"non-positive close price {price} on {obs.date}")
        dps = _finite(obs.dividend_per_share)
        if dps < 0:
            raise ValidationError(f"negative dividend {dps} on {obs.date}")
        if previous is not None:
            if obs.date == previous.date:
                raise ValidationError(f"duplicate date {obs.date}")
            if obs.date < previous.date:
                raise ValidationError(f"dates out of order: {obs.date} after {previous.date}")
        previous = obs


def _step(position: Position, obs: Observation) -> Position:
    dps = D(obs.dividend_per_share)
    if dps <= 0:
        return position
    price = D(obs.close_price)
    ev = reinvest(obs.date, position.shares, dps, price)
    return Position(
        shares=position.shares + ev.new_shares,
        dividends=position.dividends + ev.cash,
        factor=position.factor * (ONE + dps / price),
        events=position.events + (ev,),
    )


def _fold(series: PriceSeries, initial_investment: Decimal) -> Iterator[Tuple[Observation, Position]]:
    """Yields the position held at the close of every observation."""
    first = series.first
    position = Position(
        shares=initial_investment / D(first.close_price),
        dividends=ZERO,
        factor=ONE,
        events=(),
    )
    yield first, position
    for obs in series.observations[1:]:
        position = _step(position, obs)
        yield obs, position


def annualized_return_pct(growth: Decimal, elapsed_days) -> Decimal:
    """
    CAGR in percent for a value multiple `growth` over `elapsed_days`.
    A zero-length span has no compounding period, so the total return is
    returned unchanged.
    """
    growth = D(growth)
    years = D(elapsed_days) / DAYS_PER_YEAR
    if years <= 0:
        return (growth - ONE) * HUNDRED
    return (growth ** (ONE / years) - ONE) * HUNDRED


def simulate(series: PriceSeries, initial_investment, symbol: str = "") -> SimulationResult:
    validate_series(series)
    investment = validate_investment(initial_investment)

    position = None
    for _, position in _fold(series, investment):
        pass

    first, last = series.first, series.last
    start_price, end_price = D(first.close_price), D(last.close_price)

    # same as shares * end_price, exact when nothing was reinvested
    final_value = investment * (end_price / start_price) * position.factor
    growth = final_value / investment
    elapsed_days = (last.date - first.date).days

    result = SimulationResult(
        symbol=symbol,
        initial_investment=investment,
        total_shares=position.shares,
        total_dividends_received=position.dividends,
        final_value=final_value,
        total_return_pct=(growth - ONE) * HUNDRED,
        annualized_return_pct=annualized_return_pct(growth, elapsed_days),
        start_date=first.date,
        end_date=last.date,
        elapsed_days=elapsed_days,
        start_price=start_price,
        end_price=end_price,
        reinvestments=position.events,
    )
    logger.debug(
        "%s: %d obs, %d reinvestments, final value %.2f",
        symbol or "<series>", len(series), len(position.events), final_value,
    )
    return result


def position_history(series: PriceSeries, initial_investment) -> pd.DataFrame:
    """
    Daily shares held and position value, one row per observation,
    indexed by date.
    """
    validate_series(series)
    investment = validate_investment(initial_investment)

    rows = []
    for obs, position in _fold(series, investment):
        price = D(obs.close_price)
        rows.append({
            'date': pd.Timestamp(obs.date),
            'close': float(price),
            'dividend_per_share': float(D(obs.dividend_per_share)),
            'shares': float(position.shares),
            'value': float(position.shares * price),
        })
    return pd.DataFrame(rows).set_index('date')
