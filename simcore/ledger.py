from dataclasses import dataclass, asdict
from decimal import Decimal, ROUND_HALF_EVEN, getcontext
from typing import Iterable, List
from datetime import date as date_cls

getcontext().prec = 28  # robust precision

def D(x) -> Decimal:
    if isinstance(x, Decimal):
        return x
    return Decimal(str(x))

def q2(x: Decimal) -> Decimal:
    return x.quantize(Decimal("0.01"), rounding=ROUND_HALF_EVEN)

def q4(x: Decimal) -> Decimal:
    return x.quantize(Decimal("0.0001"), rounding=ROUND_HALF_EVEN)

@dataclass(frozen=True)
class ReinvestmentEvent:
    date: date_cls
    shares_before: Decimal
    dividend_per_share: Decimal
    cash: Decimal
    price: Decimal
    new_shares: Decimal

    @property
    def shares_after(self) -> Decimal:
        return self.shares_before + self.new_shares

def reinvest(on: date_cls, shares: Decimal, dividend_per_share: Decimal, price: Decimal) -> ReinvestmentEvent:
    """Dividend accrues on every share held that day and buys at that day's close."""
    cash = shares * dividend_per_share
    return ReinvestmentEvent(
        date=on,
        shares_before=shares,
        dividend_per_share=dividend_per_share,
        cash=cash,
        price=price,
        new_shares=cash / price,
    )

def event_rows(events: Iterable[ReinvestmentEvent]) -> List[dict]:
    """Display rows: money to cents, shares to four places."""
    rows = []
    for ev in events:
        row = asdict(ev)
        row["shares_after"] = ev.shares_after
        row["cash"] = q2(ev.cash)
        row["price"] = q2(ev.price)
        for k in ("shares_before", "new_shares", "shares_after", "dividend_per_share"):
            row[k] = q4(row[k])
        rows.append(row)
    return rows
