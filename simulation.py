# simulation.py
import asyncio
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from simcore.comparison import compare
from simcore.engine import simulate
from simcore.errors import DripError, FetchError, ValidationError
from simcore.models import ComparisonResult, SimulationResult
from utils import max_drawdown_pct, window_label

@dataclass
class SymbolOutcome:
    """Either a result or the error that stopped this symbol."""
    symbol: str
    result: Optional[SimulationResult] = None
    error: Optional[Exception] = None
    max_drawdown_pct: Optional[float] = None

    @property
    def ok(self) -> bool:
        return self.result is not None

    @property
    def error_kind(self) -> Optional[str]:
        if self.error is None:
            return None
        if isinstance(self.error, FetchError):
            return self.error.kind.value
        if isinstance(self.error, ValidationError):
            return "validation"
        if isinstance(self.error, DripError):
            return "simulation"
        return "internal"

    @property
    def message(self) -> str:
        if self.error is None:
            return ""
        if self.error_kind == "internal":
            return f"unexpected error: {self.error}"
        return str(self.error)

@dataclass
class AnalysisReport:
    ticker: str
    outcomes: List[SymbolOutcome]
    comparisons: List[ComparisonResult] = field(default_factory=list)
    comparison_errors: List[str] = field(default_factory=list)

    @property
    def target(self) -> SymbolOutcome:
        return self.outcomes[0]

    @property
    def benchmarks(self) -> List[SymbolOutcome]:
        return self.outcomes[1:]

def simulate_symbol(source, symbol, start_date, end_date, initial_investment) -> SymbolOutcome:
    """Fetch then simulate one symbol. The engine never runs on a failed fetch."""
    try:
        series = source.fetch(symbol, start_date, end_date)
    except FetchError as e:
        logging.warning(f"{symbol}: fetch failed ({e.kind.value}, retryable={e.retryable}): {e}")
        return SymbolOutcome(symbol, error=e)

    try:
        result = simulate(series, initial_investment, symbol=symbol)
        drawdown = max_drawdown_pct(series, initial_investment)
    except ValidationError as e:
        logging.warning(f"{symbol}: invalid input: {e}")
        return SymbolOutcome(symbol, error=e)

    logging.info(
        f"{symbol}: final value {result.final_value:.2f}, total return {result.total_return_pct:.2f}%, "
        f"annualized {result.annualized_return_pct:.2f}%, {result.reinvestment_count} reinvestments"
    )
    return SymbolOutcome(symbol, result=result, max_drawdown_pct=drawdown)

async def _run_symbol(source, symbol, start_date, end_date, initial_investment) -> SymbolOutcome:
    return await asyncio.to_thread(simulate_symbol, source, symbol, start_date, end_date, initial_investment)

async def run_comparison(ticker: str, benchmarks: Sequence[str], start_date, end_date,
                         initial_investment, source) -> AnalysisReport:
    """
    Simulate the ticker and every benchmark concurrently, wait for all of
    them, then compare the ticker against each benchmark that succeeded.
    """
    logging.info(f"Analyzing {ticker} vs {', '.join(benchmarks)} from {window_label(start_date, end_date)}")
    symbols = [ticker, *benchmarks]

    gathered = await asyncio.gather(
        *(_run_symbol(source, s, start_date, end_date, initial_investment) for s in symbols),
        return_exceptions=True,
    )

    outcomes = []
    for symbol, item in zip(symbols, gathered):
        if isinstance(item, Exception):
            logging.error(f"{symbol}: simulation crashed", exc_info=item)
            item = SymbolOutcome(symbol, error=item)
        outcomes.append(item)

    report = AnalysisReport(ticker=ticker, outcomes=outcomes)
    if not report.target.ok:
        logging.warning(f"{ticker}: no result, skipping comparisons")
        return report

    for bench in report.benchmarks:
        if not bench.ok:
            continue
        try:
            report.comparisons.append(compare(report.target.result, bench.result))
        except DripError as e:
            logging.warning(f"{ticker} vs {bench.symbol}: {e}")
            report.comparison_errors.append(f"{ticker} vs {bench.symbol}: {e}")

    return report

def run_analysis(ticker, benchmarks, start_date, end_date, initial_investment, source) -> AnalysisReport:
    logging.info("Starting DRIP analysis")
    report = asyncio.run(run_comparison(ticker, benchmarks, start_date, end_date, initial_investment, source))
    failed = [o.symbol for o in report.outcomes if not o.ok]
    if failed:
        logging.warning(f"Finished with failures for: {', '.join(failed)}")
    else:
        logging.info("DRIP analysis completed successfully")
    return report
