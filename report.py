# report.py
from config import BENCHMARK_LABELS
from simcore.aggregators import dividends_by_year
from simulation import AnalysisReport, SymbolOutcome

RULE = "=" * 55

def _title(text):
    return [RULE, text.center(55).rstrip(), RULE, ""]

def _label(symbol):
    name = BENCHMARK_LABELS.get(symbol)
    return f"{symbol} ({name})" if name else symbol

def format_outcome(outcome: SymbolOutcome, show_yearly=False):
    lines = [f"{_label(outcome.symbol)} Performance:"]
    if not outcome.ok:
        lines.append(f"   FAILED [{outcome.error_kind}]: {outcome.message}")
        lines.append("")
        return lines

    r = outcome.result
    lines.append(f"   Period:             {r.start_date} to {r.end_date} ({r.elapsed_days} days)")
    lines.append(f"   Final Value:        ${r.final_value:,.2f}")
    lines.append(f"   Total Shares:       {r.total_shares:.4f}")
    lines.append(f"   Total Return:       {r.total_return_pct:.2f}%")
    lines.append(f"   Annualized Return:  {r.annualized_return_pct:.2f}%")
    lines.append(f"   Dividends Received: ${r.total_dividends_received:,.2f} ({r.reinvestment_count} reinvested)")
    if outcome.max_drawdown_pct is not None:
        lines.append(f"   Max Drawdown:       {outcome.max_drawdown_pct:.2f}%")

    if show_yearly and r.reinvestments:
        yearly = dividends_by_year(r)
        lines.append("   Dividends by year:")
        for row in yearly.itertuples():
            lines.append(f"     {row.year}: ${row.dividends:,.2f} -> {row.shares_bought:.4f} shares ({row.events}x)")
    lines.append("")
    return lines

def render_report(report: AnalysisReport, show_yearly=False) -> str:
    lines = _title("FINAL RESULTS")
    lines += format_outcome(report.target, show_yearly=show_yearly)
    for bench in report.benchmarks:
        lines += format_outcome(bench, show_yearly=show_yearly)

    lines += _title("COMPARATIVE ANALYSIS")
    if not report.target.ok:
        lines.append(f"No comparison: {report.ticker} could not be simulated.")
    for c in report.comparisons:
        lines.append(f"{c.label} vs {c.benchmark}: ${c.absolute_diff:,.2f} ({c.relative_diff_pct:.2f}%)")
    for msg in report.comparison_errors:
        lines.append(msg)
    if report.target.ok:
        for bench in report.benchmarks:
            if not bench.ok:
                lines.append(f"{report.ticker} vs {bench.symbol}: unavailable ({bench.error_kind})")

    return "\n".join(lines).rstrip() + "\n"
