from decimal import Decimal

from simcore.errors import ComparisonError
from simcore.models import ComparisonResult, SimulationResult


def compare(a: SimulationResult, b: SimulationResult) -> ComparisonResult:
    """Outperformance of `a` over `b` by final value, in dollars and percent of `b`."""
    if b.final_value == 0:
        raise ComparisonError(f"cannot compare against {b.symbol or 'benchmark'}: final value is zero")
    diff = a.final_value - b.final_value
    return ComparisonResult(
        label=a.symbol,
        benchmark=b.symbol,
        absolute_diff=diff,
        relative_diff_pct=diff / b.final_value * Decimal("100"),
    )
