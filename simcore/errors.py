from enum import Enum


class DripError(Exception):
    """Base class for every failure the analyzer reports per symbol."""


class SimulationError(DripError):
    pass


class ValidationError(SimulationError):
    """Input series or investment amount violates a precondition."""


class ComparisonError(DripError):
    pass


class FetchErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    RANGE_UNAVAILABLE = "range_unavailable"
    UNAVAILABLE = "unavailable"


class FetchError(DripError):
    def __init__(self, symbol: str, kind: FetchErrorKind, message: str = "", retryable=None):
        self.symbol = symbol
        self.kind = kind
        self._retryable = retryable
        super().__init__(message or f"{kind.value} for {symbol}")

    @property
    def retryable(self) -> bool:
        """UNAVAILABLE is transient unless the source said otherwise (e.g. a malformed file)."""
        if self._retryable is not None:
            return self._retryable
        return self.kind is FetchErrorKind.UNAVAILABLE
