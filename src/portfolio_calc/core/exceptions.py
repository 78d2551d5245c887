"""Engine-level exceptions."""


class AppError(Exception):
    """Base exception for engine errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str, code: str = "VALIDATION_ERROR"):
        super().__init__(message, code=code)


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class InvalidInputError(ValidationError):
    """
    Raised when a value violates a construction invariant.

    Caller bug: zero/negative quantity or cost, malformed currency, etc.
    """

    def __init__(self, message: str, code: str = "INVALID_INPUT"):
        super().__init__(message, code=code)


class CurrencyMismatchError(InvalidInputError):
    """Raised when money values in different currencies are combined."""

    def __init__(self, left: str, right: str):
        super().__init__(
            f"Currency mismatch: {left} vs {right}",
            code="CURRENCY_MISMATCH",
        )
        self.left = left
        self.right = right


class EmptyAggregationError(InvalidInputError):
    """Raised when aggregating an empty holding list."""

    def __init__(self, symbol: str = ""):
        target = f" for {symbol}" if symbol else ""
        super().__init__(
            f"Cannot aggregate an empty holding list{target}",
            code="EMPTY_AGGREGATION",
        )


class DataUnavailableError(AppError):
    """Raised when external data needed for a computation is missing."""

    def __init__(self, message: str, code: str = "DATA_UNAVAILABLE"):
        super().__init__(message, code=code)


class PriceUnavailableError(DataUnavailableError):
    """Raised when no usable current price exists for an instrument."""

    def __init__(self, symbol: str):
        super().__init__(
            f"Current price unavailable for {symbol}",
            code="PRICE_UNAVAILABLE",
        )
        self.symbol = symbol


class XirrNotComputableError(AppError):
    """Raised when the XIRR solver cannot produce a rate."""

    def __init__(self, message: str, code: str = "XIRR_NOT_COMPUTABLE"):
        super().__init__(message, code=code)


class NoSolutionError(XirrNotComputableError):
    """Raised when NPV has no sign change, so no root can be bracketed."""

    def __init__(self, message: str = "No root found for cash flows"):
        super().__init__(message, code="XIRR_NO_SOLUTION")


class NoConvergenceError(XirrNotComputableError):
    """Raised when refinement exhausts its iteration budget."""

    def __init__(self, iterations: int):
        super().__init__(
            f"XIRR did not converge after {iterations} iterations",
            code="XIRR_NO_CONVERGENCE",
        )
        self.iterations = iterations
