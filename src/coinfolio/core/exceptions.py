"""Application-level exceptions."""

from typing import Optional


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input to a ledger mutation is malformed."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class StorageConsistencyError(AppError):
    """Raised when a persisted balance does not read back as written."""

    def __init__(self, symbol: str, expected: float, stored: object):
        self.symbol = symbol
        self.expected = expected
        self.stored = stored
        super().__init__(
            f"Storage verification failed for {symbol}: expected {expected}, read back {stored}",
            code="STORAGE_CONSISTENCY",
        )


class UnsupportedCurrencyError(AppError):
    """Raised when a quote currency other than USD is requested."""

    def __init__(self, currency: str):
        self.currency = currency
        super().__init__(
            f"Only USD is supported as the target currency, got {currency!r}",
            code="UNSUPPORTED_CURRENCY",
        )


class UnsupportedSymbolError(AppError):
    """Raised when a symbol outside the supported set is requested."""

    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__(f"Symbol {symbol!r} is not supported", code="UNSUPPORTED_SYMBOL")


class RateUnavailableError(AppError):
    """Raised when no usable rate could be obtained from the price API."""

    def __init__(self, message: str):
        super().__init__(message, code="RATE_UNAVAILABLE")


class InsufficientBalanceError(AppError):
    """Raised when attempting to remove more than is held."""

    def __init__(self, symbol: str, requested: float, available: float):
        self.symbol = symbol
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient {symbol}: requested {requested}, available {available}",
            code="INSUFFICIENT_BALANCE",
        )


class PriceApiError(AppError):
    """Raised by price providers on timeout, network error or bad response."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message, code="PRICE_API_ERROR")
