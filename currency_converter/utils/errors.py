"""Custom exception classes for the Currency Converter."""


class CurrencyConverterError(Exception):
    """Base exception for all Currency Converter errors."""
    pass


class ConfigurationError(CurrencyConverterError):
    """Raised when there's a configuration error."""
    pass


class ValidationError(CurrencyConverterError):
    """Raised when client input fails validation."""

    MISSING_PARAMETER = "missing_parameter"
    INVALID_AMOUNT = "invalid_amount"
    UNKNOWN_CURRENCY = "unknown_currency"

    def __init__(self, message: str, kind: str = "invalid"):
        super().__init__(message)
        self.kind = kind


class UpstreamError(CurrencyConverterError):
    """Raised when the rate provider or log store cannot be reached or read."""
    pass


class ComputationError(CurrencyConverterError):
    """Raised when rate data cannot produce a conversion (e.g. zero base rate)."""
    pass


class PersistenceError(CurrencyConverterError):
    """Raised when the conversion log store fails."""
    pass
