# src/leasehold/domain/errors.py


class InvalidInput(ValueError):
    """Raised when a valuation input is outside its valid domain."""
