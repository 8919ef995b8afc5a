"""Domain exceptions raised by the ledger engine."""


class LedgerError(Exception):
    """Base class for all ledger engine errors."""


class ParseError(LedgerError, ValueError):
    """Raised when a numeric or date literal cannot be parsed."""


class ArithmeticMismatchError(LedgerError, ArithmeticError):
    """Raised when amounts of incompatible commodities are combined."""


class LedgerLookupError(LedgerError, LookupError):
    """Raised when an identifier or a rate sample cannot be found."""


class IntegrityError(LedgerError):
    """Raised when the loaded ledger violates a structural rule."""


class InputError(LedgerError, ValueError):
    """Raised when a caller passes a value outside the accepted contract."""


__all__ = [
    "LedgerError",
    "ParseError",
    "ArithmeticMismatchError",
    "LedgerLookupError",
    "IntegrityError",
    "InputError",
]
