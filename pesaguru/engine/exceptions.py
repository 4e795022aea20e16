"""Loan engine exceptions.

Every error subclasses ValueError so callers that already treat bad input as a
ValueError (the API layer included) surface these as user-facing messages.
"""


class LoanEngineError(ValueError):
    """Base exception for the loan engine"""


class InvalidAmountError(LoanEngineError):
    """Principal, payment, income or threshold is out of range"""


class InvalidRateError(LoanEngineError):
    """Annual interest rate is negative or not a finite number"""


class InvalidTermError(LoanEngineError):
    """Term is missing, not a positive integer, or above the period ceiling"""


class UnsupportedFrequencyError(LoanEngineError):
    """Payment frequency is not one of weekly, biweekly, monthly, quarterly"""


class EmptyOfferSetError(LoanEngineError):
    """Comparison was requested with no loan offers"""


class ComputationError(LoanEngineError):
    """An intermediate value overflowed or was not finite"""
