"""Exception types raised by the stimulus and staircase code."""


class SFGError(Exception):
    """Base class for all package errors."""


class ConfigurationError(SFGError, ValueError):
    """Invalid parameter combination supplied by the caller.

    These are never transient: the caller has to fix the parameters.
    """


class EstimatorDegenerateError(SFGError, ArithmeticError):
    """The staircase posterior collapsed (zero or non-finite total mass)."""
