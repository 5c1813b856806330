"""
Error and warning categories raised by the SWRR analysis.

Warnings are issued through the ``warnings`` module so that each category can
be silenced on its own, e.g.::

    warnings.filterwarnings("ignore", category=FilterParamsNotPrecalculatedWarning)
"""


class SWRRError(Exception):
    """Base class for all errors raised by the package."""


class InvalidArgumentError(SWRRError, ValueError):
    """Invalid sample rate, signal length, filter band or argument combination."""


class SWRRWarning(UserWarning):
    """Base class for non-fatal conditions."""


class FilterParamsNotPrecalculatedWarning(SWRRWarning):
    """
    Requested Butterworth configuration is not in the precomputed table.
    The coefficients were designed on the fly instead.
    """


class ResamplingToSlowerRateWarning(SWRRWarning):
    """Resampling to a lower rate discards information before detection."""
