"""Exception types raised by the sampler core.

Rejected draws inside the debiasing loop are not errors and never surface
here; they only show up in ``SamplerStatistics.reject_count``.
"""


class XrandError(Exception):
    pass


class InvalidRangeError(XrandError, ValueError):
    """``high <= low``, a non-integer bound, or a range wider than the
    source resolution."""


class ExhaustedError(XrandError, LookupError):
    """A replay source or the reference data ran out of values."""


class UnsupportedModeError(XrandError, ValueError):
    """The configuration asks for something the sampler cannot do.

    Raised when the sampler is built, never from ``next()``.
    """
