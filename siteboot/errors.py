from __future__ import annotations


class SiteBootError(Exception):
    """Base class for errors raised while estimating bootstrap intervals."""


class InvalidParameterError(SiteBootError, ValueError):
    pass


class EmptyInputError(SiteBootError, ValueError):
    pass


class InsufficientDataError(SiteBootError, ValueError):
    """Every resample of a group produced a missing statistic."""


class SparseBootstrapWarning(UserWarning):
    """Too few repeats for the requested confidence; bounds collapse to extreme order statistics."""
