"""Exceptions raised by the tile selector."""


class InvalidInput(ValueError):
    """Raised when a query cannot be answered.

    Covers a non-positive viewport width, a degenerate or reversed query
    box, and missing or non-numeric request parameters.
    """
    pass
