"""Exception types raised by the partition transforms."""


class InvalidArgumentError(ValueError):
    """An argument lies outside the domain of the requested operation (e.g. alpha <= 0)."""


class ShapeError(ValueError):
    """Partition data is not a non-empty rectangular 2D matrix, or two operands differ in shape."""


class IllDefinedMeasureError(ZeroDivisionError):
    """A measure or transform has a vanishing denominator for the given input."""
