from __future__ import annotations
import numpy as np

from .errors import IllDefinedMeasureError
from .types import FuzzyPartition


def complement_lambdas(partition: FuzzyPartition) -> np.ndarray:
    """
    Per-column blending factors of the complement operator:

        lambda_j = M * (max_j - min_j) / (1 - M * min_j)

    or 0 for a constant column (max_j == min_j).
    """
    values = partition.values
    m = partition.rows
    column_max = values.max(axis=0)
    column_min = values.min(axis=0)
    constant = column_max == column_min

    denominator = 1.0 - m * column_min
    if np.any((denominator == 0) & ~constant):
        raise IllDefinedMeasureError("Complement is undefined: 1 - M*min is zero for a non-constant column. "
                                     "The column is within floating-point error of uniform or the partition is not valid.")
    safe_denominator = np.where(constant, 1.0, denominator)
    return np.where(constant, 0.0, m * (column_max - column_min) / safe_denominator)


def complement(partition: FuzzyPartition) -> FuzzyPartition:
    """
    Returns the complement of a fuzzy partition.

    Each column is mapped as u -> (u - lambda/M) / (1 - lambda), with lambda
    from `complement_lambdas`. For valid partitions the operator is an
    involution: complement(complement(U)) == U. Constant columns are their
    own complement.

    Raises:
        IllDefinedMeasureError: If a column's factor makes the map singular
                                (an invalid partition, or a column within
                                floating-point error of uniform).
    """
    lambdas = complement_lambdas(partition)
    m = partition.rows

    divisor = 1.0 - lambdas
    if np.any(divisor == 0):
        raise IllDefinedMeasureError("Complement is undefined: a column has lambda == 1.")
    return FuzzyPartition((partition.values - lambdas / m) / divisor)
