"""
Alpha-level cuts of a fuzzy partition and the alpha-approximation measure.

An alpha-level cut keeps, in every column, the memberships at or above
`alpha` and spreads the column's unit mass evenly over them. Its
complement spreads the mass over the memberships that did not make the cut.
"""
from __future__ import annotations
from typing import Tuple
import numpy as np

from .errors import InvalidArgumentError, IllDefinedMeasureError
from .types import FuzzyPartition, require_same_shape


def _cut_columns(partition: FuzzyPartition, alpha: float) -> Tuple[np.ndarray, np.ndarray]:
    """
    Checks alpha against the partition and returns the cut mask and the
    number of cut members per column.

    Raises:
        InvalidArgumentError: If alpha is not > 0 (NaN included), or if alpha
                              is not strictly lower than the maximum of every column.
    """
    if not alpha > 0.0:
        raise InvalidArgumentError("Value of alpha must be bigger than zero")

    values = partition.values
    column_max = values.max(axis=0)
    if np.any(column_max <= alpha):
        raise InvalidArgumentError("Value of alpha must be lower than maximum value in any column")

    in_cut = values >= alpha
    return in_cut, in_cut.sum(axis=0)


def calculate_alpha_level(partition: FuzzyPartition, alpha: float) -> FuzzyPartition:
    """
    Returns the alpha-level cut of the partition.

    In each column, members with a degree >= alpha receive 1/count (where
    count is the number of such members) and all others receive 0.

    Args:
        partition: The partition to cut.
        alpha: The cut level, 0 < alpha < min over columns of the column maximum.

    Returns:
        A new FuzzyPartition.
    """
    in_cut, counts = _cut_columns(partition, alpha)
    return FuzzyPartition(np.where(in_cut, 1.0 / counts, 0.0))


def calculate_complement_alpha_level(partition: FuzzyPartition, alpha: float) -> FuzzyPartition:
    """
    Returns the complement of the alpha-level cut.

    In each column, members with a degree < alpha receive 1/(M - count)
    and the cut members receive 0. A column where every member passes the
    cut becomes uniform (1/M).
    """
    in_cut, counts = _cut_columns(partition, alpha)
    m = partition.rows

    full_columns = counts == m
    # Full columns are overwritten below, so any nonzero divisor works there
    remaining = np.where(full_columns, m, m - counts)
    result = np.where(~in_cut, 1.0 / remaining, 0.0)
    result = np.where(full_columns, 1.0 / m, result)
    return FuzzyPartition(result)


def alpha_approximate(partition: FuzzyPartition, alpha: float, other: FuzzyPartition) -> float:
    """
    Measures how similar the alpha-cuts of two partitions are.

    For every cell where `partition` is at or above alpha, the amount by
    which `other` falls below alpha is accumulated (M1). For every other
    cell, the amount by which `other` exceeds alpha is accumulated (M2).
    Both are normalised by the largest possible violation.

    Args:
        partition: The reference partition.
        alpha: The level at which the cuts are compared.
        other: The partition compared against the reference.

    Returns:
        A score in [0, 1]. 1.0 means both partitions have identical alpha-cuts
        (they are alpha-equivalent).

    Raises:
        ShapeError: If the partitions differ in shape.
        IllDefinedMeasureError: If the normalising denominator is zero while
                                some violation was accumulated.
    """
    require_same_shape(partition, other, "alpha_approximate")
    values = partition.values
    other_values = other.values

    in_cut = values >= alpha
    m1 = np.maximum(0.0, alpha - other_values[in_cut]).sum()
    m2 = np.maximum(0.0, other_values[~in_cut] - alpha).sum()
    card_m1 = int(in_cut.sum())

    denominator = card_m1 * alpha + (values.size - card_m1) * (1.0 - alpha)
    if denominator == 0:
        if m1 + m2 == 0:
            return 1.0
        raise IllDefinedMeasureError(
            f"alpha_approximate is undefined for alpha={alpha} with {card_m1} of {values.size} "
            f"cells in the cut: the normalising denominator is zero."
        )
    return float(1.0 - (m1 + m2) / denominator)
