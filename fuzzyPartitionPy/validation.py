from __future__ import annotations
from typing import List, Dict, TYPE_CHECKING
import numpy as np

from .config import configure_parameters

if TYPE_CHECKING:
    from .types import FuzzyPartition


def _resolve_tolerance(tolerance: float | None) -> float:
    return configure_parameters.FLOAT_TOLERANCE if tolerance is None else tolerance


class Validation:
    """
    A class containing static methods to check that a FuzzyPartition
    satisfies the fuzzy partition properties.

    Every `validate_*` method returns a list of error strings; an empty
    list means the check passed. None of them raise.
    """

    @staticmethod
    def validate_partition_dimensions(partition: FuzzyPartition, expected_shape: tuple | None = None) -> List[str]:
        """Validates that the partition has at least one row and column, and the expected shape if given."""
        errors = []
        values = partition.values
        if values.ndim != 2 or values.shape[0] < 1 or values.shape[1] < 1:
            errors.append("Partition must be a 2D matrix with at least one row and one column.")
            return errors # Stop further checks
        if expected_shape is not None and tuple(values.shape) != tuple(expected_shape):
            errors.append(f"Partition has shape {values.shape}, but expected shape {tuple(expected_shape)}.")
        return errors

    @staticmethod
    def validate_membership_bounds(partition: FuzzyPartition, tolerance: float | None = None) -> List[str]:
        """
        Validates that every membership degree lies in [0, 1].

        Args:
            partition: The partition to check.
            tolerance: Allowed overshoot on both ends. Defaults to the configured tolerance.
        """
        eps = _resolve_tolerance(tolerance)
        values = partition.values
        errors = []
        out_of_range = ~((values + eps >= 0) & (values - eps <= 1))
        for i, j in zip(*np.nonzero(out_of_range)):
            errors.append(f"Membership at ({i},{j}) is outside [0, 1]. Found: {values[i, j]}")
        return errors

    @staticmethod
    def validate_column_sums(partition: FuzzyPartition, tolerance: float | None = None) -> List[str]:
        """Validates that every column sums to 1 within the tolerance."""
        eps = _resolve_tolerance(tolerance)
        column_sums = partition.values.sum(axis=0)
        errors = []
        # NaN sums must fail, so compare with `not <=`
        for j, total in enumerate(column_sums):
            if not abs(1.0 - total) <= eps:
                errors.append(f"Column {j} sums to {total}, not 1 (tolerance {eps}).")
        return errors

    @staticmethod
    def run_all_partition_validations(
        partition: FuzzyPartition,
        expected_shape: tuple | None = None,
        tolerance: float | None = None
    ) -> Dict[str, List[str]]:
        """Runs a complete suite of validations on a single partition."""
        all_errors = {"dimensions": [], "membership_bounds": [], "column_sums": []}
        all_errors["dimensions"] = Validation.validate_partition_dimensions(partition, expected_shape)

        # Only run further checks if dimensions are valid
        if not all_errors["dimensions"]:
            all_errors["membership_bounds"] = Validation.validate_membership_bounds(partition, tolerance)
            all_errors["column_sums"] = Validation.validate_column_sums(partition, tolerance)
        return all_errors

    @staticmethod
    def is_valid(partition: FuzzyPartition, tolerance: float | None = None) -> bool:
        """
        Boolean form of the bounds and column-sum checks, used by
        `FuzzyPartition.validate`. The tolerance is read at call time.
        """
        eps = _resolve_tolerance(tolerance)
        values = partition.values
        in_bounds = np.all((values + eps >= 0) & (values - eps <= 1))
        sums_ok = np.all(np.abs(1.0 - values.sum(axis=0)) <= eps)
        return bool(in_bounds and sums_ok)
