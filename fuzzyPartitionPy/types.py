from __future__ import annotations
import os
import numpy as np
from typing import Any, List, Sequence, Tuple, Union, TYPE_CHECKING

from .config import configure_parameters
from .errors import ShapeError

if TYPE_CHECKING:
    import pandas as pd

MatrixLike = Union[Sequence[Sequence[float]], np.ndarray, "pd.DataFrame", "FuzzyPartition"]


def _as_matrix(data: MatrixLike) -> np.ndarray:
    """
    Copies caller-supplied data into a fresh float64 array of shape (M, N).

    Raises:
        ShapeError: If the data is empty, ragged or not two-dimensional.
    """
    if isinstance(data, FuzzyPartition):
        data = data.values
    elif hasattr(data, "to_numpy"): # pandas DataFrame
        data = data.to_numpy(dtype=float)

    if not isinstance(data, np.ndarray):
        try:
            rows = list(data)
        except TypeError:
            raise ShapeError(f"Partition data must be a 2D matrix, got {type(data).__name__}.")
        if not rows:
            raise ShapeError("Partition data must contain at least one row.")
        if any(np.ndim(row) != 1 for row in rows):
            raise ShapeError("Partition data must be a 2D matrix (a sequence of rows of numbers).")
        widths = sorted({len(row) for row in rows})
        if len(widths) != 1:
            raise ShapeError(f"All rows of a partition must have the same length. Found row lengths: {widths}")
        data = rows

    matrix = np.array(data, dtype=float)
    if matrix.ndim != 2:
        raise ShapeError(f"Partition data must be a 2D matrix. Got an array with {matrix.ndim} dimension(s).")
    if matrix.shape[0] == 0 or matrix.shape[1] == 0:
        raise ShapeError(f"Partition must have at least one row and one column. Got shape {matrix.shape}.")
    return matrix


def require_same_shape(first: FuzzyPartition, second: FuzzyPartition, operation: str):
    """Raises ShapeError unless both operands are partitions of the same shape."""
    if not isinstance(second, FuzzyPartition):
        raise TypeError(f"{operation} expects a FuzzyPartition, got {type(second).__name__}.")
    if first.shape != second.shape:
        raise ShapeError(f"{operation} requires partitions of the same shape. Got {first.shape} and {second.shape}.")


class FuzzyPartition:
    """
    A fuzzy partition of N objects into M categories.

    The partition is an M x N matrix of membership degrees. Column `j` holds
    the fractional assignment of object `j` to each category, so a valid
    partition has every column summing to 1 and every entry in [0, 1].

    Construction copies the data and does NOT check these properties, which
    makes it possible to build invalid partitions on purpose. Use
    `validate()` to check them.

    Instances are immutable: the backing array is read-only and every
    transform returns a new FuzzyPartition.

    Example:
    >>> U = FuzzyPartition([[0.5, 0.7, 0.3, 0.0],
    ...                     [0.4, 0.2, 0.4, 0.1],
    ...                     [0.1, 0.1, 0.3, 0.9]])
    >>> U.calculate_alpha_level(0.25).to_list()[0]
    [0.5, 1.0, 0.3333333333333333, 0.0]
    """

    # Tolerance-based equality cannot produce consistent hashes
    __hash__ = None

    def __init__(self, data: MatrixLike):
        matrix = _as_matrix(data)
        matrix.setflags(write=False)
        self._values = matrix

    @classmethod
    def random(cls, rows: int, cols: int, rng: np.random.Generator | int | None = None) -> FuzzyPartition:
        """Creates a random valid partition. See `partition_builder.create_random_partition`."""
        from .partition_builder import create_random_partition
        return create_random_partition(rows, cols, rng=rng)

    # --- Attributes ---

    @property
    def values(self) -> np.ndarray:
        """The read-only (M, N) membership matrix."""
        return self._values

    @property
    def rows(self) -> int:
        """Number of categories (M)."""
        return self._values.shape[0]

    @property
    def cols(self) -> int:
        """Number of objects (N)."""
        return self._values.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return self._values.shape

    def to_list(self) -> List[List[float]]:
        """Returns a nested-list copy of the membership matrix."""
        return self._values.tolist()

    def to_array(self) -> np.ndarray:
        """Returns a writable copy of the membership matrix."""
        return self._values.copy()

    # --- Alpha-level family ---

    def calculate_alpha_level(self, alpha: float) -> FuzzyPartition:
        from .alpha_cut import calculate_alpha_level
        return calculate_alpha_level(self, alpha)

    def calculate_complement_alpha_level(self, alpha: float) -> FuzzyPartition:
        from .alpha_cut import calculate_complement_alpha_level
        return calculate_complement_alpha_level(self, alpha)

    def alpha_approximate(self, alpha: float, other: FuzzyPartition) -> float:
        from .alpha_cut import alpha_approximate
        return alpha_approximate(self, alpha, other)

    # --- Sharpening family ---

    def calculate_ls(self) -> FuzzyPartition:
        from .sharpening import calculate_ls
        return calculate_ls(self)

    def calculate_complement_ls(self) -> FuzzyPartition:
        from .sharpening import calculate_complement_ls
        return calculate_complement_ls(self)

    def calculate_mls(self) -> FuzzyPartition:
        from .sharpening import calculate_mls
        return calculate_mls(self)

    def calculate_complement_mls(self) -> FuzzyPartition:
        from .sharpening import calculate_complement_mls
        return calculate_complement_mls(self)

    def sharpen(self, method: str = "mls", **kwargs) -> FuzzyPartition:
        """
        Applies a registered sharpening operator by name.

        Args:
            method: One of `sharpening.available_methods()`, e.g. 'ls' or 'complement_mls'.
        """
        from .sharpening import sharpen
        return sharpen(self, method=method, **kwargs)

    def calculate_sharpness_degree(self, other: FuzzyPartition) -> float:
        from .sharpening import calculate_sharpness_degree
        return calculate_sharpness_degree(self, other)

    # --- Complement ---

    def complement(self) -> FuzzyPartition:
        from .complement import complement
        return complement(self)

    # --- Validation & equality ---

    def validate(self, tolerance: float | None = None) -> bool:
        """
        Checks that the data satisfies the fuzzy partition properties: every
        value lies in [0, 1] and every column sums to 1, both within the
        tolerance.

        Args:
            tolerance: Maximum allowed deviation. Defaults to the configured
                       `FLOAT_TOLERANCE`, read at call time.

        Returns:
            True if the data is a valid fuzzy partition.
        """
        from .validation import Validation
        return Validation.is_valid(self, tolerance)

    def equals(self, other: FuzzyPartition, tolerance: float | None = None) -> bool:
        """
        Checks whether two partitions have the same shape and cell-wise
        differences no larger than the tolerance.
        """
        if not isinstance(other, FuzzyPartition):
            return False
        if self is other:
            return True
        if self.shape != other.shape:
            return False
        eps = configure_parameters.FLOAT_TOLERANCE if tolerance is None else tolerance
        return bool(np.all(np.abs(self._values - other._values) <= eps))

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, FuzzyPartition):
            return NotImplemented
        return self.equals(other)

    # --- Display ---

    def __str__(self) -> str:
        width = configure_parameters.DISPLAY_WIDTH
        precision = configure_parameters.DISPLAY_PRECISION
        lines = [
            "".join(f"{value:{width}.{precision}f} " for value in row)
            for row in self._values
        ]
        return os.linesep.join(lines)

    def __repr__(self) -> str:
        return f"FuzzyPartition(M={self.rows}, N={self.cols})"
