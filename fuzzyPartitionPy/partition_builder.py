from __future__ import annotations
from typing import List, Sequence, TYPE_CHECKING
import numbers
import numpy as np

from .config import configure_parameters
from .errors import InvalidArgumentError, ShapeError
from .types import FuzzyPartition

if TYPE_CHECKING:
    import pandas as pd

# ==============================================================================
# 1. PARTITIONS FROM EXISTING DATA
# ==============================================================================

def create_partition_from_list(values: Sequence[Sequence[float]]) -> FuzzyPartition:
    """
    Creates a partition from a nested list given row by row
    (one row per category, one column per object).

    The values are copied verbatim and are not validated, so the
    caller's list can be changed afterwards without affecting the partition.

    Raises:
        ShapeError: If the rows are empty or of unequal length.
    """
    return FuzzyPartition(values)

def create_partition_from_dataframe(df: pd.DataFrame) -> FuzzyPartition:
    """
    Creates a partition from a DataFrame whose index holds the categories
    and whose columns hold the objects. Labels are discarded.
    """
    return FuzzyPartition(df.to_numpy(dtype=float))

def create_crisp_partition(assignments: Sequence[int], num_categories: int) -> FuzzyPartition:
    """
    Builds a crisp (0/1) partition where object `j` belongs fully to
    category `assignments[j]`.

    Args:
        assignments: Category index for every object, in [0, num_categories).
        num_categories: The number of rows (M) of the partition.

    Returns:
        A valid partition with exactly one 1.0 per column.
    """
    labels = np.asarray(assignments)
    if labels.ndim != 1 or labels.size == 0:
        raise ShapeError("Assignments must be a non-empty 1D sequence of category indices.")
    _check_dimension(num_categories, "num_categories")
    if not np.issubdtype(labels.dtype, np.integer):
        raise InvalidArgumentError(f"Category indices must be integers. Got dtype '{labels.dtype}'.")
    out_of_range = labels[(labels < 0) | (labels >= num_categories)]
    if out_of_range.size:
        raise InvalidArgumentError(
            f"Category indices must lie in [0, {num_categories}). Found: {sorted(set(out_of_range.tolist()))}"
        )

    matrix = np.zeros((num_categories, labels.size))
    matrix[labels, np.arange(labels.size)] = 1.0
    return FuzzyPartition(matrix)

# ==============================================================================
# 2. RANDOM PARTITIONS
# ==============================================================================

def _check_dimension(value: int, name: str):
    if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value < 1:
        raise ShapeError(f"'{name}' must be a positive integer. Got: {value!r}")

def resolve_rng(rng: np.random.Generator | int | None) -> np.random.Generator:
    """Returns `rng` if it is a Generator, otherwise seeds a new one."""
    if isinstance(rng, np.random.Generator):
        return rng
    seed = configure_parameters.RANDOM_SEED if rng is None else rng
    return np.random.default_rng(seed)

def create_random_partition(
    rows: int,
    cols: int,
    rng: np.random.Generator | int | None = None
) -> FuzzyPartition:
    """
    Creates a random M x N fuzzy partition.

    Each entry is drawn from the uniform distribution on [0, 1), then every
    column is divided by its sum so that columns sum to 1.

    Args:
        rows: Number of categories (M).
        cols: Number of objects (N).
        rng: A numpy Generator, an integer seed, or None to use the
             configured `RANDOM_SEED` (fresh OS entropy when that is None too).

    Returns:
        A FuzzyPartition that passes `validate()`.
    """
    _check_dimension(rows, "rows")
    _check_dimension(cols, "cols")
    generator = resolve_rng(rng)

    raw = generator.uniform(0.0, 1.0, size=(rows, cols))
    column_sums = raw.sum(axis=0)
    return FuzzyPartition(raw / column_sums)

def create_random_partitions(
    count: int,
    rows: int,
    cols: int,
    rng: np.random.Generator | int | None = None
) -> List[FuzzyPartition]:
    """Creates `count` independent random partitions sharing one generator."""
    generator = resolve_rng(rng)
    return [create_random_partition(rows, cols, rng=generator) for _ in range(count)]
