from __future__ import annotations
from typing import Callable, Dict, List
import numpy as np

from .errors import IllDefinedMeasureError
from .types import FuzzyPartition, require_same_shape


class Registry(dict):
    """
    A custom dictionary that validates insertions to ensure only
    callable objects (functions, methods) are registered.
    """
    def __setitem__(self, key: str, value: Callable):
        if not callable(value):
            raise TypeError(
                f"Attempted to register a non-callable object of type '{type(value).__name__}' "
                f"for the key '{key}'. Only functions or methods can be registered."
            )
        if key in self:
            print(f"Warning: Overwriting sharpening method '{key}'")
        super().__setitem__(key, value)

    def register(self, name: str) -> Callable:
        """Decorator factory for registering a function."""
        def decorator(func: Callable) -> Callable:
            self[name] = func
            return func
        return decorator

SHARPENING_METHODS: Dict[str, Callable[[FuzzyPartition], FuzzyPartition]] = Registry()

def register_sharpening_method(name: str) -> Callable:
    """
    A decorator to register a new sharpening operator.

    The decorated function must take a FuzzyPartition (plus optional keyword
    arguments) and return a new FuzzyPartition.

    Example:
    >>> @register_sharpening_method("double_mls")
    ... def double_mls(partition):
    ...     return partition.calculate_mls().calculate_mls()
    """
    return SHARPENING_METHODS.register(name)

def available_methods() -> List[str]:
    """Returns the names of all registered sharpening operators."""
    return list(SHARPENING_METHODS.keys())

def sharpen(partition: FuzzyPartition, method: str = "mls", **kwargs) -> FuzzyPartition:
    """Applies the sharpening operator registered under `method`."""
    func = SHARPENING_METHODS.get(method)
    if func is None:
        raise ValueError(f"Unknown sharpening method '{method}'. Available: {available_methods()}")
    return func(partition, **kwargs)

# ==============================================================================
# 1. LINEAR SHARPENING (LS): one bound for the whole matrix
# ==============================================================================

def _linear_sharpening(values: np.ndarray, bound, degenerate) -> np.ndarray:
    """
    Applies u -> 1/M + (u - 1/M) / (1 - M*bound), falling back to the
    uniform 1/M wherever `degenerate` is set. `bound` and `degenerate` are
    either scalars or per-column arrays.
    """
    m = values.shape[0]
    scale = 1.0 - m * np.asarray(bound, dtype=float)
    if np.any((scale == 0) & ~np.asarray(degenerate)):
        raise IllDefinedMeasureError(
            "Linear sharpening is undefined: 1 - M*bound is zero for a non-constant column. "
            "The column is within floating-point error of uniform or the partition is not valid."
        )
    safe_scale = np.where(degenerate, 1.0, scale)
    sharpened = 1.0 / m + (values - 1.0 / m) / safe_scale
    return np.where(degenerate, 1.0 / m, sharpened)

def _ls(partition: FuzzyPartition, complement: bool) -> FuzzyPartition:
    values = partition.values
    global_max = values.max()
    global_min = values.min()
    bound = global_max if complement else global_min
    return FuzzyPartition(_linear_sharpening(values, bound, global_max == global_min))

@SHARPENING_METHODS.register("ls")
def calculate_ls(partition: FuzzyPartition) -> FuzzyPartition:
    """
    Linear sharpening: stretches the whole matrix away from 1/M using the
    global minimum, so the smallest membership becomes 0.

    A constant matrix (global max == global min) maps to the uniform 1/M.
    Applying the operator to its own output changes nothing.
    """
    return _ls(partition, complement=False)

@SHARPENING_METHODS.register("complement_ls")
def calculate_complement_ls(partition: FuzzyPartition) -> FuzzyPartition:
    """Complement of linear sharpening: same map, with the global maximum as the bound."""
    return _ls(partition, complement=True)

# ==============================================================================
# 2. MAX/MIN LINEAR SHARPENING (MLS): one bound per column
# ==============================================================================

def _mls(partition: FuzzyPartition, complement: bool) -> FuzzyPartition:
    values = partition.values
    column_max = values.max(axis=0)
    column_min = values.min(axis=0)
    bound = column_max if complement else column_min
    return FuzzyPartition(_linear_sharpening(values, bound, column_max == column_min))

@SHARPENING_METHODS.register("mls")
def calculate_mls(partition: FuzzyPartition) -> FuzzyPartition:
    """
    Max/min linear sharpening: the LS map applied column by column with
    each column's own minimum. Constant columns become uniform (1/M)
    independently of the rest of the matrix.
    """
    return _mls(partition, complement=False)

@SHARPENING_METHODS.register("complement_mls")
def calculate_complement_mls(partition: FuzzyPartition) -> FuzzyPartition:
    """Complement of MLS: per-column map with each column's maximum as the bound."""
    return _mls(partition, complement=True)

# ==============================================================================
# 3. SHARPNESS DEGREE
# ==============================================================================

def calculate_sharpness_degree(partition: FuzzyPartition, other: FuzzyPartition) -> float:
    """
    Degree to which `other` is a sharpening of `partition`.

    A sharpening never lowers a membership at or above 1/M and never raises
    one at or below 1/M. Violations are summed as

        K1 = sum of max(0, U - V) over cells with U >= 1/M
        K2 = sum of max(0, V - U) over cells with U <= 1/M

    and the degree is 1 - (K1 + K2) / (2N). Cells exactly at 1/M belong to
    both sums.

    Args:
        partition: The reference partition U.
        other: The candidate sharpening V.

    Returns:
        1.0 when V sharpens U in every column; 0.0 for opposite crisp partitions.
    """
    require_same_shape(partition, other, "calculate_sharpness_degree")
    values = partition.values
    other_values = other.values
    threshold = 1.0 / partition.rows

    k1 = np.maximum(0.0, values - other_values)[values >= threshold].sum()
    k2 = np.maximum(0.0, other_values - values)[values <= threshold].sum()
    return float(1.0 - (k1 + k2) / (2 * partition.cols))
