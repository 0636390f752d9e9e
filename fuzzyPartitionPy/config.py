from typing import Dict, Any
import math
import numbers

from .errors import InvalidArgumentError


class Configuration:
    """
    A singleton-like class to hold all configurable parameters for the fuzzyPartitionPy library.

    Users can modify these attributes directly to customize the behavior of
    validation, equality checks, random generation and text rendering.

    Example:
    >>> from fuzzyPartitionPy.config import configure_parameters
    >>> # Accept larger floating-point drift when comparing partitions
    >>> configure_parameters.FLOAT_TOLERANCE = 1e-6
    >>> # Make random partitions reproducible
    >>> configure_parameters.RANDOM_SEED = 42

    .. note::
        The configuration is process-wide and unsynchronized. Set it up
        before partitions are shared between threads.
    """

    def __init__(self):
        self.reset_to_defaults()

    def reset_to_defaults(self):
        """Resets all configuration parameters to their original default values."""

        # --- Comparison Parameters ---

        # Maximum deviation tolerated by `validate` and `equals`.
        # Never used by the transform arithmetic itself.
        self.FLOAT_TOLERANCE: float = 1e-8

        # --- Random Generation ---

        # Seed used by `create_random_partition` when no generator is passed.
        # None draws fresh entropy from the OS on every call.
        self.RANDOM_SEED: int | None = None

        # --- Display ---

        # Field width and number of decimals for each cell of str(partition)
        self.DISPLAY_WIDTH: int = 9
        self.DISPLAY_PRECISION: int = 4

        # --- Theorem Checking ---

        # Alpha level used by the alpha-cut / complement duality identity
        self.THEOREM_ALPHA: float = 0.005

    def as_dict(self) -> Dict[str, Any]:
        """Returns a snapshot of the current parameter values."""
        return {key: value for key, value in vars(self).items() if key.isupper()}

configure_parameters = Configuration()


def set_tolerance(epsilon: float):
    """
    Sets the process-wide tolerance used by `validate` and `equals`.

    The new value applies to every subsequent comparison, including
    comparisons on partitions created before the call.

    Args:
        epsilon: A positive real number.

    Raises:
        InvalidArgumentError: If epsilon is not a positive finite number.
    """
    if isinstance(epsilon, bool) or not isinstance(epsilon, numbers.Real):
        raise InvalidArgumentError(f"Tolerance must be a positive number. Got: {epsilon!r}")
    if not (epsilon > 0 and math.isfinite(epsilon)):
        raise InvalidArgumentError(f"Tolerance must be a positive finite number. Got: {epsilon}")
    configure_parameters.FLOAT_TOLERANCE = float(epsilon)


def get_tolerance() -> float:
    """Returns the currently configured tolerance."""
    return configure_parameters.FLOAT_TOLERANCE


class ConfigurationContextManager:
    """
    A context manager to temporarily change configuration parameters.

    Usage:
    >>> with ConfigurationContextManager(FLOAT_TOLERANCE=0.01):
    >>>     # Code block compares partitions with a 0.01 tolerance
    >>>     ...
    >>> # The tolerance reverts to its original value outside the block
    """
    def __init__(self, **kwargs):
        self.changes = kwargs
        self.original_values = {}

    def __enter__(self):
        for key, value in self.changes.items():
            if not hasattr(configure_parameters, key):
                raise AttributeError(f"Configuration object has no attribute '{key}'")
            self.original_values[key] = getattr(configure_parameters, key)
            setattr(configure_parameters, key, value)
        return configure_parameters

    def __exit__(self, exc_type, exc_val, exc_tb):
        for key, value in self.original_values.items():
            setattr(configure_parameters, key, value)
