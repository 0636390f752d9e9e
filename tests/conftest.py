import matplotlib
matplotlib.use("Agg")

import pytest
import numpy as np

from fuzzyPartitionPy.config import configure_parameters
from fuzzyPartitionPy.types import FuzzyPartition
from fuzzyPartitionPy.theorems import build_reference_partitions


@pytest.fixture(autouse=True)
def default_configuration():
    """Every test starts and ends with the default configuration (tolerance 1e-8)."""
    configure_parameters.reset_to_defaults()
    yield configure_parameters
    configure_parameters.reset_to_defaults()

@pytest.fixture
def rng() -> np.random.Generator:
    """A deterministic random source."""
    return np.random.default_rng(20240601)

@pytest.fixture
def sample_partition() -> FuzzyPartition:
    """The 3x4 partition used by most scenario tests."""
    return FuzzyPartition([
        [0.5, 0.7, 0.3, 0.0],
        [0.4, 0.2, 0.4, 0.1],
        [0.1, 0.1, 0.3, 0.9]
    ])

@pytest.fixture(scope="session")
def reference_partitions():
    """
    The full reference set: 1x1, 3x3 identity, 4x3 uniform,
    1000 random 5x5 and 100 random 100x100 partitions.
    """
    return build_reference_partitions(num_small=1000, num_large=100, rng=np.random.default_rng(7))
