"""
===================================================================
Tests for the Validation Module
===================================================================

This script contains unit tests for the validation functionalities, ensuring
that data violating the fuzzy partition properties is correctly identified.
"""

import pytest
import numpy as np

from fuzzyPartitionPy.config import set_tolerance, ConfigurationContextManager
from fuzzyPartitionPy.validation import Validation
from fuzzyPartitionPy.types import FuzzyPartition

# --- Test Fixtures: Reusable valid and invalid partitions ---

@pytest.fixture
def negative_value_partition() -> FuzzyPartition:
    """Columns sum to 1 but one membership is negative."""
    return FuzzyPartition([
        [0.5, 0.7, 0.3, 0.8],
        [0.4, 0.2, 0.4, 0.3],
        [0.1, 0.1, 0.3, -0.1]
    ])

@pytest.fixture
def bad_sum_partition() -> FuzzyPartition:
    """The last column sums to 1.05."""
    return FuzzyPartition([
        [0.5, 0.7, 0.3, 0.0],
        [0.4, 0.2, 0.4, 0.1],
        [0.1, 0.1, 0.3, 0.95]
    ])

@pytest.fixture
def almost_valid_partition() -> FuzzyPartition:
    """The last column sums to 1.0001."""
    return FuzzyPartition([
        [0.5, 0.7, 0.3, 0.0],
        [0.4, 0.2, 0.4, 0.1],
        [0.1, 0.1, 0.3, 0.9001]
    ])

# --- validate() ---

def test_validate_good_data(sample_partition):
    assert sample_partition.validate()

def test_validate_negative_value(negative_value_partition):
    assert not negative_value_partition.validate()

def test_validate_bad_column_sum(bad_sum_partition):
    assert not bad_sum_partition.validate()

def test_validate_depends_on_tolerance(almost_valid_partition):
    set_tolerance(0.01)
    assert almost_valid_partition.validate()

    set_tolerance(1e-8)
    assert not almost_valid_partition.validate()

def test_validate_explicit_tolerance(almost_valid_partition):
    assert almost_valid_partition.validate(tolerance=0.01)
    with ConfigurationContextManager(FLOAT_TOLERANCE=0.01):
        assert not almost_valid_partition.validate(tolerance=1e-8)

def test_validate_tolerates_tiny_overshoot():
    partition = FuzzyPartition([[1.0 + 1e-10, 0.5], [-1e-10, 0.5]])
    assert partition.validate()
    assert not partition.validate(tolerance=1e-12)

def test_validate_rejects_nan():
    partition = FuzzyPartition([[np.nan, 0.5], [0.5, 0.5]])
    assert not partition.validate()

# --- Individual checks returning error lists ---

def test_validate_membership_bounds(negative_value_partition, sample_partition):
    errors = Validation.validate_membership_bounds(negative_value_partition)
    assert len(errors) == 1
    assert "Membership at (2,3) is outside [0, 1]" in errors[0]
    assert not Validation.validate_membership_bounds(sample_partition)

def test_validate_column_sums(bad_sum_partition):
    errors = Validation.validate_column_sums(bad_sum_partition)
    assert len(errors) == 1
    assert errors[0].startswith("Column 3 sums to")

def test_validate_partition_dimensions(sample_partition):
    assert not Validation.validate_partition_dimensions(sample_partition)
    errors = Validation.validate_partition_dimensions(sample_partition, expected_shape=(4, 3))
    assert len(errors) == 1
    assert "expected shape (4, 3)" in errors[0]

def test_run_all_partition_validations(negative_value_partition):
    all_errors = Validation.run_all_partition_validations(negative_value_partition, expected_shape=(3, 4))
    assert not all_errors["dimensions"]
    assert len(all_errors["membership_bounds"]) == 1
    # The column still sums to 1
    assert not all_errors["column_sums"]

def test_is_valid_matches_error_lists(rng):
    for _ in range(50):
        partition = FuzzyPartition(rng.uniform(-0.1, 0.6, size=(3, 3)))
        all_errors = Validation.run_all_partition_validations(partition)
        has_errors = any(all_errors.values())
        assert Validation.is_valid(partition) == (not has_errors)
