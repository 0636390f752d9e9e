"""
===================================================================
Tests for the Types Module
===================================================================

This script contains unit tests for the FuzzyPartition value type:
construction, immutability, tolerant equality and text rendering.
"""

import os
import pytest
import numpy as np
import pandas as pd

from fuzzyPartitionPy.config import set_tolerance, ConfigurationContextManager
from fuzzyPartitionPy.errors import ShapeError
from fuzzyPartitionPy.types import FuzzyPartition

# ==============================================================================
# Construction
# ==============================================================================

def test_construction_infers_dimensions(sample_partition):
    assert sample_partition.rows == 3
    assert sample_partition.cols == 4
    assert sample_partition.shape == (3, 4)
    assert sample_partition.values.dtype == np.float64

def test_construction_copies_caller_data():
    """Mutating the caller's buffer must not leak into the partition."""
    data = [[0.5, 1.0], [0.5, 0.0]]
    partition = FuzzyPartition(data)
    data[0][0] = 99.0

    array = np.array([[0.5, 1.0], [0.5, 0.0]])
    from_array = FuzzyPartition(array)
    array[1, 1] = 42.0

    assert partition.values[0, 0] == 0.5
    assert from_array.values[1, 1] == 0.0

def test_construction_does_not_validate():
    """Invalid partitions can be built on purpose."""
    partition = FuzzyPartition([[2.0, -1.0], [0.5, 0.5]])
    assert partition.shape == (2, 2)
    assert not partition.validate()

def test_construction_from_dataframe_and_partition(sample_partition):
    df = pd.DataFrame(sample_partition.to_array(), index=["a", "b", "c"])
    assert FuzzyPartition(df) == sample_partition
    assert FuzzyPartition(sample_partition) == sample_partition

@pytest.mark.parametrize("bad_data", [
    [],
    [[]],
    [[0.5, 0.5], [0.5]],
    [0.5, 0.5],
    np.zeros((0, 3)),
    np.zeros(4),
    np.zeros((2, 2, 2)),
])
def test_construction_rejects_malformed_shapes(bad_data):
    with pytest.raises(ShapeError):
        FuzzyPartition(bad_data)

def test_ragged_rows_message():
    with pytest.raises(ShapeError, match="same length"):
        FuzzyPartition([[0.2, 0.8], [0.8]])

# ==============================================================================
# Immutability
# ==============================================================================

def test_values_are_read_only(sample_partition):
    assert not sample_partition.values.flags.writeable
    with pytest.raises(ValueError):
        sample_partition.values[0, 0] = 1.0

def test_copies_are_writable(sample_partition):
    copy = sample_partition.to_array()
    copy[0, 0] = 1.0
    assert sample_partition.values[0, 0] == 0.5

    as_list = sample_partition.to_list()
    as_list[0][0] = 1.0
    assert sample_partition.values[0, 0] == 0.5

def test_transforms_do_not_mutate_receiver(sample_partition):
    before = sample_partition.to_array()
    sample_partition.calculate_alpha_level(0.25)
    sample_partition.calculate_complement_alpha_level(0.25)
    sample_partition.calculate_ls()
    sample_partition.calculate_complement_ls()
    sample_partition.calculate_mls()
    sample_partition.calculate_complement_mls()
    sample_partition.complement()
    np.testing.assert_array_equal(sample_partition.values, before)

def test_partition_is_not_hashable(sample_partition):
    with pytest.raises(TypeError):
        hash(sample_partition)

# ==============================================================================
# Equality
# ==============================================================================

def test_equals_identical_data(sample_partition):
    other = FuzzyPartition([
        [0.5, 0.7, 0.3, 0.0],
        [0.4, 0.2, 0.4, 0.1],
        [0.1, 0.1, 0.3, 0.9]
    ])
    assert other == sample_partition
    assert sample_partition.equals(other)

def test_not_equal_different_data(sample_partition):
    other = FuzzyPartition([
        [0.5, 0.7, 0.3, 0.0],
        [0.4, 0.2, 0.4, 0.2],
        [0.1, 0.1, 0.3, 0.8]
    ])
    assert other != sample_partition

def test_not_equal_different_shape(sample_partition):
    other = FuzzyPartition([[0.5, 0.7, 0.3], [0.5, 0.3, 0.7]])
    assert sample_partition != other
    assert not sample_partition.equals(other, tolerance=10.0)

def test_equality_with_other_types(sample_partition):
    assert sample_partition != 5
    assert not sample_partition.equals("not a partition")

def test_equality_reads_tolerance_at_call_time(sample_partition):
    similar = FuzzyPartition([
        [0.5, 0.7, 0.3, 0.0],
        [0.4, 0.2, 0.4, 0.0999],
        [0.1, 0.1, 0.3, 0.9001]
    ])

    set_tolerance(0.01)
    assert similar == sample_partition

    set_tolerance(1e-8)
    assert similar != sample_partition

def test_equality_explicit_tolerance_overrides_config(sample_partition):
    similar = FuzzyPartition([
        [0.5, 0.7, 0.3, 0.0],
        [0.4, 0.2, 0.4, 0.0999],
        [0.1, 0.1, 0.3, 0.9001]
    ])
    assert sample_partition.equals(similar, tolerance=1e-3)
    with ConfigurationContextManager(FLOAT_TOLERANCE=1.0):
        assert not sample_partition.equals(similar, tolerance=1e-6)

# ==============================================================================
# Display
# ==============================================================================

def test_str_formatting(sample_partition):
    expected = ("   0.5000    0.7000    0.3000    0.0000 "
                + os.linesep
                + "   0.4000    0.2000    0.4000    0.1000 "
                + os.linesep
                + "   0.1000    0.1000    0.3000    0.9000 ")
    assert str(sample_partition) == expected

def test_str_has_no_trailing_separator():
    text = str(FuzzyPartition([[1.0]]))
    assert text == "   1.0000 "
    assert not text.endswith(os.linesep)

def test_repr(sample_partition):
    assert repr(sample_partition) == "FuzzyPartition(M=3, N=4)"
