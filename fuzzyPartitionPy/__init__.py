__version__ = "0.1.0"

from .config import configure_parameters, set_tolerance, get_tolerance, ConfigurationContextManager
from .errors import InvalidArgumentError, ShapeError, IllDefinedMeasureError
from .types import FuzzyPartition
from .partition_builder import (
    create_partition_from_list,
    create_partition_from_dataframe,
    create_crisp_partition,
    create_random_partition,
    create_random_partitions,
)
from .validation import Validation
from .theorems import TheoremChecker, build_reference_partitions

from .sharpening import register_sharpening_method
from .theorems import register_identity
