"""
Numerical checks of the algebraic identities relating complement,
alpha-cuts and sharpening.

Each identity is a function that takes a partition U and returns a list of
(equation, left, right) triples; the identity holds for U when every left
side equals its right side within the tolerance. `TheoremChecker` runs the
registered identities over a set of partitions and reports the outcome as
a pandas DataFrame.
"""
from __future__ import annotations
from typing import Callable, Dict, List, Tuple
import numpy as np
import pandas as pd

from .config import configure_parameters
from .errors import InvalidArgumentError
from .partition_builder import resolve_rng, create_random_partition
from .types import FuzzyPartition

IdentityCheck = List[Tuple[str, FuzzyPartition, FuzzyPartition]]

IDENTITIES: Dict[str, Callable[..., IdentityCheck]] = {}

def register_identity(name: str):
    """Decorator to register a new identity check."""
    def decorator(func: Callable[..., IdentityCheck]) -> Callable[..., IdentityCheck]:
        if name in IDENTITIES:
            print(f"Warning: Overwriting identity '{name}'")
        IDENTITIES[name] = func
        return func
    return decorator

# ==============================================================================
# 1. REGISTERED IDENTITIES
# ==============================================================================

@register_identity("complement_involution")
def complement_involution(U: FuzzyPartition, **kwargs) -> IdentityCheck:
    """(U^c)^c = U"""
    return [("(U^c)^c = U", U.complement().complement(), U)]

@register_identity("mls_complement_relation")
def mls_complement_relation(U: FuzzyPartition, **kwargs) -> IdentityCheck:
    """(>>U)^c = >>(U^c) = <<U, where >> is MLS and << its complement."""
    mls_of_complement = U.complement().calculate_mls()
    complement_of_mls = U.calculate_mls().complement()
    complement_mls = U.calculate_complement_mls()
    return [
        (">>(U^c) = (>>U)^c", mls_of_complement, complement_of_mls),
        (">>(U^c) = <<U", mls_of_complement, complement_mls),
        ("(>>U)^c = <<U", complement_of_mls, complement_mls),
    ]

@register_identity("complement_mls_corollary")
def complement_mls_corollary(U: FuzzyPartition, **kwargs) -> IdentityCheck:
    """(<<U)^c = <<(U^c) = >>U"""
    cmls_of_complement = U.complement().calculate_complement_mls()
    complement_of_cmls = U.calculate_complement_mls().complement()
    mls = U.calculate_mls()
    return [
        ("<<(U^c) = (<<U)^c", cmls_of_complement, complement_of_cmls),
        ("<<(U^c) = >>U", cmls_of_complement, mls),
        ("(<<U)^c = >>U", complement_of_cmls, mls),
    ]

@register_identity("alpha_cut_complement_duality")
def alpha_cut_complement_duality(U: FuzzyPartition, alpha: float | None = None, **kwargs) -> IdentityCheck:
    """(U^a)^c = ~U^a and (~U^a)^c = U^a, where ~U^a is the complement alpha-level cut."""
    alpha = configure_parameters.THEOREM_ALPHA if alpha is None else alpha
    cut = U.calculate_alpha_level(alpha)
    complement_cut = U.calculate_complement_alpha_level(alpha)
    return [
        ("(U^a)^c = ~U^a", cut.complement(), complement_cut),
        ("(~U^a)^c = U^a", complement_cut.complement(), cut),
    ]

@register_identity("ls_idempotence")
def ls_idempotence(U: FuzzyPartition, **kwargs) -> IdentityCheck:
    """LS(LS(U)) = LS(U)"""
    ls = U.calculate_ls()
    return [("LS(LS(U)) = LS(U)", ls.calculate_ls(), ls)]

@register_identity("complement_ls_relation")
def complement_ls_relation(U: FuzzyPartition, **kwargs) -> IdentityCheck:
    """
    LS(CLS(U)) = CLS(U) and CLS(CLS(U)) = LS(U).

    CLS sends the global maximum to 0 and reverses the order of the
    memberships, so its output is a fixed point of LS and a second
    application lands on LS(U).
    """
    complement_ls = U.calculate_complement_ls()
    return [
        ("LS(CLS(U)) = CLS(U)", complement_ls.calculate_ls(), complement_ls),
        ("CLS(CLS(U)) = LS(U)", complement_ls.calculate_complement_ls(), U.calculate_ls()),
    ]

# ==============================================================================
# 2. REFERENCE PARTITIONS
# ==============================================================================

def build_reference_partitions(
    num_small: int = 1000,
    num_large: int = 100,
    small_size: int = 5,
    large_size: int = 100,
    rng: np.random.Generator | int | None = None
) -> List[FuzzyPartition]:
    """
    Builds the standard set of partitions the identities are checked on:
    the 1x1 partition, the 3x3 identity, a 4x3 uniform partition, then
    `num_small` random small_size x small_size and `num_large` random
    large_size x large_size partitions.
    """
    generator = resolve_rng(rng)
    partitions = [
        FuzzyPartition([[1.0]]),
        FuzzyPartition(np.eye(3)),
        FuzzyPartition(np.full((4, 3), 0.25)),
    ]
    partitions += [create_random_partition(small_size, small_size, rng=generator) for _ in range(num_small)]
    partitions += [create_random_partition(large_size, large_size, rng=generator) for _ in range(num_large)]
    return partitions

# ==============================================================================
# 3. THEOREM CHECKER
# ==============================================================================

class TheoremChecker:
    """
    Runs registered identities over a collection of partitions.

    Example:
    >>> checker = TheoremChecker(build_reference_partitions(num_small=50, num_large=5, rng=0))
    >>> report = checker.run()
    >>> report["holds"].all()
    True
    """
    def __init__(self, partitions: List[FuzzyPartition]):
        if not partitions:
            raise ValueError("TheoremChecker needs at least one partition.")
        self.partitions = list(partitions)
        self.results = []

    def run(
        self,
        identities: List[str] | None = None,
        tolerance: float | None = None,
        verbose: bool = False,
        **identity_kwargs
    ) -> pd.DataFrame:
        """
        Checks each requested identity on every partition.

        Args:
            identities: Names from `IDENTITIES`. Defaults to all registered identities.
            tolerance: Equality tolerance. Defaults to the configured `FLOAT_TOLERANCE`.
            verbose: Print a progress line per identity.
            **identity_kwargs: Passed to every identity (e.g. `alpha=0.01`).

        Returns:
            One row per (identity, equation, partition) with the columns
            identity, equation, partition_index, rows, cols, holds, max_deviation.
        """
        names = list(IDENTITIES.keys()) if identities is None else identities
        unknown = [name for name in names if name not in IDENTITIES]
        if unknown:
            raise ValueError(f"Unknown identities {unknown}. Available: {list(IDENTITIES.keys())}")
        eps = configure_parameters.FLOAT_TOLERANCE if tolerance is None else tolerance

        self.results = []
        for name in names:
            if verbose:
                print(f"\n--- Checking '{name}' on {len(self.partitions)} partition(s) ---")
            check = IDENTITIES[name]
            for index, partition in enumerate(self.partitions):
                try:
                    equations = check(partition, **identity_kwargs)
                except InvalidArgumentError as e:
                    # The identity does not apply to this partition (e.g. alpha too large)
                    self.results.append(self._row(name, f"not applicable: {e}", index, partition, False, np.nan))
                    continue
                for label, left, right in equations:
                    deviation = float(np.max(np.abs(left.values - right.values)))
                    self.results.append(
                        self._row(name, label, index, partition, left.equals(right, eps), deviation)
                    )

        return pd.DataFrame(self.results)

    @staticmethod
    def _row(name, label, index, partition, holds, deviation) -> dict:
        return {
            "identity": name,
            "equation": label,
            "partition_index": index,
            "rows": partition.rows,
            "cols": partition.cols,
            "holds": bool(holds),
            "max_deviation": deviation,
        }

    def summary(self) -> pd.DataFrame:
        """Aggregates the last run per identity and equation."""
        if not self.results:
            raise RuntimeError("No results yet. Call `run()` first.")
        df = pd.DataFrame(self.results)
        return (
            df.groupby(["identity", "equation"], sort=False)
            .agg(checked=("holds", "size"), passed=("holds", "sum"), max_deviation=("max_deviation", "max"))
            .reset_index()
        )
