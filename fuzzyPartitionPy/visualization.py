from __future__ import annotations
from typing import List, TYPE_CHECKING
import numpy as np
import pandas as pd

try:
    import matplotlib.pyplot as plt
    import seaborn as sns
    _PLOT_AVAILABLE = True
except ImportError:
    _PLOT_AVAILABLE = False

if TYPE_CHECKING:
    from .types import FuzzyPartition


def _check_plotting_availability():
    """Helper function to raise an error if the plotting libraries are not installed."""
    if not _PLOT_AVAILABLE:
        raise ImportError("Plotting functionality requires 'matplotlib' and 'seaborn'. "
                          "Please install them using: pip install matplotlib seaborn")

def _labels(given: List[str] | None, count: int, prefix: str) -> List[str]:
    if given is None:
        return [f"{prefix}{k + 1}" for k in range(count)]
    if len(given) != count:
        raise ValueError(f"Expected {count} labels, got {len(given)}.")
    return list(given)

# ==============================================================================
# 1. TABULAR VIEWS
# ==============================================================================

def format_partition_as_table(
    partition: FuzzyPartition,
    category_labels: List[str] | None = None,
    object_labels: List[str] | None = None
) -> pd.DataFrame:
    """
    Returns the membership matrix as a DataFrame with categories as the
    index and objects as the columns.

    Args:
        partition: The partition to format.
        category_labels: Row labels. Defaults to 'C1'..'CM'.
        object_labels: Column labels. Defaults to 'O1'..'ON'.
    """
    return pd.DataFrame(
        partition.to_array(),
        index=_labels(category_labels, partition.rows, "C"),
        columns=_labels(object_labels, partition.cols, "O"),
    )

# ==============================================================================
# 2. PLOTS
# ==============================================================================

def plot_partition_heatmap(
    partition: FuzzyPartition,
    category_labels: List[str] | None = None,
    object_labels: List[str] | None = None,
    title: str = "Membership degrees",
    annotate: bool = True,
    figsize=(8, 5)
) -> 'plt.Figure':
    """Draws the membership matrix as an annotated heatmap on a [0, 1] color scale."""
    _check_plotting_availability()
    table = format_partition_as_table(partition, category_labels, object_labels)

    fig, ax = plt.subplots(figsize=figsize)
    sns.heatmap(
        table, ax=ax, vmin=0.0, vmax=1.0, cmap="viridis",
        annot=annotate, fmt=".2f", cbar_kws={"label": "Membership"}
    )
    ax.set_title(title)
    ax.set_xlabel("Object")
    ax.set_ylabel("Category")
    fig.tight_layout()
    return fig

def plot_membership_profile(
    partition: FuzzyPartition,
    category_labels: List[str] | None = None,
    object_labels: List[str] | None = None,
    figsize=(10, 6)
) -> 'plt.Figure':
    """Draws one stacked bar per object showing how its unit mass is split across categories."""
    _check_plotting_availability()
    table = format_partition_as_table(partition, category_labels, object_labels)

    fig, ax = plt.subplots(figsize=figsize)
    colors = plt.cm.viridis(np.linspace(0, 1, partition.rows))
    bottom = np.zeros(partition.cols)
    for color, (category, row) in zip(colors, table.iterrows()):
        ax.bar(table.columns, row.values, bottom=bottom, color=color, label=category)
        bottom += row.values
    ax.set_ylabel("Membership")
    ax.set_title("Membership Profile per Object")
    ax.legend(title="Category", bbox_to_anchor=(1.02, 1), loc="upper left")
    fig.tight_layout()
    return fig

def plot_theorem_report(report: pd.DataFrame, figsize=(10, 6)) -> 'plt.Figure':
    """
    Draws the pass rate of every identity equation from a
    `TheoremChecker.run()` report.
    """
    _check_plotting_availability()
    if report.empty:
        raise ValueError("The theorem report is empty.")
    rates = (
        report.groupby("equation", sort=False)["holds"].mean()
        .rename("pass_rate").reset_index()
    )

    sns.set_theme(style="whitegrid")
    fig, ax = plt.subplots(figsize=figsize)
    sns.barplot(data=rates, x="pass_rate", y="equation", ax=ax, color="#2A9D8F")
    ax.set_xlim(0, 1.05)
    ax.set_xlabel("Share of partitions where the equation holds")
    ax.set_ylabel("")
    ax.set_title("Identity Check Results")
    for patch, rate in zip(ax.patches, rates["pass_rate"]):
        ax.text(patch.get_width() + 0.01, patch.get_y() + patch.get_height() / 2, f"{rate:.1%}", va="center")
    fig.tight_layout()
    return fig
