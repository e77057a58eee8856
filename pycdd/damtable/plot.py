"""
Plotting utilities for DamageTable results.

This module defines the `plot()` method for the DamageTable class: histograms of a
per-cluster quantity (size, lesion counts) or of a per-event damage count.
"""

from typing import Optional
import matplotlib.pyplot as plt
plt.rcParams.update({
    "axes.linewidth": 1.2,
    "axes.labelsize": 16,
    "xtick.labelsize": 14,
    "ytick.labelsize": 14,
    "xtick.major.width": 1.2,
    "ytick.major.width": 1.2,
    "legend.fontsize": 14,
    "axes.titlesize": 16
})
import numpy as np

from .core import DamageTable

_CLUSTER_QUANTITIES = {
    "size": "Cluster size [bp]",
    "num_damage": "Lesions per cluster",
    "num_ssb": "SSBs per cluster",
    "num_bd": "BDs per cluster",
    "num_dsb": "DSBs per cluster",
}
_EVENT_QUANTITIES = {
    "ssb": "SSBs per event",
    "dsb": "Simple DSBs per event",
    "bd": "BDs per event",
    "complex_dsb": "Complex DSBs per event",
    "non_dsb_cluster": "Non-DSB clusters per event",
}
_TITLES = {"events": "Damaged events", "complex_dsb": "Complex DSBs", "non_dsb_cluster": "Non-DSB clusters"}


def _validate_plot_selection(kind: str, quantity: str):
    """
    Check that ``quantity`` is a column that can be histogrammed for ``kind``.

    :raises ValueError: If ``kind`` or ``quantity`` is not allowed.
    """
    if kind not in _TITLES:
        raise ValueError(f"Invalid table: '{kind}'. Allowed values are: {sorted(_TITLES)}")
    allowed = _EVENT_QUANTITIES if kind == "events" else _CLUSTER_QUANTITIES
    if quantity not in allowed:
        raise ValueError(f"Invalid quantity for '{kind}': '{quantity}'. Allowed values are: {sorted(allowed)}")


def plot(
    self: DamageTable,
    kind: str = "complex_dsb",
    *,
    quantity: Optional[str] = None,
    ax: Optional[plt.Axes] = None,
    show: Optional[bool] = True
):
    """
    Histogram one quantity of a computed table.

    :param kind: ``"complex_dsb"``, ``"non_dsb_cluster"`` or ``"events"``.
    :type kind: str
    :param quantity: Column to histogram. For cluster tables: ``size``, ``num_damage``,
        ``num_ssb``, ``num_bd``, ``num_dsb``; for ``events``: ``ssb``, ``dsb``, ``bd``,
        ``complex_dsb``, ``non_dsb_cluster``. Defaults to ``size`` for cluster
        tables and ``complex_dsb`` for events.
    :type quantity: str, optional
    :param ax: Matplotlib Axes object to draw on. If None, a new figure is created.
    :type ax: Optional[matplotlib.axes.Axes]
    :param show: If True, displays the plot. Set False when embedding or scripting.
    :type show: Optional[bool]

    :raises RuntimeError: If no results have been computed.
    :raises ValueError: If ``kind`` or ``quantity`` is invalid.
    """
    if not self.table:
        raise RuntimeError("No computed results found. Run `compute()` before plotting.")
    if quantity is None:
        quantity = "complex_dsb" if kind == "events" else "size"
    _validate_plot_selection(kind, quantity)

    values = self.table[kind][quantity].to_numpy(dtype=int)

    created_fig = False
    if ax is None:
        _, ax = plt.subplots(figsize=(10, 7))
        created_fig = True

    if values.size:
        # integer-centered bins
        bins = np.arange(values.min(), values.max() + 2) - 0.5
        ax.hist(values, bins=bins, color="tab:blue", alpha=0.6, edgecolor="black")
    else:
        ax.text(0.5, 0.5, "No entries", transform=ax.transAxes,
                fontsize=14, horizontalalignment="center", verticalalignment="center")

    labels = _EVENT_QUANTITIES if kind == "events" else _CLUSTER_QUANTITIES
    p = self.params
    ax.set_xlabel(labels[quantity])
    ax.set_ylabel("Counts")
    ax.set_title(f"{_TITLES[kind]} (DSB distance {p.dsb_distance} bp, "
                 f"cluster distance {p.cluster_distance} bp)", wrap=True)
    ax.grid(True, which="both", linestyle="--", alpha=0.1)

    if show and created_fig:
        plt.tight_layout()
        plt.show()


DamageTable.plot = plot
