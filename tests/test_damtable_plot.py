# Suppress expected warnings before any import
import warnings

warnings.filterwarnings("ignore", category=UserWarning, message=".*non-interactive.*")

import matplotlib
matplotlib.use("Agg")

import pytest
import matplotlib.pyplot as plt

from pycdd.damtable.core import DamageTable
from pycdd.io.hit_table import HitTable


@pytest.fixture
def computed_table():
    hits = HitTable.from_records([
        {"event_id": 0, "volume_id": 100, "energy": 30.0},
        {"event_id": 0, "volume_id": 1000104, "energy": 30.0},
        {"event_id": 0, "volume_id": 200110, "energy": 30.0},
        {"event_id": 1, "volume_id": 5, "energy": 30.0},
        {"event_id": 1, "volume_id": 200006, "energy": 30.0},
    ])
    table = DamageTable()
    table.compute(hits)
    return table


@pytest.mark.parametrize("kind, quantity", [
    ("complex_dsb", None),
    ("complex_dsb", "num_damage"),
    ("non_dsb_cluster", "size"),
    ("events", None),
    ("events", "bd"),
])
@pytest.mark.filterwarnings("ignore:FigureCanvasAgg is non-interactive.*")
def test_plot_valid_inputs(computed_table, kind, quantity):
    """Test that DamageTable.plot executes without errors for valid input."""
    computed_table.plot(kind, quantity=quantity, show=False)
    plt.close("all")


def test_plot_on_existing_axes(computed_table):
    _, ax = plt.subplots()
    computed_table.plot("complex_dsb", ax=ax, show=True)
    assert ax.get_xlabel() == "Cluster size [bp]"
    assert len(ax.patches) > 0
    plt.close("all")


def test_plot_empty_table(computed_table):
    computed_table.table["complex_dsb"] = computed_table.table["complex_dsb"].iloc[0:0]
    _, ax = plt.subplots()
    computed_table.plot("complex_dsb", ax=ax, show=False)
    assert ax.texts[0].get_text() == "No entries"
    plt.close("all")


@pytest.mark.parametrize("kind, quantity, message", [
    ("clusters", None, "Invalid table"),
    ("events", "size", "Invalid quantity"),
    ("complex_dsb", "ssb", "Invalid quantity"),
])
def test_plot_invalid_selection(computed_table, kind, quantity, message):
    with pytest.raises(ValueError, match=message):
        computed_table.plot(kind, quantity=quantity, show=False)


def test_plot_without_results():
    with pytest.raises(RuntimeError, match="No computed results found"):
        DamageTable().plot()
