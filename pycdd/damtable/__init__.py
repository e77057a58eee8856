"""
Tools for generating clustered DNA damage tables (DamageTable).

This subpackage runs the damage classification over a whole deposit stream and
collects the results:

- configuration of thresholds and distances (directly, from a dictionary, from a
  TOPAS parameter file or from a bundled preset)
- per-event scoring, serial or in worker processes
- tabular display, histogram plots and export to pickle or TOPAS ASCII ntuples

Each computed result is stored in the `self.table` dictionary with the structure:

.. code-block:: python

    DamageTable.table = {
        "params": {...},                  # DamageTableParameters as a dict
        "events": pd.DataFrame(...),      # one row per damaged event
        "complex_dsb": pd.DataFrame(...), # one row per Complex DSB
        "non_dsb_cluster": pd.DataFrame(...),
        "dropped_hits": int,              # deposits outside the sensitive region
        "num_histories": int,
    }

Modules
-------

- :mod:`core`:
  Defines :class:`~pycdd.damtable.core.DamageTableParameters` and
  :class:`~pycdd.damtable.core.DamageTable`.

- :mod:`compute`:
  Implements :meth:`~pycdd.damtable.core.DamageTable.compute`.

- :mod:`plot`:
  Adds :meth:`~pycdd.damtable.core.DamageTable.plot`.

Usage
-----

.. code-block:: python

    from pycdd.damtable import DamageTable, DamageTableParameters
    from pycdd.io import HitTable

    params = DamageTableParameters.from_default_source("topas_nbio")
    table = DamageTable(params)
    table.compute(HitTable.from_csv("hits.csv"))
    table.summary()
    table.write_txt("ClusteredDNADamage")

"""

from .core import DamageTable, DamageTableParameters
from . import compute  # noqa
from . import plot  # noqa

__all__ = ["DamageTable", "DamageTableParameters"]
