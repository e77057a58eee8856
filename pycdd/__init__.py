"""
pyCDD: Clustered DNA damage scoring for track-structure simulations.

pyCDD classifies the energy deposited in the residues of a DNA fiber into
biologically meaningful damage:

- Single strand breaks (SSB) and base damages (BD) from per-nucleotide energy thresholds
- Double strand breaks (DSB) from cross-strand SSB pairs within a bp distance
- Complex DSBs and Non-DSB clusters from proximity clustering along the fiber
- Variance-reduction split copies scored independently within one event

Main subpackages
----------------

- :mod:`pycdd.scoring`: Per-event accumulation, extraction, pairing and clustering.
- :mod:`pycdd.io`: Volume copy numbers, deposit streams and TOPAS parameter files.
- :mod:`pycdd.damtable`: Run-level scoring, result tables, plots and export.
- :mod:`pycdd.data`: Bundled parameter presets.
- :mod:`pycdd.utils`: Multiprocessing helpers.
"""


from .io import HitTable, VolumeIdParser
from .scoring import EventDamageScorer
from .damtable import DamageTable, DamageTableParameters

__all__ = [
    "HitTable",
    "VolumeIdParser",
    "EventDamageScorer",
    "DamageTable",
    "DamageTableParameters"
    ]
