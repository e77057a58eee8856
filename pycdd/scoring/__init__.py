"""
Clustered DNA damage classification core.

This subpackage turns the energy deposits of one simulated event into classified
DNA damage. Data flows strictly downstream, once per fiber and split copy:

accumulator → extraction → pairing → merge → clustering

Modules
-------

- :mod:`accumulator`:
  :class:`~pycdd.scoring.accumulator.EnergyAccumulator` sums deposits per nucleotide;
  :func:`~pycdd.scoring.accumulator.classify_residue` maps residue sub-types to
  backbone or base.

- :mod:`extraction`:
  :func:`~pycdd.scoring.extraction.extract_sites` drains an energy map into damaged
  bp indices.

- :mod:`pairing`:
  :func:`~pycdd.scoring.pairing.pair_double_strand_breaks` pairs opposite-strand SSBs
  into DSBs; :func:`~pycdd.scoring.pairing.count_strand_breaks` is the pdb4dna counter.

- :mod:`merge`:
  :func:`~pycdd.scoring.merge.merge_damage_sites` builds the ordered damage sequence.

- :mod:`clustering`:
  :func:`~pycdd.scoring.clustering.cluster_damage_sites` groups sites into
  Complex DSBs and Non-DSB clusters and updates the
  :class:`~pycdd.scoring.clustering.DamageTally`.

- :mod:`scorer`:
  :class:`~pycdd.scoring.scorer.EventDamageScorer` runs the whole pass for one event.
"""

from .sites import DamageType, DamageSite
from .accumulator import EnergyAccumulator, ResidueClass, classify_residue
from .extraction import extract_sites
from .pairing import pair_double_strand_breaks, count_strand_breaks
from .merge import merge_damage_sites
from .clustering import DamageTally, DamageCluster, ClusterRecord, cluster_damage_sites
from .scorer import EventDamageScorer, EventDamageResult

__all__ = [
    "DamageType",
    "DamageSite",
    "EnergyAccumulator",
    "ResidueClass",
    "classify_residue",
    "extract_sites",
    "pair_double_strand_breaks",
    "count_strand_breaks",
    "merge_damage_sites",
    "DamageTally",
    "DamageCluster",
    "ClusterRecord",
    "cluster_damage_sites",
    "EventDamageScorer",
    "EventDamageResult",
]
