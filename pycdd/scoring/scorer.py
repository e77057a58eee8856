"""
Per-event damage scoring.

:class:`EventDamageScorer` receives the energy deposits of one simulated event and, at
the end of the event, runs the full classification pass for every fiber and every
variance-reduction split copy:

1. drain the four energy maps into SSB / BD site lists (:mod:`~pycdd.scoring.extraction`)
2. pair cross-strand SSBs into DSBs (:mod:`~pycdd.scoring.pairing`)
3. merge everything into one ordered sequence (:mod:`~pycdd.scoring.merge`)
4. cluster the sequence (:mod:`~pycdd.scoring.clustering`)

A scorer owns all of its per-event state and performs no I/O, so each worker process
can hold a private instance.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from pycdd.io.volume_id import VolumeIdParser

from .accumulator import EnergyAccumulator, ResidueClass, STRANDS, classify_residue
from .clustering import ClusterRecord, DamageTally, cluster_damage_sites
from .extraction import extract_sites
from .merge import merge_damage_sites
from .pairing import pair_double_strand_breaks


@dataclass
class EventDamageResult:
    """
    Damage scored for one simulated event.

    :ivar event_id: Event (primary history) number.
    :ivar tally: Final counters; ``tally.dsb`` already halved.
    :ivar clusters: Complex DSBs and Non-DSB clusters, by fiber, split and bp.
    :ivar dropped_hits: Deposits outside the DNA-sensitive region.
    """
    event_id: int
    tally: DamageTally = field(default_factory=DamageTally)
    clusters: List[ClusterRecord] = field(default_factory=list)
    dropped_hits: int = 0

    @property
    def has_damage(self) -> bool:
        return self.tally.has_damage

    @property
    def complex_dsbs(self) -> List[ClusterRecord]:
        return [c for c in self.clusters if c.is_complex_dsb]

    @property
    def non_dsb_clusters(self) -> List[ClusterRecord]:
        return [c for c in self.clusters if not c.is_complex_dsb]

    def as_row(self) -> dict:
        """
        Ntuple row in the scorer column order.
        """
        t = self.tally
        return {
            "event_id": self.event_id,
            "ssb": t.ssb,
            "dsb": t.dsb,
            "bd": t.bd,
            "complex_dsb": t.complex_dsb,
            "non_dsb_cluster": t.non_dsb_cluster,
        }


class EventDamageScorer:
    """
    Accumulates deposits for one event at a time and classifies the resulting damage.

    :param params: Any object exposing ``dsb_distance``, ``ssb_energy_threshold``,
        ``bd_energy_threshold``, ``cluster_distance``, ``number_of_splits`` and
        ``volume_id_parser()`` (normally a
        :class:`~pycdd.damtable.core.DamageTableParameters`).
    """

    def __init__(self, params):
        self.params = params
        self.parser: VolumeIdParser = params.volume_id_parser()
        self.accumulator = EnergyAccumulator()
        self.event_id: Optional[int] = None
        self.dropped_hits = 0

    def __repr__(self):
        return (f"<EventDamageScorer event={self.event_id}, splits={self.params.number_of_splits}, "
                f"pending={len(self.accumulator)}>")

    def begin_event(self, event_id: int) -> None:
        """
        Start a new event with empty maps and counters.

        :raises RuntimeError: If the previous event was not closed with :meth:`end_event`.
        """
        if not self.accumulator.is_empty:
            raise RuntimeError(
                f"Event {self.event_id} still holds undrained deposits. Call 'end_event()' first."
            )
        self.event_id = event_id
        self.dropped_hits = 0

    def process_hit(self, strand_id: int, residue_subtype: int, bp_index: int, energy: float,
                    fiber_id: int = 0, split_track_id: int = 1) -> bool:
        """
        Score one energy deposit.

        With more than one split copy, a deposit from a split track (track id > 2) is
        credited to split copy ``split_track_id - 3`` only; any other deposit is
        replicated into every split copy.

        :param strand_id: Strand of the hit volume (0 or 1).
        :type strand_id: int
        :param residue_subtype: 0 phosphate, 1 sugar, 2 base.
        :type residue_subtype: int
        :param bp_index: Base-pair index.
        :type bp_index: int
        :param energy: Deposited energy [eV].
        :type energy: float
        :param fiber_id: Fiber the volume belongs to.
        :type fiber_id: int
        :param split_track_id: Variance-reduction track id (1 when splitting is off).
        :type split_track_id: int

        :returns: True if the deposit was scored, False if it was dropped.
        :rtype: bool
        """
        if energy <= 0:
            return False

        residue_class = classify_residue(residue_subtype)
        if strand_id not in STRANDS or residue_class is None:
            self.dropped_hits += 1
            return False

        n_splits = self.params.number_of_splits
        if n_splits > 1 and split_track_id > 2:
            split_index = split_track_id - 3
            if split_index >= n_splits:
                self.dropped_hits += 1
                return False
            self.accumulator.accumulate(fiber_id, strand_id, residue_class, bp_index, energy,
                                        split_index=split_index)
        else:
            for split_index in range(n_splits):
                self.accumulator.accumulate(fiber_id, strand_id, residue_class, bp_index, energy,
                                            split_index=split_index)
        return True

    def process_volume_hit(self, volume_id: int, energy: float,
                           fiber_id: int = 0, split_track_id: int = 1) -> bool:
        """
        Score a deposit addressed by the volume copy number of the hit residue.
        """
        strand_id, residue_subtype, bp_index = self.parser.decode(volume_id)
        return self.process_hit(strand_id, residue_subtype, bp_index, energy,
                                fiber_id=fiber_id, split_track_id=split_track_id)

    def _score_fiber_split(self, fiber_id: int, split_index: int, tally: DamageTally) -> List[ClusterRecord]:
        p = self.params
        acc = self.accumulator

        ssb1 = extract_sites(p.ssb_energy_threshold, acc.energy_map(0, ResidueClass.BACKBONE, fiber_id, split_index))
        ssb2 = extract_sites(p.ssb_energy_threshold, acc.energy_map(1, ResidueClass.BACKBONE, fiber_id, split_index))
        bd1 = extract_sites(p.bd_energy_threshold, acc.energy_map(0, ResidueClass.BASE, fiber_id, split_index))
        bd2 = extract_sites(p.bd_energy_threshold, acc.energy_map(1, ResidueClass.BASE, fiber_id, split_index))

        dsb_ends = pair_double_strand_breaks(ssb1, ssb2, p.dsb_distance)

        tally.ssb += len(ssb1) + len(ssb2)
        tally.bd += len(bd1) + len(bd2)
        tally.dsb += len(dsb_ends)  # two ends per DSB until the event is closed

        sequence = merge_damage_sites(ssb1, bd1, ssb2, bd2, dsb_ends)
        return cluster_damage_sites(sequence, p.cluster_distance, tally,
                                    fiber_id=fiber_id, split_index=split_index)

    def end_event(self) -> EventDamageResult:
        """
        Classify all damage of the current event and reset the scorer.

        :returns: Final tallies and cluster records of the event.
        :rtype: EventDamageResult
        """
        result = EventDamageResult(event_id=self.event_id, dropped_hits=self.dropped_hits)

        for fiber_id in self.accumulator.fibers():
            for split_index in range(self.params.number_of_splits):
                result.clusters.extend(self._score_fiber_split(fiber_id, split_index, result.tally))

        result.tally.dsb //= 2

        self.accumulator.clear()
        self.dropped_hits = 0
        self.event_id = None
        return result

    def score_event(self, event_id: int, hits) -> EventDamageResult:
        """
        Score a complete event in one call.

        :param event_id: Event number.
        :type event_id: int
        :param hits: Iterable of dicts holding ``energy`` and either ``volume_id`` or
            ``strand``/``residue``/``bp_index``, plus optional ``fiber_id`` and
            ``split_track_id``.

        :returns: Scored event.
        :rtype: EventDamageResult
        """
        self.begin_event(event_id)
        for hit in hits:
            fiber_id = int(hit.get("fiber_id", 0))
            split_track_id = int(hit.get("split_track_id", 1))
            if "volume_id" in hit:
                self.process_volume_hit(hit["volume_id"], hit["energy"],
                                        fiber_id=fiber_id, split_track_id=split_track_id)
            else:
                self.process_hit(int(hit["strand"]), int(hit["residue"]), int(hit["bp_index"]),
                                 hit["energy"], fiber_id=fiber_id, split_track_id=split_track_id)
        return self.end_event()
