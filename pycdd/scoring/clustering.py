"""
Clustering of ordered damage sites into Complex DSBs and Non-DSB clusters.

This module defines:

- :class:`DamageTally`: per-event counters of simple damage and clusters.
- :class:`DamageCluster`: the mutable accumulator for the cluster being built.
- :class:`ClusterRecord`: a finalized cluster.
- :func:`cluster_damage_sites`: the left-to-right scan that groups neighbouring sites.

Clustered damage is moved out of the simple tallies: every site absorbed into a
cluster decrements the matching SSB/BD/DSB counter, so after clustering the tallies
only count isolated lesions. DSB sites enter the sequence as two ends per DSB, so DSB
counts are halved when a cluster is finalized; the event-level DSB tally is halved
once by the caller after every fiber and split has been clustered.
"""

from dataclasses import dataclass, asdict
from typing import List, Sequence

from .sites import DamageSite, DamageType

COMPLEX_DSB = "complex_dsb"
NON_DSB_CLUSTER = "non_dsb_cluster"


@dataclass
class DamageTally:
    """
    Running damage counters for one simulated event.

    :ivar ssb: Isolated single-strand breaks.
    :ivar bd: Isolated base damages.
    :ivar dsb: Isolated double-strand breaks (counted as DSB ends until halved).
    :ivar complex_dsb: Clusters containing at least one DSB.
    :ivar non_dsb_cluster: Clusters made of SSBs and BDs only.
    """
    ssb: int = 0
    bd: int = 0
    dsb: int = 0
    complex_dsb: int = 0
    non_dsb_cluster: int = 0

    @property
    def has_damage(self) -> bool:
        return any((self.ssb, self.bd, self.dsb, self.complex_dsb, self.non_dsb_cluster))

    def as_row(self) -> dict:
        return asdict(self)


@dataclass
class DamageCluster:
    num_ssb: int = 0
    num_bd: int = 0
    num_dsb: int = 0
    start: int = 0
    end: int = 0

    def add(self, site: DamageSite, tally: DamageTally, first: bool) -> None:
        """
        Absorb a damage site and remove it from the simple tallies.

        The first site of a fresh cluster sets ``start``; every later one sets ``end``.

        :raises ValueError: If the site carries a label outside {SSB, BD, DSB}.
        """
        if first:
            self.start = site.bp_index
        else:
            self.end = site.bp_index

        if site.damage_type == DamageType.SSB:
            self.num_ssb += 1
            tally.ssb -= 1
        elif site.damage_type == DamageType.BD:
            self.num_bd += 1
            tally.bd -= 1
        elif site.damage_type == DamageType.DSB:
            self.num_dsb += 1
            tally.dsb -= 1
        else:
            raise ValueError(
                f"Unrecognized damage type label {site.damage_type!r} at bp {site.bp_index}. "
                f"Expected one of {[t.name for t in DamageType]}."
            )


@dataclass(frozen=True)
class ClusterRecord:
    """
    A finalized damage cluster.

    :ivar kind: ``"complex_dsb"`` or ``"non_dsb_cluster"``.
    :ivar size: Extent in base pairs, ``end - start + 1``.
    :ivar num_dsb: Number of DSBs (always 0 for Non-DSB clusters).
    :ivar num_damage: Total lesions, ``num_ssb + num_bd + num_dsb``.
    """
    kind: str
    fiber_id: int
    split_index: int
    start: int
    end: int
    size: int
    num_ssb: int
    num_bd: int
    num_dsb: int
    num_damage: int

    @property
    def is_complex_dsb(self) -> bool:
        return self.kind == COMPLEX_DSB


def _finalize(cluster: DamageCluster, tally: DamageTally,
              fiber_id: int, split_index: int) -> ClusterRecord:
    size = cluster.end - cluster.start + 1
    if cluster.num_dsb > 0:
        num_dsb = cluster.num_dsb // 2
        tally.complex_dsb += 1
        kind = COMPLEX_DSB
    else:
        num_dsb = 0
        tally.non_dsb_cluster += 1
        kind = NON_DSB_CLUSTER
    return ClusterRecord(
        kind=kind,
        fiber_id=fiber_id,
        split_index=split_index,
        start=cluster.start,
        end=cluster.end,
        size=size,
        num_ssb=cluster.num_ssb,
        num_bd=cluster.num_bd,
        num_dsb=num_dsb,
        num_damage=cluster.num_ssb + cluster.num_bd + num_dsb,
    )


def cluster_damage_sites(sequence: Sequence[DamageSite], max_distance: int, tally: DamageTally,
                         fiber_id: int = 0, split_index: int = 0) -> List[ClusterRecord]:
    """
    Group neighbouring damage sites into clusters.

    Consecutive sites closer than or equal to ``max_distance`` base pairs belong to the
    same cluster. A cluster is opened by the first close pair (the earlier site is
    absorbed retroactively) and closed by the first larger gap or by the end of the
    sequence. Clusters containing a DSB are Complex DSBs; all others are Non-DSB
    clusters.

    :param sequence: Ordered damage sequence of one fiber, see
        :func:`~pycdd.scoring.merge.merge_damage_sites`.
    :type sequence: Sequence[DamageSite]
    :param max_distance: Cluster bp distance threshold.
    :type max_distance: int
    :param tally: Event tallies, updated in place.
    :type tally: DamageTally
    :param fiber_id: Fiber the sequence belongs to (stored on the records).
    :type fiber_id: int
    :param split_index: Split copy the sequence belongs to (stored on the records).
    :type split_index: int

    :returns: Finalized clusters in bp order.
    :rtype: list[ClusterRecord]

    :raises ValueError: If a site carries an unrecognized damage type.
    """
    records: List[ClusterRecord] = []

    # a cluster needs at least two sites
    if len(sequence) < 2:
        return records

    cluster = DamageCluster()
    is_new_cluster = True
    is_building_cluster = False

    for previous, current in zip(sequence, sequence[1:]):
        if current.bp_index - previous.bp_index <= max_distance:
            if is_new_cluster:
                cluster.add(previous, tally, first=True)
                is_new_cluster = False
                is_building_cluster = True
            cluster.add(current, tally, first=False)
        elif is_building_cluster:
            records.append(_finalize(cluster, tally, fiber_id, split_index))
            cluster = DamageCluster()
            is_building_cluster = False
            is_new_cluster = True

    if is_building_cluster:
        records.append(_finalize(cluster, tally, fiber_id, split_index))

    return records
