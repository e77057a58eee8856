"""
Merging of per-strand damage lists into one ordered damage sequence.

The sequence spans both strands of one fiber and is ordered by base-pair index.
It is built by seeding with the strand-1 SSB sites and inserting, in this order,
strand-1 BD, strand-2 SSB, strand-2 BD and finally the DSB ends. Each run is
inserted with a forward-only cursor, placing an entry before the first existing
entry whose bp index is strictly greater. Entries sharing a bp index therefore keep
the merge order (SSB strand 1, BD strand 1, SSB strand 2, BD strand 2, DSB), which
decides cluster boundaries when two sites coincide.
"""

from typing import Iterable, List, Optional

from .sites import DamageSite, DamageType


def _insert_run(sequence: List[DamageSite], bp_indices: Iterable[int],
                damage_type: DamageType, strand: Optional[int] = None) -> None:
    """
    Insert one sorted run of sites into ``sequence`` in place.

    The cursor only moves forward and stays on a freshly inserted entry, so the
    next entry of the run is compared against it first.
    """
    pending = list(bp_indices)
    k = 0
    cursor = 0
    while k < len(pending) and cursor < len(sequence):
        if pending[k] < sequence[cursor].bp_index:
            sequence.insert(cursor, DamageSite(pending[k], damage_type, strand))
            k += 1
        else:
            cursor += 1
    sequence.extend(DamageSite(bp, damage_type, strand) for bp in pending[k:])


def merge_damage_sites(ssb_strand1: Iterable[int], bd_strand1: Iterable[int],
                       ssb_strand2: Iterable[int], bd_strand2: Iterable[int],
                       dsb_ends: Iterable[int]) -> List[DamageSite]:
    """
    Build the ordered damage sequence for one fiber.

    :param ssb_strand1: Sorted SSB bp indices on strand 1 (after DSB pairing).
    :param bd_strand1: Sorted BD bp indices on strand 1.
    :param ssb_strand2: Sorted SSB bp indices on strand 2 (after DSB pairing).
    :param bd_strand2: Sorted BD bp indices on strand 2.
    :param dsb_ends: Flat DSB end list from
        :func:`~pycdd.scoring.pairing.pair_double_strand_breaks`.

    :returns: Damage sites ordered by bp index; duplicates are kept.
    :rtype: list[DamageSite]

    Examples
    --------

    >>> seq = merge_damage_sites([3, 5], [1, 5], [], [], [4, 4])
    >>> [(s.bp_index, s.damage_type.name) for s in seq]
    [(1, 'BD'), (3, 'SSB'), (4, 'DSB'), (4, 'DSB'), (5, 'SSB'), (5, 'BD')]
    """
    sequence = [DamageSite(bp, DamageType.SSB, 0) for bp in ssb_strand1]
    _insert_run(sequence, bd_strand1, DamageType.BD, 0)
    _insert_run(sequence, ssb_strand2, DamageType.SSB, 1)
    _insert_run(sequence, bd_strand2, DamageType.BD, 1)
    _insert_run(sequence, dsb_ends, DamageType.DSB)
    return sequence
