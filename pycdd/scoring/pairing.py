"""
Double-strand break pairing.

This module provides:

- :func:`pair_double_strand_breaks`: the two-cursor pairing of strand-1 and strand-2
  SSB sites used by the cluster pipeline.
- :func:`count_strand_breaks`: the single-pass SSB/DSB counter of the Geant4 pdb4dna
  example, which works on energy maps directly and reports counts only.

A DSB is a pair of backbone lesions on opposite strands separated by at most
``max_distance`` base pairs.
"""

from collections import deque
from typing import List, MutableMapping, Tuple


def pair_double_strand_breaks(strand1_sites: List[int], strand2_sites: List[int],
                              max_distance: int) -> List[int]:
    """
    Pair SSB sites across strands into DSBs.

    Both lists must be sorted ascending. Paired sites are deleted from their lists
    in place; whatever remains are simple SSBs.

    The returned list is flat: entries ``2k`` and ``2k + 1`` are the two ends of the
    k-th DSB, lower bp index first (the strand-1 site first on ties).

    :param strand1_sites: Sorted SSB bp indices on strand 1. Modified in place.
    :type strand1_sites: list[int]
    :param strand2_sites: Sorted SSB bp indices on strand 2. Modified in place.
    :type strand2_sites: list[int]
    :param max_distance: Largest bp separation that still forms a DSB.
    :type max_distance: int

    :returns: Flat list of DSB end positions.
    :rtype: list[int]

    Examples
    --------

    >>> s1, s2 = [5], [5]
    >>> pair_double_strand_breaks(s1, s2, 0)
    [5, 5]
    >>> s1, s2
    ([], [])
    """
    dsb_ends: List[int] = []
    i = j = 0
    while i < len(strand1_sites) and j < len(strand2_sites):
        site1 = strand1_sites[i]
        site2 = strand2_sites[j]
        diff = site2 - site1

        if abs(diff) <= max_distance:
            if site1 <= site2:
                dsb_ends.extend((site1, site2))
            else:
                dsb_ends.extend((site2, site1))
            # deleting at the cursors moves both onto the next candidates
            del strand1_sites[i]
            del strand2_sites[j]
        elif diff < 0:
            j += 1
        else:
            i += 1

    return dsb_ends


def count_strand_breaks(strand1_energies: MutableMapping[int, float],
                        strand2_energies: MutableMapping[int, float],
                        ssb_threshold: float, max_distance: int) -> Tuple[int, int]:
    """
    Count SSBs and DSBs directly from two backbone energy maps.

    Each strand-1 nucleotide is taken in bp order. Strand-2 nucleotides are consumed
    until one lies within ``max_distance`` of it or beyond it; a strand-2 nucleotide
    lying more than ``max_distance`` ahead is put back for the next strand-1 entry.
    When both nucleotides of a close pair pass the threshold, their two SSBs are
    converted into one DSB. Both maps are drained.

    :param strand1_energies: bp index → summed backbone energy on strand 1 [eV].
    :type strand1_energies: MutableMapping[int, float]
    :param strand2_energies: bp index → summed backbone energy on strand 2 [eV].
    :type strand2_energies: MutableMapping[int, float]
    :param ssb_threshold: Energy threshold for a strand break [eV].
    :type ssb_threshold: float
    :param max_distance: DSB bp distance threshold.
    :type max_distance: int

    :returns: ``(number_of_ssb, number_of_dsb)``.
    :rtype: tuple[int, int]
    """
    queue1 = deque(sorted(strand1_energies.items()))
    queue2 = deque(sorted(strand2_energies.items()))
    strand1_energies.clear()
    strand2_energies.clear()

    ssb1 = ssb2 = dsb = 0

    while queue1:
        nucl1, edep1 = queue1.popleft()
        if edep1 >= ssb_threshold:
            ssb1 += 1

        if not queue2:
            continue

        while True:
            nucl2, edep2 = queue2.popleft()
            if edep2 >= ssb_threshold:
                ssb2 += 1
            if not (nucl1 - nucl2 > max_distance and queue2):
                break

        if nucl2 - nucl1 > max_distance:
            queue2.appendleft((nucl2, edep2))
            if edep2 >= ssb_threshold:
                ssb2 -= 1

        if abs(nucl2 - nucl1) <= max_distance:
            if edep1 >= ssb_threshold and edep2 >= ssb_threshold:
                ssb1 -= 1
                ssb2 -= 1
                dsb += 1

    ssb2 += sum(1 for _, edep2 in queue2 if edep2 >= ssb_threshold)
    return ssb1 + ssb2, dsb
