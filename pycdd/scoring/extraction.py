"""
Simple-damage extraction from accumulated energy maps.

A nucleotide is damaged when the energy summed over the event reaches a threshold:
the backbone maps yield single-strand break (SSB) sites, the base maps yield base
damage (BD) sites.
"""

from typing import List, MutableMapping


def extract_sites(threshold_energy: float, energy_map: MutableMapping[int, float]) -> List[int]:
    """
    Drain an energy map and return the damaged base-pair indices.

    The map is read through a sorted snapshot and then cleared, so the input is
    always empty on return, whether or not any entry passed the threshold.

    :param threshold_energy: Minimum summed energy [eV] for a damage site.
    :type threshold_energy: float
    :param energy_map: Mapping of bp index to summed energy [eV]. Emptied in place.
    :type energy_map: MutableMapping[int, float]

    :returns: Ascending bp indices whose energy is ``>= threshold_energy``.
    :rtype: list[int]
    """
    snapshot = sorted(energy_map.items())
    energy_map.clear()
    return [bp_index for bp_index, energy in snapshot if energy >= threshold_energy]
