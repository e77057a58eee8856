"""
Per-nucleotide energy accumulation for one simulated event.

This module defines:

- :class:`ResidueClass`: backbone (phosphate or sugar) vs. base residues.
- :func:`classify_residue`: the fixed mapping from nucleotide sub-type index to residue class.
- :class:`EnergyAccumulator`: four energy maps (strand 0/1 × backbone/base), each keyed
  by ``(fiber_id, split_index)`` and then by base-pair index.

An accumulator is owned by a single event pass. Its maps are drained by the
extraction step (:func:`~pycdd.scoring.extraction.extract_sites`) and must be empty
before the next event starts.
"""

from collections import defaultdict
from enum import Enum
from typing import Dict, List, Optional, Tuple

STRANDS = (0, 1)

# Nucleotide sub-types: 0 phosphate, 1 sugar, 2 base
BACKBONE_SUBTYPES = (0, 1)
BASE_SUBTYPE = 2


class ResidueClass(Enum):
    BACKBONE = "backbone"
    BASE = "base"


def classify_residue(subtype_index: int) -> Optional[ResidueClass]:
    """
    Map a nucleotide residue sub-type index to its residue class.

    :param subtype_index: 0 (phosphate), 1 (sugar) or 2 (base).
    :type subtype_index: int

    :returns: :attr:`ResidueClass.BACKBONE` for 0 and 1, :attr:`ResidueClass.BASE` for 2,
        None for any other index.
    :rtype: Optional[ResidueClass]
    """
    if subtype_index in BACKBONE_SUBTYPES:
        return ResidueClass.BACKBONE
    if subtype_index == BASE_SUBTYPE:
        return ResidueClass.BASE
    return None


EnergyMap = Dict[int, float]


class EnergyAccumulator:
    """
    Summed energy deposits per (strand, residue class, fiber, split, bp index).

    Energies are in eV. Deposits are added in any order; the summed values do not
    depend on it.
    """

    def __init__(self):
        self._maps: Dict[Tuple[int, ResidueClass], Dict[Tuple[int, int], EnergyMap]] = {
            (strand, residue): defaultdict(dict)
            for strand in STRANDS
            for residue in ResidueClass
        }

    def __repr__(self):
        return f"<EnergyAccumulator fibers={self.fibers()}, entries={len(self)}>"

    def __len__(self):
        return sum(len(m) for maps in self._maps.values() for m in maps.values())

    @property
    def is_empty(self) -> bool:
        return len(self) == 0

    def accumulate(self, fiber_id: int, strand_id: int, residue_class: ResidueClass,
                   bp_index: int, energy: float, split_index: int = 0) -> None:
        """
        Add an energy deposit to the nucleotide it hit.

        Deposits with non-positive energy are ignored, so a zero deposit never creates
        an entry that could later be classified as damage.

        :param fiber_id: DNA fiber the deposit belongs to.
        :type fiber_id: int
        :param strand_id: Strand (0 or 1).
        :type strand_id: int
        :param residue_class: Backbone or base.
        :type residue_class: ResidueClass
        :param bp_index: Base-pair index along the fiber.
        :type bp_index: int
        :param energy: Deposited energy [eV].
        :type energy: float
        :param split_index: Variance-reduction split copy receiving the deposit.
        :type split_index: int

        :raises ValueError: If ``strand_id`` is not 0 or 1.
        """
        if strand_id not in STRANDS:
            raise ValueError(f"Invalid strand id: {strand_id}. Expected 0 or 1.")
        if energy <= 0:
            return
        energy_map = self._maps[(strand_id, residue_class)][(fiber_id, split_index)]
        energy_map[bp_index] = energy_map.get(bp_index, 0.0) + energy

    def energy_map(self, strand_id: int, residue_class: ResidueClass,
                   fiber_id: int, split_index: int = 0) -> EnergyMap:
        """
        Return the live energy map for one strand, residue class, fiber and split.

        The returned dictionary is the accumulator's own storage: draining it drains
        the accumulator.
        """
        return self._maps[(strand_id, residue_class)][(fiber_id, split_index)]

    def fibers(self) -> List[int]:
        """
        Sorted ids of all fibers that received at least one deposit.
        """
        ids = set()
        for maps in self._maps.values():
            ids.update(fiber for (fiber, _), m in maps.items() if m)
        return sorted(ids)

    def clear(self) -> None:
        for maps in self._maps.values():
            maps.clear()
