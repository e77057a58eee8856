"""
Damage taxonomy and damage-site records.

This module defines:

- :class:`DamageType`: the closed set of lesion labels (SSB, BD, DSB).
- :class:`DamageSite`: one lesion located at a base-pair index, optionally tagged with its strand.

DSB sites carry no strand: each DSB contributes two sites (one per strand end) to the
ordered damage sequence, both labelled :attr:`DamageType.DSB`.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional


class DamageType(IntEnum):
    """
    Lesion labels used along the ordered damage sequence.
    """
    SSB = 0
    BD = 1
    DSB = 2

    @property
    def label(self) -> str:
        return self.name


@dataclass(frozen=True)
class DamageSite:
    """
    A single lesion in a DNA fiber.

    :ivar bp_index: Base-pair index along the fiber.
    :ivar damage_type: Lesion label. Plain integers are accepted so that upstream
        producers can be validated by the cluster builder.
    :ivar strand: Strand id (0 or 1) for SSB and BD sites, None for DSB ends.
    """
    bp_index: int
    damage_type: DamageType
    strand: Optional[int] = None
