"""
Decoding of DNA-model volume copy numbers.

Each nucleotide residue of the fiber geometry is placed with a copy number that packs
its strand, residue sub-type and base-pair index:

.. code-block:: text

    copy_number = strand * strand_parser + residue * residue_parser + bp_index

with residue 0 = phosphate, 1 = sugar, 2 = base. The fiber geometry places residues at
fixed offsets whatever the fiber size, so the parsers are always 1 000 000 and 100 000
(e.g. ``1200150`` is the base of bp 150 on strand 1). Fibers must stay below 10⁵ bp
for the packing to be unambiguous.

Examples
--------

>>> VolumeIdParser().decode(1200150)
(1, 2, 150)
"""

from typing import Tuple

DEFAULT_STRAND_PARSER = 1_000_000
DEFAULT_RESIDUE_PARSER = 100_000


class VolumeIdParser:
    """
    Splits volume copy numbers into ``(strand, residue_subtype, bp_index)``.

    Decoded values are not validated here: a strand outside {0, 1} or a residue
    outside {0, 1, 2} marks a volume outside the DNA-sensitive region, and the
    scorer drops such hits.
    """

    def __init__(self, strand_parser: int = DEFAULT_STRAND_PARSER,
                 residue_parser: int = DEFAULT_RESIDUE_PARSER):
        if residue_parser <= 0 or strand_parser <= residue_parser:
            raise ValueError(
                f"Invalid parsers: strand_parser={strand_parser}, residue_parser={residue_parser}. "
                "Expected 0 < residue_parser < strand_parser."
            )
        self.strand_parser = strand_parser
        self.residue_parser = residue_parser

    def __repr__(self):
        return f"<VolumeIdParser strand={self.strand_parser}, residue={self.residue_parser}>"

    def decode(self, volume_id: int) -> Tuple[int, int, int]:
        volume_id = int(volume_id)
        strand = volume_id // self.strand_parser
        residue = (volume_id - strand * self.strand_parser) // self.residue_parser
        bp_index = volume_id - strand * self.strand_parser - residue * self.residue_parser
        return strand, residue, bp_index

    def encode(self, strand: int, residue: int, bp_index: int) -> int:
        return strand * self.strand_parser + residue * self.residue_parser + bp_index
