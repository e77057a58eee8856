"""
I/O submodule for pyCDD.

This package provides everything that sits between a particle-transport run and the
damage-scoring core: geometry addressing, deposit streams and scorer configuration.

Modules
-------

- :mod:`volume_id`:
  :class:`~pycdd.io.volume_id.VolumeIdParser` decodes residue volume copy numbers
  into strand, residue sub-type and bp index.

- :mod:`hit_table`:
  :class:`~pycdd.io.hit_table.HitTable` holds energy deposits (CSV, DataFrame or
  records) and replays them event by event.

- :mod:`topas_parameters`:
  Parsing of TOPAS parameter files (:func:`~pycdd.io.topas_parameters.read_topas_parameters`).

- :mod:`data_registry`:
  Discovery of the bundled parameter presets
  (:func:`~pycdd.io.data_registry.get_default_parameter_path`).
"""

from .volume_id import VolumeIdParser
from .hit_table import HitTable

__all__ = ["VolumeIdParser", "HitTable"]
