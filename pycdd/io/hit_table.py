"""
Energy-deposit streams for damage scoring.

This module defines the :class:`HitTable`, a pandas-backed container of the energy
deposits produced by a particle-transport run, ready to be replayed event by event
through :class:`~pycdd.scoring.scorer.EventDamageScorer`.

Two addressing schemes are accepted:

- ``volume_id``: the copy number of the hit residue volume, decoded by the scorer
  (see :mod:`pycdd.io.volume_id`)
- ``strand``, ``residue``, ``bp_index``: already decoded coordinates

Columns
-------

===================  ========  ==========================================
column               required  meaning
===================  ========  ==========================================
``event_id``         yes       primary history number
``energy``           yes       deposited energy (converted to eV)
``volume_id``        either    residue volume copy number
``strand``           or        0 or 1
``residue``          these     0 phosphate, 1 sugar, 2 base
``bp_index``         three     base-pair index
``fiber_id``         no        DNA fiber (default 0)
``split_track_id``   no        variance-reduction track id (default 1)
===================  ========  ==========================================

Examples
--------

>>> hits = HitTable.from_records([
...     {"event_id": 0, "volume_id": 150, "energy": 20.0},
...     {"event_id": 0, "volume_id": 1000152, "energy": 30.0},
... ])
>>> hits.num_events
1
"""

from pathlib import Path
from typing import Dict, Iterator, List, Tuple, Union
import numpy as np
import pandas as pd

from pycdd.io.topas_parameters import ENERGY_UNITS_IN_EV

VOLUME_COLUMNS = ["volume_id"]
COORDINATE_COLUMNS = ["strand", "residue", "bp_index"]
OPTIONAL_DEFAULTS = {"fiber_id": 0, "split_track_id": 1}


class HitTable:
    """
    Container of energy deposits grouped by simulated event.

    :param data: One row per deposit.
    :type data: pandas.DataFrame
    :param energy_unit: Unit of the ``energy`` column ("meV", "eV", "keV", "MeV", "GeV").
    :type energy_unit: str

    :raises KeyError: If required columns are missing.
    :raises ValueError: If energies are negative or the unit is unknown.
    """

    def __init__(self, data: pd.DataFrame, energy_unit: str = "eV"):
        if energy_unit not in ENERGY_UNITS_IN_EV:
            raise ValueError(
                f"Unknown energy unit '{energy_unit}'. Allowed: {sorted(ENERGY_UNITS_IN_EV)}"
            )
        df = data.copy()

        missing = [c for c in ("event_id", "energy") if c not in df.columns]
        if missing:
            raise KeyError(f"Missing required columns: {missing}")

        if "volume_id" in df.columns:
            self.addressing = "volume_id"
            address_columns = VOLUME_COLUMNS
        elif all(c in df.columns for c in COORDINATE_COLUMNS):
            self.addressing = "coordinates"
            address_columns = COORDINATE_COLUMNS
        else:
            raise KeyError(
                "Hits need either a 'volume_id' column or all of "
                f"{COORDINATE_COLUMNS}. Found: {list(df.columns)}"
            )

        for column, default in OPTIONAL_DEFAULTS.items():
            if column not in df.columns:
                df[column] = default

        df["energy"] = df["energy"].astype(float) * ENERGY_UNITS_IN_EV[energy_unit]
        if (df["energy"] < 0).any():
            raise ValueError("Energy deposits must be non-negative.")

        int_columns = ["event_id", *address_columns, *OPTIONAL_DEFAULTS]
        df[int_columns] = df[int_columns].astype(np.int64)

        columns = ["event_id", *address_columns, "energy", *OPTIONAL_DEFAULTS]
        self.data = (df[columns]
                     .sort_values("event_id", kind="stable")
                     .reset_index(drop=True))

    def __repr__(self):
        return f"<HitTable hits={len(self)}, events={self.num_events}, addressing={self.addressing}>"

    def __len__(self):
        return len(self.data)

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame, energy_unit: str = "eV") -> "HitTable":
        return cls(df, energy_unit=energy_unit)

    @classmethod
    def from_records(cls, records: List[Dict], energy_unit: str = "eV") -> "HitTable":
        """
        Build a table from a list of per-deposit dictionaries.
        """
        return cls(pd.DataFrame.from_records(records), energy_unit=energy_unit)

    @classmethod
    def from_csv(cls, path: Union[str, Path], energy_unit: str = "eV", **read_kwargs) -> "HitTable":
        """
        Load deposits from a CSV file with a header row.

        :param path: CSV file.
        :type path: str or Path
        :param energy_unit: Unit of the ``energy`` column.
        :type energy_unit: str
        :param read_kwargs: Forwarded to :func:`pandas.read_csv`.

        :raises FileNotFoundError: If the file does not exist.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        return cls(pd.read_csv(path, **read_kwargs), energy_unit=energy_unit)

    @property
    def event_ids(self) -> np.ndarray:
        return self.data["event_id"].unique()

    @property
    def num_events(self) -> int:
        return int(self.data["event_id"].nunique())

    @property
    def total_energy(self) -> float:
        return float(self.data["energy"].sum())

    def iter_events(self) -> Iterator[Tuple[int, List[Dict]]]:
        """
        Yield ``(event_id, hits)`` in ascending event order.

        Hits keep their original order within an event.
        """
        for event_id, group in self.data.groupby("event_id", sort=True):
            yield int(event_id), group.to_dict(orient="records")

    def to_dict(self) -> Dict[str, list]:
        return self.data.to_dict(orient="list")

    def to_csv(self, path: Union[str, Path]) -> None:
        self.data.to_csv(path, index=False)
