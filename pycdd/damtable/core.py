"""
Core classes for clustered DNA damage tables.

This module defines:
- :class:`DamageTableParameters`: configuration container for the damage classification thresholds
- :class:`DamageTable`: main interface for scoring deposit streams, storing, displaying and exporting results

Parameters can be built directly, from a dictionary, from a TOPAS parameter file or from a
bundled preset. Each DamageTable instance owns the results of one scoring run.
"""

from dataclasses import asdict, dataclass
from typing import Optional, Union, Literal
from tabulate import tabulate
from pathlib import Path
import warnings
import pickle
import datetime
import pandas as pd

from pycdd.io.volume_id import VolumeIdParser, DEFAULT_RESIDUE_PARSER
from pycdd.io.topas_parameters import read_topas_parameters, scorer_parameters, scorer_prefix
from pycdd.io.data_registry import get_default_parameter_path

# TOPAS scorer parameter name -> DamageTableParameters field
TOPAS_PARAMETER_NAMES = {
    "BasePairDistanceForDefiningDSB": "dsb_distance",
    "EnergyThresholdForHavingSSB": "ssb_energy_threshold",
    "EnergyThresholdForHavingBD": "bd_energy_threshold",
    "BasePairDistanceForCluster": "cluster_distance",
    "NumberOfSplit": "number_of_splits",
    "DnaNumNucleosomePerFiber": "num_nucleosomes_per_fiber",
    "DnaNumBpPerNucleosome": "num_bp_per_nucleosome",
}

DEFAULT_SCORER_NAME = "ClusteredDNADamage"

TableKind = Literal["events", "complex_dsb", "non_dsb_cluster"]


@dataclass
class DamageTableParameters:
    """
    Configuration container for clustered DNA damage scoring.

    :ivar dsb_distance: Largest bp separation of two opposite-strand breaks forming a DSB.
    :ivar ssb_energy_threshold: Backbone energy [eV] for a strand break.
    :ivar bd_energy_threshold: Base energy [eV] for a base damage.
    :ivar cluster_distance: Largest bp gap between consecutive lesions of one cluster.
    :ivar number_of_splits: Variance-reduction split copies scored per event.
    :ivar num_nucleosomes_per_fiber: Fiber size (metadata; copy numbers use fixed offsets).
    :ivar num_bp_per_nucleosome: Fiber size (metadata; copy numbers use fixed offsets).
    """

    dsb_distance: int = 10
    ssb_energy_threshold: float = 17.5  # eV
    bd_energy_threshold: float = 17.5   # eV
    cluster_distance: int = 40
    number_of_splits: int = 1

    # --- Fiber geometry (optional metadata) ---
    num_nucleosomes_per_fiber: Optional[int] = None
    num_bp_per_nucleosome: Optional[int] = None

    def __post_init__(self):
        """
        Validate thresholds and distances.

        :raises ValueError: If a distance is negative, a threshold is not positive,
            fewer than one split is requested, or only one fiber-size field is set.
        """
        if self.dsb_distance < 0 or self.cluster_distance < 0:
            raise ValueError(
                f"Distances must be non-negative (dsb_distance={self.dsb_distance}, "
                f"cluster_distance={self.cluster_distance})."
            )
        if self.ssb_energy_threshold <= 0 or self.bd_energy_threshold <= 0:
            raise ValueError("Energy thresholds must be positive.")
        if self.number_of_splits < 1:
            raise ValueError(f"number_of_splits must be >= 1, got {self.number_of_splits}.")

        fiber_size = (self.num_nucleosomes_per_fiber, self.num_bp_per_nucleosome)
        if sum(v is not None for v in fiber_size) == 1:
            raise ValueError("num_nucleosomes_per_fiber and num_bp_per_nucleosome must be given together.")
        if self.num_nucleosomes_per_fiber is not None:
            num_bp = self.num_nucleosomes_per_fiber * self.num_bp_per_nucleosome
            if num_bp >= DEFAULT_RESIDUE_PARSER:
                warnings.warn(
                    f"Fiber of {num_bp} bp does not fit below the residue offset ({DEFAULT_RESIDUE_PARSER}); "
                    "volume copy numbers will decode ambiguously."
                )

        if abs(self.bd_energy_threshold - self.ssb_energy_threshold) > 1e-9:
            warnings.warn(
                f"bd_energy_threshold ({self.bd_energy_threshold} eV) differs from ssb_energy_threshold "
                f"({self.ssb_energy_threshold} eV). Reference TOPAS-nBio output applied the SSB threshold "
                "to base damage as well; BD counts will not match it."
            )

    @classmethod
    def from_dict(cls, config: dict) -> "DamageTableParameters":
        """
        Create a DamageTableParameters instance from a dictionary.

        :param config: Dictionary of configuration fields.
        :type config: dict

        :returns: Populated DamageTableParameters instance.
        :rtype: DamageTableParameters

        :raises ValueError: If unknown keys are present in the dictionary.
        """
        valid_keys = set(cls.__dataclass_fields__.keys())
        extra_keys = set(config.keys()) - valid_keys

        if extra_keys:
            raise ValueError(
                f"Unrecognized keys in DamageTableParameters config: {sorted(extra_keys)}"
            )

        return cls(**config)

    @classmethod
    def from_topas(cls, source: Union[str, Path], scorer_name: str = DEFAULT_SCORER_NAME) -> "DamageTableParameters":
        """
        Read scorer settings from a TOPAS parameter file.

        Recognized names are listed in :data:`TOPAS_PARAMETER_NAMES`; other scorer
        parameters (e.g. ``Quantity``) are ignored. Absent names keep their defaults. Lines
        outside ``Sc/<scorer_name>/`` are skipped, so full run files can be passed.

        :param source: Path to the parameter file.
        :type source: str or Path
        :param scorer_name: Scorer name in ``Sc/<scorer_name>/...``.
        :type scorer_name: str

        :returns: Populated DamageTableParameters instance.
        :rtype: DamageTableParameters

        :raises FileNotFoundError: If the file does not exist.
        :raises ValueError: If the file defines no parameter for ``scorer_name``.
        """
        parameters = read_topas_parameters(source, prefix=scorer_prefix(scorer_name))
        scorer = scorer_parameters(parameters, scorer_name)
        if not scorer:
            raise ValueError(f"No parameters found for scorer '{scorer_name}' in {source}")

        config = {}
        for topas_name, field_name in TOPAS_PARAMETER_NAMES.items():
            if topas_name in scorer:
                config[field_name] = scorer[topas_name]
        return cls.from_dict(config)

    @classmethod
    def from_default_source(cls, name: str = "topas_nbio") -> "DamageTableParameters":
        """
        Load a bundled parameter preset (see :func:`~pycdd.io.data_registry.list_available_defaults`).
        """
        return cls.from_topas(get_default_parameter_path(name), DEFAULT_SCORER_NAME)

    def volume_id_parser(self) -> VolumeIdParser:
        """
        Parser for residue volume copy numbers.

        The fiber geometry numbers residues with fixed offsets, so the parsers do not depend
        on the configured fiber size.
        """
        return VolumeIdParser()


class DamageTable:
    """
    Main handler for clustered DNA damage scoring runs.

    This class holds the scoring configuration, runs the classification over deposit
    streams and manages result storage and export.
    """
    EVENT_COLUMNS = ["event_id", "ssb", "dsb", "bd", "complex_dsb", "non_dsb_cluster"]
    CLUSTER_COLUMNS = ["event_id", "fiber_id", "split_index", "start", "end", "size",
                       "num_ssb", "num_bd", "num_dsb", "num_damage"]

    # TOPAS ntuple column titles, in EVENT_COLUMNS order
    NTUPLE_TITLES = ["Event number", "Single strand breaks", "Double strand breaks",
                     "Base damages", "Complex DSBs", "Non-DSB clusters"]

    def __init__(self, parameters: Optional[DamageTableParameters] = None):
        """
        Initialize a DamageTable with a scoring configuration.

        :param parameters: Thresholds and distances. If None, the defaults are used.
        :type parameters: Optional[DamageTableParameters]
        """
        self.params = parameters or DamageTableParameters()
        self.table = {}

    def __repr__(self):
        return (f"<DamageTable dsb_distance={self.params.dsb_distance}, "
                f"cluster_distance={self.params.cluster_distance}, splits={self.params.number_of_splits}>")

    def _default_filename(self, extension: str = ".pkl") -> Path:
        """
        Generate a default filename based on the scoring settings.

        :param extension: File extension (e.g., '.pkl' or '.phsp').
        :type extension: str

        :returns: Path object pointing to default output location.
        :rtype: Path
        """
        root = Path.home() / ".pyCDD" / extension.strip(".")
        root.mkdir(parents=True, exist_ok=True)
        suffix = extension if extension.startswith(".") else f".{extension}"

        p = self.params
        timestamp = datetime.datetime.now().strftime('%Y%m%d_%H%M%S')
        filename = (f"cdd_dsb{p.dsb_distance}_cl{p.cluster_distance}_ssb{p.ssb_energy_threshold:.1f}"
                    f"_bd{p.bd_energy_threshold:.1f}_split{p.number_of_splits}_{timestamp}{suffix}")
        return root / filename

    def _require_results(self):
        if not self.table:
            raise ValueError("No computed results found. Run 'compute()' first.")

    def get_table(self, kind: TableKind = "events") -> pd.DataFrame:
        """
        Retrieve one of the computed result tables.

        :param kind: ``"events"`` (one row per damaged event), ``"complex_dsb"`` or
            ``"non_dsb_cluster"`` (one row per cluster).
        :type kind: str

        :returns: Result table.
        :rtype: pandas.DataFrame

        :raises ValueError: If results are not available or ``kind`` is unknown.
        """
        self._require_results()
        if kind not in ("events", "complex_dsb", "non_dsb_cluster"):
            raise ValueError(f"Unknown table '{kind}'. Use 'events', 'complex_dsb' or 'non_dsb_cluster'.")
        return self.table[kind]

    def totals(self) -> dict:
        """
        Damage counts summed over all scored events.

        :returns: Dictionary with keys ``ssb``, ``dsb``, ``bd``, ``complex_dsb``, ``non_dsb_cluster``.
        :rtype: dict
        """
        events = self.get_table("events")
        return {c: int(events[c].sum()) for c in self.EVENT_COLUMNS[1:]}

    def save(self, filename: Optional[Union[str, Path]] = None):
        """
        Save the computed results to a pickle file.

        :param filename: Optional output file path. If None, uses default name.
        :type filename: str or Path, optional

        :raises ValueError: If no results have been computed.
        """
        if not self.table:
            raise ValueError("Cannot save: DamageTable has not been computed yet. Run 'compute()' first.")
        path = Path(filename) if filename else self._default_filename(".pkl")
        with open(path, "wb") as f:
            pickle.dump(self.table, f)
        print(f"✅ Table saved to: {path}")

    def load(self, filename: Union[str, Path]):
        """
        Load previously saved results from a pickle file.

        :param filename: Path to the .pkl file.
        :type filename: str or Path

        :raises FileNotFoundError: If the specified file does not exist.
        """
        path = Path(filename)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        with open(path, "rb") as f:
            self.table = pickle.load(f)
        print(f"📂 Table loaded from: {path}")

    def summary(self, verbose: bool = False):
        """
        Print the scoring configuration and, when available, the damage totals.

        :param verbose: If True, include the geometry addressing settings.
        :type verbose: bool, optional
        """
        p = self.params
        main_parameters = [
            ("DSB distance [bp]", p.dsb_distance),
            ("Cluster distance [bp]", p.cluster_distance),
            ("SSB threshold [eV]", p.ssb_energy_threshold),
            ("BD threshold [eV]", p.bd_energy_threshold),
            ("Split copies", p.number_of_splits),
        ]

        print("\nDamageTable Configuration")
        print(tabulate(main_parameters, headers=["Parameter", "Value"], tablefmt="fancy_grid"))

        if verbose:
            parser = p.volume_id_parser()
            addressing = [
                ("Nucleosomes per fiber", p.num_nucleosomes_per_fiber),
                ("bp per nucleosome", p.num_bp_per_nucleosome),
                ("Strand parser", parser.strand_parser),
                ("Residue parser", parser.residue_parser),
            ]
            print(tabulate(addressing, headers=["Setting", "Value"], tablefmt="fancy_grid"))

        if self.table:
            totals = self.totals()
            print(f"\nScored histories: {self.table['num_histories']}, "
                  f"damaged: {len(self.table['events'])}, dropped hits: {self.table['dropped_hits']}")
            print(tabulate(list(totals.items()), headers=["Damage", "Total"], tablefmt="fancy_grid"))

    def display(self, preview_rows: int = 5):
        """
        Print a formatted preview of the event and cluster tables.

        :param preview_rows: Number of rows to display from start and end of each table.
        :type preview_rows: int

        :raises ValueError: If no results have been computed.
        """
        self._require_results()

        print("\n🧬 Clustered DNA Damage Tables:")
        for kind in ("events", "complex_dsb", "non_dsb_cluster"):
            df = self.table[kind]
            print(f"\n🔹 {kind} ({len(df)} rows)")
            if df.empty:
                print("No entries.")
                continue
            if len(df) <= 2 * preview_rows:
                print(tabulate(df, headers="keys", tablefmt="fancy_grid", showindex=False))
            else:
                print(f"\nTop {preview_rows} rows:")
                print(tabulate(df.head(preview_rows), headers="keys", tablefmt="fancy_grid", showindex=False))
                print(f"\nBottom {preview_rows} rows:")
                print(tabulate(df.tail(preview_rows), headers="keys", tablefmt="fancy_grid", showindex=False))
            print("-" * 60)

    def write_txt(self, filename: Optional[Union[str, Path]] = None) -> Path:
        """
        Export the per-event counts as a TOPAS ASCII ntuple.

        Writes ``<name>.phsp`` (one whitespace-separated row per damaged event) and
        ``<name>.header`` describing the columns.

        :param filename: Output path; the suffix is replaced by ``.phsp``. If None, a
            default name is generated.
        :type filename: str or Path, optional

        :returns: Path of the written ``.phsp`` file.
        :rtype: Path

        :raises ValueError: If no data has been computed yet.
        """
        if not self.table:
            raise ValueError("Cannot write: DamageTable has not been computed yet. Run 'compute()' first.")

        path = Path(filename).with_suffix(".phsp") if filename else self._default_filename(".phsp")
        path.parent.mkdir(parents=True, exist_ok=True)
        header_path = path.with_suffix(".header")

        events = self.table["events"]
        with open(path, "w") as f:
            for row in events[self.EVENT_COLUMNS].itertuples(index=False):
                f.write(" ".join(str(int(v)) for v in row) + "\n")

        with open(header_path, "w") as f:
            f.write("TOPAS ASCII Scorer\n\n")
            f.write(f"Number of Histories in Run: {self.table['num_histories']}\n")
            f.write(f"Number of Damaged Histories: {len(events)}\n\n")
            f.write("Columns of data are as follows:\n")
            for i, title in enumerate(self.NTUPLE_TITLES, start=1):
                f.write(f" {i}: {title}\n")

        print(f"📝 Table written to: {path}")
        return path
