import numpy as np
import pandas as pd

from pycdd.damtable import DamageTable, DamageTableParameters
from pycdd.io import HitTable, VolumeIdParser

"""
Example usage of DamageTable to classify clustered DNA damage from energy deposits.

This script demonstrates how to:
  - Load the scorer settings from the bundled TOPAS-nBio preset.
  - Build a synthetic deposit stream addressed by residue volume copy numbers.
  - Score every event (SSB, BD, DSB, Complex DSB, Non-DSB clusters).
  - Print, plot and export the results as a TOPAS ASCII ntuple.
"""


def synthetic_hits(num_events: int, hits_per_event: int, num_bp: int, seed: int = 7) -> HitTable:
    """
    Random deposits concentrated along a short track segment of each event.
    """
    rng = np.random.default_rng(seed)
    parser = VolumeIdParser()
    rows = []
    for event_id in range(num_events):
        center = rng.integers(0, num_bp)
        bp = np.clip(rng.normal(center, 30, hits_per_event).astype(int), 0, num_bp - 1)
        strand = rng.integers(0, 2, hits_per_event)
        residue = rng.integers(0, 3, hits_per_event)
        energy = rng.exponential(12.0, hits_per_event)  # eV
        for s, r, b, e in zip(strand, residue, bp, energy):
            rows.append({"event_id": event_id, "volume_id": parser.encode(s, r, b), "energy": e})
    return HitTable.from_dataframe(pd.DataFrame(rows))


def main():

    ## Scorer settings (DSB distance 10 bp, thresholds 17.5 eV, cluster distance 40 bp)
    params = DamageTableParameters.from_default_source("topas_nbio")

    ## Deposits: 200 events, 40 residue hits each, on an 18 kbp fiber
    num_bp = params.num_nucleosomes_per_fiber * params.num_bp_per_nucleosome
    hits = synthetic_hits(num_events=200, hits_per_event=40, num_bp=num_bp)
    print(hits)

    ## Score all events
    damage_table = DamageTable(parameters=params)
    damage_table.compute(hits, parallel=True)

    ## Inspect results using built-in methods
    damage_table.summary(verbose=True)
    damage_table.display(preview_rows=3)
    damage_table.plot("complex_dsb", quantity="size")
    damage_table.plot("non_dsb_cluster", quantity="num_damage")

    ## Write the per-event counts as a TOPAS ASCII ntuple
    damage_table.write_txt("./ClusteredDNADamage")


if __name__ == "__main__":
    main()
