"""
Computation engine for DamageTable.

This module scores a :class:`~pycdd.io.hit_table.HitTable` event by event. Each event
is replayed through an :class:`~pycdd.scoring.scorer.EventDamageScorer`; the results
are collected into per-event and per-cluster DataFrames.

In parallel mode events are split into contiguous batches, one per worker process,
and every worker owns a private scorer.
"""

from typing import Dict, List, Optional, Tuple
import logging
import time
from tqdm import tqdm
from concurrent.futures import ProcessPoolExecutor
from functools import partial
from dataclasses import asdict
import pandas as pd

from pycdd.io.hit_table import HitTable
from pycdd.scoring.scorer import EventDamageScorer, EventDamageResult
from pycdd.scoring.clustering import COMPLEX_DSB
from pycdd.utils.parallel import optimal_worker_count, split_into_batches

from .core import DamageTable, DamageTableParameters

EventHits = Tuple[int, List[Dict]]

logger = logging.getLogger(__name__)
logger.setLevel(logging.WARNING)


def _score_event_batch(params: DamageTableParameters, batch: List[EventHits]) -> List[EventDamageResult]:
    """
    Score a batch of events with a fresh scorer.

    Module-level so that it can be sent to worker processes.

    :param params: Scoring configuration.
    :type params: DamageTableParameters
    :param batch: ``(event_id, hits)`` pairs.
    :type batch: list[tuple[int, list[dict]]]

    :returns: One result per event, in batch order.
    :rtype: list[EventDamageResult]
    """
    scorer = EventDamageScorer(params)
    return [scorer.score_event(event_id, hits) for event_id, hits in batch]


def _print_event(result: EventDamageResult):
    t = result.tally
    print("#" * 58)
    print(f"Event #{result.event_id}")
    print(f"# of SSBs = {t.ssb}")
    print(f"# of BDs = {t.bd}")
    print(f"# of simple DSBs = {t.dsb}")
    print(f"# of complex DSBs = {t.complex_dsb}")
    print(f"# of non-DSB clusters = {t.non_dsb_cluster}")
    print("#" * 58)


def _collect_results(results: List[EventDamageResult]) -> Dict[str, pd.DataFrame]:
    """
    Turn event results into the event and cluster DataFrames.

    Only events with at least one non-zero count produce an event row.
    """
    event_rows, complex_rows, non_dsb_rows = [], [], []
    for result in results:
        if result.has_damage:
            event_rows.append(result.as_row())
        for record in result.clusters:
            row = {"event_id": result.event_id, **asdict(record)}
            row.pop("kind")
            if record.kind == COMPLEX_DSB:
                complex_rows.append(row)
            else:
                non_dsb_rows.append(row)

    return {
        "events": pd.DataFrame(event_rows, columns=DamageTable.EVENT_COLUMNS),
        "complex_dsb": pd.DataFrame(complex_rows, columns=DamageTable.CLUSTER_COLUMNS),
        "non_dsb_cluster": pd.DataFrame(non_dsb_rows, columns=DamageTable.CLUSTER_COLUMNS),
    }


def compute(
    self: DamageTable,
    hits: HitTable,
    parallel: bool = False,
    max_workers: Optional[int] = None,
    num_histories: Optional[int] = None,
    verbose: bool = False
) -> None:
    """
    Score every event of a deposit stream.

    For each event:
      - Accumulates deposits per nucleotide (per fiber and split copy)
      - Extracts SSB and BD sites, pairs DSBs
      - Clusters the ordered damage into Complex DSBs and Non-DSB clusters
      - Records the final tallies

    :param self: DamageTable instance.
    :type self: DamageTable
    :param hits: Energy deposits grouped by event.
    :type hits: HitTable
    :param parallel: Whether to score events in worker processes.
    :type parallel: bool
    :param max_workers: Requested number of workers (parallel mode only).
    :type max_workers: int, optional
    :param num_histories: Histories simulated in the run, including those without
        hits. Defaults to the number of events present in ``hits``.
    :type num_histories: int, optional
    :param verbose: Print a damage block for every damaged event.
    :type verbose: bool

    :raises TypeError: If ``hits`` is not a HitTable.
    """
    if not isinstance(hits, HitTable):
        raise TypeError("hits must be an instance of HitTable")

    events = list(hits.iter_events())
    print("\nStarting damage scoring in {} mode ...".format("parallel" if parallel else "serial"))
    print(f"\nEvents to be scored: {len(events)} ({len(hits)} hits)\n")
    start_time = time.time()

    results: List[EventDamageResult] = []
    if parallel and events:
        worker_count = optimal_worker_count(events, user_requested=max_workers)
        batches = split_into_batches(events, worker_count)
        with ProcessPoolExecutor(max_workers=worker_count) as executor:
            for batch_results in tqdm(
                executor.map(partial(_score_event_batch, self.params), batches),
                total=len(batches),
                desc=f"[{worker_count} workers] scoring",
                unit="batch"
            ):
                results.extend(batch_results)
    else:
        scorer = EventDamageScorer(self.params)
        for event_id, event_hits in tqdm(events, desc="scoring", unit="event"):
            results.append(scorer.score_event(event_id, event_hits))

    if verbose:
        for result in results:
            if result.has_damage:
                _print_event(result)

    dropped = sum(r.dropped_hits for r in results)
    if dropped:
        logger.warning(
            f"{dropped} hits fell outside the DNA-sensitive region and were dropped."
        )

    tables = _collect_results(results)
    self.table = {
        "params": asdict(self.params),
        **tables,
        "dropped_hits": dropped,
        "num_histories": num_histories if num_histories is not None else len(events),
    }

    elapsed = time.time() - start_time
    print(f"\n... done. Damaged events: {len(tables['events'])}/{len(events)}. "
          f"Total elapsed time: {elapsed:.2f} seconds.")


DamageTable.compute = compute
