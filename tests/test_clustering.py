import pytest

from pycdd.scoring.clustering import (
    COMPLEX_DSB,
    NON_DSB_CLUSTER,
    DamageTally,
    cluster_damage_sites,
)
from pycdd.scoring.sites import DamageSite, DamageType

S, B, D = DamageType.SSB, DamageType.BD, DamageType.DSB


def _sequence(pairs):
    return [DamageSite(bp, t) for bp, t in pairs]


@pytest.fixture
def mixed_sequence():
    return _sequence([(1, S), (2, B), (5, S), (5, B), (6, B), (6, S), (7, B), (11, S)])


def test_clusters_break_where_gap_exceeds_threshold(mixed_sequence):
    tally = DamageTally(ssb=4, bd=4)
    records = cluster_damage_sites(mixed_sequence, 2, tally)

    assert [(r.start, r.end) for r in records] == [(1, 2), (5, 7)]
    first, second = records
    assert (first.num_ssb, first.num_bd, first.size) == (1, 1, 2)
    assert (second.num_ssb, second.num_bd, second.size) == (2, 3, 3)
    assert all(r.kind == NON_DSB_CLUSTER for r in records)

    # only the SSB at bp 11 stays simple
    assert tally == DamageTally(ssb=1, bd=0, dsb=0, complex_dsb=0, non_dsb_cluster=2)


def test_every_site_counted_once(mixed_sequence):
    tally = DamageTally(ssb=4, bd=4)
    records = cluster_damage_sites(mixed_sequence, 2, tally)
    clustered = sum(r.num_ssb + r.num_bd for r in records)
    assert clustered + tally.ssb + tally.bd == len(mixed_sequence)


def test_cluster_with_dsb_is_complex():
    seq = _sequence([(10, S), (12, D), (14, D), (100, B)])
    tally = DamageTally(ssb=1, bd=1, dsb=2)
    records = cluster_damage_sites(seq, 5, tally)

    assert len(records) == 1
    record = records[0]
    assert record.kind == COMPLEX_DSB
    assert record.is_complex_dsb
    assert (record.start, record.end, record.size) == (10, 14, 5)
    assert record.num_dsb == 1
    assert record.num_damage == 2
    assert tally == DamageTally(ssb=0, bd=1, dsb=0, complex_dsb=1, non_dsb_cluster=0)


def test_single_site_is_a_no_op():
    tally = DamageTally(ssb=1)
    assert cluster_damage_sites(_sequence([(3, S)]), 40, tally) == []
    assert tally == DamageTally(ssb=1)


def test_isolated_sites_produce_no_cluster():
    tally = DamageTally(ssb=2, bd=1)
    seq = _sequence([(0, S), (50, B), (100, S)])
    assert cluster_damage_sites(seq, 40, tally) == []
    assert tally == DamageTally(ssb=2, bd=1)


def test_records_carry_fiber_and_split():
    tally = DamageTally(ssb=2)
    records = cluster_damage_sites(_sequence([(0, S), (1, S)]), 1, tally, fiber_id=3, split_index=2)
    assert (records[0].fiber_id, records[0].split_index) == (3, 2)


def test_unknown_damage_type_raises():
    seq = [DamageSite(1, S), DamageSite(2, 7)]
    with pytest.raises(ValueError, match="Unrecognized damage type"):
        cluster_damage_sites(seq, 5, DamageTally(ssb=1))


def test_tally_has_damage():
    assert not DamageTally().has_damage
    assert DamageTally(non_dsb_cluster=1).has_damage
    assert DamageTally(bd=2).as_row() == {
        "ssb": 0, "bd": 2, "dsb": 0, "complex_dsb": 0, "non_dsb_cluster": 0
    }
