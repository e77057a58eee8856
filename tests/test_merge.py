from pycdd.scoring.merge import merge_damage_sites
from pycdd.scoring.sites import DamageSite, DamageType


def _bp(sequence):
    return [s.bp_index for s in sequence]


def test_merge_orders_by_bp_index():
    seq = merge_damage_sites([10, 30], [20], [15], [25, 40], [])
    assert _bp(seq) == [10, 15, 20, 25, 30, 40]
    assert [s.damage_type for s in seq] == [
        DamageType.SSB, DamageType.SSB, DamageType.BD, DamageType.BD, DamageType.SSB, DamageType.BD
    ]
    assert [s.strand for s in seq] == [0, 1, 0, 1, 0, 1]


def test_merge_ties_keep_insertion_order():
    seq = merge_damage_sites([5], [5], [5], [5], [5, 5])
    assert seq == [
        DamageSite(5, DamageType.SSB, 0),
        DamageSite(5, DamageType.BD, 0),
        DamageSite(5, DamageType.SSB, 1),
        DamageSite(5, DamageType.BD, 1),
        DamageSite(5, DamageType.DSB, None),
        DamageSite(5, DamageType.DSB, None),
    ]


def test_merge_dsb_ends_inserted_before_greater_sites():
    seq = merge_damage_sites([3, 5], [1, 5], [], [], [4, 4])
    assert [(s.bp_index, s.damage_type.name) for s in seq] == [
        (1, "BD"), (3, "SSB"), (4, "DSB"), (4, "DSB"), (5, "SSB"), (5, "BD")
    ]


def test_merge_keeps_unsorted_dsb_run_order():
    seq = merge_damage_sites([2], [], [], [], [0, 4, 3, 5])
    assert _bp(seq) == [0, 2, 4, 3, 5]


def test_merge_keeps_every_site():
    ssb1, bd1, ssb2, bd2, dsb = [1, 8], [2, 8, 9], [3], [], [6, 7]
    seq = merge_damage_sites(ssb1, bd1, ssb2, bd2, dsb)
    assert len(seq) == 8
    assert sorted(_bp(seq)) == sorted(ssb1 + bd1 + ssb2 + bd2 + dsb)


def test_merge_empty_inputs():
    assert merge_damage_sites([], [], [], [], []) == []
