import pytest

from pycdd.scoring.pairing import pair_double_strand_breaks, count_strand_breaks


def test_pairing_distance_one():
    s1, s2 = [0, 3, 5, 9], [2, 8]
    dsb_ends = pair_double_strand_breaks(s1, s2, 1)
    assert dsb_ends == [2, 3, 8, 9]
    assert s1 == [0, 5]
    assert s2 == []


def test_pairing_distance_zero_keeps_all_ssbs():
    s1, s2 = [0, 3, 5, 9], [2, 8]
    assert pair_double_strand_breaks(s1, s2, 0) == []
    assert s1 == [0, 3, 5, 9]
    assert s2 == [2, 8]


def test_pairing_same_bp_index():
    s1, s2 = [5], [5]
    assert pair_double_strand_breaks(s1, s2, 0) == [5, 5]
    assert s1 == [] and s2 == []


def test_pairing_each_site_used_once():
    s1, s2 = [10], [9, 11]
    assert pair_double_strand_breaks(s1, s2, 2) == [9, 10]
    assert s2 == [11]


def test_pairing_end_list_follows_pair_order():
    # pairs are emitted in discovery order, not sorted globally
    s1, s2 = [0, 3], [4, 5]
    assert pair_double_strand_breaks(s1, s2, 4) == [0, 4, 3, 5]


def test_pairing_with_empty_strand():
    s1 = [1, 2, 3]
    assert pair_double_strand_breaks(s1, [], 10) == []
    assert s1 == [1, 2, 3]


@pytest.mark.parametrize("distance", [0, 1, 3, 10])
def test_pairing_conserves_sites(distance):
    s1, s2 = [1, 4, 9, 15, 30], [2, 5, 6, 20, 31]
    total = len(s1) + len(s2)
    dsb_ends = pair_double_strand_breaks(s1, s2, distance)
    assert len(dsb_ends) % 2 == 0
    assert len(dsb_ends) + len(s1) + len(s2) == total
    for a, b in zip(dsb_ends[::2], dsb_ends[1::2]):
        assert 0 <= b - a <= distance


def test_count_strand_breaks_close_pair_is_one_dsb():
    s1, s2 = {10: 20.0}, {12: 20.0}
    assert count_strand_breaks(s1, s2, 17.5, 10) == (0, 1)
    assert s1 == {} and s2 == {}


def test_count_strand_breaks_distant_breaks_stay_ssb():
    assert count_strand_breaks({10: 20.0}, {100: 20.0}, 17.5, 10) == (2, 0)


def test_count_strand_breaks_below_threshold_partner():
    assert count_strand_breaks({10: 5.0}, {11: 20.0}, 17.5, 10) == (1, 0)


def test_count_strand_breaks_empty_strand():
    assert count_strand_breaks({1: 20.0, 2: 30.0}, {}, 17.5, 10) == (2, 0)
    assert count_strand_breaks({}, {1: 20.0}, 17.5, 10) == (1, 0)
