import pytest

from pycdd.scoring.accumulator import EnergyAccumulator, ResidueClass, classify_residue


@pytest.mark.parametrize("index, expected", [
    (0, ResidueClass.BACKBONE),
    (1, ResidueClass.BACKBONE),
    (2, ResidueClass.BASE),
    (3, None),
    (-1, None),
])
def test_classify_residue(index, expected):
    assert classify_residue(index) is expected


def test_accumulate_sums_deposits_per_nucleotide():
    acc = EnergyAccumulator()
    acc.accumulate(0, 0, ResidueClass.BACKBONE, 10, 8.0)
    acc.accumulate(0, 0, ResidueClass.BACKBONE, 10, 12.0)
    acc.accumulate(0, 0, ResidueClass.BACKBONE, 11, 3.0)
    assert acc.energy_map(0, ResidueClass.BACKBONE, 0) == {10: 20.0, 11: 3.0}
    assert len(acc) == 2


def test_accumulate_keeps_maps_separate():
    acc = EnergyAccumulator()
    acc.accumulate(0, 0, ResidueClass.BACKBONE, 5, 1.0)
    acc.accumulate(0, 1, ResidueClass.BACKBONE, 5, 2.0)
    acc.accumulate(0, 0, ResidueClass.BASE, 5, 3.0)
    acc.accumulate(1, 0, ResidueClass.BACKBONE, 5, 4.0)
    acc.accumulate(0, 0, ResidueClass.BACKBONE, 5, 5.0, split_index=1)

    assert acc.energy_map(0, ResidueClass.BACKBONE, 0) == {5: 1.0}
    assert acc.energy_map(1, ResidueClass.BACKBONE, 0) == {5: 2.0}
    assert acc.energy_map(0, ResidueClass.BASE, 0) == {5: 3.0}
    assert acc.energy_map(0, ResidueClass.BACKBONE, 1) == {5: 4.0}
    assert acc.energy_map(0, ResidueClass.BACKBONE, 0, split_index=1) == {5: 5.0}


def test_accumulate_order_does_not_matter():
    deposits = [(3, 1.5), (1, 2.0), (3, 0.5), (2, 4.0), (1, 1.0)]
    forward, backward = EnergyAccumulator(), EnergyAccumulator()
    for bp, e in deposits:
        forward.accumulate(0, 1, ResidueClass.BASE, bp, e)
    for bp, e in reversed(deposits):
        backward.accumulate(0, 1, ResidueClass.BASE, bp, e)
    assert forward.energy_map(1, ResidueClass.BASE, 0) == backward.energy_map(1, ResidueClass.BASE, 0)


def test_non_positive_energy_is_ignored():
    acc = EnergyAccumulator()
    acc.accumulate(0, 0, ResidueClass.BACKBONE, 7, 0.0)
    acc.accumulate(0, 0, ResidueClass.BACKBONE, 8, -1.0)
    assert acc.is_empty


def test_invalid_strand_raises():
    acc = EnergyAccumulator()
    with pytest.raises(ValueError, match="Invalid strand id"):
        acc.accumulate(0, 2, ResidueClass.BACKBONE, 1, 10.0)


def test_fibers_and_clear():
    acc = EnergyAccumulator()
    acc.accumulate(4, 0, ResidueClass.BACKBONE, 1, 1.0)
    acc.accumulate(2, 1, ResidueClass.BASE, 1, 1.0)
    assert acc.fibers() == [2, 4]
    assert "fibers=[2, 4]" in repr(acc)

    acc.clear()
    assert acc.is_empty
    assert acc.fibers() == []


def test_draining_live_map_drains_accumulator():
    acc = EnergyAccumulator()
    acc.accumulate(0, 0, ResidueClass.BACKBONE, 1, 1.0)
    acc.energy_map(0, ResidueClass.BACKBONE, 0).clear()
    assert acc.is_empty
    assert acc.fibers() == []
