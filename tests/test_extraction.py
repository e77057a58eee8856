from pycdd.scoring.extraction import extract_sites


def test_extract_sites_applies_threshold_inclusively():
    energy_map = {5: 3.0, 1: 2.0, 3: 1.9, 9: 2.5}
    sites = extract_sites(2.0, energy_map)
    assert sites == [1, 5, 9]


def test_extract_sites_drains_the_map():
    energy_map = {2: 20.0, 4: 0.2}
    assert extract_sites(17.5, energy_map) == [2]
    assert energy_map == {}
    assert extract_sites(17.5, energy_map) == []
    assert energy_map == {}


def test_extract_sites_empty_map():
    assert extract_sites(17.5, {}) == []
