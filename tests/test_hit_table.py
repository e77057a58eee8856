import pytest
import pandas as pd

from pycdd.io.hit_table import HitTable


def sample_records():
    return [
        {"event_id": 2, "volume_id": 150, "energy": 20.0},
        {"event_id": 0, "volume_id": 1000152, "energy": 30.0},
        {"event_id": 2, "volume_id": 200151, "energy": 5.0},
    ]


def test_from_records_defaults_and_sorting():
    hits = HitTable.from_records(sample_records())
    assert hits.addressing == "volume_id"
    assert len(hits) == 3
    assert hits.num_events == 2
    assert list(hits.data["event_id"]) == [0, 2, 2]
    assert (hits.data["fiber_id"] == 0).all()
    assert (hits.data["split_track_id"] == 1).all()
    assert hits.total_energy == pytest.approx(55.0)
    assert "events=2" in repr(hits)


def test_iter_events_keeps_hit_order():
    events = list(HitTable.from_records(sample_records()).iter_events())
    assert [event_id for event_id, _ in events] == [0, 2]
    event_id, hits = events[1]
    assert [h["volume_id"] for h in hits] == [150, 200151]


def test_energy_unit_conversion():
    hits = HitTable.from_records([{"event_id": 0, "volume_id": 1, "energy": 0.02}], energy_unit="keV")
    assert hits.data["energy"].iloc[0] == pytest.approx(20.0)


def test_coordinate_addressing():
    df = pd.DataFrame({
        "event_id": [0], "strand": [1], "residue": [2], "bp_index": [33],
        "energy": [18.0], "fiber_id": [4],
    })
    hits = HitTable.from_dataframe(df)
    assert hits.addressing == "coordinates"
    assert hits.to_dict()["fiber_id"] == [4]


def test_missing_columns_raise():
    with pytest.raises(KeyError, match="Missing required columns"):
        HitTable(pd.DataFrame({"event_id": [0], "volume_id": [1]}))
    with pytest.raises(KeyError, match="volume_id"):
        HitTable(pd.DataFrame({"event_id": [0], "energy": [1.0], "strand": [0]}))


def test_invalid_energy_and_unit():
    with pytest.raises(ValueError, match="non-negative"):
        HitTable.from_records([{"event_id": 0, "volume_id": 1, "energy": -1.0}])
    with pytest.raises(ValueError, match="Unknown energy unit"):
        HitTable.from_records(sample_records(), energy_unit="J")


def test_csv_roundtrip(tmp_path):
    path = tmp_path / "hits.csv"
    HitTable.from_records(sample_records()).to_csv(path)
    hits = HitTable.from_csv(path)
    assert hits.num_events == 2
    assert list(hits.event_ids) == [0, 2]

    with pytest.raises(FileNotFoundError):
        HitTable.from_csv(tmp_path / "missing.csv")
