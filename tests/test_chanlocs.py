import json
from types import SimpleNamespace

import numpy as np
import pytest

from plottopo.chanlocs import read_locs, polar_to_xy, topo_positions, read_channel_names


def test_read_loc_file_strips_padding_dots(loc_file):
    locs = read_locs(loc_file)
    assert locs["labels"] == ["Fp1", "Fp2", "Fz", "Cz", "Pz", "O1", "O2"]
    np.testing.assert_allclose(locs["theta"][:3], [-18, 18, 0])
    np.testing.assert_allclose(locs["radius"][3], 0.0)
    assert locs["has_theta"] is True


def test_read_locs_accepts_string_path(loc_file):
    assert read_locs(str(loc_file))["labels"][0] == "Fp1"


def test_read_locs_passthrough(loc_file):
    locs = read_locs(loc_file)
    assert read_locs(locs) is locs


def test_loc_file_skips_comments_and_rejects_short_lines(tmp_path):
    path = tmp_path / "mixed.loc"
    path.write_text("% comment\n\n1 0 0.5 Cz\n")
    assert read_locs(path)["labels"] == ["Cz"]

    bad = tmp_path / "bad.loc"
    bad.write_text("1 0 0.5\n")
    with pytest.raises(ValueError, match="bad.loc:1"):
        read_locs(bad)


def test_read_ced_file_with_missing_coordinates(tmp_path):
    path = tmp_path / "chans.ced"
    path.write_text(
        "Number\tlabels\ttheta\tradius\tX\tY\tZ\n"
        "1\tFz\t0\t0.256\t\t\t\n"
        "2\tEOG\t\t\t\t\t\n"
    )
    locs = read_locs(path)
    assert locs["labels"] == ["Fz", "EOG"]
    assert locs["theta"][0] == 0
    assert np.isnan(locs["theta"][1]) and np.isnan(locs["radius"][1])


def test_ced_requires_columns(tmp_path):
    path = tmp_path / "chans.ced"
    path.write_text("Number\tlabels\tX\n1\tFz\t0\n")
    with pytest.raises(ValueError, match="theta"):
        read_locs(path)


def test_read_json_file(tmp_path):
    path = tmp_path / "chans.json"
    path.write_text(json.dumps([{"labels": "Cz", "theta": 0, "radius": 0}]))
    locs = read_locs(path)
    assert locs["labels"] == ["Cz"]


def test_records_without_theta_field(loc_records):
    locs = read_locs([{"labels": "A"}, {"labels": "B"}])
    assert locs["has_theta"] is False
    assert np.all(np.isnan(locs["theta"]))


def test_records_may_be_objects():
    locs = read_locs([SimpleNamespace(labels="Oz.", theta=180, radius=0.5)])
    assert locs["labels"] == ["Oz"]
    assert locs["has_theta"] is True


def test_unsupported_source_raises(tmp_path):
    with pytest.raises(ValueError, match="Unsupported"):
        read_locs(tmp_path / "chan.xyz")
    with pytest.raises(ValueError, match="not found"):
        read_locs(tmp_path / "missing.locs")
    with pytest.raises(ValueError):
        read_locs(42)


def test_polar_to_xy_nose_is_up_right_is_right():
    x, y = polar_to_xy(np.array([0.0, 90.0, 180.0]), np.array([0.5, 0.5, 0.5]))
    np.testing.assert_allclose(x, [0.0, 0.5, 0.0], atol=1e-12)
    np.testing.assert_allclose(y, [0.5, 0.0, -0.5], atol=1e-12)


def test_topo_positions_selects_channels(loc_records):
    locs = read_locs(loc_records)
    x, y = topo_positions(locs, [3, 5])
    np.testing.assert_allclose(x, [0.0, 0.0], atol=1e-12)
    np.testing.assert_allclose(y, [0.256, -0.256])


def test_topo_positions_places_unlocated_channels_right():
    records = [
        {"labels": "Fz", "theta": 0, "radius": 0.25},
        {"labels": "Cz", "theta": 0, "radius": 0},
        {"labels": "EOG1", "theta": None, "radius": None},
        {"labels": "EOG2", "theta": None, "radius": None},
    ]
    locs = read_locs(records)
    x, y = topo_positions(locs, [1, 2, 3, 4])
    # floor(sqrt(4)) + 1 = 3 channels per column
    np.testing.assert_allclose(x[2:], [0.7, 0.7])
    np.testing.assert_allclose(y[2:], [-0.4, -0.4 + 1 / 3])


def test_topo_positions_more_channels_than_locations(loc_records):
    locs = read_locs(loc_records)
    with pytest.raises(ValueError, match="chanlocs"):
        topo_positions(locs, [1, 2, 3, 4, 5, 6])


def test_read_channel_names(tmp_path):
    path = tmp_path / "names.txt"
    path.write_text("Fz\n\nCz\nPz\n")
    assert read_channel_names(path) == ["Fz", "Cz", "Pz"]


def test_only_padding_dots_are_stripped(tmp_path):
    path = tmp_path / "inner.loc"
    path.write_text("1 0 0.5 A1.2..\n")
    assert read_locs(path)["labels"] == ["A1.2"]
