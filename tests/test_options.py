import math

import numpy as np
import pytest

from plottopo.options import (
    normalize_arguments,
    check_options,
    parse_line_spec,
    resolve_channels,
)


# ═══════════════════════════════════════════════════════════════════════════════
# CALLING CONVENTIONS
# ═══════════════════════════════════════════════════════════════════════════════

def test_no_arguments_gives_empty_options():
    assert normalize_arguments(()) == {}


def test_single_argument_is_legacy_chanlocs():
    assert normalize_arguments(("chan.locs",)) == {"chanlocs": "chan.locs"}


def test_key_value_pairs():
    opts = normalize_arguments(("chanlocs", "chan.locs", "title", "ERP"))
    assert opts == {"chanlocs": "chan.locs", "title": "ERP"}


def test_non_string_third_argument_is_legacy():
    opts = normalize_arguments(("chan.locs", 100, [0, 0, 0, 0], "ERP", [1, 2]))
    assert opts == {
        "chanlocs": "chan.locs",
        "frames": 100,
        "limits": [0, 0, 0, 0],
        "title": "ERP",
        "chans": [1, 2],
    }


def test_legacy_title_zero_is_skipped():
    opts = normalize_arguments(("chan.locs", 0, 0, 0, 0, [0.1, 0.1], "k", 1, [0], [0]))
    assert "title" not in opts
    assert opts["ydir"] == 1
    assert opts["vert"] == [0]
    assert opts["hori"] == [0]


def test_legacy_empty_first_argument():
    opts = normalize_arguments(("", 50))
    assert opts == {"chanlocs": "", "frames": 50}


def test_legacy_grid_size_in_chanlocs_position():
    opts = normalize_arguments(([6, 4],))
    assert opts == {"geom": [6, 4]}


def test_unpaired_key_value_raises():
    with pytest.raises(ValueError, match="pairs"):
        normalize_arguments(("title", "ERP", "geom"))


# ═══════════════════════════════════════════════════════════════════════════════
# OPTION CHECK
# ═══════════════════════════════════════════════════════════════════════════════

def test_defaults():
    g = check_options({})
    assert g["frames"] is None
    assert g["chans"] == 0
    assert g["limits"] == [0.0]
    assert g["ydir"] == -1
    assert g["showleg"] is True
    assert g["legend"] == [] and g["legend_loc"] is None
    assert all(math.isnan(v) for v in g["axsize"])
    assert g["title"] == ""


def test_unknown_option_raises():
    with pytest.raises(ValueError, match="Unknown option"):
        check_options({"colour": "k"})


def test_option_names_are_case_insensitive():
    g = check_options({"Title": "ERP", "YDIR": 1})
    assert g["title"] == "ERP"
    assert g["ydir"] == 1


def test_ylim_overwrites_limits():
    assert check_options({"ylim": [-5, 5]})["limits"] == [0.0, 0.0, -5.0, 5.0]
    g = check_options({"limits": [-100, 500, -1, 1], "ylim": [-5, 5]})
    assert g["limits"] == [-100.0, 500.0, -5.0, 5.0]


@pytest.mark.parametrize("limits", [[1, 2, 3], [1, 2]])
def test_bad_limits_raise(limits):
    with pytest.raises(ValueError, match="limits"):
        check_options({"limits": limits})


def test_frames_zero_and_negative():
    assert check_options({"frames": None})["frames"] is None
    assert check_options({"frames": 0})["frames"] == 0
    assert check_options({"frames": 40.0})["frames"] == 40
    with pytest.raises(ValueError):
        check_options({"frames": -3})
    with pytest.raises(ValueError):
        check_options({"frames": 2.5})


def test_geom_must_be_pair():
    assert check_options({"geom": [3, 2]})["geom"] == [3, 2]
    with pytest.raises(ValueError, match="geom"):
        check_options({"geom": [3]})
    with pytest.raises(ValueError, match="geom"):
        check_options({"geom": [0, 2]})


def test_axsize():
    w, h = check_options({"axsize": 0.1})["axsize"]
    assert w == 0.1 and math.isnan(h)
    assert check_options({"axsize": [0.1, 0.2]})["axsize"] == [0.1, 0.2]
    assert all(math.isnan(v) for v in check_options({"axsize": 0})["axsize"])
    with pytest.raises(ValueError, match="axsize"):
        check_options({"axsize": [0.1, 1.5]})


def test_colors_from_string_and_list():
    assert check_options({"colors": "k r--"})["colors"] == [("k", {}), ("r--", {})]
    colors = check_options({"colors": [["k", "LineWidth", 2], "b:"]})["colors"]
    assert colors == [("k", {"linewidth": 2}), ("b:", {})]


def test_parse_line_spec_with_kwargs_dict():
    assert parse_line_spec(("g", {"alpha": 0.5})) == ("g", {"alpha": 0.5})
    with pytest.raises(ValueError):
        parse_line_spec(["k", "linewidth"])
    with pytest.raises(ValueError):
        parse_line_spec(3)


def test_legend_trailing_position():
    g = check_options({"legend": ["Target", "Standard", 3]})
    assert g["legend"] == ["Target", "Standard"]
    assert g["legend_loc"] == 3
    with pytest.raises(ValueError):
        check_options({"legend": ["A", 42]})


def test_showleg_values():
    assert check_options({"showleg": "off"})["showleg"] is False
    assert check_options({"showleg": "ON"})["showleg"] is True
    assert check_options({"showleg": False})["showleg"] is False
    with pytest.raises(ValueError, match="showleg"):
        check_options({"showleg": "maybe"})


def test_ydir_range():
    with pytest.raises(ValueError, match="ydir"):
        check_options({"ydir": 0})


def test_plotfunc_must_be_callable():
    g = check_options({"plotfunc": (print, "x")})
    assert g["plotfunc"] == (print, "x")
    assert check_options({"plotfunc": print})["plotfunc"] == (print,)
    with pytest.raises(ValueError, match="plotfunc"):
        check_options({"plotfunc": ["print"]})


def test_regions_reshaped_to_low_high_rows():
    g = check_options({"regions": [[[0, 10], [5, 20]], [], [1, 2]]})
    np.testing.assert_array_equal(g["regions"][0], [[0, 10], [5, 20]])
    assert g["regions"][1].shape == (2, 0)
    np.testing.assert_array_equal(g["regions"][2], [[1], [2]])
    with pytest.raises(ValueError, match="regions"):
        check_options({"regions": [[1, 2, 3]]})


def test_chans_strings_are_split():
    assert check_options({"chans": "Fz Cz"})["chans"] == ["Fz", "Cz"]
    assert check_options({"chans": [1, 3]})["chans"] == [1, 3]
    assert check_options({"chans": 0})["chans"] == 0


# ═══════════════════════════════════════════════════════════════════════════════
# CHANNEL SELECTION
# ═══════════════════════════════════════════════════════════════════════════════

def test_resolve_all_channels():
    assert resolve_channels(0, 4) == [1, 2, 3, 4]
    assert resolve_channels([], 2) == [1, 2]


def test_resolve_channel_labels():
    labels = ["Fp1", "Fp2", "Cz"]
    assert resolve_channels(["cz", "FP1"], 3, labels) == [3, 1]
    with pytest.raises(ValueError, match="not found"):
        resolve_channels(["Oz"], 3, labels)
    with pytest.raises(ValueError):
        resolve_channels(["Cz"], 3, None)
