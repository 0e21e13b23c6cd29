import matplotlib
matplotlib.use("Agg")

import numpy as np
import matplotlib.pyplot as plt
import pytest


LOC_LINES = """\
1   -18   0.511   Fp1.
2    18   0.511   Fp2.
3     0   0.256   Fz..
4     0   0       Cz..
5   180   0.256   Pz..
6  -162   0.511   O1..
7   162   0.511   O2..
"""


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


@pytest.fixture
def loc_file(tmp_path):
    path = tmp_path / "chan.locs"
    path.write_text(LOC_LINES)
    return path


@pytest.fixture
def loc_records():
    return [
        {"labels": "Fp1", "theta": -18, "radius": 0.511},
        {"labels": "Fp2", "theta": 18, "radius": 0.511},
        {"labels": "Fz", "theta": 0, "radius": 0.256},
        {"labels": "Cz", "theta": 0, "radius": 0.0},
        {"labels": "Pz", "theta": 180, "radius": 0.256},
    ]


@pytest.fixture
def erp():
    """Bipolar test ERPs: 7 channels x 40 frames."""
    rng = np.random.default_rng(0)
    t = np.linspace(0, 1, 40)
    return np.sin(2 * np.pi * 3 * t)[None, :] * np.arange(1, 8)[:, None] + 0.1 * rng.standard_normal((7, 40))
