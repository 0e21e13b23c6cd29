"""
Channel Location Reader

Read EEG channel locations (polar scalp coordinates) and derive
approximate 2-D plotting positions.

Supported sources:
- Records: list of dicts/objects with 'labels', 'theta', 'radius'
- .loc / .locs / .eloc:  "index theta radius label" (whitespace separated)
- .ced:  tab-separated table with a header row (labels, theta, radius, ...)
- .json: list of records
"""

import json
from pathlib import Path

import numpy as np

from .constants import (
    LOC_FILE_TYPES,
    EMPTY_CHAN_X0,
    EMPTY_CHAN_DX,
    EMPTY_CHAN_Y0,
)


def _clean_label(label) -> str:
    """Loc files pad labels with dots ('Fp1.', 'Cz..')."""
    return str(label).strip().rstrip(".")


def _to_float(value) -> float:
    """Empty cells/fields become NaN (channel without a location)."""
    if value is None:
        return float("nan")
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return float("nan")
    try:
        arr = np.asarray(value, dtype=float).reshape(-1)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid coordinate value: {value!r}")
    return float(arr[0]) if arr.size else float("nan")


def _field(record, name: str):
    if isinstance(record, dict):
        return record.get(name)
    return getattr(record, name, None)


def _has_field(record, name: str) -> bool:
    if isinstance(record, dict):
        return name in record
    return hasattr(record, name)


# ═══════════════════════════════════════════════════════════════════════════════
# FILE PARSERS
# ═══════════════════════════════════════════════════════════════════════════════

def _parse_loc_file(path: Path) -> list:
    records = []
    for line_no, line in enumerate(path.read_text().splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith(("%", "#")):
            continue
        parts = stripped.split()
        if len(parts) < 4:
            raise ValueError(
                f"{path.name}:{line_no}: expected 'index theta radius label', got: {stripped!r}"
            )
        records.append({
            "labels": parts[3],
            "theta": _to_float(parts[1]),
            "radius": _to_float(parts[2]),
        })
    return records


def _parse_ced_file(path: Path) -> list:
    lines = [ln for ln in path.read_text().splitlines() if ln.strip()]
    if not lines:
        return []
    header = [h.strip().lower() for h in lines[0].split("\t")]
    for required in ("labels", "theta", "radius"):
        if required not in header:
            raise ValueError(f"{path.name}: missing '{required}' column in header")
    records = []
    for line_no, line in enumerate(lines[1:], start=2):
        cells = line.split("\t")
        if len(cells) < len(header):
            cells += [""] * (len(header) - len(cells))
        row = dict(zip(header, cells))
        records.append({
            "labels": row["labels"],
            "theta": _to_float(row["theta"]),
            "radius": _to_float(row["radius"]),
        })
    return records


def _parse_json_file(path: Path) -> list:
    try:
        with open(path, "r") as f:
            records = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in channel location file: {e}")
    if not isinstance(records, list):
        raise ValueError(f"{path.name}: expected a list of channel records")
    return records


# ═══════════════════════════════════════════════════════════════════════════════
# PUBLIC API
# ═══════════════════════════════════════════════════════════════════════════════

def read_locs(source) -> dict:
    """
    Read channel locations.

    Parameters
    ----------
    source : str, Path, list or dict
        Location file, list of channel records, or a dict already
        returned by read_locs().

    Returns
    -------
    dict
        - labels: list of channel names
        - theta: np.ndarray, degrees (NaN where unknown)
        - radius: np.ndarray (NaN where unknown)
        - has_theta: whether the source carries a theta field at all
    """
    if isinstance(source, dict) and "labels" in source and "has_theta" in source:
        return source

    if isinstance(source, (str, Path)):
        path = Path(source)
        kind = LOC_FILE_TYPES.get(path.suffix.lower())
        if kind is None:
            raise ValueError(
                f"Unsupported channel location file type '{path.suffix}'. "
                f"Use one of: {', '.join(sorted(LOC_FILE_TYPES))}"
            )
        if not path.exists():
            raise ValueError(f"Channel location file not found: {path}")
        if kind == "loc":
            records = _parse_loc_file(path)
        elif kind == "ced":
            records = _parse_ced_file(path)
        else:
            records = _parse_json_file(path)
    elif isinstance(source, (list, tuple)):
        records = list(source)
    else:
        raise ValueError(f"Cannot read channel locations from {type(source).__name__}")

    has_theta = any(_has_field(r, "theta") for r in records)
    labels = []
    theta = np.full(len(records), np.nan)
    radius = np.full(len(records), np.nan)
    for i, record in enumerate(records):
        label = _field(record, "labels")
        labels.append(_clean_label(label) if label is not None else str(i + 1))
        theta[i] = _to_float(_field(record, "theta"))
        radius[i] = _to_float(_field(record, "radius"))

    return {
        "labels": labels,
        "theta": theta,
        "radius": radius,
        "has_theta": has_theta,
    }


def polar_to_xy(theta_deg: np.ndarray, radius: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """
    Polar scalp coordinates -> cartesian.

    theta is measured from the nose, clockwise (towards the right ear):
        y = r·cos(θ)   (front is up)
        x = r·sin(θ)   (right is right)
    """
    th = np.deg2rad(np.asarray(theta_deg, dtype=float))
    rd = np.asarray(radius, dtype=float)
    return rd * np.sin(th), rd * np.cos(th)


def topo_positions(locs: dict, chans: list) -> tuple[np.ndarray, np.ndarray]:
    """
    Unscaled (x, y) positions for the selected 1-based channels.

    Channels without coordinates are stacked in columns to the right
    of the head (x >= 0.7).
    """
    n_total = len(locs["labels"])
    if len(chans) > n_total or (chans and max(chans) > n_total):
        raise ValueError("data channels must be <= 'chanlocs' channels")

    located = ~(np.isnan(locs["theta"]) | np.isnan(locs["radius"]))
    xvals = np.zeros(n_total)
    yvals = np.zeros(n_total)
    xvals[located], yvals[located] = polar_to_xy(
        locs["theta"][located], locs["radius"][located]
    )

    per_column = int(np.floor(np.sqrt(n_total))) + 1
    for i, idx in enumerate(np.flatnonzero(~located)):
        xvals[idx] = EMPTY_CHAN_X0 + EMPTY_CHAN_DX * (i // per_column)
        yvals[idx] = EMPTY_CHAN_Y0 + (i % per_column) / per_column

    sel = np.asarray(chans, dtype=int) - 1
    return xvals[sel], yvals[sel]


def read_channel_names(path) -> list:
    """One channel name per line (blank lines skipped)."""
    path = Path(path)
    if not path.exists():
        raise ValueError(f"Channel name file not found: {path}")
    return [ln.strip() for ln in path.read_text().splitlines() if ln.strip()]
