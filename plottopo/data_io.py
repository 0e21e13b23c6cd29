"""
Epoch Data Loading

Load (chans, frames) or (chans, frames, n) arrays from disk and
concatenate epochs along the frame axis.
"""

from pathlib import Path

import numpy as np

# File suffix -> loader kind
DATA_FILE_TYPES = {
    ".npy": "npy",
    ".npz": "npz",
    ".csv": "text",
    ".txt": "text",
}

DEFAULT_NPZ_KEY = "data"


def as_epoch_matrix(data) -> np.ndarray:
    """
    Return data as (chans, frames_total).

    A 3-D array (chans, frames, n) is unfolded epoch by epoch, so that
    epoch k occupies columns [k*frames, (k+1)*frames).
    """
    arr = np.asarray(data, dtype=float)
    if arr.ndim == 1:
        return arr.reshape(1, -1)
    if arr.ndim == 2:
        return arr
    if arr.ndim == 3:
        chans, frames, n = arr.shape
        return arr.reshape(chans, frames * n, order="F")
    raise ValueError(f"data must be (chans, frames) or (chans, frames, n), got shape {arr.shape}")


def load_epochs(path, *, key: str | None = None) -> np.ndarray:
    """
    Load an epoch array.

    Parameters
    ----------
    path : str or Path
        .npy, .npz, .csv or .txt file
    key : str, optional
        Array name inside a .npz archive. Default: 'data', else the first array.

    Returns
    -------
    np.ndarray
        The array as stored (2-D or 3-D)
    """
    path = Path(path)
    kind = DATA_FILE_TYPES.get(path.suffix.lower())
    if kind is None:
        raise ValueError(
            f"Unsupported data file type '{path.suffix}'. Use one of: {', '.join(DATA_FILE_TYPES)}"
        )
    if not path.exists():
        raise ValueError(f"Data file not found: {path}")

    if kind == "npy":
        return np.load(path)
    if kind == "npz":
        with np.load(path) as archive:
            names = list(archive.files)
            if key is not None:
                if key not in names:
                    raise ValueError(f"Array '{key}' not found in {path.name} (has: {names})")
                return archive[key]
            if not names:
                raise ValueError(f"No arrays in {path.name}")
            return archive[DEFAULT_NPZ_KEY if DEFAULT_NPZ_KEY in names else names[0]]

    delimiter = "," if path.suffix.lower() == ".csv" else None
    return np.atleast_2d(np.loadtxt(path, delimiter=delimiter))


def describe_epochs(data: np.ndarray, frames: int = 0) -> dict:
    """Shape summary used for progress output."""
    matrix = as_epoch_matrix(data)
    chans, frames_total = matrix.shape
    frames = frames if frames > 0 else (data.shape[1] if np.ndim(data) == 3 else frames_total)
    return {
        "n_chans": chans,
        "frames_total": frames_total,
        "frames_per_epoch": frames,
        "n_epochs": frames_total // frames if frames > 0 else 0,
    }
