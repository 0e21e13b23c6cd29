"""
Layout Geometry

Grid vs. topographic layout, axis sizes, axis limits and the
per-channel axes rectangles (figure-normalized units).
"""

import math

import numpy as np

from .constants import (
    DEFAULT_AXWIDTH,
    DEFAULT_AXHEIGHT,
    MAXPLOTDATACHANS,
    MIN_TOPO_CHANNELS,
    PLOT_WIDTH,
    PLOT_HEIGHT,
)
from .chanlocs import read_channel_names


# ═══════════════════════════════════════════════════════════════════════════════
# LAYOUT CHOICE
# ═══════════════════════════════════════════════════════════════════════════════

def use_grid(locs: dict | None, n_chans: int, geom: list, *, verbose: bool = True) -> bool:
    """Decide between the rectangular grid and scalp positions."""
    if geom:
        return True
    if locs is None or not locs["has_theta"]:
        return True
    if n_chans < MIN_TOPO_CHANNELS:
        if verbose:
            print("[plottopo] Not enough channels, does not use channel coordinate to plot axis")
        return True
    return False


def default_geom(n_chans: int) -> list:
    """Near-square grid: [ceil(sqrt(n)), ceil(n / rows)]."""
    rows = math.ceil(math.sqrt(n_chans))
    return [rows, math.ceil(n_chans / rows)]


def axis_size(axsize: list, geom: list | None, host_pos: tuple) -> tuple[float, float]:
    """
    Size of each channel axes.

    Grid: unless a height is given, height = H/(rows+1), width = W/(cols+1).
    Topographic: user axsize when given, else DEFAULT_AXWIDTH x DEFAULT_AXHEIGHT.
    """
    axwidth, axheight = axsize[0], axsize[1]
    if geom:
        if np.isnan(axheight):
            axheight = host_pos[3] / (geom[0] + 1)
            axwidth = host_pos[2] / (geom[1] + 1)
        return float(axwidth), float(axheight)

    if np.isnan(axwidth):
        axwidth = DEFAULT_AXWIDTH
    if np.isnan(axheight):
        axheight = DEFAULT_AXHEIGHT
    return float(axwidth), float(axheight)


# ═══════════════════════════════════════════════════════════════════════════════
# INPUT CHECKS
# ═══════════════════════════════════════════════════════════════════════════════

def epoch_count(frames_total: int, frames: int) -> tuple[int, int]:
    """
    Returns (frames_per_epoch, n_epochs).

    frames == 0 means one epoch spanning the whole data.
    """
    if frames <= 0:
        frames = frames_total
    if frames < 2:
        raise ValueError("cannot plot less than 2 frames per trace")
    n_epochs = frames_total // frames
    if n_epochs < 1:
        raise ValueError(
            f"cannot plot less than 1 epoch ({frames} frames per epoch > {frames_total} data frames)"
        )
    return frames, n_epochs


def check_channels(chans: list, n_data_chans: int) -> None:
    if not chans:
        raise ValueError("no channels selected")
    if max(chans) > n_data_chans:
        raise ValueError(f"max channel index > {n_data_chans} channels in data")
    if min(chans) < 1:
        raise ValueError(f"min channel index ({min(chans)}) < 1")
    if len(chans) > MAXPLOTDATACHANS:
        raise ValueError(f"not set up to plot more than {MAXPLOTDATACHANS} traces")


# ═══════════════════════════════════════════════════════════════════════════════
# LIMITS
# ═══════════════════════════════════════════════════════════════════════════════

def axis_limits(limits: list, data: np.ndarray, frames: int) -> tuple:
    """
    Returns (x, xmin, xmax, ymin, ymax).

    Zero limits (or zero x / y pairs) fall back to the frame index for x
    and to symmetric +/- max|data| for y.
    """
    abs_max = float(np.nanmax(np.abs(data))) if data.size else 0.0

    if all(v == 0 for v in limits):
        xmin, xmax, ymin, ymax = 0.0, float(frames - 1), -abs_max, abs_max
    else:
        if len(limits) != 4:
            raise ValueError("limits should be 0 or an array [xmin xmax ymin ymax]")
        xmin, xmax, ymin, ymax = (float(v) for v in limits)

    if xmax == 0 and xmin == 0:
        x = np.arange(frames, dtype=float)
        xmin, xmax = 0.0, float(frames - 1)
    else:
        dx = (xmax - xmin) / (frames - 1)
        x = xmin + dx * np.arange(frames)
    if xmax <= xmin:
        raise ValueError(f"xmax must be > xmin (got xmin={xmin:g}, xmax={xmax:g})")

    if ymax == 0 and ymin == 0:
        ymin, ymax = -abs_max, abs_max
    if ymax <= ymin:
        raise ValueError(f"ymax must be > ymin (got ymin={ymin:g}, ymax={ymax:g})")

    return x, xmin, xmax, ymin, ymax


# ═══════════════════════════════════════════════════════════════════════════════
# AXES RECTANGLES
# ═══════════════════════════════════════════════════════════════════════════════

def normalize_positions(xvals: np.ndarray, yvals: np.ndarray, host_pos: tuple) -> tuple:
    """Map unscaled scalp positions onto the host axes area."""
    left, bottom, width, height = host_pos
    xvals = np.asarray(xvals, dtype=float)
    yvals = np.asarray(yvals, dtype=float)

    if np.unique(xvals).size > 1:
        mid = (xvals.max() + xvals.min()) / 2
        xvals = (xvals - mid) / (xvals.max() - xvals.min())
        xvals = left + width / 2 + PLOT_WIDTH * width * xvals
    else:
        xvals = np.full_like(xvals, left + width / 2)
    yvals = bottom + height / 2 + PLOT_HEIGHT * height * yvals
    return xvals, yvals


def topo_rects(xvals, yvals, axwidth: float, axheight: float) -> list:
    return [
        (float(x) - axwidth / 2, float(y) - axheight / 2, axwidth, axheight)
        for x, y in zip(xvals, yvals)
    ]


def grid_rects(geom: list, n_chans: int, host_pos: tuple, axwidth: float, axheight: float) -> list:
    """Row-major cells over the host area; each axes centered in its cell."""
    rows, cols = geom
    if n_chans > rows * cols:
        raise ValueError(f"({n_chans}) channels to be plotted > grid size [{rows} {cols}]")
    left, bottom, width, height = host_pos
    cell_w = width / cols
    cell_h = height / rows
    rects = []
    for i in range(n_chans):
        row, col = divmod(i, cols)
        cx = left + (col + 0.5) * cell_w
        cy = bottom + height - (row + 0.5) * cell_h
        rects.append((cx - axwidth / 2, cy - axheight / 2, axwidth, axheight))
    return rects


def free_grid_rect(geom: list, n_chans: int, host_pos: tuple, axwidth: float, axheight: float):
    """Rectangle of the first unused grid cell, or None when the grid is full."""
    rows, cols = geom
    if n_chans >= rows * cols:
        return None
    return grid_rects(geom, n_chans + 1, host_pos, axwidth, axheight)[-1]


def channel_names(channames, labels: list | None, chans: list) -> list:
    """
    Display name of each selected channel.

    Priority: explicit channames (list or file), location labels, channel number.
    """
    if channames:
        names = read_channel_names(channames) if isinstance(channames, str) else list(channames)
        if len(names) < max(chans):
            raise ValueError(
                f"'channames' has {len(names)} names but channel {max(chans)} was requested"
            )
        return [names[c - 1] for c in chans]
    if labels:
        return [labels[c - 1] if c <= len(labels) else str(c) for c in chans]
    return [str(c) for c in chans]
