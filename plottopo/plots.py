"""
Visualization Functions

plottopo(): plot concatenated multichannel data epochs at approximate
scalp positions or on a rectangular grid, one small axes per channel.
"""

import numpy as np
import matplotlib.pyplot as plt

from .constants import (
    LINEWIDTH,
    FONTSIZE,
    CHANFONTSIZE,
    TICKFONTSIZE,
    TITLEFONTSIZE,
    BACKCOLOR,
    VERT_COLOR,
    HORI_COLOR,
    REGION_COLOR,
    REGION_ALPHA,
    DEFAULT_FIGSIZE,
    XLABEL_TIME,
    XLABEL_SPECTRUM,
)
from .options import normalize_arguments, check_options, resolve_channels, _equals_zero
from .chanlocs import read_locs, topo_positions
from .data_io import as_epoch_matrix
from .layout import (
    use_grid,
    default_geom,
    axis_size,
    epoch_count,
    check_channels,
    axis_limits,
    normalize_positions,
    topo_rects,
    grid_rects,
    free_grid_rect,
    channel_names,
)

SCALE_AXES_GID = "plottopo-scale"


def _log(verbose: bool, message: str) -> None:
    if verbose:
        print(f"[plottopo] {message}")


def _has_chanlocs(chanlocs) -> bool:
    """None, '', empty sequences and the legacy placeholder 0 mean no locations."""
    if chanlocs is None or _equals_zero(chanlocs):
        return False
    if isinstance(chanlocs, str):
        return chanlocs != ""
    if isinstance(chanlocs, (list, tuple)):
        return len(chanlocs) > 0
    if isinstance(chanlocs, np.ndarray):
        return chanlocs.size > 0
    return True


# ═══════════════════════════════════════════════════════════════════════════════
# SINGLE CHANNEL DRAWING
# ═══════════════════════════════════════════════════════════════════════════════

def _draw_channel(
    ax,
    traces: list,
    x: np.ndarray,
    *,
    name: str,
    g: dict,
    limits: tuple,
    region: np.ndarray | None = None,
    enlarged: bool = False,
) -> list:
    """
    Draw every epoch of one channel into `ax`.

    Returns the data line handles (one per epoch; empty with plotfunc).
    """
    xmin, xmax, ymin, ymax = limits
    colors = g["colors"]
    handles = []

    if region is not None:
        for lo, hi in region.T:
            ax.axvspan(lo, hi, color=REGION_COLOR, alpha=REGION_ALPHA, linewidth=0, zorder=0)

    for k, trace in enumerate(traces):
        if g["plotfunc"]:
            func, *func_args = g["plotfunc"]
            plt.sca(ax)
            func(trace, *func_args)
            continue
        line_kwargs = {"linewidth": LINEWIDTH}
        if colors:
            fmt, extra = colors[k % len(colors)]
            line_kwargs.update(extra)
            args = (x, trace, fmt) if fmt else (x, trace)
        else:
            args = (x, trace)
        handles.extend(ax.plot(*args, **line_kwargs))

    for xv in g["vert"]:
        ax.axvline(xv, color=VERT_COLOR, linewidth=LINEWIDTH)
    for yv in g["hori"]:
        ax.axhline(yv, color=HORI_COLOR, linewidth=LINEWIDTH)

    ax.set_xlim(xmin, xmax)
    if g["ydir"] == -1:
        ax.set_ylim(ymax, ymin)      # negative up
    else:
        ax.set_ylim(ymin, ymax)
    ax.set_facecolor(BACKCOLOR)

    if enlarged:
        ax.set_title(name, fontsize=TITLEFONTSIZE, fontweight='bold')
        ax.tick_params(labelsize=TICKFONTSIZE)
        ax.grid(alpha=0.3)
    else:
        ax.set_xticks([])
        ax.set_yticks([])
        ax.text(0.02, 0.98, name, transform=ax.transAxes,
                fontsize=CHANFONTSIZE, ha='left', va='top')
    return handles


def _draw_scale_axes(fig, rect: tuple, *, limits: tuple, ydir: int, xlabel: str):
    """Empty axes showing the common x/y limits of every channel."""
    xmin, xmax, ymin, ymax = limits
    ax = fig.add_axes(rect)
    ax.set_gid(SCALE_AXES_GID)
    ax.set_xlim(xmin, xmax)
    ax.set_ylim((ymax, ymin) if ydir == -1 else (ymin, ymax))
    ax.set_xticks([xmin, xmax])
    ax.set_yticks([ymin, ymax])
    ax.set_xticklabels([f"{xmin:g}", f"{xmax:g}"])
    ax.set_yticklabels([f"{ymin:.3g}", f"{ymax:.3g}"])
    ax.tick_params(labelsize=TICKFONTSIZE)
    ax.set_xlabel(xlabel, fontsize=TICKFONTSIZE)
    ax.spines['top'].set_visible(False)
    ax.spines['right'].set_visible(False)
    return ax


# ═══════════════════════════════════════════════════════════════════════════════
# AXCOPY: CLICK A CHANNEL TO OPEN IT ENLARGED
# ═══════════════════════════════════════════════════════════════════════════════

def enable_axcopy(fig, redraw_by_axes: dict, *, figsize: tuple = (8, 5)) -> int:
    """
    Clicking a channel axes opens the channel in its own figure.

    Parameters
    ----------
    fig : plt.Figure
        Figure holding the channel axes
    redraw_by_axes : dict
        Channel axes -> callable(ax) that draws the channel into a new axes

    Returns
    -------
    int
        Callback connection id (for fig.canvas.mpl_disconnect)
    """
    def _on_click(event):
        redraw = redraw_by_axes.get(event.inaxes)
        if redraw is None:
            return
        new_fig, new_ax = plt.subplots(figsize=figsize)
        redraw(new_ax)
        new_fig.tight_layout()
        new_fig.canvas.draw_idle()

    return fig.canvas.mpl_connect('button_press_event', _on_click)


# ═══════════════════════════════════════════════════════════════════════════════
# MAIN ENTRY POINT
# ═══════════════════════════════════════════════════════════════════════════════

def plottopo(
    data,
    *args,
    ax=None,
    figsize: tuple = DEFAULT_FIGSIZE,
    axcopy: bool = True,
    verbose: bool = True,
    **kwargs,
) -> list:
    """
    Plot concatenated multichannel data epochs in a topographic or
    rectangular array.

    Usage:
        plottopo(data, chanlocs=locs, vert=[0], title="ERP")
        plottopo(data, 'chanlocs', locs, 'geom', [6, 4])
        plottopo(data, 'chan.locs', frames, limits, title, chans,
                 axsize, colors, ydir, vert, hori)            # legacy call

    Parameters
    ----------
    data : np.ndarray
        (chans, frames) consecutive epochs, or (chans, frames, n)
    *args
        Legacy positional arguments or alternating key/value pairs
    ax : matplotlib Axes, optional
        Host axes whose area holds the plot array. Default: new figure.
    figsize : tuple
        Size of the new figure when `ax` is not given
    axcopy : bool
        Clicking a channel opens it enlarged in a new figure
    verbose : bool
        Print layout/limit information
    **kwargs
        Options: chanlocs, geom, frames, limits, ylim, title, chans,
        channames, axsize, legend, showleg, colors, ydir, vert, hori,
        regions, plotfunc

    Returns
    -------
    list
        Channel axes, in plotting order

    Raises
    ------
    ValueError
        On invalid options or data/channel mismatches
    """
    raw = np.asarray(data, dtype=float)
    options = normalize_arguments(args)
    options.update(kwargs)
    g = check_options(options)

    matrix = as_epoch_matrix(raw)
    n_data_chans, frames_total = matrix.shape

    locs = read_locs(g["chanlocs"]) if _has_chanlocs(g["chanlocs"]) else None
    chans = resolve_channels(g["chans"], n_data_chans, locs["labels"] if locs else None)

    plotgrid = use_grid(locs, len(chans), g["geom"], verbose=verbose)
    geom = g["geom"] or (default_geom(len(chans)) if plotgrid else [])

    frames = g["frames"] if g["frames"] is not None else raw.shape[1] if raw.ndim > 1 else raw.size
    frames, n_epochs = epoch_count(frames_total, frames)
    check_channels(chans, n_data_chans)
    if g["regions"] and len(g["regions"]) < max(chans):
        raise ValueError(
            f"'regions' has {len(g['regions'])} entries; need one per data channel"
        )

    # ─── Host axes: its area holds the whole plot array ───────────────────
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure
    host_pos = tuple(ax.get_position().bounds)

    axwidth, axheight = axis_size(g["axsize"], geom, host_pos)
    _log(verbose, f"Plotting data using axis size [{axwidth:g},{axheight:g}]")

    selected = matrix[np.asarray(chans) - 1, :]
    x, xmin, xmax, ymin, ymax = axis_limits(g["limits"], selected, frames)
    limits = (xmin, xmax, ymin, ymax)
    xlabel = XLABEL_SPECTRUM if np.all(selected >= 0) else XLABEL_TIME

    ax.set_title(g["title"], fontsize=TITLEFONTSIZE)
    ax.tick_params(labelsize=FONTSIZE)
    ax.set_xlim(xmin, xmax)
    ax.set_ylim(ymin, ymax)
    ax.axis('off')

    _log(verbose, f"limits: [xmin,xmax,ymin,ymax] = [{xmin:4.1f} {xmax:4.1f} {ymin:4.2f} {ymax:4.2f}]")
    color_names = " ".join(fmt or "default" for fmt, _ in g["colors"]) or "default"
    _log(verbose, f"Plotting {n_epochs} traces of {frames} frames with colors: {color_names}")

    # ─── Channel positions ────────────────────────────────────────────────
    names = channel_names(g["channames"], locs["labels"] if locs else None, chans)
    if plotgrid:
        rects = grid_rects(geom, len(chans), host_pos, axwidth, axheight)
        scale_rect = free_grid_rect(geom, len(chans), host_pos, axwidth, axheight)
    else:
        xvals, yvals = topo_positions(locs, chans)
        xvals, yvals = normalize_positions(xvals, yvals, host_pos)
        rects = topo_rects(xvals, yvals, axwidth, axheight)
        scale_rect = (host_pos[0], host_pos[1], axwidth, axheight)

    # ─── Plot traces ──────────────────────────────────────────────────────
    channel_axes = []
    redraw_by_axes = {}
    first_handles = []
    for c, (chan, rect) in enumerate(zip(chans, rects)):
        traces = [
            selected[c, k * frames:(k + 1) * frames] for k in range(n_epochs)
        ]
        region = g["regions"][chan - 1] if g["regions"] else None
        draw_kwargs = dict(name=names[c], g=g, limits=limits, region=region)

        cax = fig.add_axes(rect)
        handles = _draw_channel(cax, traces, x, **draw_kwargs)
        if c == 0:
            first_handles = handles
        channel_axes.append(cax)

        def _redraw(new_ax, traces=traces, draw_kwargs=draw_kwargs):
            _draw_channel(new_ax, traces, x, enlarged=True, **draw_kwargs)
            new_ax.set_xlabel(xlabel, fontsize=FONTSIZE)
        redraw_by_axes[cax] = _redraw

    # ─── Legend ───────────────────────────────────────────────────────────
    if g["legend"] and g["showleg"] and first_handles:
        n = min(len(g["legend"]), len(first_handles))
        channel_axes[0].legend(
            first_handles[:n], g["legend"][:n],
            loc=g["legend_loc"] if g["legend_loc"] is not None else 'best',
            fontsize=CHANFONTSIZE,
        )

    if scale_rect is not None:
        _draw_scale_axes(fig, scale_rect, limits=limits, ydir=g["ydir"], xlabel=xlabel)

    if axcopy:
        enable_axcopy(fig, redraw_by_axes)

    return channel_axes
