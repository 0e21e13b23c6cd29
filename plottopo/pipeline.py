"""
Plot Pipeline

Runs a config-driven plottopo job:
1. Load epoch data
2. Read channel locations
3. Plot channels (grid or topographic)
4. Display and/or export
"""

from pathlib import Path
import numpy as np
import matplotlib.pyplot as plt

from .data_io import load_epochs, describe_epochs
from .chanlocs import read_locs
from .plots import plottopo
from .report import save_figure

DEFAULT_DPI = 150


def _banner(title: str) -> None:
    print("\n" + "─" * 80)
    print(title)
    print("─" * 80)


def run_pipeline(config: dict, *, display_plots: bool | None = None, verbose: bool = True) -> dict:
    """
    Execute a plottopo job described by a validated config.

    Parameters
    ----------
    config : dict
        Config with 'data', 'plot' and 'output' sections (see config.py)
    display_plots : bool, optional
        Show the figure interactively. Default: output.show from config.
    verbose : bool
        Print progress

    Returns
    -------
    dict
        - data: loaded array
        - chanlocs: read locations (or None)
        - figure: the plot figure
        - axes: channel axes
        - output_path: saved file (or None)
    """
    data_cfg = config.get("data", {})
    plot_cfg = dict(config.get("plot", {}))
    out_cfg = config.get("output", {})
    if display_plots is None:
        display_plots = bool(out_cfg.get("show", False))

    # ═══════════════════════════════════════════════════════════════════
    # STEP 1: LOAD DATA
    # ═══════════════════════════════════════════════════════════════════
    if verbose:
        _banner("[STEP 1/4] LOADING DATA")
    data_path = Path(data_cfg["path"])
    data = load_epochs(data_path, key=data_cfg.get("key"))
    if verbose:
        info = describe_epochs(data, int(plot_cfg.get("frames") or 0))
        print(f"File:       {data_path.name}")
        print(f"Shape:      {tuple(data.shape)}")
        print(f"Channels:   {info['n_chans']}")
        print(f"Epochs:     {info['n_epochs']} × {info['frames_per_epoch']} frames")

    # ═══════════════════════════════════════════════════════════════════
    # STEP 2: CHANNEL LOCATIONS
    # ═══════════════════════════════════════════════════════════════════
    if verbose:
        _banner("[STEP 2/4] CHANNEL LOCATIONS")
    chanlocs_src = data_cfg.get("chanlocs", plot_cfg.pop("chanlocs", None))
    chanlocs = read_locs(chanlocs_src) if chanlocs_src else None
    if verbose:
        if chanlocs is None:
            print("No channel locations - plotting on a rectangular grid")
        else:
            n_located = int(np.count_nonzero(~np.isnan(chanlocs["theta"])))
            print(f"Read {len(chanlocs['labels'])} channels ({n_located} with scalp coordinates)")

    # ═══════════════════════════════════════════════════════════════════
    # STEP 3: PLOT
    # ═══════════════════════════════════════════════════════════════════
    if verbose:
        _banner("[STEP 3/4] PLOTTING")
    if chanlocs is not None:
        plot_cfg["chanlocs"] = chanlocs
    axes = plottopo(data, verbose=verbose, **plot_cfg)
    fig = axes[0].figure

    # ═══════════════════════════════════════════════════════════════════
    # STEP 4: DISPLAY OR EXPORT
    # ═══════════════════════════════════════════════════════════════════
    output_path = None
    if out_cfg.get("path"):
        if verbose:
            _banner("[STEP 4/4] EXPORT")
        output_path = save_figure(
            fig,
            Path(out_cfg["path"]),
            dpi=out_cfg.get("dpi", DEFAULT_DPI),
            close=not display_plots,
        )
        if verbose:
            print(f"✓ Saved: {output_path}")
    elif verbose:
        _banner("[STEP 4/4] EXPORT")
        print("No output path - skipping export")

    if display_plots:
        plt.show()

    return {
        "data": data,
        "chanlocs": chanlocs,
        "figure": fig,
        "axes": axes,
        "output_path": output_path,
    }
