"""
plottopo Package

Plot concatenated multichannel EEG epochs in a topographic array
(approximate scalp positions from channel locations) or on a
rectangular grid, one small axes per channel.

Usage:
    # Grid layout
    from plottopo import plottopo
    axes = plottopo(erp, geom=[6, 4], vert=[0], title="ERP")

    # Topographic layout from a channel location file
    axes = plottopo(erp, chanlocs="chan.locs", limits=[-200, 800, 0, 0])

    # Legacy positional call
    axes = plottopo(erp, "chan.locs", 0, [-200, 800, -10, 10], "ERP")
"""

__version__ = "1.0.0"
__author__ = "plottopo developers"

# Primary API
from .plots import plottopo, enable_axcopy

# Building blocks for direct access
from .options import normalize_arguments, check_options, parse_line_spec, resolve_channels
from .chanlocs import read_locs, polar_to_xy, topo_positions
from .data_io import as_epoch_matrix, load_epochs
from .report import save_figure, export_pdf
from .pipeline import run_pipeline

__all__ = [
    # Plotting
    "plottopo",
    "enable_axcopy",
    # Options
    "normalize_arguments",
    "check_options",
    "parse_line_spec",
    "resolve_channels",
    # Channel locations
    "read_locs",
    "polar_to_xy",
    "topo_positions",
    # Data / export
    "as_epoch_matrix",
    "load_epochs",
    "save_figure",
    "export_pdf",
    "run_pipeline",
]
