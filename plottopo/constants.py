"""
Constants for topographic / grid ERP plotting.

Separated into:
- GRAPHICS SETTINGS: Line widths, font sizes, plot array extent
- DEFAULTS & POLICY: Axis sizes, polarity, channel limits
- OPTION SCHEMA: Accepted option names for plottopo()
"""

# =============================================================================
# GRAPHICS SETTINGS (can be customized)
# =============================================================================

LINEWIDTH = 0.7          # Data line widths (can be non-integer)
FONTSIZE = 10            # Font size for labels
CHANFONTSIZE = 7         # Font size for channel names
TICKFONTSIZE = 8         # Font size for axis tick labels
TITLEFONTSIZE = 12       # Font size for the plot title

# Width and height of the plot array, as a fraction of the host axes
PLOT_WIDTH = 1.0
PLOT_HEIGHT = 1.0

# Background color of each channel axes (RGB, 0-1)
BACKCOLOR = (0.93, 0.96, 1.0)

# Reference line colors
VERT_COLOR = "k"
HORI_COLOR = "k"

# Shaded region style
REGION_COLOR = "#FFD54F"
REGION_ALPHA = 0.35

# Default figure size for a new host figure (inches)
DEFAULT_FIGSIZE = (12, 10)


# =============================================================================
# DEFAULTS & POLICY (use keyword arguments to override)
# =============================================================================

DEFAULT_AXWIDTH = 0.04       # Topographic axis width (figure fraction)
DEFAULT_AXHEIGHT = 0.07      # Topographic axis height (figure fraction)
DEFAULT_SIGN = -1            # ydir default: negative up

MIN_TOPO_CHANNELS = 4        # Fewer channels than this fall back to the grid
MAXPLOTDATACHANS = 264       # Max number of channel traces in one figure

# Placement of channels without scalp coordinates (column block on the right)
EMPTY_CHAN_X0 = 0.7
EMPTY_CHAN_DX = 0.2
EMPTY_CHAN_Y0 = -0.4

XLABEL_TIME = "Time (ms)"
XLABEL_SPECTRUM = "Frequency (Hz)"


# =============================================================================
# OPTION SCHEMA (key/value calling convention)
# =============================================================================

# Positional order of the legacy calling convention (after `data`)
LEGACY_ARG_ORDER = [
    "chanlocs", "frames", "limits", "title", "chans",
    "axsize", "colors", "ydir", "vert", "hori",
]

VALID_OPTIONS = [
    "chanlocs", "frames", "chans", "geom", "channames", "limits", "ylim",
    "title", "plotfunc", "axsize", "regions", "colors", "legend", "showleg",
    "ydir", "vert", "hori",
]

# Channel location file extensions understood by read_locs()
LOC_FILE_TYPES = {
    ".loc": "loc",
    ".locs": "loc",
    ".eloc": "loc",
    ".ced": "ced",
    ".json": "json",
}
