"""
Option normalization and validation for plottopo().

Functions:
- normalize_arguments() - Legacy positional call -> key/value dict
- check_options() - Validate option types/ranges and fill defaults
- parse_line_spec() - Color/line spec -> (fmt, kwargs) for Axes.plot
- resolve_channels() - Channel numbers or labels -> 1-based channel list
"""

from numbers import Integral, Real

import numpy as np

from .constants import LEGACY_ARG_ORDER, VALID_OPTIONS, DEFAULT_SIGN


# ═══════════════════════════════════════════════════════════════════════════════
# CALLING CONVENTIONS
# ═══════════════════════════════════════════════════════════════════════════════

def _equals_zero(value) -> bool:
    """True only for a scalar numeric 0 (strings and empty arrays are not zero)."""
    if isinstance(value, (str, bytes)) or value is None:
        return False
    arr = np.asarray(value)
    if arr.dtype == object or arr.size != 1:
        return False
    try:
        return float(arr.reshape(-1)[0]) == 0.0
    except (TypeError, ValueError):
        return False


def _is_legacy_call(args: tuple) -> bool:
    """
    Detect the old positional calling convention:
        plottopo(data, chan_locs, frames, limits, title, channels, ...)
    """
    if len(args) == 1:
        return True
    first = args[0]
    if not isinstance(first, str) or first == "":
        return True
    if len(args) > 2 and not isinstance(args[2], str):
        return True
    return False


def _looks_like_grid_size(value) -> bool:
    """Old API accepted [rows cols] in place of a channel location file."""
    if isinstance(value, (str, bytes, dict)) or value is None:
        return False
    arr = np.asarray(value)
    return arr.dtype.kind in "iuf" and arr.shape == (2,)


def normalize_arguments(args: tuple) -> dict:
    """
    Convert the arguments following `data` into a key/value option dict.

    Legacy positional order:
        chanlocs, frames, limits, title, chans, axsize, colors, ydir, vert, hori

    The title is only taken when it is not the number 0. A [rows cols]
    array in the chanlocs position is read as a grid geometry.

    Raises:
        ValueError: If key/value arguments are unpaired or keys are not strings
    """
    args = tuple(args)
    if not args:
        return {}

    if _is_legacy_call(args):
        options = {}
        for name, value in zip(LEGACY_ARG_ORDER, args):
            if name == "title" and _equals_zero(value):
                continue
            options[name] = value
        if _looks_like_grid_size(options.get("chanlocs")):
            options["geom"] = options.pop("chanlocs")
        return options

    if len(args) % 2 != 0:
        raise ValueError(
            f"Key/value arguments must come in pairs, got {len(args)} arguments"
        )
    options = {}
    for key, value in zip(args[::2], args[1::2]):
        if not isinstance(key, str):
            raise ValueError(f"Option name must be a string, got: {type(key).__name__}")
        options[key] = value
    return options


# ═══════════════════════════════════════════════════════════════════════════════
# PER-OPTION VALIDATORS
# ═══════════════════════════════════════════════════════════════════════════════

def _is_empty(value) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    if isinstance(value, np.ndarray):
        return value.size == 0
    return False


def _float_list(value, name: str) -> list:
    if _is_empty(value):
        return []
    try:
        arr = np.asarray(value, dtype=float).reshape(-1)
    except (TypeError, ValueError):
        raise ValueError(f"'{name}' must be numeric, got: {value!r}")
    return [float(v) for v in arr]


def _int_value(value, name: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"'{name}' must be an integer, got: {value!r}")
    if isinstance(value, Integral):
        return int(value)
    if isinstance(value, Real) and float(value).is_integer():
        return int(value)
    raise ValueError(f"'{name}' must be an integer, got: {value!r}")


def _int_list(value, name: str) -> list:
    return [_int_value(v, name) for v in _float_list(value, name)]


def _check_frames(value) -> int:
    if _is_empty(value):
        return 0
    frames = _int_value(value, "frames")
    if frames < 0:
        raise ValueError(f"'frames' must be >= 0, got: {frames}")
    return frames


def _check_geom(value) -> list:
    geom = _int_list(value, "geom")
    if not geom:
        return []
    if len(geom) != 2 or min(geom) < 1:
        raise ValueError(f"'geom' must be [rows, cols] with values >= 1, got: {geom}")
    return geom


def _check_limits(value) -> list:
    if _equals_zero(value) or _is_empty(value):
        return [0.0]
    limits = _float_list(value, "limits")
    if len(limits) != 4 and any(v != 0 for v in limits):
        raise ValueError(
            "'limits' should be 0 or an array [xmin xmax ymin ymax], "
            f"got {len(limits)} values"
        )
    return limits


def _check_ylim(value) -> list:
    ylim = _float_list(value, "ylim")
    if ylim and len(ylim) != 2:
        raise ValueError(f"'ylim' must be [ymin ymax], got: {ylim}")
    return ylim


def _check_axsize(value) -> list:
    axsize = _float_list(value, "axsize")
    if not axsize:
        return [float("nan"), float("nan")]
    if len(axsize) > 2:
        raise ValueError(f"'axsize' must be [width height], got: {axsize}")
    for v in axsize:
        if not np.isnan(v) and not (0.0 <= v <= 1.0):
            raise ValueError(f"'axsize' values must be within [0, 1], got: {axsize}")
    if len(axsize) == 1:
        axsize.append(float("nan"))
    # 0 is the legacy placeholder for the default size
    return [float("nan") if v == 0 else v for v in axsize]


def _check_plotfunc(value) -> tuple:
    if _is_empty(value):
        return ()
    if callable(value):
        return (value,)
    if isinstance(value, (list, tuple)) and value and callable(value[0]):
        return tuple(value)
    raise ValueError(
        "'plotfunc' must be a callable or a sequence (callable, arg2, arg3, ...)"
    )


def _check_regions(value) -> list:
    if _is_empty(value):
        return []
    if not isinstance(value, (list, tuple)):
        raise ValueError("'regions' must be a list with one entry per data channel")
    regions = []
    for i, region in enumerate(value):
        if _is_empty(region):
            regions.append(np.empty((2, 0)))
            continue
        arr = np.asarray(region, dtype=float)
        if arr.size % 2 != 0:
            raise ValueError(
                f"'regions' entry {i} must hold [low high] pairs, got {arr.size} values"
            )
        regions.append(arr.reshape(2, -1) if arr.ndim == 2 and arr.shape[0] == 2
                       else arr.reshape(-1, 2).T)
    return regions


def parse_line_spec(spec) -> tuple:
    """
    Parse one color/line spec.

    Accepted forms:
        'k--'                          -> ('k--', {})
        ['k', 'linewidth', 2]          -> ('k', {'linewidth': 2})
        ('r', {'linewidth': 2})        -> ('r', {'linewidth': 2})
    """
    if isinstance(spec, str):
        return spec, {}
    if isinstance(spec, (list, tuple)) and spec and isinstance(spec[0], str):
        fmt, rest = spec[0], list(spec[1:])
        if len(rest) == 1 and isinstance(rest[0], dict):
            return fmt, dict(rest[0])
        if len(rest) % 2 != 0:
            raise ValueError(f"Line spec properties must come in pairs: {spec!r}")
        kwargs = {}
        for key, val in zip(rest[::2], rest[1::2]):
            if not isinstance(key, str):
                raise ValueError(f"Line property name must be a string: {key!r}")
            kwargs[key.lower()] = val
        return fmt, kwargs
    raise ValueError(f"Invalid color/line spec: {spec!r}")


def _check_colors(value) -> list:
    if _is_empty(value):
        return []
    if isinstance(value, str):
        return [parse_line_spec(s) for s in value.split()]
    if isinstance(value, (list, tuple)):
        return [parse_line_spec(s) for s in value]
    raise ValueError(f"'colors' must be a list or a string, got: {type(value).__name__}")


def _check_legend(value) -> tuple:
    """Returns (labels, loc). A trailing integer sets the legend position."""
    if _is_empty(value):
        return [], None
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        raise ValueError("'legend' must be a list of strings")
    labels = list(value)
    loc = None
    if labels and isinstance(labels[-1], Integral) and not isinstance(labels[-1], bool):
        loc = int(labels.pop())
        if not 0 <= loc <= 10:
            raise ValueError(f"Legend position must be within 0-10, got: {loc}")
    for label in labels:
        if not isinstance(label, str):
            raise ValueError(f"Legend entries must be strings, got: {label!r}")
    return labels, loc


def _check_showleg(value) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("on", "off"):
        return value.lower() == "on"
    raise ValueError(f"'showleg' must be 'on' or 'off', got: {value!r}")


def _check_ydir(value) -> int:
    ydir = _int_value(value, "ydir")
    if ydir not in (-1, 1):
        raise ValueError(f"'ydir' must be 1 (pos-up) or -1 (neg-up), got: {ydir}")
    return ydir


def _check_channames(value):
    if _is_empty(value):
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
        return list(value)
    raise ValueError("'channames' must be a file name or a list of strings")


def _check_chans(value):
    if _is_empty(value) or _equals_zero(value):
        return 0
    if isinstance(value, str):
        return value.split()
    if isinstance(value, (list, tuple)) and value and all(isinstance(v, str) for v in value):
        return list(value)
    return _int_list(value, "chans")


def _check_title(value) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"'title' must be a string, got: {type(value).__name__}")
    return value


# ═══════════════════════════════════════════════════════════════════════════════
# MAIN OPTION CHECK
# ═══════════════════════════════════════════════════════════════════════════════

def check_options(options: dict) -> dict:
    """
    Validate options and fill in defaults.

    Args:
        options: Option dict from normalize_arguments() merged with keywords

    Returns:
        Dict with every key of VALID_OPTIONS plus 'legend_loc'.
        'frames' is None when not given (frames per epoch of the input).

    Raises:
        ValueError: On unknown option names or invalid values
    """
    lowered = {}
    for key, value in options.items():
        name = key.lower()
        if name not in VALID_OPTIONS:
            raise ValueError(
                f"Unknown option '{key}'. Valid options: {', '.join(VALID_OPTIONS)}"
            )
        lowered[name] = value

    legend, legend_loc = _check_legend(lowered.get("legend"))
    g = {
        "chanlocs": lowered.get("chanlocs", ""),
        "frames": _check_frames(lowered["frames"]) if lowered.get("frames") is not None else None,
        "chans": _check_chans(lowered.get("chans")),
        "geom": _check_geom(lowered.get("geom")),
        "channames": _check_channames(lowered.get("channames")),
        "limits": _check_limits(lowered.get("limits", 0)),
        "ylim": _check_ylim(lowered.get("ylim")),
        "title": _check_title(lowered.get("title", "")),
        "plotfunc": _check_plotfunc(lowered.get("plotfunc")),
        "axsize": _check_axsize(lowered.get("axsize")),
        "regions": _check_regions(lowered.get("regions")),
        "colors": _check_colors(lowered.get("colors")),
        "legend": legend,
        "legend_loc": legend_loc,
        "showleg": _check_showleg(lowered.get("showleg", "on")),
        "ydir": _check_ydir(lowered.get("ydir", DEFAULT_SIGN)),
        "vert": _float_list(lowered.get("vert"), "vert"),
        "hori": _float_list(lowered.get("hori"), "hori"),
    }

    # ylim overwrites the y part of limits
    if g["ylim"]:
        limits = g["limits"] if len(g["limits"]) == 4 else [0.0, 0.0, 0.0, 0.0]
        g["limits"] = limits[:2] + g["ylim"]

    return g


def resolve_channels(chans, n_chans: int, labels: list | None = None) -> list:
    """
    Turn the 'chans' option into a list of 1-based channel numbers.

    0 (or empty) selects every data channel. Strings are matched
    case-insensitively against the channel location labels.
    """
    if _is_empty(chans) or _equals_zero(chans):
        return list(range(1, n_chans + 1))

    if all(isinstance(c, str) for c in chans):
        if not labels:
            raise ValueError("Channel labels given in 'chans' but no channel locations/labels")
        lookup = {label.lower(): i + 1 for i, label in enumerate(labels)}
        resolved = []
        for name in chans:
            if name.lower() not in lookup:
                raise ValueError(f"Channel label not found: '{name}'")
            resolved.append(lookup[name.lower()])
        return resolved

    return [int(c) for c in chans]
