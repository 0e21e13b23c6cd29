"""
Configuration loading and validation for plottopo runs.

Functions:
- load_config() - Read JSON config file
- empty_config() - Config skeleton for CLI-only runs
- validate_plot_config() - Validate all sections
- merge_config_with_args() - CLI argument override
- get_default_config_path() - plottopo.json next to the package

Config layout:
    {
      "data":   {"path": "erp.npy", "key": null, "chanlocs": "chan.locs"},
      "plot":   {"title": "ERP", "vert": [0], "limits": [-200, 800, 0, 0]},
      "output": {"path": "erp.png", "dpi": 150, "show": false}
    }
"""

import json
import argparse
from pathlib import Path

from .constants import VALID_OPTIONS

# Resolve module directory for path-robust operations
MODULE_DIR = Path(__file__).parent.resolve()

SECTIONS = ("data", "plot", "output")

# CLI flag (argparse dest) -> plot option
CLI_PLOT_OPTIONS = [
    "geom", "frames", "limits", "ylim", "title", "chans", "axsize",
    "colors", "ydir", "vert", "hori", "legend", "showleg", "channames",
]


def empty_config() -> dict:
    return {"data": {}, "plot": {}, "output": {}}


def load_config(config_path: str) -> dict:
    """
    Load plot configuration from JSON file.

    Args:
        config_path: Path to config JSON file

    Returns:
        Configuration dictionary (missing sections added empty)

    Raises:
        ValueError: If config file is missing or not valid JSON
    """
    try:
        with open(config_path, 'r') as f:
            config = json.load(f)
        print(f"[CONFIG] Loaded configuration from: {config_path}")
    except FileNotFoundError:
        raise ValueError(f"Config file not found: {config_path}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file: {e}")

    if not isinstance(config, dict):
        raise ValueError("Config file must contain a JSON object")
    for section in SECTIONS:
        config.setdefault(section, {})
    return config


def validate_plot_config(config: dict) -> None:
    """
    Validate plot configuration.

    Args:
        config: Configuration dictionary (after CLI merge)

    Raises:
        ValueError: If configuration is invalid
    """
    unknown = set(config) - set(SECTIONS)
    if unknown:
        raise ValueError(f"Unknown config sections: {sorted(unknown)}")
    for section in SECTIONS:
        if not isinstance(config.get(section, {}), dict):
            raise ValueError(f"Config section '{section}' must be an object")

    # Validate data section
    data = config.get("data", {})
    if not data.get("path"):
        raise ValueError("Missing required field: data.path (or pass a data file on the command line)")
    if not isinstance(data["path"], str):
        raise ValueError("data.path must be a string")
    if data.get("key") is not None and not isinstance(data["key"], str):
        raise ValueError("data.key must be a string or null")

    # Validate plot section
    plot = config.get("plot", {})
    for key in plot:
        if key.lower() not in VALID_OPTIONS:
            raise ValueError(f"Unknown plot option in config: '{key}'")
        if key.lower() == "plotfunc":
            raise ValueError("plot.plotfunc cannot be set from a config file (needs a callable)")
    if "chanlocs" in plot and "chanlocs" in data:
        raise ValueError("Set chanlocs in either data.chanlocs or plot.chanlocs, not both")

    # Validate output section
    output = config.get("output", {})
    if output.get("path") is not None and not isinstance(output["path"], str):
        raise ValueError("output.path must be a string")
    if "dpi" in output:
        dpi = output["dpi"]
        if not isinstance(dpi, int) or isinstance(dpi, bool) or dpi <= 0:
            raise ValueError(f"output.dpi must be a positive integer, got: {dpi}")
    if "show" in output and not isinstance(output["show"], bool):
        raise ValueError("output.show must be true or false")

    print(f"    ✓ Config validated successfully")


def _cli_chans(values: list) -> list:
    """Channel numbers stay ints; anything else is a channel label."""
    return [int(v) if v.lstrip("-").isdigit() else v for v in values]


def merge_config_with_args(config: dict, args: argparse.Namespace) -> dict:
    """
    Merge configuration from file with command-line arguments.
    CLI arguments take precedence over config file.

    Args:
        config: Configuration dictionary from file
        args: Parsed command-line arguments

    Returns:
        Merged configuration dictionary
    """
    for section in SECTIONS:
        config.setdefault(section, {})

    if getattr(args, 'data', None):
        config['data']['path'] = args.data
        print(f"    [OVERRIDE] data.path = {args.data} (from CLI)")

    if getattr(args, 'key', None):
        config['data']['key'] = args.key
        print(f"    [OVERRIDE] data.key = {args.key} (from CLI)")

    if getattr(args, 'chanlocs', None):
        config['plot'].pop('chanlocs', None)
        config['data']['chanlocs'] = args.chanlocs
        print(f"    [OVERRIDE] data.chanlocs = {args.chanlocs} (from CLI)")

    for name in CLI_PLOT_OPTIONS:
        value = getattr(args, name, None)
        if value is None:
            continue
        if name == "chans":
            value = _cli_chans(value)
        config['plot'][name] = value
        print(f"    [OVERRIDE] plot.{name} = {value} (from CLI)")

    if getattr(args, 'output', None):
        config['output']['path'] = args.output
        print(f"    [OVERRIDE] output.path = {args.output} (from CLI)")

    if getattr(args, 'dpi', None) is not None:
        config['output']['dpi'] = args.dpi
        print(f"    [OVERRIDE] output.dpi = {args.dpi} (from CLI)")

    if getattr(args, 'show', False):
        config['output']['show'] = True

    return config


def get_default_config_path() -> Path:
    """
    Get the default config path (relative to module directory).

    Returns:
        Path to plottopo.json in module directory
    """
    return MODULE_DIR / "plottopo.json"
