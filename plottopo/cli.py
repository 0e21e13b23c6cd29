#!/usr/bin/env python3
"""
plottopo command line

Plot multichannel epoch data on a grid or at scalp positions.

Usage:
  plottopo erp.npy                                   # grid layout
  plottopo erp.npy --chanlocs chan.locs --vert 0     # topographic layout
  plottopo erp.npy --limits -200 800 0 0 -o erp.png  # x in ms, export PNG
  plottopo --config job.json --title "Grand average"
"""

import sys
import argparse
from pathlib import Path

from .config import (
    load_config,
    empty_config,
    validate_plot_config,
    merge_config_with_args,
    get_default_config_path,
)
from .pipeline import run_pipeline


def parse_arguments(argv: list | None = None) -> argparse.Namespace:
    """Parse command-line arguments"""
    parser = argparse.ArgumentParser(
        prog='plottopo',
        description='Plot EEG epochs in a topographic or rectangular array',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  %(prog)s erp.npy --geom 6 4 --title "ERP"
  %(prog)s erp.npz --key erp --chanlocs chan.ced --chans Fz Cz Pz Oz
  %(prog)s --config job.json -o figures/erp.pdf

Configuration:
  - Loads --config, else plottopo.json next to the package if present
  - CLI flags override config values
        '''
    )

    parser.add_argument('data', nargs='?', default=None,
                        help='Epoch data file (.npy, .npz, .csv, .txt)')
    parser.add_argument('-c', '--config', type=str, default=None,
                        help='Path to JSON config file')
    parser.add_argument('-k', '--key', type=str, default=None,
                        help='Array name inside a .npz file')
    parser.add_argument('-l', '--chanlocs', type=str, default=None,
                        help='Channel location file (.loc, .locs, .eloc, .ced, .json)')
    parser.add_argument('--geom', type=int, nargs=2, metavar=('ROWS', 'COLS'), default=None,
                        help='Grid size (forces the rectangular layout)')
    parser.add_argument('--frames', type=int, default=None,
                        help='Frames per epoch (0 = whole data)')
    parser.add_argument('--limits', type=float, nargs=4, metavar=('XMIN', 'XMAX', 'YMIN', 'YMAX'),
                        default=None, help='Axis limits (0 pairs = data limits)')
    parser.add_argument('--ylim', type=float, nargs=2, metavar=('YMIN', 'YMAX'), default=None,
                        help='Y axis limits (overrides limits)')
    parser.add_argument('-t', '--title', type=str, default=None, help='Plot title')
    parser.add_argument('--chans', type=str, nargs='+', default=None,
                        help='Channel numbers (1-based) or labels to plot')
    parser.add_argument('--channames', type=str, default=None,
                        help='Text file with one channel name per line')
    parser.add_argument('--axsize', type=float, nargs='+', default=None,
                        help='Channel axes width [height] (figure fraction)')
    parser.add_argument('--colors', type=str, nargs='+', default=None,
                        help="Line specs per epoch, e.g. k 'r--'")
    parser.add_argument('--ydir', type=int, choices=[-1, 1], default=None,
                        help='Y polarity: 1 = positive up, -1 = negative up')
    parser.add_argument('--vert', type=float, nargs='+', default=None,
                        help='X values of vertical reference lines')
    parser.add_argument('--hori', type=float, nargs='+', default=None,
                        help='Y values of horizontal reference lines')
    parser.add_argument('--legend', type=str, nargs='+', default=None,
                        help='Legend entries, one per epoch')
    parser.add_argument('--no-legend', dest='showleg', action='store_const', const='off',
                        default=None, help='Hide the legend')
    parser.add_argument('-o', '--output', type=str, default=None,
                        help='Output file (.png, .svg, .pdf, ...)')
    parser.add_argument('--dpi', type=int, default=None, help='Output resolution')
    parser.add_argument('--show', action='store_true', help='Show the figure interactively')

    return parser.parse_args(argv)


def main(argv: list | None = None) -> int:
    args = parse_arguments(argv)

    try:
        print(f"\n🧠 plottopo")
        print(f"=" * 80)
        if args.config:
            config = load_config(args.config)
        elif get_default_config_path().exists():
            config = load_config(str(get_default_config_path()))
        else:
            config = empty_config()
        config = merge_config_with_args(config, args)
        validate_plot_config(config)

        result = run_pipeline(config)

        print("\n" + "=" * 80)
        print(f"✓ PLOTTED {len(result['axes'])} CHANNELS")
        print("=" * 80)
        return 0

    except ValueError as e:
        print(f"\n✗ ERROR: {e}")
        return 1
    except KeyboardInterrupt:
        print("\n\n✗ Interrupted")
        return 1


if __name__ == "__main__":
    sys.exit(main())
