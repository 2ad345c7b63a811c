# cli.py
# command-line entry point: arguments, logging setup, exit codes

from __future__ import annotations
import argparse
import logging
import os
import sys
from typing import List, Optional

import yaml

from .config import Settings, load_config, update_config
from .errors import ConfigError, DecodeError, InvalidShapeError
from .io_save_load import save_json
from .pipeline import count_glob, count_image
from .report import format_report, report_dict

logger = logging.getLogger(__name__)

EXIT_OK, EXIT_CONFIG, EXIT_DECODE, EXIT_INVALID_SHAPE = 0, 1, 2, 3


def _threshold(value: str):
    if value.lower() == 'otsu':
        return 'otsu'
    try:
        return int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"threshold must be an integer 0..255 or 'otsu', got {value!r}")


def parse_arguments(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        prog='glyphholes',
        description='Count shapes in a black-on-white image by number of enclosed holes',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  glyphholes scan.png
  glyphholes scan.png --threshold 250 --connectivity 8
  glyphholes --glob 'scans/*.png' --json out/holes.json --config configs/hanzi.yaml
        """
    )
    parser.add_argument('image', nargs='?', default=None,
                        help='Image file to classify (prompted for when omitted)')
    parser.add_argument('--glob', '-g', default=None,
                        help='Process every file matching this pattern instead of one image')
    parser.add_argument('--config', '-c', default=None,
                        help='Configuration YAML file')
    parser.add_argument('--threshold', '-t', type=_threshold, default=None,
                        help="Luminance threshold 0..255 (<= is foreground), or 'otsu'")
    parser.add_argument('--connectivity', type=int, choices=(4, 8), default=None,
                        help='Neighbourhood used for both shapes and holes')
    parser.add_argument('--shape-connectivity', type=int, choices=(4, 8), default=None)
    parser.add_argument('--hole-connectivity', type=int, choices=(4, 8), default=None)
    parser.add_argument('--max-holes', type=int, default=None,
                        help='Largest supported hole count per shape')
    parser.add_argument('--json', '-j', default=None,
                        help='Write results as JSON to this path')
    parser.add_argument('--cross-check', action='store_true',
                        help='Verify hole counts against the scikit-image reference')
    parser.add_argument('--log-file', default=None, help='Also log to this file')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable verbose logging')
    parser.add_argument('--quiet', '-q', action='store_true', help='Suppress non-error output')
    args = parser.parse_args(argv)
    if args.image and args.glob:
        parser.error("give either an image or --glob, not both")
    return args


def setup_logging(verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None):
    """Root logging: DEBUG with verbose, ERROR with quiet, plus an optional log file."""
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    if log_file:
        os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        ))
        logging.getLogger().addHandler(file_handler)
        logger.info(f"Logging to file: {log_file}")


def build_settings(args) -> Settings:
    settings = load_config(args.config) if args.config else Settings()
    shape_c = args.shape_connectivity or args.connectivity
    hole_c = args.hole_connectivity or args.connectivity
    settings = update_config(settings, {
        'threshold': args.threshold if isinstance(args.threshold, int) else None,
        'shape_connectivity': shape_c,
        'hole_connectivity': hole_c,
        'max_holes': args.max_holes,
    })
    if args.threshold == 'otsu':
        logger.info("Override threshold = otsu")
        settings.threshold = None
    return settings


def prompt_for_image() -> str:
    """Ask for the image path on stdin."""
    print("Key in the name of the image file:")
    return sys.stdin.readline().strip()


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_arguments(argv)
    setup_logging(args.verbose, args.quiet, args.log_file)

    try:
        settings = build_settings(args)
    except (ConfigError, FileNotFoundError, yaml.YAMLError) as e:
        logger.error(f"Invalid configuration: {e}")
        return EXIT_CONFIG

    if args.glob:
        rows = count_glob(args.glob, settings, out_json=args.json, check=args.cross_check)
        for row in rows:
            if "error" in row:
                print(f"{row['file']}: {row['error']}: {row['message']}")
            else:
                print(f"{row['file']}: " + ", ".join(f"{k}: {v}" for k, v in row['labels'].items()))
        return EXIT_OK

    path = args.image or prompt_for_image()
    try:
        scan = count_image(path, settings, check=args.cross_check)
    except DecodeError as e:
        logger.error(str(e))
        return EXIT_DECODE
    except InvalidShapeError as e:
        logger.error(str(e))
        return EXIT_INVALID_SHAPE

    print(format_report(scan.tallies, settings.labels))
    if args.json:
        save_json(args.json, {"file": path, "threshold": scan.threshold,
                              **report_dict(scan.tallies, settings.labels), **scan.meta})
    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
