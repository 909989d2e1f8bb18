#!/usr/bin/env python3
"""
Mathertale - Course Content Builder

Command line entry point. Compiles journey canvases and the quests they
reference into JSON files for the learning app.
"""

import argparse
import logging
import sys
from pathlib import Path

from mathertale.builder import build_all, build_journey_data, write_build
from mathertale.config import get_config, load_config
from mathertale.exceptions import ConversionError


def setup_logging(level_name=None):
    """Configure logging for the application."""
    config = get_config()
    level_name = level_name or config.get("logging.level", "INFO")
    level = getattr(logging, level_name.upper(), logging.INFO)
    format_str = config.get("logging.format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    log_file = config.log_filename

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(log_file)
        ]
    )


def run_journey(journey_file: str, output_dir=None, vault_root=None) -> int:
    """Build a single journey and write its JSON output."""
    journey_path = Path(journey_file)
    if not journey_path.is_file():
        logging.error(f"Journey file not found: {journey_path}")
        return 1

    build = build_journey_data(journey_path, vault_root=vault_root)
    written = write_build(build, output_dir)

    print(f"Built journey '{build.journey.name}' with {len(build.quests)} quests")
    print(f"Wrote {len(written)} files")
    return 0


def run_scan(root: str, output_dir=None) -> int:
    """Build every journey under a directory; failing journeys are skipped."""
    root_path = Path(root)
    if not root_path.is_dir():
        logging.error(f"Directory not found: {root_path}")
        return 1

    builds = build_all(root_path)
    total_files = 0
    for build in builds:
        total_files += len(write_build(build, output_dir))

    print(f"Built {len(builds)} journeys, wrote {total_files} files")
    return 0


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Mathertale - compile canvas and markdown course sources to JSON",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py journey "vault/Proofcraft 101.journey.canvas" --vault-root vault
  python main.py scan vault -o build
  python main.py --config other.yaml --log-level DEBUG scan vault
        """
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to a configuration file (default: config.yaml)"
    )

    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override the configured log level"
    )

    parser.add_argument(
        "--version",
        action="version",
        version="Mathertale 0.1.0"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    journey_parser = subparsers.add_parser("journey", help="Build one journey canvas")
    journey_parser.add_argument("journey_file", help="Path to a .journey.canvas file")
    journey_parser.add_argument("-o", "--output", help="Output directory (default from config)")
    journey_parser.add_argument(
        "--vault-root",
        help="Directory the canvas file references are relative to (default from config)"
    )

    scan_parser = subparsers.add_parser("scan", help="Build every journey under a directory")
    scan_parser.add_argument("root", help="Directory to search recursively")
    scan_parser.add_argument("-o", "--output", help="Output directory (default from config)")

    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point."""
    args = parse_arguments(argv)
    if args.config:
        load_config(args.config)
    setup_logging(args.log_level)

    logging.info("Mathertale - Course Content Builder")

    try:
        if args.command == "journey":
            return run_journey(args.journey_file, args.output, args.vault_root)
        return run_scan(args.root, args.output)

    except KeyboardInterrupt:
        logging.info("Build interrupted by user")
        print("\nBuild interrupted.")
        return 130

    except (ConversionError, OSError, ValueError) as e:
        logging.error(f"Build failed: {e}")
        print(f"\nBuild failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
