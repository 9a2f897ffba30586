"""Command-line interface for lbcatalog."""

import sys
import json
import logging
import argparse
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table

logger = logging.getLogger(__name__)

from lbcatalog import __version__
from lbcatalog.config.loader import load_config, get_config_value, ConfigError
from lbcatalog.config.validator import validate_config, ValidationError, VALID_COMMAND_FALLBACKS
from lbcatalog.catalog.store import SearchContext
from lbcatalog.launchbox.provider import LaunchboxProvider, ProviderResult


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        prog='lbcatalog',
        description='Import a LaunchBox installation into a game catalog',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Import from ~/LaunchBox
  lbcatalog

  # Import from a specific installation
  lbcatalog --installdir /mnt/games/LaunchBox

  # Dump the resulting catalog as JSON
  lbcatalog --json > catalog.json

  # Use custom config file
  lbcatalog --config /path/to/config.yaml
        """
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    parser.add_argument(
        '--config',
        type=Path,
        metavar='PATH',
        help='Path to config.yaml (default: ./config.yaml if present)'
    )

    parser.add_argument(
        '--installdir',
        type=Path,
        metavar='DIR',
        help='LaunchBox installation directory. Overrides config.'
    )

    parser.add_argument(
        '--command-fallback',
        choices=VALID_COMMAND_FALLBACKS,
        help='Command line to use when neither game nor platform defines one. Overrides config.'
    )

    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Log level. Overrides config.'
    )

    parser.add_argument(
        '--json',
        action='store_true',
        help='Print the catalog as JSON instead of a summary table'
    )

    return parser


def _setup_logging(config: dict) -> None:
    """
    Setup logging configuration from config.

    Args:
        config: Configuration dictionary
    """
    # Get log level
    level_str = str(get_config_value(config, 'logging.level', 'INFO')).upper()
    level = getattr(logging, level_str, logging.INFO)

    handlers = []

    if get_config_value(config, 'logging.console', True):
        # Log to stderr so --json output stays clean
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        formatter = logging.Formatter('%(levelname)s: %(message)s')
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    # File handler (if configured)
    log_file = get_config_value(config, 'logging.file')
    if log_file:
        try:
            log_path = Path(log_file)
            # Create parent directory if it doesn't exist
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(level)
            formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
            file_handler.setFormatter(formatter)
            handlers.append(file_handler)
        except OSError as e:
            print(f"Error: Could not create log file '{log_file}': {e}", file=sys.stderr)
            sys.exit(1)

    # Configure root logger
    logging.basicConfig(
        level=level,
        handlers=handlers,
        force=True  # Override any existing configuration
    )


def main(argv: Optional[list] = None) -> int:
    """
    Main entry point for lbcatalog CLI.

    Args:
        argv: Command-line arguments (default: sys.argv)

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    # Load configuration and apply CLI overrides before validating
    try:
        config = load_config(args.config)

        if args.installdir is not None:
            config.setdefault('launchbox', {})['installdir'] = str(args.installdir)
        if args.command_fallback:
            config.setdefault('launchbox', {})['command_fallback'] = args.command_fallback
        if args.log_level:
            config.setdefault('logging', {})['level'] = args.log_level

        validate_config(config)
    except (ConfigError, ValidationError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    _setup_logging(config)

    try:
        return run_import(config, as_json=args.json)
    except KeyboardInterrupt:
        print("\n\nImport interrupted by user.", file=sys.stderr)
        return 130


def run_import(config: dict, as_json: bool = False, console: Optional[Console] = None) -> int:
    """
    Run the LaunchBox provider against a fresh catalog and report the result.

    Args:
        config: Validated configuration
        as_json: Print the full catalog as JSON instead of a summary
        console: Rich console for output (default: stdout)

    Returns:
        Exit code
    """
    sctx = SearchContext()
    provider = LaunchboxProvider(get_config_value(config, 'launchbox', {}))

    logger.debug(f"Running provider '{provider.name}'")
    result = provider.find_lists(sctx)

    if as_json:
        print(json.dumps(sctx.to_dict(), indent=2, ensure_ascii=False))
        return 0

    console = console or Console()
    _print_summary(console, sctx, result)
    return 0


def _print_summary(console: Console, sctx: SearchContext, result: ProviderResult) -> None:
    """Print a per-collection table of the import."""
    if result.installdir is None:
        console.print("No LaunchBox installation found.")
        return

    table = Table(title=f"LaunchBox: {result.installdir}")
    table.add_column("Collection", style="bold")
    table.add_column("Entries", justify="right")
    table.add_column("Games", justify="right")
    table.add_column("With media", justify="right")

    for row in sctx.summary():
        table.add_row(row.name, str(row.entries), str(row.games), str(row.with_assets))

    console.print(table)
    console.print(f"{len(sctx.games)} games in catalog")

    for xml_path in result.failed_documents:
        console.print(f"[yellow]Skipped unreadable document:[/yellow] {xml_path}")


if __name__ == '__main__':
    sys.exit(main())
