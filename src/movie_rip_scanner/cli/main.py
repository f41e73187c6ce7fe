"""CLI entry point for the movie rip scanner."""

import argparse
import logging
import sys
from pathlib import Path

from .. import __version__
from ..core import (
    ApplicationConfig,
    ConfigurationError,
    DuplicatePolicy,
    InvalidDirectoryError,
    MovieRipScanner,
    ScanResult,
)


def setup_logging(level: str = "INFO") -> None:
    """
    Set up logging configuration.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def build_config(args: argparse.Namespace) -> ApplicationConfig:
    """
    Build the application configuration from a config file and command-line overrides.

    Raises:
        ConfigurationError: If the file or the overrides are invalid
    """
    config = ApplicationConfig.from_json_file(args.config) if args.config else ApplicationConfig()

    overrides: dict = {}
    if args.log_level:
        overrides["log_level"] = args.log_level
    if args.genres:
        overrides["genres"] = args.genres
    if args.extensions:
        overrides["included_extensions"] = args.extensions
    if args.merge_duplicates:
        overrides["duplicate_policy"] = DuplicatePolicy.MERGE

    try:
        return ApplicationConfig.model_validate({**config.model_dump(), **overrides})
    except ValueError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def scan_directory_cli(directory: Path, config: ApplicationConfig) -> ScanResult:
    """
    Scan a directory for movie rips from the command line.

    Args:
        directory: Directory to scan
        config: Genres, extensions and duplicate policy to scan with

    Returns:
        ScanResult object with scan results
    """
    logger = logging.getLogger(__name__)
    scanner = MovieRipScanner(config)

    def progress_callback(current: int, total: int | None = None, message: str = "") -> None:
        print(f"\r{message or f'Processed: {current} entries'}", end="", flush=True, file=sys.stderr)

    logger.info(f"Starting scan of directory: {directory}")
    scan_result = scanner.scan_directory(directory, progress_callback=progress_callback)
    print(file=sys.stderr)  # New line after progress

    return scan_result


def print_scan_results(scan_result: ScanResult, detailed: bool = False) -> None:
    """
    Print scan results to console.

    Args:
        scan_result: Results from the scan operation
        detailed: Whether to show file size, parent folder and duplicates
    """
    print("\n" + "=" * 60)
    print("SCAN RESULTS")
    print("=" * 60)

    print(f"Directory scanned: {scan_result.scan_path}")
    print(f"Movie rips found: {scan_result.rip_count}")
    print(f"Duplicates skipped: {scan_result.duplicate_count}")
    print(f"Total size: {scan_result.total_size_mb:.1f} MB")

    if not scan_result.rips:
        print("\nNo movie rips found.")
        return

    if scan_result.genre_counts:
        print("\nGenres:")
        for genre, count in scan_result.genre_counts.items():
            print(f"  {genre}: {count}")

    print("\n" + "-" * 60)
    print("MOVIE RIPS")
    print("-" * 60)

    for rip in scan_result.rips:
        genres = ", ".join(sorted(rip.genres)) or "-"
        year = rip.release_year or "????"
        print(f"{rip.title} ({year}) [{rip.file_extension or 'no extension'}] {genres}")
        if detailed:
            print(f"    Size: {rip.file_size_mb:.1f} MB")
            if rip.parent_folder:
                print(f"    Folder: {rip.parent_folder}")

    if detailed and scan_result.duplicates:
        print("\n" + "-" * 60)
        print("DUPLICATES")
        print("-" * 60)
        for rip in scan_result.duplicates:
            print(f"{rip} ({rip.file_size_mb:.1f} MB)")


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="movie-rip-scanner",
        description="Movie Rip Scanner - Index movie rips organized in genre folders",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Scan a movie directory
  movie-rip-scanner --scan /path/to/movies

  # Scan with custom genres and extensions
  movie-rip-scanner --scan /path/to/movies --genres Drama Comedy --extensions .mkv .avi

  # Use a JSON configuration file and print JSON
  movie-rip-scanner --scan /path/to/movies --config movies.json --output-format json

  # Enable debug logging
  movie-rip-scanner --scan /path/to/movies --log-level DEBUG
        """,
    )

    # Main action
    parser.add_argument(
        "--scan",
        type=Path,
        metavar="DIRECTORY",
        help="Directory to scan for movie rips",
    )

    # Scan options
    parser.add_argument("--config", type=Path, metavar="FILE", help="JSON configuration file")
    parser.add_argument(
        "--genres", nargs="+", metavar="NAME", help="Directory names recognized as genres"
    )
    parser.add_argument(
        "--extensions", nargs="+", metavar="EXT", help="File extensions recognized as rips"
    )
    parser.add_argument(
        "--merge-duplicates",
        action="store_true",
        help="Add the genres of duplicate rips to the rip found first instead of dropping them",
    )

    parser.add_argument(
        "--detailed", action="store_true", help="Show file sizes, folders and duplicates"
    )

    # Output options
    parser.add_argument(
        "--output-format",
        choices=["text", "json"],
        default="text",
        help="Output format for results (default: text)",
    )

    # Logging options
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set logging level (default: from the config file, else INFO)",
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the CLI application.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    logger = logging.getLogger(__name__)

    if not args.scan:
        parser.print_help()
        return 1

    try:
        config = build_config(args)
        setup_logging(config.log_level)
        scan_result = scan_directory_cli(args.scan, config)

        if args.output_format == "json":
            print(scan_result.model_dump_json(indent=2))
        else:
            print_scan_results(scan_result, detailed=args.detailed)

        return 0

    except KeyboardInterrupt:
        print("\n\nOperation cancelled by user.")
        return 1
    except InvalidDirectoryError as e:
        print(f"Error: {e}")
        return 1
    except ConfigurationError as e:
        print(f"Error: {e}")
        return 1
    except Exception as e:
        logger.exception("Unexpected error occurred")
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
