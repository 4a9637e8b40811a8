import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from rpmgraph.config import Settings, load_settings
from rpmgraph.constants import (
    EXIT_INVALID_ARGUMENTS,
    EXIT_NO_PACKAGES_FOUND,
    EXIT_PACKAGE_ERROR,
    EXIT_SUCCESS,
)
from rpmgraph.discovery import check_prerequisites, find_source_rpms
from rpmgraph.errors import RpmGraphError
from rpmgraph.graph import ReverseDependencyGraph, build_reverse_dependencies
from rpmgraph.models import BuildResult
from rpmgraph.query import RpmRequiresQuery


def worker_count_type(value: str) -> int:
    """
    Convert a string to an integer, failing if the value is not a positive integer.
    """
    try:
        result = int(value)
    except ValueError:
        result = -1

    if result <= 0:
        raise argparse.ArgumentTypeError(f"worker count must be positive whole number, got: {value}")

    return result


def parse_command_line_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Returns:
        argparse.Namespace: Parsed command line arguments
    """
    parser = argparse.ArgumentParser(
        prog="rpmgraph",
        description="A tool to create a graph of rpm dependencies.",
    )
    parser.add_argument(
        "-d", "--directory",
        type=Path,
        required=True,
        help="Directory to look for source rpms in"
    )
    parser.add_argument(
        "--workers",
        type=worker_count_type,
        help="Number of worker threads (defaults to the number of CPUs)"
    )
    parser.add_argument(
        "--rpm-command",
        dest="rpm_command",
        help="rpm executable used to query package requirements"
    )
    parser.add_argument(
        "--config",
        dest="config_file",
        type=Path,
        help="JSON file with settings"
    )
    parser.add_argument(
        "--fail-fast",
        action="store_true",
        default=None,
        help="Abort on the first package that cannot be loaded instead of skipping it"
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with an error code if any package was skipped"
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print detailed statistics about the graph and skipped files"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Redirect all log output to this file instead of stderr"
    )
    return parser.parse_args(argv)


def set_up_logging(verbose: bool, log_file: Path | None) -> None:
    """
    Set up logging configuration.

    Args:
        verbose: Whether to enable debug logging
        log_file: Optional file path to redirect logs to
    """
    level = logging.DEBUG if verbose else logging.INFO

    if log_file:
        logger = logging.getLogger()
        logger.setLevel(level)

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(file_handler)

        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setLevel(logging.ERROR)
        stderr_handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(stderr_handler)
    else:
        logging.basicConfig(format="%(message)s", level=level)


def display_summary(result: BuildResult, node_count: int) -> None:
    print(f"Packages recorded: {len(result.packages)}")
    print(f"Dependencies: {len(result.dependents)}")
    print(f"Dependency edges: {result.pair_count}")
    print(f"Unique nodes: {node_count}")
    print(f"Skipped files: {result.skipped_count}")


def display_statistics(graph: ReverseDependencyGraph, result: BuildResult) -> None:
    """
    Display detailed statistics about the build.

    Args:
        graph: The graph the packages were recorded into
        result: The build result holding the skipped files
    """
    stats = graph.get_stats()
    print("\n📊 FINAL STATISTICS:", file=sys.stderr)
    print(f"   Dependencies: {stats['dependency_count']}", file=sys.stderr)
    print(f"   Dependency edges: {stats['pair_count']}", file=sys.stderr)
    print(f"   Unique nodes: {stats['node_count']}", file=sys.stderr)

    if stats["most_required"]:
        print("   Most required:", file=sys.stderr)
        for dependency, count in stats["most_required"]:
            print(f"     {dependency}: {count} packages", file=sys.stderr)

    if result.skipped:
        print("   Skipped files:", file=sys.stderr)
        for skipped in result.skipped:
            print(f"     {skipped.path}: {skipped.reason}", file=sys.stderr)


def run(settings: Settings, directory: Path, stats: bool = False, strict: bool = False) -> int:
    """
    Find the source rpms under a directory and build their reverse-dependency map.

    Returns:
        Exit code
    """
    check_prerequisites(settings.rpm_command)
    logging.info(f"🔍 Searching for rpms in \"{directory}\"...")

    files = find_source_rpms(directory, settings.suffix, settings.follow_links)
    if not files:
        logging.error("No files ending with %s found in %s", settings.suffix, directory)
        return EXIT_NO_PACKAGES_FOUND

    logging.info(f"🔄 Getting info from {len(files)} rpms...")

    graph = ReverseDependencyGraph()
    result = build_reverse_dependencies(
        files,
        RpmRequiresQuery(settings.rpm_command),
        workers=settings.workers,
        fail_fast=settings.fail_fast,
        graph=graph,
    )

    display_summary(result, len(graph.nodes()))
    if stats:
        display_statistics(graph, result)

    if strict and result.skipped:
        logging.error("%d files were skipped", result.skipped_count)
        return EXIT_PACKAGE_ERROR
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code
    """
    arguments = parse_command_line_arguments(argv)

    set_up_logging(arguments.verbose, arguments.log_file)

    if not arguments.directory.is_dir():
        logging.error("Not a directory: %s", arguments.directory)
        return EXIT_INVALID_ARGUMENTS

    try:
        settings = load_settings(
            arguments.config_file,
            rpm_command=arguments.rpm_command,
            workers=arguments.workers,
            fail_fast=arguments.fail_fast,
        )
    except (FileNotFoundError, ValidationError, ValueError) as error:
        logging.error("Invalid configuration: %s", error)
        return EXIT_INVALID_ARGUMENTS

    try:
        return run(settings, arguments.directory, stats=arguments.stats, strict=arguments.strict)
    except RpmGraphError as error:
        logging.error("%s", error)
        return error.exit_code
    except KeyboardInterrupt:
        return EXIT_SUCCESS
