"""lockdiff - Compare resolved package versions between two Cargo lockfiles.

    Returns:
        int: Exit code
"""
import logging
import sys

from args import parse_args
from cli_config import build_specs, load_config, resolve_timeout
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from constants import ExitCodes
from errors import (
    LockdiffError,
    RootNotFoundError,
    SourceConnectionError,
    VersionConflictError,
)
from lockfile.loader import load_lockfile
from report import compare, export, render
from universe.reconciler import Side, reconcile

logger = logging.getLogger(__name__)


def _echo(line):
    print(line)


def _print_found(universe, package):
    _echo(f"found {universe.source} {package.name} {package.version}")


def exit_code_for(error):
    """Maps a fatal error to the process exit code.

    Args:
        error (LockdiffError): The error that aborted the run.

    Returns:
        ExitCodes: Matching exit code.
    """
    if isinstance(error, SourceConnectionError):
        return ExitCodes.CONNECTION_ERROR
    if isinstance(error, (RootNotFoundError, VersionConflictError)):
        return ExitCodes.INCONSISTENT
    return ExitCodes.FILE_ERROR


def compare_lockfiles(spec_a, spec_b, verbose=False, timeout=None, output=None, output_format=None):
    """Loads both lockfiles, reconciles their universes and prints the report.

    Args:
        spec_a (Spec): First side.
        spec_b (Spec): Second side.
        verbose (bool): Print every discovered package and per-pass detail.
        timeout (float, optional): HTTP timeout for remote lockfiles.
        output (str, optional): Path to export the report to.
        output_format (str, optional): Export format (json or csv).

    Raises:
        LockdiffError: On any fatal loading or consistency error.

    Returns:
        bool: True if every common package has the same version.
    """
    on_insert = _print_found if verbose else None
    side_a = Side("A", spec_a, load_lockfile(spec_a.src, timeout=timeout), on_insert=on_insert)
    side_b = Side("B", spec_b, load_lockfile(spec_b.src, timeout=timeout), on_insert=on_insert)

    result = reconcile(side_a, side_b, echo=_echo)
    report = compare(result.universe_a, result.universe_b, result.names)

    if output:
        export(report, output, output_format)

    for line in render(report):
        _echo(line)
    return report.all_same


def run(argv=None):
    """Runs the comparison and returns the exit code value."""
    args = parse_args(argv)
    configure_logging(args.LOG_LEVEL, args.LOG_FILE)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action="run")
        )

    try:
        config = load_config(args.CONFIG)
        spec_a, spec_b, verbose = build_specs(args, config)
        timeout = resolve_timeout(args, config)
        all_same = compare_lockfiles(
            spec_a,
            spec_b,
            verbose=verbose,
            timeout=timeout,
            output=args.OUTPUT,
            output_format=args.OUTPUT_FORMAT,
        )
    except LockdiffError as e:
        logger.error("%s", e)
        return exit_code_for(e).value

    if not all_same:
        logger.error("Some packages have different versions")
        return ExitCodes.VERSIONS_DIFFER.value
    return ExitCodes.SUCCESS.value


def main():
    """Main function of the program."""
    sys.exit(run())


if __name__ == "__main__":
    main()
