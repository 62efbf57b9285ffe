"""Argument parsing functionality for lockdiff."""

import argparse
from constants import Constants


def parse_args(argv=None):
    """Parses the arguments passed to the program.

    Args:
        argv (list, optional): Argument tokens; defaults to sys.argv[1:].

    Returns:
        argparse.Namespace: Parsed arguments.
    """
    parser = argparse.ArgumentParser(
        prog=Constants.PROG,
        description=(
            "lockdiff - Compare resolved package versions between two Cargo lockfiles"
        ),
        add_help=True,
    )

    parser.add_argument("lockfile_a",
                        metavar="LOCKFILE_A",
                        help="First lockfile (URL or path)",
                        nargs="?",
                        type=str)
    parser.add_argument("lockfile_b",
                        metavar="LOCKFILE_B",
                        help="Second lockfile (URL or path)",
                        nargs="?",
                        type=str)

    parser.add_argument("--pkg-hash-a",
                        dest="PKG_HASH_A",
                        help="Limit first lockfile to package tree rooted at hash (git commit or crate checksum)",
                        action="store", type=str)
    parser.add_argument("--pkg-hash-b",
                        dest="PKG_HASH_B",
                        help="Limit second lockfile to package tree rooted at hash (git commit or crate checksum)",
                        action="store", type=str)
    parser.add_argument("--pkg-name-a",
                        dest="PKG_NAME_A",
                        help="Limit first lockfile to package tree rooted at package name",
                        action="store", type=str)
    parser.add_argument("--pkg-name-b",
                        dest="PKG_NAME_B",
                        help="Limit second lockfile to package tree rooted at package name",
                        action="store", type=str)
    parser.add_argument("--exclude-pkg-a",
                        dest="EXCLUDE_PKG_A",
                        help="Comma-separated list of packages to exclude from first lockfile",
                        action="store", type=str)
    parser.add_argument("--exclude-pkg-b",
                        dest="EXCLUDE_PKG_B",
                        help="Comma-separated list of packages to exclude from second lockfile",
                        action="store", type=str)

    parser.add_argument("-v", "--verbose",
                        dest="VERBOSE",
                        help="Print more details while running",
                        action="store_true")

    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)
    parser.add_argument("-o", "--output",
                        dest="OUTPUT",
                        help="Path to output file (JSON or CSV)",
                        action="store",
                        type=str)
    parser.add_argument("-f", "--format",
                        dest="OUTPUT_FORMAT",
                        help="Output format (json or csv). If not specified, inferred from --output extension; defaults to json.",
                        action="store",
                        type=str.lower,
                        choices=Constants.OUTPUT_FORMATS)
    parser.add_argument("--timeout",
                        dest="TIMEOUT",
                        help=f"HTTP timeout in seconds for remote lockfiles (default: {Constants.REQUEST_TIMEOUT})",
                        action="store",
                        type=float)

    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=Constants.LOG_LEVELS)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)

    return parser.parse_args(argv)
