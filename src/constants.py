"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONNECTION_ERROR = 2
    VERSIONS_DIFFER = 3
    INCONSISTENT = 4


class OutputFormats(Enum):
    """Report export formats supported by the program.

    Args:
        Enum (string): Report export formats.
    """

    JSON = "json"
    CSV = "csv"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    PROG = "lockdiff"
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
    LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    ENV_LOG_LEVEL = "LOCKDIFF_LOG_LEVEL"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    USER_AGENT = "lockdiff/0.1"
    SUPPORTED_SCHEMES = ["file", "http", "https"]
    OUTPUT_FORMATS = [OutputFormats.JSON.value, OutputFormats.CSV.value]
    PATH_SEPARATOR = " -> "
    CONFIG_SIDES = ("a", "b")
