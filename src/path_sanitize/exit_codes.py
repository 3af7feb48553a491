"""Exit code constants for CLI."""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for the path-sanitize CLI.

    - 0 when every path was sanitized (and joined, with --base)
    - Non-zero for configuration, input and safety failures
    """

    SUCCESS = 0
    INVALID_CONFIGURATION = 1
    INPUT_ERROR = 2
    UNSAFE_INPUT = 3
    JOIN_FAILURE = 4
    USER_CANCELLED = 5
