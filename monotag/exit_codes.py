"""
Standard exit codes for monotag.

Following Unix/POSIX conventions for command-line tools.
"""
from typing import Optional

GENERAL_ERROR = 1        # General errors

# Application-specific exit codes (64-113 are typically available)
CONFIG_ERROR = 66        # Configuration file error
DATA_ERROR = 70          # Unexpected data (e.g. a value the run cannot use)
RESOLUTION_ERROR = 72    # Version resolution failed for a project
TAG_EXISTS = 73          # Requested tag already exists (fail-on-existing)
INTERRUPTED = 130        # Terminated by Ctrl+C (SIGINT)

# Exit codes for exceptions that carry no exit_code of their own
EXCEPTION_EXIT_CODES = {
    'ValueError': DATA_ERROR,
    'TypeError': DATA_ERROR,
    'KeyboardInterrupt': INTERRUPTED,
}


def get_exit_code_for_exception(exc: BaseException) -> int:
    """
    Get the exit code for an exception that ends a command.

    CommandError subclasses carry their own code; everything else is
    looked up by class name and defaults to GENERAL_ERROR.
    """
    exit_code = getattr(exc, 'exit_code', None)
    if isinstance(exit_code, int):
        return exit_code
    return EXCEPTION_EXIT_CODES.get(type(exc).__name__, GENERAL_ERROR)


class CommandError(Exception):
    """
    Exception that commands can raise to indicate specific exit codes.
    """
    def __init__(self, message: str, exit_code: int = GENERAL_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


class ConfigError(CommandError):
    """Raised when there's a configuration error."""
    def __init__(self, message: str):
        super().__init__(message, CONFIG_ERROR)


class ResolutionError(CommandError):
    """Raised when the version tool fails or returns unusable output.

    Always fatal: there is no partial-success mode for version resolution.
    """
    def __init__(self, message: str, project_file: Optional[str] = None):
        super().__init__(message, RESOLUTION_ERROR)
        self.project_file = project_file


class TagExistsError(CommandError):
    """Raised when a requested tag exists and fail-on-existing is set."""
    def __init__(self, tag_name: str):
        super().__init__(f"Tag {tag_name} already exists", TAG_EXISTS)
        self.tag_name = tag_name


class TagCreationError(CommandError):
    """Raised by the git client when writing a tag fails.

    The tag service folds this into a skipped outcome; it never aborts a run.
    """
    def __init__(self, message: str, tag_name: Optional[str] = None):
        super().__init__(message, GENERAL_ERROR)
        self.tag_name = tag_name
