"""
Standard exit codes for dotsync commands.

Following Unix/POSIX conventions for command-line tools.
"""
from typing import Optional

# Standard POSIX exit codes
SUCCESS = 0              # Successful termination
GENERAL_ERROR = 1        # General errors
USAGE_ERROR = 2          # Misuse of shell command (wrong arguments, etc.)

# Application-specific exit codes (64-113 are typically available)
SYNC_DISABLED = 64       # Sync disabled by environment or circuit breaker
GIT_ERROR = 65           # A git command failed
CONFIG_ERROR = 66        # Configuration file error
STATE_ERROR = 67         # State file could not be written
PARTIAL_FAILURE = 71     # At least one domain failed during a pass
INTERRUPTED = 130        # Terminated by Ctrl+C (SIGINT)

# Exit code mappings for common exceptions
EXCEPTION_EXIT_CODES = {
    'PermissionError': STATE_ERROR,
    'ConfigError': CONFIG_ERROR,
    'GitCommandError': GIT_ERROR,
    'KeyboardInterrupt': INTERRUPTED,
}


def get_exit_code_for_exception(exc: BaseException) -> int:
    """
    Get the appropriate exit code for an exception.

    Args:
        exc: The exception that occurred

    Returns:
        Appropriate exit code
    """
    exc_name = exc.__class__.__name__
    return EXCEPTION_EXIT_CODES.get(exc_name, GENERAL_ERROR)


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


class GitCommandError(CommandError):
    """Raised when a git command that must succeed exits non-zero."""
    def __init__(self, message: str, command: Optional[str] = None, returncode: int = -1):
        super().__init__(message, GIT_ERROR)
        self.command = command
        self.returncode = returncode
