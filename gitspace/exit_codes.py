"""
Standard exit codes and error types for gitspace commands.

Following Unix/POSIX conventions for command-line tools.
"""

# Standard POSIX exit codes
SUCCESS = 0              # Successful termination
GENERAL_ERROR = 1        # General errors
USAGE_ERROR = 2          # Misuse of shell command (wrong arguments, etc.)

# Application-specific exit codes (64-113 are typically available)
CONFIG_ERROR = 66        # Configuration file missing or malformed
PERMISSION_ERROR = 67    # Filesystem operation refused
NETWORK_ERROR = 68       # Network connection failed
AUTH_ERROR = 69          # Authentication/authorization failed
PARTIAL_SUCCESS = 71     # Some repositories synced, some failed
NOT_INITIALIZED = 72     # Space or repository store missing
INTERRUPTED = 130        # Terminated by Ctrl+C (SIGINT)

# Exit code mappings for common exceptions
EXCEPTION_EXIT_CODES = {
    'FileNotFoundError': GENERAL_ERROR,
    'PermissionError': PERMISSION_ERROR,
    'ConnectionError': NETWORK_ERROR,
    'TimeoutError': NETWORK_ERROR,
    'JSONDecodeError': CONFIG_ERROR,
    'KeyboardInterrupt': INTERRUPTED,
}


def get_exit_code_for_exception(exc: BaseException) -> int:
    """
    Get the appropriate exit code for an exception.

    Errors derived from CommandError carry their own code; anything else
    is looked up by class name.

    Args:
        exc: The exception that occurred

    Returns:
        Appropriate exit code
    """
    if isinstance(exc, CommandError):
        return exc.exit_code
    exc_name = exc.__class__.__name__
    return EXCEPTION_EXIT_CODES.get(exc_name, GENERAL_ERROR)


class CommandError(Exception):
    """
    Exception that commands can raise to indicate specific exit codes.
    """
    def __init__(self, message: str, exit_code: int = GENERAL_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


class GitspaceError(CommandError):
    """Base class for errors raised by the synchronization engine."""
    exit_code_default = GENERAL_ERROR

    def __init__(self, message: str):
        super().__init__(message, self.exit_code_default)


class ConfigError(GitspaceError):
    """Configuration document missing, unreadable or invalid. Fatal."""
    exit_code_default = CONFIG_ERROR


class PathError(GitspaceError):
    """An expected directory is absent (e.g. space not initialized). Fatal."""
    exit_code_default = NOT_INITIALIZED


class AuthError(GitspaceError):
    """The remote rejected the credential, or no usable key was found."""
    exit_code_default = AUTH_ERROR


class NetworkError(GitspaceError):
    """Transport failure: unreachable host, DNS failure, timeout."""
    exit_code_default = NETWORK_ERROR


class FilesystemError(GitspaceError):
    """Permission denied or unexpected content in the way of an operation."""
    exit_code_default = PERMISSION_ERROR


class PartialSuccessError(CommandError):
    """Raised when some operations succeed and some fail."""
    def __init__(self, message: str, succeeded: int = 0, failed: int = 0):
        super().__init__(message, PARTIAL_SUCCESS)
        self.succeeded = succeeded
        self.failed = failed


class PartialRemovalError(FilesystemError):
    """Raised when some managed entries were removed and others could not be."""
    def __init__(self, message: str, removed: int = 0, failed: int = 0):
        super().__init__(message)
        self.removed = removed
        self.failed = failed
