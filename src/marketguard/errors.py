"""Error types and CLI error handling for marketguard.

Problems found in the index documents are collected, never raised. The
exceptions here cover the fatal cases where no validation can run at all.
"""

from marketguard import cli_logger, exit_codes


class IndexDocumentError(Exception):
    """Raised when an index document cannot be decoded as JSON."""

    def __init__(self, path: str, reason: str) -> None:
        """Initialize with the offending path and the decoder's reason."""
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid JSON in {path}: {reason}")


class ArtifactFetchError(Exception):
    """Raised when a dist artifact cannot be downloaded."""


def handle_cli_error(error: Exception) -> int:
    """Handle a fatal exception at the CLI boundary.

    Prints a clean one-line message instead of a traceback and returns
    the exit code to use.

    Args:
        error: The exception to handle.

    Returns:
        An exit code from exit_codes.
    """
    if isinstance(error, IndexDocumentError):
        cli_logger.error(str(error))
        return exit_codes.INPUT_ERROR

    if isinstance(error, OSError):
        if error.filename:
            cli_logger.error(f"{error.strerror}: {error.filename}")
        else:
            cli_logger.error(str(error))
        return exit_codes.INPUT_ERROR

    if isinstance(error, ValueError):
        cli_logger.error(f"Invalid configuration: {error}")
        return exit_codes.INPUT_ERROR

    cli_logger.error(f"Unexpected error: {error}")
    return exit_codes.INPUT_ERROR
