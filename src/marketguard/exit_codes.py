"""Exit codes for marketguard CLI commands."""

# Success
SUCCESS = 0

# Errors
VALIDATION_FAILED = 1
INVALID_ARGS = 2
INPUT_ERROR = 3
