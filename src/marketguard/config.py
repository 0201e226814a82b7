"""Runtime configuration for marketguard.

Settings are resolved from explicit CLI values first, then environment
variables, then defaults.
"""

import os

# Default per-artifact fetch timeout in seconds
DEFAULT_FETCH_TIMEOUT = 30.0

# Environment variable for a custom fetch timeout
FETCH_TIMEOUT_ENV_VAR = "MARKETGUARD_FETCH_TIMEOUT"

# Labels used to prefix document-level messages
BASE_LABEL = "base index.json"
PR_LABEL = "pr index.json"


def get_fetch_timeout(explicit: float | None = None) -> float:
    """Get the per-artifact fetch timeout.

    Resolution order:
    1. Explicit value (from the --timeout option)
    2. MARKETGUARD_FETCH_TIMEOUT environment variable (if set)
    3. Default: 30 seconds

    Args:
        explicit: Value passed on the command line, if any.

    Returns:
        Timeout in seconds.

    Raises:
        ValueError: If the resolved value is not a positive number.
    """
    if explicit is not None:
        return _validate_timeout(explicit, "--timeout")

    env_value = os.environ.get(FETCH_TIMEOUT_ENV_VAR)
    if env_value:
        try:
            timeout = float(env_value)
        except ValueError:
            msg = f"{FETCH_TIMEOUT_ENV_VAR} must be a number, got '{env_value}'"
            raise ValueError(msg) from None
        return _validate_timeout(timeout, FETCH_TIMEOUT_ENV_VAR)

    return DEFAULT_FETCH_TIMEOUT


def _validate_timeout(timeout: float, source: str) -> float:
    if not timeout > 0:
        msg = f"{source} must be a positive number of seconds, got {timeout}"
        raise ValueError(msg)
    return timeout
