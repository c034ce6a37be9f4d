import logging
import os
import sys

DEFAULT_LOG_LEVEL = logging.WARNING
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOGGER_NAME = "inventorize"

TRACE = 5
logging.addLevelName(TRACE, "TRACE")


def verbosity_to_level(verbosity: int) -> int:
    """Map the number of `--verbose` flags to a logging level."""
    if verbosity <= 0:
        return logging.INFO
    if verbosity == 1:
        return logging.DEBUG
    return TRACE


def _level_from_name(name: str, source: str) -> int:
    level = logging.getLevelName(name.upper())
    if isinstance(level, int):
        return level
    print(  # noqa: T201
        f"Warning: Invalid {source} '{name}'. Defaulting to {logging.getLevelName(DEFAULT_LOG_LEVEL)}.",
        file=sys.stderr,
    )
    return DEFAULT_LOG_LEVEL


def setup_logging(level: int | str | None = None) -> None:
    """
    Set up logging for the inventorize package.

    Args:
        level: The logging level to set. Can be an integer (e.g., logging.INFO),
               a string (e.g., "INFO"), or None. If None, it tries to get
               the level from the INVENTORIZE_LOG_LEVEL environment variable,
               defaulting to DEFAULT_LOG_LEVEL.

    """
    if level is None:
        env_level = os.environ.get("INVENTORIZE_LOG_LEVEL", "")
        log_level = _level_from_name(env_level, "INVENTORIZE_LOG_LEVEL") if env_level else DEFAULT_LOG_LEVEL
    elif isinstance(level, str):
        log_level = _level_from_name(level, "log level string")
    else:
        log_level = level

    app_logger = logging.getLogger(LOGGER_NAME)
    app_logger.setLevel(log_level)

    # Handlers are rebuilt on every call so that they write to the current
    # sys.stderr, which CliRunner swaps out in tests.
    for handler_to_remove in list(app_logger.handlers):
        app_logger.removeHandler(handler_to_remove)
        handler_to_remove.close()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    app_logger.addHandler(handler)
