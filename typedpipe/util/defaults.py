"""Default values for typedpipe."""

from enum import IntEnum


class EXITCODES(IntEnum):
    """Exit codes for typedpipe."""

    SUCCESS = 0
    """Successful execution."""
    ERROR = 1
    """General unspecified error."""
    CONFIGURATION_ERROR = 2
    """An error in the configuration."""
    PIPELINE_ERROR = 3
    """At least one input failed to be processed."""


DEFAULT_PROCESS_TIMEOUT = 5.0  # seconds
DEFAULT_PIPELINE_CONCURRENCY = 1
DEFAULT_NUMERIC_BOUNDS = (-(2**63), 2**63 - 1)
DEFAULT_LOG_FORMAT = "%(asctime)-15s %(name)-10s %(levelname)-8s: %(message)s"

# dictconfig as described in
# https://docs.python.org/3/library/logging.config.html#configuration-dictionary-schema
DEFAULT_LOG_CONFIG: dict = {
    "version": 1,
    "formatters": {
        "typedpipe": {
            "class": "typedpipe.util.logging.TypedpipeFormatter",
            "format": DEFAULT_LOG_FORMAT,
        }
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "typedpipe",
            "stream": "ext://sys.stderr",
        },
    },
    "loggers": {
        "root": {"level": "INFO", "handlers": ["console"]},
        "asyncio": {"level": "WARNING"},
    },
    "filters": {},
    "disable_existing_loggers": False,
}
