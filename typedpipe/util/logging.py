"""helper classes for typedpipe logging"""

import logging
from datetime import datetime
from socket import gethostname

from typedpipe.util.time import UTC


class TypedpipeFormatter(logging.Formatter):
    """
    Formatter for typedpipe log records.

    Log times are rendered in UTC, like the timestamps of processed values, so that log lines
    and results can be matched. Without a :code:`datefmt` the time is rendered in ISO 8601
    format with milliseconds, e.g. :code:`2024-01-01T12:00:00.123+00:00`.

    In addition to the
    `attributes of log records <https://docs.python.org/3/library/logging.html#logrecord-attributes>`_
    the format string can use :code:`%(hostname)s`, the name of the machine that emitted the
    record.
    """

    def format(self, record):
        record.hostname = gethostname()
        return super().format(record)

    def formatTime(self, record, datefmt=None):
        created = datetime.fromtimestamp(record.created, UTC)
        if datefmt:
            return created.strftime(datefmt)
        return created.isoformat(timespec="milliseconds")
