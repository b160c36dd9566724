"""This module contains exceptions for processing values."""

from typing import Any, Optional, Tuple

from typedpipe.abc.exceptions import TypedpipeException


class ProcessingError(TypedpipeException):
    """Base class for exceptions related to processing values.

    Processing errors are never raised out of a pipeline. They are caught by the
    processor and stored in :code:`ProcessResult.error`.
    """

    def __init__(self, message: str):
        super().__init__(f"{self.__class__.__name__}: {message}")


class ProcessingTimeoutError(ProcessingError):
    """The transformation did not complete within the configured timeout."""

    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(f"transformation did not complete within {timeout} seconds")


class NumericOverflowError(ProcessingError):
    """The numeric result is out of the configured bounds or not finite."""

    def __init__(self, value: Any, bounds: Tuple[int, int], reason: Optional[str] = None):
        self.value = value
        self.bounds = bounds
        super().__init__(reason or f"result {value!r} is out of bounds [{bounds[0]}, {bounds[1]}]")
