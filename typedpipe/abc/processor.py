"""Abstract module for processors"""

import asyncio
import logging
from abc import abstractmethod
from typing import Generic, Optional, TypeVar

from attr import define, field, validators

from typedpipe.abc.component import Component
from typedpipe.data import Data
from typedpipe.metrics.metrics import CounterMetric, HistogramMetric, Metric
from typedpipe.processor.base.exceptions import ProcessingError, ProcessingTimeoutError
from typedpipe.util.defaults import DEFAULT_PROCESS_TIMEOUT

logger = logging.getLogger("Processor")

T = TypeVar("T")


@define(kw_only=True, frozen=True)
class ProcessResult(Generic[T]):
    """
    Result object to be returned by every processor. It contains the value the processor
    received, the value it produced and the error if the processing failed.

    Parameters
    ----------

    original : Data
        The input the processing step received
    processed : Data
        The produced value, or the original if the processing failed
    success : bool
        Whether the processing step succeeded
    error : Optional[ProcessingError]
        The error that occurred during processing
    processor_name : str
        The name of the processor
    """

    original: Data = field(validator=validators.instance_of(Data))
    """ The input the processing step received """
    processed: Data = field(validator=validators.instance_of(Data))
    """ The produced value, or the original on failure """
    success: bool = field(validator=validators.instance_of(bool))
    """ Whether the processing step succeeded """
    error: Optional[ProcessingError] = field(
        default=None, validator=validators.optional(validators.instance_of(ProcessingError))
    )
    """ The error that occurred during processing """
    processor_name: str = field(default="", validator=validators.instance_of(str))
    """ The name of the processor """

    @error.validator
    def _error_matches_success(self, attribute, value):
        if self.success and value is not None:
            raise ValueError(f"'{attribute.name}' must be None for a successful result")
        if not self.success and value is None:
            raise ValueError(f"'{attribute.name}' must be set for a failed result")

    @classmethod
    def succeeded(cls, original: Data, processed: Data, processor_name: str = ""):
        """create a successful result"""
        return cls(
            original=original, processed=processed, success=True, processor_name=processor_name
        )

    @classmethod
    def failed(cls, original: Data, error: ProcessingError, processor_name: str = ""):
        """create a failed result that carries the original as processed value"""
        return cls(
            original=original,
            processed=original,
            success=False,
            error=error,
            processor_name=processor_name,
        )

    @property
    def original_value(self) -> T:
        """the value of the original data"""
        return self.original.value

    @property
    def processed_value(self) -> T:
        """the value of the processed data"""
        return self.processed.value

    @property
    def error_message(self) -> Optional[str]:
        """the description of the error or None"""
        return str(self.error) if self.error is not None else None


class Processor(Component, Generic[T]):
    """Abstract Processor Class to define the Interface"""

    @define(kw_only=True, slots=False, frozen=True)
    class Config(Component.Config):
        """Common Configurations"""

        timeout: float = field(
            default=DEFAULT_PROCESS_TIMEOUT,
            converter=float,
            validator=[validators.instance_of(float), validators.ge(0.0)],
        )
        """Time in seconds a transformation may take before it is reported as failed.
        :code:`0` disables the timeout. Defaults to :code:`5.0`."""
        delay: float = field(
            default=0.0,
            converter=float,
            validator=[validators.instance_of(float), validators.ge(0.0)],
        )
        """Time in seconds to wait before the transformation, simulating an external
        operation. It counts towards the timeout. Defaults to :code:`0.0`."""

    @define(kw_only=True)
    class Metrics(Component.Metrics):
        """Tracks statistics about this processor"""

        number_of_processed_values: CounterMetric = field(
            factory=lambda: CounterMetric(
                description="Number of values the processor was applied to",
                name="number_of_processed_values",
            )
        )
        """Number of values the processor was applied to"""
        number_of_failures: CounterMetric = field(
            factory=lambda: CounterMetric(
                description="Number of values that could not be processed",
                name="number_of_failures",
            )
        )
        """Number of values that could not be processed"""
        processing_time_per_value: HistogramMetric = field(
            factory=lambda: HistogramMetric(
                description="Time in seconds that it took to process a value",
                name="processing_time_per_value",
            )
        )
        """Time in seconds that it took to process a value"""

    @property
    def metric_labels(self) -> dict:
        """Return metric labels."""
        return {
            "component": "processor",
            "type": self._config.type,
            "name": self.name,
        }

    async def process(self, data: Data[T]) -> ProcessResult[T]:
        """Process one value.

        Failures of the transformation, including timeouts, never propagate. They are
        returned as a failed :code:`ProcessResult` instead.

        Parameters
        ----------
        data : Data
           The timestamped value to process.

        Returns
        -------
        ProcessResult
            A ProcessResult object containing the original and the processed value.
        """
        self.metrics.number_of_processed_values += 1
        logger.debug("%s processing value %r", self.describe(), data.value)
        try:
            value = await self._transform(data.value)
        except ProcessingError as error:
            return self._failed(data, error)
        except Exception as error:  # pylint: disable=broad-except
            return self._failed(data, ProcessingError(f"{type(error).__name__}: {error}"))
        return ProcessResult.succeeded(data, data.restamp(value), self.name)

    @Metric.measure_time()
    async def _transform(self, value: T) -> T:
        timeout = self._config.timeout
        if not timeout:
            return await self._delayed_apply(value)
        try:
            return await asyncio.wait_for(self._delayed_apply(value), timeout)
        except asyncio.TimeoutError as error:
            raise ProcessingTimeoutError(timeout) from error

    async def _delayed_apply(self, value: T) -> T:
        if self._config.delay:
            await asyncio.sleep(self._config.delay)
        return await self._apply(value)

    def _failed(self, data: Data[T], error: ProcessingError) -> ProcessResult[T]:
        self.metrics.number_of_failures += 1
        logger.warning("%s failed to process value %r: %s", self.describe(), data.value, error)
        return ProcessResult.failed(data, error, self.name)

    @abstractmethod
    async def _apply(self, value: T) -> T: ...  # pragma: no cover
