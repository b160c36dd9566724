# pylint: disable=missing-module-docstring
# pylint: disable=protected-access
# pylint: disable=attribute-defined-outside-init
import asyncio
from unittest import mock

import pytest

from typedpipe.abc.processor import Processor, ProcessResult
from typedpipe.data import Data
from typedpipe.factory import Factory
from typedpipe.metrics.metrics import CounterMetric, HistogramMetric
from typedpipe.processor.base.exceptions import ProcessingError, ProcessingTimeoutError
from tests.unit.component.base import BaseComponentTestCase


class BaseProcessorTestCase(BaseComponentTestCase):
    mocks: dict = {}

    CONFIG: dict = {}

    object: Processor = None

    patchers: list = None

    valid_value = None
    """a value the processor can process successfully"""

    invalid_value = None
    """a value the processor fails to process"""

    expected_metrics: list = [
        "typedpipe_number_of_processed_values",
        "typedpipe_number_of_failures",
        "typedpipe_processing_time_per_value",
    ]

    def setup_method(self) -> None:
        """
        setUp class for the imported TestCase
        """
        self.patchers = []
        for name, kwargs in self.mocks.items():
            patcher = mock.patch(name, **kwargs)
            patcher.start()
            self.patchers.append(patcher)
        super().setup_method()

    def teardown_method(self) -> None:
        """teardown for all methods"""
        while len(self.patchers) > 0:
            patcher = self.patchers.pop()
            patcher.stop()

    def _create(self, **config) -> Processor:
        return Factory.create({"Test Instance Name": self.CONFIG | config})

    def test_is_a_processor_implementation(self):
        assert isinstance(self.object, Processor)

    def test_processor_metrics_are_counter_and_histogram_metrics(self):
        assert isinstance(self.object.metrics.number_of_processed_values, CounterMetric)
        assert isinstance(self.object.metrics.number_of_failures, CounterMetric)
        assert isinstance(self.object.metrics.processing_time_per_value, HistogramMetric)

    @pytest.mark.asyncio
    async def test_process_returns_process_result(self):
        result = await self.object.process(Data(self.valid_value))
        assert isinstance(result, ProcessResult)
        assert result.success
        assert result.error is None
        assert result.processor_name == "Test Instance Name"

    @pytest.mark.asyncio
    async def test_process_keeps_original_and_restamps_processed_value(self):
        data = Data(self.valid_value)
        result = await self.object.process(data)
        assert result.original is data
        assert result.processed is not data
        assert result.processed.timestamp >= data.timestamp

    @pytest.mark.asyncio
    async def test_invalid_value_is_reported_not_raised(self):
        data = Data(self.invalid_value)
        result = await self.object.process(data)
        assert not result.success
        assert isinstance(result.error, ProcessingError)
        assert result.error_message
        assert result.processed is data

    @pytest.mark.asyncio
    async def test_unexpected_exception_is_wrapped_in_processing_error(self):
        with mock.patch.object(
            self.object, "_apply", side_effect=KeyError("something went wrong")
        ):
            result = await self.object.process(Data(self.valid_value))
        assert not result.success
        assert isinstance(result.error, ProcessingError)
        assert "KeyError" in result.error_message
        assert "something went wrong" in result.error_message

    @pytest.mark.asyncio
    async def test_timeout_is_reported_as_failure(self):
        self.object = self._create(timeout=0.01, delay=1.0)
        result = await self.object.process(Data(self.valid_value))
        assert not result.success
        assert isinstance(result.error, ProcessingTimeoutError)
        assert "0.01 seconds" in result.error_message

    @pytest.mark.asyncio
    async def test_zero_timeout_disables_timeout(self):
        self.object = self._create(timeout=0, delay=0.01)
        with mock.patch("asyncio.wait_for") as mock_wait_for:
            result = await self.object.process(Data(self.valid_value))
        mock_wait_for.assert_not_called()
        assert result.success

    @pytest.mark.asyncio
    async def test_delay_is_awaited_before_transformation(self):
        self.object = self._create(delay=0.5)
        with mock.patch("asyncio.sleep", new_callable=mock.AsyncMock) as mock_sleep:
            result = await self.object.process(Data(self.valid_value))
        mock_sleep.assert_awaited_once_with(0.5)
        assert result.success

    @pytest.mark.asyncio
    async def test_cancellation_is_not_swallowed(self):
        self.object = self._create(delay=10.0, timeout=0)
        task = asyncio.create_task(self.object.process(Data(self.valid_value)))
        await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    @pytest.mark.asyncio
    async def test_process_counts_processed_values(self):
        metric = self.object.metrics.number_of_processed_values
        before = metric.value
        await self.object.process(Data(self.valid_value))
        await self.object.process(Data(self.invalid_value))
        assert metric.value == before + 2

    @pytest.mark.asyncio
    async def test_process_counts_failures(self):
        metric = self.object.metrics.number_of_failures
        before = metric.value
        await self.object.process(Data(self.valid_value))
        await self.object.process(Data(self.invalid_value))
        assert metric.value == before + 1

    @pytest.mark.asyncio
    async def test_process_measures_processing_time(self):
        metric = self.object.metrics.processing_time_per_value
        before = metric.count
        await self.object.process(Data(self.valid_value))
        assert metric.count == before + 1

    @pytest.mark.asyncio
    async def test_failure_is_logged_as_warning(self, caplog):
        with caplog.at_level("WARNING", logger="Processor"):
            await self.object.process(Data(self.invalid_value))
        assert "failed to process value" in caplog.text

    def test_config_rejects_negative_timeout(self):
        with pytest.raises(ValueError):
            self.object.Config(**(self.CONFIG | {"timeout": -1}))

    def test_config_rejects_negative_delay(self):
        with pytest.raises(ValueError):
            self.object.Config(**(self.CONFIG | {"delay": -1}))
