"""Global configuration and fixtures for all pytest-based tests"""

import asyncio

import pytest
from attrs import define, field

from typedpipe.abc.processor import Processor


class SleepyProcessor(Processor):
    """Test processor whose latency depends on the processed value."""

    @define(kw_only=True, slots=False, frozen=True)
    class Config(Processor.Config):
        seconds_per_unit: float = field(default=0.01, converter=float)

    async def _apply(self, value):
        await asyncio.sleep(value * self._config.seconds_per_unit)
        return value + 1


class FailingProcessor(Processor):
    """Test processor that raises a plain exception."""

    async def _apply(self, value):
        raise ZeroDivisionError("division by zero")


@pytest.fixture(name="sleepy_processor")
def fixture_sleepy_processor():
    return SleepyProcessor("sleepy", SleepyProcessor.Config(type="sleepy_processor"))


@pytest.fixture(name="failing_processor")
def fixture_failing_processor():
    return FailingProcessor("failing", FailingProcessor.Config(type="failing_processor"))
