"""
typedpipe tracks processing statistics of its components with the
`prometheus python client <https://github.com/prometheus/client_python>`_.
Every component owns a :code:`Metrics` class whose attributes are metric wrappers, e.g.
:code:`typedpipe_number_of_processed_values_total` or
:code:`typedpipe_processing_time_per_value_sum`.

Metrics are not registered in the global prometheus registry unless a registry is passed
explicitly, so that any number of components can be created in one process.

Metrics Overview
================

.. autoclass:: typedpipe.abc.processor.Processor.Metrics
   :members:
   :undoc-members:
   :private-members:
   :inherited-members:
"""

import time
from abc import ABC, abstractmethod
from typing import Any, Union

from attrs import define, field, validators
from prometheus_client import CollectorRegistry, Counter, Histogram


@define(kw_only=True, slots=False)
class Metric(ABC):
    """Metric base class"""

    name: str = field(validator=validators.instance_of(str))
    description: str = field(validator=validators.instance_of(str))
    labels: dict = field(
        validator=[
            validators.instance_of(dict),
            validators.deep_mapping(
                key_validator=validators.instance_of(str),
                value_validator=validators.instance_of(str),
            ),
        ],
        factory=dict,
    )
    _registry: CollectorRegistry = field(default=None)
    _prefix: str = field(default="typedpipe_")
    tracker: Union[Counter, Histogram] = field(init=False, default=None)

    @property
    def fullname(self):
        """returns the fullname"""
        return f"{self._prefix}{self.name}"

    @property
    def child(self) -> Union[Counter, Histogram]:
        """the collector the values are recorded in, the tracker itself if there are no labels"""
        if not self.labels:
            return self.tracker
        return self.tracker.labels(**self.labels)

    def init_tracker(self) -> None:
        """initializes the tracker"""
        try:
            if isinstance(self, CounterMetric):
                self.tracker = Counter(
                    name=self.fullname,
                    documentation=self.description,
                    labelnames=self.labels.keys(),
                    registry=self._registry,
                )
            if isinstance(self, HistogramMetric):
                self.tracker = Histogram(
                    name=self.fullname,
                    documentation=self.description,
                    labelnames=self.labels.keys(),
                    buckets=(0.00001, 0.00005, 0.0001, 0.001, 0.1, 1),
                    registry=self._registry,
                )
        except ValueError as error:
            # pylint: disable=protected-access
            self.tracker = self._registry._names_to_collectors.get(self.fullname)
            # pylint: enable=protected-access
            if not isinstance(self.tracker, METRIC_TO_COLLECTOR_TYPE[type(self)]):
                raise ValueError(
                    f"Metric {self.fullname} already exists with different type"
                ) from error
        _ = self.child

    @abstractmethod
    def __add__(self, other):
        """Add"""

    @staticmethod
    def measure_time(metric_name: str = "processing_time_per_value"):
        """Decorate a coroutine method to observe its execution time in the given histogram."""

        def decorator(func):
            async def inner(self, *args, **kwargs):  # nosemgrep
                metric = getattr(self.metrics, metric_name)
                begin = time.perf_counter()
                try:
                    return await func(self, *args, **kwargs)
                finally:
                    metric += time.perf_counter() - begin

            return inner

        return decorator


@define(kw_only=True)
class CounterMetric(Metric):
    """Wrapper for prometheus Counter metric"""

    def __add__(self, other: Any) -> "CounterMetric":
        self.child.inc(other)
        return self

    @property
    def value(self) -> float:
        """returns the current value of the counter"""
        return self.child._value.get()  # pylint: disable=protected-access


@define(kw_only=True)
class HistogramMetric(Metric):
    """Wrapper for prometheus Histogram metric"""

    def __add__(self, other):
        self.child.observe(other)
        return self

    @property
    def count(self) -> float:
        """returns the number of observations"""
        samples = self.child.collect()[0].samples
        return next(sample.value for sample in samples if sample.name.endswith("_count"))


METRIC_TO_COLLECTOR_TYPE = {
    CounterMetric: Counter,
    HistogramMetric: Histogram,
}
