"""This module contains all Pipeline functionality.

Pipelines contain a list of processors that are applied in order to every input value.
The processing of one value stops at the first failing processor.

.. code-block:: python

    >>> import asyncio
    >>> from typedpipe.factory import Factory
    >>> from typedpipe.framework.pipeline import Pipeline
    >>> doubler = Factory.create({"doubler": {"type": "numeric_processor"}})
    >>> results = asyncio.run(Pipeline([doubler]).run([10]))
    >>> results[0].processed_value
    20

"""

import asyncio
import logging
from typing import Dict, Generic, Iterable, List, Mapping, Sequence, TypeVar, Union

from typedpipe.abc.processor import ProcessResult, Processor
from typedpipe.data import Data
from typedpipe.factory import Factory
from typedpipe.framework.store import TypedStore
from typedpipe.util.defaults import DEFAULT_PIPELINE_CONCURRENCY

logger = logging.getLogger("Pipeline")

T = TypeVar("T")


def _as_data(item: Union[T, Data[T]]) -> Data[T]:
    return item if isinstance(item, Data) else Data(item)


class Pipeline(Generic[T]):
    """Pipeline of processors to be processed.

    The pipeline holds no state between runs. With a :code:`concurrency` of 1 the inputs
    are processed one after another. A higher value processes up to that many inputs at
    the same time. The results are returned in input order in both cases.
    """

    processors: List[Processor[T]]
    concurrency: int

    def __init__(
        self,
        processors: Sequence[Processor[T]],
        concurrency: int = DEFAULT_PIPELINE_CONCURRENCY,
    ) -> None:
        if not isinstance(concurrency, int) or concurrency < 1:
            raise ValueError(f"concurrency must be a positive integer, got {concurrency!r}")
        self.processors = list(processors)
        self.concurrency = concurrency

    @classmethod
    def from_config(
        cls,
        processor_definitions: Sequence[dict],
        concurrency: int = DEFAULT_PIPELINE_CONCURRENCY,
    ) -> "Pipeline":
        """Create a pipeline from a list of processor definitions.

        Parameters
        ----------
        processor_definitions : Sequence[dict]
            processor definitions as accepted by :code:`Factory.create`
        concurrency : int
            the number of inputs that may be processed at the same time

        Returns
        -------
        Pipeline
            the pipeline with the created processors
        """
        processors = [Factory.create(definition) for definition in processor_definitions]
        return cls(processors, concurrency=concurrency)

    def setup(self) -> None:
        """Set up all processors."""
        for processor in self.processors:
            processor.setup()

    def shut_down(self) -> None:
        """Shutdown the pipeline gracefully."""
        for processor in self.processors:
            processor.shut_down()

    async def run(self, inputs: Iterable[Union[T, Data[T]]]) -> List[ProcessResult[T]]:
        """Process all inputs and return one result per input in input order.

        Parameters
        ----------
        inputs : Iterable[Union[T, Data[T]]]
            values or timestamped values, values are wrapped into :code:`Data`

        Returns
        -------
        List[ProcessResult]
            the failing result of the first failing processor or the final successful
            result for every input
        """
        items = [_as_data(item) for item in inputs]
        if self.concurrency == 1:
            results = [await self.process(item) for item in items]
        else:
            semaphore = asyncio.Semaphore(self.concurrency)

            async def _bounded_process(item: Data[T]) -> ProcessResult[T]:
                async with semaphore:
                    return await self.process(item)

            results = list(await asyncio.gather(*(_bounded_process(item) for item in items)))
        failed = sum(1 for result in results if not result.success)
        logger.info("Processed %d values, %d failed", len(results), failed)
        return results

    async def process(self, data: Data[T]) -> ProcessResult[T]:
        """Apply all processors in order to one input.

        Parameters
        ----------
        data : Data[T]
            the input value

        Returns
        -------
        ProcessResult
            the result of the first failing processor or a successful result carrying the
            output of the last processor
        """
        current = data
        for processor in self.processors:
            result = await processor.process(current)
            if not result.success:
                return result
            current = result.processed
        name = self.processors[-1].name if self.processors else ""
        return ProcessResult.succeeded(data, current, name)

    async def run_into(
        self, store: TypedStore[T], items: Mapping[str, T]
    ) -> Dict[str, ProcessResult[T]]:
        """Process keyed values and write every successfully processed value to the store.

        Parameters
        ----------
        store : TypedStore[T]
            the store to write the processed values to
        items : Mapping[str, T]
            the values to process by key

        Returns
        -------
        Dict[str, ProcessResult]
            the result for every key

        Raises
        ------
        TypeError
            if a key is not a string, before any value is processed or stored
        """
        keys = list(items.keys())
        invalid_keys = [key for key in keys if not isinstance(key, str)]
        if invalid_keys:
            raise TypeError(f"keys must be str, got {', '.join(map(repr, invalid_keys))}")
        results = await self.run(items[key] for key in keys)
        for key, result in zip(keys, results):
            if result.success:
                store.set(key, result.processed_value)
        return dict(zip(keys, results))
