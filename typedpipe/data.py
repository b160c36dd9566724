"""The timestamped value unit that is passed through processors and pipelines.

.. code-block:: python

    >>> from typedpipe.data import Data
    >>> data = Data(10)
    >>> data.value
    10
    >>> data.restamp(20).value
    20
"""

from datetime import datetime
from typing import Generic, TypeVar

from attrs import NOTHING, define, evolve, field, validators

from typedpipe.util.time import TimeParser

T = TypeVar("T")


@define(frozen=True)
class Data(Generic[T]):
    """An immutable value together with the instant it was produced."""

    value: T
    """The wrapped value"""
    timestamp: datetime = field(
        factory=TimeParser.now, validator=validators.instance_of(datetime), eq=False
    )
    """Timezone aware instant the value was produced, defaults to now (UTC)"""

    def restamp(self, value=NOTHING) -> "Data[T]":
        """Returns a new :code:`Data` with a fresh timestamp.

        Parameters
        ----------
        value : T, optional
            the value of the new data, defaults to the current value

        Returns
        -------
        Data[T]
            the newly stamped data
        """
        if value is NOTHING:
            value = self.value
        return evolve(self, value=value, timestamp=TimeParser.now())
