"""
NumericProcessor
================

The `numeric_processor` multiplies numeric values by a factor, doubling them by default.

Results are checked against the configured bounds, by default the signed 64-bit integer
range. Depending on :code:`overflow` a result outside of the bounds either fails the
processing step (:code:`raise`) or is clamped to the nearest bound (:code:`saturate`).
Float results that are not finite always fail the processing step.

Processor Configuration
^^^^^^^^^^^^^^^^^^^^^^^
..  code-block:: yaml
    :linenos:

    - doubler:
        type: numeric_processor
        factor: 2
        overflow: saturate
        timeout: 1.0

.. autoclass:: typedpipe.processor.numeric.processor.NumericProcessor.Config
   :members:
   :undoc-members:
   :inherited-members:
   :noindex:
"""

import decimal
import math
from decimal import Decimal
from typing import Union

from attrs import define, field, validators

from typedpipe.abc.processor import Processor
from typedpipe.processor.base.exceptions import NumericOverflowError, ProcessingError
from typedpipe.util.defaults import DEFAULT_NUMERIC_BOUNDS
from typedpipe.util.typing import N, is_numeric


def _is_number(_, attribute, value):
    if not is_numeric(value):
        raise TypeError(f"'{attribute.name}' must be a number (got {value!r})")


class NumericProcessor(Processor[N]):
    """A processor that multiplies numbers"""

    @define(kw_only=True, slots=False, frozen=True)
    class Config(Processor.Config):
        """NumericProcessor Configuration"""

        factor: Union[int, float] = field(default=2, validator=_is_number)
        """The factor values are multiplied with. Defaults to :code:`2`."""
        overflow: str = field(
            default="raise",
            validator=[validators.instance_of(str), validators.in_(("raise", "saturate"))],
        )
        """What to do with results outside of the bounds. :code:`raise` fails the
        processing step, :code:`saturate` clamps the result. Defaults to :code:`raise`."""
        lower_bound: int = field(default=DEFAULT_NUMERIC_BOUNDS[0], validator=_is_number)
        """The smallest allowed result. Defaults to :code:`-2**63`."""
        upper_bound: int = field(default=DEFAULT_NUMERIC_BOUNDS[1], validator=_is_number)
        """The largest allowed result. Defaults to :code:`2**63 - 1`."""

        @upper_bound.validator
        def _upper_bound_greater_than_lower_bound(self, attribute, value):
            if value <= self.lower_bound:
                raise ValueError(
                    f"'{attribute.name}' must be greater than 'lower_bound' ({self.lower_bound})"
                )

    @property
    def bounds(self) -> tuple:
        """the configured lower and upper bound"""
        return self._config.lower_bound, self._config.upper_bound

    async def _apply(self, value: N) -> N:
        if not is_numeric(value):
            raise ProcessingError(f"value {value!r} is not numeric")
        try:
            result = value * self._config.factor
        except (OverflowError, decimal.Overflow) as error:
            raise NumericOverflowError(
                value,
                self.bounds,
                f"multiplying {type(value).__name__} by {self._config.factor!r} overflows: {error}",
            ) from error
        return self._check_bounds(result)

    def _check_bounds(self, result: N) -> N:
        if isinstance(result, float) and not math.isfinite(result):
            raise NumericOverflowError(result, self.bounds)
        if isinstance(result, Decimal) and not result.is_finite():
            raise NumericOverflowError(result, self.bounds)
        lower, upper = self.bounds
        if lower <= result <= upper:
            return result
        if self._config.overflow == "raise":
            raise NumericOverflowError(result, self.bounds)
        bound = lower if result < lower else upper
        return type(result)(bound)
