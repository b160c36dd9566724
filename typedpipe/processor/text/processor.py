"""
TextProcessor
=============

The `text_processor` converts text values to upper case.

Processor Configuration
^^^^^^^^^^^^^^^^^^^^^^^
..  code-block:: yaml
    :linenos:

    - shouter:
        type: text_processor

.. autoclass:: typedpipe.processor.text.processor.TextProcessor.Config
   :members:
   :undoc-members:
   :inherited-members:
   :noindex:
"""

from typedpipe.abc.processor import Processor
from typedpipe.processor.base.exceptions import ProcessingError


class TextProcessor(Processor[str]):
    """A processor that upper-cases text"""

    async def _apply(self, value: str) -> str:
        if not isinstance(value, str):
            raise ProcessingError(f"value {value!r} is not text")
        return value.upper()
