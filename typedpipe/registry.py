"""Registry of the processor types that can be used in processor definitions.

New processors are made available by importing them here and adding their type to
:code:`Registry.mapping`.
"""

from typing import Dict, Optional, Type

from typedpipe.abc.processor import Processor
from typedpipe.factory_error import UnknownProcessorTypeError
from typedpipe.processor.numeric.processor import NumericProcessor
from typedpipe.processor.text.processor import TextProcessor


class Registry:
    """Processor Registry"""

    mapping: Dict[str, Type[Processor]] = {
        "numeric_processor": NumericProcessor,
        "text_processor": TextProcessor,
    }

    @classmethod
    def get_class(
        cls, processor_type: str, processor_name: Optional[str] = None
    ) -> Type[Processor]:
        """Return the processor class registered for a type.

        Parameters
        ----------
        processor_type : str
            the :code:`type` of a processor definition
        processor_name : Optional[str]
            the name of the processor, only used in the error message

        Raises
        ------
        UnknownProcessorTypeError
            if no processor is registered for :code:`processor_type`
        """
        if not isinstance(processor_type, str) or processor_type not in cls.mapping:
            raise UnknownProcessorTypeError(processor_type, cls.mapping, processor_name)
        return cls.mapping[processor_type]
