"""Errors raised while turning processor definitions into processors.

A processor definition is a mapping of exactly one processor name to its configuration,
e.g. :code:`{"doubler": {"type": "numeric_processor", "factor": 2}}`.
"""

from typing import Iterable, Optional

from typedpipe.abc.exceptions import TypedpipeException


class FactoryError(TypedpipeException):
    """Base class for errors raised while creating processors."""


class InvalidConfigurationError(FactoryError):
    """Raise if a configuration file or a processor definition is invalid."""


class InvalidProcessorDefinitionError(InvalidConfigurationError):
    """Raise if a processor definition is malformed or its configuration is rejected."""

    def __init__(self, reason: str, processor_name: Optional[str] = None):
        self.processor_name = processor_name
        if processor_name is None:
            super().__init__(f"Invalid processor definition: {reason}")
        else:
            super().__init__(f'Invalid definition of processor "{processor_name}": {reason}')


class UnknownProcessorTypeError(FactoryError):
    """Raise if no processor is registered for a type."""

    def __init__(
        self,
        processor_type: str,
        known_types: Iterable[str],
        processor_name: Optional[str] = None,
    ):
        self.processor_type = processor_type
        self.processor_name = processor_name
        location = f" for '{processor_name}'" if processor_name is not None else ""
        super().__init__(
            f"Unknown type '{processor_type}'{location}, "
            f"known types are: {', '.join(sorted(known_types))}"
        )
