"""This module contains a factory to create processors from processor definitions."""

from typing import Any, Tuple

from typedpipe.abc.processor import Processor
from typedpipe.factory_error import InvalidProcessorDefinitionError
from typedpipe.registry import Registry


class Factory:
    """Create processors for typedpipe."""

    @classmethod
    def create(cls, definition: dict) -> Processor:
        """Create a processor from a definition like
        :code:`{"doubler": {"type": "numeric_processor"}}`.

        Raises
        ------
        InvalidProcessorDefinitionError
            if the definition is malformed or the configuration is rejected by the processor
        UnknownProcessorTypeError
            if the type is not registered
        """
        name, processor_configuration = cls._unpack(definition)
        if "type" not in processor_configuration:
            raise InvalidProcessorDefinitionError("the type specification is missing", name)
        processor_class = Registry.get_class(processor_configuration["type"], name)
        try:
            config = processor_class.Config(**processor_configuration)
        except (TypeError, ValueError) as error:
            raise InvalidProcessorDefinitionError(str(error), name) from error
        return processor_class(name, config)

    @staticmethod
    def _unpack(definition: Any) -> Tuple[str, dict]:
        if definition is None or definition == {}:
            raise InvalidProcessorDefinitionError("the definition is empty")
        if not isinstance(definition, dict):
            raise InvalidProcessorDefinitionError(
                "it must be a mapping of a processor name to its configuration"
            )
        if len(definition) > 1:
            raise InvalidProcessorDefinitionError(
                f"found multiple processors ({', '.join(map(str, definition))}), "
                "but there must be exactly one"
            )
        [(name, processor_configuration)] = definition.items()
        if processor_configuration is None:
            raise InvalidProcessorDefinitionError("the configuration is empty", name)
        if not isinstance(processor_configuration, dict):
            raise InvalidProcessorDefinitionError("the configuration must be a mapping", name)
        return name, processor_configuration
