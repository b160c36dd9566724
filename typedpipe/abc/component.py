""" abstract module for components"""

import logging
from abc import ABC
from functools import cached_property

from attr import define, field, validators
from attrs import asdict

from typedpipe.metrics.metrics import Metric
from typedpipe.util.helper import camel_to_snake

logger = logging.getLogger("Component")


class Component(ABC):
    """Abstract Component Class to define the Interface"""

    @define(kw_only=True, slots=False, frozen=True)
    class Config:
        """Common Configurations
        This class is used to define the configuration of the component.
        It is frozen because the configuration should not be changed after initialization.
        """

        type: str = field(validator=validators.instance_of(str))
        """Type of the component"""

    @define(kw_only=True)
    class Metrics:
        """Base Metric class to track and expose statistics about typedpipe"""

        _labels: dict

        def __attrs_post_init__(self):
            for attribute in asdict(self, recurse=False):
                attribute = getattr(self, attribute)
                if isinstance(attribute, Metric):
                    attribute.labels = self._labels
                    attribute.init_tracker()

    # __dict__ is added to support functools.cached_property
    __slots__ = ["name", "_config", "__dict__"]

    # instance attributes
    name: str
    _config: Config

    @property
    def metric_labels(self) -> dict:
        """Labels for the metrics"""
        return {"component": self._config.type, "name": self.name}

    def __init__(self, name: str, configuration: "Component.Config"):
        self._config = configuration
        self.name = name

    @cached_property
    def metrics(self):
        """create and return metrics object"""
        return self.Metrics(labels=self.metric_labels)

    def __repr__(self):
        return camel_to_snake(self.__class__.__name__)

    def describe(self) -> str:
        """Provide a brief name-like description of the component.

        The description is indicating its type _and_ the name provided when creating it.

        Examples
        --------

        >>> NumericProcessor(name)

        """
        return f"{self.__class__.__name__} ({self.name})"

    def setup(self):
        """Set the component up."""
        _ = self.metrics
        logger.debug("Set up %s", self.describe())

    def shut_down(self):
        """Stop processing of this component.

        Optional: Called when shutting down the pipeline

        """
        logger.debug("Shut down %s", self.describe())
