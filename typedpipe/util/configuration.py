"""
Configuration
=============

The typedpipe configuration is a yaml (or json) file with the following top level keys.
If more than one file is given, top level keys of later files replace those of earlier
files.

..  code-block:: yaml
    :caption: Example of a complete configuration

    version: 1
    logger:
      level: INFO
    pipeline:
      concurrency: 1
      processors:
        - doubler:
            type: numeric_processor
            overflow: saturate
        - shouter:
            type: text_processor
            timeout: 1.0
    store:
      max_items: 1000
      max_age: 3600

.. autoclass:: typedpipe.util.configuration.Configuration
   :members: version, logger, pipeline, store
   :no-index:

.. autoclass:: typedpipe.util.configuration.LoggerConfig
   :no-index:

.. autoclass:: typedpipe.util.configuration.PipelineConfig
   :no-index:

.. autoclass:: typedpipe.util.configuration.StoreConfig
   :no-index:
"""

import datetime
import json
import logging
from copy import deepcopy
from logging.config import dictConfig
from pathlib import Path
from typing import Any, Iterable, List, Optional

from attrs import asdict, define, field, validators
from ruamel.yaml import YAML
from ruamel.yaml.compat import StringIO
from ruamel.yaml.error import YAMLError

from typedpipe.abc.processor import Processor
from typedpipe.factory import Factory
from typedpipe.factory_error import FactoryError, InvalidConfigurationError
from typedpipe.framework.pipeline import Pipeline
from typedpipe.framework.store import TypedStore
from typedpipe.util.defaults import DEFAULT_LOG_CONFIG, DEFAULT_PIPELINE_CONCURRENCY

logger = logging.getLogger("Config")


class MyYAML(YAML):
    """helper class to dump yaml with ruamel.yaml"""

    def dump(self, data: Any, stream: Any | None = None, **kw: Any) -> Any:
        inefficient = False
        if stream is None:
            inefficient = True
            stream = StringIO()
        YAML.dump(self, data, stream, **kw)
        if inefficient:
            return stream.getvalue()
        return None


yaml = MyYAML(typ="safe", pure=True)


def read_yaml_file(path: str) -> Any:
    """Read and parse a yaml or json file.

    Raises
    ------
    InvalidConfigurationError
        if the file can not be read or parsed
    """
    try:
        content = Path(path).read_text(encoding="utf8")
    except OSError as error:
        raise InvalidConfigurationError(f"File can not be read: {path} ({error})") from error
    try:
        return yaml.load(content)
    except YAMLError as error:
        raise InvalidConfigurationError(f"Invalid yaml or json file: {path} {error}") from error


@define(kw_only=True, frozen=True)
class StoreConfig:
    """the store config class used in Configuration"""

    max_items: Optional[int] = field(
        default=None,
        validator=validators.optional([validators.instance_of(int), validators.ge(1)]),
    )
    """Maximum number of stored values. Defaults to unbounded."""
    max_age: float = field(
        default=0.0,
        converter=float,
        validator=[validators.instance_of(float), validators.ge(0.0)],
    )
    """Seconds after which stored values expire. :code:`0` disables expiry."""

    def create_store(self) -> TypedStore:
        """create a store with this configuration"""
        max_age = datetime.timedelta(seconds=self.max_age) if self.max_age else None
        return TypedStore(max_items=self.max_items, max_age=max_age)


@define(kw_only=True, frozen=True)
class PipelineConfig:
    """the pipeline config class used in Configuration"""

    concurrency: int = field(
        default=DEFAULT_PIPELINE_CONCURRENCY,
        validator=[validators.instance_of(int), validators.ge(1)],
    )
    """Number of inputs processed at the same time. Defaults to :code:`1`."""
    processors: List[dict] = field(
        factory=list,
        validator=validators.deep_iterable(
            member_validator=validators.instance_of(dict),
            iterable_validator=validators.instance_of(list),
        ),
    )
    """Processor definitions in order of application. Each definition maps a processor name
    to its configuration, which needs at least a :code:`type`."""

    def create_pipeline(self) -> Pipeline:
        """create a pipeline with this configuration"""
        return Pipeline.from_config(self.processors, concurrency=self.concurrency)


@define(kw_only=True)
class LoggerConfig:
    """The logger config class used in Configuration.
    The schema for this class is derived from the python logging module:
    https://docs.python.org/3/library/logging.config.html#dictionary-schema-details
    """

    _LOG_LEVELS = (
        logging.NOTSET,  # 0
        logging.DEBUG,  # 10
        logging.INFO,  # 20
        logging.WARNING,  # 30
        logging.ERROR,  # 40
        logging.CRITICAL,  # 50
    )

    version: int = field(validator=validators.instance_of(int), default=1)
    formatters: dict = field(validator=validators.instance_of(dict), factory=dict)
    filters: dict = field(validator=validators.instance_of(dict), factory=dict)
    handlers: dict = field(validator=validators.instance_of(dict), factory=dict)
    disable_existing_loggers: bool = field(validator=validators.instance_of(bool), default=False)
    level: str = field(
        default="INFO",
        validator=[
            validators.instance_of(str),
            validators.in_([logging.getLevelName(level) for level in _LOG_LEVELS]),
        ],
        eq=False,
    )
    """The log level of the root logger. Defaults to :code:`INFO`."""
    loggers: dict = field(validator=validators.instance_of(dict), factory=dict)
    """The loggers loglevel configuration.
    You can alter the log level of single loggers like :code:`Pipeline` by adding them to the
    loggers mapping.

    .. code-block:: yaml
        :caption: Example of a custom logger configuration

        logger:
            level: ERROR
            loggers:
                "Pipeline": {"level": "DEBUG"}

        """

    def __attrs_post_init__(self) -> None:
        self._set_defaults()
        loggers = deepcopy(DEFAULT_LOG_CONFIG["loggers"])
        for logger_name, logger_config in self.loggers.items():
            loggers.setdefault(logger_name, {}).update(logger_config)
        self.loggers = loggers
        self.loggers.setdefault("root", {}).update({"level": self.level})

    def setup_logging(self) -> None:
        """Setup the logging configuration. Is called in :code:`typedpipe.run_typedpipe`."""
        log_config = asdict(self)
        log_config.pop("level")
        dictConfig(log_config)

    def _set_defaults(self) -> None:
        """resets all keys to the defined defaults except :code:`loggers`."""
        for key, value in DEFAULT_LOG_CONFIG.items():
            if key == "loggers":
                continue
            setattr(self, key, deepcopy(value))


def _to_logger_config(value):
    return value if isinstance(value, LoggerConfig) else LoggerConfig(**value)


def _to_pipeline_config(value):
    return value if isinstance(value, PipelineConfig) else PipelineConfig(**value)


def _to_store_config(value):
    return value if isinstance(value, StoreConfig) else StoreConfig(**value)


@define(kw_only=True, frozen=True)
class Configuration:
    """the typedpipe configuration"""

    version: str = field(validator=validators.instance_of(str), converter=str, default="unset")
    """The version of the configuration, it is printed by :code:`typedpipe run --version`."""
    logger: LoggerConfig = field(
        validator=validators.instance_of(LoggerConfig),
        converter=_to_logger_config,
        factory=LoggerConfig,
    )
    """Logger configuration, see :class:`LoggerConfig`."""
    pipeline: PipelineConfig = field(
        validator=validators.instance_of(PipelineConfig),
        converter=_to_pipeline_config,
        factory=PipelineConfig,
    )
    """Pipeline configuration, see :class:`PipelineConfig`."""
    store: StoreConfig = field(
        validator=validators.instance_of(StoreConfig),
        converter=_to_store_config,
        factory=StoreConfig,
    )
    """Store configuration, see :class:`StoreConfig`."""
    config_paths: tuple = field(factory=tuple, converter=tuple, eq=False)
    """Paths of the files the configuration was read from."""

    @classmethod
    def from_source(cls, config_path: str) -> "Configuration":
        """Create and verify the configuration from one file.

        Parameters
        ----------
        config_path : str
            path of the file to create the configuration from.

        Returns
        -------
        config : Configuration
            Configuration object attrs class.

        """
        return cls.from_sources([config_path])

    @classmethod
    def from_sources(cls, config_paths: Iterable[str]) -> "Configuration":
        """Create and verify the configuration from a list of files. Top level keys of later
        files replace those of earlier files.

        Parameters
        ----------
        config_paths : list[str]
            List of paths to create the configuration from.

        Returns
        -------
        config : Configuration
            resulting configuration object.

        """
        config_paths = list(config_paths)
        if not config_paths:
            raise InvalidConfigurationError("No configuration file given")
        config_dict = {}
        for config_path in config_paths:
            content = read_yaml_file(config_path)
            if not isinstance(content, dict):
                raise InvalidConfigurationError(
                    f"Invalid configuration file: {config_path} must contain a mapping"
                )
            config_dict.update(content)
        try:
            config = Configuration(**config_dict, config_paths=config_paths)
        except (TypeError, ValueError) as error:
            raise InvalidConfigurationError(
                f"Invalid configuration file(s): {', '.join(config_paths)} {error}"
            ) from error
        config.verify()
        return config

    def verify(self) -> None:
        """Verify that all processors can be created.

        Raises
        ------
        InvalidConfigurationError
            if one or more processor definitions are invalid
        """
        errors = []
        for definition in self.pipeline.processors:
            try:
                self.create_processor(definition)
            except FactoryError as error:
                errors.append(error)
        if errors:
            raise InvalidConfigurationError("\n".join(str(error) for error in errors))

    @staticmethod
    def create_processor(definition: dict) -> Processor:
        """create one processor from a definition"""
        return Factory.create(definition)

    def as_dict(self) -> dict:
        """Return the configuration as dict."""
        return asdict(self, filter=lambda attribute, _: attribute.name != "config_paths")

    def as_json(self, indent=None) -> str:
        """Return the configuration as json string."""
        return json.dumps(self.as_dict(), indent=indent)

    def as_yaml(self) -> str:
        """Return the configuration as yaml string."""
        return yaml.dump(self.as_dict())
