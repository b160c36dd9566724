# pylint: disable=missing-docstring
# pylint: disable=protected-access
import datetime
import json
import logging
from pathlib import Path

import pytest
from ruamel.yaml import YAML

from typedpipe.factory_error import InvalidConfigurationError
from typedpipe.framework.pipeline import Pipeline
from typedpipe.framework.store import TypedStore
from typedpipe.processor.numeric.processor import NumericProcessor
from typedpipe.util.configuration import (
    Configuration,
    LoggerConfig,
    PipelineConfig,
    StoreConfig,
    read_yaml_file,
)
from tests.testdata.metadata import (
    path_to_alternative_config,
    path_to_config,
    path_to_invalid_config,
    path_to_unknown_type_config,
)

yaml = YAML(typ="safe", pure=True)


@pytest.fixture(name="write_config")
def fixture_write_config(tmp_path: Path):
    def _write(content, name="config.yml"):
        path = tmp_path / name
        if isinstance(content, str):
            path.write_text(content, encoding="utf8")
        else:
            yaml.dump(content, path)
        return str(path)

    return _write


class TestConfiguration:
    def test_from_source_reads_all_sections(self):
        config = Configuration.from_source(path_to_config)
        assert config.version == "1"
        assert config.logger.level == "INFO"
        assert config.pipeline.concurrency == 1
        assert config.pipeline.processors == [
            {"doubler": {"type": "numeric_processor", "timeout": 1.0}}
        ]
        assert config.store.max_items == 100
        assert config.config_paths == (path_to_config,)

    def test_defaults(self):
        config = Configuration()
        assert config.version == "unset"
        assert config.pipeline == PipelineConfig()
        assert config.store == StoreConfig()
        assert isinstance(config.logger, LoggerConfig)

    def test_from_sources_later_files_replace_top_level_keys(self):
        config = Configuration.from_sources([path_to_config, path_to_alternative_config])
        assert config.version == "alternative"
        assert config.pipeline.concurrency == 2
        assert len(config.pipeline.processors) == 2
        assert config.store.max_items == 100

    def test_from_sources_without_paths_raises(self):
        with pytest.raises(InvalidConfigurationError, match="No configuration file given"):
            Configuration.from_sources([])

    def test_missing_file_raises_invalid_configuration_error(self, tmp_path):
        with pytest.raises(InvalidConfigurationError, match="File can not be read"):
            Configuration.from_source(str(tmp_path / "does_not_exist.yml"))

    def test_invalid_yaml_raises_invalid_configuration_error(self, write_config):
        path = write_config("pipeline: [unclosed")
        with pytest.raises(InvalidConfigurationError, match="Invalid yaml or json file"):
            Configuration.from_source(path)

    def test_non_mapping_raises_invalid_configuration_error(self, write_config):
        path = write_config("- just\n- a list\n")
        with pytest.raises(InvalidConfigurationError, match="must contain a mapping"):
            Configuration.from_source(path)

    @pytest.mark.parametrize(
        "content",
        [
            {"unknown_key": 1},
            {"pipeline": {"concurrency": 0}},
            {"pipeline": {"processors": "doubler"}},
            {"store": {"max_items": 0}},
            {"store": {"max_age": -1}},
            {"logger": {"level": "LOUD"}},
            {"logger": "INFO"},
        ],
    )
    def test_invalid_sections_raise_invalid_configuration_error(self, write_config, content):
        path = write_config(content)
        with pytest.raises(InvalidConfigurationError, match="Invalid configuration file"):
            Configuration.from_source(path)

    def test_invalid_processor_definition_is_reported(self):
        with pytest.raises(
            InvalidConfigurationError, match='Invalid definition of processor "doubler"'
        ):
            Configuration.from_source(path_to_invalid_config)

    def test_unknown_processor_type_is_reported(self):
        with pytest.raises(InvalidConfigurationError, match="Unknown type 'reverse_processor'"):
            Configuration.from_source(path_to_unknown_type_config)

    def test_verify_collects_all_processor_errors(self):
        config = Configuration(
            pipeline={
                "processors": [
                    {"first": {"type": "unknown"}},
                    {"second": {"type": "numeric_processor", "overflow": "wrap"}},
                ]
            }
        )
        with pytest.raises(InvalidConfigurationError) as error:
            config.verify()
        assert "first" in str(error.value)
        assert "second" in str(error.value)

    def test_json_configuration_is_accepted(self, write_config):
        content = json.dumps({"version": 2, "pipeline": {"processors": []}})
        config = Configuration.from_source(write_config(content, "config.json"))
        assert config.version == "2"

    def test_as_dict_as_json_and_as_yaml(self):
        config = Configuration.from_source(path_to_config)
        config_dict = config.as_dict()
        assert "config_paths" not in config_dict
        assert config_dict["store"] == {"max_items": 100, "max_age": 0.0}
        assert json.loads(config.as_json())["pipeline"]["concurrency"] == 1
        assert yaml.load(config.as_yaml())["version"] == "1"


class TestPipelineConfig:
    def test_create_pipeline(self):
        config = PipelineConfig(
            concurrency=2, processors=[{"doubler": {"type": "numeric_processor"}}]
        )
        pipeline = config.create_pipeline()
        assert isinstance(pipeline, Pipeline)
        assert pipeline.concurrency == 2
        assert isinstance(pipeline.processors[0], NumericProcessor)

    def test_processors_must_be_mappings(self):
        with pytest.raises(TypeError):
            PipelineConfig(processors=["doubler"])


class TestStoreConfig:
    def test_create_store_with_defaults(self):
        store = StoreConfig().create_store()
        assert isinstance(store, TypedStore)
        assert store._max_items is None
        assert store._max_age is None

    def test_create_store_with_limits(self):
        store = StoreConfig(max_items=5, max_age=60).create_store()
        assert store._max_items == 5
        assert store._max_age == datetime.timedelta(seconds=60)


class TestLoggerConfig:
    def test_defaults_are_merged(self):
        config = LoggerConfig()
        assert config.loggers["root"]["level"] == "INFO"
        assert config.loggers["root"]["handlers"] == ["console"]
        assert "typedpipe" in config.formatters

    def test_level_is_set_on_root_logger(self):
        config = LoggerConfig(level="DEBUG")
        assert config.loggers["root"]["level"] == "DEBUG"
        assert config.loggers["root"]["handlers"] == ["console"]

    def test_custom_logger_levels_are_kept(self):
        config = LoggerConfig(loggers={"Pipeline": {"level": "DEBUG"}})
        assert config.loggers["Pipeline"] == {"level": "DEBUG"}
        assert config.loggers["asyncio"] == {"level": "WARNING"}

    def test_setup_logging_configures_loggers(self):
        LoggerConfig(level="ERROR", loggers={"Pipeline": {"level": "DEBUG"}}).setup_logging()
        assert logging.getLogger().level == logging.ERROR
        assert logging.getLogger("Pipeline").level == logging.DEBUG
        LoggerConfig().setup_logging()

    def test_invalid_level_is_rejected(self):
        with pytest.raises(ValueError):
            LoggerConfig(level="LOUD")


def test_read_yaml_file_reads_lists_and_mappings(write_config):
    assert read_yaml_file(write_config([1, 2, 3])) == [1, 2, 3]
    assert read_yaml_file(write_config({"a": "b"})) == {"a": "b"}
