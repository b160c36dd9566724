# pylint: disable=logging-fstring-interpolation
"""This module can be used to start typedpipe."""
import asyncio
import logging
import logging.config
import os
import sys
import warnings
from fractions import Fraction
from typing import Any, List, Tuple

import click
import msgspec
from colorama import Fore

from typedpipe.abc.processor import ProcessResult
from typedpipe.factory_error import InvalidConfigurationError
from typedpipe.framework.pipeline import Pipeline
from typedpipe.util.configuration import Configuration, read_yaml_file
from typedpipe.util.defaults import DEFAULT_LOG_CONFIG, EXITCODES
from typedpipe.util.helper import get_versions_string, print_fcolor

warnings.simplefilter("always", DeprecationWarning)
logging.captureWarnings(True)
logging.config.dictConfig(DEFAULT_LOG_CONFIG)
logger = logging.getLogger("typedpipe")


def _enc_hook(obj: Any) -> Any:
    if isinstance(obj, Fraction):
        return str(obj)
    raise NotImplementedError(f"Objects of type {type(obj)} are not supported")


_encoder = msgspec.json.Encoder(enc_hook=_enc_hook)


def _print_version(config: "Configuration") -> None:
    print(get_versions_string(config))
    sys.exit(EXITCODES.SUCCESS.value)


def _get_configuration(config_paths: Tuple[str, ...]) -> Configuration:
    try:
        config = Configuration.from_sources(config_paths)
        config.logger.setup_logging()
        logger.debug(f"Log level set to '{config.logger.level}'")
        return config
    except InvalidConfigurationError as error:
        print(f"InvalidConfigurationError: {error}", file=sys.stderr)
        sys.exit(EXITCODES.CONFIGURATION_ERROR.value)


def _result_as_dict(key: Any, value: Any, result: ProcessResult) -> dict:
    return {
        "key": key,
        "input": value,
        "success": result.success,
        "original": result.original_value,
        "processed": result.processed_value,
        "processor": result.processor_name,
        "error": result.error_message,
        "timestamp": result.processed.timestamp,
    }


def _process_inputs(
    configuration: Configuration, pipeline: Pipeline, inputs: Any
) -> List[Tuple[Any, Any, ProcessResult]]:
    if isinstance(inputs, dict):
        invalid_keys = [key for key in inputs if not isinstance(key, str)]
        if invalid_keys:
            raise InvalidConfigurationError(
                f"Input keys must be text, got {', '.join(map(repr, invalid_keys))}"
            )
        store = configuration.store.create_store()
        results = asyncio.run(pipeline.run_into(store, inputs))
        logger.info(f"Stored {len(store)} values")
        return [(key, inputs[key], result) for key, result in results.items()]
    if isinstance(inputs, list):
        results = asyncio.run(pipeline.run(inputs))
        return [
            (index, value, result) for index, (value, result) in enumerate(zip(inputs, results))
        ]
    raise InvalidConfigurationError("Inputs must be a list of values or a mapping of keys")


@click.group(name="typedpipe")
@click.version_option(version=get_versions_string(), message="%(version)s")
def cli() -> None:
    """
    typedpipe processes typed values with a pipeline of asynchronous processors and stores
    the results.
    """


@cli.command(short_help="Run the configured pipeline on a file of input values")
@click.argument("configs", nargs=-1, required=True)
@click.option(
    "--inputs",
    "-i",
    "inputs_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Yaml or json file with a list of values or a mapping of keys to values",
)
@click.option(
    "--version",
    is_flag=True,
    default=False,
    help="Print version and exit (includes also config version)",
)
def run(configs: Tuple[str, ...], inputs_path: str = None, version=None) -> None:
    """
    Run typedpipe with the given configuration and print one json line per result.

    CONFIGS are paths to configuration files.
    """
    configuration = _get_configuration(configs)
    if version:
        _print_version(configuration)
    if inputs_path is None:
        print("Missing option '--inputs'", file=sys.stderr)
        sys.exit(EXITCODES.CONFIGURATION_ERROR.value)
    logger.debug(f"Config paths: {configs}")
    pipeline = None
    try:
        inputs = read_yaml_file(inputs_path)
        pipeline = configuration.pipeline.create_pipeline()
        pipeline.setup()
        results = _process_inputs(configuration, pipeline, inputs)
    except InvalidConfigurationError as error:
        print(f"InvalidConfigurationError: {error}", file=sys.stderr)
        sys.exit(EXITCODES.CONFIGURATION_ERROR.value)
    # pylint: disable=broad-except
    except Exception as error:
        if os.environ.get("DEBUG", False):
            logger.exception(f"A critical error occurred: {error}")  # pragma: no cover
        else:
            logger.critical(f"A critical error occurred: {error}")
        sys.exit(EXITCODES.ERROR.value)
    # pylint: enable=broad-except
    finally:
        if pipeline:
            pipeline.shut_down()
    for key, value, result in results:
        click.echo(_encoder.encode(_result_as_dict(key, value, result)))
    failed = [key for key, _, result in results if not result.success]
    if failed:
        logger.error(f"Processing failed for {len(failed)} of {len(results)} inputs")
        sys.exit(EXITCODES.PIPELINE_ERROR.value)


@cli.group(name="test", short_help="Execute tests against a given configuration")
def test() -> None:
    """
    Verify the configuration.
    """


@test.command(name="config")
@click.argument("configs", nargs=-1, required=True)
def test_config(configs: Tuple[str, ...]) -> None:
    """
    Verify the configuration file

    CONFIGS are paths to configuration files.
    """
    _get_configuration(configs)
    print_fcolor(Fore.GREEN, "The verification of the configuration was successful")


@cli.command(short_help="Print the merged configuration", name="print")
@click.argument("configs", nargs=-1, required=True)
@click.option(
    "--output",
    type=click.Choice(["json", "yaml"]),
    default="yaml",
    help="What output format to use",
)
def print_config(configs: Tuple[str, ...], output) -> None:
    """
    Prints the given configuration files merged into one yaml or json document with all
    defaults filled in.

    CONFIGS are paths to configuration files.
    """
    config = _get_configuration(configs)
    if output == "json":
        print(config.as_json(indent=2))
    else:
        print(config.as_yaml())


def main():
    """Start typedpipe."""
    cli(prog_name="typedpipe")  # pylint: disable=no-value-for-parameter


if __name__ == "__main__":
    main()
