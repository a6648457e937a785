"""
Print the function calling schemas of tools defined in a Python module.

    strictool-schema myapp.tools:registry
    strictool-schema myapp.tools:get_weather --indent 0
"""

import importlib
import json
import logging
import sys
from typing import Any, List

import click
import yaml

from strictool.common.logger import setup_logging
from strictool.config import FunctionToolConfig
from strictool.tool import FunctionTool, ToolDefinitionError, ToolRegistry

logger = logging.getLogger(__name__)


def load_target(target: str) -> Any:
    """Import ``module:attribute`` and return the attribute."""
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise click.UsageError(f"TARGET must look like 'module:attribute', got '{target}'")

    module = importlib.import_module(module_name)
    value = module
    for part in attr.split("."):
        value = getattr(value, part)
    return value


def collect_tools(value: Any) -> List[FunctionTool]:
    if isinstance(value, FunctionTool):
        return [value]
    if isinstance(value, ToolRegistry):
        return list(value)
    if isinstance(value, (list, tuple)) and all(isinstance(item, FunctionTool) for item in value):
        return list(value)
    raise TypeError(f"expected a FunctionTool, a ToolRegistry or a list of tools, got {type(value).__name__}")


def _fail(message: str) -> None:
    logger.error(message)
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


@click.command()
@click.argument('target')
@click.option('--config', '-c', 'config_path', default=None,
              type=click.Path(exists=True, dir_okay=False),
              help='Tool config file (JSON or YAML); only its log_level is used.')
@click.option('--log-config', default=None,
              type=click.Path(exists=True, dir_okay=False),
              help='Logging dictConfig file (JSON or YAML).')
@click.option('--indent', default=2, show_default=True, type=click.IntRange(min=0),
              help='JSON indentation; 0 prints one line.')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging.')
def run(target, config_path, log_config, indent, verbose):
    """
    Export the tools named by TARGET in OpenAI function calling format.

    Tools are built when TARGET is imported, so --config cannot change their
    schemas; it only sets the console log level.
    """
    try:
        config = FunctionToolConfig.from_file(config_path) if config_path else FunctionToolConfig()
    except (ValueError, yaml.YAMLError) as e:
        _fail(f"Invalid config {config_path}: {e}")

    setup_logging(config_file_path=log_config, verbose=verbose, level=config.log_level)

    try:
        tools = collect_tools(load_target(target))
    except ToolDefinitionError as e:
        _fail(f"Tool definition in '{target}' is invalid: {e}")
    except (ImportError, AttributeError) as e:
        _fail(f"Cannot load '{target}': {e}")
    except TypeError as e:
        _fail(f"'{target}': {e}")

    logger.debug(f"Exporting {len(tools)} tool(s) from {target}")
    schemas = [tool.to_openai_tool() for tool in tools]
    click.echo(json.dumps(schemas, indent=indent or None, ensure_ascii=False))


if __name__ == "__main__":
    run()
