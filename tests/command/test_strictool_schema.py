import json
import textwrap

import pytest
from click.testing import CliRunner

from strictool.command.strictool_schema import collect_tools, run
from strictool.tool import ToolRegistry, function_tool


TOOLS_MODULE = textwrap.dedent(
    '''
    from typing import Literal

    from strictool.tool import ToolRegistry, function_tool


    @function_tool
    def get_weather(city: str, units: Literal["celsius", "fahrenheit"] = "celsius") -> str:
        """Get current weather for a city."""
        return city


    @function_tool
    def ping() -> str:
        """Health check."""
        return "pong"


    registry = ToolRegistry([get_weather, ping])
    not_a_tool = 42
    '''
)


@pytest.fixture
def tools_module(tmp_path, monkeypatch):
    def write(name, source=TOOLS_MODULE):
        (tmp_path / f"{name}.py").write_text(source, encoding="utf-8")
        return name

    monkeypatch.syspath_prepend(str(tmp_path))
    return write


def test_export_registry(tools_module):
    module = tools_module("cli_tools_registry")
    result = CliRunner().invoke(run, [f"{module}:registry"])

    assert result.exit_code == 0, result.output
    schemas = json.loads(result.output)
    assert [s["function"]["name"] for s in schemas] == ["get_weather", "ping"]
    assert schemas[0]["function"]["strict"] is True
    assert schemas[0]["function"]["parameters"]["required"] == ["city", "units"]


def test_export_single_tool_on_one_line(tools_module):
    module = tools_module("cli_tools_single")
    result = CliRunner().invoke(run, [f"{module}:ping", "--indent", "0"])

    assert result.exit_code == 0, result.output
    assert result.output.count("\n") == 1
    assert json.loads(result.output)[0]["function"]["description"] == "Health check."


def test_wrong_attribute_type_fails(tools_module):
    module = tools_module("cli_tools_wrong_type")
    result = CliRunner().invoke(run, [f"{module}:not_a_tool"])

    assert result.exit_code == 1
    assert "expected a FunctionTool" in result.output


def test_missing_module_fails():
    result = CliRunner().invoke(run, ["no_such_module_for_strictool:tools"])
    assert result.exit_code == 1
    assert "Cannot load" in result.output


def test_invalid_tool_definition_is_reported(tools_module):
    module = tools_module(
        "cli_tools_broken",
        "from strictool.tool import function_tool\n\n"
        "@function_tool\n"
        "def broken(city):\n"
        "    return city\n",
    )
    result = CliRunner().invoke(run, [f"{module}:broken"])

    assert result.exit_code == 1
    assert "$.city" in result.output


def test_malformed_target_is_a_usage_error():
    result = CliRunner().invoke(run, ["no_colon_here"])
    assert result.exit_code == 2


def test_invalid_config_file_fails(tools_module, tmp_path):
    module = tools_module("cli_tools_config")
    config_path = tmp_path / "tools.yaml"
    config_path.write_text("tool_config:\n  log_level: LOUD\n", encoding="utf-8")

    result = CliRunner().invoke(run, [f"{module}:ping", "--config", str(config_path)])

    assert result.exit_code == 1
    assert "log_level must be one of" in result.output


def test_config_sets_log_level_only(tools_module, tmp_path):
    module = tools_module("cli_tools_log_level")
    config_path = tmp_path / "tools.yaml"
    config_path.write_text("tool_config:\n  strict_json_schema: false\n  log_level: ERROR\n", encoding="utf-8")

    result = CliRunner().invoke(run, [f"{module}:registry", "--config", str(config_path)])

    assert result.exit_code == 0, result.output
    schemas = json.loads(result.output)
    assert all(s["function"]["strict"] is True for s in schemas)


def test_config_option_help_names_log_level():
    result = CliRunner().invoke(run, ["--help"])
    assert result.exit_code == 0
    assert "log_level" in result.output


def test_collect_tools_accepts_lists():
    @function_tool
    def noop() -> str:
        return ""

    assert collect_tools([noop]) == [noop]
    assert collect_tools(ToolRegistry([noop])) == [noop]
    with pytest.raises(TypeError):
        collect_tools([noop, "x"])
