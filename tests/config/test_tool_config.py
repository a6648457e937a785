import json

import pytest

from strictool.config import ConfigValidationError, FunctionToolConfig
from strictool.config.tool_config import DEFAULT_FAILURE_MESSAGE
from strictool.util.file_utils import from_json_or_yaml


def test_defaults():
    config = FunctionToolConfig()
    assert config.strict_json_schema is True
    assert config.failure_message == DEFAULT_FAILURE_MESSAGE
    assert config.tool_result_max_chars == 8000
    assert config.log_level == "INFO"
    assert FunctionToolConfig.from_dict(None) == config
    assert FunctionToolConfig.from_dict({}) == config


def test_from_dict_normalizes_values():
    config = FunctionToolConfig.from_dict(
        {
            "strict_json_schema": False,
            "failure_message": "  Tool failed.  ",
            "tool_result_max_chars": 2000,
            "log_level": "debug",
        }
    )
    assert config.strict_json_schema is False
    assert config.failure_message == "Tool failed."
    assert config.tool_result_max_chars == 2000
    assert config.log_level == "DEBUG"
    assert config.to_dict() == {
        "strict_json_schema": False,
        "failure_message": "Tool failed.",
        "tool_result_max_chars": 2000,
        "log_level": "DEBUG",
    }


@pytest.mark.parametrize(
    "data, message",
    [
        ({"strict_json_schema": "yes"}, "strict_json_schema must be a boolean"),
        ({"failure_message": ""}, "failure_message cannot be empty"),
        ({"failure_message": 3}, "failure_message must be a string"),
        ({"tool_result_max_chars": 0}, "tool_result_max_chars must be positive"),
        ({"tool_result_max_chars": True}, "tool_result_max_chars must be an integer"),
        ({"log_level": "LOUD"}, "log_level must be one of"),
        ({"timeout": 5}, "Unknown tool config keys: timeout"),
    ],
)
def test_from_dict_rejects_invalid_values(data, message):
    with pytest.raises(ConfigValidationError, match=message):
        FunctionToolConfig.from_dict(data)


def test_non_mapping_is_rejected():
    with pytest.raises(ConfigValidationError):
        FunctionToolConfig.from_dict(["strict_json_schema"])


def test_from_yaml_file_with_section(tmp_path):
    path = tmp_path / "tools.yaml"
    path.write_text(
        "tool_config:\n"
        "  strict_json_schema: false\n"
        "  failure_message: Please retry later.\n",
        encoding="utf-8",
    )

    config = FunctionToolConfig.from_file(path)
    assert config.strict_json_schema is False
    assert config.failure_message == "Please retry later."


def test_from_json_file_without_section(tmp_path):
    path = tmp_path / "tools.json"
    path.write_text(json.dumps({"tool_result_max_chars": 4000}), encoding="utf-8")

    assert FunctionToolConfig.from_file(str(path)).tool_result_max_chars == 4000


def test_config_is_frozen():
    config = FunctionToolConfig()
    with pytest.raises(AttributeError):
        config.strict_json_schema = False


# ============================================================
# File loading
# ============================================================

def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        from_json_or_yaml(tmp_path / "absent.yaml")


def test_unsupported_extension(tmp_path):
    path = tmp_path / "tools.toml"
    path.write_text("a = 1", encoding="utf-8")
    with pytest.raises(ValueError, match="Unsupported file extension"):
        from_json_or_yaml(path)


def test_empty_yaml_gives_empty_dict(tmp_path):
    path = tmp_path / "empty.yml"
    path.write_text("", encoding="utf-8")
    assert from_json_or_yaml(path) == {}


def test_top_level_list_is_rejected(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Expected a mapping"):
        from_json_or_yaml(path)
