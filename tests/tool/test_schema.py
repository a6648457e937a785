from dataclasses import dataclass
from enum import Enum
from typing import List, Literal, Optional, TypedDict

import pytest
from pydantic import BaseModel, ConfigDict, Field

from strictool.tool.errors import SchemaDerivationError
from strictool.tool.schema import derive_json_schema, is_record_type, record_fields


class Units(str, Enum):
    celsius = "celsius"
    fahrenheit = "fahrenheit"


class WeatherArgs(BaseModel):
    city: str = Field(description="City name.")
    units: Literal["celsius", "fahrenheit"]
    days: int = Field(1, ge=1, le=7)


class Opaque:
    pass


class Holder(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    handle: Opaque


class Outer(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    label: str
    holders: List[Holder]


class Node(BaseModel):
    value: int
    children: List["Node"] = []


def test_record_becomes_object_with_wire_names():
    class Aliased(BaseModel):
        user_id: int = Field(alias="userId")

    schema = derive_json_schema(Aliased)

    assert schema["type"] == "object"
    assert list(schema["properties"]) == ["userId"]
    assert schema["required"] == ["userId"]


def test_literal_field_becomes_enum():
    schema = derive_json_schema(WeatherArgs)
    units = schema["properties"]["units"]

    assert units["enum"] == ["celsius", "fahrenheit"]
    assert schema["properties"]["city"]["description"] == "City name."
    assert schema["properties"]["days"]["minimum"] == 1
    assert schema["properties"]["days"]["maximum"] == 7
    assert schema["required"] == ["city", "units"]


def test_enum_class_lists_allowed_values():
    class Args(BaseModel):
        units: Units

    schema = derive_json_schema(Args)
    units = schema["$defs"]["Units"]

    assert units["enum"] == ["celsius", "fahrenheit"]
    assert units["type"] == "string"


def test_zero_field_record_is_closed_object():
    class NoArgs(BaseModel):
        pass

    schema = derive_json_schema(NoArgs)

    assert schema["type"] == "object"
    assert schema["properties"] == {}
    assert schema["additionalProperties"] is False


def test_zero_field_dataclass_is_closed_object():
    @dataclass
    class Empty:
        pass

    schema = derive_json_schema(Empty)
    assert schema["properties"] == {}
    assert schema["additionalProperties"] is False


def test_dataclass_and_typeddict_are_records():
    @dataclass
    class Point:
        x: float
        y: Optional[float] = None

    class Movie(TypedDict):
        title: str
        year: int

    assert derive_json_schema(Point)["required"] == ["x"]
    assert set(derive_json_schema(Movie)["properties"]) == {"title", "year"}
    assert record_fields(Point) == [("x", float), ("y", Optional[float])]
    assert is_record_type(Movie)
    assert not is_record_type(int)
    assert not is_record_type(List[int])


def test_self_referencing_model_root_is_inlined():
    schema = derive_json_schema(Node)

    assert schema["type"] == "object"
    assert set(schema["properties"]) == {"value", "children"}
    assert "Node" in schema["$defs"]


def test_none_type_description_fails():
    with pytest.raises(SchemaDerivationError) as excinfo:
        derive_json_schema(None)
    assert excinfo.value.path == "$"


@pytest.mark.parametrize("args_type", [int, str, List[int], Optional[WeatherArgs]])
def test_non_record_type_fails(args_type):
    with pytest.raises(SchemaDerivationError) as excinfo:
        derive_json_schema(args_type)
    assert excinfo.value.path == "$"


def test_underivable_field_is_named():
    with pytest.raises(SchemaDerivationError) as excinfo:
        derive_json_schema(Holder)
    assert excinfo.value.path == "$.handle"


def test_underivable_nested_field_is_named():
    with pytest.raises(SchemaDerivationError) as excinfo:
        derive_json_schema(Outer)
    assert excinfo.value.path == "$.holders.handle"
    assert str(excinfo.value).startswith("$.holders.handle: ")
