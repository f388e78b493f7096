"""Tests for input-schema argument models."""

import pytest
from pydantic import ValidationError

from playmcp.tools.schema import ToolArguments, build_arguments_model

_SCREENSHOT_SCHEMA = {
    "type": "object",
    "properties": {
        "path": {"type": "string"},
        "type": {"type": "string", "enum": ["viewport", "element", "page"]},
        "selector": {"type": "string"},
    },
    "required": ["path"],
}


class TestBuildArgumentsModel:
    def test_model_name_and_base(self) -> None:
        model = build_arguments_model("getPageText", {"type": "object", "properties": {}})
        assert model.__name__ == "GetPageTextArguments"
        assert issubclass(model, ToolArguments)

    def test_required_field_missing(self) -> None:
        model = build_arguments_model("screenshot", _SCREENSHOT_SCHEMA)
        with pytest.raises(ValidationError, match="path"):
            model.model_validate({})

    def test_optional_fields_unset(self) -> None:
        model = build_arguments_model("screenshot", _SCREENSHOT_SCHEMA)
        args = model.model_validate({"path": "/tmp/a.png"})
        assert args.model_dump(exclude_unset=True) == {"path": "/tmp/a.png"}

    def test_enum_enforced(self) -> None:
        model = build_arguments_model("screenshot", _SCREENSHOT_SCHEMA)
        assert model.model_validate({"path": "p", "type": "page"}).type == "page"
        with pytest.raises(ValidationError):
            model.model_validate({"path": "p", "type": "fullscreen"})

    def test_string_is_strict(self) -> None:
        model = build_arguments_model("navigate", {"properties": {"url": {"type": "string"}}, "required": ["url"]})
        with pytest.raises(ValidationError):
            model.model_validate({"url": 123})

    def test_number_accepts_int_and_float_but_not_string(self) -> None:
        schema = {"properties": {"x": {"type": "number"}, "y": {"type": "number"}}, "required": ["x", "y"]}
        model = build_arguments_model("moveMouse", schema)
        args = model.model_validate({"x": 10, "y": 2.5})
        assert args.model_dump() == {"x": 10, "y": 2.5}
        with pytest.raises(ValidationError):
            model.model_validate({"x": "10", "y": 1})

    def test_boolean_is_strict(self) -> None:
        model = build_arguments_model("openBrowser", {"properties": {"headless": {"type": "boolean"}}})
        assert model.model_validate({"headless": True}).headless is True
        with pytest.raises(ValidationError):
            model.model_validate({"headless": "yes"})

    def test_integer_rejects_float(self) -> None:
        model = build_arguments_model("t", {"properties": {"n": {"type": "integer"}}, "required": ["n"]})
        with pytest.raises(ValidationError):
            model.model_validate({"n": 1.5})

    def test_object_and_array(self) -> None:
        schema = {"properties": {"o": {"type": "object"}, "a": {"type": "array"}}}
        model = build_arguments_model("t", schema)
        args = model.model_validate({"o": {"k": 1}, "a": [1, "x"]})
        assert args.model_dump(exclude_unset=True) == {"o": {"k": 1}, "a": [1, "x"]}

    def test_type_union(self) -> None:
        model = build_arguments_model("t", {"properties": {"v": {"type": ["string", "number"]}}})
        assert model.model_validate({"v": "a"}).v == "a"
        assert model.model_validate({"v": 3}).v == 3

    def test_unknown_type_accepts_anything(self) -> None:
        model = build_arguments_model("t", {"properties": {"v": {"type": "mystery"}}})
        assert model.model_validate({"v": [1]}).v == [1]

    def test_undeclared_fields_dropped(self) -> None:
        model = build_arguments_model("t", {"properties": {}})
        assert model.model_validate({"extra": 1}).model_dump() == {}
