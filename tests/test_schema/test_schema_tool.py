"""声明式 Schema 校验单元测试."""

import pytest

from elasticstate.schema import (
    Field,
    FieldType,
    JsonDecodeError,
    SchemaValidationError,
    apply_schema,
    decode_json_object,
    force_new_fields,
    int_at_least,
    is_set,
    json_equal,
    normalize_json,
    string_is_json,
    string_len_between,
    string_match,
)

ITEM_SCHEMA = {
    "name": Field(FieldType.STRING, required=True),
    "enabled": Field(FieldType.BOOL, default=True),
}

SCHEMA = {
    "name": Field(FieldType.STRING, required=True, force_new=True),
    "count": Field(FieldType.INT, validators=(int_at_least(1),)),
    "tags": Field(FieldType.SET, elem=FieldType.STRING),
    "items": Field(FieldType.LIST, max_items=1, elem=ITEM_SCHEMA),
    "doc": Field(FieldType.STRING, json=True),
    "body": Field(FieldType.MAP, elem=ITEM_SCHEMA, json_string_allowed=True),
    "status": Field(FieldType.STRING, computed=True),
    "label": Field(FieldType.STRING, computed=True, optional=True),
}


class TestApplySchema:
    """apply_schema 测试."""

    def test_minimal(self) -> None:
        """测试只提供必需参数."""
        assert apply_schema(SCHEMA, {"name": "a"}) == {"name": "a"}

    def test_unknown_key(self) -> None:
        """测试不支持的参数."""
        with pytest.raises(SchemaValidationError, match="不支持的参数: other"):
            apply_schema(SCHEMA, {"name": "a", "other": 1})

    def test_nested_unknown_key_path(self) -> None:
        """测试嵌套参数的错误路径."""
        with pytest.raises(SchemaValidationError, match="items.0.bad"):
            apply_schema(SCHEMA, {"name": "a", "items": [{"name": "x", "bad": 1}]})

    def test_missing_required(self) -> None:
        """测试缺少必需参数."""
        with pytest.raises(SchemaValidationError, match="缺少必需参数: name"):
            apply_schema(SCHEMA, {})

    def test_nested_defaults(self) -> None:
        """测试嵌套块填充默认值."""
        result = apply_schema(SCHEMA, {"name": "a", "items": [{"name": "x"}]})
        assert result["items"] == [{"name": "x", "enabled": True}]

    def test_bool_is_not_int(self) -> None:
        """测试布尔值不视为整数."""
        with pytest.raises(SchemaValidationError, match="应为 int 类型"):
            apply_schema(SCHEMA, {"name": "a", "count": True})

    def test_validator(self) -> None:
        """测试附加校验函数."""
        with pytest.raises(SchemaValidationError, match="count: 应不小于 1"):
            apply_schema(SCHEMA, {"name": "a", "count": 0})

    def test_max_items(self) -> None:
        """测试最大元素数."""
        with pytest.raises(SchemaValidationError, match="最多允许 1 个元素"):
            apply_schema(SCHEMA, {"name": "a", "items": [{"name": "x"}, {"name": "y"}]})

    def test_set_sorted_and_deduplicated(self) -> None:
        """测试集合去重并排序."""
        result = apply_schema(SCHEMA, {"name": "a", "tags": ["b", "a", "b"]})
        assert result["tags"] == ["a", "b"]

    def test_invalid_json_string(self) -> None:
        """测试 JSON 字符串参数校验."""
        with pytest.raises(SchemaValidationError, match="doc: 不是合法的 JSON"):
            apply_schema(SCHEMA, {"name": "a", "doc": "{bad"})

    def test_map_accepts_json_string(self) -> None:
        """测试映射参数接受 JSON 字符串."""
        result = apply_schema(SCHEMA, {"name": "a", "body": '{"x": {}}'})
        assert result["body"] == '{"x": {}}'

    def test_map_of_blocks(self) -> None:
        """测试映射参数按块校验."""
        result = apply_schema(SCHEMA, {"name": "a", "body": {"r": {"name": "n"}}})
        assert result["body"] == {"r": {"name": "n", "enabled": True}}

    def test_read_only_rejected(self) -> None:
        """测试只读计算参数不能设置."""
        with pytest.raises(SchemaValidationError, match="只读参数"):
            apply_schema(SCHEMA, {"name": "a", "status": "x"})

    def test_optional_computed_accepted(self) -> None:
        """测试可选计算参数可以设置."""
        assert apply_schema(SCHEMA, {"name": "a", "label": "x"})["label"] == "x"

    def test_at_least_one_of(self) -> None:
        """测试至少设置一个参数."""
        schema = {
            "a": Field(FieldType.STRING, at_least_one_of=("a", "b")),
            "b": Field(FieldType.STRING, at_least_one_of=("a", "b")),
        }
        assert apply_schema(schema, {"b": "x"}) == {"b": "x"}
        with pytest.raises(SchemaValidationError, match="至少需要设置以下参数之一: a, b"):
            apply_schema(schema, {})

    def test_default_not_shared(self) -> None:
        """测试默认值为深拷贝."""
        schema = {"tags": Field(FieldType.LIST, default=["a"])}
        first = apply_schema(schema, {})
        first["tags"].append("b")
        assert apply_schema(schema, {}) == {"tags": ["a"]}


class TestForceNew:
    """force_new_fields 测试."""

    def test_changed(self) -> None:
        """测试不可变参数变化."""
        assert force_new_fields(SCHEMA, {"name": "a"}, {"name": "b"}) == ["name"]

    def test_unchanged_or_new(self) -> None:
        """测试未变化或首次创建."""
        assert force_new_fields(SCHEMA, {"name": "a"}, {"name": "a"}) == []
        assert force_new_fields(SCHEMA, {}, {"name": "a"}) == []


class TestValidators:
    """校验函数测试."""

    def test_string_is_json(self) -> None:
        assert string_is_json('{"a": 1}') is None
        assert string_is_json("") is None
        assert string_is_json("{bad") is not None
        assert string_is_json(1) is not None

    def test_string_len_between(self) -> None:
        validate = string_len_between(1, 3)
        assert validate("abc") is None
        assert validate("") is not None
        assert validate("abcd") is not None

    def test_string_match_full(self) -> None:
        """测试正则整串匹配."""
        validate = string_match(r"[a-z]+", "only lowercase")
        assert validate("abc") is None
        assert validate("abc1") == "only lowercase"

    def test_is_set(self) -> None:
        assert not is_set(None)
        assert not is_set([])
        assert not is_set("")
        assert is_set(False)
        assert is_set(0)


class TestJsonUtils:
    """JSON 工具测试."""

    def test_decode_json_object(self) -> None:
        assert decode_json_object('{"a": 1}', "doc") == {"a": 1}

    def test_decode_invalid(self) -> None:
        with pytest.raises(JsonDecodeError, match="metadata 不是合法的 JSON"):
            decode_json_object("{", "metadata")

    def test_decode_not_object(self) -> None:
        with pytest.raises(JsonDecodeError, match="应为 JSON 对象"):
            decode_json_object("[1]", "metadata")

    def test_normalize(self) -> None:
        assert normalize_json({"b": 1, "a": [1, 2]}) == '{"a":[1,2],"b":1}'
        assert normalize_json('{ "b": 1, "a": 2 }') == '{"a":2,"b":1}'

    def test_json_equal(self) -> None:
        assert json_equal('{"a": 1, "b": 2}', {"b": 2, "a": 1})
        assert not json_equal('{"a": 1}', '{"a": 2}')
        assert json_equal(None, "")
        assert not json_equal(None, "{}")
