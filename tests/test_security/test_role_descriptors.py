"""角色描述模型与转换单元测试."""

import pytest

from elasticstate.schema import JsonDecodeError
from elasticstate.security import (
    ApiKey,
    ApiKeyInfo,
    IndexPermission,
    Role,
    RoleDescriptorError,
    expand_role_descriptors,
    flatten_role_descriptors,
)

ROLE_BLOCK = {
    "cluster": ["monitor", "all", "monitor"],
    "indices": [
        {
            "names": ["logs-*"],
            "privileges": ["read", "view_index_metadata"],
            "field_security": [{"grant": ["message", "@timestamp"], "except": []}],
            "query": '{"term": {"team": "ops"}}',
            "allow_restricted_indices": False,
        }
    ],
    "metadata": '{"version": 1}',
}

ROLE_BODY = {
    "cluster": ["all", "monitor"],
    "indices": [
        {
            "names": ["logs-*"],
            "privileges": ["read", "view_index_metadata"],
            "field_security": {"grant": ["@timestamp", "message"]},
            "query": {"term": {"team": "ops"}},
            "allow_restricted_indices": False,
        }
    ],
    "metadata": {"version": 1},
}


class TestRoleModel:
    """Role 模型测试."""

    def test_block_to_wire(self) -> None:
        """测试配置块转换为请求体，集合去重排序."""
        assert Role.from_block(ROLE_BLOCK).to_dict() == ROLE_BODY

    def test_wire_to_block(self) -> None:
        """测试响应体转换为配置块."""
        block = Role.from_dict(ROLE_BODY).to_block()
        assert block["cluster"] == ["all", "monitor"]
        assert block["indices"][0]["query"] == '{"term":{"team":"ops"}}'
        assert block["indices"][0]["field_security"] == [{"grant": ["@timestamp", "message"]}]
        assert block["metadata"] == '{"version":1}'

    def test_query_returned_as_string(self) -> None:
        """测试服务端以字符串返回查询."""
        permission = IndexPermission.from_dict(
            {"names": ["a"], "privileges": ["read"], "query": '{"match_all": {}}'}
        )
        assert permission.query == '{"match_all":{}}'

    def test_global_privileges(self) -> None:
        role = Role.from_block({"global": '{"application": {"manage": {"applications": ["*"]}}}'})
        assert role.to_dict()["global"] == {"application": {"manage": {"applications": ["*"]}}}

    def test_applications(self) -> None:
        role = Role.from_block(
            {"applications": [{"application": "kibana", "privileges": ["read"], "resources": ["*"]}]}
        )
        assert role.to_dict()["applications"] == [
            {"application": "kibana", "privileges": ["read"], "resources": ["*"]}
        ]


class TestApiKeyModels:
    """ApiKey 与 ApiKeyInfo 测试."""

    def test_api_key_body(self) -> None:
        assert ApiKey(name="k").to_dict() == {"name": "k", "role_descriptors": {}}
        body = ApiKey(name="k", expiration="1d", metadata={}).to_dict()
        assert body["expiration"] == "1d"
        assert body["metadata"] == {}

    def test_info_from_dict(self) -> None:
        info = ApiKeyInfo.from_dict({"id": "k1", "name": "n", "expiration": 1700000000000})
        assert info.invalidated is False
        assert info.metadata == {}
        assert info.role_descriptors is None


class TestExpandRoleDescriptors:
    """expand_role_descriptors 测试."""

    def test_empty(self) -> None:
        assert expand_role_descriptors(None) == {}
        assert expand_role_descriptors("") == {}
        assert expand_role_descriptors({}) == {}

    def test_json_string_opaque(self) -> None:
        """测试 JSON 字符串按原样发送."""
        value = '{"reader": {"cluster": ["monitor"], "custom": true}}'
        assert expand_role_descriptors(value) == {
            "reader": {"cluster": ["monitor"], "custom": True}
        }

    def test_nested_blocks(self) -> None:
        assert expand_role_descriptors({"reader": ROLE_BLOCK}) == {"reader": ROLE_BODY}

    def test_invalid_json(self) -> None:
        with pytest.raises(JsonDecodeError):
            expand_role_descriptors("{")

    def test_role_not_object(self) -> None:
        with pytest.raises(RoleDescriptorError, match='"reader"'):
            expand_role_descriptors('{"reader": ["monitor"]}')


class TestFlattenRoleDescriptors:
    """flatten_role_descriptors 测试."""

    def test_absent_from_server_keeps_declared(self) -> None:
        assert flatten_role_descriptors(None, '{"a": {}}') == '{"a": {}}'

    def test_string_kept_when_equal(self) -> None:
        """测试语义相同时保留声明的 JSON 字符串."""
        declared = '{ "reader": { "cluster": ["monitor"] } }'
        server = {"reader": {"cluster": ["monitor"]}}
        assert flatten_role_descriptors(server, declared) is declared

    def test_string_drift(self) -> None:
        server = {"reader": {"cluster": ["all"]}}
        assert flatten_role_descriptors(server, '{"reader": {}}') == '{"reader":{"cluster":["all"]}}'

    def test_undeclared_uses_json(self) -> None:
        assert flatten_role_descriptors({}, None) == "{}"

    def test_empty_string_matches_empty_object(self) -> None:
        """测试声明为空字符串时与空角色描述视为一致."""
        assert flatten_role_descriptors({}, "") == ""
        assert flatten_role_descriptors({"r": {}}, "") == '{"r":{}}'

    def test_nested(self) -> None:
        result = flatten_role_descriptors({"reader": ROLE_BODY}, {"reader": ROLE_BLOCK})
        assert result["reader"]["cluster"] == ["all", "monitor"]
