"""IlmPolicyResource 单元测试."""

from unittest.mock import MagicMock

import pytest

from elasticstate.exceptions import ApiRequestError, ConfigValidationError
from elasticstate.ilm import IlmPolicyResource, PolicyValidationError
from elasticstate.resource import ResourceNotFoundError


@pytest.fixture
def resource(client_factory: MagicMock) -> IlmPolicyResource:
    return IlmPolicyResource(client_factory)


@pytest.fixture
def stored_policies(es_client: MagicMock) -> dict:
    """让模拟客户端像集群一样保存策略."""
    policies: dict = {}

    def put_lifecycle(name, policy):
        policies[name] = {
            "version": len(policies) + 1,
            "modified_date": "2024-01-01T00:00:00.000Z",
            "policy": policy,
        }
        return {"acknowledged": True}

    def get_lifecycle(name):
        return {name: policies[name]}

    es_client.ilm.put_lifecycle.side_effect = put_lifecycle
    es_client.ilm.get_lifecycle.side_effect = get_lifecycle
    return policies


HOT_CONFIG = {"name": "logs", "hot": [{"rollover": [{"max_age": "7d"}]}]}


class TestPut:
    """创建与更新测试."""

    def test_create(self, resource, es_client, stored_policies) -> None:
        """测试创建策略并读回状态."""
        data = resource.apply(HOT_CONFIG)
        assert data.id == "uuid-1/logs"
        es_client.ilm.put_lifecycle.assert_called_once_with(
            name="logs", policy={"phases": {"hot": {"actions": {"rollover": {"max_age": "7d"}}}}}
        )
        state = data.to_state()
        assert state["name"] == "logs"
        assert state["modified_date"] == "2024-01-01T00:00:00.000Z"
        assert state["hot"] == [{"rollover": [{"max_age": "7d"}]}]
        assert "metadata" not in state

    def test_metadata_kept_as_declared(self, resource, stored_policies) -> None:
        """测试语义相同的元数据保留声明的写法."""
        config = dict(HOT_CONFIG, metadata='{ "b": 1, "a": 2 }')
        data = resource.apply(config)
        assert data.state["metadata"] == '{ "b": 1, "a": 2 }'
        assert stored_policies["logs"]["policy"]["_meta"] == {"a": 2, "b": 1}

    def test_update_replaces_document(self, resource, es_client, stored_policies) -> None:
        """测试更新时整体替换策略文档，移除的阶段从状态中消失."""
        state = resource.apply(
            dict(HOT_CONFIG, delete=[{"min_age": "30d", "delete": [{}]}])
        ).to_state()
        assert "delete" in state
        data = resource.apply(HOT_CONFIG, state)
        assert es_client.ilm.put_lifecycle.call_count == 2
        assert "delete" not in data.state
        assert list(stored_policies["logs"]["policy"]["phases"]) == ["hot"]

    def test_rename_requires_replacement(self, resource, stored_policies) -> None:
        state = resource.apply(HOT_CONFIG).to_state()
        with pytest.raises(ConfigValidationError, match="name"):
            resource.apply(dict(HOT_CONFIG, name="other"), state)

    def test_unknown_action_fails_before_calls(self, resource, es_client, client_factory) -> None:
        """测试不支持的动作在任何远程调用之前报错."""
        config = {
            "name": "logs",
            "hot": [{"rollover": [{"max_age": "7d"}]}],
            "delete": [{"rollover": [{"max_age": "1d"}]}],
        }
        with pytest.raises(PolicyValidationError, match='"rollover" is not supported in phase "delete"'):
            resource.apply(config)
        client_factory.get_api_client.assert_not_called()
        es_client.ilm.put_lifecycle.assert_not_called()

    def test_invalid_allocate_json(self, resource, es_client) -> None:
        config = {"name": "p", "warm": [{"allocate": [{"include": "{oops"}]}]}
        with pytest.raises(ConfigValidationError):
            resource.apply(config)
        es_client.ilm.put_lifecycle.assert_not_called()

    def test_server_error(self, resource, es_client, api_error) -> None:
        es_client.ilm.put_lifecycle.side_effect = api_error(
            status=400, body={"error": {"reason": "invalid"}}
        )
        with pytest.raises(ApiRequestError, match="无法创建或更新 ILM 策略"):
            resource.apply(HOT_CONFIG)


class TestRead:
    """读取测试."""

    def test_not_found_clears_id(self, resource, es_client, not_found) -> None:
        """测试策略不存在时清空 ID 而不报错."""
        es_client.ilm.get_lifecycle.side_effect = not_found
        data = resource.new_data(HOT_CONFIG, {"id": "uuid-1/logs", "name": "logs"})
        resource.read(data)
        assert data.id == ""

    def test_disabled_toggle_drift_free(self, resource, stored_policies) -> None:
        """测试禁用开关动作后读回状态与声明一致."""
        config = {"name": "p", "warm": [{"readonly": [{"enabled": True}]}]}
        state = resource.apply(config).to_state()
        assert state["warm"] == [{"readonly": [{"enabled": True}]}]

        disabled = {"name": "p", "warm": [{"readonly": [{"enabled": False}]}]}
        data = resource.apply(disabled, state)
        assert stored_policies["p"]["policy"]["phases"]["warm"] == {"actions": {}}
        assert data.state["warm"] == [{"readonly": [{"enabled": False}]}]

    def test_refresh_without_config(self, resource, stored_policies) -> None:
        """测试仅凭已保存状态刷新."""
        state = resource.apply(
            {"name": "p", "cold": [{"freeze": [{"enabled": True}]}]}
        ).to_state()
        data = resource.new_data(state=state)
        resource.read(data)
        assert data.state["cold"] == [{"freeze": [{"enabled": True}]}]


class TestDeleteAndImport:
    """删除与导入测试."""

    def test_delete(self, resource, es_client) -> None:
        data = resource.new_data(state={"id": "uuid-1/logs", "name": "logs"})
        resource.delete(data)
        es_client.ilm.delete_lifecycle.assert_called_once_with(name="logs")
        assert data.id == ""

    def test_import(self, resource, stored_policies) -> None:
        resource.apply(dict(HOT_CONFIG, metadata='{"a":1}'))
        data = resource.import_state("uuid-1/logs")
        assert data.state["name"] == "logs"
        assert data.state["metadata"] == '{"a":1}'
        assert data.state["hot"] == [{"rollover": [{"max_age": "7d"}]}]

    def test_import_malformed(self, resource, client_factory) -> None:
        with pytest.raises(ConfigValidationError, match="错误的资源 ID"):
            resource.import_state("logs")
        client_factory.get_api_client.assert_not_called()

    def test_import_missing(self, resource, es_client, not_found) -> None:
        es_client.ilm.get_lifecycle.side_effect = not_found
        with pytest.raises(ResourceNotFoundError):
            resource.import_state("uuid-1/logs")
