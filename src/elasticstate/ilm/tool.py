"""ILM 策略资源处理器模块."""

import json
import logging
from collections.abc import Mapping
from typing import Any

from ..resource import Resource, ResourceData
from ..schema import json_equal, normalize_json
from .expand import check_actions, expand_policy
from .flatten import flatten_policy
from .models import PHASES, Policy
from .schema import POLICY_SCHEMA

logger = logging.getLogger(__name__)


class IlmPolicyResource(Resource):
    """ILM 策略资源处理器.

    创建与更新共用 put：整个策略文档每次都整体发送，没有局部更新语义。

    Examples:
        >>> resource = IlmPolicyResource(factory)
        >>> data = resource.apply(
        ...     {"name": "logs", "hot": [{"rollover": [{"max_age": "7d"}]}]}
        ... )
        >>> data.id
        'cluster-uuid/logs'
    """

    type_name = "elasticstack_elasticsearch_index_lifecycle"
    description = (
        "Creates or updates lifecycle policy. See: https://www.elastic.co/guide/en/"
        "elasticsearch/reference/current/ilm-put-lifecycle.html"
    )
    schema = POLICY_SCHEMA

    def validate(self, config: Mapping[str, Any]) -> dict[str, Any]:
        """校验配置，不支持的动作名称优先于通用 Schema 错误报告."""
        for phase_name in PHASES:
            for block in config.get(phase_name) or []:
                if isinstance(block, Mapping):
                    check_actions(phase_name, block)
        return super().validate(config)

    def put(self, data: ResourceData) -> ResourceData:
        """创建或整体替换 ILM 策略，完成后读取最新状态.

        策略在发起任何远程调用之前完成展开，展开失败时不会产生副作用。
        """
        policy = expand_policy(data.config or {})

        client = self.api_client(data)
        composite_id = client.composite_id(policy.name)
        body = policy.to_body()
        logger.debug(f"发送 ILM 策略到集群: {json.dumps(body)}")
        client.put_ilm_policy(policy.name, body["policy"])

        data.set_id(str(composite_id))
        return self.read(data)

    def read(self, data: ResourceData) -> ResourceData:
        """读取 ILM 策略，策略不存在时清空本地 ID."""
        composite_id = self.parse_id(data)
        policy_name = composite_id.resource_id

        client = self.api_client(data)
        definition = client.get_ilm_policy(policy_name)
        if definition is None:
            return self._clear_missing(data, f"ILM 策略 '{policy_name}'")

        policy = Policy.from_dict(policy_name, definition)
        data.set("name", policy.name)
        data.set("modified_date", definition.get("modified_date", ""))

        if policy.metadata is None:
            data.unset("metadata")
        else:
            declared, has_declared = data.get_ok("metadata")
            if has_declared and json_equal(declared, policy.metadata):
                data.set("metadata", declared)
            else:
                data.set("metadata", normalize_json(policy.metadata))

        declared_phases = {name: data.get_change(name)[1] for name in PHASES}
        phases = flatten_policy(policy, declared_phases)
        for phase_name in PHASES:
            if phase_name in phases:
                data.set(phase_name, phases[phase_name])
            else:
                data.unset(phase_name)
        return data

    def delete(self, data: ResourceData) -> ResourceData:
        """删除 ILM 策略并清空本地 ID."""
        composite_id = self.parse_id(data)
        client = self.api_client(data)
        client.delete_ilm_policy(composite_id.resource_id)
        data.set_id("")
        return data
