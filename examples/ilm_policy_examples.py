#!/usr/bin/env python
"""
ILM 策略展开与扁平化示例.

演示不连接集群时的声明式配置处理，包括:
- Schema 校验与默认值填充
- 展开为 PUT _ilm/policy 请求体
- 开关动作（readonly / freeze / unfollow）的启用与禁用
- 将集群返回的策略扁平化回声明式配置
- 角色描述与集群设置的展开
"""

import json

from elasticstate.cluster import expand_cluster_settings
from elasticstate.ilm import POLICY_SCHEMA, Policy, expand_policy, flatten_policy
from elasticstate.schema import apply_schema
from elasticstate.security import expand_role_descriptors


def print_body(title: str, body) -> None:
    """打印请求体."""
    print(f"\n{'=' * 60}")
    print(f"📄 {title}")
    print("=" * 60)
    print(json.dumps(body, indent=2, ensure_ascii=False))


# ============================================================
# 1. ILM 策略
# ============================================================


def example_hot_rollover():
    """hot 阶段按时间滚动."""
    config = apply_schema(
        POLICY_SCHEMA,
        {"name": "logs", "hot": [{"rollover": [{"max_age": "7d", "max_docs": 0}]}]},
    )
    print_body("hot 阶段 rollover（max_docs = 0 被省略）", expand_policy(config).to_body())


def example_full_lifecycle():
    """完整的热-温-冷-删除生命周期."""
    config = apply_schema(
        POLICY_SCHEMA,
        {
            "name": "logs",
            "metadata": json.dumps({"owner": "ops"}),
            "hot": [
                {
                    "set_priority": [{"priority": 100}],
                    "rollover": [{"max_primary_shard_size": "50gb"}],
                }
            ],
            "warm": [
                {
                    "min_age": "7d",
                    "readonly": [{}],
                    "allocate": [{"number_of_replicas": 1, "require": '{"data": "warm"}'}],
                    "forcemerge": [{"max_num_segments": 1}],
                }
            ],
            "cold": [{"min_age": "30d", "freeze": [{"enabled": False}]}],
            "delete": [{"min_age": "90d", "delete": [{}]}],
        },
    )
    print_body("完整生命周期（freeze 已禁用，不发送）", expand_policy(config).to_body())


def example_flatten():
    """把集群返回的策略扁平化回声明式配置."""
    declared = apply_schema(
        POLICY_SCHEMA,
        {"name": "logs", "warm": [{"readonly": [{"enabled": False}], "migrate": [{}]}]},
    )
    remote = Policy.from_dict("logs", expand_policy(declared).to_body())
    print_body("扁平化结果（禁用的 readonly 被重建）", flatten_policy(remote, declared))


# ============================================================
# 2. API Key 角色描述与集群设置
# ============================================================


def example_role_descriptors():
    """嵌套角色块展开为请求体."""
    body = expand_role_descriptors(
        {
            "reader": {
                "cluster": ["monitor"],
                "indices": [{"names": ["logs-*"], "privileges": ["read"]}],
            }
        }
    )
    print_body("角色描述", body)


def example_cluster_settings():
    """移除的集群设置以 null 发送."""
    previous = {"persistent": [{"setting": [{"name": "a", "value": "1"}, {"name": "b", "value": "2"}]}]}
    declared = {"persistent": [{"setting": [{"name": "a", "value": "1"}]}]}
    print_body("集群设置", expand_cluster_settings(previous, declared))


if __name__ == "__main__":
    example_hot_rollover()
    example_full_lifecycle()
    example_flatten()
    example_role_descriptors()
    example_cluster_settings()
