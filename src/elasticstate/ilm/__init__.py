"""索引生命周期管理（ILM）策略资源模块.

提供 ILM 策略的声明式资源处理器，包括：
- 动作定义表（ACTIONS）与阶段动作白名单（PHASE_ACTIONS）
- 展开函数：声明配置 -> 策略请求文档
- 扁平化函数：策略响应文档 -> 声明配置
- 资源处理器（IlmPolicyResource）

示例用法:
    >>> from elasticstate.ilm import expand_policy
    >>> policy = expand_policy(
    ...     {"name": "logs", "hot": [{"rollover": [{"max_age": "7d"}]}]}
    ... )
    >>> policy.to_body()
    {'policy': {'phases': {'hot': {'actions': {'rollover': {'max_age': '7d'}}}}}}
"""

from .exceptions import PolicyError, PolicyValidationError
from .expand import check_actions, expand_action, expand_phase, expand_policy
from .flatten import declared_toggles, flatten_action, flatten_phase, flatten_policy
from .models import (
    ACTIONS,
    PHASE_ACTIONS,
    PHASES,
    TOGGLE_ACTIONS,
    ActionSpec,
    Phase,
    Policy,
    ToggleState,
)
from .schema import POLICY_SCHEMA, phase_schema
from .tool import IlmPolicyResource

__all__ = [
    # 资源处理器
    "IlmPolicyResource",
    # 模型与定义表
    "ActionSpec",
    "Phase",
    "Policy",
    "ToggleState",
    "ACTIONS",
    "PHASE_ACTIONS",
    "PHASES",
    "TOGGLE_ACTIONS",
    "POLICY_SCHEMA",
    "phase_schema",
    # 展开与扁平化
    "check_actions",
    "expand_action",
    "expand_phase",
    "expand_policy",
    "declared_toggles",
    "flatten_action",
    "flatten_phase",
    "flatten_policy",
    # 异常
    "PolicyError",
    "PolicyValidationError",
]
