"""ILM 策略扁平化模块.

将服务端返回的策略文档转换回声明式阶段配置树。

服务端对禁用的开关动作（readonly、freeze、unfollow）不返回任何内容，
因此需要结合声明配置中各开关动作的状态重建 ``enabled = false`` 配置块，
否则 "显式禁用" 与 "从未配置" 无法区分，每次对比都会产生差异。
"""

import logging
from collections.abc import Mapping
from typing import Any

from ..schema import normalize_json
from ..typing import BlockList
from .models import ACTIONS, TOGGLE_ACTIONS, ActionSpec, Phase, Policy, ToggleState

logger = logging.getLogger(__name__)


def declared_toggles(block: Mapping[str, Any] | None) -> dict[str, ToggleState]:
    """计算声明的阶段配置块中每个开关动作的状态.

    Args:
        block: 声明的阶段配置块，None 表示该阶段未声明

    Returns:
        开关动作名称到 ToggleState 的映射

    Examples:
        >>> declared_toggles({"readonly": [{"enabled": False}]})["readonly"]
        <ToggleState.DISABLED: 'disabled'>
    """
    states: dict[str, ToggleState] = {}
    for name in TOGGLE_ACTIONS:
        items = (block or {}).get(name)
        if not items:
            states[name] = ToggleState.UNSET
            continue
        item = items[0] or {}
        states[name] = (
            ToggleState.ENABLED if item.get("enabled", True) else ToggleState.DISABLED
        )
    return states


def flatten_action(definition: ActionSpec, settings: Mapping[str, Any]) -> dict[str, Any]:
    """扁平化单个动作，仅保留 Schema 中定义的参数."""
    block: dict[str, Any] = {}
    for name in definition.fields:
        if name not in settings:
            continue
        value = settings[name]
        if name in definition.json_settings:
            value = normalize_json(value)
        block[name] = value
    return block


def flatten_phase(
    phase_name: str,
    phase: Phase,
    toggles: Mapping[str, ToggleState] | None = None,
) -> BlockList:
    """扁平化单个阶段.

    Args:
        phase_name: 阶段名称
        phase: 服务端返回的阶段
        toggles: 声明配置中各开关动作的状态

    Returns:
        单元素列表形式的阶段配置块
    """
    toggles = toggles or {}
    block: dict[str, Any] = {}

    # 声明过但服务端已不存在的开关动作视为显式禁用
    for name in TOGGLE_ACTIONS:
        if toggles.get(name, ToggleState.UNSET) is not ToggleState.UNSET:
            block[name] = [{"enabled": False}]

    if phase.min_age:
        block["min_age"] = phase.min_age

    for action_name, settings in phase.actions.items():
        definition = ACTIONS.get(action_name)
        if definition is None:
            logger.warning(f"阶段 '{phase_name}' 中存在不支持的动作 '{action_name}'，已忽略")
            continue
        if definition.toggle:
            block[action_name] = [{"enabled": True}]
        else:
            block[action_name] = [flatten_action(definition, settings)]

    return [block]


def flatten_policy(
    policy: Policy,
    declared: Mapping[str, Any] | None = None,
) -> dict[str, BlockList]:
    """扁平化服务端策略的所有阶段.

    Args:
        policy: 服务端返回的策略
        declared: 阶段名称到声明的阶段配置块列表的映射

    Returns:
        阶段名称到阶段配置块列表的映射，仅包含服务端存在的阶段
    """
    declared = declared or {}
    result: dict[str, BlockList] = {}
    for phase_name, phase in policy.phases.items():
        blocks = declared.get(phase_name)
        toggles = declared_toggles(blocks[0] if blocks else None)
        result[phase_name] = flatten_phase(phase_name, phase, toggles)
    return result
