"""ILM 策略展开模块.

将声明式阶段配置树转换为 ILM 策略请求文档。
"""

import logging
from collections.abc import Mapping
from typing import Any

from ..schema import decode_json_object
from ..typing import ConfigDict
from .exceptions import PolicyValidationError
from .models import ACTIONS, PHASE_ACTIONS, PHASES, ActionSpec, Phase, Policy

logger = logging.getLogger(__name__)


def expand_action(definition: ActionSpec, block: Mapping[str, Any] | None) -> dict[str, Any]:
    """按动作的参数白名单复制参数.

    整数 0 与空字符串视为未设置并被省略，布尔值总是复制，
    JSON 字符串参数解析为对象。

    Args:
        definition: 动作定义
        block: 动作配置块

    Returns:
        动作请求体

    Raises:
        JsonDecodeError: 当 JSON 字符串参数不合法时抛出

    Examples:
        >>> expand_action(ACTIONS["rollover"], {"max_age": "7d", "max_docs": 0})
        {'max_age': '7d'}
    """
    result: dict[str, Any] = {}
    if not block:
        return result
    for setting in definition.settings:
        value = block.get(setting)
        if value is None:
            continue
        if isinstance(value, bool):
            result[setting] = value
        elif isinstance(value, int):
            if value != 0:
                result[setting] = value
        elif isinstance(value, str):
            if value == "":
                continue
            if setting in definition.json_settings:
                result[setting] = decode_json_object(value, f"{definition.name}.{setting}")
            else:
                result[setting] = value
    return result


def check_actions(phase_name: str, block: Mapping[str, Any]) -> None:
    """检查阶段配置块中的动作名称是否都被该阶段支持.

    Raises:
        PolicyValidationError: 当阶段名称未知或出现该阶段不支持的动作时抛出
    """
    allowed = PHASE_ACTIONS.get(phase_name)
    if allowed is None:
        raise PolicyValidationError(f'不支持的阶段: "{phase_name}"')
    for action_name in block:
        if action_name == "min_age":
            continue
        if action_name not in allowed or action_name not in ACTIONS:
            raise PolicyValidationError(
                f'Configured action "{action_name}" is not supported '
                f'in phase "{phase_name}"'
            )


def expand_phase(phase_name: str, block: Mapping[str, Any]) -> Phase:
    """展开单个阶段配置块.

    Args:
        phase_name: 阶段名称
        block: 阶段配置块（min_age 与各动作的单元素列表）

    Returns:
        阶段模型

    Raises:
        PolicyValidationError: 当阶段名称未知或出现该阶段不支持的动作时抛出
    """
    check_actions(phase_name, block)

    actions: dict[str, dict[str, Any]] = {}
    for action_name, items in block.items():
        if action_name == "min_age":
            continue
        if not items:
            continue
        definition = ACTIONS[action_name]
        action = items[0]
        if definition.toggle:
            # 禁用的开关动作整体不发送
            if action is not None and action.get("enabled", True):
                actions[action_name] = expand_action(definition, action)
            continue
        actions[action_name] = expand_action(definition, action)

    return Phase(min_age=block.get("min_age") or None, actions=actions)


def expand_policy(config: ConfigDict) -> Policy:
    """展开整个 ILM 策略.

    任一阶段展开失败都会中止整个策略，不会发起远程调用。

    Args:
        config: 已校验的资源配置

    Returns:
        策略模型

    Raises:
        PolicyValidationError: 当出现不支持的动作时抛出
        JsonDecodeError: 当 metadata 或其他 JSON 参数不合法时抛出

    Examples:
        >>> policy = expand_policy(
        ...     {"name": "logs", "hot": [{"rollover": [{"max_age": "7d"}]}]}
        ... )
        >>> policy.to_dict()["phases"]
        {'hot': {'actions': {'rollover': {'max_age': '7d'}}}}
    """
    metadata = None
    if config.get("metadata"):
        metadata = decode_json_object(config["metadata"], "metadata")

    phases: dict[str, Phase] = {}
    for phase_name in PHASES:
        blocks = config.get(phase_name)
        if blocks:
            # 阶段配置块最多只有一个元素
            phases[phase_name] = expand_phase(phase_name, blocks[0] or {})

    policy = Policy(name=config["name"], metadata=metadata, phases=phases)
    logger.debug(f"展开 ILM 策略 '{policy.name}'，阶段: {list(phases)}")
    return policy
