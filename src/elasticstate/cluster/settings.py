"""集群设置展开与扁平化模块.

集群设置采用局部更新语义：只发送本资源管理的设置，
移除设置通过将其值显式设为 null 完成。
"""

from collections.abc import Iterable, Mapping
from typing import Any

from ..typing import BlockList, ConfigDict, SettingsDict
from .exceptions import ClusterSettingsValidationError
from .schema import GROUPS


def _settings(blocks: BlockList | None) -> list[ConfigDict]:
    if not blocks:
        return []
    return list((blocks[0] or {}).get("setting") or [])


def setting_names(blocks: BlockList | None) -> list[str]:
    """返回分组配置块中声明的设置名称."""
    return [setting["name"] for setting in _settings(blocks) if setting.get("name")]


def expand_settings(blocks: BlockList | None) -> SettingsDict:
    """展开单个分组的设置.

    Args:
        blocks: 分组配置块列表（最多一个元素）

    Returns:
        设置名称到值（字符串或字符串列表）的映射

    Raises:
        ClusterSettingsValidationError: 当设置条目不满足 value / value_list
            二选一，或名称重复时抛出

    Examples:
        >>> expand_settings([{"setting": [{"name": "a", "value": "1"}]}])
        {'a': '1'}
    """
    result: SettingsDict = {}
    for setting in _settings(blocks):
        name = setting.get("name")
        value = setting.get("value")
        value_list = setting.get("value_list")
        has_value = value not in (None, "")
        has_list = bool(value_list)
        if has_value == has_list:
            raise ClusterSettingsValidationError(
                f'设置 "{name}" 必须且只能提供 value 或 value_list 之一'
            )
        if name in result:
            raise ClusterSettingsValidationError(f'设置 "{name}" 重复声明')
        result[name] = value if has_value else list(value_list)
    return result


def expand_cluster_settings(
    previous: Mapping[str, Any] | None,
    declared: Mapping[str, Any] | None,
) -> dict[str, SettingsDict]:
    """展开 persistent 与 transient 两个分组，并为已移除的设置填入 None.

    Args:
        previous: 已保存的状态
        declared: 新的声明配置

    Returns:
        {"persistent": {...}, "transient": {...}}
    """
    previous = previous or {}
    declared = declared or {}
    groups: dict[str, SettingsDict] = {}
    for group in GROUPS:
        settings = expand_settings(declared.get(group))
        for name in setting_names(previous.get(group)):
            if name not in settings:
                settings[name] = None
        groups[group] = settings
    return groups


def _to_str(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def flatten_settings(
    server: Mapping[str, Any] | None,
    names: Iterable[str],
) -> BlockList | None:
    """将服务端扁平设置转换回分组配置块.

    只输出本资源管理的设置，服务端不存在的设置被省略。

    Args:
        server: 服务端该分组的扁平设置
        names: 本资源管理的设置名称

    Returns:
        分组配置块列表，没有任何受管理设置时返回 None
    """
    server = server or {}
    settings: list[ConfigDict] = []
    for name in sorted(set(names)):
        if name not in server:
            continue
        value = server[name]
        if isinstance(value, list):
            settings.append({"name": name, "value_list": [_to_str(v) for v in value]})
        else:
            settings.append({"name": name, "value": _to_str(value)})
    if not settings:
        return None
    return [{"setting": settings}]
