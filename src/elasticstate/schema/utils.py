"""声明式 Schema 工具函数模块.

提供参数校验函数以及 JSON 字符串参数的解析、规范化与语义比较。
"""

import json
import re
from typing import Any

from .exceptions import JsonDecodeError
from .models import Validator


def string_is_json(value: Any) -> str | None:
    """校验字符串是否为合法 JSON.

    Examples:
        >>> string_is_json('{"a": 1}') is None
        True
        >>> string_is_json("{bad") is not None
        True
    """
    if not isinstance(value, str):
        return f"应为字符串，当前类型: {type(value).__name__}"
    if value == "":
        return None
    try:
        json.loads(value)
    except ValueError as e:
        return f"不是合法的 JSON: {e}"
    return None


def string_len_between(min_len: int, max_len: int) -> Validator:
    """构造字符串长度校验函数（闭区间）."""

    def _validate(value: Any) -> str | None:
        if not isinstance(value, str):
            return f"应为字符串，当前类型: {type(value).__name__}"
        if not min_len <= len(value) <= max_len:
            return f"长度应在 {min_len} 到 {max_len} 之间，当前长度: {len(value)}"
        return None

    return _validate


def string_match(pattern: str | re.Pattern, message: str) -> Validator:
    """构造正则整串匹配校验函数."""
    compiled = re.compile(pattern) if isinstance(pattern, str) else pattern

    def _validate(value: Any) -> str | None:
        if not isinstance(value, str) or compiled.fullmatch(value) is None:
            return message
        return None

    return _validate


def int_at_least(minimum: int) -> Validator:
    """构造整数下限校验函数."""

    def _validate(value: Any) -> str | None:
        if value < minimum:
            return f"应不小于 {minimum}，当前值: {value}"
        return None

    return _validate


def all_of(*validators: Validator) -> tuple[Validator, ...]:
    """组合多个校验函数，按顺序执行."""
    return tuple(validators)


def decode_json_object(value: str, attribute: str) -> dict[str, Any]:
    """将 JSON 字符串参数解析为对象.

    Args:
        value: JSON 字符串
        attribute: 参数名，用于错误信息

    Returns:
        解析后的字典

    Raises:
        JsonDecodeError: 当字符串不是合法 JSON 或不是 JSON 对象时抛出
    """
    try:
        decoded = json.loads(value)
    except (TypeError, ValueError) as e:
        raise JsonDecodeError(f"{attribute} 不是合法的 JSON: {e}") from e
    if not isinstance(decoded, dict):
        raise JsonDecodeError(
            f"{attribute} 应为 JSON 对象，当前类型: {type(decoded).__name__}"
        )
    return decoded


def normalize_json(value: Any) -> str:
    """将 JSON 值输出为规范化字符串（键排序，紧凑分隔符）.

    Args:
        value: JSON 字符串或已解析的值

    Returns:
        规范化后的 JSON 字符串
    """
    if isinstance(value, str):
        value = json.loads(value)
    return json.dumps(value, sort_keys=True, separators=(",", ":"))


def json_equal(left: Any, right: Any) -> bool:
    """按语义比较两个 JSON 值，忽略键顺序和空白差异.

    任一侧无法解析时退化为原值比较。

    Examples:
        >>> json_equal('{"a": 1, "b": 2}', '{"b":2,"a":1}')
        True
    """
    if left in (None, "") or right in (None, ""):
        return left in (None, "") and right in (None, "")
    try:
        return normalize_json(left) == normalize_json(right)
    except (TypeError, ValueError):
        return left == right
