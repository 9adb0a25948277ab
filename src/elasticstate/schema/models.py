"""声明式 Schema 数据模型定义模块.

提供描述资源配置形状的模型，包括：
- FieldType: 参数类型枚举
- Field: 单个参数定义
- Schema: 参数名到参数定义的映射
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Union


class FieldType(Enum):
    """参数类型枚举."""

    STRING = "string"
    INT = "int"
    BOOL = "bool"
    LIST = "list"
    SET = "set"
    MAP = "map"


# 校验函数：返回错误描述，校验通过时返回 None
Validator = Callable[[Any], Union[str, None]]


@dataclass(frozen=True)
class Field:
    """参数定义模型.

    Attributes:
        type: 参数类型
        description: 参数说明
        required: 是否必需
        computed: 是否由服务端计算（非 optional 的 computed 参数不允许用户设置）
        optional: 与 computed 同时使用时表示用户可设置
        default: 默认值（仅对标量有效）
        force_new: 值变化时是否需要重建资源
        sensitive: 是否为敏感信息
        max_items: 列表/集合/映射的最大元素数
        min_items: 列表/集合/映射的最小元素数
        elem: 元素定义，嵌套块使用 Schema，基本类型集合使用 FieldType
        validators: 额外校验函数
        at_least_one_of: 至少需要设置其中一个的参数名
        json: 值是否为 JSON 字符串（比较时按语义相等）
        json_string_allowed: MAP 类型是否也接受 JSON 编码的字符串
    """

    type: FieldType
    description: str = ""
    required: bool = False
    computed: bool = False
    optional: bool = False
    default: Any = None
    force_new: bool = False
    sensitive: bool = False
    max_items: int | None = None
    min_items: int | None = None
    elem: "Schema | FieldType | None" = None
    validators: tuple[Validator, ...] = field(default_factory=tuple)
    at_least_one_of: tuple[str, ...] = field(default_factory=tuple)
    json: bool = False
    json_string_allowed: bool = False

    @property
    def read_only(self) -> bool:
        """是否为只读（纯计算）参数."""
        return self.computed and not self.optional and not self.required

    @property
    def is_block(self) -> bool:
        """是否为嵌套配置块."""
        return isinstance(self.elem, dict)


Schema = Dict[str, Field]
