"""声明式 Schema 模块.

描述资源配置形状（参数、类型、校验规则、默认值），并提供配置校验与
JSON 字符串参数的处理工具。
"""

from .exceptions import JsonDecodeError, SchemaValidationError
from .models import Field, FieldType, Schema, Validator
from .tool import apply_schema, force_new_fields, is_set, values_equal
from .utils import (
    all_of,
    decode_json_object,
    int_at_least,
    json_equal,
    normalize_json,
    string_is_json,
    string_len_between,
    string_match,
)

__all__ = [
    # 模型
    "Field",
    "FieldType",
    "Schema",
    "Validator",
    # 校验
    "apply_schema",
    "force_new_fields",
    "is_set",
    "values_equal",
    # 校验函数
    "all_of",
    "int_at_least",
    "string_is_json",
    "string_len_between",
    "string_match",
    # JSON 工具
    "decode_json_object",
    "normalize_json",
    "json_equal",
    # 异常
    "SchemaValidationError",
    "JsonDecodeError",
]
