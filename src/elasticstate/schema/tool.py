"""声明式 Schema 校验工具模块.

apply_schema 校验用户提供的配置树并返回填充默认值后的规范化副本，
force_new_fields 找出需要重建资源的不可变参数变更。
"""

import copy
import logging
from collections.abc import Mapping
from typing import Any

from .exceptions import SchemaValidationError
from .models import Field, FieldType, Schema
from .utils import json_equal, string_is_json

logger = logging.getLogger(__name__)

_SCALAR_TYPES: dict[FieldType, tuple[type, ...]] = {
    FieldType.STRING: (str,),
    FieldType.INT: (int,),
    FieldType.BOOL: (bool,),
}

_COLLECTION_TYPES = (list, tuple, set, frozenset)


def _join(path: str, name: str | int) -> str:
    return f"{path}.{name}" if path else str(name)


def _check_scalar(field_type: FieldType, value: Any, path: str) -> Any:
    """校验标量类型，布尔值不视为整数."""
    expected = _SCALAR_TYPES[field_type]
    if not isinstance(value, expected) or (
        field_type is FieldType.INT and isinstance(value, bool)
    ):
        raise SchemaValidationError(
            f"{path}: 应为 {field_type.value} 类型，当前类型: {type(value).__name__}"
        )
    return value


def is_set(value: Any) -> bool:
    """判断参数是否已设置（None 与空集合视为未设置）."""
    if value is None:
        return False
    if isinstance(value, (str, Mapping, *_COLLECTION_TYPES)):
        return len(value) > 0
    return True


def _apply_field(fld: Field, value: Any, path: str) -> Any:
    if fld.type in _SCALAR_TYPES:
        value = _check_scalar(fld.type, value, path)
        if fld.json:
            error = string_is_json(value)
            if error:
                raise SchemaValidationError(f"{path}: {error}")
    elif fld.type in (FieldType.LIST, FieldType.SET):
        if not isinstance(value, _COLLECTION_TYPES):
            raise SchemaValidationError(
                f"{path}: 应为列表，当前类型: {type(value).__name__}"
            )
        value = _apply_collection(fld, list(value), path)
    elif fld.type is FieldType.MAP:
        if isinstance(value, str) and fld.json_string_allowed:
            error = string_is_json(value)
            if error:
                raise SchemaValidationError(f"{path}: {error}")
        elif not isinstance(value, Mapping):
            raise SchemaValidationError(
                f"{path}: 应为映射，当前类型: {type(value).__name__}"
            )
        else:
            value = _apply_mapping(fld, value, path)

    for validator in fld.validators:
        error = validator(value)
        if error:
            raise SchemaValidationError(f"{path}: {error}")
    return value


def _check_size(fld: Field, size: int, path: str) -> None:
    if fld.max_items is not None and size > fld.max_items:
        raise SchemaValidationError(
            f"{path}: 最多允许 {fld.max_items} 个元素，当前: {size}"
        )
    if fld.min_items is not None and size < fld.min_items:
        raise SchemaValidationError(
            f"{path}: 至少需要 {fld.min_items} 个元素，当前: {size}"
        )


def _apply_collection(fld: Field, items: list[Any], path: str) -> list[Any]:
    _check_size(fld, len(items), path)
    result: list[Any] = []
    for index, item in enumerate(items):
        item_path = _join(path, index)
        if fld.is_block:
            result.append(apply_schema(fld.elem, item or {}, item_path))
        elif isinstance(fld.elem, FieldType):
            result.append(_check_scalar(fld.elem, item, item_path))
        else:
            result.append(item)
    if fld.type is FieldType.SET and not fld.is_block:
        # 集合语义：去重并排序，保证比较与请求体稳定
        result = sorted(set(result))
    return result


def _apply_mapping(fld: Field, value: Mapping[str, Any], path: str) -> dict[str, Any]:
    _check_size(fld, len(value), path)
    result: dict[str, Any] = {}
    for key, item in value.items():
        item_path = _join(path, key)
        if fld.is_block:
            result[key] = apply_schema(fld.elem, item or {}, item_path)
        elif isinstance(fld.elem, FieldType):
            result[key] = _check_scalar(fld.elem, item, item_path)
        else:
            result[key] = item
    return result


def apply_schema(schema: Schema, config: Mapping[str, Any], path: str = "") -> dict[str, Any]:
    """按 Schema 校验配置树并填充默认值.

    Args:
        schema: Schema 定义
        config: 用户配置
        path: 当前配置块路径，用于错误信息

    Returns:
        规范化后的配置副本，未设置且无默认值的参数不出现在结果中

    Raises:
        SchemaValidationError: 当配置不符合 Schema 时抛出

    Examples:
        >>> schema = {"enabled": Field(FieldType.BOOL, default=True)}
        >>> apply_schema(schema, {})
        {'enabled': True}
    """
    if not isinstance(config, Mapping):
        raise SchemaValidationError(
            f"{path or '<root>'}: 应为配置块，当前类型: {type(config).__name__}"
        )

    unknown = sorted(set(config) - set(schema))
    if unknown:
        raise SchemaValidationError(f"不支持的参数: {_join(path, unknown[0])}")

    result: dict[str, Any] = {}
    for name, fld in schema.items():
        attr_path = _join(path, name)
        value = config.get(name)
        if value is None:
            if fld.required:
                raise SchemaValidationError(f"缺少必需参数: {attr_path}")
            if fld.default is not None:
                result[name] = copy.deepcopy(fld.default)
            continue
        if fld.read_only:
            raise SchemaValidationError(f"{attr_path}: 只读参数，不能在配置中设置")
        result[name] = _apply_field(fld, value, attr_path)

    for name, fld in schema.items():
        if fld.at_least_one_of and not any(
            is_set(result.get(other)) for other in fld.at_least_one_of
        ):
            names = ", ".join(fld.at_least_one_of)
            raise SchemaValidationError(
                f"{path or '<root>'}: 至少需要设置以下参数之一: {names}"
            )

    return result


def values_equal(fld: Field, left: Any, right: Any) -> bool:
    """按参数定义比较两个值，JSON 参数按语义比较."""
    if fld.json:
        return json_equal(left, right)
    return left == right


def force_new_fields(
    schema: Schema,
    old: Mapping[str, Any] | None,
    new: Mapping[str, Any] | None,
) -> list[str]:
    """找出值发生变化的不可变参数.

    Args:
        schema: Schema 定义
        old: 已保存的状态
        new: 新的声明配置

    Returns:
        需要重建资源的参数名列表
    """
    if not old or not new:
        return []
    changed = [
        name
        for name, fld in schema.items()
        if fld.force_new
        and old.get(name) is not None
        and not values_equal(fld, old.get(name), new.get(name))
    ]
    if changed:
        logger.debug(f"不可变参数发生变化: {changed}")
    return changed
