"""角色描述展开与扁平化模块.

role_descriptors 支持两种声明方式：
- JSON 编码的字符串：按原样作为不透明对象发送
- 以角色名称为键的嵌套角色配置块：逐项转换为角色描述请求体

两种方式都允许空映射，且只有映射语义（与键顺序无关）。
"""

from collections.abc import Mapping
from typing import Any

from ..schema import decode_json_object, json_equal, normalize_json
from .exceptions import RoleDescriptorError
from .models import Role


def expand_role_descriptors(value: str | Mapping[str, Any] | None) -> dict[str, Any]:
    """展开 role_descriptors 参数为请求体.

    Args:
        value: JSON 字符串或嵌套角色配置块映射

    Returns:
        角色名称到角色描述请求体的映射

    Raises:
        JsonDecodeError: 当 JSON 字符串不合法时抛出
        RoleDescriptorError: 当某个角色的描述不是 JSON 对象时抛出

    Examples:
        >>> expand_role_descriptors('{"reader": {"cluster": ["monitor"]}}')
        {'reader': {'cluster': ['monitor']}}
        >>> expand_role_descriptors({})
        {}
    """
    if value is None or value == "":
        return {}
    if isinstance(value, str):
        descriptors = decode_json_object(value, "role_descriptors")
        for name, body in descriptors.items():
            if not isinstance(body, dict):
                raise RoleDescriptorError(
                    f'角色 "{name}" 的描述应为 JSON 对象，当前类型: {type(body).__name__}'
                )
        return descriptors
    return {name: Role.from_block(block or {}).to_dict() for name, block in value.items()}


def flatten_role_descriptors(
    server: Mapping[str, Any] | None,
    declared: str | Mapping[str, Any] | None,
) -> str | dict[str, Any] | None:
    """将服务端角色描述转换回声明的表示方式.

    Args:
        server: 服务端返回的角色描述，None 表示集群不返回该字段
        declared: 声明配置中的 role_descriptors

    Returns:
        与声明方式一致的值；未声明时（如导入）使用 JSON 字符串
    """
    if server is None:
        return declared
    if declared is None or isinstance(declared, str):
        # 空字符串按空对象展开，比较时同样视为 "{}"
        if declared is not None and json_equal(declared or "{}", server):
            return declared
        return normalize_json(server)
    return {name: Role.from_dict(body or {}).to_block() for name, body in server.items()}
