"""安全（API Key）资源模块.

提供 API Key 的声明式资源处理器以及角色描述的类型化模型。
"""

from .descriptors import expand_role_descriptors, flatten_role_descriptors
from .exceptions import RoleDescriptorError
from .models import (
    ApiKey,
    ApiKeyInfo,
    ApplicationPrivilege,
    FieldSecurity,
    IndexPermission,
    Role,
)
from .schema import API_KEY_NAME_PATTERN, API_KEY_SCHEMA, ROLE_SCHEMA
from .tool import ApiKeyResource

__all__ = [
    # 资源处理器
    "ApiKeyResource",
    # 模型
    "ApiKey",
    "ApiKeyInfo",
    "Role",
    "IndexPermission",
    "FieldSecurity",
    "ApplicationPrivilege",
    # Schema
    "API_KEY_SCHEMA",
    "ROLE_SCHEMA",
    "API_KEY_NAME_PATTERN",
    # 角色描述转换
    "expand_role_descriptors",
    "flatten_role_descriptors",
    # 异常
    "RoleDescriptorError",
]
