"""资源处理器基础模块.

提供资源操作数据视图 ResourceData、处理器基类 Resource 以及
资源级连接配置块定义。
"""

from .exceptions import (
    ReplacementRequiredError,
    ResourceError,
    ResourceNotFoundError,
    ResourceTypeNotFoundError,
)
from .models import CONNECTION_KEY, CONNECTION_SCHEMA, ResourceData, with_connection_schema
from .tool import Resource

__all__ = [
    "Resource",
    "ResourceData",
    "CONNECTION_KEY",
    "CONNECTION_SCHEMA",
    "with_connection_schema",
    "ResourceError",
    "ResourceNotFoundError",
    "ResourceTypeNotFoundError",
    "ReplacementRequiredError",
]
