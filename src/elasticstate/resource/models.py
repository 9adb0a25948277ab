"""资源处理器数据模型定义模块."""

import copy
from dataclasses import dataclass, field
from typing import Any

from ..schema import Field, FieldType, Schema, is_set
from ..typing import ConfigDict

CONNECTION_KEY = "elasticsearch_connection"

# 资源级连接配置块，覆盖 Provider 的默认集群
CONNECTION_SCHEMA: Schema = {
    "endpoints": Field(
        FieldType.LIST,
        description="A list of endpoints the resource will connect to.",
        elem=FieldType.STRING,
    ),
    "username": Field(FieldType.STRING, description="A username to use for API authentication."),
    "password": Field(
        FieldType.STRING,
        description="A password to use for API authentication.",
        sensitive=True,
    ),
    "api_key": Field(
        FieldType.STRING,
        description="API Key to use for authentication.",
        sensitive=True,
    ),
    "bearer_token": Field(
        FieldType.STRING,
        description="Bearer Token to use for authentication.",
        sensitive=True,
    ),
    "ca_file": Field(FieldType.STRING, description="Path to a custom CA certificate."),
    "insecure": Field(
        FieldType.BOOL,
        description="Disable TLS certificate validation.",
        default=False,
    ),
}


def with_connection_schema(schema: Schema) -> Schema:
    """返回附加了 elasticsearch_connection 配置块的新 Schema."""
    merged = dict(schema)
    merged[CONNECTION_KEY] = Field(
        FieldType.LIST,
        description="Elasticsearch connection configuration block.",
        max_items=1,
        elem=CONNECTION_SCHEMA,
    )
    return merged


@dataclass
class ResourceData:
    """单次资源操作的数据视图.

    Attributes:
        id: 组合标识符字符串，空字符串表示对象不存在
        config: 声明的配置（已按 Schema 校验），刷新或导入时可为 None
        state: 上一次保存的状态，读取操作会更新它
        schema: 资源的 Schema，用于判断计算参数

    Examples:
        >>> data = ResourceData(config={"name": "logs"})
        >>> data.get_change("name")
        (None, 'logs')
    """

    id: str = ""
    config: ConfigDict | None = None
    state: ConfigDict = field(default_factory=dict)
    schema: Schema = field(default_factory=dict, repr=False)

    def _is_computed(self, key: str) -> bool:
        fld = self.schema.get(key)
        return fld is not None and fld.computed

    def get(self, key: str) -> Any:
        """读取参数值：优先取声明配置，计算参数未声明时取已保存状态."""
        if self.config is None:
            return self.state.get(key)
        value = self.config.get(key)
        if value is None and self._is_computed(key):
            return self.state.get(key)
        return value

    def get_ok(self, key: str) -> tuple[Any, bool]:
        """读取参数值以及该值是否已设置（非 None、非空）."""
        value = self.get(key)
        return value, is_set(value)

    def get_change(self, key: str) -> tuple[Any, Any]:
        """返回 (已保存状态中的值, 声明配置中的值)."""
        return self.state.get(key), self.get(key)

    def set(self, key: str, value: Any) -> None:
        """写入状态."""
        self.state[key] = copy.deepcopy(value)

    def unset(self, key: str) -> None:
        """从状态中移除参数."""
        self.state.pop(key, None)

    def set_id(self, value: str) -> None:
        """设置组合标识符，空字符串表示对象已不存在."""
        self.id = value

    def connection_block(self) -> ConfigDict | None:
        """返回资源级连接配置块（若有）."""
        blocks = self.get(CONNECTION_KEY)
        if blocks:
            return blocks[0]
        return None

    def to_state(self) -> ConfigDict:
        """导出需要持久化的状态，对象不存在时返回空字典."""
        if not self.id:
            return {}
        return {"id": self.id, **copy.deepcopy(self.state)}
