"""资源处理器基类模块.

Resource 负责组织一次资源操作：Schema 校验、获取 ApiClient、
调用具体处理器的 put/read/delete，以及导入与重建判断。
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from ..connection import ApiClient, CompositeId, ESClientFactory
from ..schema import Schema, apply_schema, force_new_fields
from .exceptions import ReplacementRequiredError, ResourceNotFoundError
from .models import ResourceData

logger = logging.getLogger(__name__)


class Resource(ABC):
    """声明式资源处理器基类.

    子类需定义 type_name、schema 并实现 put、read、delete。
    每次调用相互独立，不在实例上保存操作状态。

    Args:
        client_factory: 客户端工厂
    """

    type_name: str = ""
    description: str = ""
    schema: Schema = {}

    def __init__(self, client_factory: ESClientFactory) -> None:
        self.client_factory = client_factory

    def validate(self, config: Mapping[str, Any]) -> dict[str, Any]:
        """按资源 Schema 校验配置并填充默认值."""
        return apply_schema(self.schema, config)

    def new_data(
        self,
        config: Mapping[str, Any] | None = None,
        state: Mapping[str, Any] | None = None,
        id: str = "",
    ) -> ResourceData:
        """构建一次操作使用的 ResourceData，声明配置会先经过校验.

        Args:
            config: 声明配置
            state: 已保存的状态（不含 id）
            id: 已保存的组合标识符

        Returns:
            ResourceData 实例

        Raises:
            SchemaValidationError: 当声明配置不符合 Schema 时抛出
        """
        validated = self.validate(config) if config is not None else None
        saved = {k: v for k, v in (state or {}).items() if k != "id"}
        return ResourceData(
            id=id or (state or {}).get("id", ""),
            config=validated,
            state=saved,
            schema=self.schema,
        )

    def api_client(self, data: ResourceData) -> ApiClient:
        """获取本次操作使用的 ApiClient."""
        return self.client_factory.get_api_client(data.connection_block())

    @staticmethod
    def parse_id(data: ResourceData) -> CompositeId:
        """解析资源的组合标识符."""
        return CompositeId.from_str(data.id)

    # ==================== 生命周期 ====================

    def create(self, data: ResourceData) -> ResourceData:
        """创建资源."""
        return self.put(data)

    def update(self, data: ResourceData) -> ResourceData:
        """更新资源.

        Raises:
            ReplacementRequiredError: 当不可变参数发生变化时抛出
        """
        changed = force_new_fields(self.schema, data.state, data.config)
        if changed:
            raise ReplacementRequiredError(changed)
        return self.put(data)

    def apply(
        self,
        config: Mapping[str, Any],
        state: Mapping[str, Any] | None = None,
    ) -> ResourceData:
        """根据是否已有 ID 自动选择创建或更新.

        Args:
            config: 声明配置
            state: 已保存的状态（含 id）

        Returns:
            操作完成后的 ResourceData
        """
        data = self.new_data(config=config, state=state)
        if data.id:
            return self.update(data)
        return self.create(data)

    def import_state(self, id: str) -> ResourceData:
        """通过组合标识符导入已有对象.

        格式错误的标识符在发起任何远程调用之前即报错。

        Args:
            id: 组合标识符字符串

        Returns:
            读取后的 ResourceData

        Raises:
            CompositeIdError: 当标识符格式错误时抛出
            ResourceNotFoundError: 当远程对象不存在时抛出
        """
        CompositeId.from_str(id)
        data = ResourceData(id=id, schema=self.schema)
        self.read(data)
        if not data.id:
            raise ResourceNotFoundError(f"无法导入不存在的远程对象: {id}")
        logger.info(f"{self.type_name} 导入成功: {id}")
        return data

    def _clear_missing(self, data: ResourceData, what: str) -> ResourceData:
        """远程对象已不存在时清空本地 ID."""
        logger.warning(f"{what} 在集群中不存在，已从本地状态移除 (id: {data.id})")
        data.set_id("")
        return data

    @abstractmethod
    def put(self, data: ResourceData) -> ResourceData:
        """创建或更新远程对象，成功后读取最新状态."""

    @abstractmethod
    def read(self, data: ResourceData) -> ResourceData:
        """读取远程对象并更新本地状态，对象不存在时清空 ID."""

    @abstractmethod
    def delete(self, data: ResourceData) -> ResourceData:
        """删除远程对象并清空 ID."""
