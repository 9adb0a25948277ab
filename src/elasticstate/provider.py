"""资源提供者模块.

Provider 持有默认集群配置与客户端工厂，并维护资源类型注册表。
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from .cluster import ClusterSettingsResource
from .connection import ClusterConfig, ConnectionConfig, ESClientFactory
from .ilm import IlmPolicyResource
from .resource import Resource, ResourceTypeNotFoundError
from .security import ApiKeyResource

logger = logging.getLogger(__name__)

RESOURCE_TYPES: tuple[type[Resource], ...] = (
    IlmPolicyResource,
    ApiKeyResource,
    ClusterSettingsResource,
)


class Provider:
    """资源提供者.

    Args:
        cluster_config: 默认集群配置，None 表示每个资源都必须自带连接配置
        connection_config: 传输层配置

    Examples:
        >>> provider = Provider(ClusterConfig(hosts=["http://localhost:9200"]))
        >>> ilm = provider.resource("elasticstack_elasticsearch_index_lifecycle")
        >>> state = ilm.apply({"name": "logs", "delete": [{"delete": [{}]}]}).to_state()
    """

    def __init__(
        self,
        cluster_config: ClusterConfig | None = None,
        connection_config: ConnectionConfig | None = None,
    ) -> None:
        self.client_factory = ESClientFactory(cluster_config, connection_config)
        self._resources: dict[str, Resource] = {
            resource_type.type_name: resource_type(self.client_factory)
            for resource_type in RESOURCE_TYPES
        }
        logger.info(f"初始化资源提供者，已注册资源类型: {list(self._resources)}")

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        connection_config: ConnectionConfig | None = None,
    ) -> Provider:
        """使用环境变量中的集群配置创建 Provider."""
        return cls(ClusterConfig.from_env(environ), connection_config)

    @property
    def resource_types(self) -> list[str]:
        """已注册的资源类型名称."""
        return list(self._resources)

    def resource(self, type_name: str) -> Resource:
        """获取资源处理器.

        Raises:
            ResourceTypeNotFoundError: 当资源类型未注册时抛出
        """
        if type_name not in self._resources:
            raise ResourceTypeNotFoundError(f"不支持的资源类型: {type_name}")
        return self._resources[type_name]

    def __enter__(self) -> Provider:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """关闭所有客户端连接."""
        self.client_factory.close_all()
