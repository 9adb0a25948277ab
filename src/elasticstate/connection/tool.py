"""ES 客户端工厂工具模块.

提供 ESClientFactory 类，用于统一管理 Elasticsearch 客户端的创建、
缓存和生命周期，并为资源处理器提供 ApiClient。

使用示例:
    from elasticstate.connection import ESClientFactory, ClusterConfig

    with ESClientFactory(ClusterConfig(hosts=["http://localhost:9200"])) as factory:
        api_client = factory.get_api_client()
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from elasticsearch import Elasticsearch

from .client import ApiClient
from .exceptions import ConnectionConfigError
from .models import ClusterConfig, ConnectionConfig

logger = logging.getLogger(__name__)


class ESClientFactory:
    """Elasticsearch 客户端工厂.

    以默认集群配置创建客户端，并允许资源通过 elasticsearch_connection
    配置块覆盖连接信息。相同配置的客户端会被缓存复用。

    Attributes:
        _default_cluster: 默认集群配置
        _connection_config: 传输层配置
        _clients: 按集群配置缓存的客户端字典

    Examples:
        >>> factory = ESClientFactory(ClusterConfig(hosts=["http://localhost:9200"]))
        >>> client = factory.get_client()
    """

    def __init__(
        self,
        default_cluster: ClusterConfig | None,
        connection_config: ConnectionConfig | None = None,
    ) -> None:
        """初始化客户端工厂.

        Args:
            default_cluster: 默认集群配置，None 表示每个资源都必须自带连接配置
            connection_config: 传输层配置，默认使用 ConnectionConfig 的默认值
        """
        self._default_cluster = default_cluster
        self._connection_config = connection_config or ConnectionConfig()
        self._clients: dict[tuple, Elasticsearch] = {}

    def _create_client(self, cluster_config: ClusterConfig) -> Elasticsearch:
        """根据集群配置创建 Elasticsearch 客户端实例.

        根据认证方式（Basic Auth / API Key / Bearer Token / 无认证）
        和 SSL 配置构建客户端。

        Args:
            cluster_config: 单个集群的配置信息

        Returns:
            Elasticsearch 客户端实例
        """
        kwargs: dict = {
            "hosts": cluster_config.hosts,
            "max_retries": self._connection_config.max_retries,
            "retry_on_timeout": self._connection_config.retry_on_timeout,
            "request_timeout": self._connection_config.request_timeout,
            "http_compress": self._connection_config.http_compress,
        }

        # Basic Auth 认证
        if cluster_config.username and cluster_config.password:
            kwargs["basic_auth"] = (
                cluster_config.username,
                cluster_config.password,
            )

        # API Key 认证
        if cluster_config.api_key:
            kwargs["api_key"] = cluster_config.api_key

        # Bearer Token 认证
        if cluster_config.bearer_token:
            kwargs["bearer_auth"] = cluster_config.bearer_token

        # SSL/TLS 配置
        if cluster_config.ca_certs:
            kwargs["ca_certs"] = cluster_config.ca_certs
        kwargs["verify_certs"] = cluster_config.verify_certs

        logger.debug(f"创建 Elasticsearch 客户端: {cluster_config.hosts}")
        return Elasticsearch(**kwargs)

    def get_client(self, cluster_config: ClusterConfig | None = None) -> Elasticsearch:
        """获取指定集群配置的客户端.

        惰性创建并缓存客户端。cluster_config 为 None 时使用默认集群配置。

        Args:
            cluster_config: 集群配置，默认 None

        Returns:
            Elasticsearch 客户端实例

        Raises:
            ConnectionConfigError: 未提供集群配置且没有默认集群配置时抛出
        """
        config = cluster_config or self._default_cluster
        if config is None:
            raise ConnectionConfigError(
                "未配置默认集群，资源必须提供 elasticsearch_connection 配置块"
            )
        key = config.cache_key()
        if key not in self._clients:
            self._clients[key] = self._create_client(config)
        return self._clients[key]

    def get_api_client(
        self, connection_block: Mapping[str, Any] | None = None
    ) -> ApiClient:
        """为一次资源操作获取 ApiClient.

        Args:
            connection_block: 资源级 elasticsearch_connection 配置块，
                为空时使用默认集群

        Returns:
            ApiClient 实例
        """
        cluster_config = None
        if connection_block:
            cluster_config = ClusterConfig.from_dict(connection_block)
        return ApiClient(self.get_client(cluster_config))

    # ============================================================
    # 生命周期管理
    # ============================================================

    def __enter__(self) -> ESClientFactory:
        """上下文管理器入口.

        Returns:
            工厂实例自身
        """
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """上下文管理器退出，自动关闭所有客户端."""
        self.close_all()

    def close_all(self) -> None:
        """关闭所有已创建的客户端连接并清空缓存.

        关闭后可重新调用 get_client() 创建新的客户端。
        """
        for client in self._clients.values():
            try:
                client.close()
            except Exception as e:
                logger.warning(f"关闭客户端失败: {e}")
        self._clients.clear()
