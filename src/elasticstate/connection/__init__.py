"""ES 客户端工厂模块 - 统一管理 Elasticsearch 客户端的创建、集群 API 调用和组合标识符.

主要组件:
    - ESClientFactory: 客户端工厂，支持资源级连接覆盖和生命周期管理
    - ApiClient: 集群管理 API 客户端
    - ClusterConfig: 集群配置模型
    - ConnectionConfig: 传输层配置模型
    - CompositeId: 组合标识符

使用示例:
    from elasticstate.connection import ESClientFactory, ClusterConfig

    factory = ESClientFactory(ClusterConfig(hosts=["http://localhost:9200"]))
    api_client = factory.get_api_client()
"""

from .client import ApiClient
from .exceptions import ConnectionConfigError, ESClientFactoryError
from .models import ClusterConfig, CompositeId, ConnectionConfig
from .tool import ESClientFactory

__all__ = [
    # 工厂与客户端
    "ESClientFactory",
    "ApiClient",
    # 模型
    "ClusterConfig",
    "ConnectionConfig",
    "CompositeId",
    # 异常
    "ESClientFactoryError",
    "ConnectionConfigError",
]
