"""elasticstate - Elasticsearch 集群对象的声明式资源处理器.

将声明式配置转换为 Elasticsearch 管理 API 调用，并将集群返回的状态
转换回声明式配置，用于协调本地声明与远程状态。

主要功能:
    - IlmPolicyResource: 索引生命周期管理（ILM）策略
    - ApiKeyResource: 安全 API Key
    - ClusterSettingsResource: 集群设置（persistent / transient）
    - Provider: 默认集群配置与资源类型注册表

使用示例:
    from elasticstate import Provider

    provider = Provider.from_env()
    ilm = provider.resource("elasticstack_elasticsearch_index_lifecycle")
    data = ilm.apply({"name": "logs", "hot": [{"rollover": [{"max_age": "7d"}]}]})
    print(data.id)
"""

__version__ = "0.1.0"

# 导出资源处理器
from elasticstate.cluster import ClusterSettingsResource

# 导出连接组件
from elasticstate.connection import (
    ApiClient,
    ClusterConfig,
    CompositeId,
    ConnectionConfig,
    ESClientFactory,
)

# 导出异常
from elasticstate.exceptions import (
    ApiRequestError,
    CompositeIdError,
    ConfigValidationError,
    ElasticStateError,
)
from elasticstate.ilm import IlmPolicyResource
from elasticstate.provider import Provider
from elasticstate.resource import Resource, ResourceData
from elasticstate.security import ApiKeyResource

__all__ = [
    # 版本
    "__version__",
    # 提供者
    "Provider",
    # 资源处理器
    "Resource",
    "ResourceData",
    "IlmPolicyResource",
    "ApiKeyResource",
    "ClusterSettingsResource",
    # 连接组件
    "ApiClient",
    "ClusterConfig",
    "ConnectionConfig",
    "CompositeId",
    "ESClientFactory",
    # 异常
    "ElasticStateError",
    "ConfigValidationError",
    "CompositeIdError",
    "ApiRequestError",
]
