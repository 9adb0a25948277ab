"""ES 客户端工厂数据模型定义模块.

提供客户端工厂相关的数据模型，包括：
- ClusterConfig: 集群配置（地址与认证方式）
- ConnectionConfig: 传输层配置
- CompositeId: 组合标识符（集群 UUID + 资源标识）
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ..exceptions import CompositeIdError
from .exceptions import ConnectionConfigError

# 组合标识符分隔符
ID_SEPARATOR = "/"

# 环境变量名称
ENV_ENDPOINTS = "ELASTICSEARCH_ENDPOINTS"
ENV_USERNAME = "ELASTICSEARCH_USERNAME"
ENV_PASSWORD = "ELASTICSEARCH_PASSWORD"
ENV_API_KEY = "ELASTICSEARCH_API_KEY"
ENV_BEARER_TOKEN = "ELASTICSEARCH_BEARER_TOKEN"
ENV_CA_CERTS = "ELASTICSEARCH_CA_CERTS"
ENV_INSECURE = "ELASTICSEARCH_INSECURE"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class ClusterConfig:
    """集群配置模型.

    定义单个 ES 集群的连接信息，包括地址和认证方式。

    Attributes:
        hosts: ES 节点地址列表（必需，不可为空）
        username: Basic Auth 用户名
        password: Basic Auth 密码
        api_key: API Key 认证（字符串或元组）
        bearer_token: Bearer Token 认证
        ca_certs: CA 证书文件路径
        verify_certs: 是否验证 SSL 证书，默认 True

    Raises:
        ConnectionConfigError: 当 hosts 为空或认证参数不完整时抛出

    Examples:
        >>> config = ClusterConfig(
        ...     hosts=["http://localhost:9200"],
        ...     username="elastic",
        ...     password="changeme",
        ... )
    """

    hosts: list[str] = field(default_factory=list)
    username: str | None = None
    password: str | None = None
    api_key: str | tuple[str, str] | None = None
    bearer_token: str | None = None
    ca_certs: str | None = None
    verify_certs: bool = True

    def __post_init__(self) -> None:
        """校验集群配置参数合法性."""
        if not self.hosts:
            raise ConnectionConfigError("hosts 不能为空，请提供至少一个 ES 节点地址")
        if bool(self.username) != bool(self.password):
            raise ConnectionConfigError("username 与 password 必须同时提供")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ClusterConfig":
        """从环境变量构建集群配置.

        Args:
            environ: 环境变量映射，默认使用 os.environ

        Returns:
            集群配置对象

        Raises:
            ConnectionConfigError: 当 ELASTICSEARCH_ENDPOINTS 未设置时抛出
        """
        env = os.environ if environ is None else environ
        hosts = _split_endpoints(env.get(ENV_ENDPOINTS, ""))
        if not hosts:
            raise ConnectionConfigError(
                f"未配置集群地址，请设置环境变量 {ENV_ENDPOINTS}"
            )
        return cls(
            hosts=hosts,
            username=env.get(ENV_USERNAME) or None,
            password=env.get(ENV_PASSWORD) or None,
            api_key=env.get(ENV_API_KEY) or None,
            bearer_token=env.get(ENV_BEARER_TOKEN) or None,
            ca_certs=env.get(ENV_CA_CERTS) or None,
            verify_certs=env.get(ENV_INSECURE, "").lower() not in _TRUTHY,
        )

    @classmethod
    def from_dict(cls, block: Mapping[str, Any]) -> "ClusterConfig":
        """从资源级 elasticsearch_connection 配置块构建集群配置.

        Args:
            block: 包含 endpoints、username、password、api_key、
                bearer_token、ca_file、insecure 的配置块

        Returns:
            集群配置对象
        """
        endpoints = block.get("endpoints") or []
        if isinstance(endpoints, str):
            endpoints = _split_endpoints(endpoints)
        return cls(
            hosts=list(endpoints),
            username=block.get("username") or None,
            password=block.get("password") or None,
            api_key=block.get("api_key") or None,
            bearer_token=block.get("bearer_token") or None,
            ca_certs=block.get("ca_file") or None,
            verify_certs=not block.get("insecure", False),
        )

    def cache_key(self) -> tuple:
        """返回用于客户端缓存的可哈希键."""
        api_key = self.api_key
        if isinstance(api_key, list):
            api_key = tuple(api_key)
        return (
            tuple(self.hosts),
            self.username,
            self.password,
            api_key,
            self.bearer_token,
            self.ca_certs,
            self.verify_certs,
        )


@dataclass
class ConnectionConfig:
    """传输层配置模型.

    定义 ES 客户端的超时与重试参数。重试完全交由客户端传输层处理。

    Attributes:
        max_retries: 最大重试次数，默认 3，不能为负数
        retry_on_timeout: 超时是否重试，默认 False
        request_timeout: 请求超时时间（秒），默认 30，必须 >= 0
        http_compress: 是否启用 HTTP 压缩，默认 False

    Raises:
        ConnectionConfigError: 当参数不合法时抛出

    Examples:
        >>> config = ConnectionConfig(max_retries=0, request_timeout=60)
    """

    max_retries: int = 3
    retry_on_timeout: bool = False
    request_timeout: float = 30
    http_compress: bool = False

    def __post_init__(self) -> None:
        """校验传输层配置参数合法性."""
        if self.max_retries < 0:
            raise ConnectionConfigError(
                f"max_retries 不能为负数，当前值: {self.max_retries}"
            )
        if self.request_timeout < 0:
            raise ConnectionConfigError(
                f"request_timeout 必须 >= 0，当前值: {self.request_timeout}"
            )


def _split_endpoints(value: str) -> list[str]:
    """拆分逗号分隔的地址列表并去除空白项."""
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass(frozen=True)
class CompositeId:
    """组合标识符模型.

    资源在本地保存的标识，格式为 ``<cluster_uuid>/<resource_id>``，
    由集群 UUID 与服务端资源标识拼接而成。

    Attributes:
        cluster_id: 集群 UUID
        resource_id: 服务端资源标识（策略名称、API Key ID 等）

    Examples:
        >>> str(CompositeId("abc123", "logs_policy"))
        'abc123/logs_policy'
        >>> CompositeId.from_str("abc123/logs_policy").resource_id
        'logs_policy'
    """

    cluster_id: str
    resource_id: str

    def __str__(self) -> str:
        return f"{self.cluster_id}{ID_SEPARATOR}{self.resource_id}"

    @classmethod
    def from_str(cls, value: str) -> "CompositeId":
        """解析组合标识符字符串.

        导入时接受任意用户输入，因此格式错误必须以异常形式报告。

        Args:
            value: 组合标识符字符串

        Returns:
            组合标识符对象

        Raises:
            CompositeIdError: 当格式不是 ``<cluster_uuid>/<resource identifier>`` 时抛出
        """
        if not isinstance(value, str):
            raise CompositeIdError(f"资源 ID 必须为字符串，当前值: {value!r}")
        parts = value.split(ID_SEPARATOR)
        if len(parts) != 2 or not all(parts):
            raise CompositeIdError(
                f"错误的资源 ID: {value!r}，"
                "资源 ID 格式应为 <cluster_uuid>/<resource identifier>"
            )
        return cls(cluster_id=parts[0], resource_id=parts[1])
