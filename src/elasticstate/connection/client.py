"""集群 API 客户端模块.

ApiClient 封装资源处理器所需的全部集群管理 API 调用，
将 elasticsearch 客户端抛出的 ApiError 统一转换为 ApiRequestError。
传输层异常（连接失败、超时）原样向上抛出。
"""

import logging
from collections.abc import Callable
from typing import Any

from elasticsearch import ApiError, Elasticsearch, NotFoundError

from ..exceptions import ApiRequestError
from ..typing import BodyDict, SettingsDict
from .models import CompositeId

logger = logging.getLogger(__name__)


def _body(response: Any) -> Any:
    """取出响应体.

    elasticsearch 8 返回 ObjectApiResponse，其 body 属性为原始字典；
    测试中的模拟客户端直接返回字典。
    """
    return getattr(response, "body", response)


def _error_detail(error: ApiError) -> Any:
    """提取服务端返回的错误详情."""
    body = error.body
    if isinstance(body, dict) and "error" in body:
        return body["error"]
    return body or error.message


class ApiClient:
    """集群 API 客户端.

    每次资源操作使用一个实例，不在调用之间保存任何状态。

    Args:
        es_client: Elasticsearch 客户端实例

    Examples:
        >>> client = ApiClient(Elasticsearch("http://localhost:9200"))
        >>> client.put_ilm_policy("logs", {"phases": {"hot": {"actions": {}}}})
    """

    def __init__(self, es_client: Elasticsearch) -> None:
        if es_client is None:
            raise ValueError("es_client 不能为 None")
        self.es_client = es_client
        self._cluster_uuid: str | None = None

    def _request(self, summary: str, func: Callable[..., Any], **kwargs: Any) -> Any:
        """执行一次 API 调用并转换远程错误.

        Args:
            summary: 失败时的错误摘要
            func: elasticsearch 客户端方法
            **kwargs: 调用参数

        Returns:
            响应体

        Raises:
            ApiRequestError: 当集群返回非 2xx 状态码时抛出
        """
        try:
            return _body(func(**kwargs))
        except ApiError as e:
            raise ApiRequestError(summary, e.status_code, _error_detail(e)) from e

    # ==================== 集群标识 ====================

    def cluster_uuid(self) -> str:
        """获取集群 UUID.

        Returns:
            集群 UUID

        Raises:
            ApiRequestError: 当请求失败或响应中缺少 cluster_uuid 时抛出
        """
        if self._cluster_uuid is None:
            info = self._request("无法获取集群信息", self.es_client.info)
            uuid = info.get("cluster_uuid") if isinstance(info, dict) else None
            if not uuid:
                raise ApiRequestError("无法获取集群 UUID", detail=info)
            self._cluster_uuid = uuid
        return self._cluster_uuid

    def composite_id(self, resource_id: str) -> CompositeId:
        """基于当前集群 UUID 构建组合标识符.

        Args:
            resource_id: 服务端资源标识

        Returns:
            组合标识符
        """
        return CompositeId(cluster_id=self.cluster_uuid(), resource_id=resource_id)

    # ==================== ILM 策略 ====================

    def put_ilm_policy(self, name: str, policy: BodyDict) -> None:
        """创建或整体替换 ILM 策略.

        Args:
            name: 策略名称
            policy: 策略文档（{"phases": ..., "_meta": ...}）
        """
        self._request(
            "无法创建或更新 ILM 策略",
            self.es_client.ilm.put_lifecycle,
            name=name,
            policy=policy,
        )
        logger.info(f"ILM 策略 '{name}' 已写入集群")

    def get_ilm_policy(self, name: str) -> BodyDict | None:
        """获取 ILM 策略定义.

        Args:
            name: 策略名称

        Returns:
            包含 policy、version、modified_date 的字典，策略不存在时返回 None
        """
        try:
            response = _body(self.es_client.ilm.get_lifecycle(name=name))
        except NotFoundError:
            return None
        except ApiError as e:
            raise ApiRequestError(
                "无法从集群获取 ILM 策略", e.status_code, _error_detail(e)
            ) from e
        return response.get(name)

    def delete_ilm_policy(self, name: str) -> bool:
        """删除 ILM 策略.

        Args:
            name: 策略名称

        Returns:
            是否实际删除了策略，策略已不存在时返回 False
        """
        try:
            self.es_client.ilm.delete_lifecycle(name=name)
        except NotFoundError:
            logger.warning(f"ILM 策略 '{name}' 不存在，跳过删除")
            return False
        except ApiError as e:
            raise ApiRequestError(
                "无法删除 ILM 策略", e.status_code, _error_detail(e)
            ) from e
        logger.info(f"ILM 策略 '{name}' 删除成功")
        return True

    # ==================== API Key ====================

    def create_api_key(
        self,
        name: str,
        role_descriptors: BodyDict,
        expiration: str | None = None,
        metadata: BodyDict | None = None,
    ) -> BodyDict:
        """创建 API Key.

        Args:
            name: API Key 名称
            role_descriptors: 角色描述映射
            expiration: 过期时间（如 "1d"），默认永不过期
            metadata: 元数据

        Returns:
            服务端响应，包含 id、name、api_key、encoded、expiration
        """
        kwargs: dict[str, Any] = {"name": name, "role_descriptors": role_descriptors}
        if expiration:
            kwargs["expiration"] = expiration
        if metadata is not None:
            kwargs["metadata"] = metadata
        response = self._request(
            "无法创建 API Key", self.es_client.security.create_api_key, **kwargs
        )
        logger.info(f"API Key '{name}' 创建成功 (id: {response.get('id')})")
        return response

    def update_api_key(
        self,
        key_id: str,
        role_descriptors: BodyDict,
        metadata: BodyDict | None = None,
    ) -> None:
        """更新 API Key 的角色描述与元数据.

        Args:
            key_id: API Key ID
            role_descriptors: 角色描述映射
            metadata: 元数据
        """
        kwargs: dict[str, Any] = {"id": key_id, "role_descriptors": role_descriptors}
        if metadata is not None:
            kwargs["metadata"] = metadata
        self._request(
            "无法更新 API Key", self.es_client.security.update_api_key, **kwargs
        )
        logger.info(f"API Key '{key_id}' 更新成功")

    def get_api_key(self, key_id: str) -> BodyDict | None:
        """按 ID 获取 API Key 信息.

        Args:
            key_id: API Key ID

        Returns:
            API Key 信息字典，不存在时返回 None
        """
        try:
            response = _body(self.es_client.security.get_api_key(id=key_id))
        except NotFoundError:
            return None
        except ApiError as e:
            raise ApiRequestError(
                "无法从集群获取 API Key", e.status_code, _error_detail(e)
            ) from e
        for api_key in response.get("api_keys", []):
            if api_key.get("id") == key_id:
                return api_key
        return None

    def invalidate_api_key(self, key_id: str) -> None:
        """按 ID 使 API Key 失效.

        Args:
            key_id: API Key ID
        """
        self._request(
            "无法删除 API Key",
            self.es_client.security.invalidate_api_key,
            ids=[key_id],
        )
        logger.info(f"API Key '{key_id}' 已失效")

    # ==================== 集群设置 ====================

    def put_cluster_settings(
        self,
        persistent: SettingsDict | None = None,
        transient: SettingsDict | None = None,
    ) -> BodyDict:
        """局部更新集群设置.

        值为 None 的设置会从集群中移除。

        Args:
            persistent: 持久设置
            transient: 临时设置

        Returns:
            服务端响应
        """
        return self._request(
            "无法更新集群设置",
            self.es_client.cluster.put_settings,
            persistent=persistent or {},
            transient=transient or {},
        )

    def get_cluster_settings(self) -> BodyDict:
        """以扁平格式获取集群设置.

        Returns:
            包含 persistent、transient 分组的字典
        """
        return self._request(
            "无法从集群获取集群设置",
            self.es_client.cluster.get_settings,
            flat_settings=True,
        )
