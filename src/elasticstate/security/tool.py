"""API Key 资源处理器模块."""

import logging

from ..connection import CompositeId
from ..resource import Resource, ResourceData
from ..schema import decode_json_object, json_equal, normalize_json
from .descriptors import expand_role_descriptors, flatten_role_descriptors
from .models import ApiKey, ApiKeyInfo
from .schema import API_KEY_SCHEMA

logger = logging.getLogger(__name__)


class ApiKeyResource(Resource):
    """API Key 资源处理器.

    API Key 的 ID 由服务端在创建时分配，组合标识符为 ``<cluster_uuid>/<key id>``。
    密钥本身只在创建响应中出现一次，保存在 api_key 与 encoded 计算参数中。
    """

    type_name = "elasticstack_elasticsearch_security_api_key"
    description = (
        "Creates an API key for access without requiring basic authentication. See, "
        "https://www.elastic.co/guide/en/elasticsearch/reference/current/"
        "security-api-create-api-key.html"
    )
    schema = API_KEY_SCHEMA

    def _expand(self, data: ResourceData) -> ApiKey:
        """在任何远程调用之前展开声明配置."""
        config = data.config or {}
        metadata = None
        if config.get("metadata"):
            metadata = decode_json_object(config["metadata"], "metadata")
        return ApiKey(
            name=config["name"],
            role_descriptors=expand_role_descriptors(config.get("role_descriptors")),
            expiration=config.get("expiration") or None,
            metadata=metadata,
        )

    def put(self, data: ResourceData) -> ResourceData:
        """创建 API Key，已存在时更新其角色描述与元数据."""
        api_key = self._expand(data)
        client = self.api_client(data)

        if data.id:
            composite_id = self.parse_id(data)
            client.update_api_key(
                composite_id.resource_id,
                role_descriptors=api_key.role_descriptors,
                metadata=api_key.metadata,
            )
        else:
            # 密钥只在创建响应中出现一次，集群 UUID 必须在创建之前取得
            cluster_id = client.cluster_uuid()
            response = client.create_api_key(**api_key.to_dict())
            composite_id = CompositeId(cluster_id, response["id"])
            data.set("key_id", response["id"])
            data.set("api_key", response.get("api_key"))
            data.set("encoded", response.get("encoded"))
            data.set_id(str(composite_id))

        return self.read(data)

    def read(self, data: ResourceData) -> ResourceData:
        """读取 API Key，不存在或已失效时清空本地 ID."""
        composite_id = self.parse_id(data)
        key_id = composite_id.resource_id

        client = self.api_client(data)
        body = client.get_api_key(key_id)
        if body is None:
            return self._clear_missing(data, f"API Key '{key_id}'")
        info = ApiKeyInfo.from_dict(body)
        if info.invalidated:
            return self._clear_missing(data, f"API Key '{key_id}'（已失效）")

        data.set("key_id", info.id)
        data.set("name", info.name)
        data.set("expiration_timestamp", info.expiration)
        expiration, has_expiration = data.get_ok("expiration")
        if has_expiration:
            data.set("expiration", expiration)

        declared_metadata, has_metadata = data.get_ok("metadata")
        if has_metadata and json_equal(declared_metadata, info.metadata):
            data.set("metadata", declared_metadata)
        else:
            data.set("metadata", normalize_json(info.metadata))

        data.set(
            "role_descriptors",
            flatten_role_descriptors(info.role_descriptors, data.get("role_descriptors")),
        )
        return data

    def delete(self, data: ResourceData) -> ResourceData:
        """使 API Key 失效并清空本地 ID."""
        composite_id = self.parse_id(data)
        client = self.api_client(data)
        client.invalidate_api_key(composite_id.resource_id)
        data.set_id("")
        return data
