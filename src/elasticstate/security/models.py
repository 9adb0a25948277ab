"""API Key 与角色描述数据模型定义模块.

每个模型提供两组转换：
- from_block / to_block: 声明式配置块（JSON 参数以字符串表示，单对象以单元素列表表示）
- from_dict / to_dict: 集群 API 请求/响应体

集合语义的参数（权限、索引名等）输出时去重并排序，保证请求体稳定。
"""

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from ..schema import decode_json_object, normalize_json


def _sorted(values: Iterable[str] | None) -> list[str]:
    return sorted(set(values or []))


def _json_or_none(value: Any) -> str | None:
    """服务端 JSON 值转换为规范化字符串，空值返回 None."""
    if value in (None, {}, ""):
        return None
    return normalize_json(value)


@dataclass
class FieldSecurity:
    """字段级安全配置.

    Attributes:
        grant: 允许访问的字段
        except_: 排除的字段（对应 API 中的 except）
    """

    grant: list[str] = field(default_factory=list)
    except_: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, body: Mapping[str, Any]) -> "FieldSecurity":
        return cls(grant=_sorted(body.get("grant")), except_=_sorted(body.get("except")))

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {}
        if self.grant:
            body["grant"] = _sorted(self.grant)
        if self.except_:
            body["except"] = _sorted(self.except_)
        return body

    # 配置块与请求体字段一致
    from_block = from_dict
    to_block = to_dict


@dataclass
class IndexPermission:
    """索引权限条目.

    Attributes:
        names: 索引名或索引模式
        privileges: 索引级权限
        field_security: 字段级安全配置
        query: 文档级安全查询（JSON 字符串）
        allow_restricted_indices: 是否允许匹配受限索引
    """

    names: list[str] = field(default_factory=list)
    privileges: list[str] = field(default_factory=list)
    field_security: FieldSecurity | None = None
    query: str | None = None
    allow_restricted_indices: bool = False

    @classmethod
    def from_block(cls, block: Mapping[str, Any]) -> "IndexPermission":
        field_security = block.get("field_security") or []
        return cls(
            names=_sorted(block.get("names")),
            privileges=_sorted(block.get("privileges")),
            field_security=(
                FieldSecurity.from_block(field_security[0] or {})
                if field_security
                else None
            ),
            query=block.get("query") or None,
            allow_restricted_indices=bool(block.get("allow_restricted_indices", False)),
        )

    def to_block(self) -> dict[str, Any]:
        block: dict[str, Any] = {
            "names": _sorted(self.names),
            "privileges": _sorted(self.privileges),
            "allow_restricted_indices": self.allow_restricted_indices,
        }
        if self.field_security is not None and self.field_security.to_block():
            block["field_security"] = [self.field_security.to_block()]
        if self.query:
            block["query"] = self.query
        return block

    @classmethod
    def from_dict(cls, body: Mapping[str, Any]) -> "IndexPermission":
        query = body.get("query")
        if isinstance(query, str):
            # 服务端可能以字符串形式返回查询
            query = json.loads(query) if query else None
        field_security = body.get("field_security")
        return cls(
            names=_sorted(body.get("names")),
            privileges=_sorted(body.get("privileges")),
            field_security=(
                FieldSecurity.from_dict(field_security) if field_security else None
            ),
            query=_json_or_none(query),
            allow_restricted_indices=bool(body.get("allow_restricted_indices", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "names": _sorted(self.names),
            "privileges": _sorted(self.privileges),
            "allow_restricted_indices": self.allow_restricted_indices,
        }
        if self.field_security is not None and self.field_security.to_dict():
            body["field_security"] = self.field_security.to_dict()
        if self.query:
            body["query"] = decode_json_object(self.query, "indices.query")
        return body


@dataclass
class ApplicationPrivilege:
    """应用权限条目.

    Attributes:
        application: 应用名称
        privileges: 应用权限或动作
        resources: 权限作用的资源
    """

    application: str
    privileges: list[str] = field(default_factory=list)
    resources: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, body: Mapping[str, Any]) -> "ApplicationPrivilege":
        return cls(
            application=body.get("application", ""),
            privileges=_sorted(body.get("privileges")),
            resources=_sorted(body.get("resources")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "application": self.application,
            "privileges": _sorted(self.privileges),
            "resources": _sorted(self.resources),
        }

    from_block = from_dict
    to_block = to_dict


@dataclass
class Role:
    """角色描述.

    Attributes:
        cluster: 集群级权限
        indices: 索引权限条目
        applications: 应用权限条目
        global_: 全局权限（JSON 字符串，对应 API 中的 global）
        run_as: 可以模拟的用户
        metadata: 元数据（JSON 字符串）
    """

    cluster: list[str] = field(default_factory=list)
    indices: list[IndexPermission] = field(default_factory=list)
    applications: list[ApplicationPrivilege] = field(default_factory=list)
    global_: str | None = None
    run_as: list[str] = field(default_factory=list)
    metadata: str | None = None

    @classmethod
    def from_block(cls, block: Mapping[str, Any]) -> "Role":
        return cls(
            cluster=_sorted(block.get("cluster")),
            indices=[IndexPermission.from_block(item) for item in block.get("indices") or []],
            applications=[
                ApplicationPrivilege.from_block(item)
                for item in block.get("applications") or []
            ],
            global_=block.get("global") or None,
            run_as=_sorted(block.get("run_as")),
            metadata=block.get("metadata") or None,
        )

    def to_block(self) -> dict[str, Any]:
        block: dict[str, Any] = {}
        if self.cluster:
            block["cluster"] = _sorted(self.cluster)
        if self.indices:
            block["indices"] = [item.to_block() for item in self.indices]
        if self.applications:
            block["applications"] = [item.to_block() for item in self.applications]
        if self.global_:
            block["global"] = self.global_
        if self.run_as:
            block["run_as"] = _sorted(self.run_as)
        if self.metadata:
            block["metadata"] = self.metadata
        return block

    @classmethod
    def from_dict(cls, body: Mapping[str, Any]) -> "Role":
        return cls(
            cluster=_sorted(body.get("cluster")),
            indices=[IndexPermission.from_dict(item) for item in body.get("indices") or []],
            applications=[
                ApplicationPrivilege.from_dict(item)
                for item in body.get("applications") or []
            ],
            global_=_json_or_none(body.get("global")),
            run_as=_sorted(body.get("run_as")),
            metadata=_json_or_none(body.get("metadata")),
        )

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "cluster": _sorted(self.cluster),
            "indices": [item.to_dict() for item in self.indices],
        }
        if self.applications:
            body["applications"] = [item.to_dict() for item in self.applications]
        if self.global_:
            body["global"] = decode_json_object(self.global_, "global")
        if self.run_as:
            body["run_as"] = _sorted(self.run_as)
        if self.metadata:
            body["metadata"] = decode_json_object(self.metadata, "metadata")
        return body


@dataclass
class ApiKey:
    """API Key 模型.

    Attributes:
        name: API Key 名称
        role_descriptors: 角色名称到角色描述请求体的映射，可为空
        expiration: 过期时间（如 "7d"），None 表示永不过期
        metadata: 元数据
    """

    name: str
    role_descriptors: dict[str, Any] = field(default_factory=dict)
    expiration: str | None = None
    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """转换为创建 API Key 的请求体."""
        body: dict[str, Any] = {
            "name": self.name,
            "role_descriptors": self.role_descriptors,
        }
        if self.expiration:
            body["expiration"] = self.expiration
        if self.metadata is not None:
            body["metadata"] = self.metadata
        return body


@dataclass
class ApiKeyInfo:
    """GET _security/api_key 返回的单个 API Key 信息.

    Attributes:
        id: 服务端分配的 ID
        name: 名称
        invalidated: 是否已失效
        expiration: 过期时间戳（毫秒），None 表示永不过期
        metadata: 元数据
        role_descriptors: 角色描述（8.5 之前的集群不返回）
    """

    id: str
    name: str = ""
    invalidated: bool = False
    expiration: int | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    role_descriptors: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, body: Mapping[str, Any]) -> "ApiKeyInfo":
        return cls(
            id=body.get("id", ""),
            name=body.get("name", ""),
            invalidated=bool(body.get("invalidated", False)),
            expiration=body.get("expiration"),
            metadata=body.get("metadata") or {},
            role_descriptors=body.get("role_descriptors"),
        )
