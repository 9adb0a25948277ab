"""ILM 策略数据模型定义模块.

提供 ILM 策略的动作定义表与请求/响应模型，包括：
- ActionSpec: 单个动作类型的定义（可设置参数、是否为开关动作）
- ACTIONS: 12 种动作的只读定义表，导入时构建一次
- PHASE_ACTIONS: 每个阶段允许使用的动作
- ToggleState: 开关动作的三态（未设置 / 启用 / 禁用）
- Phase: 阶段请求/响应模型
- Policy: 策略请求/响应模型
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

from ..schema import Field, FieldType, int_at_least

PHASES: tuple[str, ...] = ("hot", "warm", "cold", "frozen", "delete")


@dataclass(frozen=True)
class ActionSpec:
    """ILM 动作定义.

    Attributes:
        name: 动作名称
        description: 动作说明
        fields: 动作参数定义，按请求体中允许出现的参数排列
        toggle: 是否为仅含 enabled 开关的动作（readonly、freeze、unfollow），
            此类动作禁用时整体不发送，启用时发送空对象
    """

    name: str
    description: str
    fields: Mapping[str, Field]
    toggle: bool = False

    @property
    def settings(self) -> tuple[str, ...]:
        """展开时允许复制到请求体的参数名."""
        if self.toggle:
            return ()
        return tuple(self.fields)

    @property
    def json_settings(self) -> frozenset[str]:
        """以 JSON 字符串声明、在请求体中为对象的参数名."""
        return frozenset(name for name, fld in self.fields.items() if fld.json)

    def as_field(self) -> Field:
        """返回该动作在阶段配置块中的参数定义（最多一个元素的列表）."""
        return Field(
            FieldType.LIST,
            description=self.description,
            max_items=1,
            elem=dict(self.fields),
        )


def _enabled(description: str) -> dict[str, Field]:
    return {"enabled": Field(FieldType.BOOL, description=description, default=True)}


ACTIONS: Mapping[str, ActionSpec] = MappingProxyType(
    {
        definition.name: definition
        for definition in (
            ActionSpec(
                name="allocate",
                description="Updates the index settings to change which nodes are allowed "
                "to host the index shards and change the number of replicas.",
                fields=MappingProxyType(
                    {
                        "number_of_replicas": Field(
                            FieldType.INT,
                            description="Number of replicas to assign to the index.",
                        ),
                        "include": Field(
                            FieldType.STRING,
                            description="Assigns an index to nodes that have at least one "
                            "of the specified custom attributes.",
                            json=True,
                        ),
                        "exclude": Field(
                            FieldType.STRING,
                            description="Assigns an index to nodes that have none of the "
                            "specified custom attributes.",
                            json=True,
                        ),
                        "require": Field(
                            FieldType.STRING,
                            description="Assigns an index to nodes that have all of the "
                            "specified custom attributes.",
                            json=True,
                        ),
                    }
                ),
            ),
            ActionSpec(
                name="delete",
                description="Permanently removes the index.",
                fields=MappingProxyType(
                    {
                        "delete_searchable_snapshot": Field(
                            FieldType.BOOL,
                            description="Deletes the searchable snapshot created in a "
                            "previous phase.",
                            default=True,
                        ),
                    }
                ),
            ),
            ActionSpec(
                name="forcemerge",
                description="Force merges the index into the specified maximum number of "
                "segments. This action makes the index read-only.",
                fields=MappingProxyType(
                    {
                        "max_num_segments": Field(
                            FieldType.INT,
                            description="Number of segments to merge to. To fully merge "
                            "the index, set to 1.",
                            required=True,
                            validators=(int_at_least(1),),
                        ),
                        "index_codec": Field(
                            FieldType.STRING,
                            description="Codec used to compress the document store.",
                        ),
                    }
                ),
            ),
            ActionSpec(
                name="freeze",
                description="Freeze the index to minimize its memory footprint.",
                fields=MappingProxyType(_enabled("Controls whether ILM freezes the index.")),
                toggle=True,
            ),
            ActionSpec(
                name="migrate",
                description="Moves the index to the data tier that corresponds to the "
                'current phase by updating the "index.routing.allocation.include.'
                '_tier_preference" index setting.',
                fields=MappingProxyType(
                    _enabled(
                        "Controls whether ILM automatically migrates the index during "
                        "this phase."
                    )
                ),
            ),
            ActionSpec(
                name="readonly",
                description="Makes the index read-only.",
                fields=MappingProxyType(
                    _enabled("Controls whether ILM makes the index read-only.")
                ),
                toggle=True,
            ),
            ActionSpec(
                name="rollover",
                description="Rolls over a target to a new index when the existing index "
                "meets one or more of the rollover conditions.",
                fields=MappingProxyType(
                    {
                        "max_age": Field(
                            FieldType.STRING,
                            description="Triggers rollover after the maximum elapsed time "
                            "from index creation is reached.",
                        ),
                        "max_docs": Field(
                            FieldType.INT,
                            description="Triggers rollover after the specified maximum "
                            "number of documents is reached.",
                        ),
                        "max_size": Field(
                            FieldType.STRING,
                            description="Triggers rollover when the index reaches a "
                            "certain size.",
                        ),
                        "max_primary_shard_size": Field(
                            FieldType.STRING,
                            description="Triggers rollover when the largest primary shard "
                            "in the index reaches a certain size.",
                        ),
                    }
                ),
            ),
            ActionSpec(
                name="searchable_snapshot",
                description="Takes a snapshot of the managed index in the configured "
                "repository and mounts it as a searchable snapshot.",
                fields=MappingProxyType(
                    {
                        "snapshot_repository": Field(
                            FieldType.STRING,
                            description="Repository used to store the snapshot.",
                            required=True,
                        ),
                        "force_merge_index": Field(
                            FieldType.BOOL,
                            description="Force merges the managed index to one segment.",
                            default=True,
                        ),
                    }
                ),
            ),
            ActionSpec(
                name="set_priority",
                description="Sets the priority of the index as soon as the policy enters "
                "the phase.",
                fields=MappingProxyType(
                    {
                        "priority": Field(
                            FieldType.INT,
                            description="The priority for the index. Must be 0 or greater.",
                            required=True,
                            validators=(int_at_least(0),),
                        ),
                    }
                ),
            ),
            ActionSpec(
                name="shrink",
                description="Sets a source index to read-only and shrinks it into a new "
                "index with fewer primary shards.",
                fields=MappingProxyType(
                    {
                        "number_of_shards": Field(
                            FieldType.INT,
                            description="Number of shards to shrink to.",
                        ),
                        "max_primary_shard_size": Field(
                            FieldType.STRING,
                            description="The max primary shard size for the target index.",
                        ),
                    }
                ),
            ),
            ActionSpec(
                name="unfollow",
                description="Convert a follower index to a regular index. Performed "
                "automatically before a rollover, shrink, or searchable snapshot action.",
                fields=MappingProxyType(
                    _enabled("Controls whether ILM makes the follower index a regular one.")
                ),
                toggle=True,
            ),
            ActionSpec(
                name="wait_for_snapshot",
                description="Waits for the specified SLM policy to be executed before "
                "removing the index.",
                fields=MappingProxyType(
                    {
                        "policy": Field(
                            FieldType.STRING,
                            description="Name of the SLM policy that the delete action "
                            "should wait for.",
                            required=True,
                        ),
                    }
                ),
            ),
        )
    }
)

PHASE_ACTIONS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "hot": (
            "set_priority",
            "unfollow",
            "rollover",
            "readonly",
            "shrink",
            "forcemerge",
            "searchable_snapshot",
        ),
        "warm": (
            "set_priority",
            "unfollow",
            "readonly",
            "allocate",
            "migrate",
            "shrink",
            "forcemerge",
        ),
        "cold": (
            "set_priority",
            "unfollow",
            "readonly",
            "searchable_snapshot",
            "allocate",
            "migrate",
            "freeze",
        ),
        "frozen": ("searchable_snapshot",),
        "delete": ("wait_for_snapshot", "delete"),
    }
)

TOGGLE_ACTIONS: tuple[str, ...] = tuple(
    name for name, definition in ACTIONS.items() if definition.toggle
)


class ToggleState(Enum):
    """开关动作的声明状态.

    服务端对禁用的开关动作不返回任何内容，只能依据声明配置区分
    "从未配置" 与 "显式禁用"。
    """

    UNSET = "unset"
    ENABLED = "enabled"
    DISABLED = "disabled"


@dataclass
class Phase:
    """ILM 阶段模型.

    Attributes:
        min_age: 进入该阶段的最小时间（如 "30d"），None 表示由服务端决定
        actions: 动作名称到动作参数的映射
    """

    min_age: str | None = None
    actions: dict[str, dict[str, Any]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """转换为请求体格式，未设置的 min_age 不输出."""
        body: dict[str, Any] = {}
        if self.min_age:
            body["min_age"] = self.min_age
        body["actions"] = self.actions
        return body

    @classmethod
    def from_dict(cls, body: Mapping[str, Any]) -> "Phase":
        """从响应体构建阶段模型."""
        return cls(
            min_age=body.get("min_age") or None,
            actions={name: dict(value or {}) for name, value in body.get("actions", {}).items()},
        )


@dataclass
class Policy:
    """ILM 策略模型.

    每次更新都会整体替换服务端策略文档。

    Attributes:
        name: 策略名称
        metadata: 用户元数据（请求体中的 _meta）
        phases: 阶段名称到阶段模型的映射
    """

    name: str
    metadata: dict[str, Any] | None = None
    phases: dict[str, Phase] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """转换为策略文档（请求体中 policy 字段的内容）."""
        body: dict[str, Any] = {
            "phases": {name: phase.to_dict() for name, phase in self.phases.items()}
        }
        if self.metadata is not None:
            body["_meta"] = self.metadata
        return body

    def to_body(self) -> dict[str, Any]:
        """转换为完整请求体 {"policy": {...}}."""
        return {"policy": self.to_dict()}

    @classmethod
    def from_dict(cls, name: str, definition: Mapping[str, Any]) -> "Policy":
        """从 GET _ilm/policy 响应中的单个策略定义构建模型.

        Args:
            name: 策略名称
            definition: 包含 policy、version、modified_date 的字典
        """
        body = definition.get("policy", {})
        return cls(
            name=name,
            metadata=body.get("_meta"),
            phases={
                phase_name: Phase.from_dict(phase)
                for phase_name, phase in body.get("phases", {}).items()
            },
        )
