"""ILM 策略资源 Schema 定义模块.

阶段配置块由动作定义表派生，每个阶段只包含其允许的动作。
"""

from ..resource import with_connection_schema
from ..schema import Field, FieldType, Schema
from .models import ACTIONS, PHASE_ACTIONS, PHASES

PHASE_DESCRIPTIONS: dict[str, str] = {
    "hot": "The index is actively being updated and queried.",
    "warm": "The index is no longer being updated but is still being queried.",
    "cold": "The index is no longer being updated and is queried infrequently. "
    "The information still needs to be searchable, but it's okay if those queries are slower.",
    "frozen": "The index is no longer being updated and is queried rarely. "
    "The information still needs to be searchable, but it's okay if those queries are "
    "extremely slow.",
    "delete": "The index is no longer needed and can safely be removed.",
}


def phase_schema(phase_name: str) -> Schema:
    """构建指定阶段的配置块 Schema."""
    schema: Schema = {
        action_name: ACTIONS[action_name].as_field()
        for action_name in PHASE_ACTIONS[phase_name]
    }
    schema["min_age"] = Field(
        FieldType.STRING,
        description="ILM moves indices through the lifecycle according to their age. "
        "To control the timing of these transitions, you set a minimum age for each phase.",
        optional=True,
        computed=True,
    )
    return schema


def _build_schema() -> Schema:
    schema: Schema = {
        "name": Field(
            FieldType.STRING,
            description="Identifier for the policy.",
            required=True,
            force_new=True,
        ),
        "metadata": Field(
            FieldType.STRING,
            description="Optional user metadata about the ilm policy.",
            json=True,
        ),
        "modified_date": Field(
            FieldType.STRING,
            description="The DateTime of the last modification.",
            computed=True,
        ),
    }
    for phase_name in PHASES:
        schema[phase_name] = Field(
            FieldType.LIST,
            description=PHASE_DESCRIPTIONS[phase_name],
            max_items=1,
            elem=phase_schema(phase_name),
            at_least_one_of=PHASES,
        )
    return with_connection_schema(schema)


POLICY_SCHEMA: Schema = _build_schema()
