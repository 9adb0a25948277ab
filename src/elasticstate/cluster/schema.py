"""集群设置资源 Schema 定义模块."""

from ..resource import with_connection_schema
from ..schema import Field, FieldType, Schema

GROUPS: tuple[str, ...] = ("persistent", "transient")

SETTING_SCHEMA: Schema = {
    "name": Field(
        FieldType.STRING,
        description="The name of the setting to set and track.",
        required=True,
    ),
    "value": Field(
        FieldType.STRING,
        description="The value of the setting to set and track.",
    ),
    "value_list": Field(
        FieldType.LIST,
        description="The list of values to be set for the key, where the list is required.",
        elem=FieldType.STRING,
    ),
}

GROUP_SCHEMA: Schema = {
    "setting": Field(
        FieldType.SET,
        description="Defines the setting in the cluster.",
        required=True,
        min_items=1,
        elem=SETTING_SCHEMA,
    ),
}

CLUSTER_SETTINGS_SCHEMA: Schema = with_connection_schema(
    {
        "persistent": Field(
            FieldType.LIST,
            description="Settings will apply across restarts.",
            max_items=1,
            elem=GROUP_SCHEMA,
            at_least_one_of=GROUPS,
        ),
        "transient": Field(
            FieldType.LIST,
            description="Settings do not survive a full cluster restart.",
            max_items=1,
            elem=GROUP_SCHEMA,
            at_least_one_of=GROUPS,
        ),
    }
)
