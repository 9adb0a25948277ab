"""集群设置资源模块.

提供 persistent / transient 两个分组的集群设置声明式资源处理器。
"""

from .exceptions import ClusterSettingsValidationError
from .schema import CLUSTER_SETTINGS_SCHEMA, GROUPS
from .settings import (
    expand_cluster_settings,
    expand_settings,
    flatten_settings,
    setting_names,
)
from .tool import RESOURCE_ID, ClusterSettingsResource

__all__ = [
    "ClusterSettingsResource",
    "CLUSTER_SETTINGS_SCHEMA",
    "GROUPS",
    "RESOURCE_ID",
    "expand_cluster_settings",
    "expand_settings",
    "flatten_settings",
    "setting_names",
    "ClusterSettingsValidationError",
]
