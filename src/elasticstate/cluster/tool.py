"""集群设置资源处理器模块."""

import logging

from ..resource import Resource, ResourceData
from .schema import CLUSTER_SETTINGS_SCHEMA, GROUPS
from .settings import expand_cluster_settings, flatten_settings, setting_names

logger = logging.getLogger(__name__)

# 集群设置在每个集群中只有一份，组合标识符使用固定的资源标识
RESOURCE_ID = "cluster-settings"


class ClusterSettingsResource(Resource):
    """集群设置资源处理器.

    只管理声明过的设置；不再声明的设置在下一次应用时以 null 值发送，
    从集群中移除。
    """

    type_name = "elasticstack_elasticsearch_cluster_settings"
    description = (
        "Updates cluster-wide settings. See: https://www.elastic.co/guide/en/"
        "elasticsearch/reference/current/cluster-update-settings.html"
    )
    schema = CLUSTER_SETTINGS_SCHEMA

    def put(self, data: ResourceData) -> ResourceData:
        """应用声明的设置并移除不再声明的设置，完成后读取最新状态."""
        groups = expand_cluster_settings(data.state, data.config)

        client = self.api_client(data)
        composite_id = client.composite_id(RESOURCE_ID)
        logger.debug(f"发送集群设置到集群: {groups}")
        client.put_cluster_settings(groups["persistent"], groups["transient"])
        logger.info(
            f"集群设置已更新: persistent={len(groups['persistent'])}, "
            f"transient={len(groups['transient'])}"
        )

        data.set_id(str(composite_id))
        return self.read(data)

    def read(self, data: ResourceData) -> ResourceData:
        """读取受管理的集群设置."""
        self.parse_id(data)
        client = self.api_client(data)
        response = client.get_cluster_settings()

        for group in GROUPS:
            blocks = flatten_settings(response.get(group), setting_names(data.get(group)))
            if blocks is None:
                data.unset(group)
            else:
                data.set(group, blocks)
        return data

    def delete(self, data: ResourceData) -> ResourceData:
        """将所有受管理的设置置为 null 并清空本地 ID."""
        self.parse_id(data)
        groups = {
            group: {name: None for name in setting_names(data.state.get(group))}
            for group in GROUPS
        }
        client = self.api_client(data)
        client.put_cluster_settings(groups["persistent"], groups["transient"])
        logger.info("受管理的集群设置已全部移除")
        data.set_id("")
        return data
