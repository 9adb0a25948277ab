"""集群设置异常定义模块."""

from ..exceptions import ConfigValidationError


class ClusterSettingsValidationError(ConfigValidationError):
    """集群设置校验异常.

    当设置条目同时提供或都未提供 value 与 value_list，或同一分组中
    出现重复的设置名称时抛出。
    """

    pass
