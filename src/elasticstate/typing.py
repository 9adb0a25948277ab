"""elasticstate 类型定义模块."""

from typing import Any, Dict, List

# 声明式配置树（资源块）
ConfigDict = Dict[str, Any]

# 单元素嵌套块列表，例如 hot = [{...}]
BlockList = List[ConfigDict]

# 发往集群 API 的请求/响应文档
BodyDict = Dict[str, Any]

# 集群设置分组，格式: {设置名: 值 | 值列表 | None}
SettingsDict = Dict[str, Any]
