"""声明式 Schema 异常定义模块."""

from ..exceptions import ConfigValidationError


class SchemaValidationError(ConfigValidationError):
    """配置不符合 Schema 定义.

    异常消息中包含出错参数的完整路径，例如 ``hot.0.rollover.0.max_docs``。
    """

    pass


class JsonDecodeError(ConfigValidationError):
    """JSON 字符串参数解析失败."""

    pass
