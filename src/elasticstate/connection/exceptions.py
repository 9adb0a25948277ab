"""ES 客户端工厂异常定义模块."""

from ..exceptions import ConfigValidationError, ElasticStateError


class ESClientFactoryError(ElasticStateError):
    """客户端工厂基础异常类.

    所有客户端工厂相关异常的基类，继承自 ElasticStateError。
    """

    pass


class ConnectionConfigError(ESClientFactoryError, ConfigValidationError):
    """连接配置校验异常.

    当连接配置参数不合法时抛出，例如 hosts 为空、max_retries 为负数等。
    同时属于本地配置校验错误，不会发起任何远程调用。
    """

    pass
