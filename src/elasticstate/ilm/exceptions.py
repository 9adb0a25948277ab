"""ILM 策略异常定义模块."""

from ..exceptions import ConfigValidationError, ElasticStateError


class PolicyError(ElasticStateError):
    """策略基础异常类.

    所有 ILM 策略相关异常的基类，继承自 ElasticStateError。
    """

    pass


class PolicyValidationError(PolicyError, ConfigValidationError):
    """策略参数校验异常.

    当阶段中出现不支持的动作、阶段名称未知等情况时抛出，
    整个策略的展开随之中止，不会发起任何远程调用。
    """

    pass
