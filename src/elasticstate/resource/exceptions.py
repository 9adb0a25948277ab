"""资源处理器异常定义模块."""

from ..exceptions import ConfigValidationError, ElasticStateError


class ResourceError(ElasticStateError):
    """资源处理器基础异常类."""

    pass


class ResourceNotFoundError(ResourceError):
    """远程对象不存在异常.

    仅在导入时抛出；普通读取发现对象不存在时清空本地 ID 而不抛出异常。
    """

    pass


class ResourceTypeNotFoundError(ResourceError, ConfigValidationError):
    """资源类型未注册异常."""

    pass


class ReplacementRequiredError(ResourceError, ConfigValidationError):
    """不可变参数发生变化，需要先删除再重建资源."""

    def __init__(self, attributes: list[str]) -> None:
        self.attributes = attributes
        super().__init__(f"以下参数不可原地修改，需要重建资源: {', '.join(attributes)}")
