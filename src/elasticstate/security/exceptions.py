"""安全（API Key）资源异常定义模块."""

from ..exceptions import ConfigValidationError


class RoleDescriptorError(ConfigValidationError):
    """角色描述校验异常.

    当 role_descriptors 中某个角色的描述不是 JSON 对象时抛出。
    """

    pass
