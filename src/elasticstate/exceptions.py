"""elasticstate 异常定义模块."""

from typing import Any


class ElasticStateError(Exception):
    """elasticstate 基础异常类."""

    pass


class ConfigValidationError(ElasticStateError):
    """本地配置校验异常.

    在发起任何远程调用之前抛出，例如 JSON 格式错误、不支持的动作名称等。
    """

    pass


class CompositeIdError(ConfigValidationError):
    """组合标识符格式异常."""

    pass


class ApiRequestError(ElasticStateError):
    """远程 API 请求异常.

    当集群返回非 2xx 状态码时抛出，携带服务端返回的错误详情。

    Attributes:
        summary: 操作失败摘要
        status_code: HTTP 状态码
        detail: 服务端返回的错误内容
    """

    def __init__(
        self,
        summary: str,
        status_code: int | None = None,
        detail: Any = None,
    ) -> None:
        self.summary = summary
        self.status_code = status_code
        self.detail = detail
        message = summary
        if status_code is not None:
            message = f"{message} (status {status_code})"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
