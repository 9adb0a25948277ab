"""测试公共 fixtures."""

from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock

import pytest
from elasticsearch import ApiError, NotFoundError

from elasticstate.connection import ApiClient

CLUSTER_UUID = "uuid-1"

ApiErrorFactory = Callable[..., ApiError]


def _make_api_error(
    error_class: type[ApiError] = ApiError,
    status: int = 400,
    body: Any = None,
    message: str = "error",
) -> ApiError:
    return error_class(message=message, meta=MagicMock(status=status), body=body)


@pytest.fixture
def api_error() -> ApiErrorFactory:
    """返回构造 elasticsearch ApiError 的工厂函数."""
    return _make_api_error


@pytest.fixture
def not_found() -> NotFoundError:
    """构造 404 NotFoundError."""
    return _make_api_error(
        NotFoundError,
        status=404,
        body={"error": {"type": "resource_not_found_exception"}},
        message="not found",
    )


@pytest.fixture
def es_client() -> MagicMock:
    """创建模拟的 Elasticsearch 客户端."""
    client = MagicMock()
    client.info.return_value = {"cluster_uuid": CLUSTER_UUID}
    return client


@pytest.fixture
def client_factory(es_client: MagicMock) -> MagicMock:
    """创建返回模拟 ApiClient 的客户端工厂."""
    factory = MagicMock()
    factory.get_api_client.side_effect = lambda connection_block=None: ApiClient(es_client)
    return factory
