"""连接数据模型单元测试."""

import pytest

from elasticstate.connection.exceptions import ConnectionConfigError
from elasticstate.connection.models import ClusterConfig, CompositeId, ConnectionConfig
from elasticstate.exceptions import CompositeIdError, ConfigValidationError


class TestClusterConfig:
    """ClusterConfig 测试."""

    def test_empty_hosts_raises_error(self) -> None:
        """测试空 hosts 抛出 ConnectionConfigError."""
        with pytest.raises(ConnectionConfigError, match="hosts 不能为空"):
            ClusterConfig(hosts=[])

    def test_username_without_password(self) -> None:
        """测试只提供用户名时抛出异常."""
        with pytest.raises(ConnectionConfigError, match="同时提供"):
            ClusterConfig(hosts=["http://a:9200"], username="elastic")

    def test_connection_error_is_config_error(self) -> None:
        """测试连接配置异常属于本地配置校验错误."""
        with pytest.raises(ConfigValidationError):
            ClusterConfig(hosts=[])

    def test_from_env(self) -> None:
        """测试从环境变量构建配置."""
        config = ClusterConfig.from_env(
            {
                "ELASTICSEARCH_ENDPOINTS": "http://a:9200, http://b:9200,",
                "ELASTICSEARCH_USERNAME": "elastic",
                "ELASTICSEARCH_PASSWORD": "changeme",
                "ELASTICSEARCH_INSECURE": "true",
            }
        )
        assert config.hosts == ["http://a:9200", "http://b:9200"]
        assert config.username == "elastic"
        assert config.password == "changeme"
        assert config.api_key is None
        assert config.verify_certs is False

    def test_from_env_missing_endpoints(self) -> None:
        """测试未设置集群地址时抛出异常."""
        with pytest.raises(ConnectionConfigError, match="ELASTICSEARCH_ENDPOINTS"):
            ClusterConfig.from_env({})

    def test_from_dict(self) -> None:
        """测试从资源级连接配置块构建配置."""
        config = ClusterConfig.from_dict(
            {"endpoints": ["https://x:9200"], "api_key": "k", "ca_file": "/ca.pem"}
        )
        assert config.hosts == ["https://x:9200"]
        assert config.api_key == "k"
        assert config.ca_certs == "/ca.pem"
        assert config.verify_certs is True

    def test_cache_key_is_hashable(self) -> None:
        """测试缓存键可哈希且相同配置相等."""
        a = ClusterConfig(hosts=["http://a:9200"], api_key="k")
        b = ClusterConfig(hosts=["http://a:9200"], api_key="k")
        assert {a.cache_key(): 1}[b.cache_key()] == 1


class TestConnectionConfig:
    """ConnectionConfig 测试."""

    def test_defaults(self) -> None:
        """测试默认值."""
        config = ConnectionConfig()
        assert config.max_retries == 3
        assert config.retry_on_timeout is False
        assert config.request_timeout == 30

    def test_negative_max_retries(self) -> None:
        """测试负数重试次数抛出异常."""
        with pytest.raises(ConnectionConfigError, match="max_retries"):
            ConnectionConfig(max_retries=-1)

    def test_negative_timeout(self) -> None:
        """测试负数超时抛出异常."""
        with pytest.raises(ConnectionConfigError, match="request_timeout"):
            ConnectionConfig(request_timeout=-1)


class TestCompositeId:
    """CompositeId 测试."""

    @pytest.mark.parametrize(
        "cluster_id,resource_id",
        [("abc123", "logs_policy"), ("uuid", "cluster-settings"), ("u", "VuaCfGcBCdbkQm-e5aOx")],
    )
    def test_round_trip(self, cluster_id: str, resource_id: str) -> None:
        """测试格式化后再解析得到原值."""
        composite_id = CompositeId(cluster_id, resource_id)
        assert CompositeId.from_str(str(composite_id)) == composite_id

    def test_str(self) -> None:
        """测试字符串格式."""
        assert str(CompositeId("abc", "logs")) == "abc/logs"

    @pytest.mark.parametrize("value", ["", "abc", "abc/", "/logs", "a/b/c", "//"])
    def test_malformed(self, value: str) -> None:
        """测试格式错误的标识符."""
        with pytest.raises(CompositeIdError, match="错误的资源 ID"):
            CompositeId.from_str(value)

    def test_non_string(self) -> None:
        """测试非字符串输入."""
        with pytest.raises(CompositeIdError):
            CompositeId.from_str(None)  # type: ignore[arg-type]
