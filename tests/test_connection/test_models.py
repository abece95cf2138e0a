"""ClientConfig 单元测试."""

import dataclasses

import pytest

from indexcurator.connection.exceptions import ConnectionConfigError
from indexcurator.connection.models import ClientConfig


class TestClientConfig:
    """ClientConfig 测试."""

    def test_defaults(self) -> None:
        """测试默认值."""
        config = ClientConfig(endpoint="http://localhost:9200")
        assert config.request_timeout == 30
        assert config.verify_certs is True
        assert config.ca_certs is None
        assert config.basic_auth is None

    def test_endpoint_trailing_slash_stripped(self) -> None:
        """测试去除 endpoint 末尾的 /."""
        config = ClientConfig(endpoint=" http://localhost:9200/ ")
        assert config.endpoint == "http://localhost:9200"

    @pytest.mark.parametrize("endpoint", ["", "   "])
    def test_empty_endpoint_raises(self, endpoint) -> None:
        """测试 endpoint 为空时抛出异常."""
        with pytest.raises(ConnectionConfigError, match="endpoint 不能为空"):
            ClientConfig(endpoint=endpoint)

    @pytest.mark.parametrize("timeout", [0, -5])
    def test_invalid_timeout_raises(self, timeout) -> None:
        """测试 request_timeout 不大于 0 时抛出异常."""
        with pytest.raises(ConnectionConfigError, match="request_timeout"):
            ClientConfig(endpoint="http://localhost:9200", request_timeout=timeout)

    def test_partial_credentials_raises(self) -> None:
        """测试只提供用户名时抛出异常."""
        with pytest.raises(ConnectionConfigError, match="username 和 password"):
            ClientConfig(endpoint="http://localhost:9200", username="admin")

    def test_basic_auth(self) -> None:
        """测试 Basic Auth 凭据."""
        config = ClientConfig("http://localhost:9200", "admin", "secret")
        assert config.basic_auth == ("admin", "secret")

    def test_immutable(self) -> None:
        """测试配置创建后不可修改."""
        config = ClientConfig(endpoint="http://localhost:9200")
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.endpoint = "http://other:9200"
