"""连接配置数据模型定义模块."""

from dataclasses import dataclass

from .exceptions import ConnectionConfigError


@dataclass(frozen=True)
class ClientConfig:
    """集群管理客户端配置模型.

    定义管理客户端访问集群所需的连接信息。实例创建后不可修改。

    Attributes:
        endpoint: 集群地址，例如 "http://localhost:9200"（必需，末尾的 / 会被去除）
        username: Basic Auth 用户名
        password: Basic Auth 密码
        request_timeout: 单次请求超时时间（秒），默认 30，必须 > 0
        verify_certs: 是否验证 SSL 证书，默认 True
        ca_certs: CA 证书文件路径

    Raises:
        ConnectionConfigError: 当参数不合法时抛出

    Examples:
        >>> config = ClientConfig(
        ...     endpoint="http://localhost:9200",
        ...     username="admin",
        ...     password="changeme",
        ... )
    """

    endpoint: str
    username: str | None = None
    password: str | None = None
    request_timeout: float = 30
    verify_certs: bool = True
    ca_certs: str | None = None

    def __post_init__(self) -> None:
        """校验配置参数合法性."""
        if not self.endpoint or not self.endpoint.strip():
            raise ConnectionConfigError("endpoint 不能为空，请提供集群地址")
        # frozen dataclass 只能通过 object.__setattr__ 规范化字段
        object.__setattr__(self, "endpoint", self.endpoint.strip().rstrip("/"))

        if self.request_timeout <= 0:
            raise ConnectionConfigError(
                f"request_timeout 必须 > 0，当前值: {self.request_timeout}"
            )
        if (self.username is None) != (self.password is None):
            raise ConnectionConfigError("username 和 password 必须同时提供")

    @property
    def basic_auth(self) -> tuple[str, str] | None:
        """返回 Basic Auth 凭据元组，未配置时返回 None."""
        if self.username is None or self.password is None:
            return None
        return (self.username, self.password)
