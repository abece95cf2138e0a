"""连接配置异常定义模块."""

from ..exceptions import IndexCuratorError


class ConnectionConfigError(IndexCuratorError):
    """连接配置校验异常.

    当连接配置参数不合法时抛出，例如 endpoint 为空、request_timeout 不大于 0、
    用户名和密码只提供了其中一个等。
    """

    pass
