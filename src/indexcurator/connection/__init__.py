"""连接模块 - 管理客户端配置与底层传输客户端的创建.

主要组件:
    - ClientConfig: 客户端配置模型
    - create_es_client: 根据配置创建 Elasticsearch 客户端

使用示例:
    from indexcurator.connection import ClientConfig, create_es_client

    config = ClientConfig(endpoint="http://localhost:9200", username="admin", password="admin")
    es_client = create_es_client(config)
"""

from .exceptions import ConnectionConfigError
from .models import ClientConfig
from .tool import create_es_client

__all__ = [
    # 工厂函数
    "create_es_client",
    # 模型
    "ClientConfig",
    # 异常
    "ConnectionConfigError",
]
