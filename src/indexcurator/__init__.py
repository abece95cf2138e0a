"""indexcurator - 搜索集群索引维护客户端.

通过集群的 HTTP 管理 API 执行日常索引维护任务，例如过期索引清理、
别名切换、滚动和分片收缩。

主要功能:
    - IndexAdminClient: 索引管理客户端
    - ClientConfig: 客户端配置

使用示例:
    from indexcurator import ClientConfig, IndexAdminClient

    client = IndexAdminClient.from_config(
        ClientConfig(endpoint="http://localhost:9200", username="admin", password="admin")
    )
    client.cleanup_by_age("logs-", 30)
"""

__version__ = "0.1.0"

# 导出管理客户端
from indexcurator.admin import (
    AliasAction,
    AliasActionType,
    IndexAdminClient,
    IndexInfo,
    ShrinkStep,
    merge_settings,
)

# 导出连接配置
from indexcurator.connection import ClientConfig, create_es_client

# 导出异常
from indexcurator.admin.exceptions import (
    AdminClientError,
    ClusterResponseError,
    DeadlineExceededError,
    NoMatchingIndicesError,
    ResponseDecodeError,
    ShrinkError,
)
from indexcurator.connection.exceptions import ConnectionConfigError
from indexcurator.exceptions import IndexCuratorError

__all__ = [
    # 版本
    "__version__",
    # 客户端
    "IndexAdminClient",
    "ClientConfig",
    "create_es_client",
    # 数据模型
    "IndexInfo",
    "AliasAction",
    "AliasActionType",
    "ShrinkStep",
    "merge_settings",
    # 异常
    "IndexCuratorError",
    "ConnectionConfigError",
    "AdminClientError",
    "ClusterResponseError",
    "DeadlineExceededError",
    "NoMatchingIndicesError",
    "ResponseDecodeError",
    "ShrinkError",
]
