"""索引管理客户端模块.

该模块通过集群管理 API 提供索引维护操作，包括：
- 列出索引
- 按通配符模式删除、关闭索引
- 按创建时间清理过期索引
- 别名管理、滚动、重建索引
- 打开索引、更新索引设置
- 收缩索引（多步骤流程）

示例用法:
    >>> from indexcurator.admin import IndexAdminClient
    >>> from indexcurator.connection import ClientConfig
    >>> client = IndexAdminClient.from_config(
    ...     ClientConfig("http://localhost:9200", "admin", "admin")
    ... )
    >>> # 清理 30 天前的日志索引
    >>> client.cleanup_by_age("logs-", 30)
    >>> # 收缩索引到 1 个分片
    >>> client.shrink_index(
    ...     "logs-2023.10.01",
    ...     "logs-2023.10.01-shrink",
    ...     {"number_of_shards": 1, "number_of_replicas": 1},
    ... )
"""

from .exceptions import (
    AdminClientError,
    ClusterResponseError,
    DeadlineExceededError,
    NoMatchingIndicesError,
    ResponseDecodeError,
    ShrinkError,
)
from .models import (
    ZERO_TIME,
    AliasAction,
    AliasActionType,
    IndexInfo,
    Settings,
    ShrinkStep,
)
from .tool import IndexAdminClient
from .utils import Deadline, match_indices, merge_settings

__all__ = [
    # 核心类
    "IndexAdminClient",
    # 数据模型
    "IndexInfo",
    "AliasAction",
    "AliasActionType",
    "ShrinkStep",
    "ZERO_TIME",
    # 类型定义
    "Settings",
    # 工具
    "Deadline",
    "match_indices",
    "merge_settings",
    # 异常类
    "AdminClientError",
    "ClusterResponseError",
    "DeadlineExceededError",
    "NoMatchingIndicesError",
    "ResponseDecodeError",
    "ShrinkError",
]
