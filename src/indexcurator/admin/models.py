"""索引管理客户端数据模型定义模块."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

# 创建时间无法解析时使用的零值
ZERO_TIME = datetime.min.replace(tzinfo=UTC)

Settings = dict[str, Any]


@dataclass
class IndexInfo:
    """索引信息数据类.

    从 _cat/indices 响应投影得到，每次列出索引时重新获取，不做缓存。

    Attributes:
        name: 索引名称
        health: 健康状态（green、yellow、red）
        status: 索引状态（open、close）
        docs_count: 文档数量，无法解析时为 0
        store_size: 存储大小（可读字符串，例如 "1.2gb"）
        creation_date: 创建时间（UTC），无法解析时为 ZERO_TIME
    """

    name: str
    health: str = ""
    status: str = ""
    docs_count: int = 0
    store_size: str = ""
    creation_date: datetime = ZERO_TIME


class AliasActionType(Enum):
    """别名操作类型枚举.

    Attributes:
        ADD: 为索引添加别名
        REMOVE: 从索引移除别名
    """

    ADD = "add"
    REMOVE = "remove"


@dataclass
class AliasAction:
    """别名操作.

    params 原样透传给集群，例如 index、alias、routing、filter、is_write_index，
    本地不做校验。

    Attributes:
        type: 操作类型
        params: 操作参数

    Examples:
        >>> AliasAction.add("logs-000002", "logs", is_write_index=True).to_dict()
        {'add': {'index': 'logs-000002', 'alias': 'logs', 'is_write_index': True}}
    """

    type: AliasActionType
    params: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def add(cls, index: str, alias: str, **extra: Any) -> "AliasAction":
        return cls(AliasActionType.ADD, {"index": index, "alias": alias, **extra})

    @classmethod
    def remove(cls, index: str, alias: str, **extra: Any) -> "AliasAction":
        return cls(AliasActionType.REMOVE, {"index": index, "alias": alias, **extra})

    def to_dict(self) -> dict[str, Any]:
        """转换为 _aliases 接口的 action 格式."""
        return {self.type.value: dict(self.params)}


class ShrinkStep(Enum):
    """收缩索引流程步骤枚举.

    Attributes:
        CLOSE_SOURCE: 关闭源索引
        SUBMIT_SHRINK: 提交收缩请求
        REOPEN_SOURCE: 重新打开源索引
        OPEN_TARGET: 打开目标索引
        APPLY_FINAL_SETTINGS: 为目标索引恢复副本数并解除写入锁
    """

    CLOSE_SOURCE = "close_source"
    SUBMIT_SHRINK = "submit_shrink"
    REOPEN_SOURCE = "reopen_source"
    OPEN_TARGET = "open_target"
    APPLY_FINAL_SETTINGS = "apply_final_settings"
