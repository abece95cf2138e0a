"""索引管理客户端工具函数模块."""

import fnmatch
import logging
import time
from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any

from .exceptions import DeadlineExceededError
from .models import ZERO_TIME, IndexInfo, Settings

logger = logging.getLogger(__name__)


def merge_settings(base: Settings, override: Settings) -> Settings:
    """合并索引设置，键冲突时以 override 为准.

    两个输入都不会被修改。

    Args:
        base: 基础设置
        override: 覆盖设置

    Returns:
        合并后的新字典

    Example:
        >>> merge_settings({"a": 1, "b": 2}, {"b": 3})
        {'a': 1, 'b': 3}
    """
    result = dict(base)
    result.update(override)
    return result


def match_indices(indices: Iterable[IndexInfo], pattern: str) -> list[str]:
    """按 shell 通配符（*、?、[...]）筛选索引名称，保持列出顺序.

    匹配区分大小写。
    """
    return [idx.name for idx in indices if fnmatch.fnmatchcase(idx.name, pattern)]


def parse_docs_count(value: Any) -> int:
    """解析文档数量，无法解析时返回 0."""
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def parse_creation_date(value: Any) -> datetime:
    """解析 RFC3339 格式的创建时间，无法解析时返回 ZERO_TIME.

    不带时区的时间按 UTC 处理。
    """
    if not isinstance(value, str) or not value:
        return ZERO_TIME
    try:
        parsed = datetime.fromisoformat(value)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=UTC)
        # 边界值（例如 0001-01-01T00:00:00+01:00）转换到 UTC 时会溢出
        return parsed.astimezone(UTC)
    except (ValueError, OverflowError):
        logger.debug(f"无法解析索引创建时间: {value!r}")
        return ZERO_TIME


class Deadline:
    """单次操作的整体超时.

    多步骤操作共享同一个 Deadline，每次请求前计算剩余时间。

    Args:
        timeout: 整体超时时间（秒），None 表示不限制
    """

    def __init__(self, timeout: float | None = None):
        if timeout is not None and timeout <= 0:
            raise ValueError(f"timeout 必须 > 0，当前值: {timeout}")
        self.timeout = timeout
        self._expires_at = None if timeout is None else time.monotonic() + timeout

    def remaining(self) -> float | None:
        """返回剩余秒数，不限制时返回 None."""
        if self._expires_at is None:
            return None
        return max(self._expires_at - time.monotonic(), 0.0)

    def check(self) -> float | None:
        """检查是否已到期，返回剩余秒数.

        Raises:
            DeadlineExceededError: 已到期时抛出
        """
        remaining = self.remaining()
        if remaining is not None and remaining <= 0:
            raise DeadlineExceededError(f"操作超时（{self.timeout} 秒）")
        return remaining
