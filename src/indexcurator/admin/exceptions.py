"""索引管理客户端异常定义模块."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..exceptions import IndexCuratorError

if TYPE_CHECKING:
    from .models import ShrinkStep


class AdminClientError(IndexCuratorError):
    """索引管理客户端基础异常类."""

    pass


class ClusterResponseError(AdminClientError):
    """集群返回错误状态码（>= 400）异常.

    消息中包含集群返回的原始响应内容，不解析结构化错误码。

    Attributes:
        status_code: HTTP 状态码
        body: 集群返回的原始响应文本
    """

    def __init__(self, message: str, status_code: int | None, body: str):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class NoMatchingIndicesError(AdminClientError):
    """索引匹配模式没有匹配到任何索引.

    Attributes:
        pattern: 调用方传入的匹配模式
    """

    def __init__(self, pattern: str):
        super().__init__(f"没有索引匹配模式: {pattern}")
        self.pattern = pattern


class ResponseDecodeError(AdminClientError):
    """集群响应格式不符合预期."""

    pass


class DeadlineExceededError(AdminClientError):
    """调用方设置的整体超时已到期."""

    pass


class ShrinkError(AdminClientError):
    """收缩索引流程中某一步骤失败.

    流程不具备事务性，失败时集群可能处于中间状态，需要调用方根据 step 自行处理。

    Attributes:
        step: 失败的步骤
        source: 源索引名称
        target: 目标索引名称
    """

    def __init__(self, message: str, step: ShrinkStep, source: str, target: str):
        super().__init__(message)
        self.step = step
        self.source = source
        self.target = target
