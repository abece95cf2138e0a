"""索引管理客户端核心工具类."""

import json
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime, timedelta
from typing import Any

from elasticsearch import ApiError, Elasticsearch, UnsupportedProductError

from ..connection import ClientConfig, create_es_client
from .exceptions import (
    ClusterResponseError,
    NoMatchingIndicesError,
    ResponseDecodeError,
    ShrinkError,
)
from .models import AliasAction, IndexInfo, Settings, ShrinkStep
from .utils import (
    Deadline,
    match_indices,
    merge_settings,
    parse_creation_date,
    parse_docs_count,
)

logger = logging.getLogger(__name__)

# _cat/indices 返回的列
_CAT_INDICES_COLUMNS = "health,status,index,docs.count,store.size,creation.date.string"


def _error_text(error: ApiError) -> str:
    """提取集群返回的原始错误内容."""
    body = error.body
    if body is None or body == "":
        return str(error.message)
    if isinstance(body, bytes):
        return body.decode("utf-8", errors="replace")
    if isinstance(body, str):
        return body
    return json.dumps(body, ensure_ascii=False)


class IndexAdminClient:
    """索引管理客户端.

    将索引维护操作（列出、按模式/按时间删除、别名管理、滚动、重建、
    打开/关闭、更新设置、收缩）转换为集群管理 API 请求。

    - 每次调用只发送一次请求，不重试
    - 状态码 >= 400 时抛出 ClusterResponseError，消息中带有集群返回的原始内容
    - 连接失败、超时等传输层异常原样抛出
    - 响应缺少 X-Elastic-Product 头（例如 OpenSearch）时抛出
      UnsupportedProductError，不支持此类集群
    - 所有公开方法支持 timeout 关键字参数，作为整个操作的整体超时；
      单次请求的超时不超过 request_timeout

    除底层客户端外不持有可变状态，可在多个线程中共享同一实例。

    Args:
        es_client: Elasticsearch 客户端实例
        request_timeout: 单次请求的超时上限（秒），None 表示使用客户端自身配置
    """

    def __init__(self, es_client: Elasticsearch, request_timeout: float | None = None):
        if es_client is None:
            raise ValueError("es_client 不能为 None")
        if request_timeout is not None and request_timeout <= 0:
            raise ValueError(f"request_timeout 必须 > 0，当前值: {request_timeout}")
        self.es_client = es_client
        self.request_timeout = request_timeout

    @classmethod
    def from_config(cls, config: ClientConfig) -> "IndexAdminClient":
        """根据客户端配置创建管理客户端.

        Example:
            >>> client = IndexAdminClient.from_config(
            ...     ClientConfig("http://localhost:9200", "admin", "admin")
            ... )
        """
        return cls(create_es_client(config), request_timeout=config.request_timeout)

    def _client(self, deadline: Deadline | None) -> Elasticsearch:
        """返回用于下一次请求的客户端.

        整体超时的剩余时间与 request_timeout 取较小值作为本次请求的超时。

        Raises:
            DeadlineExceededError: 整体超时已到期时抛出
        """
        if deadline is None:
            return self.es_client
        remaining = deadline.check()
        if remaining is None:
            return self.es_client
        if self.request_timeout is not None:
            remaining = min(remaining, self.request_timeout)
        return self.es_client.options(request_timeout=remaining)

    @contextmanager
    def _cluster_errors(self, error_message: str) -> Iterator[None]:
        """将状态码 >= 400 的 ApiError 转换为 ClusterResponseError.

        UnsupportedProductError 以及状态码 < 400 的异常原样抛出。

        Args:
            error_message: 错误消息前缀
        """
        try:
            yield
        except UnsupportedProductError:
            raise
        except ApiError as e:
            if e.status_code is None or e.status_code < 400:
                raise
            text = _error_text(e)
            raise ClusterResponseError(
                f"{error_message}: {text}",
                status_code=e.status_code,
                body=text,
            ) from e

    # ============================================================
    # 列出索引
    # ============================================================

    def list_indices(self, *, timeout: float | None = None) -> list[IndexInfo]:
        """列出集群中的所有索引.

        文档数量无法解析时为 0（例如已关闭的索引），创建时间无法解析时为零值，
        两者都不会抛出异常。

        Args:
            timeout: 整体超时时间（秒）

        Returns:
            索引信息列表，集群没有索引时返回空列表

        Raises:
            ResponseDecodeError: 响应不是由 JSON 对象组成的数组时抛出

        Example:
            >>> for info in client.list_indices():
            ...     print(f"{info.name}: {info.docs_count} 文档")
        """
        return self._list_indices(Deadline(timeout))

    def _list_indices(self, deadline: Deadline) -> list[IndexInfo]:
        logger.debug("GET /_cat/indices")
        with self._cluster_errors("列出索引失败"):
            response = self._client(deadline).cat.indices(
                format="json", h=_CAT_INDICES_COLUMNS
            )
        records = response.body
        if not isinstance(records, list):
            raise ResponseDecodeError(
                f"_cat/indices 响应格式错误，期望 JSON 数组，实际为 {type(records).__name__}"
            )

        indices: list[IndexInfo] = []
        for record in records:
            if not isinstance(record, dict):
                raise ResponseDecodeError(
                    f"_cat/indices 响应格式错误，期望 JSON 对象，实际为 {type(record).__name__}"
                )
            indices.append(
                IndexInfo(
                    name=record.get("index", ""),
                    health=record.get("health") or "",
                    status=record.get("status") or "",
                    docs_count=parse_docs_count(record.get("docs.count")),
                    store_size=record.get("store.size") or "",
                    creation_date=parse_creation_date(
                        record.get("creation.date.string")
                    ),
                )
            )
        return indices

    # ============================================================
    # 按模式批量操作
    # ============================================================

    def _match_or_raise(self, pattern: str, deadline: Deadline) -> list[str]:
        matched = match_indices(self._list_indices(deadline), pattern)
        if not matched:
            logger.warning(f"没有索引匹配模式 '{pattern}'")
            raise NoMatchingIndicesError(pattern)
        return matched

    def delete_indices(self, pattern: str, *, timeout: float | None = None) -> list[str]:
        """删除名称匹配通配符模式的所有索引.

        先列出索引再在本地匹配，所有匹配的索引通过一次批量 DELETE 请求删除。

        Args:
            pattern: shell 通配符模式，支持 *、?、[...]
            timeout: 整体超时时间（秒）

        Returns:
            被删除的索引名称列表（按列出顺序）

        Raises:
            NoMatchingIndicesError: 没有索引匹配时抛出，此时不会发送删除请求
            ClusterResponseError: 集群返回错误时抛出

        Example:
            >>> client.delete_indices("logs-2023.*")
        """
        deadline = Deadline(timeout)
        matched = self._match_or_raise(pattern, deadline)
        with self._cluster_errors("删除索引失败"):
            self._client(deadline).indices.delete(index=matched)
        logger.info(f"已删除 {len(matched)} 个索引: {matched}")
        return matched

    def close_indices(self, pattern: str, *, timeout: float | None = None) -> list[str]:
        """关闭名称匹配通配符模式的所有索引.

        匹配逻辑与 delete_indices 相同，没有匹配时同样抛出 NoMatchingIndicesError。

        Args:
            pattern: shell 通配符模式
            timeout: 整体超时时间（秒）

        Returns:
            被关闭的索引名称列表
        """
        return self._close_indices(pattern, Deadline(timeout))

    def _close_indices(self, pattern: str, deadline: Deadline) -> list[str]:
        matched = self._match_or_raise(pattern, deadline)
        with self._cluster_errors("关闭索引失败"):
            self._client(deadline).indices.close(index=matched)
        logger.info(f"已关闭 {len(matched)} 个索引: {matched}")
        return matched

    def cleanup_by_age(
        self, prefix: str, days: int, *, timeout: float | None = None
    ) -> list[str]:
        """删除以 prefix 开头且创建时间早于 days 天前的索引.

        截止时间在调用开始时计算一次。没有符合条件的索引时直接返回空列表，
        不视为错误。

        Args:
            prefix: 索引名称前缀
            days: 保留天数
            timeout: 整体超时时间（秒）

        Returns:
            被删除的索引名称列表

        Example:
            >>> client.cleanup_by_age("logs-", 30)
        """
        if days < 0:
            raise ValueError(f"days 不能为负数，当前值: {days}")

        cutoff = datetime.now(UTC) - timedelta(days=days)
        deadline = Deadline(timeout)

        to_delete = [
            idx.name
            for idx in self._list_indices(deadline)
            if idx.name.startswith(prefix) and idx.creation_date < cutoff
        ]
        if not to_delete:
            logger.info(f"没有需要清理的索引 (前缀: '{prefix}', 保留 {days} 天)")
            return []

        with self._cluster_errors("删除过期索引失败"):
            self._client(deadline).indices.delete(index=to_delete)
        logger.info(f"已清理 {len(to_delete)} 个过期索引: {to_delete}")
        return to_delete

    # ============================================================
    # 别名、滚动与重建
    # ============================================================

    def manage_aliases(
        self, actions: list[AliasAction], *, timeout: float | None = None
    ) -> None:
        """以一次原子请求提交一组别名操作.

        操作按调用方给出的顺序提交，由集群保证整批原子生效。

        Args:
            actions: 别名操作列表
            timeout: 整体超时时间（秒）

        Example:
            >>> client.manage_aliases(
            ...     [
            ...         AliasAction.remove("logs-000001", "logs"),
            ...         AliasAction.add("logs-000002", "logs"),
            ...     ]
            ... )
        """
        if not actions:
            raise ValueError("actions 不能为空")

        with self._cluster_errors("更新别名失败"):
            self._client(Deadline(timeout)).indices.update_aliases(
                actions=[action.to_dict() for action in actions]
            )
        logger.info(f"别名更新成功，共 {len(actions)} 个操作")

    def rollover(
        self,
        alias: str,
        conditions: dict[str, Any],
        *,
        timeout: float | None = None,
    ) -> dict[str, Any]:
        """对别名执行滚动.

        Args:
            alias: 滚动别名名称
            conditions: 滚动条件，原样传给集群，例如
                {"max_age": "7d", "max_docs": 1000000, "max_size": "50gb"}
            timeout: 整体超时时间（秒）

        Returns:
            集群返回的响应内容（包含 old_index、new_index、rolled_over 等字段）
        """
        with self._cluster_errors("滚动索引失败"):
            response = self._client(Deadline(timeout)).indices.rollover(
                alias=alias, conditions=conditions
            )
        result = response.body
        if result.get("rolled_over"):
            logger.info(
                f"索引滚动成功: '{result.get('old_index')}' -> '{result.get('new_index')}'"
            )
        else:
            logger.info(f"别名 '{alias}' 的滚动条件未满足")
        return result

    def reindex(
        self,
        source: str,
        dest: str,
        query: dict[str, Any] | None = None,
        *,
        timeout: float | None = None,
    ) -> dict[str, Any]:
        """将源索引的数据复制到目标索引.

        等待集群返回响应，不轮询后台任务。

        Args:
            source: 源索引名称
            dest: 目标索引名称
            query: 过滤查询条件（可选）
            timeout: 整体超时时间（秒）

        Returns:
            集群返回的响应内容
        """
        source_body: dict[str, Any] = {"index": source}
        if query is not None:
            source_body["query"] = query

        with self._cluster_errors("重建索引失败"):
            response = self._client(Deadline(timeout)).reindex(
                source=source_body, dest={"index": dest}
            )
        result = response.body
        logger.info(
            f"索引 '{source}' 重建到 '{dest}' 完成: total={result.get('total', 0)}"
        )
        return result

    # ============================================================
    # 单索引操作
    # ============================================================

    def open_index(self, name: str, *, timeout: float | None = None) -> None:
        """打开已关闭的索引."""
        self._open_index(name, Deadline(timeout))

    def _open_index(self, name: str, deadline: Deadline) -> None:
        with self._cluster_errors("打开索引失败"):
            self._client(deadline).indices.open(index=name)
        logger.info(f"索引 '{name}' 已打开")

    def update_index_settings(
        self, name: str, settings: Settings, *, timeout: float | None = None
    ) -> None:
        """更新索引设置.

        Args:
            name: 索引名称
            settings: 要更新的设置，值为 None 表示恢复默认值
            timeout: 整体超时时间（秒）
        """
        self._update_index_settings(name, settings, Deadline(timeout))

    def _update_index_settings(
        self, name: str, settings: Settings, deadline: Deadline
    ) -> None:
        with self._cluster_errors("更新索引设置失败"):
            self._client(deadline).indices.put_settings(index=name, settings=settings)
        logger.info(f"索引 '{name}' 设置更新成功")

    # ============================================================
    # 收缩索引
    # ============================================================

    def shrink_index(
        self,
        source: str,
        target: str,
        settings: Settings,
        *,
        timeout: float | None = None,
    ) -> None:
        """收缩索引分片.

        流程：
        1. 关闭源索引
        2. 在调用方设置的基础上强制写入锁、副本数 0、目标分片数
        3. 提交收缩请求
        4. 重新打开源索引
        5. 打开目标索引
        6. 为目标索引恢复调用方要求的副本数并解除写入锁

        注意：流程不具备事务性，任一步骤失败都不会回滚之前的步骤。
        例如收缩请求失败时源索引保持关闭状态。失败的步骤通过 ShrinkError.step 给出。

        Args:
            source: 源索引名称
            target: 目标索引名称
            settings: 目标索引设置，必须包含 number_of_shards，
                number_of_replicas 会在最后一步写回目标索引
            timeout: 整体超时时间（秒），覆盖全部步骤

        Raises:
            ValueError: settings 中缺少 number_of_shards 时抛出，此时不会发送任何请求
            ShrinkError: 任一步骤失败时抛出，原始异常可通过 __cause__ 获取

        Example:
            >>> client.shrink_index(
            ...     "logs-2023.10.01",
            ...     "logs-2023.10.01-shrink",
            ...     {"number_of_shards": 1, "number_of_replicas": 1},
            ... )
        """
        if "number_of_shards" not in settings:
            raise ValueError("settings 必须包含 number_of_shards")

        deadline = Deadline(timeout)

        def fail(step: ShrinkStep, message: str, error: Exception) -> ShrinkError:
            logger.warning(
                f"收缩索引 '{source}' -> '{target}' 在步骤 {step.value} 失败，"
                f"集群可能处于中间状态: {error}"
            )
            return ShrinkError(f"{message}: {error}", step, source, target)

        # 1. 关闭源索引
        try:
            self._close_indices(source, deadline)
        except Exception as e:
            raise fail(
                ShrinkStep.CLOSE_SOURCE, f"关闭源索引 '{source}' 失败", e
            ) from e

        # 2. 构建收缩设置
        shrink_settings = merge_settings(
            settings,
            {
                "index.blocks.write": True,
                "index.number_of_replicas": 0,
                "index.number_of_shards": settings["number_of_shards"],
            },
        )

        # 3. 提交收缩请求，失败时源索引保持关闭
        try:
            with self._cluster_errors("收缩索引失败"):
                self._client(deadline).indices.shrink(
                    index=source, target=target, settings=shrink_settings
                )
        except Exception as e:
            raise fail(
                ShrinkStep.SUBMIT_SHRINK,
                f"收缩索引 '{source}' 到 '{target}' 失败",
                e,
            ) from e
        logger.info(f"索引 '{source}' 已收缩到 '{target}'")

        # 4. 重新打开源索引与目标索引
        try:
            self._open_index(source, deadline)
        except Exception as e:
            raise fail(
                ShrinkStep.REOPEN_SOURCE, f"重新打开源索引 '{source}' 失败", e
            ) from e

        try:
            self._open_index(target, deadline)
        except Exception as e:
            raise fail(
                ShrinkStep.OPEN_TARGET, f"打开目标索引 '{target}' 失败", e
            ) from e

        # 5. 恢复副本数并解除写入锁
        final_settings = {
            "index.number_of_replicas": settings.get("number_of_replicas"),
            "index.blocks.write": None,
        }
        try:
            self._update_index_settings(target, final_settings, deadline)
        except Exception as e:
            raise fail(
                ShrinkStep.APPLY_FINAL_SETTINGS,
                f"为目标索引 '{target}' 应用最终设置失败",
                e,
            ) from e

        logger.info(f"收缩索引完成: '{source}' -> '{target}'")
