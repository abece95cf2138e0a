"""集群传输客户端构建模块.

根据 ClientConfig 创建底层 Elasticsearch 客户端，管理客户端的所有 HTTP
请求都经由该客户端发出。

使用示例:
    from indexcurator.connection import ClientConfig, create_es_client

    es_client = create_es_client(ClientConfig(endpoint="http://localhost:9200"))
"""

from __future__ import annotations

import logging
from typing import Any

from elasticsearch import Elasticsearch

from .models import ClientConfig

logger = logging.getLogger(__name__)


def create_es_client(config: ClientConfig) -> Elasticsearch:
    """根据配置创建 Elasticsearch 客户端实例.

    每次调用只发送一次请求：重试次数固定为 0，超时也不重试。

    Args:
        config: 客户端配置

    Returns:
        Elasticsearch 客户端实例
    """
    kwargs: dict[str, Any] = {
        "hosts": [config.endpoint],
        "request_timeout": config.request_timeout,
        "max_retries": 0,
        "retry_on_timeout": False,
        "verify_certs": config.verify_certs,
    }

    # Basic Auth 认证
    if config.basic_auth is not None:
        kwargs["basic_auth"] = config.basic_auth

    # SSL/TLS 配置
    if config.ca_certs:
        kwargs["ca_certs"] = config.ca_certs

    logger.debug(f"创建集群客户端: {config.endpoint}")
    return Elasticsearch(**kwargs)
