"""索引维护脚本示例.

本文件展示了如何使用 IndexAdminClient 完成日常索引维护：
过期索引清理、别名滚动、别名切换以及分片收缩。
"""

import logging

from indexcurator import (
    AliasAction,
    ClientConfig,
    IndexAdminClient,
    NoMatchingIndicesError,
    ShrinkError,
)

logging.basicConfig(level=logging.INFO)

# 创建管理客户端
client = IndexAdminClient.from_config(
    ClientConfig(
        endpoint="http://localhost:9200",
        username="admin",
        password="adminpassword",
    )
)


# ==================== 示例1：清理过期索引 ====================
def example_cleanup():
    """删除 30 天前创建的日志索引."""
    deleted = client.cleanup_by_age("logs-", 30)
    print(f"已清理 {len(deleted)} 个索引: {deleted}")


# ==================== 示例2：滚动索引 ====================
def example_rollover():
    """满足条件时滚动 logs-current 别名."""
    conditions = {
        "max_age": "7d",
        "max_docs": 1000000,
    }
    result = client.rollover("logs-current", conditions)
    print(f"滚动结果: rolled_over={result.get('rolled_over')}")


# ==================== 示例3：切换别名 ====================
def example_switch_alias():
    """原子地将 users 别名从旧索引切换到新索引."""
    client.reindex("users-v1", "users-v2")
    client.manage_aliases(
        [
            AliasAction.remove("users-v1", "users"),
            AliasAction.add("users-v2", "users"),
        ]
    )


# ==================== 示例4：按模式关闭索引 ====================
def example_close_old_metrics():
    """关闭 2023 年的指标索引."""
    try:
        closed = client.close_indices("metrics-2023.*")
        print(f"已关闭: {closed}")
    except NoMatchingIndicesError as e:
        print(f"没有需要关闭的索引: {e.pattern}")


# ==================== 示例5：收缩索引 ====================
def example_shrink():
    """将索引收缩到 1 个分片，完成后恢复 1 个副本."""
    settings = {
        "number_of_shards": 1,
        "number_of_replicas": 1,
    }
    try:
        client.shrink_index(
            "logs-2023.10.01", "logs-2023.10.01-shrink", settings, timeout=300
        )
        print("索引收缩成功！")
    except ShrinkError as e:
        # 流程不会自动回滚，需要根据失败步骤手工处理
        print(f"收缩失败，步骤: {e.step.value}，原因: {e.__cause__}")


def main():
    """运行所有示例."""
    print("=" * 50)
    print("索引维护示例")
    print("=" * 50)

    print("\n1. 清理过期索引")
    print("-" * 50)
    example_cleanup()

    print("\n2. 滚动索引")
    print("-" * 50)
    example_rollover()

    print("\n3. 切换别名")
    print("-" * 50)
    # 取消注释以下代码以运行别名切换示例
    # example_switch_alias()

    print("\n4. 按模式关闭索引")
    print("-" * 50)
    example_close_old_metrics()

    print("\n5. 收缩索引")
    print("-" * 50)
    example_shrink()


if __name__ == "__main__":
    main()
