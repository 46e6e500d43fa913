"""生命周期策略管理使用示例.

本文件展示了如何使用 esbridge 在 Elasticsearch（ILM）和 OpenSearch（ISM）上
用同一份阶段格式策略管理索引生命周期。
"""

import logging

from esbridge import (
    ClusterConfig,
    ConnectionFactory,
    FeatureFlag,
    LifecyclePolicyManager,
    StaleRevisionError,
    UnsupportedFeatureError,
    get_feature_summary,
    normalize_policy,
    require_feature,
)
from esbridge.lifecycle import ActionTranslation, convert_phases_to_states, register_action

logging.basicConfig(level=logging.INFO)

# 一份阶段格式策略：hot 阶段按文档数滚动，30 天后删除
LOGS_POLICY = {
    "phases": {
        "hot": {
            "actions": {
                "rollover": {"max_docs": 100000, "max_age": "1d"},
                "set_priority": {"priority": 100},  # ISM 不支持，转换时丢弃
            }
        },
        "warm": {"min_age": "7d", "actions": {"force_merge": {"max_num_segments": 1}}},
        "delete": {"min_age": "30d", "actions": {"delete": {}}},
    }
}


# ==================== 示例1：离线转换 ====================
def example_offline_transform():
    """不连接集群，直接查看转换结果和诊断信息."""
    result = convert_phases_to_states(LOGS_POLICY)

    print("转换后的状态:")
    for state in result.policy["states"]:
        print(f"  {state['name']}: {state['actions']} -> {state.get('transitions', [])}")

    print("诊断信息:")
    for diagnostic in result.diagnostics:
        print(f"  [{diagnostic.reason.value}] {diagnostic.stage}: {diagnostic.message}")

    # 规范化是幂等的
    ism_policy = normalize_policy(LOGS_POLICY, "opensearch")
    assert normalize_policy(ism_policy, "opensearch") is ism_policy


# ==================== 示例2：自动探测引擎并创建策略 ====================
def example_create_policy(hosts):
    """探测集群类型后创建（或更新）策略."""
    with ConnectionFactory(ClusterConfig(hosts=hosts)) as factory:
        conn = factory.connect()
        print(f"集群: {conn.engine.value} {conn.version}")
        print(f"特性: {get_feature_summary(conn)}")

        manager = LifecyclePolicyManager(conn)
        try:
            # 策略已存在时自动改为更新
            print(manager.create_policy("logs_policy", LOGS_POLICY))
        except UnsupportedFeatureError as e:
            print(f"集群不支持生命周期管理: {e}")
            return
        except StaleRevisionError as e:
            print(f"策略在更新期间被其他写入方修改，请重新读取后再试: {e}")
            return

        print(manager.get_policy("logs_policy"))


# ==================== 示例3：显式配置引擎 ====================
def example_configured_opensearch():
    """已知引擎和版本时不请求根端点."""
    cluster = ClusterConfig(
        hosts=["https://localhost:9200"],
        engine="opensearch",
        version=2,
        headers={"authorization": "Basic YWRtaW46YWRtaW4="},
        verify_certs=False,
    )
    with ConnectionFactory(cluster) as factory:
        conn = factory.connect()
        require_feature(conn, FeatureFlag.DATA_STREAMS, "日志写入需要 data stream")
        manager = LifecyclePolicyManager(conn)
        print(manager.delete_policy("logs_policy"))


# ==================== 示例4：注册自定义动作 ====================
def example_custom_action():
    """注册新的动作转换，无需修改转换逻辑."""
    register_action(
        ActionTranslation.renamed(
            "searchable_snapshot",
            "snapshot",
            {"snapshot_repository": "repository"},
        )
    )
    policy = {
        "phases": {
            "cold": {
                "min_age": "60d",
                "actions": {"searchable_snapshot": {"snapshot_repository": "backups"}},
            }
        }
    }
    print(normalize_policy(policy, "opensearch"))


def main():
    print("=" * 50)
    print("生命周期策略示例")
    print("=" * 50)

    print("\n1. 离线转换示例")
    print("-" * 50)
    example_offline_transform()

    print("\n2. 自动探测并创建策略示例")
    print("-" * 50)
    # 取消注释以下代码以连接本地集群
    # example_create_policy(["http://localhost:9200"])

    print("\n3. 显式配置 OpenSearch 示例")
    print("-" * 50)
    # example_configured_opensearch()

    print("\n4. 自定义动作示例")
    print("-" * 50)
    example_custom_action()


if __name__ == "__main__":
    main()
