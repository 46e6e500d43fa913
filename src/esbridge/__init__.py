"""ES Bridge - Elasticsearch / OpenSearch 生命周期策略与特性兼容工具包.

这是一个用于在 Elasticsearch 和 OpenSearch 之间统一管理索引生命周期策略、
查询特性支持情况的 Python 库。

主要功能:
    - ConnectionFactory: 创建连接并自动探测引擎类型和版本
    - 特性矩阵: 按引擎和主版本判断 ILM、ISM、data stream 等特性
    - LifecyclePolicyManager: 在 ILM 与 ISM 之间转换并管理生命周期策略

使用示例:
    from esbridge import ClusterConfig, ConnectionFactory, LifecyclePolicyManager

    conn = ConnectionFactory(ClusterConfig(hosts=["http://localhost:9200"])).connect()
    manager = LifecyclePolicyManager(conn)
    manager.create_policy(
        "logs_policy",
        {"phases": {"hot": {"actions": {"rollover": {"max_docs": 100000}}}}},
    )
"""

__version__ = "0.1.0"

# 导出引擎探测
from esbridge.capabilities import (
    EngineDetectionError,
    EngineInfo,
    VersionInfo,
    VersionParseError,
    detect_engine,
    parse_version,
    verify_connection,
    version_compare,
    version_gte,
    version_lt,
)

# 导出连接
from esbridge.connection import (
    ClientTransport,
    ClusterConfig,
    Connection,
    ConnectionConfig,
    ConnectionConfigError,
    ConnectionFactory,
    EngineType,
    UnknownEngineError,
)

# 导出异常
from esbridge.exceptions import EsBridgeError, TransportError

# 导出特性矩阵
from esbridge.features import (
    FeatureFlag,
    LifecycleType,
    UnsupportedFeatureError,
    get_feature_summary,
    lifecycle_management_type,
    require_feature,
)

# 导出生命周期策略
from esbridge.lifecycle import (
    LifecyclePolicyManager,
    PolicyNotFoundError,
    PolicyValidationError,
    StaleRevisionError,
    normalize_policy,
    policy_uri,
    transform_phase_to_state,
    transform_state_to_phase,
)

__all__ = [
    # 版本
    "__version__",
    # 连接
    "Connection",
    "EngineType",
    "ClusterConfig",
    "ConnectionConfig",
    "ConnectionFactory",
    "ClientTransport",
    # 引擎探测
    "VersionInfo",
    "EngineInfo",
    "parse_version",
    "detect_engine",
    "verify_connection",
    "version_compare",
    "version_gte",
    "version_lt",
    # 特性矩阵
    "FeatureFlag",
    "LifecycleType",
    "get_feature_summary",
    "lifecycle_management_type",
    "require_feature",
    # 生命周期策略
    "LifecyclePolicyManager",
    "normalize_policy",
    "policy_uri",
    "transform_phase_to_state",
    "transform_state_to_phase",
    # 异常
    "EsBridgeError",
    "TransportError",
    "ConnectionConfigError",
    "UnknownEngineError",
    "VersionParseError",
    "EngineDetectionError",
    "UnsupportedFeatureError",
    "PolicyValidationError",
    "PolicyNotFoundError",
    "StaleRevisionError",
]
