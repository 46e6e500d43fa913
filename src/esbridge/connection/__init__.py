"""连接模块 - 定义 Connection 记录并统一管理 Elasticsearch / OpenSearch 客户端.

主要组件:
    - Connection: 不可变连接记录（引擎、主版本号、传输层）
    - EngineType: 引擎类型枚举
    - ConnectionFactory: 连接工厂，支持自动探测引擎和版本
    - ClientTransport: 基于 Elasticsearch 客户端的传输层
    - ClusterConfig / ConnectionConfig: 配置模型

使用示例:
    from esbridge.connection import ClusterConfig, ConnectionFactory

    factory = ConnectionFactory(ClusterConfig(hosts=["http://localhost:9200"]))
    conn = factory.connect()
"""

from .exceptions import (
    BridgeConnectionError,
    ConnectionConfigError,
    UnknownEngineError,
)
from .models import ClusterConfig, Connection, ConnectionConfig, EngineType
from .tool import ClientTransport, ConnectionFactory

__all__ = [
    # 工厂与传输层
    "ConnectionFactory",
    "ClientTransport",
    # 模型
    "Connection",
    "EngineType",
    "ClusterConfig",
    "ConnectionConfig",
    # 异常
    "BridgeConnectionError",
    "ConnectionConfigError",
    "UnknownEngineError",
]
