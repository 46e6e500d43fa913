"""引擎探测模块.

识别集群的引擎类型（Elasticsearch / OpenSearch）并解析结构化版本号。
"""

from .exceptions import CapabilityError, EngineDetectionError, VersionParseError
from .models import EngineInfo, VersionInfo
from .tool import (
    detect_engine,
    get_cluster_info,
    parse_version,
    verify_connection,
    version_compare,
    version_gte,
    version_lt,
)

__all__ = [
    # 模型
    "VersionInfo",
    "EngineInfo",
    # 函数
    "parse_version",
    "detect_engine",
    "get_cluster_info",
    "verify_connection",
    "version_compare",
    "version_gte",
    "version_lt",
    # 异常
    "CapabilityError",
    "VersionParseError",
    "EngineDetectionError",
]
