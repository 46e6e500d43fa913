"""引擎探测工具模块.

解析集群根端点的自描述信息，识别引擎类型（Elasticsearch / OpenSearch）
和结构化版本号，并提供版本比较函数。

使用示例:
    from esbridge.capabilities import verify_connection, version_gte, parse_version

    info = verify_connection(conn)
    if version_gte(info.version, parse_version("7.10")):
        ...
"""

import logging
import re
from typing import Any

from ..connection.models import Connection, EngineType
from .exceptions import EngineDetectionError, VersionParseError
from .models import EngineInfo, VersionInfo

logger = logging.getLogger(__name__)

# 版本号分量：忽略预发布后缀，如 "0-SNAPSHOT"、"0-rc1"
_COMPONENT_PATTERN = re.compile(r"^(\d+)(?:[-+].*)?$")


def _parse_component(version_str: str, component: str) -> int:
    match = _COMPONENT_PATTERN.match(component)
    if match is None:
        raise VersionParseError(f"不合法的版本号: {version_str!r}")
    return int(match.group(1))


def parse_version(version_str: str | None) -> VersionInfo | None:
    """解析版本字符串.

    Args:
        version_str: 版本字符串，如 "7.17.0"、"2.19"；None 时返回 None

    Returns:
        VersionInfo；未提供修订号时 patch 为 None

    Raises:
        VersionParseError: 当版本字符串不合法时抛出

    Examples:
        >>> parse_version("7.17.0")
        VersionInfo(major=7, minor=17, patch=0)
        >>> parse_version("7.17").to_dict()
        {'major': 7, 'minor': 17}
        >>> parse_version(None) is None
        True
    """
    if version_str is None:
        return None
    if not isinstance(version_str, str):
        raise VersionParseError(f"版本号必须为字符串，当前值: {version_str!r}")

    parts = version_str.strip().split(".")
    if len(parts) < 2 or len(parts) > 3:
        raise VersionParseError(
            f"不合法的版本号: {version_str!r}，应为 'major.minor' 或 'major.minor.patch'"
        )

    numbers = [_parse_component(version_str, part) for part in parts]
    patch = numbers[2] if len(numbers) == 3 else None
    return VersionInfo(major=numbers[0], minor=numbers[1], patch=patch)


def detect_engine(cluster_info: dict[str, Any]) -> EngineInfo:
    """根据集群根端点的响应识别引擎类型和版本.

    OpenSearch 在 version 中带有 distribution 字段（值为 "opensearch"）；
    没有该字段或为其他值时视为 Elasticsearch。

    Elasticsearch 响应示例::

        {"name": "node-1", "version": {"number": "7.17.0", "build_flavor": "default"}}

    OpenSearch 响应示例::

        {"name": "node-1", "version": {"distribution": "opensearch", "number": "2.19.0"}}

    Args:
        cluster_info: 根端点响应体

    Returns:
        EngineInfo

    Raises:
        EngineDetectionError: 当 cluster_info 不是字典时抛出
        VersionParseError: 当版本号不合法时抛出
    """
    if not isinstance(cluster_info, dict):
        raise EngineDetectionError(f"无法识别的集群信息: {cluster_info!r}")

    version_block = cluster_info.get("version") or {}
    distribution = str(version_block.get("distribution") or "").lower()
    version = parse_version(version_block.get("number"))

    if distribution == EngineType.OPENSEARCH.value:
        return EngineInfo(engine=EngineType.OPENSEARCH, version=version)
    return EngineInfo(engine=EngineType.ELASTICSEARCH, version=version)


def get_cluster_info(conn: Connection) -> dict[str, Any] | None:
    """请求集群根端点获取集群信息."""
    return conn.transport("GET", conn.uri or "/", None)


def verify_connection(conn: Connection) -> EngineInfo:
    """校验连接并探测引擎类型和版本.

    只发起一次 GET 请求，不重试，传输层异常原样抛出。

    Args:
        conn: 连接记录

    Returns:
        EngineInfo

    Raises:
        TransportError: 请求失败时抛出
        EngineDetectionError: 根端点返回 404 时抛出

    Examples:
        >>> verify_connection(conn)
        EngineInfo(engine=<EngineType.OPENSEARCH: 'opensearch'>, version=VersionInfo(major=2, minor=19, patch=0))
    """
    cluster_info = get_cluster_info(conn)
    if cluster_info is None:
        raise EngineDetectionError(f"集群根端点不存在: {conn.uri or '/'}")
    info = detect_engine(cluster_info)
    logger.debug(f"集群引擎: {info.engine.value}，版本: {info.version}")
    return info


def version_compare(v1: VersionInfo, v2: VersionInfo) -> int:
    """比较两个版本号.

    依次比较 major、minor、patch（缺省按 0）。

    Returns:
        v1 < v2 时为负数，相等为 0，v1 > v2 时为正数

    Examples:
        >>> version_compare(VersionInfo(7, 10, 0), VersionInfo(7, 17, 0)) < 0
        True
    """
    for left, right in zip(v1.sort_key(), v2.sort_key()):
        if left != right:
            return -1 if left < right else 1
    return 0


def version_gte(v1: VersionInfo, v2: VersionInfo) -> bool:
    """判断 v1 >= v2."""
    return version_compare(v1, v2) >= 0


def version_lt(v1: VersionInfo, v2: VersionInfo) -> bool:
    """判断 v1 < v2."""
    return version_compare(v1, v2) < 0
